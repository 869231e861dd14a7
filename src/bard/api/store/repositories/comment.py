from datetime import datetime
from uuid import uuid4

from bard.api.store.engine import CommentRecord, Store
from bard.api.store.models.comment import Comment
from bard.api.store.repositories import paginate, quote
from bard.api.utils import now_iso, parse_timestamp


class CommentRepository:
    """Repository for Comment operations."""

    def __init__(self, store: Store) -> None:
        self.store = store

    def _to_comment(self, record: CommentRecord) -> Comment:
        return Comment(
            id=record.id,
            user_id=record.user_id,
            article_id=record.article_id,
            parent_id=record.parent_id,
            message=record.message,
            likes=record.likes,
            created_at=parse_timestamp(record.created_at) or datetime.now(),
            updated_at=parse_timestamp(record.updated_at) or datetime.now(),
            deleted_at=parse_timestamp(record.deleted_at),
        )

    def _query(self, where: str | None) -> list[Comment]:
        total = self.store.comments_table.count_rows()
        if total == 0:
            return []

        query = self.store.comments_table.search()
        if where:
            query = query.where(where)

        comments = [
            self._to_comment(record)
            for record in query.limit(total).to_pydantic(CommentRecord)
        ]
        comments.sort(key=lambda comment: comment.created_at)
        return comments

    async def create(self, entity: Comment) -> Comment:
        """Create a comment in the database."""
        self.store._assert_writable()

        comment_id = str(uuid4())
        now = now_iso()

        record = CommentRecord(
            id=comment_id,
            user_id=entity.user_id,
            article_id=entity.article_id,
            parent_id=entity.parent_id,
            message=entity.message,
            likes=entity.likes,
            created_at=now,
            updated_at=now,
            deleted_at=entity.deleted_at.isoformat() if entity.deleted_at else None,
        )
        self.store.comments_table.add([record])

        entity.id = comment_id
        entity.created_at = datetime.fromisoformat(now)
        entity.updated_at = datetime.fromisoformat(now)
        return entity

    async def get_by_id(self, entity_id: str) -> Comment | None:
        """Get a comment by its ID."""
        results = list(
            self.store.comments_table.search()
            .where(f"id = {quote(entity_id)}")
            .limit(1)
            .to_pydantic(CommentRecord)
        )

        if not results:
            return None

        return self._to_comment(results[0])

    async def update(self, entity: Comment) -> Comment:
        """Write every field of an existing comment back to the database."""
        assert entity.id, "Comment ID is required for update"
        self.store._assert_writable()

        now = now_iso()
        entity.updated_at = datetime.fromisoformat(now)

        values: dict = {
            "message": entity.message,
            "likes": entity.likes,
            "updated_at": now,
        }
        if entity.deleted_at is not None:
            values["deleted_at"] = entity.deleted_at.isoformat()

        self.store.comments_table.update(
            where=f"id = {quote(entity.id)}", values=values
        )
        return entity

    async def delete(self, entity_id: str) -> bool:
        """Remove a comment from the database."""
        self.store._assert_writable()

        comment = await self.get_by_id(entity_id)
        if comment is None:
            return False

        self.store.comments_table.delete(f"id = {quote(entity_id)}")
        return True

    async def list_all(
        self,
        limit: int | None = None,
        offset: int | None = None,
        include_deleted: bool = False,
    ) -> list[Comment]:
        """List comments, oldest first."""
        where = None if include_deleted else "deleted_at IS NULL"
        return paginate(self._query(where), limit, offset)

    async def list_by_article(
        self, article_id: str, include_deleted: bool = False
    ) -> list[Comment]:
        """List the comments on an article, oldest first."""
        where = f"article_id = {quote(article_id)}"
        if not include_deleted:
            where += " AND deleted_at IS NULL"
        return self._query(where)
