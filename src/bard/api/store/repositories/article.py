from datetime import datetime
from uuid import uuid4

from bard.api.store.engine import ArticleRecord, Store
from bard.api.store.models.article import Article
from bard.api.store.repositories import paginate, quote
from bard.api.utils import now_iso, parse_timestamp


class ArticleRepository:
    """Repository for Article operations."""

    def __init__(self, store: Store) -> None:
        self.store = store

    def _to_article(self, record: ArticleRecord) -> Article:
        return Article(
            id=record.id,
            user_id=record.user_id,
            title=record.title,
            summary=record.summary,
            content=record.content,
            subscribers_only=record.subscribers_only,
            created_at=parse_timestamp(record.created_at) or datetime.now(),
            updated_at=parse_timestamp(record.updated_at) or datetime.now(),
            published_at=parse_timestamp(record.published_at),
            deleted_at=parse_timestamp(record.deleted_at),
        )

    async def create(self, entity: Article) -> Article:
        """Create an article in the database."""
        self.store._assert_writable()

        article_id = str(uuid4())
        now = now_iso()

        record = ArticleRecord(
            id=article_id,
            user_id=entity.user_id,
            title=entity.title,
            summary=entity.summary,
            content=entity.content,
            subscribers_only=entity.subscribers_only,
            created_at=now,
            updated_at=now,
            published_at=entity.published_at.isoformat()
            if entity.published_at
            else None,
            deleted_at=entity.deleted_at.isoformat() if entity.deleted_at else None,
        )
        self.store.articles_table.add([record])

        entity.id = article_id
        entity.created_at = datetime.fromisoformat(now)
        entity.updated_at = datetime.fromisoformat(now)
        return entity

    async def get_by_id(self, entity_id: str) -> Article | None:
        """Get an article by its ID."""
        results = list(
            self.store.articles_table.search()
            .where(f"id = {quote(entity_id)}")
            .limit(1)
            .to_pydantic(ArticleRecord)
        )

        if not results:
            return None

        return self._to_article(results[0])

    async def update(self, entity: Article) -> Article:
        """Write every field of an existing article back to the database."""
        assert entity.id, "Article ID is required for update"
        self.store._assert_writable()

        now = now_iso()
        entity.updated_at = datetime.fromisoformat(now)

        values: dict = {
            "title": entity.title,
            "summary": entity.summary,
            "content": entity.content,
            "subscribers_only": entity.subscribers_only,
            "updated_at": now,
        }
        if entity.published_at is not None:
            values["published_at"] = entity.published_at.isoformat()
        if entity.deleted_at is not None:
            values["deleted_at"] = entity.deleted_at.isoformat()

        self.store.articles_table.update(
            where=f"id = {quote(entity.id)}", values=values
        )
        return entity

    async def delete(self, entity_id: str) -> bool:
        """Remove an article from the database."""
        self.store._assert_writable()

        article = await self.get_by_id(entity_id)
        if article is None:
            return False

        self.store.articles_table.delete(f"id = {quote(entity_id)}")
        return True

    async def list_all(
        self,
        limit: int | None = None,
        offset: int | None = None,
        include_deleted: bool = False,
    ) -> list[Article]:
        """List articles, oldest first."""
        total = self.store.articles_table.count_rows()
        if total == 0:
            return []

        query = self.store.articles_table.search()
        if not include_deleted:
            query = query.where("deleted_at IS NULL")

        articles = [
            self._to_article(record)
            for record in query.limit(total).to_pydantic(ArticleRecord)
        ]
        articles.sort(key=lambda article: article.created_at)
        return paginate(articles, limit, offset)

    async def list_by_user(self, user_id: str) -> list[Article]:
        """List the non-deleted articles written by a user."""
        total = self.store.articles_table.count_rows()
        if total == 0:
            return []

        results = (
            self.store.articles_table.search()
            .where(f"user_id = {quote(user_id)} AND deleted_at IS NULL")
            .limit(total)
            .to_pydantic(ArticleRecord)
        )
        articles = [self._to_article(record) for record in results]
        articles.sort(key=lambda article: article.created_at)
        return articles
