import logging
from datetime import datetime
from pathlib import Path

from bard.api.config import AppConfig, Config
from bard.api.slate import (
    ElementNode,
    ParseError,
    TextNode,
    document_to_html,
    dump_document,
    get_visible_content,
    normalize,
    parse_document,
)
from bard.api.store.engine import Store
from bard.api.store.exceptions import ContentIntegrityError, NotFoundError
from bard.api.store.models.article import Article
from bard.api.store.models.comment import Comment
from bard.api.store.repositories.article import ArticleRepository
from bard.api.store.repositories.comment import CommentRepository

logger = logging.getLogger(__name__)


class BardAPI:
    """High-level client for articles and comments."""

    def __init__(
        self,
        db_path: Path | None = None,
        config: AppConfig = Config,
        create: bool = False,
        read_only: bool = False,
    ):
        """Initialize the client with a database path.

        Args:
            db_path: Path to the database. If None, uses config.storage.data_dir.
            config: Configuration to use. Defaults to global Config.
            create: Whether to create the database if it doesn't exist.
            read_only: Whether to reject all writes.
        """
        self._config = config
        if db_path is None:
            db_path = self._config.storage.data_dir / "bard.lancedb"
        self.store = Store(db_path, create=create, read_only=read_only)
        self.article_repository = ArticleRepository(self.store)
        self.comment_repository = CommentRepository(self.store)

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):  # noqa: ARG002
        """Async context manager exit."""
        self.close()
        return False

    def close(self):
        """Close the underlying store."""
        self.store.close()

    def _prepare_content(self, content: str | list) -> str:
        """Validate rich-text content and bring it to its stored form.

        Raises:
            ParseError: If the content is not a valid document.
        """
        document = parse_document(content)
        if self._config.content.normalize_on_save:
            document = normalize(document)
        return dump_document(document)

    # Articles

    async def create_article(
        self,
        user_id: str,
        title: str,
        content: str | list,
        summary: str = "",
        subscribers_only: bool = False,
    ) -> Article:
        """Create a new article.

        Args:
            user_id: Author of the article.
            title: Article title.
            content: Rich-text body as JSON or as a list of node mappings.
            summary: Short description shown in listings.
            subscribers_only: Whether only subscribers may read past the preview.

        Returns:
            The created Article.

        Raises:
            ParseError: If the content is not a valid document.
        """
        article = Article(
            user_id=user_id,
            title=title,
            summary=summary,
            content=self._prepare_content(content),
            subscribers_only=subscribers_only,
        )
        article = await self.article_repository.create(article)
        logger.info(f"Created article {article.id} for user {user_id}")
        return article

    async def get_article(self, article_id: str) -> Article | None:
        """Get a non-deleted article by its ID."""
        article = await self.article_repository.get_by_id(article_id)
        if article is None or article.is_deleted:
            return None
        return article

    async def _require_article(self, article_id: str) -> Article:
        article = await self.get_article(article_id)
        if article is None:
            raise NotFoundError(f"Article not found: {article_id}")
        return article

    async def update_article(
        self,
        article_id: str,
        title: str | None = None,
        content: str | list | None = None,
        summary: str | None = None,
        subscribers_only: bool | None = None,
    ) -> Article:
        """Merge the given fields into an existing article.

        Raises:
            NotFoundError: If the article does not exist or was deleted.
            ParseError: If the new content is not a valid document.
        """
        article = await self._require_article(article_id)

        if title is not None:
            article.title = title
        if content is not None:
            article.content = self._prepare_content(content)
        if summary is not None:
            article.summary = summary
        if subscribers_only is not None:
            article.subscribers_only = subscribers_only

        return await self.article_repository.update(article)

    async def publish_article(self, article_id: str) -> Article:
        """Mark an article as published."""
        article = await self._require_article(article_id)
        article.published_at = datetime.now()
        return await self.article_repository.update(article)

    async def delete_article(self, article_id: str) -> Article:
        """Soft delete an article."""
        article = await self._require_article(article_id)
        article.deleted_at = datetime.now()
        article = await self.article_repository.update(article)
        logger.info(f"Deleted article {article_id}")
        return article

    async def list_articles(
        self, limit: int | None = None, offset: int | None = None
    ) -> list[Article]:
        """List non-deleted articles, oldest first."""
        return await self.article_repository.list_all(limit=limit, offset=offset)

    async def list_user_articles(self, user_id: str) -> list[Article]:
        """List the non-deleted articles written by a user."""
        return await self.article_repository.list_by_user(user_id)

    def get_article_content(
        self, article: Article, blocked: bool = False
    ) -> list[TextNode | ElementNode]:
        """Return the part of an article's content a viewer may see.

        Args:
            article: The article to read.
            blocked: Whether the viewer is gated from subscriber-only content.
                Deciding this is up to the caller.

        Raises:
            ContentIntegrityError: If the stored content cannot be parsed and
                the full content was requested.
        """
        try:
            return get_visible_content(article.content, blocked)
        except ParseError as e:
            logger.error(f"Article {article.id} has invalid content: {e}")
            raise ContentIntegrityError("articles", article.id, str(e)) from e

    def render_article_html(self, article: Article, blocked: bool = False) -> str:
        """Render the visible part of an article to HTML."""
        return document_to_html(self.get_article_content(article, blocked))

    # Comments

    async def create_comment(
        self,
        user_id: str,
        article_id: str,
        message: str | list,
        parent_id: str | None = None,
    ) -> Comment:
        """Create a comment on an article, or a reply when parent_id is set.

        Raises:
            NotFoundError: If the article or parent comment does not exist.
            ParseError: If the message is not a valid document.
        """
        await self._require_article(article_id)
        if parent_id is not None:
            parent = await self.get_comment(parent_id)
            if parent is None or parent.article_id != article_id:
                raise NotFoundError(f"Comment not found: {parent_id}")

        comment = Comment(
            user_id=user_id,
            article_id=article_id,
            parent_id=parent_id,
            message=self._prepare_content(message),
        )
        comment = await self.comment_repository.create(comment)
        logger.info(f"Created comment {comment.id} on article {article_id}")
        return comment

    async def get_comment(self, comment_id: str) -> Comment | None:
        """Get a non-deleted comment by its ID."""
        comment = await self.comment_repository.get_by_id(comment_id)
        if comment is None or comment.is_deleted:
            return None
        return comment

    async def _require_comment(self, comment_id: str) -> Comment:
        comment = await self.get_comment(comment_id)
        if comment is None:
            raise NotFoundError(f"Comment not found: {comment_id}")
        return comment

    async def update_comment(self, comment_id: str, message: str | list) -> Comment:
        """Replace the message of a comment."""
        comment = await self._require_comment(comment_id)
        comment.message = self._prepare_content(message)
        return await self.comment_repository.update(comment)

    async def like_comment(self, comment_id: str) -> Comment:
        comment = await self._require_comment(comment_id)
        comment.likes += 1
        return await self.comment_repository.update(comment)

    async def delete_comment(self, comment_id: str) -> Comment:
        """Soft delete a comment."""
        comment = await self._require_comment(comment_id)
        comment.deleted_at = datetime.now()
        return await self.comment_repository.update(comment)

    async def list_comments(self, article_id: str) -> list[Comment]:
        """List the non-deleted comments on an article, oldest first."""
        return await self.comment_repository.list_by_article(article_id)

    def get_comment_content(self, comment: Comment) -> list[TextNode | ElementNode]:
        """Parse a comment's message.

        Raises:
            ContentIntegrityError: If the stored message cannot be parsed.
        """
        try:
            return comment.get_document()
        except ParseError as e:
            logger.error(f"Comment {comment.id} has invalid content: {e}")
            raise ContentIntegrityError("comments", comment.id, str(e)) from e
