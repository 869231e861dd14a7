import logging
from pathlib import Path
from uuid import uuid4

import lancedb
from lancedb.pydantic import LanceModel
from pydantic import Field

from bard.api.store.exceptions import ReadOnlyError

logger = logging.getLogger(__name__)


class ArticleRecord(LanceModel):
    id: str = Field(default_factory=lambda: str(uuid4()))
    user_id: str
    title: str = ""
    summary: str = ""
    content: str = "[]"
    subscribers_only: bool = False
    created_at: str = Field(default_factory=lambda: "")
    updated_at: str = Field(default_factory=lambda: "")
    published_at: str | None = None
    deleted_at: str | None = None


class CommentRecord(LanceModel):
    id: str = Field(default_factory=lambda: str(uuid4()))
    user_id: str
    article_id: str
    parent_id: str | None = None
    message: str = "[]"
    likes: int = 0
    created_at: str = Field(default_factory=lambda: "")
    updated_at: str = Field(default_factory=lambda: "")
    deleted_at: str | None = None


class Store:
    """LanceDB backed storage for articles and comments."""

    def __init__(self, db_path: Path, create: bool = False, read_only: bool = False):
        self.db_path: Path = db_path
        self._read_only = read_only

        if not db_path.exists() and not create:
            raise FileNotFoundError(f"Database does not exist: {db_path}")

        self.db = lancedb.connect(db_path)
        self.create_or_update_db()

    @property
    def is_read_only(self) -> bool:
        return self._read_only

    def _assert_writable(self) -> None:
        if self._read_only:
            raise ReadOnlyError("Cannot modify database in read-only mode")

    def create_or_update_db(self):
        """Create the database tables."""
        existing_tables = self.db.table_names()

        if "articles" in existing_tables:
            self.articles_table = self.db.open_table("articles")
        else:
            self._assert_writable()
            logger.info(f"Creating articles table in {self.db_path}")
            self.articles_table = self.db.create_table(
                "articles", schema=ArticleRecord
            )

        if "comments" in existing_tables:
            self.comments_table = self.db.open_table("comments")
        else:
            self._assert_writable()
            logger.info(f"Creating comments table in {self.db_path}")
            self.comments_table = self.db.create_table(
                "comments", schema=CommentRecord
            )

    def close(self):
        """Release table handles."""
        for name in ("articles_table", "comments_table"):
            if hasattr(self, name):
                delattr(self, name)
