from datetime import datetime

from pydantic import BaseModel, Field

from bard.api.slate import ElementNode, TextNode, parse_document


class Article(BaseModel):
    """
    Represents an article with its rich-text content stored as JSON.
    """

    id: str | None = None
    user_id: str
    title: str = ""
    summary: str = ""
    content: str = "[]"
    subscribers_only: bool = False
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
    published_at: datetime | None = None
    deleted_at: datetime | None = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def get_document(self) -> list[TextNode | ElementNode]:
        """Parse the stored content.

        Raises:
            ParseError: If the stored JSON is not a valid document.
        """
        return parse_document(self.content)
