from datetime import datetime

from pydantic import BaseModel, Field

from bard.api.slate import ElementNode, TextNode, parse_document


class Comment(BaseModel):
    """
    Represents a comment on an article. Replies point at their parent comment.
    """

    id: str | None = None
    user_id: str
    article_id: str
    parent_id: str | None = None
    message: str = "[]"
    likes: int = 0
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
    deleted_at: datetime | None = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def get_document(self) -> list[TextNode | ElementNode]:
        """Parse the stored message.

        Raises:
            ParseError: If the stored JSON is not a valid document.
        """
        return parse_document(self.message)
