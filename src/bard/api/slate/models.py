import json
from enum import Enum
from typing import Annotated, Any, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Tag,
    TypeAdapter,
    ValidationError,
    model_validator,
)

from bard.api.slate.exceptions import ParseError


class ElementType(str, Enum):
    """Element kinds the serializer knows how to wrap."""

    PARAGRAPH = "paragraph"
    QUOTE = "quote"
    LINK = "link"
    IMAGE = "image"
    OTHER = "other"


class TextNode(BaseModel):
    """
    A leaf of the document tree holding a run of text and its marks.
    """

    model_config = ConfigDict(extra="allow")

    text: str
    bold: bool | None = None
    italic: bool | None = None
    underline: bool | None = None
    code: bool | None = None
    strikethrough: bool | None = None

    @model_validator(mode="before")
    @classmethod
    def _reject_children(cls, data: Any) -> Any:
        if isinstance(data, dict) and "children" in data:
            raise ValueError("Text nodes cannot have children")
        return data


class ElementNode(BaseModel):
    """
    An internal node of the document tree.

    Attributes:
        type: Element type as stored by the editor (paragraph, quote, link, ...)
        children: Child nodes. Absent on some legacy documents.
        url: Target of link and image elements
    """

    model_config = ConfigDict(extra="allow")

    type: str | None = None
    children: list["Node"] | None = None
    url: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _require_type_or_children(cls, data: Any) -> Any:
        if isinstance(data, dict) and "type" not in data and "children" not in data:
            raise ValueError("Element nodes need a type or children")
        return data

    @property
    def kind(self) -> ElementType:
        """Element type, with anything unrecognised folded into OTHER."""
        try:
            return ElementType(self.type)
        except ValueError:
            return ElementType.OTHER


def _node_tag(value: Any) -> str:
    if isinstance(value, dict):
        return "text" if "text" in value else "element"
    if isinstance(value, TextNode):
        return "text"
    return "element"


Node = Annotated[
    Union[
        Annotated[TextNode, Tag("text")],
        Annotated[ElementNode, Tag("element")],
    ],
    Discriminator(_node_tag),
]

Document = list[Node]

ElementNode.model_rebuild()

_document_adapter: TypeAdapter[list[TextNode | ElementNode]] = TypeAdapter(Document)


def parse_document(raw: str | bytes | list) -> list[TextNode | ElementNode]:
    """Decode stored content into a document.

    Args:
        raw: JSON text as stored in an article ``content`` or comment ``message``
            field, or the already decoded list of nodes.

    Returns:
        The top-level nodes of the document.

    Raises:
        ParseError: If the JSON is malformed or a node has the wrong shape.
    """
    if not isinstance(raw, list):
        # pydantic's own JSON parser rejects deeply nested documents
        try:
            raw = json.loads(raw)
        except (ValueError, RecursionError) as e:
            raise ParseError(f"Invalid JSON: {e}") from e
    try:
        return _document_adapter.validate_python(raw)
    except ValidationError as e:
        raise ParseError(f"Invalid document content: {e}") from e


def dump_document(document: list[TextNode | ElementNode]) -> str:
    """Encode a document back to its stored JSON form."""
    return _document_adapter.dump_json(document, exclude_unset=True).decode()


def node_string(node: TextNode | ElementNode) -> str:
    """Concatenate the text of every leaf below ``node``."""
    if isinstance(node, TextNode):
        return node.text
    return "".join(node_string(child) for child in node.children or [])
