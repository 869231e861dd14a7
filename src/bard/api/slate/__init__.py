from bard.api.slate.exceptions import ParseError
from bard.api.slate.models import (
    Document,
    ElementNode,
    ElementType,
    Node,
    TextNode,
    dump_document,
    node_string,
    parse_document,
)
from bard.api.slate.normalizer import is_empty_paragraph, normalize
from bard.api.slate.redaction import get_visible_content, placeholder_document
from bard.api.slate.serializer import (
    document_to_html,
    escape_html,
    serialize_html,
    serialize_text,
)

__all__ = [
    "Document",
    "ElementNode",
    "ElementType",
    "Node",
    "ParseError",
    "TextNode",
    "document_to_html",
    "dump_document",
    "escape_html",
    "get_visible_content",
    "is_empty_paragraph",
    "node_string",
    "normalize",
    "parse_document",
    "placeholder_document",
    "serialize_html",
    "serialize_text",
]
