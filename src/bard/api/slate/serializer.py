"""Rendering of rich-text documents for email bodies and previews."""

from html import escape

from bard.api.slate.models import ElementNode, ElementType, TextNode, node_string

# Only the first mark set on a text node is rendered.
MARK_TAGS: list[tuple[str, str]] = [
    ("bold", "strong"),
    ("italic", "em"),
    ("underline", "u"),
    ("code", "code"),
    ("strikethrough", "del"),
]


def escape_html(value: str) -> str:
    """Escape text for HTML content and double-quoted attributes.

    Apostrophes are written as `&#39;`.
    """
    return escape(value, quote=True).replace("&#x27;", "&#39;")


def _serialize_text_node(node: TextNode) -> str:
    text = escape_html(node.text)
    for mark, tag in MARK_TAGS:
        if getattr(node, mark):
            return f"<{tag}>{text}</{tag}>"
    return text


def serialize_html(node: TextNode | ElementNode) -> str:
    """Render a node and its descendants to HTML.

    Text and urls are escaped. Elements of an unknown type render their
    children without a wrapping tag, and image elements never render their
    children.
    """
    if isinstance(node, TextNode):
        return _serialize_text_node(node)

    children = "".join(serialize_html(child) for child in node.children or [])
    url = escape_html(node.url or "")

    kind = node.kind
    if kind is ElementType.QUOTE:
        return f"<blockquote><p>{children}</p></blockquote>"
    elif kind is ElementType.PARAGRAPH:
        return f"<p>{children}</p>"
    elif kind is ElementType.LINK:
        return f'<a href="{url}">{children}</a>'
    elif kind is ElementType.IMAGE:
        return f'<img style="width:100%;" src="{url}" />'
    else:
        return children


def document_to_html(document: list[TextNode | ElementNode]) -> str:
    """Render a whole document by wrapping it in an untyped root element."""
    return serialize_html(ElementNode(children=document))


def serialize_text(document: list[TextNode | ElementNode]) -> str:
    """Render a document as plain text, one line per top-level node."""
    return "\n".join(node_string(node) for node in document)
