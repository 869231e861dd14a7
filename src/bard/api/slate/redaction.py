import logging

from bard.api.slate.exceptions import ParseError
from bard.api.slate.models import ElementNode, TextNode, parse_document

logger = logging.getLogger(__name__)


def placeholder_document() -> list[TextNode | ElementNode]:
    """A document holding a single empty paragraph."""
    return [ElementNode(type="paragraph", children=[TextNode(text="")])]


def get_visible_content(
    content: list[TextNode | ElementNode] | str | bytes | None,
    blocked: bool,
) -> list[TextNode | ElementNode]:
    """Return the part of a document the current viewer may see.

    Whether the viewer is blocked is decided by the caller. A blocked viewer
    gets a preview made of the first top-level node only.

    Args:
        content: A parsed document or its stored JSON.
        blocked: Whether the content is gated for this viewer.

    Returns:
        The full document when not blocked, otherwise a new single-node
        document. Blocked content that is missing, empty or unparsable is
        replaced by an empty paragraph.

    Raises:
        ParseError: Only when not blocked and the stored JSON is invalid.
    """
    if not blocked:
        if content is None:
            return []
        if isinstance(content, (str, bytes)):
            return parse_document(content)
        return content

    if isinstance(content, (str, bytes)):
        try:
            content = parse_document(content)
        except ParseError as e:
            logger.warning(f"Serving placeholder preview for unparsable content: {e}")
            return placeholder_document()

    if not content:
        return placeholder_document()

    return [content[0]]
