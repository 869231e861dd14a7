from collections.abc import Sequence

from bard.api.slate.models import ElementNode, TextNode


def is_empty_paragraph(node: TextNode | ElementNode) -> bool:
    """Check whether a node renders as a blank line.

    An element is empty when it has no children, or a single text child whose
    text is blank. Text nodes and elements with several children never are.
    """
    if not isinstance(node, ElementNode):
        return False
    if not node.children:
        return True
    if len(node.children) != 1:
        return False
    child = node.children[0]
    return isinstance(child, TextNode) and child.text.strip() == ""


def normalize(
    nodes: Sequence[TextNode | ElementNode] | TextNode | None,
) -> list[TextNode | ElementNode] | TextNode:
    """Collapse runs of consecutive empty nodes, recursively.

    Children are normalized before their siblings are filtered. Within each
    sequence only the first node of a run of empty nodes survives, so a single
    blank paragraph between two paragraphs of text is kept.

    Args:
        nodes: Sibling nodes, typically the top level of a document.

    Returns:
        A new list of nodes. The input is left untouched. ``None`` gives an
        empty list and a bare text node is returned as is.
    """
    if nodes is None:
        return []
    if isinstance(nodes, TextNode):
        return nodes

    result: list[TextNode | ElementNode] = []
    for node in nodes:
        if isinstance(node, ElementNode) and node.children:
            node = node.model_copy(update={"children": normalize(node.children)})

        if result and is_empty_paragraph(result[-1]) and is_empty_paragraph(node):
            continue

        result.append(node)

    return result
