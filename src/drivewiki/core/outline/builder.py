"""Build a nested outline from a flat list of document headings."""

from collections.abc import Iterable

from drivewiki.models.node import Heading, OutlineNode


def build_outline(headings: Iterable[Heading]) -> list[OutlineNode]:
    """Nest headings by level, in document order.

    A heading becomes a child of the nearest preceding heading with a strictly
    smaller level, so an H3 directly after an H1 nests under the H1. Headings
    with no such predecessor start a new root.

    Args:
        headings: Headings in document order. Any level sequence is accepted.

    Returns:
        The outline forest; empty for empty input.
    """
    roots: list[OutlineNode] = []
    stack: list[OutlineNode] = []

    for heading in headings:
        node = OutlineNode(heading=heading)

        # Pop the stack until we find the parent level
        while stack and stack[-1].level >= heading.level:
            stack.pop()

        if stack:
            stack[-1].children.append(node)
        else:
            roots.append(node)

        stack.append(node)

    return roots


def count_outline_nodes(outline: Iterable[OutlineNode]) -> int:
    """Total number of headings in an outline forest."""
    return sum(1 + count_outline_nodes(node.children) for node in outline)
