"""Generic walks over tree-sitter syntax trees."""

from collections.abc import Iterator

from tree_sitter import Node


def iter_preorder(root: Node) -> Iterator[Node]:
    """Yield every node under root (inclusive) in document order.

    Uses an explicit stack instead of recursion so deeply nested sources
    (long callback chains, generated bundles) cannot hit the recursion limit.
    Children are pushed in reverse so the leftmost child is visited first,
    which gives the same order as a recursive pre-order walk.
    """
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))
