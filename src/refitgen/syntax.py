"""Utility functions for tree-sitter AST traversal.

These helpers are grammar-agnostic; the C#-specific node kinds live with the
components that use them.
"""

from collections.abc import Iterator

from tree_sitter import Node

_DEFAULT_ENCODING = "utf-8"


def get_node_text(node: Node, source_bytes: bytes) -> str:
    """Get the text content of an AST node.

    Args:
        node: Tree-sitter node with start_byte and end_byte attributes
        source_bytes: Encoded source the node was parsed from

    Returns:
        Text content of the node

    """
    return source_bytes[node.start_byte : node.end_byte].decode(_DEFAULT_ENCODING)


def iter_descendants(node: Node) -> Iterator[Node]:
    """Yield every descendant of a node once, in pre-order (document order).

    The starting node itself is not yielded.
    """
    stack = list(reversed(node.children))
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def find_nodes_by_type(node: Node, node_type: str) -> list[Node]:
    """Find all descendant nodes of a specific type (recursive).

    Args:
        node: Root node to search from
        node_type: Type of nodes to find

    Returns:
        List of matching nodes (depth-first order)

    """
    return [child for child in iter_descendants(node) if child.type == node_type]


def find_child_by_type(node: Node, child_type: str) -> Node | None:
    """Find the first direct child of a specific type.

    Args:
        node: Parent node to search in
        child_type: Type of child node to find

    Returns:
        First matching child node or None

    """
    for child in node.children:
        if child.type == child_type:
            return child
    return None


def find_children_by_type(node: Node, child_type: str) -> list[Node]:
    """Find all direct children of a specific type.

    Args:
        node: Parent node to search in
        child_type: Type of children to find

    Returns:
        List of matching child nodes

    """
    return [child for child in node.children if child.type == child_type]


def find_ancestor_by_type(node: Node, ancestor_types: frozenset[str]) -> Node | None:
    """Walk parent links upwards and return the nearest ancestor of a given type.

    Args:
        node: Node to start from (not itself considered)
        ancestor_types: Accepted ancestor node types

    Returns:
        The nearest matching ancestor or None when the root is reached

    """
    parent = node.parent
    while parent is not None and parent.type not in ancestor_types:
        parent = parent.parent
    return parent


def field_or_child(node: Node, field_name: str, child_type: str) -> Node | None:
    """Return a child by grammar field name, falling back to the first child of a type.

    Field names differ between tree-sitter-c-sharp releases, so lookups try
    the field first and then the node type.
    """
    child = node.child_by_field_name(field_name)
    if child is not None:
        return child
    return find_child_by_type(node, child_type)
