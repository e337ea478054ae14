"""Dispatch marker matching for interface methods."""

import re

from tree_sitter import Node

from refitgen.config import ConventionConfig
from refitgen.parser import SyntaxTree
from refitgen.syntax import find_child_by_type, find_children_by_type

# C# AST node types
_ATTRIBUTE_LIST_TYPE = "attribute_list"
_ATTRIBUTE_TYPE = "attribute"
_ARGUMENT_LIST_TYPE = "attribute_argument_list"
_ARGUMENT_TYPE = "attribute_argument"
_COMMENT_TYPE = "comment"

# Literal kinds Roslyn classifies as StringLiteralExpression
_STRING_LITERAL_TYPES = frozenset(
    {"string_literal", "verbatim_string_literal", "raw_string_literal"}
)

_QUALIFIER_SEPARATOR = re.compile(r"\.|::")


def unqualified_name(name: str) -> str:
    """Strip namespace and alias qualifiers: ``global::Refit.Get`` -> ``Get``."""
    return _QUALIFIER_SEPARATOR.split(name)[-1].strip()


def iter_attributes(node: Node) -> list[Node]:
    """Return every attribute attached to a declaration, in source order."""
    return [
        attribute
        for attribute_list in find_children_by_type(node, _ATTRIBUTE_LIST_TYPE)
        for attribute in find_children_by_type(attribute_list, _ATTRIBUTE_TYPE)
    ]


def is_dispatch_marker(attribute: Node, tree: SyntaxTree, config: ConventionConfig) -> bool:
    """Check whether a single attribute is a dispatch marker.

    The unqualified name must be a configured verb (optionally suffixed) and
    the attribute must take exactly one argument, a string literal.
    """
    name_node = attribute.child_by_field_name("name")
    if name_node is None:
        name_node = _first_named_child(attribute)
    if name_node is None:
        return False
    if unqualified_name(tree.text(name_node)) not in config.marker_names:
        return False

    argument_list = find_child_by_type(attribute, _ARGUMENT_LIST_TYPE)
    if argument_list is None:
        return False
    arguments = find_children_by_type(argument_list, _ARGUMENT_TYPE)
    if len(arguments) != 1:
        return False

    # Named (path: "...") and assigned (Path = "...") forms keep the
    # expression as the last named child.
    expression = _last_named_child(arguments[0])
    return expression is not None and expression.type in _STRING_LITERAL_TYPES


def _first_named_child(node: Node) -> Node | None:
    for child in node.named_children:
        if child.type != _COMMENT_TYPE:
            return child
    return None


def _last_named_child(node: Node) -> Node | None:
    for child in reversed(node.named_children):
        if child.type != _COMMENT_TYPE:
            return child
    return None


def has_http_method_attribute(
    method: Node, tree: SyntaxTree, config: ConventionConfig
) -> bool:
    """Check whether a method declaration carries a dispatch marker.

    Args:
        method: A ``method_declaration`` node
        tree: Syntax tree the method belongs to
        config: Convention vocabulary

    Returns:
        True if at least one attribute is a dispatch marker

    """
    return any(
        is_dispatch_marker(attribute, tree, config)
        for attribute in iter_attributes(method)
    )
