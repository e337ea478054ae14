"""Discovery of interfaces that follow the dispatch convention."""

import logging
from dataclasses import dataclass, field

from tree_sitter import Node

from refitgen.attributes import has_http_method_attribute
from refitgen.config import ConventionConfig
from refitgen.models import SourceLocation
from refitgen.parser import SyntaxTree
from refitgen.syntax import field_or_child, find_children_by_type
from refitgen.usings import USING_DIRECTIVE_TYPE, parse_using_directive

logger = logging.getLogger(__name__)

# C# AST node types
INTERFACE_TYPE = "interface_declaration"
METHOD_TYPE = "method_declaration"
_DECLARATION_LIST_TYPE = "declaration_list"
_IDENTIFIER_TYPE = "identifier"
_METHOD_NAME_TERMINATORS = frozenset({"parameter_list", "type_parameter_list"})


@dataclass(frozen=True, eq=False)
class InterfaceCandidate:
    """An interface declaration selected for generation.

    Candidates compare by identity: each wraps exactly one declaration node.
    """

    tree: SyntaxTree
    node: Node = field(repr=False)

    @property
    def name(self) -> str:
        """Interface identifier text."""
        name_node = field_or_child(self.node, "name", _IDENTIFIER_TYPE)
        return self.tree.text(name_node) if name_node else ""

    @property
    def methods(self) -> list[Node]:
        """Direct method members, in declaration order."""
        return interface_methods(self.node)

    @property
    def location(self) -> SourceLocation:
        """Span of the interface declaration."""
        return self.tree.location(self.node)


def get_method_name(method: Node, tree: SyntaxTree) -> str:
    """Return a method's identifier text, or an empty string if it has none."""
    name_node = method.child_by_field_name("name")
    if name_node is None:
        # The name is the last identifier before the parameter list
        for child in method.children:
            if child.type in _METHOD_NAME_TERMINATORS:
                break
            if child.type == _IDENTIFIER_TYPE:
                name_node = child
    return tree.text(name_node) if name_node else ""


def interface_methods(interface: Node) -> list[Node]:
    """Return the method declarations directly inside an interface body."""
    body = field_or_child(interface, "body", _DECLARATION_LIST_TYPE)
    if body is None:
        return []
    return find_children_by_type(body, METHOD_TYPE)


def imports_guard_namespace(
    nodes: list[Node], tree: SyntaxTree, config: ConventionConfig
) -> bool:
    """Check the convention guard.

    Only a plain ``using <guard_namespace>;`` satisfies it: aliased or static
    imports and partial paths do not.
    """
    for node in nodes:
        if node.type != USING_DIRECTIVE_TYPE:
            continue
        declaration = parse_using_directive(node, tree)
        if (
            declaration is not None
            and declaration.alias is None
            and not declaration.is_static
            and not declaration.is_unsafe
            and declaration.name == config.guard_namespace
        ):
            return True
    return False


def find_interfaces_to_generate(
    tree: SyntaxTree, config: ConventionConfig
) -> list[InterfaceCandidate]:
    """Find candidate interfaces in one syntax tree.

    Args:
        tree: Parsed source file
        config: Convention vocabulary

    Returns:
        Interfaces with at least one dispatch-marked method, in document
        order; empty when the file does not import the guard namespace

    """
    nodes = list(tree.descendants())

    if not imports_guard_namespace(nodes, tree, config):
        logger.debug(
            "Skipping %s: no 'using %s;' directive", tree.path, config.guard_namespace
        )
        return []

    candidates = [
        InterfaceCandidate(tree=tree, node=node)
        for node in nodes
        if node.type == INTERFACE_TYPE
        and any(
            has_http_method_attribute(method, tree, config)
            for method in interface_methods(node)
        )
    ]
    logger.debug("Found %d candidate interfaces in %s", len(candidates), tree.path)
    return candidates
