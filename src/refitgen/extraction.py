"""Extraction of the template model from candidate interfaces.

Any shape the extractor cannot account for raises StructuralMismatchError:
a partially populated model would silently corrupt the generated source.
"""

import logging

from tree_sitter import Node

from refitgen.attributes import has_http_method_attribute
from refitgen.config import ConventionConfig
from refitgen.discovery import InterfaceCandidate, get_method_name
from refitgen.errors import StructuralMismatchError
from refitgen.models import ClassTemplateInfo, MethodTemplateInfo, ParameterInfo
from refitgen.parser import SyntaxTree
from refitgen.syntax import field_or_child, find_ancestor_by_type, find_children_by_type

logger = logging.getLogger(__name__)

# C# AST node types
_NAMESPACE_TYPE = "namespace_declaration"
_FILE_SCOPED_NAMESPACE_TYPE = "file_scoped_namespace_declaration"
_NAMESPACE_TYPES = frozenset({_NAMESPACE_TYPE, _FILE_SCOPED_NAMESPACE_TYPE})
_NAME_TYPES = frozenset({"identifier", "qualified_name"})
_IDENTIFIER_TYPE = "identifier"
_TYPE_PARAMETER_LIST_TYPE = "type_parameter_list"
_TYPE_PARAMETER_TYPE = "type_parameter"
_CONSTRAINT_CLAUSE_TYPE = "type_parameter_constraints_clause"
_PARAMETER_LIST_TYPE = "parameter_list"
_PARAMETER_TYPES = frozenset({"parameter", "parameter_array"})
_PARAMS_TOKEN = "params"
_COMMA_TOKEN = ","
_PARAMETER_LIST_DELIMITERS = frozenset({"(", ")"})
_COMMENT_TYPE = "comment"

# Named parameter children that are neither the type nor the name
_PARAMETER_DECORATION_TYPES = frozenset(
    {"attribute_list", "modifier", "parameter_modifier", "equals_value_clause", "comment"}
)


def extract_class_info(
    candidate: InterfaceCandidate, config: ConventionConfig
) -> ClassTemplateInfo:
    """Build the template model of one candidate interface.

    Args:
        candidate: Interface selected by discovery
        config: Convention vocabulary (for dispatch marker detection)

    Returns:
        ClassTemplateInfo with methods in declaration order

    Raises:
        StructuralMismatchError: If the interface is not namespace-scoped or a
            method signature cannot be extracted

    """
    tree = candidate.tree
    interface_name = candidate.name
    if not interface_name:
        raise StructuralMismatchError(
            f"Cannot determine interface name at {candidate.location}"
        )

    type_parameters, constraint_clauses = _get_generics(candidate.node, tree)

    return ClassTemplateInfo(
        namespace=_get_namespace(candidate),
        interface_name=interface_name,
        type_parameters=type_parameters,
        constraint_clauses=constraint_clauses,
        methods=[
            extract_method_info(method, tree, config) for method in candidate.methods
        ],
    )


def extract_method_info(
    method: Node, tree: SyntaxTree, config: ConventionConfig
) -> MethodTemplateInfo:
    """Build the signature model of one interface method.

    Args:
        method: A ``method_declaration`` node
        tree: Syntax tree the method belongs to
        config: Convention vocabulary

    Returns:
        MethodTemplateInfo with parameters in declared order

    Raises:
        StructuralMismatchError: If name, return type or a parameter is missing

    """
    name = get_method_name(method, tree)
    location = tree.location(method)
    if not name:
        raise StructuralMismatchError(f"Cannot determine method name at {location}")

    return_node = method.child_by_field_name("returns") or method.child_by_field_name(
        "type"
    )
    if return_node is None:
        raise StructuralMismatchError(
            f"Cannot determine return type of method '{name}' at {location}"
        )

    type_parameters, constraint_clauses = _get_generics(method, tree)

    return MethodTemplateInfo(
        name=name,
        return_type=tree.text(return_node),
        parameters=_get_parameters(method, name, tree),
        is_refit_method=has_http_method_attribute(method, tree, config),
        type_parameters=type_parameters,
        constraint_clauses=constraint_clauses,
    )


def _get_namespace(candidate: InterfaceCandidate) -> str:
    """Return the name of the nearest enclosing namespace."""
    namespace = find_ancestor_by_type(candidate.node, _NAMESPACE_TYPES)
    if namespace is None:
        namespace = _find_file_scoped_namespace(candidate.tree.root, candidate.node)
    if namespace is None:
        raise StructuralMismatchError(
            f"Interface '{candidate.name}' at {candidate.location} "
            "is not declared inside a namespace"
        )

    name_node = namespace.child_by_field_name("name")
    if name_node is None:
        name_node = next(
            (child for child in namespace.named_children if child.type in _NAME_TYPES),
            None,
        )
    if name_node is None:
        raise StructuralMismatchError(
            f"Cannot determine namespace name for interface '{candidate.name}'"
        )
    return candidate.tree.text(name_node)


def _find_file_scoped_namespace(root: Node, node: Node) -> Node | None:
    """Find a ``namespace X;`` declaration that precedes the node.

    Some grammar releases keep the following declarations as siblings of
    the file-scoped namespace instead of children.
    """
    for child in find_children_by_type(root, _FILE_SCOPED_NAMESPACE_TYPE):
        if child.start_byte <= node.start_byte:
            return child
    return None


def _get_generics(node: Node, tree: SyntaxTree) -> tuple[str | None, str | None]:
    """Return joined type parameter names and verbatim constraint text.

    Both are None when the declaration has no type parameter list; the
    constraint text is empty when there are type parameters but no ``where``.
    """
    parameter_list = field_or_child(node, "type_parameters", _TYPE_PARAMETER_LIST_TYPE)
    if parameter_list is None:
        return None, None

    names: list[str] = []
    for parameter in find_children_by_type(parameter_list, _TYPE_PARAMETER_TYPE):
        name_node = field_or_child(parameter, "name", _IDENTIFIER_TYPE)
        if name_node is None:
            raise StructuralMismatchError(
                f"Cannot determine type parameter name at {tree.location(parameter)}"
            )
        names.append(tree.text(name_node))

    clauses = find_children_by_type(node, _CONSTRAINT_CLAUSE_TYPE)
    constraint_text = ""
    if clauses:
        constraint_text = (
            tree.source_bytes[clauses[0].start_byte : clauses[-1].end_byte]
            .decode("utf-8")
            .strip()
        )

    return ", ".join(names), constraint_text


def _split_parameter_list(parameter_list: Node) -> list[list[Node]]:
    """Group the children of a parameter list into one segment per parameter.

    Top-level commas separate parameters; commas inside types belong to
    nested nodes.
    """
    segments: list[list[Node]] = [[]]
    for child in parameter_list.children:
        if child.type in _PARAMETER_LIST_DELIMITERS:
            continue
        if child.type == _COMMA_TOKEN:
            segments.append([])
        else:
            segments[-1].append(child)
    return [
        segment
        for segment in segments
        if any(node.type != _COMMENT_TYPE for node in segment)
    ]


def _parameter_nodes(segment: list[Node]) -> tuple[Node | None, Node | None]:
    """Locate the (type, name) nodes of one parameter segment.

    Wrapped parameters carry ``type``/``name`` fields. Newer grammars leave a
    ``params`` array flattened into the list as ``params <type> <identifier>``.
    """
    significant = [
        node
        for node in segment
        if node.is_named and node.type not in _PARAMETER_DECORATION_TYPES
    ]
    if len(significant) == 1 and significant[0].type in _PARAMETER_TYPES:
        node = significant[0]
        type_node = node.child_by_field_name("type")
        name_node = node.child_by_field_name("name")
        if type_node is None or name_node is None:
            inner = [
                child
                for child in node.named_children
                if child.type not in _PARAMETER_DECORATION_TYPES
            ]
            if name_node is None and inner:
                name_node = inner[-1]
            if type_node is None and len(inner) >= 2:
                type_node = inner[-2]
        return type_node, name_node

    has_params = any(node.type == _PARAMS_TOKEN for node in segment)
    if (
        has_params
        and len(significant) == 2
        and significant[1].type == _IDENTIFIER_TYPE
    ):
        return significant[0], significant[1]
    return None, None


def _get_parameters(method: Node, method_name: str, tree: SyntaxTree) -> list[ParameterInfo]:
    """Extract parameters as (type, name) pairs in declared order.

    Modifiers (``ref``, ``params``, ...), attributes and default values are
    not part of the type text.
    """
    parameter_list = field_or_child(method, "parameters", _PARAMETER_LIST_TYPE)
    if parameter_list is None:
        raise StructuralMismatchError(
            f"Cannot find parameter list of method '{method_name}' "
            f"at {tree.location(method)}"
        )

    parameters: list[ParameterInfo] = []
    for index, segment in enumerate(_split_parameter_list(parameter_list)):
        type_node, name_node = _parameter_nodes(segment)
        if type_node is None or name_node is None:
            raise StructuralMismatchError(
                f"Cannot extract parameter {index} of method '{method_name}' "
                f"at {tree.location(segment[0])}"
            )
        parameters.append(
            ParameterInfo(type=tree.text(type_node), name=tree.text(name_node))
        )

    logger.debug("Extracted %d parameters for %s", len(parameters), method_name)
    return parameters
