"""Using directive parsing and batch-wide aggregation."""

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from tree_sitter import Node

from refitgen.config import ConventionConfig
from refitgen.models import UsingDeclaration
from refitgen.parser import SyntaxTree

if TYPE_CHECKING:
    from refitgen.discovery import InterfaceCandidate

logger = logging.getLogger(__name__)

USING_DIRECTIVE_TYPE = "using_directive"

# Older grammars wrap the alias as `name_equals`; newer ones use a bare `=`
_NAME_EQUALS_TYPE = "name_equals"
_EQUALS_TOKEN = "="
_STATIC_TOKEN = "static"
_UNSAFE_TOKEN = "unsafe"
_COMMENT_TYPE = "comment"


def parse_using_directive(node: Node, tree: SyntaxTree) -> UsingDeclaration | None:
    """Build a UsingDeclaration from a ``using_directive`` node.

    Args:
        node: The using directive node
        tree: Syntax tree the node belongs to

    Returns:
        The parsed declaration, or None when error recovery left no name

    """
    alias: str | None = None
    is_static = False
    is_unsafe = False
    has_equals = False
    named: list[Node] = []

    for child in node.children:
        if child.type == _STATIC_TOKEN:
            is_static = True
        elif child.type == _UNSAFE_TOKEN:
            is_unsafe = True
        elif child.type == _EQUALS_TOKEN:
            has_equals = True
        elif child.type == _NAME_EQUALS_TYPE:
            identifiers = [c for c in child.named_children if c.type != _COMMENT_TYPE]
            if identifiers:
                alias = tree.text(identifiers[0])
        elif child.is_named and child.type != _COMMENT_TYPE:
            named.append(child)

    if not named:
        return None
    if has_equals and len(named) >= 2:
        alias = tree.text(named[0])

    return UsingDeclaration(
        name=tree.text(named[-1]),
        alias=alias,
        is_static=is_static,
        is_unsafe=is_unsafe,
    )


def iter_using_declarations(tree: SyntaxTree) -> Iterable[UsingDeclaration]:
    """Yield every using directive in a file, including those inside namespaces."""
    for node in tree.descendants_of_type(USING_DIRECTIVE_TYPE):
        declaration = parse_using_directive(node, tree)
        if declaration is not None:
            yield declaration


def aggregate_usings(
    candidates: Iterable["InterfaceCandidate"], config: ConventionConfig
) -> list[UsingDeclaration]:
    """Collect the distinct using directives of every file holding a candidate.

    Args:
        candidates: Candidate interfaces across the whole batch
        config: Convention vocabulary (supplies the exclusion set)

    Returns:
        Declarations in first-seen order, deduplicated by directive text,
        without the always-available imports

    """
    excluded = set(config.excluded_usings)
    seen: set[str] = set()
    usings: list[UsingDeclaration] = []

    for candidate in candidates:
        for declaration in iter_using_declarations(candidate.tree):
            if declaration.item in seen:
                continue
            seen.add(declaration.item)
            if declaration.item not in excluded:
                usings.append(declaration)

    logger.debug("Aggregated %d using directives", len(usings))
    return usings
