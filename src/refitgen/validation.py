"""Convention checks over candidate interfaces.

Violations are reported as warnings and never block generation.
"""

import logging
from collections.abc import Sequence

from refitgen.attributes import has_http_method_attribute
from refitgen.config import ConventionConfig
from refitgen.discovery import InterfaceCandidate, get_method_name
from refitgen.models import Diagnostic, DiagnosticDescriptor, DiagnosticSeverity

logger = logging.getLogger(__name__)


def missing_attribute_descriptor(config: ConventionConfig) -> DiagnosticDescriptor:
    """Descriptor for a method without a dispatch marker."""
    category = config.diagnostic_category
    return DiagnosticDescriptor(
        id=f"{category}.Warn.01",
        title=f"Missing {category} attribute",
        message_format=(
            f"The method '{{0}}' on interface '{{1}}' is missing a {category} attribute"
        ),
        category=category,
        severity=DiagnosticSeverity.WARNING,
    )


def duplicate_name_descriptor(config: ConventionConfig) -> DiagnosticDescriptor:
    """Descriptor for dispatch methods sharing a name on one interface."""
    category = config.diagnostic_category
    return DiagnosticDescriptor(
        id=f"{category}.Warn.02",
        title=f"Multiple {category} methods with the same name",
        message_format=(
            f"Multiple {category} methods with the same name '{{0}}' on interface '{{1}}'"
        ),
        category=category,
        severity=DiagnosticSeverity.WARNING,
    )


def generate_warnings(
    candidates: Sequence[InterfaceCandidate], config: ConventionConfig
) -> tuple[Diagnostic, ...]:
    """Validate the convention across every candidate interface.

    Args:
        candidates: Candidate interfaces across the whole batch
        config: Convention vocabulary

    Returns:
        Missing-marker diagnostics followed by duplicate-name diagnostics

    """
    missing_descriptor = missing_attribute_descriptor(config)
    duplicate_descriptor = duplicate_name_descriptor(config)

    missing: list[Diagnostic] = []
    # Keyed by (candidate, method name); dict order keeps first-seen grouping
    dispatch_groups: dict[tuple[InterfaceCandidate, str], list[Diagnostic]] = {}

    for candidate in candidates:
        tree = candidate.tree
        interface_name = candidate.name
        for method in candidate.methods:
            method_name = get_method_name(method, tree)
            location = tree.location(method)

            if not has_http_method_attribute(method, tree, config):
                missing.append(
                    Diagnostic(
                        descriptor=missing_descriptor,
                        location=location,
                        arguments=(method_name, interface_name),
                    )
                )
                continue

            dispatch_groups.setdefault((candidate, method_name), []).append(
                Diagnostic(
                    descriptor=duplicate_descriptor,
                    location=location,
                    arguments=(method_name, interface_name),
                )
            )

    duplicates = [
        diagnostic
        for group in dispatch_groups.values()
        if len(group) > 1
        for diagnostic in group
    ]

    if missing or duplicates:
        logger.debug(
            "Convention check: %d missing attribute, %d duplicate name warnings",
            len(missing),
            len(duplicates),
        )
    return (*missing, *duplicates)
