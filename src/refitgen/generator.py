"""Batch orchestration of the stub generation pass."""

import logging
from collections.abc import Iterable, Sequence

from refitgen.config import ConventionConfig
from refitgen.discovery import InterfaceCandidate, find_interfaces_to_generate
from refitgen.extraction import extract_class_info
from refitgen.models import (
    ClassTemplateInfo,
    Diagnostic,
    GenerationResult,
    TemplateInformation,
)
from refitgen.parser import SyntaxTree
from refitgen.synthesis import JinjaSynthesizer, Synthesizer
from refitgen.usings import aggregate_usings
from refitgen.validation import generate_warnings

logger = logging.getLogger(__name__)


class InterfaceStubGenerator:
    """Generates stub implementations for convention-following interfaces.

    One call to generate_interface_stubs() is a single synchronous pass over
    the supplied trees. No state is kept between calls.
    """

    def __init__(
        self,
        config: ConventionConfig | None = None,
        synthesizer: Synthesizer | None = None,
    ) -> None:
        """Initialise the generator.

        Args:
            config: Convention vocabulary (Refit defaults if None)
            synthesizer: Output strategy (Jinja C# template if None)

        """
        self._config = config or ConventionConfig()
        self._synthesizer = synthesizer or JinjaSynthesizer()

    @property
    def config(self) -> ConventionConfig:
        """Return the convention configuration."""
        return self._config

    def generate_interface_stubs(self, trees: Iterable[SyntaxTree]) -> GenerationResult:
        """Run discovery, extraction, validation and synthesis over a batch.

        Args:
            trees: Parsed source files, in the order candidates should appear

        Returns:
            Generated source, the template model and all diagnostics

        Raises:
            StructuralMismatchError: If any candidate cannot be extracted
            Exception: Whatever the synthesizer raises, unchanged

        """
        candidates = [
            candidate
            for tree in trees
            for candidate in self.find_interfaces_to_generate(tree)
        ]

        template_info = self.generate_template_info(candidates)
        diagnostics = self.generate_warnings(candidates)
        source = self._synthesizer.synthesize(template_info)

        logger.info(
            "Generated stubs for %d interfaces with %d diagnostics using '%s'",
            len(template_info.classes),
            len(diagnostics),
            self._synthesizer.name,
        )

        return GenerationResult(
            source=source,
            template_info=template_info,
            diagnostics=diagnostics,
        )

    def find_interfaces_to_generate(self, tree: SyntaxTree) -> list[InterfaceCandidate]:
        """Find candidate interfaces in one syntax tree."""
        return find_interfaces_to_generate(tree, self._config)

    def generate_template_info(
        self, candidates: Sequence[InterfaceCandidate]
    ) -> TemplateInformation:
        """Build the batch template model.

        Raises:
            StructuralMismatchError: If any candidate cannot be extracted

        """
        return TemplateInformation(
            usings=aggregate_usings(candidates, self._config),
            classes=[self.generate_class_info(candidate) for candidate in candidates],
        )

    def generate_class_info(self, candidate: InterfaceCandidate) -> ClassTemplateInfo:
        """Build the template model of one candidate interface."""
        return extract_class_info(candidate, self._config)

    def generate_warnings(
        self, candidates: Sequence[InterfaceCandidate]
    ) -> tuple[Diagnostic, ...]:
        """Validate the convention across candidates."""
        return generate_warnings(candidates, self._config)
