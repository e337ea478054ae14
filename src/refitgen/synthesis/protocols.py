"""Protocols for synthesizer plugins."""

from typing import Protocol, runtime_checkable

from refitgen.models import TemplateInformation


@runtime_checkable
class Synthesizer(Protocol):
    """Protocol for synthesizer plugins.

    A synthesizer turns the batch template model into generated source.
    Failures propagate to the caller unchanged.
    """

    @property
    def name(self) -> str:
        """Canonical synthesizer name (e.g., 'jinja')."""
        ...

    def synthesize(self, info: TemplateInformation) -> str:
        """Render generated source for every class in the template model.

        Args:
            info: Classes and using directives collected for the batch

        Returns:
            Generated source text

        """
        ...
