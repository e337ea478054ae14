"""Synthesizer registry.

Provides singleton registry with entry point discovery for synthesizer plugins.
"""

import logging
from importlib.metadata import entry_points
from typing import Any, TypedDict

from refitgen.synthesis.protocols import Synthesizer

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "refitgen.synthesizers"


class SynthesizerNotFoundError(Exception):
    """Raised when a requested synthesizer is not registered."""

    pass


class SynthesizerAlreadyRegisteredError(Exception):
    """Raised when attempting to register a synthesizer that already exists."""

    pass


class SynthesizerRegistryState(TypedDict):
    """State snapshot for SynthesizerRegistry (used for test isolation)."""

    registry: dict[str, Synthesizer]
    discovered: bool


class SynthesizerRegistry:
    """Singleton registry for synthesizer plugins.

    Discovers synthesizers via entry points and provides lookup by name.
    """

    _instance: "SynthesizerRegistry | None" = None
    _registry: dict[str, Synthesizer]
    _discovered: bool

    def __new__(cls, *args: Any, **kwargs: Any) -> "SynthesizerRegistry":  # noqa: ANN401
        """Create or return the singleton instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._registry = {}
            cls._instance._discovered = False
        return cls._instance

    def discover(self) -> None:
        """Discover and register synthesizers from entry points.

        Entry point group: refitgen.synthesizers

        Plugins whose dependencies are not installed are skipped. Names that
        are already registered keep their existing implementation.
        """
        if self._discovered:
            return

        for ep in entry_points(group=ENTRY_POINT_GROUP):
            try:
                synthesizer = ep.load()()
            except ImportError:
                logger.debug("Skipping synthesizer %s: import failed", ep.name)
                continue
            if not self.is_registered(synthesizer.name):
                self.register(synthesizer)

        self._discovered = True

    def register(self, synthesizer: Synthesizer) -> None:
        """Register a synthesizer instance.

        Args:
            synthesizer: Synthesizer implementation

        Raises:
            SynthesizerAlreadyRegisteredError: If the name is already registered

        """
        if synthesizer.name in self._registry:
            raise SynthesizerAlreadyRegisteredError(
                f"Synthesizer '{synthesizer.name}' is already registered"
            )
        self._registry[synthesizer.name] = synthesizer

    def get(self, name: str) -> Synthesizer:
        """Get a synthesizer by name.

        Raises:
            SynthesizerNotFoundError: If the synthesizer is not registered

        """
        if name not in self._registry:
            raise SynthesizerNotFoundError(
                f"Synthesizer '{name}' not registered. "
                f"Available: {self.list_synthesizers()}"
            )
        return self._registry[name]

    def list_synthesizers(self) -> list[str]:
        """List all registered synthesizer names."""
        return list(self._registry.keys())

    def is_registered(self, name: str) -> bool:
        """Check if a synthesizer is registered."""
        return name in self._registry

    def clear(self) -> None:
        """Clear all registered synthesizers (for testing)."""
        self._registry.clear()
        self._discovered = False

    @classmethod
    def snapshot_state(cls) -> SynthesizerRegistryState:
        """Capture current state for later restoration (test isolation)."""
        instance = cls()
        return {
            "registry": instance._registry.copy(),
            "discovered": instance._discovered,
        }

    @classmethod
    def restore_state(cls, state: SynthesizerRegistryState) -> None:
        """Restore state from a previously captured snapshot."""
        instance = cls()
        instance._registry = state["registry"].copy()
        instance._discovered = state["discovered"]
