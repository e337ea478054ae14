"""Synthesizer plugin system."""

from refitgen.synthesis.jinja import JinjaSynthesizer
from refitgen.synthesis.protocols import Synthesizer
from refitgen.synthesis.registry import (
    SynthesizerAlreadyRegisteredError,
    SynthesizerNotFoundError,
    SynthesizerRegistry,
)

DEFAULT_SYNTHESIZER = "jinja"


def get_synthesizer(name: str = DEFAULT_SYNTHESIZER) -> Synthesizer:
    """Look up a synthesizer by name after entry point discovery.

    The built-in Jinja synthesizer is registered even when the package
    metadata (and therefore its entry point) is unavailable.
    """
    registry = SynthesizerRegistry()
    registry.discover()
    if not registry.is_registered(DEFAULT_SYNTHESIZER):
        registry.register(JinjaSynthesizer())
    return registry.get(name)


__all__ = [
    "DEFAULT_SYNTHESIZER",
    "JinjaSynthesizer",
    "Synthesizer",
    "SynthesizerAlreadyRegisteredError",
    "SynthesizerNotFoundError",
    "SynthesizerRegistry",
    "get_synthesizer",
]
