"""Workspace-level pytest configuration and fixtures."""

import pytest

from refitgen.synthesis import SynthesizerRegistry


@pytest.fixture(autouse=True, scope="function")
def isolate_synthesizer_registry():
    """Automatically preserve and restore SynthesizerRegistry state for each test.

    SynthesizerRegistry is a singleton with mutable global state; tests that
    register or clear synthesizers would otherwise leak into later tests.
    """
    saved_state = SynthesizerRegistry.snapshot_state()

    yield

    SynthesizerRegistry.restore_state(saved_state)
