"""Shared fixtures for refitgen tests."""

import logging
from collections.abc import Callable
from textwrap import dedent

import pytest

from refitgen.config import ConventionConfig
from refitgen.parser import CSharpParser, SyntaxTree

ParseFunc = Callable[..., SyntaxTree]


@pytest.fixture
def parser() -> CSharpParser:
    """Provide a fresh C# parser."""
    return CSharpParser()


@pytest.fixture
def config() -> ConventionConfig:
    """Provide the default Refit convention."""
    return ConventionConfig()


@pytest.fixture
def parse_cs(parser: CSharpParser) -> ParseFunc:
    """Parse dedented C# source text into a SyntaxTree.

    Usage: ``parse_cs(source, path="Api.cs")``
    """

    def _parse(source: str, path: str = "Test.cs") -> SyntaxTree:
        return parser.parse(dedent(source).lstrip(), path)

    return _parse


@pytest.fixture(autouse=True)
def restore_refitgen_logging():
    """Undo logger changes made by setup_logging() between tests.

    dictConfig attaches handlers bound to the streams of the running test and
    turns off propagation, which would hide later records from caplog.
    """
    logger = logging.getLogger("refitgen")
    handlers, level, propagate = logger.handlers[:], logger.level, logger.propagate
    root = logging.getLogger()
    root_handlers, root_level = root.handlers[:], root.level

    yield

    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
    root.handlers[:] = root_handlers
    root.setLevel(root_level)
