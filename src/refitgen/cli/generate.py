"""CLI command implementations for stub generation and inspection."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

import typer

from refitgen.cli.errors import CLIError, cli_error_handler
from refitgen.cli.formatting import OutputFormatter
from refitgen.config import ConventionConfig, load_config
from refitgen.generator import InterfaceStubGenerator
from refitgen.logging import setup_logging
from refitgen.parser import CSharpParser, SyntaxTree
from refitgen.synthesis import DEFAULT_SYNTHESIZER, SynthesizerRegistry, get_synthesizer

logger = logging.getLogger(__name__)


def collect_source_files(paths: Sequence[Path]) -> list[Path]:
    """Expand directories into their ``.cs`` files, keeping argument order.

    Files inside a directory are sorted so repeated runs see the same order.
    Explicit files with another extension are skipped with a warning.
    """
    files: list[Path] = []
    for path in paths:
        if path.is_dir():
            files.extend(
                sorted(p for p in path.rglob("*") if CSharpParser.is_supported_file(p))
            )
        elif CSharpParser.is_supported_file(path):
            files.append(path)
        else:
            logger.warning("Skipping unsupported file: %s", path)
    return files


def parse_sources(paths: Sequence[Path]) -> list[SyntaxTree]:
    """Parse every source file below the given paths.

    Raises:
        CLIError: If no C# file was found

    """
    files = collect_source_files(paths)
    if not files:
        raise CLIError("No C# source files found")

    parser = CSharpParser()
    trees = [parser.parse_file(file) for file in files]
    logger.debug("Parsed %d source files", len(trees))
    return trees


def _load_convention(config_path: Path | None) -> ConventionConfig:
    if config_path is None:
        return ConventionConfig()
    return load_config(config_path)


def generate_command(
    sources: Sequence[Path],
    config_path: Path | None = None,
    synthesizer_name: str = DEFAULT_SYNTHESIZER,
    log_level: str = "INFO",
    fail_on_warnings: bool = False,
) -> None:
    """CLI command implementation for generating stubs.

    Args:
        sources: C# files or directories to scan
        config_path: Optional YAML convention configuration
        synthesizer_name: Registered synthesizer used for output
        log_level: Logging level
        fail_on_warnings: Exit with code 1 when diagnostics were reported

    """
    setup_logging(level=log_level)
    formatter = OutputFormatter()

    with cli_error_handler("generate", "Stub generation failed"):
        trees = parse_sources(sources)
        generator = InterfaceStubGenerator(
            config=_load_convention(config_path),
            synthesizer=get_synthesizer(synthesizer_name),
        )
        result = generator.generate_interface_stubs(trees)

        typer.echo(result.source, nl=False)
        formatter.format_diagnostics(result.diagnostics)
        formatter.format_generation_summary(
            len(result.template_info.classes), len(trees)
        )

    if fail_on_warnings and result.diagnostics:
        raise typer.Exit(1)


def inspect_command(
    sources: Sequence[Path],
    config_path: Path | None = None,
    log_level: str = "INFO",
) -> None:
    """CLI command implementation for printing the template model as JSON.

    Args:
        sources: C# files or directories to scan
        config_path: Optional YAML convention configuration
        log_level: Logging level

    """
    setup_logging(level=log_level)

    with cli_error_handler("inspect", "Template extraction failed"):
        trees = parse_sources(sources)
        generator = InterfaceStubGenerator(config=_load_convention(config_path))
        candidates = [
            candidate
            for tree in trees
            for candidate in generator.find_interfaces_to_generate(tree)
        ]
        info = generator.generate_template_info(candidates)
        typer.echo(info.model_dump_json(indent=2))


def list_synthesizers_command(log_level: str = "INFO") -> None:
    """CLI command implementation for listing synthesizers.

    Args:
        log_level: Logging level

    """
    setup_logging(level=log_level)

    with cli_error_handler("ls-synthesizers", "Failed to list synthesizers"):
        get_synthesizer(DEFAULT_SYNTHESIZER)
        names = SynthesizerRegistry().list_synthesizers()
        OutputFormatter().format_synthesizers(names, DEFAULT_SYNTHESIZER)
