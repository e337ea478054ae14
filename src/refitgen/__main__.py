"""Main entry point for refitgen.

This module provides the command-line interface, including commands for:
- Generating stub implementations from C# sources
- Inspecting the extracted template model
- Listing available synthesizers
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from refitgen.cli import generate_command, inspect_command, list_synthesizers_command
from refitgen.synthesis import DEFAULT_SYNTHESIZER

app = typer.Typer(name="refitgen", no_args_is_help=True)


@app.command()
def generate(
    sources: Annotated[
        list[Path],
        typer.Argument(
            help="C# source files or directories to scan",
            exists=True,
            readable=True,
        ),
    ],
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="YAML file overriding the convention vocabulary",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
        ),
    ] = None,
    synthesizer: Annotated[
        str,
        typer.Option(
            "--synthesizer",
            "-s",
            help="Registered synthesizer used to render the stubs",
        ),
    ] = DEFAULT_SYNTHESIZER,
    fail_on_warnings: Annotated[
        bool,
        typer.Option(
            "--fail-on-warnings",
            help="Exit with status 1 when convention warnings are reported",
        ),
    ] = False,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Set logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        ),
    ] = "INFO",
) -> None:
    """Generate stub implementations and print them to stdout.

    Example:
        refitgen generate src/Api -c convention.yaml > RefitStubs.g.cs

    """
    generate_command(sources, config, synthesizer, log_level, fail_on_warnings)


@app.command()
def inspect(
    sources: Annotated[
        list[Path],
        typer.Argument(
            help="C# source files or directories to scan",
            exists=True,
            readable=True,
        ),
    ],
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="YAML file overriding the convention vocabulary",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Set logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        ),
    ] = "INFO",
) -> None:
    """Print the extracted template model as JSON."""
    inspect_command(sources, config, log_level)


@app.command(name="ls-synthesizers")
def list_synthesizers(
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Set logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        ),
    ] = "INFO",
) -> None:
    """List available (built-in & registered) synthesizers."""
    list_synthesizers_command(log_level)


if __name__ == "__main__":
    app()
