"""CLI error reporting for refitgen.

Every command body runs inside cli_error_handler(). Failures are shown as a
single rich panel on stderr and turned into exit status 1; generated source
on stdout is never interleaved with error output.
"""

from __future__ import annotations

import logging
from collections.abc import Generator
from contextlib import contextmanager
from typing_extensions import override

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from refitgen.errors import (
    ConfigError,
    ParserError,
    RefitGenError,
    StructuralMismatchError,
)
from refitgen.synthesis import SynthesizerNotFoundError

logger = logging.getLogger(__name__)
console = Console(stderr=True)

# Checked in order; the first matching type wins
_HINTS: tuple[tuple[type[Exception], str], ...] = (
    (ConfigError, "Check the --config file against the convention fields."),
    (ParserError, "Source files must be readable and UTF-8 encoded."),
    (
        StructuralMismatchError,
        "Interfaces with HTTP method attributes must be declared inside a namespace.",
    ),
    (SynthesizerNotFoundError, "Run 'refitgen ls-synthesizers' to list valid names."),
)


class CLIError(Exception):
    """A command failure carrying the command name and an optional hint.

    Raised directly for CLI-level problems (e.g., no source files), or built
    by cli_error_handler() around errors from the generator.
    """

    def __init__(
        self,
        message: str,
        command: str | None = None,
        original_error: Exception | None = None,
        hint: str | None = None,
    ) -> None:
        """Initialise CLI error with context.

        Args:
            message: Human-readable error message describing what went wrong
            command: Name of the CLI command that failed (e.g., "generate")
            original_error: The underlying exception that caused this CLI error
            hint: Suggested fix shown below the message

        """
        super().__init__(message)
        self.command = command
        self.original_error = original_error
        self.hint = hint

    @override
    def __str__(self) -> str:
        """Return formatted error message with CLI context."""
        base_message = super().__str__()
        if self.command:
            return f"CLI command '{self.command}' failed: {base_message}"
        return base_message

    @classmethod
    def from_exception(cls, error: Exception, command: str) -> CLIError:
        """Wrap an exception raised by a command body."""
        hint = next(
            (text for error_type, text in _HINTS if isinstance(error, error_type)),
            None,
        )
        return cls(str(error), command=command, original_error=error, hint=hint)


def _render(error: CLIError, title: str) -> None:
    body = f"[red]{escape(str(error))}[/red]"
    if error.hint:
        body += f"\n[dim]{escape(error.hint)}[/dim]"
    console.print(Panel(body, title=title, border_style="red"))


@contextmanager
def cli_error_handler(command: str, title: str) -> Generator[None]:
    """Report any failure in the managed block and exit with status 1.

    Known refitgen errors are logged without a traceback; anything else is
    logged with one, since it indicates a bug rather than bad input.

    Args:
        command: CLI command name for error context.
        title: Panel title for the error display.

    """
    try:
        yield
    except CLIError as e:
        if e.command is None:
            e.command = command
        logger.error("%s: %s", title, e)
        _render(e, title)
        raise typer.Exit(1) from e
    except (RefitGenError, SynthesizerNotFoundError) as e:
        cli_error = CLIError.from_exception(e, command)
        logger.error("%s: %s", title, cli_error)
        _render(cli_error, title)
        raise typer.Exit(1) from e
    except Exception as e:
        cli_error = CLIError.from_exception(e, command)
        logger.exception("%s: unexpected error", title)
        _render(cli_error, title)
        raise typer.Exit(1) from e
