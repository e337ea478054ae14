"""CLI command implementations for refitgen."""

from refitgen.cli.errors import CLIError, cli_error_handler
from refitgen.cli.generate import (
    generate_command,
    inspect_command,
    list_synthesizers_command,
)

__all__ = [
    "CLIError",
    "cli_error_handler",
    "generate_command",
    "inspect_command",
    "list_synthesizers_command",
]
