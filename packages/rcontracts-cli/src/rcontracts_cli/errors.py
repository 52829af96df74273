"""CLI error handling for rcontracts-cli.

Wraps rcontracts-core exceptions into user-friendly messages with
appropriate exit codes.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, NoReturn

import click

from rcontracts_cli.output import error

if TYPE_CHECKING:
    from rcontracts_core import CompilerConfig, ContractCompiler

# Exit codes following sysexits.h convention
EXIT_SUCCESS = 0
EXIT_USER_ERROR = 1  # User error (invalid contract, bad configuration)
EXIT_SYSTEM_ERROR = 2  # System error (missing files, permissions, discovery failure)


class CLIError(click.ClickException):
    """CLI-specific exception with exit code support.

    Attributes:
        message: User-facing error message.
        exit_code: Exit code for the CLI (default: 1).
    """

    def __init__(self, message: str, exit_code: int = EXIT_USER_ERROR) -> None:
        """Initialize CLIError.

        Args:
            message: User-facing error message.
            exit_code: Exit code for the CLI.
        """
        super().__init__(message)
        self.exit_code = exit_code

    def show(self, file: object = None) -> None:
        """Display the error message using Rich formatting.

        Args:
            file: Output file (unused, for Click compatibility).
        """
        error(self.format_message())


def load_project_config(config_path: str | None, cwd: Path) -> CompilerConfig:
    """Load rcontracts.yaml for a command.

    Args:
        config_path: Explicit configuration path from --config, if any.
        cwd: Project root.

    Returns:
        Loaded CompilerConfig (defaults if no file exists).

    Raises:
        CLIError: If the configuration cannot be loaded.
    """
    from rcontracts_core import ConfigurationError, load_config

    try:
        return load_config(config_path, cwd)
    except ConfigurationError as e:
        raise CLIError(e.user_message) from None


def discover_sources(compiler: ContractCompiler) -> list[str]:
    """Discover contract sources, converting failures into CLI errors.

    Raises:
        CLIError: If discovery fails (exit 2) or matches nothing (exit 1).
    """
    from rcontracts_core import DiscoveryError

    try:
        paths = compiler.discover()
    except DiscoveryError as e:
        raise CLIError(e.user_message, exit_code=EXIT_SYSTEM_ERROR) from None

    if not paths:
        raise CLIError(
            f"No contract files found matching {compiler.config.contracts}\n\n"
            "Run 'rcontracts init' to create a sample contract.",
        )
    return paths


def handle_permission_error(path: str, operation: str = "access") -> NoReturn:
    """Handle permission errors.

    Args:
        path: Path that caused the permission error.
        operation: Operation that failed (read, write, etc.).

    Raises:
        CLIError: Always raises with formatted error message.
    """
    raise CLIError(
        f"Permission denied: Cannot {operation} {path}",
        exit_code=EXIT_SYSTEM_ERROR,
    )
