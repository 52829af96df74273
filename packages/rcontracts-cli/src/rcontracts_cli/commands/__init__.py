"""CLI command modules.

This package contains the implementation of all CLI subcommands and the
options they share.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar

import click

if TYPE_CHECKING:
    from rcontracts_core import ContractCompiler

F = TypeVar("F", bound=Callable[..., Any])


def project_options(func: F) -> F:
    """Add the --config and --project-dir options shared by project commands."""
    func = click.option(
        "-c",
        "--config",
        "config_path",
        type=click.Path(dir_okay=False),
        default=None,
        help="Path to rcontracts.yaml [default: ./rcontracts.yaml or $RCONTRACTS_CONFIG]",
    )(func)
    func = click.option(
        "-p",
        "--project-dir",
        "project_dir",
        type=click.Path(file_okay=False),
        default=".",
        help="Project root [default: current directory]",
    )(func)
    return func


def build_compiler(config_path: str | None, project_dir: str) -> ContractCompiler:
    """Create a ContractCompiler for the project.

    Raises:
        CLIError: If the configuration cannot be loaded.
    """
    # Import here to avoid heavy imports at CLI startup
    from rcontracts_core import ContractCompiler

    from rcontracts_cli.errors import load_project_config

    cwd = Path(project_dir).resolve()
    config = load_project_config(config_path, cwd)
    return ContractCompiler(config, cwd)


__all__: list[str] = ["build_compiler", "project_options"]
