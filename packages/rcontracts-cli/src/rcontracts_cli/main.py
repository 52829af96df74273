"""CLI entry point for reactive-contracts.

Defines the main CLI group using a LazyGroup so that ``rcontracts --help``
never imports the compiler.
"""

from __future__ import annotations

import importlib
from typing import Any

import click
import rich_click as rclick

from rcontracts_cli import __version__
from rcontracts_cli.output import set_no_color

rclick.rich_click.TEXT_MARKUP = "markdown"
rclick.rich_click.SHOW_ARGUMENTS = True
rclick.rich_click.GROUP_ARGUMENTS_OPTIONS = True


class LazyGroup(rclick.RichGroup):
    """Click group that loads commands lazily.

    Commands are only imported when actually invoked, not at import time.

    Attributes:
        lazy_subcommands: Mapping of command names to module paths.
    """

    def __init__(
        self,
        *args: Any,
        lazy_subcommands: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize LazyGroup.

        Args:
            *args: Positional arguments for parent class.
            lazy_subcommands: Mapping of command name to module path.
                Format: {"validate": "rcontracts_cli.commands.validate.validate"}
            **kwargs: Keyword arguments for parent class.
        """
        super().__init__(*args, **kwargs)
        self.lazy_subcommands: dict[str, str] = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        """Return sorted command names, lazy and registered."""
        commands = set(super().list_commands(ctx))
        commands.update(self.lazy_subcommands.keys())
        return sorted(commands)

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Get a command by name, loading lazily if needed.

        Args:
            ctx: Click context.
            cmd_name: Name of the command to get.

        Returns:
            Click Command instance, or None if not found.
        """
        cmd = super().get_command(ctx, cmd_name)  # type: ignore[arg-type]
        if cmd is not None:
            return cmd

        if cmd_name not in self.lazy_subcommands:
            return None

        module_name, attr_name = self.lazy_subcommands[cmd_name].rsplit(".", 1)
        mod = importlib.import_module(module_name)
        return getattr(mod, attr_name)  # type: ignore[no-any-return]


LAZY_COMMANDS = {
    "init": "rcontracts_cli.commands.init.init",
    "validate": "rcontracts_cli.commands.validate.validate",
    "compile": "rcontracts_cli.commands.compile.compile_cmd",
    "diagnose": "rcontracts_cli.commands.diagnose.diagnose",
    "dev": "rcontracts_cli.commands.dev.dev",
}


@click.command(cls=LazyGroup, lazy_subcommands=LAZY_COMMANDS)
@click.version_option(version=__version__, prog_name="rcontracts")
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable colored output.",
    is_eager=True,
    expose_value=False,
    callback=lambda ctx, param, value: set_no_color(value) if value else None,
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    default=False,
    help="Show compiler log events on stderr.",
)
def cli(verbose: bool) -> None:
    """Reactive Contracts - Data contracts between consumers and providers.

    Declare what a consumer needs once, then generate consumer types,
    provider stubs, and runtime negotiators from it.

    **Getting Started:**

    - `rcontracts init` - Scaffold a contracts project
    - `rcontracts validate` - Validate contract definitions
    - `rcontracts compile` - Generate code from contracts
    - `rcontracts diagnose NAME` - Inspect one contract
    - `rcontracts dev` - Recompile on change
    """
    from rcontracts_core import configure_logging

    configure_logging(log_level="DEBUG" if verbose else "CRITICAL", json_format=False)


if __name__ == "__main__":
    cli()
