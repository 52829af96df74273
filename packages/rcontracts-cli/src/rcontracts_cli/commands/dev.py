"""rcontracts dev command - Recompile contracts on change."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

import click

from rcontracts_cli.commands import build_compiler, project_options
from rcontracts_cli.errors import EXIT_SYSTEM_ERROR, CLIError
from rcontracts_cli.output import error, info, success, warning

if TYPE_CHECKING:
    from rcontracts_core import CompileResult


@click.command()
@click.option(
    "--debounce",
    "debounce",
    type=click.FloatRange(min=0.0),
    default=0.3,
    show_default=True,
    help="Seconds to wait after a change before recompiling",
)
@project_options
def dev(debounce: float, config_path: str | None, project_dir: str) -> None:
    """Watch contract sources and recompile on change.

    Runs a full compile, then recompiles each contract file as it is
    saved. Press Ctrl+C to stop.

    Examples:

        rcontracts dev

        rcontracts dev --debounce 1.0
    """
    from rcontracts_core import DiscoveryError
    from rcontracts_core.watcher import ContractWatcher, WatcherError

    compiler = build_compiler(config_path, project_dir)

    try:
        initial = compiler.compile_all()
    except DiscoveryError as e:
        raise CLIError(e.user_message, exit_code=EXIT_SYSTEM_ERROR) from None
    _report(initial)

    try:
        watcher = ContractWatcher(
            compiler,
            debounce_seconds=debounce,
            on_compiled=_on_compiled,
            on_error=_on_error,
            on_deleted=_on_deleted,
        )
    except WatcherError as e:
        raise CLIError(str(e), exit_code=EXIT_SYSTEM_ERROR) from None
    watcher.track(initial)

    info(f"Watching {watcher.watch_dir} for changes (Ctrl+C to stop)")
    with watcher:
        try:
            _wait()
        except KeyboardInterrupt:
            info("Stopping watcher")


def _wait() -> None:
    while True:
        time.sleep(1.0)


def _on_compiled(path: str, result: CompileResult) -> None:
    info(f"Recompiled {path}")
    _report(result)


def _on_error(path: str, exc: Exception) -> None:
    error(f"Recompile of {path} failed: {exc}")


def _on_deleted(path: str, artifacts: list[str]) -> None:
    warning(f"Removed {path}")
    for artifact in artifacts:
        info(f"    stale: {artifact}")


def _report(result: CompileResult) -> None:
    from rcontracts_core import LatencyStatus

    for compiled in result.results:
        latency = compiled.latency
        if latency.status is not LatencyStatus.OK and latency.message:
            warning(f"{compiled.contract.name}: {latency.message}")
    for message in result.warnings:
        warning(message)
    for message in result.errors:
        error(message)
    if result.success:
        success(
            f"Compiled {len(result.results)} contract(s), "
            f"{len(result.changed_files)} file(s) updated"
        )
