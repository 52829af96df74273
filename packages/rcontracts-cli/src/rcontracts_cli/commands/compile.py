"""rcontracts compile command - Generate consumer, provider and runtime artifacts."""

from __future__ import annotations

from pathlib import Path

import click

from rcontracts_cli.commands import build_compiler, project_options
from rcontracts_cli.errors import EXIT_SYSTEM_ERROR, EXIT_USER_ERROR, CLIError
from rcontracts_cli.output import error, info, success, warning


@click.command("compile")
@click.option(
    "-f",
    "--file",
    "file_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Compile a single contract source instead of the whole project",
)
@project_options
def compile_cmd(file_path: str | None, config_path: str | None, project_dir: str) -> None:
    """Compile contracts into generated code.

    Validates each contract, analyzes its latency budget, and writes the
    consumer types, provider stub, and runtime negotiator. Invalid
    contracts are reported and skipped; the others still compile.

    Examples:

        rcontracts compile

        rcontracts compile --file contracts/user_profile_contract.py
    """
    from rcontracts_core import DiscoveryError, LatencyStatus, is_contract_file

    compiler = build_compiler(config_path, project_dir)

    if file_path is not None:
        source = compiler.cwd / file_path
        if not source.is_file():
            raise CLIError(f"File not found: {file_path}", exit_code=EXIT_SYSTEM_ERROR)
        if not is_contract_file(source):
            warning(f"{file_path} does not follow the *_contract.py naming convention")
        result = compiler.compile_file(file_path)
    else:
        try:
            result = compiler.compile_all()
        except DiscoveryError as e:
            raise CLIError(e.user_message, exit_code=EXIT_SYSTEM_ERROR) from None

    for compiled in result.results:
        name = compiled.contract.name
        if compiled.validation.valid:
            success(f"{name}")
            for output in (
                compiled.generated.frontend,
                compiled.generated.backend,
                compiled.generated.runtime,
            ):
                if output is not None:
                    info(f"    {_display_path(output, compiler.cwd)}")
        if compiled.latency.status is not LatencyStatus.OK and compiled.latency.message:
            warning(f"{name}: {compiled.latency.message}")

    for message in result.warnings:
        warning(message)

    for message in result.errors:
        error(message)

    if not result.success:
        error(f"Compilation failed with {len(result.errors)} error(s)")
        raise SystemExit(EXIT_USER_ERROR)

    changed = len(result.changed_files)
    success(f"Compiled {len(result.results)} contract(s), {changed} file(s) updated")


def _display_path(path: str, cwd: Path) -> str:
    try:
        return Path(path).relative_to(cwd).as_posix()
    except ValueError:
        return path
