"""rcontracts validate command - Validate contracts without generating code."""

from __future__ import annotations

import click

from rcontracts_cli.commands import build_compiler, project_options
from rcontracts_cli.errors import EXIT_USER_ERROR, discover_sources
from rcontracts_cli.output import error, info, success, warning


@click.command()
@project_options
def validate(config_path: str | None, project_dir: str) -> None:
    """Validate contract definitions.

    Checks every contract matched by the configured glob and reports
    errors, warnings, and latency feasibility. No files are generated.

    Examples:

        rcontracts validate

        rcontracts validate --config config/rcontracts.yaml
    """
    from rcontracts_core import LatencyStatus

    compiler = build_compiler(config_path, project_dir)
    paths = discover_sources(compiler)

    checked = 0
    failed = 0

    for path in paths:
        loaded, file_errors = compiler.load_source(path)
        for message in file_errors:
            error(message)
            failed += 1

        for item in loaded:
            checked += 1
            name = item.contract.name
            validation, latency = compiler.check_contract(item.contract)

            if validation.valid:
                success(f"{name} ({item.source_path})")
            else:
                failed += 1
                error(f"{name} ({item.source_path})")
                for message in validation.errors:
                    info(f"    {message}")

            for message in validation.warnings:
                warning(f"  {name}: {message}")

            if latency.status is not LatencyStatus.OK and latency.message:
                warning(f"  {name}: {latency.message}")

    if failed:
        error(f"Validation failed: {failed} problem(s) across {len(paths)} file(s)")
        raise SystemExit(EXIT_USER_ERROR)

    success(f"All {checked} contract(s) valid")
