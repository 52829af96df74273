"""rcontracts diagnose command - Inspect a single contract."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from rcontracts_cli.commands import build_compiler, project_options
from rcontracts_cli.errors import CLIError, discover_sources
from rcontracts_cli.output import error, info, print_json, print_table, success, warning

if TYPE_CHECKING:
    from rcontracts_core import ContractCompiler
    from rcontracts_core.compiler import LoadedContract


@click.command()
@click.argument("name")
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    default=False,
    help="Print the diagnosis as JSON",
)
@project_options
def diagnose(name: str, as_json: bool, config_path: str | None, project_dir: str) -> None:
    """Diagnose a contract by name.

    Shows validation findings, latency analysis, reactivity, and the
    generated file locations for the contract NAME (contract name or
    exported attribute name).

    Examples:

        rcontracts diagnose UserProfile

        rcontracts diagnose UserProfile --json
    """
    compiler = build_compiler(config_path, project_dir)
    item = _find_contract(compiler, name)
    report = _build_report(compiler, item)

    if as_json:
        print_json(report)
        return

    info(f"Contract: {report['contract']} ({report['source']})")
    info(f"Intent: {report['intent']}")

    validation = report["validation"]
    if validation["valid"]:
        success("Validation passed")
    else:
        error("Validation failed")
    for message in validation["errors"]:
        error(f"  {message}")
    for message in validation["warnings"]:
        warning(f"  {message}")

    latency = report["latency"]
    info(f"Latency: {latency['status']}")
    for key in ("estimated", "message"):
        if latency.get(key):
            info(f"  {latency[key]}")
    for suggestion in latency["suggestions"]:
        info(f"  - {suggestion}")

    reactivity = report["reactivity"]
    if reactivity:
        rows = [(mode, ", ".join(paths)) for mode, paths in reactivity.items()]
        print_table("Reactivity", ["Mode", "Fields"], rows)

    rows = [
        (target, entry["path"], "yes" if entry["exists"] else "no")
        for target, entry in report["generated"].items()
    ]
    print_table("Generated files", ["Target", "Path", "Exists"], rows)


def _find_contract(compiler: ContractCompiler, name: str) -> LoadedContract:
    for path in discover_sources(compiler):
        loaded, _ = compiler.load_source(path)
        for item in loaded:
            if name in (item.contract.name, item.export_name):
                return item
    raise CLIError(f"Contract not found: {name}")


def _build_report(compiler: ContractCompiler, item: LoadedContract) -> dict[str, Any]:
    from rcontracts_core import get_generated_files_for_contract
    from rcontracts_core.schemas import ReactivityConfig

    contract = item.contract
    validation, latency = compiler.check_contract(contract)
    paths = get_generated_files_for_contract(contract.name, compiler.config, compiler.cwd)

    reactivity: dict[str, list[str]] = {}
    if isinstance(contract.reactivity, ReactivityConfig):
        for mode, path in contract.reactivity.referenced_paths():
            reactivity.setdefault(mode, []).append(path)

    return {
        "contract": contract.name,
        "source": item.source_path,
        "intent": contract.intent,
        "validation": validation.model_dump(mode="json"),
        "latency": latency.model_dump(mode="json"),
        "reactivity": reactivity,
        "generated": {
            target: {"path": _relative(path, compiler.cwd), "exists": path.is_file()}
            for target, path in paths._asdict().items()
        },
    }


def _relative(path: Path, cwd: Path) -> str:
    try:
        return path.relative_to(cwd).as_posix()
    except ValueError:
        return str(path)
