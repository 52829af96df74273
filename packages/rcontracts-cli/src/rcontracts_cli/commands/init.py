"""rcontracts init command - Scaffold a contracts project."""

from __future__ import annotations

from pathlib import Path

import click

from rcontracts_cli.errors import handle_permission_error
from rcontracts_cli.output import info, success, warning

CONFIG_TEMPLATE = """\
# {{ name }} - Reactive Contracts Configuration

# Glob locating contract sources, relative to this file
contracts: "contracts/**/*_contract.py"

output:
  frontend: generated/frontend
  backend: generated/backend
  runtime: generated/runtime

validation:
  strictLatency: false
  requireIntent: false
  # maxComplexity: 10
  strictReferences: false
  rejectEmptyShape: false

optimization:
  bundleSplitting: false
  treeShaking: false
  precompute: []
"""

SAMPLE_CONTRACT_TEMPLATE = """\
\"\"\"Sample contract.

An example contract to help you get started. Modify or delete this file.
\"\"\"

from rcontracts_core import contract, days_ago, derive, max_latency

{{ export_name }} = contract(
    name="{{ contract_name }}",
    intent="Demonstrate basic contract structure",
    shape={
        "data": {
            "id": "string",
            "name": "string",
            "createdAt": "date",
        },
        "metadata": {
            "count": "number",
            "status": derive(
                lambda ctx: "recent" if ctx["data"]["createdAt"] > days_ago(30) else "old",
                dependencies=["data.createdAt"],
                preferred_layer="consumer",
            ),
        },
    },
    constraints={"latency": max_latency("100ms", fallback="cachedVersion")},
    reactivity={
        "static": ["data.id", "data.name", "data.createdAt"],
        "polling": [{"field": "metadata.count", "interval": "30s"}],
    },
)
"""

GITIGNORE_TEMPLATE = """\
# Reactive Contracts generated output
generated/
"""

GENERATED_DIRS = ("generated/frontend", "generated/backend", "generated/runtime")


@click.command()
@click.option(
    "-n",
    "--name",
    "name",
    type=str,
    default=None,
    help="Project name [default: current directory name]",
)
@click.option(
    "--force",
    is_flag=True,
    default=False,
    help="Overwrite existing files",
)
def init(name: str | None, force: bool) -> None:
    """Scaffold a new contracts project.

    Creates rcontracts.yaml, a sample contract in contracts/, the
    generated/ output directories, and a .gitignore entry for generated
    code. Existing files are kept unless --force is given.

    Examples:

        rcontracts init

        rcontracts init --name storefront

        rcontracts init --force
    """
    from jinja2.sandbox import SandboxedEnvironment

    root = Path.cwd()
    if name is None:
        name = root.name

    env = SandboxedEnvironment(
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )

    files = {
        Path("rcontracts.yaml"): env.from_string(CONFIG_TEMPLATE).render(name=name),
        Path("contracts/sample_contract.py"): env.from_string(SAMPLE_CONTRACT_TEMPLATE).render(
            export_name="SampleContract",
            contract_name="Sample",
        ),
    }

    try:
        for directory in ("contracts", *GENERATED_DIRS):
            (root / directory).mkdir(parents=True, exist_ok=True)

        for relative, content in files.items():
            target = root / relative
            if target.exists() and not force:
                info(f"{relative.as_posix()} already exists, skipping")
                continue
            if target.exists():
                warning(f"Overwrote existing {relative.as_posix()}")
            target.write_text(content)
            success(f"Created {relative.as_posix()}")

        _update_gitignore(root / ".gitignore")

    except PermissionError as e:
        handle_permission_error(e.filename or str(root), "write to")

    success(f"Initialized contracts project: {name}")
    info("")
    info("Next steps:")
    info("  1. Review the sample contract in contracts/sample_contract.py")
    info("  2. Customize rcontracts.yaml if needed")
    info("  3. Run: rcontracts compile")
    info("  4. Check the generated/ directory for output")


def _update_gitignore(path: Path) -> None:
    existing = path.read_text() if path.exists() else ""
    if "generated/" in existing:
        info(".gitignore already includes generated/, skipping")
        return

    if existing:
        separator = "" if existing.endswith("\n") else "\n"
        path.write_text(f"{existing}{separator}\n{GITIGNORE_TEMPLATE}")
    else:
        path.write_text(GITIGNORE_TEMPLATE)
    success("Updated .gitignore")
