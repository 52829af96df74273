"""Code generation for reactive-contracts.

Three emitters, each idempotent and writing only its own output path:
- generate_consumer_types: TypedDict declarations for the calling side
- generate_provider_stub: resolver skeleton for the origin
- generate_runtime_negotiator: JSON descriptor of constraints and reactivity
"""

from __future__ import annotations

from pathlib import Path
from typing import NamedTuple

from rcontracts_core.generator.consumer import generate_consumer_types, render_consumer_types
from rcontracts_core.generator.naming import to_snake_case
from rcontracts_core.generator.negotiator import (
    build_negotiator,
    generate_runtime_negotiator,
    render_runtime_negotiator,
)
from rcontracts_core.generator.provider import (
    generate_provider_stub,
    prune_derived,
    render_provider_stub,
)
from rcontracts_core.generator.writer import write_artifact
from rcontracts_core.schemas import CompilerConfig


class GeneratedPaths(NamedTuple):
    """Output paths of the three artifacts for one contract."""

    frontend: Path
    backend: Path
    runtime: Path


def get_generated_files_for_contract(
    contract_name: str,
    config: CompilerConfig,
    cwd: Path | str,
) -> GeneratedPaths:
    """Return the artifact paths for a contract name.

    Args:
        contract_name: Contract name, e.g. "UserProfile".
        config: Compiler configuration supplying the output directories.
        cwd: Project root the output directories are relative to.

    Returns:
        GeneratedPaths with frontend, backend and runtime paths.

    Example:
        >>> paths = get_generated_files_for_contract("UserProfile", CompilerConfig(), "/app")
        >>> paths.backend
        PosixPath('/app/generated/backend/user_profile_resolver.py')
    """
    root = Path(cwd)
    stem = to_snake_case(contract_name)
    return GeneratedPaths(
        frontend=root / config.output.frontend / f"{stem}.py",
        backend=root / config.output.backend / f"{stem}_resolver.py",
        runtime=root / config.output.runtime / f"{stem}_negotiator.json",
    )


__all__: list[str] = [
    "GeneratedPaths",
    "get_generated_files_for_contract",
    # Emitters
    "generate_consumer_types",
    "generate_provider_stub",
    "generate_runtime_negotiator",
    # Renderers
    "render_consumer_types",
    "render_provider_stub",
    "render_runtime_negotiator",
    "build_negotiator",
    "prune_derived",
    # Helpers
    "to_snake_case",
    "write_artifact",
]
