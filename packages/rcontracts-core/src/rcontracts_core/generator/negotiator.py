"""Runtime negotiator emitter.

The negotiator is a JSON descriptor consulted at request time to classify
observed latency, freshness and availability against the declared
budgets. Constraints and reactivity are carried verbatim under the same
camelCase names as the contract document; undeclared fields are omitted.

Example output:
    {
      "contract": "UserProfile",
      "version": "1.0.0",
      "constraints": {"latency": {"max": "100ms", "fallback": "cachedVersion"}},
      "reactivity": {"realtime": ["activity.status"]}
    }
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from rcontracts_core.generator.writer import write_artifact
from rcontracts_core.schemas import (
    Contract,
    ContractConstraints,
    ReactivityConfig,
    VersioningConfig,
)


def build_negotiator(contract: Contract) -> dict[str, Any]:
    """Return the negotiator descriptor for a contract.

    Args:
        contract: Contract whose constraints and reactivity are echoed.

    Returns:
        JSON-serializable descriptor.
    """
    descriptor: dict[str, Any] = {"contract": contract.name}

    versioning = contract.versioning
    if isinstance(versioning, VersioningConfig) and versioning.version:
        descriptor["version"] = versioning.version

    if isinstance(contract.constraints, ContractConstraints):
        descriptor["constraints"] = contract.constraints.model_dump(
            mode="json",
            by_alias=True,
            exclude_none=True,
        )

    if isinstance(contract.reactivity, ReactivityConfig):
        descriptor["reactivity"] = contract.reactivity.model_dump(
            mode="json",
            by_alias=True,
            exclude_none=True,
        )

    return descriptor


def render_runtime_negotiator(contract: Contract) -> str:
    """Render the negotiator descriptor as JSON text."""
    return json.dumps(build_negotiator(contract), indent=2, ensure_ascii=False) + "\n"


def generate_runtime_negotiator(contract: Contract, output_path: Path) -> bool:
    """Write the negotiator descriptor for a contract.

    Args:
        contract: Contract to describe.
        output_path: Destination ``.json`` file.

    Returns:
        True if the file content changed.

    Raises:
        GenerationError: If the file cannot be written.
    """
    return write_artifact(output_path, render_runtime_negotiator(contract))
