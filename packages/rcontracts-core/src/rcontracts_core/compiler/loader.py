"""Contract source loading.

A ModuleLoader turns one source file into the Contract values it exports.
PythonModuleLoader executes the file as a fresh module on every call so
edits are always picked up; nothing is cached between passes.
"""

from __future__ import annotations

import importlib.util
import itertools
from pathlib import Path
from typing import Protocol

import structlog

from rcontracts_core.errors import ContractLoadError
from rcontracts_core.schemas import Contract

logger = structlog.get_logger(__name__)

_module_counter = itertools.count()


class ModuleLoader(Protocol):
    """Capability returning the contracts exported by a source file."""

    def load(self, path: Path) -> list[tuple[str, Contract]]:
        """Return (export name, contract) pairs in definition order."""
        ...


class PythonModuleLoader:
    """Execute a Python contract file and collect its public Contract attributes.

    Example:
        >>> PythonModuleLoader().load(Path("contracts/user_profile_contract.py"))
        [('UserProfileContract', Contract(name='UserProfile', ...))]
    """

    def load(self, path: Path) -> list[tuple[str, Contract]]:
        """Load contracts from a source file.

        Args:
            path: Contract source file.

        Returns:
            (export name, contract) pairs; empty if the file exports none.

        Raises:
            ContractLoadError: If the file is missing or raises while executing.
        """
        path = Path(path)
        if not path.is_file():
            raise ContractLoadError(f"Contract file not found: {path}", source_path=str(path))

        module_name = f"_rcontracts_source_{next(_module_counter)}"
        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            raise ContractLoadError(f"Cannot load contract file: {path}", source_path=str(path))

        module = importlib.util.module_from_spec(spec)
        try:
            spec.loader.exec_module(module)
        except Exception as e:
            raise ContractLoadError(
                f"Failed to load {path}: {e}",
                source_path=str(path),
                internal_details=f"{type(e).__name__}: {e}",
            ) from e

        contracts = [
            (name, value)
            for name, value in vars(module).items()
            if not name.startswith("_") and isinstance(value, Contract)
        ]
        logger.debug("contract_module_loaded", path=str(path), count=len(contracts))
        return contracts
