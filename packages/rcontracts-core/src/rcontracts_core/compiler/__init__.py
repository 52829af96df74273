"""Contract compilation for reactive-contracts.

This module exports the orchestrator and its collaborators:
- ContractCompiler: batch and incremental compilation
- compile_all, compile_one: functional entry points
- FileDiscovery, GlobFileDiscovery: source discovery
- ModuleLoader, PythonModuleLoader: source loading
"""

from __future__ import annotations

from rcontracts_core.compiler.compiler import (
    ContractCompiler,
    LoadedContract,
    compile_all,
    compile_one,
)
from rcontracts_core.compiler.discovery import (
    CONTRACT_FILE_SUFFIX,
    FileDiscovery,
    GlobFileDiscovery,
    glob_base,
    is_contract_file,
    matches_pattern,
)
from rcontracts_core.compiler.loader import ModuleLoader, PythonModuleLoader

__all__: list[str] = [
    # Orchestrator
    "ContractCompiler",
    "LoadedContract",
    "compile_all",
    "compile_one",
    # Discovery
    "FileDiscovery",
    "GlobFileDiscovery",
    "CONTRACT_FILE_SUFFIX",
    "glob_base",
    "is_contract_file",
    "matches_pattern",
    # Loading
    "ModuleLoader",
    "PythonModuleLoader",
]
