"""rcontracts-core: Contract model and compiler for reactive-contracts.

This package provides:
- contract(), derive(), max_latency(): Authoring helpers for contract files
- Contract and schema models: Immutable contract documents
- validate_contract, analyze_latency: Validation and latency feasibility
- ContractCompiler, compile_all, compile_one: Artifact generation
- load_config: rcontracts.yaml loading
"""

from __future__ import annotations

__version__ = "0.1.0"

# Analysis
from rcontracts_core.analyzer import analyze_latency, classify_latency, has_complex_derivations

# Authoring helpers
from rcontracts_core.builders import contract, days_ago, derive, fallback, max_latency

# Compiler
from rcontracts_core.compiler import (
    ContractCompiler,
    FileDiscovery,
    GlobFileDiscovery,
    ModuleLoader,
    PythonModuleLoader,
    compile_all,
    compile_one,
    is_contract_file,
)

# Configuration
from rcontracts_core.config import load_config

# Error types
from rcontracts_core.errors import (
    ConfigurationError,
    ContractDefinitionError,
    ContractLoadError,
    ContractsError,
    DiscoveryError,
    GenerationError,
)

# Code generation
from rcontracts_core.generator import (
    generate_consumer_types,
    generate_provider_stub,
    generate_runtime_negotiator,
    get_generated_files_for_contract,
)

# Logging
from rcontracts_core.observability import configure_logging

# Result models
from rcontracts_core.models import (
    CompilationResult,
    CompileResult,
    GeneratedArtifacts,
    LatencyAnalysis,
    LatencyStatus,
    ValidationResult,
)

# Schema models
from rcontracts_core.schemas import (
    CompilerConfig,
    Contract,
    ContractConstraints,
    DerivedField,
    ReactivityConfig,
    ShapeNode,
    ValidationConfig,
    VersioningConfig,
)

# Validation
from rcontracts_core.validator import validate_contract

__all__ = [
    "__version__",
    # Authoring
    "contract",
    "derive",
    "max_latency",
    "fallback",
    "days_ago",
    # Schemas
    "Contract",
    "ShapeNode",
    "DerivedField",
    "ContractConstraints",
    "ReactivityConfig",
    "VersioningConfig",
    "CompilerConfig",
    "ValidationConfig",
    # Validation and analysis
    "validate_contract",
    "analyze_latency",
    "classify_latency",
    "has_complex_derivations",
    # Generation
    "generate_consumer_types",
    "generate_provider_stub",
    "generate_runtime_negotiator",
    "get_generated_files_for_contract",
    # Compiler
    "ContractCompiler",
    "compile_all",
    "compile_one",
    "is_contract_file",
    "FileDiscovery",
    "GlobFileDiscovery",
    "ModuleLoader",
    "PythonModuleLoader",
    # Configuration
    "load_config",
    "configure_logging",
    # Results
    "ValidationResult",
    "LatencyAnalysis",
    "LatencyStatus",
    "GeneratedArtifacts",
    "CompilationResult",
    "CompileResult",
    # Errors
    "ContractsError",
    "ContractDefinitionError",
    "ConfigurationError",
    "ContractLoadError",
    "DiscoveryError",
    "GenerationError",
]
