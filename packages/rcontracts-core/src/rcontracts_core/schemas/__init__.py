"""Schema models for reactive-contracts.

This module exports the contract document models and compiler configuration:
- Contract: Root contract model
- ShapeNode and leaf models: PrimitiveField, ResourceField, DerivedField
- ContractConstraints: Latency, freshness and availability budgets
- ReactivityConfig: Per-field update cadence
- VersioningConfig: Version metadata
- CompilerConfig: rcontracts.yaml configuration
"""

from __future__ import annotations

from rcontracts_core.schemas.base import ContractModel, SectionModel
from rcontracts_core.schemas.compiler_config import (
    DEFAULT_CONTRACTS_GLOB,
    CompilerConfig,
    OptimizationConfig,
    OutputConfig,
    ValidationConfig,
)
from rcontracts_core.schemas.constraints import (
    FALLBACK_STRATEGIES,
    AvailabilityConstraint,
    ContractConstraints,
    FallbackStrategy,
    FreshnessConstraint,
    LatencyConstraint,
)
from rcontracts_core.schemas.contract import Contract
from rcontracts_core.schemas.reactivity import EventConfig, PollingConfig, ReactivityConfig
from rcontracts_core.schemas.shape import (
    COMPUTE_LAYERS,
    PRIMITIVE_TYPES,
    ComputeLayer,
    DerivedField,
    PrimitiveField,
    PrimitiveKind,
    ResourceField,
    ShapeLeaf,
    ShapeNode,
)
from rcontracts_core.schemas.versioning import SEMVER_PATTERN, VersioningConfig

__all__: list[str] = [
    # Contract
    "Contract",
    # Shape
    "ShapeNode",
    "ShapeLeaf",
    "PrimitiveField",
    "PrimitiveKind",
    "PRIMITIVE_TYPES",
    "ResourceField",
    "DerivedField",
    "ComputeLayer",
    "COMPUTE_LAYERS",
    # Constraints
    "ContractConstraints",
    "LatencyConstraint",
    "FreshnessConstraint",
    "AvailabilityConstraint",
    "FallbackStrategy",
    "FALLBACK_STRATEGIES",
    # Reactivity
    "ReactivityConfig",
    "PollingConfig",
    "EventConfig",
    # Versioning
    "VersioningConfig",
    "SEMVER_PATTERN",
    # Base models
    "ContractModel",
    "SectionModel",
    # Configuration
    "CompilerConfig",
    "OutputConfig",
    "ValidationConfig",
    "OptimizationConfig",
    "DEFAULT_CONTRACTS_GLOB",
]
