"""Compiler configuration models (rcontracts.yaml).

The configuration tells the orchestrator where contract sources live,
where the three generated artifacts go, and which validation rules are
promoted to errors.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import Field

from rcontracts_core.schemas.base import ContractModel

DEFAULT_CONTRACTS_GLOB = "contracts/**/*_contract.py"


class OutputConfig(ContractModel):
    """Output directories for generated artifacts, relative to the project root.

    Attributes:
        frontend: Directory for consumer type modules.
        backend: Directory for provider stubs.
        runtime: Directory for runtime negotiator descriptors.
    """

    frontend: str = Field(default="generated/frontend", description="Consumer types directory")
    backend: str = Field(default="generated/backend", description="Provider stubs directory")
    runtime: str = Field(default="generated/runtime", description="Negotiators directory")


class ValidationConfig(ContractModel):
    """Validation rules applied on top of the default contract checks.

    Attributes:
        strict_latency: Treat a latency analysis error as a validation failure.
        require_intent: Promote the short-intent warning to an error.
        max_complexity: Maximum number of derived fields per contract.
        strict_references: Promote unknown path warnings to errors.
        reject_empty_shape: Promote the empty-shape warning to an error.
    """

    strict_latency: bool = Field(default=False, description="Fail on latency analysis errors")
    require_intent: bool = Field(default=False, description="Fail on non-descriptive intent")
    max_complexity: int | None = Field(
        default=None,
        ge=0,
        description="Maximum derived fields per contract",
    )
    strict_references: bool = Field(default=False, description="Fail on unknown field paths")
    reject_empty_shape: bool = Field(default=False, description="Fail on empty shapes")


class OptimizationConfig(ContractModel):
    """Optimization flags. Accepted and carried, not yet acted on by the compiler.

    Attributes:
        bundle_splitting: Split generated bundles per contract.
        tree_shaking: Remove unused fields.
        precompute: Layers on which to precompute derivations.
    """

    bundle_splitting: bool = Field(default=False, description="Split bundles by contract")
    tree_shaking: bool = Field(default=False, description="Remove unused fields")
    precompute: list[str] = Field(default_factory=list, description="Precompute layers")


class CompilerConfig(ContractModel):
    """Root compiler configuration.

    Attributes:
        contracts: Glob pattern locating contract sources, relative to cwd.
        output: Output directories for generated artifacts.
        validation: Additional validation rules.
        optimization: Optimization flags.
        integrations: Free-form integration settings.

    Example:
        >>> config = CompilerConfig.model_validate(
        ...     {"contracts": "contracts/**/*_contract.py", "validation": {"strictLatency": True}}
        ... )
        >>> config.validation.strict_latency
        True
    """

    contracts: str = Field(
        default=DEFAULT_CONTRACTS_GLOB,
        min_length=1,
        description="Glob pattern for contract source files",
    )
    output: OutputConfig = Field(default_factory=OutputConfig, description="Output directories")
    validation: ValidationConfig = Field(
        default_factory=ValidationConfig,
        description="Validation rules",
    )
    optimization: OptimizationConfig = Field(
        default_factory=OptimizationConfig,
        description="Optimization flags",
    )
    integrations: dict[str, Any] = Field(
        default_factory=dict,
        description="External integrations",
    )

    @classmethod
    def from_yaml(cls, path: str | Path) -> CompilerConfig:
        """Load and validate CompilerConfig from a YAML file.

        Args:
            path: Path to rcontracts.yaml.

        Returns:
            Validated CompilerConfig instance.

        Raises:
            FileNotFoundError: If file doesn't exist.
            yaml.YAMLError: If YAML syntax is invalid.
            ValidationError: If schema validation fails.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        with path.open("r") as f:
            data: dict[str, Any] | None = yaml.safe_load(f)

        return cls.model_validate(data or {})
