"""Contract root model.

A Contract is the declarative document naming the data a consumer needs
(its shape) together with constraints, reactivity rules, and versioning.
It is immutable once constructed and is parsed fresh on every compilation
pass.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import Field, field_validator

from rcontracts_core.schemas.base import ContractModel, coerce_section
from rcontracts_core.schemas.constraints import ContractConstraints
from rcontracts_core.schemas.reactivity import ReactivityConfig
from rcontracts_core.schemas.shape import ShapeNode
from rcontracts_core.schemas.versioning import VersioningConfig


class Contract(ContractModel):
    """Declarative data contract between a consumer and a provider.

    Attributes:
        name: Contract identifier, conventionally PascalCase ("UserProfile").
        intent: Human-readable purpose of the contract.
        shape: Field tree describing the requested data.
        constraints: Optional ContractConstraints (latency, freshness and
            availability budgets).
        reactivity: Optional ReactivityConfig (per-field update cadence).
        versioning: Optional VersioningConfig (version and migration hook).

    Sections declared as mappings are parsed into their models; any other
    value is kept so the validator can report it.

    Example:
        >>> contract = Contract(
        ...     name="UserProfile",
        ...     intent="Display user profile with activity summary",
        ...     shape={"user": {"id": "string", "name": "string"}},
        ... )
        >>> contract.shape.field_paths()
        ['user', 'user.id', 'user.name']
    """

    name: str = Field(..., description="Contract identifier")
    intent: str = Field(..., description="Purpose of the contract")
    shape: ShapeNode = Field(..., description="Requested data shape")
    constraints: Any = Field(default=None, description="Non-functional constraints")
    reactivity: Any = Field(default=None, description="Update cadence")
    versioning: Any = Field(default=None, description="Version metadata")

    @field_validator("shape", mode="before")
    @classmethod
    def build_shape(cls, value: Any) -> Any:
        """Convert a declarative mapping into a ShapeNode.

        Args:
            value: ShapeNode or plain mapping.

        Returns:
            ShapeNode built from the mapping, or the value unchanged.
        """
        if isinstance(value, Mapping):
            return ShapeNode.from_mapping(value)
        return value

    @field_validator("constraints", mode="before")
    @classmethod
    def build_constraints(cls, value: Any) -> Any:
        """Parse a constraints mapping; other values are left to the validator."""
        return coerce_section(value, ContractConstraints)

    @field_validator("reactivity", mode="before")
    @classmethod
    def build_reactivity(cls, value: Any) -> Any:
        """Parse a reactivity mapping; other values are left to the validator."""
        return coerce_section(value, ReactivityConfig)

    @field_validator("versioning", mode="before")
    @classmethod
    def build_versioning(cls, value: Any) -> Any:
        """Parse a versioning mapping; other values are left to the validator."""
        return coerce_section(value, VersioningConfig)

    def derived_paths(self) -> list[str]:
        """Return the dotted paths of every derived field."""
        return [path for path, _ in self.shape.derived_fields()]
