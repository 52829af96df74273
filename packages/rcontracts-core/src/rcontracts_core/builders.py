"""Authoring helpers for contract source files.

Contract modules build their declarations with these functions:

    >>> from rcontracts_core import contract, derive, max_latency
    >>> UserProfileContract = contract(
    ...     name="UserProfile",
    ...     intent="Display user profile with activity summary",
    ...     shape={
    ...         "user": {"id": "string", "avatar": "Resource<optimized:200x200>"},
    ...         "activity": {
    ...             "lastActive": "date",
    ...             "status": derive(
    ...                 lambda ctx: "active",
    ...                 dependencies=["activity.lastActive"],
    ...                 preferred_layer="consumer",
    ...             ),
    ...         },
    ...     },
    ...     constraints={"latency": max_latency("100ms", fallback="cachedVersion")},
    ... )

contract() fails fast only when the declaration cannot be represented at
all. Everything else is reported by the validator.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import datetime, timedelta, timezone
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from rcontracts_core.errors import ContractDefinitionError
from rcontracts_core.schemas import (
    Contract,
    ContractConstraints,
    DerivedField,
    LatencyConstraint,
    ReactivityConfig,
    ShapeNode,
    VersioningConfig,
)


def contract(
    *,
    name: str,
    intent: str,
    shape: Mapping[str, Any] | ShapeNode,
    constraints: Mapping[str, Any] | ContractConstraints | None = None,
    reactivity: Mapping[str, Any] | ReactivityConfig | None = None,
    versioning: Mapping[str, Any] | VersioningConfig | None = None,
) -> Contract:
    """Create a Contract from a declaration.

    Args:
        name: Contract identifier, e.g. "UserProfile".
        intent: Purpose of the contract.
        shape: Field tree, as a mapping or ShapeNode.
        constraints: Optional constraints mapping or model.
        reactivity: Optional reactivity mapping or model.
        versioning: Optional versioning mapping or model.

    Returns:
        Immutable Contract.

    Raises:
        ContractDefinitionError: If name, intent or shape are malformed.
            Constraints, reactivity and versioning are kept as declared and
            checked by validate_contract().
    """
    if not name or not isinstance(name, str):
        raise ContractDefinitionError("Contract must have a valid name", field_path="name")

    if not intent or not isinstance(intent, str):
        raise ContractDefinitionError("Contract must have a valid intent", field_path="intent")

    if not isinstance(shape, (Mapping, ShapeNode)):
        raise ContractDefinitionError(
            "Contract must have a valid shape definition",
            field_path="shape",
        )

    data: dict[str, Any] = {"name": name, "intent": intent, "shape": shape}
    if constraints is not None:
        data["constraints"] = constraints
    if reactivity is not None:
        data["reactivity"] = reactivity
    if versioning is not None:
        data["versioning"] = versioning

    try:
        return Contract.model_validate(data)
    except PydanticValidationError as e:
        first = e.errors()[0]
        loc = ".".join(str(part) for part in first["loc"])
        raise ContractDefinitionError(
            f"Contract '{name}' is malformed at {loc}: {first['msg']}",
            field_path=loc,
            internal_details=str(e),
        ) from e


def derive(
    fn: Callable[[Mapping[str, Any]], Any],
    *,
    dependencies: list[str] | None = None,
    preferred_layer: str | None = None,
) -> DerivedField:
    """Create a derived field computed from other fields.

    Args:
        fn: Function of a context mapping returning the derived value.
        dependencies: Dotted paths read by fn.
        preferred_layer: "consumer", "edge" or "origin".

    Returns:
        DerivedField leaf.

    Example:
        >>> status = derive(
        ...     lambda ctx: "active" if ctx["lastActive"] > days_ago(7) else "inactive",
        ...     dependencies=["activity.lastActive"],
        ... )
    """
    return DerivedField(compute=fn, dependencies=dependencies, preferred_layer=preferred_layer)


def max_latency(value: str, *, fallback: str | None = None) -> LatencyConstraint:
    """Create a latency constraint.

    Args:
        value: Latency budget, e.g. "100ms".
        fallback: Optional strategy: cachedVersion, degraded or error.

    Returns:
        LatencyConstraint.
    """
    return LatencyConstraint(max=value, fallback=fallback)


def fallback(strategy: str) -> str:
    """Name a fallback strategy; returned unchanged for use in max_latency()."""
    return strategy


def days_ago(days: int) -> datetime:
    """Return the UTC datetime the given number of days before now."""
    return datetime.now(timezone.utc) - timedelta(days=days)
