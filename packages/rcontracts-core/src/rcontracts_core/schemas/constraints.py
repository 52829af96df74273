"""Non-functional constraint models for reactive contracts.

Constraints declare budgets the provider must meet: latency, freshness,
and availability. Values are kept verbatim, whatever their type; the
duration and percentage grammars are checked by the contract validator
and the latency analyzer, not at construction.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import Field, field_validator

from rcontracts_core.schemas.base import SectionModel, coerce_section


class FallbackStrategy(str, Enum):
    """What the runtime serves when the latency budget is exceeded."""

    CACHED_VERSION = "cachedVersion"
    DEGRADED = "degraded"
    ERROR = "error"


FALLBACK_STRATEGIES: frozenset[str] = frozenset(strategy.value for strategy in FallbackStrategy)


class LatencyConstraint(SectionModel):
    """Maximum response latency.

    Attributes:
        max: Latency budget, e.g. "100ms", "1s".
        fallback: Strategy when the budget is missed.

    Example:
        >>> LatencyConstraint(max="100ms", fallback="cachedVersion")
    """

    max: Any = Field(default=None, description="Latency budget (ms, s, m)")
    fallback: Any = Field(
        default=None,
        description="Fallback strategy: cachedVersion, degraded or error",
    )


class FreshnessConstraint(SectionModel):
    """Staleness tolerance.

    Attributes:
        max_age: Maximum age of served data, e.g. "5m", "1h".
        stale_while_revalidate: Window during which stale data may be served.
    """

    max_age: Any = Field(default=None, description="Maximum data age (ms, s, m, h, d)")
    stale_while_revalidate: Any = Field(
        default=None,
        description="Stale-while-revalidate window (ms, s, m, h, d)",
    )


class AvailabilityConstraint(SectionModel):
    """Availability target.

    Attributes:
        uptime: Percentage string, e.g. "99.9%".
        graceful_degradation: Whether partial data may be served; must be a bool.
    """

    uptime: Any = Field(default=None, description="Uptime percentage, e.g. 99.9%")
    graceful_degradation: Any = Field(
        default=None,
        description="Serve partial data when degraded (bool)",
    )


class ContractConstraints(SectionModel):
    """All constraints declared by a contract.

    Each attribute holds its constraint model when declared as a mapping,
    or the declared value otherwise.

    Attributes:
        latency: Optional latency budget.
        freshness: Optional freshness tolerance.
        availability: Optional availability target.
    """

    latency: Any = Field(default=None, description="Latency budget")
    freshness: Any = Field(default=None, description="Freshness tolerance")
    availability: Any = Field(default=None, description="Availability target")

    @field_validator("latency", mode="before")
    @classmethod
    def build_latency(cls, value: Any) -> Any:
        """Parse a latency mapping."""
        return coerce_section(value, LatencyConstraint)

    @field_validator("freshness", mode="before")
    @classmethod
    def build_freshness(cls, value: Any) -> Any:
        """Parse a freshness mapping."""
        return coerce_section(value, FreshnessConstraint)

    @field_validator("availability", mode="before")
    @classmethod
    def build_availability(cls, value: Any) -> Any:
        """Parse an availability mapping."""
        return coerce_section(value, AvailabilityConstraint)
