"""Latency feasibility analyzer.

Classifies a contract's declared latency budget against a fixed table of
thresholds and collects advisory suggestions. The latency grammar is
checked again here, independently of the validator, so a malformed
budget is rejected even when validation is bypassed.

Thresholds (milliseconds):
    < 10       error    extremely difficult to achieve consistently
    10 - 49    warning  requires edge caching or CDN
    50 - 200   ok       achievable with optimized queries and caching
    201 - 1000 ok       conservative, easily achievable
    > 1000     warning  consider if this meets UX expectations
"""

from __future__ import annotations

from typing import NamedTuple

from rcontracts_core.durations import LATENCY_FORMAT_HINT, parse_latency_to_ms
from rcontracts_core.models import LatencyAnalysis, LatencyStatus
from rcontracts_core.schemas import (
    Contract,
    ContractConstraints,
    DerivedField,
    LatencyConstraint,
    ReactivityConfig,
    ShapeNode,
)


class LatencyBand(NamedTuple):
    """Result of classifying a parsed latency budget."""

    status: LatencyStatus
    estimated: str
    message: str


def classify_latency(latency_ms: int) -> LatencyBand:
    """Classify a latency budget.

    Args:
        latency_ms: Parsed latency budget in milliseconds.

    Returns:
        LatencyBand of (status, estimated requirement, message).

    Example:
        >>> classify_latency(50).status
        <LatencyStatus.OK: 'ok'>
    """
    if latency_ms < 10:
        return LatencyBand(
            LatencyStatus.ERROR,
            "Typically 50-100ms for database queries",
            f"Latency target {latency_ms}ms is extremely difficult to achieve consistently",
        )
    if latency_ms < 50:
        return LatencyBand(
            LatencyStatus.WARNING,
            "Requires edge caching or CDN",
            f"Latency target {latency_ms}ms requires edge caching or CDN",
        )
    if latency_ms <= 200:
        return LatencyBand(
            LatencyStatus.OK,
            "Achievable with optimized queries and caching",
            f"Latency target {latency_ms}ms is achievable with optimized queries and caching",
        )
    if latency_ms <= 1000:
        return LatencyBand(
            LatencyStatus.OK,
            "Easily achievable with a standard backend",
            f"Latency target {latency_ms}ms is conservative, easily achievable",
        )
    return LatencyBand(
        LatencyStatus.WARNING,
        "Very high tolerance",
        f"Latency target {latency_ms}ms is lenient; consider if this meets UX expectations",
    )


def has_complex_derivations(node: ShapeNode) -> bool:
    """Return True if any DerivedField appears at any depth of the shape."""
    for leaf in node.fields.values():
        if isinstance(leaf, DerivedField):
            return True
        if isinstance(leaf, ShapeNode) and has_complex_derivations(leaf):
            return True
    return False


def analyze_latency(contract: Contract) -> LatencyAnalysis:
    """Analyze the feasibility of a contract's latency budget.

    Args:
        contract: Contract to analyze.

    Returns:
        LatencyAnalysis with status, estimate, message and suggestions.

    Example:
        >>> analysis = analyze_latency(contract)
        >>> analysis.status
        <LatencyStatus.OK: 'ok'>
    """
    constraints = contract.constraints
    latency = constraints.latency if isinstance(constraints, ContractConstraints) else None

    if latency is None:
        return LatencyAnalysis(
            status=LatencyStatus.OK,
            suggestions=["Consider adding a latency constraint to ensure performance SLAs"],
        )

    if not isinstance(latency, LatencyConstraint):
        return LatencyAnalysis(
            status=LatencyStatus.ERROR,
            message="Latency constraint must be an object",
            suggestions=['Declare latency with max_latency(), e.g. max_latency("100ms")'],
        )

    latency_ms = parse_latency_to_ms(latency.max)
    if latency_ms is None:
        return LatencyAnalysis(
            status=LatencyStatus.ERROR,
            message=f'Invalid latency format: "{latency.max}". {LATENCY_FORMAT_HINT}',
            suggestions=[LATENCY_FORMAT_HINT],
        )

    status, estimated, message = classify_latency(latency_ms)
    suggestions: list[str] = []

    if not latency.fallback:
        suggestions.append(
            "Consider specifying a fallback strategy (cachedVersion, degraded, or error)"
        )

    if latency_ms < 50:
        suggestions.append(
            "Very aggressive latency target (<50ms). Consider edge caching or CDN for static data."
        )
    elif latency_ms < 100:
        suggestions.append(
            "Moderate latency target (<100ms). Ensure database queries are optimized and indexed."
        )
    elif latency_ms > 1000:
        suggestions.append(
            "High latency tolerance (>1s). Consider if this provides good user experience."
        )

    if has_complex_derivations(contract.shape):
        suggestions.append(
            "Contract contains derived fields. "
            "Consider computing these at edge or origin for better performance."
        )

    if isinstance(contract.reactivity, ReactivityConfig) and contract.reactivity.realtime:
        suggestions.append(
            "Realtime fields require a push transport (e.g. WebSocket). "
            "Ensure your infrastructure supports this."
        )

    return LatencyAnalysis(
        status=status,
        estimated=estimated,
        message=message,
        suggestions=suggestions,
    )
