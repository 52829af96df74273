"""Contract validator.

Walks a Contract and classifies every defect as an error (blocks
generation) or a warning (advisory). Validation is pure and never stops
at the first problem: every check runs and accumulates into the same two
lists so a single pass reports everything wrong with the contract.

Checks, in order:
1. Name: non-empty identifier; PascalCase is advisory.
2. Intent: non-empty; at least 10 characters is advisory.
3. Shape: recursive leaf checks; empty nodes and non-camelCase names are advisory.
4. Constraints: section types, duration and percentage grammars, fallback enum.
5. Reactivity: entry types; every referenced path must exist in the shape (advisory).
6. Versioning: semver is advisory; deprecated must be a list; migration must be callable.
7. Complexity: number of derived fields against maxComplexity.

Sections are kept as declared by the builder, so wrong types and unknown
keys are reported here as errors.

Example:
    >>> result = validate_contract(contract)
    >>> if not result.valid:
    ...     for error in result.errors:
    ...         print(error)
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any

from rcontracts_core.durations import (
    DURATION_FORMAT_HINT,
    LATENCY_FORMAT_HINT,
    PERCENTAGE_FORMAT_HINT,
    is_duration,
    is_latency,
    is_percentage,
)
from rcontracts_core.models import ValidationResult
from rcontracts_core.schemas import (
    COMPUTE_LAYERS,
    FALLBACK_STRATEGIES,
    PRIMITIVE_TYPES,
    SEMVER_PATTERN,
    AvailabilityConstraint,
    Contract,
    ContractConstraints,
    DerivedField,
    EventConfig,
    FreshnessConstraint,
    LatencyConstraint,
    PollingConfig,
    PrimitiveField,
    ReactivityConfig,
    ResourceField,
    SectionModel,
    ShapeNode,
    ValidationConfig,
    VersioningConfig,
)

PASCAL_CASE_PATTERN = re.compile(r"^[A-Z][a-zA-Z0-9]*$")
CAMEL_CASE_PATTERN = re.compile(r"^[a-z][a-zA-Z0-9]*$")
MIN_INTENT_LENGTH = 10

_MODE_LABELS = {
    "realtime": "Realtime",
    "static": "Static",
    "polling": "Polling",
    "eventDriven": "EventDriven",
}


class _Findings:
    """Accumulates errors and warnings, applying promotion rules."""

    def __init__(self, options: ValidationConfig) -> None:
        self.options = options
        self.errors: list[str] = []
        self.warnings: list[str] = []

    def error(self, message: str) -> None:
        self.errors.append(message)

    def warning(self, message: str) -> None:
        self.warnings.append(message)

    def advisory(self, message: str, *, promote: bool) -> None:
        if promote:
            self.errors.append(message)
        else:
            self.warnings.append(message)

    def reference(self, message: str) -> None:
        self.advisory(message, promote=self.options.strict_references)

    def result(self) -> ValidationResult:
        return ValidationResult(errors=self.errors, warnings=self.warnings)


def validate_contract(
    contract: Contract,
    options: ValidationConfig | None = None,
) -> ValidationResult:
    """Validate a contract's structure and semantics.

    Args:
        contract: Contract to validate.
        options: Validation rules from the compiler configuration. Defaults
            leave every advisory check as a warning.

    Returns:
        ValidationResult whose valid flag is True iff no errors were found.
    """
    findings = _Findings(options or ValidationConfig())

    _validate_name(contract.name, findings)
    _validate_intent(contract.intent, findings)

    paths = set(contract.shape.field_paths())
    _validate_shape(contract.shape, "", paths, findings)

    if contract.constraints is not None and _is_section(
        contract.constraints, ContractConstraints, "Contract constraints", "constraints", findings
    ):
        _validate_constraints(contract.constraints, findings)
    if contract.reactivity is not None and _is_section(
        contract.reactivity, ReactivityConfig, "Contract reactivity", "reactivity", findings
    ):
        _validate_reactivity(contract.reactivity, paths, findings)
    if contract.versioning is not None and _is_section(
        contract.versioning, VersioningConfig, "Contract versioning", "versioning", findings
    ):
        _validate_versioning(contract.versioning, paths, findings)

    _validate_complexity(contract, findings)

    return findings.result()


def _validate_name(name: Any, findings: _Findings) -> None:
    if not name or not isinstance(name, str):
        findings.error("Contract must have a valid name (non-empty string)")
    elif not name.isidentifier():
        findings.error(f'Contract name "{name}" must be a valid identifier')
    elif not PASCAL_CASE_PATTERN.fullmatch(name):
        findings.warning(
            "Contract name should be in PascalCase "
            "(e.g., UserProfile, not userProfile or user_profile)"
        )


def _validate_intent(intent: Any, findings: _Findings) -> None:
    if not intent or not isinstance(intent, str):
        findings.error("Contract must have a valid intent (non-empty string)")
    elif len(intent) < MIN_INTENT_LENGTH:
        findings.advisory(
            f"Intent should be descriptive (at least {MIN_INTENT_LENGTH} characters)",
            promote=findings.options.require_intent,
        )


def _validate_shape(node: ShapeNode, path: str, paths: set[str], findings: _Findings) -> None:
    if node.is_empty():
        findings.advisory(
            f"Shape at {path or 'root'} is empty",
            promote=findings.options.reject_empty_shape,
        )

    for key, leaf in node.fields.items():
        field_path = f"{path}.{key}" if path else key

        if not CAMEL_CASE_PATTERN.fullmatch(key):
            findings.warning(
                f'Field name "{field_path}" should be in camelCase '
                "(e.g., firstName, not first_name)"
            )

        if isinstance(leaf, ShapeNode):
            _validate_shape(leaf, field_path, paths, findings)
        elif isinstance(leaf, PrimitiveField):
            if leaf.type_name not in PRIMITIVE_TYPES:
                findings.error(
                    f'Invalid type at {field_path}: "{leaf.type_name}" '
                    "is not a valid primitive or Resource type"
                )
        elif isinstance(leaf, ResourceField):
            if not leaf.is_well_formed:
                findings.error(
                    f'Invalid Resource type at {field_path}: must be "Resource" or '
                    '"Resource<options>"'
                )
        elif isinstance(leaf, DerivedField):
            _validate_derived_field(leaf, field_path, paths, findings)


def _validate_derived_field(
    field: DerivedField,
    path: str,
    paths: set[str],
    findings: _Findings,
) -> None:
    if not callable(field.compute):
        findings.error(f"Derived field at {path} must have a compute function")

    if field.dependencies is not None:
        if not isinstance(field.dependencies, (list, tuple)):
            findings.error(f"Derived field dependencies at {path} must be an array")
        else:
            for dependency in field.dependencies:
                if not isinstance(dependency, str):
                    findings.error(f"Derived field dependency at {path} must be a string")
                elif dependency == path:
                    findings.error(f"Derived field at {path} cannot depend on itself")
                elif path.startswith(f"{dependency}."):
                    findings.error(
                        f"Derived field at {path} cannot depend on its enclosing "
                        f'node "{dependency}"'
                    )
                elif dependency not in paths:
                    findings.error(
                        f'Derived field dependency "{dependency}" at {path} '
                        "does not exist in shape"
                    )

    layer = _enum_value(field.preferred_layer)
    if layer is not None and (not isinstance(layer, str) or layer not in COMPUTE_LAYERS):
        findings.error(
            f"Derived field preferredLayer at {path} must be 'consumer', 'edge', or 'origin'"
        )


def _is_section(
    value: Any,
    model: type[SectionModel],
    label: str,
    location: str,
    findings: _Findings,
) -> bool:
    if not isinstance(value, model):
        findings.error(f"{label} must be an object")
        return False
    for key in value.unknown_keys():
        findings.error(f'Unknown key "{key}" in {location}')
    return True


def _validate_constraints(constraints: ContractConstraints, findings: _Findings) -> None:
    latency = constraints.latency
    if latency is not None and _is_section(
        latency, LatencyConstraint, "Latency constraint", "constraints.latency", findings
    ):
        if not latency.max or not isinstance(latency.max, str):
            findings.error('Latency constraint must have a max value (e.g., "100ms")')
        elif not is_latency(latency.max):
            findings.error(f'Invalid latency max format: "{latency.max}". {LATENCY_FORMAT_HINT}')

        strategy = _enum_value(latency.fallback)
        if strategy is None:
            findings.warning(
                "Latency constraint is missing fallback strategy "
                "(cachedVersion, degraded, or error)"
            )
        elif not isinstance(strategy, str) or strategy not in FALLBACK_STRATEGIES:
            findings.error('Latency fallback must be "cachedVersion", "degraded", or "error"')

    freshness = constraints.freshness
    if freshness is not None and _is_section(
        freshness, FreshnessConstraint, "Freshness constraint", "constraints.freshness", findings
    ):
        if not freshness.max_age or not isinstance(freshness.max_age, str):
            findings.error("Freshness constraint must have a maxAge value")
        elif not is_duration(freshness.max_age):
            findings.error(
                f'Invalid freshness maxAge format: "{freshness.max_age}". {DURATION_FORMAT_HINT}'
            )

        swr = freshness.stale_while_revalidate
        if swr is not None and not is_duration(swr):
            findings.error(f'Invalid staleWhileRevalidate format: "{swr}". {DURATION_FORMAT_HINT}')

    availability = constraints.availability
    if availability is not None and _is_section(
        availability,
        AvailabilityConstraint,
        "Availability constraint",
        "constraints.availability",
        findings,
    ):
        if not availability.uptime or not isinstance(availability.uptime, str):
            findings.error("Availability constraint must have an uptime value")
        elif not is_percentage(availability.uptime):
            findings.error(
                f'Invalid uptime format: "{availability.uptime}". {PERCENTAGE_FORMAT_HINT}'
            )

        degradation = availability.graceful_degradation
        if degradation is not None and not isinstance(degradation, bool):
            findings.error("Availability gracefulDegradation must be a boolean")


def _validate_reactivity(
    reactivity: ReactivityConfig,
    paths: set[str],
    findings: _Findings,
) -> None:
    for mode in ("realtime", "static"):
        declared = getattr(reactivity, mode)
        if declared is None:
            continue
        label = _MODE_LABELS[mode]
        if not isinstance(declared, list):
            findings.error(f"Reactivity {mode} must be an array of field paths")
            continue
        for path in declared:
            if not isinstance(path, str):
                findings.error(f"{label} field must be a string")
            elif path not in paths:
                findings.reference(f'{label} field "{path}" does not exist in shape')

    if reactivity.polling is not None:
        if not isinstance(reactivity.polling, list):
            findings.error("Reactivity polling must be an array")
        else:
            for index, polling in enumerate(reactivity.polling):
                location = f"reactivity.polling[{index}]"
                if _is_section(polling, PollingConfig, "Polling config", location, findings):
                    _validate_polling(polling, paths, findings)

    if reactivity.event_driven is not None:
        if not isinstance(reactivity.event_driven, list):
            findings.error("Reactivity eventDriven must be an array")
        else:
            for index, event in enumerate(reactivity.event_driven):
                location = f"reactivity.eventDriven[{index}]"
                if _is_section(event, EventConfig, "EventDriven config", location, findings):
                    _validate_event(event, paths, findings)


def _validate_polling(polling: PollingConfig, paths: set[str], findings: _Findings) -> None:
    if not polling.field or not isinstance(polling.field, str):
        findings.error("Polling config must have a field property")
    elif polling.field not in paths:
        findings.reference(f'Polling field "{polling.field}" does not exist in shape')

    if not polling.interval or not isinstance(polling.interval, str):
        findings.error("Polling config must have an interval property")
    elif not is_latency(polling.interval):
        findings.error(
            f'Invalid polling interval format: "{polling.interval}". '
            'Use format like "30s" or "5m"'
        )


def _validate_event(event: EventConfig, paths: set[str], findings: _Findings) -> None:
    if not event.field or not isinstance(event.field, str):
        findings.error("EventDriven config must have a field property")
    elif event.field not in paths:
        findings.reference(f'EventDriven field "{event.field}" does not exist in shape')

    if not isinstance(event.on, (list, tuple)):
        findings.error('EventDriven config must have an "on" array of event names')
    elif not event.on:
        findings.warning(f'EventDriven config for "{event.field}" has no events')
    elif not all(isinstance(name, str) for name in event.on):
        findings.error(f'EventDriven event names for "{event.field}" must be strings')


def _validate_versioning(
    versioning: VersioningConfig,
    paths: set[str],
    findings: _Findings,
) -> None:
    if not versioning.version or not isinstance(versioning.version, str):
        findings.error("Versioning must have a version string")
    elif not SEMVER_PATTERN.fullmatch(versioning.version):
        findings.warning(
            f'Version "{versioning.version}" should follow semver format (e.g., "1.0.0")'
        )

    deprecated = versioning.deprecated
    if deprecated is not None:
        if not isinstance(deprecated, (list, tuple)):
            findings.error("Versioning deprecated must be an array of field paths")
        else:
            for path in deprecated:
                if not isinstance(path, str):
                    findings.error("Deprecated field must be a string")
                elif path not in paths:
                    findings.reference(f'Deprecated field "{path}" does not exist in shape')

    if versioning.migration is not None and not callable(versioning.migration):
        findings.error("Versioning migration must be a function")


def _validate_complexity(contract: Contract, findings: _Findings) -> None:
    limit = findings.options.max_complexity
    if limit is None:
        return

    count = len(contract.shape.derived_fields())
    if count > limit:
        findings.error(
            f"Contract has {count} derived fields, exceeding maxComplexity of {limit}"
        )


def _enum_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value
