"""Unit tests for the contract validator."""

from __future__ import annotations

from typing import Any

import pytest

from rcontracts_core import Contract, ValidationConfig, contract, derive, validate_contract


def _build(**overrides: Any) -> Contract:
    data: dict[str, Any] = {
        "name": "OrderSummary",
        "intent": "Show the order summary page",
        "shape": {"order": {"id": "string", "total": "number"}},
    }
    data.update(overrides)
    return contract(**data)


class TestValidContracts:
    """Tests for contracts without findings."""

    def test_user_profile_is_valid(self, user_profile_contract: Contract) -> None:
        """The sample UserProfile contract should validate cleanly."""
        result = validate_contract(user_profile_contract)
        assert result.valid
        assert result.errors == []
        assert result.warnings == []

    def test_validation_is_deterministic(self, user_profile_contract: Contract) -> None:
        """Validating twice should give equal results."""
        assert validate_contract(user_profile_contract) == validate_contract(
            user_profile_contract
        )

    def test_all_primitives_accepted(self) -> None:
        """Every primitive type name should validate."""
        shape = {
            "a": "string",
            "b": "number",
            "c": "boolean",
            "d": "date",
            "e": "null",
            "f": "undefined",
        }
        assert validate_contract(_build(shape=shape)).valid


class TestNameAndIntent:
    """Tests for name and intent checks."""

    def test_empty_name_is_error(self) -> None:
        """A contract built directly with an empty name should fail."""
        model = Contract(name="", intent="Show the order summary", shape={"id": "string"})
        result = validate_contract(model)
        assert not result.valid
        assert "Contract must have a valid name (non-empty string)" in result.errors

    def test_non_identifier_name_is_error(self) -> None:
        """Names that are not identifiers cannot name generated code."""
        result = validate_contract(_build(name="Order Summary"))
        assert not result.valid
        assert any("valid identifier" in e for e in result.errors)

    def test_non_pascal_case_name_is_warning(self) -> None:
        """Non-PascalCase names should only warn."""
        result = validate_contract(_build(name="orderSummary"))
        assert result.valid
        assert any("PascalCase" in w for w in result.warnings)

    def test_short_intent_is_warning(self) -> None:
        """Intents under 10 characters should warn."""
        result = validate_contract(_build(intent="Orders"))
        assert result.valid
        assert "Intent should be descriptive (at least 10 characters)" in result.warnings

    def test_require_intent_promotes_short_intent(self) -> None:
        """requireIntent should turn the short-intent warning into an error."""
        result = validate_contract(
            _build(intent="Orders"),
            ValidationConfig(require_intent=True),
        )
        assert not result.valid
        assert "Intent should be descriptive (at least 10 characters)" in result.errors


class TestShape:
    """Tests for recursive shape checks."""

    def test_invalid_primitive_is_error(self) -> None:
        """Unknown type names should be errors naming the path."""
        result = validate_contract(_build(shape={"order": {"id": "uuid"}}))
        assert not result.valid
        assert (
            'Invalid type at order.id: "uuid" is not a valid primitive or Resource type'
            in result.errors
        )

    def test_capitalized_date_is_error(self) -> None:
        """Primitive names are case sensitive."""
        result = validate_contract(_build(shape={"createdAt": "Date"}))
        assert not result.valid

    @pytest.mark.parametrize("type_spec", ["Resource<", "Resource<>", "Resources", "Resource<a>b"])
    def test_malformed_resource_is_error(self, type_spec: str) -> None:
        """Resource types must follow the Resource or Resource<options> grammar."""
        result = validate_contract(_build(shape={"image": type_spec}))
        assert not result.valid
        assert any("Invalid Resource type at image" in e for e in result.errors)

    @pytest.mark.parametrize("type_spec", ["Resource", "Resource<optimized:200x200>"])
    def test_well_formed_resource(self, type_spec: str) -> None:
        """Well-formed resource types should validate."""
        assert validate_contract(_build(shape={"image": type_spec})).valid

    def test_empty_shape_is_warning(self) -> None:
        """An empty root shape should only warn by default."""
        result = validate_contract(_build(shape={}))
        assert result.valid
        assert "Shape at root is empty" in result.warnings

    def test_empty_nested_shape_names_path(self) -> None:
        """An empty nested node should warn with its path."""
        result = validate_contract(_build(shape={"id": "string", "meta": {}}))
        assert "Shape at meta is empty" in result.warnings

    def test_reject_empty_shape_promotes(self) -> None:
        """rejectEmptyShape should turn empty shapes into errors."""
        result = validate_contract(_build(shape={}), ValidationConfig(reject_empty_shape=True))
        assert "Shape at root is empty" in result.errors

    def test_snake_case_field_is_warning(self) -> None:
        """Non-camelCase field names should warn."""
        result = validate_contract(_build(shape={"first_name": "string"}))
        assert result.valid
        assert any('"first_name" should be in camelCase' in w for w in result.warnings)

    def test_all_errors_are_collected(self) -> None:
        """Validation should report every problem, not stop at the first."""
        result = validate_contract(
            _build(shape={"a": "uuid", "b": "Resource<", "c": {"d": "int"}})
        )
        assert len(result.errors) == 3


class TestDerivedFields:
    """Tests for derived field checks."""

    def test_missing_dependency_is_error(self) -> None:
        """Dependencies must resolve to an existing path."""
        shape = {"total": derive(lambda ctx: 0, dependencies=["order.missing"])}
        result = validate_contract(_build(shape=shape))
        assert not result.valid
        assert (
            'Derived field dependency "order.missing" at total does not exist in shape'
            in result.errors
        )

    def test_self_dependency_is_error(self) -> None:
        """A derived field cannot depend on itself."""
        shape = {"a": "number", "total": derive(lambda ctx: 0, dependencies=["total"])}
        result = validate_contract(_build(shape=shape))
        assert "Derived field at total cannot depend on itself" in result.errors

    def test_enclosing_node_dependency_is_error(self) -> None:
        """A derived field cannot depend on a node that contains it."""
        shape = {
            "activity": {
                "lastSeen": "date",
                "status": derive(lambda ctx: "online", dependencies=["activity"]),
            }
        }
        result = validate_contract(_build(shape=shape))
        assert not result.valid
        assert (
            'Derived field at activity.status cannot depend on its enclosing node "activity"'
            in result.errors
        )

    def test_sibling_prefix_dependency_is_accepted(self) -> None:
        """A sibling whose name shares a prefix is not an enclosing node."""
        shape = {
            "order": "number",
            "orderTotal": {"value": derive(lambda ctx: 0, dependencies=["order"])},
        }
        assert validate_contract(_build(shape=shape)).valid

    def test_non_callable_compute_is_error(self) -> None:
        """A derived field needs a compute function."""
        shape = {"total": derive("not callable")}  # type: ignore[arg-type]
        result = validate_contract(_build(shape=shape))
        assert "Derived field at total must have a compute function" in result.errors

    def test_non_list_dependencies_is_error(self) -> None:
        """Dependencies must be an array."""
        shape = {"a": "number", "total": derive(lambda ctx: 0, dependencies="a")}  # type: ignore[arg-type]
        result = validate_contract(_build(shape=shape))
        assert "Derived field dependencies at total must be an array" in result.errors

    def test_non_string_dependency_is_error(self) -> None:
        """Each dependency must be a string path."""
        shape = {"total": derive(lambda ctx: 0, dependencies=[1])}  # type: ignore[list-item]
        result = validate_contract(_build(shape=shape))
        assert "Derived field dependency at total must be a string" in result.errors

    def test_invalid_layer_is_error(self) -> None:
        """preferredLayer must be consumer, edge or origin."""
        shape = {"a": "number", "total": derive(lambda ctx: 0, preferred_layer="client")}
        result = validate_contract(_build(shape=shape))
        assert any("preferredLayer at total" in e for e in result.errors)

    @pytest.mark.parametrize("layer", ["consumer", "edge", "origin", None])
    def test_valid_layers(self, layer: str | None) -> None:
        """Every compute layer, or none, should validate."""
        shape = {"a": "number", "total": derive(lambda ctx: 0, preferred_layer=layer)}
        assert validate_contract(_build(shape=shape)).valid

    def test_max_complexity_exceeded(self) -> None:
        """More derived fields than maxComplexity should be an error."""
        shape = {
            "a": "number",
            "b": derive(lambda ctx: 1, dependencies=["a"]),
            "c": derive(lambda ctx: 2, dependencies=["a"]),
        }
        result = validate_contract(_build(shape=shape), ValidationConfig(max_complexity=1))
        assert "Contract has 2 derived fields, exceeding maxComplexity of 1" in result.errors

    def test_max_complexity_at_limit(self) -> None:
        """Exactly maxComplexity derived fields should be accepted."""
        shape = {"a": "number", "b": derive(lambda ctx: 1, dependencies=["a"])}
        result = validate_contract(_build(shape=shape), ValidationConfig(max_complexity=1))
        assert result.valid


class TestConstraints:
    """Tests for constraint checks."""

    def test_missing_fallback_is_warning(self) -> None:
        """A latency budget without fallback should warn."""
        result = validate_contract(_build(constraints={"latency": {"max": "100ms"}}))
        assert result.valid
        assert any("missing fallback" in w for w in result.warnings)

    def test_invalid_latency_format_is_error(self) -> None:
        """Latency max must follow the latency grammar."""
        result = validate_contract(
            _build(constraints={"latency": {"max": "1h", "fallback": "degraded"}})
        )
        assert any('Invalid latency max format: "1h"' in e for e in result.errors)

    def test_missing_latency_max_is_error(self) -> None:
        """A latency constraint needs a max value."""
        result = validate_contract(_build(constraints={"latency": {"fallback": "error"}}))
        assert any("must have a max value" in e for e in result.errors)

    def test_invalid_fallback_is_error(self) -> None:
        """Unknown fallback strategies are errors."""
        result = validate_contract(
            _build(constraints={"latency": {"max": "100ms", "fallback": "retry"}})
        )
        assert not result.valid

    def test_freshness_formats(self) -> None:
        """Freshness durations accept hours and days."""
        result = validate_contract(
            _build(constraints={"freshness": {"maxAge": "1d", "staleWhileRevalidate": "1h"}})
        )
        assert result.valid

    def test_invalid_freshness_is_error(self) -> None:
        """A malformed maxAge or staleWhileRevalidate is an error."""
        result = validate_contract(
            _build(constraints={"freshness": {"maxAge": "soon", "staleWhileRevalidate": "1w"}})
        )
        assert len(result.errors) == 2

    def test_missing_freshness_max_age_is_error(self) -> None:
        """A freshness constraint needs maxAge."""
        result = validate_contract(_build(constraints={"freshness": {}}))
        assert "Freshness constraint must have a maxAge value" in result.errors

    def test_availability(self) -> None:
        """Uptime must be a percentage; gracefulDegradation a boolean."""
        ok = validate_contract(
            _build(constraints={"availability": {"uptime": "99.9%", "gracefulDegradation": True}})
        )
        assert ok.valid

        bad = validate_contract(
            _build(constraints={"availability": {"uptime": "99.9", "gracefulDegradation": "yes"}})
        )
        assert len(bad.errors) == 2


class TestReactivity:
    """Tests for reactivity checks."""

    def test_unknown_path_is_single_warning(self) -> None:
        """An unknown reactivity path should produce exactly one warning."""
        result = validate_contract(_build(reactivity={"realtime": ["order.missing"]}))
        assert result.valid
        assert result.warnings == ['Realtime field "order.missing" does not exist in shape']

    def test_strict_references_promotes(self) -> None:
        """strictReferences should turn unknown paths into errors."""
        result = validate_contract(
            _build(reactivity={"static": ["order.missing"]}),
            ValidationConfig(strict_references=True),
        )
        assert result.errors == ['Static field "order.missing" does not exist in shape']

    def test_nested_node_path_is_known(self) -> None:
        """Paths of nested nodes themselves are valid references."""
        result = validate_contract(_build(reactivity={"static": ["order"]}))
        assert result.warnings == []

    def test_polling_checks(self) -> None:
        """Polling entries need a field and an interval in latency grammar."""
        result = validate_contract(
            _build(
                reactivity={
                    "polling": [
                        {"field": "order.total", "interval": "30s"},
                        {"field": "order.id"},
                        {"field": "order.id", "interval": "1h"},
                    ]
                }
            )
        )
        assert "Polling config must have an interval property" in result.errors
        assert any('Invalid polling interval format: "1h"' in e for e in result.errors)
        assert len(result.errors) == 2

    def test_polling_unknown_field_warns(self) -> None:
        """A polled path that does not exist should warn."""
        result = validate_contract(
            _build(reactivity={"polling": [{"field": "nope", "interval": "5s"}]})
        )
        assert result.warnings == ['Polling field "nope" does not exist in shape']

    def test_event_driven_checks(self) -> None:
        """Event-driven entries need an on list; an empty one warns."""
        result = validate_contract(
            _build(
                reactivity={
                    "eventDriven": [
                        {"field": "order.id", "on": []},
                        {"field": "order.total"},
                    ]
                }
            )
        )
        assert 'EventDriven config for "order.id" has no events' in result.warnings
        assert 'EventDriven config must have an "on" array of event names' in result.errors


class TestVersioning:
    """Tests for versioning checks."""

    def test_semver_version_is_valid(self) -> None:
        """A semver version with a callable migration should validate."""
        result = validate_contract(
            _build(versioning={"version": "1.2.0", "migration": lambda data: data})
        )
        assert result.valid
        assert result.warnings == []

    def test_non_semver_is_warning(self) -> None:
        """A non-semver version should warn."""
        result = validate_contract(_build(versioning={"version": "v2"}))
        assert result.valid
        assert any('Version "v2"' in w for w in result.warnings)

    def test_missing_version_is_error(self) -> None:
        """Versioning without a version is an error."""
        result = validate_contract(_build(versioning={"deprecated": []}))
        assert "Versioning must have a version string" in result.errors

    def test_unknown_deprecated_path_warns(self) -> None:
        """Deprecated paths that do not exist should warn."""
        result = validate_contract(
            _build(versioning={"version": "1.0.0", "deprecated": ["order.legacy"]})
        )
        assert result.warnings == ['Deprecated field "order.legacy" does not exist in shape']

    def test_non_callable_migration_is_error(self) -> None:
        """migration must be a function."""
        result = validate_contract(_build(versioning={"version": "1.0.0", "migration": "v1"}))
        assert "Versioning migration must be a function" in result.errors


class TestSectionTypes:
    """Tests for sections declared with the wrong types or unknown keys."""

    def test_shape_and_reactivity_errors_reported_together(self) -> None:
        """A bad leaf and a mistyped reactivity mode are reported in one pass."""
        result = validate_contract(
            _build(shape={"items": "uuid"}, reactivity={"realtime": "items"})
        )
        assert not result.valid
        assert any(e.startswith('Invalid type at items: "uuid"') for e in result.errors)
        assert "Reactivity realtime must be an array of field paths" in result.errors

    def test_numeric_latency_max_is_error(self) -> None:
        """A latency max that is not a string is reported, not raised."""
        result = validate_contract(_build(constraints={"latency": {"max": 100}}))
        assert result.errors == ['Latency constraint must have a max value (e.g., "100ms")']

    def test_unknown_constraint_key_is_error(self) -> None:
        """A misspelled key inside a constraint is an error."""
        result = validate_contract(
            _build(constraints={"latency": {"max": "100ms", "fallbak": "error"}})
        )
        assert 'Unknown key "fallbak" in constraints.latency' in result.errors
        assert any("missing fallback" in w for w in result.warnings)

    def test_unknown_section_key_is_error(self) -> None:
        """Unknown keys at the top of a section are errors too."""
        result = validate_contract(_build(reactivity={"realtime": [], "live": ["order.id"]}))
        assert result.errors == ['Unknown key "live" in reactivity']

    @pytest.mark.parametrize(
        ("section", "message"),
        [
            ("constraints", "Contract constraints must be an object"),
            ("reactivity", "Contract reactivity must be an object"),
            ("versioning", "Contract versioning must be an object"),
        ],
    )
    def test_non_mapping_section_is_error(self, section: str, message: str) -> None:
        """Every section must be declared as an object."""
        result = validate_contract(_build(**{section: ["order.id"]}))
        assert result.errors == [message]

    def test_non_mapping_constraint_is_error(self) -> None:
        """A constraint declared as a plain value is an error."""
        result = validate_contract(_build(constraints={"latency": "100ms"}))
        assert result.errors == ["Latency constraint must be an object"]

    def test_non_string_realtime_path_is_error(self) -> None:
        """Realtime entries must be field path strings."""
        result = validate_contract(_build(reactivity={"realtime": ["order.id", 3]}))
        assert result.errors == ["Realtime field must be a string"]

    @pytest.mark.parametrize("mode", ["polling", "eventDriven"])
    def test_non_list_entries_are_error(self, mode: str) -> None:
        """polling and eventDriven must be arrays of configs."""
        result = validate_contract(_build(reactivity={mode: {"field": "order.id"}}))
        assert result.errors == [f"Reactivity {mode} must be an array"]

    def test_non_mapping_polling_entry_is_error(self) -> None:
        """Each polling entry must be an object."""
        result = validate_contract(_build(reactivity={"polling": ["order.id"]}))
        assert result.errors == ["Polling config must be an object"]

    def test_non_list_event_names_is_error(self) -> None:
        """The on value of an event-driven entry must be an array."""
        result = validate_contract(
            _build(reactivity={"eventDriven": [{"field": "order.id", "on": "paid"}]})
        )
        assert result.errors == ['EventDriven config must have an "on" array of event names']

    def test_non_list_deprecated_is_error(self) -> None:
        """deprecated must be an array of paths."""
        result = validate_contract(
            _build(versioning={"version": "1.0.0", "deprecated": "order.id"})
        )
        assert result.errors == ["Versioning deprecated must be an array of field paths"]

    def test_non_string_version_is_error(self) -> None:
        """A numeric version is an error."""
        result = validate_contract(_build(versioning={"version": 1}))
        assert result.errors == ["Versioning must have a version string"]
