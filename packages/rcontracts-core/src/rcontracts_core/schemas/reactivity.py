"""Reactivity configuration models.

Declares how each field is kept current: never (static), on a timer
(polling), over a push transport (realtime), or when named events fire
(eventDriven). Sets are disjoint by convention only. Referenced paths are
cross-checked against the shape by the validator, which reports unknown
paths as warnings. Values of the wrong type are kept as declared and
reported by the validator too.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from rcontracts_core.schemas.base import SectionModel, coerce_entries


class PollingConfig(SectionModel):
    """Poll a field on a fixed interval.

    Attributes:
        field: Dotted path of the polled field.
        interval: Polling interval (ms, s, m), e.g. "30s".
    """

    field: Any = Field(default=None, description="Dotted field path")
    interval: Any = Field(default=None, description="Polling interval (ms, s, m)")


class EventConfig(SectionModel):
    """Refresh a field when any of the named events fires.

    Attributes:
        field: Dotted path of the field.
        on: Event names triggering a refresh.
    """

    field: Any = Field(default=None, description="Dotted field path")
    on: Any = Field(default=None, description="Event names")


class ReactivityConfig(SectionModel):
    """Update cadence per field.

    Attributes:
        realtime: Paths pushed over a realtime transport.
        static: Paths that never change once fetched.
        polling: Paths refreshed on an interval.
        event_driven: Paths refreshed on named events.

    Example:
        >>> ReactivityConfig.model_validate(
        ...     {"realtime": ["activity.status"], "polling": [{"field": "a.b", "interval": "30s"}]}
        ... )
    """

    realtime: Any = Field(default=None, description="Realtime field paths")
    static: Any = Field(default=None, description="Static field paths")
    polling: Any = Field(default=None, description="Polled fields")
    event_driven: Any = Field(default=None, description="Event-driven fields")

    @field_validator("realtime", "static", mode="before")
    @classmethod
    def list_paths(cls, value: Any) -> Any:
        """Store path tuples as lists."""
        return list(value) if isinstance(value, tuple) else value

    @field_validator("polling", mode="before")
    @classmethod
    def build_polling(cls, value: Any) -> Any:
        """Parse polling entries."""
        return coerce_entries(value, PollingConfig)

    @field_validator("event_driven", mode="before")
    @classmethod
    def build_event_driven(cls, value: Any) -> Any:
        """Parse event-driven entries."""
        return coerce_entries(value, EventConfig)

    def referenced_paths(self) -> list[tuple[str, str]]:
        """Return (mode, path) for every declared path, in declaration order.

        Entries that are not strings or configs with a string field are
        skipped.
        """
        refs: list[tuple[str, str]] = []
        for mode, paths in (("realtime", self.realtime), ("static", self.static)):
            if isinstance(paths, list):
                refs.extend((mode, path) for path in paths if isinstance(path, str))
        for mode, configs, model in (
            ("polling", self.polling, PollingConfig),
            ("eventDriven", self.event_driven, EventConfig),
        ):
            if isinstance(configs, list):
                refs.extend(
                    (mode, cfg.field)
                    for cfg in configs
                    if isinstance(cfg, model) and isinstance(cfg.field, str) and cfg.field
                )
        return refs
