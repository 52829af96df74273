"""Shared base models for contract schema models."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

S = TypeVar("S", bound="SectionModel")


class ContractModel(BaseModel):
    """Immutable model whose wire names are camelCase.

    Contract documents are written with camelCase keys ("maxAge",
    "eventDriven"). Attributes stay snake_case and either spelling is
    accepted on input. Unknown keys are rejected.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )


class SectionModel(ContractModel):
    """Contract section that keeps whatever it was declared with.

    Sections (constraints, reactivity, versioning and their entries) accept
    values of any type and unknown keys, so a single validator pass can
    report every defect. Unknown keys are kept in ``model_extra``.
    """

    model_config = ConfigDict(extra="allow")

    def unknown_keys(self) -> list[str]:
        """Return the declared keys that are not fields of this section."""
        return list(self.model_extra or {})


def coerce_section(value: Any, model: type[S]) -> Any:
    """Parse a mapping into a section model.

    Args:
        value: Declared section value.
        model: Section model to build.

    Returns:
        The section model for a mapping; any other value unchanged.
    """
    if isinstance(value, Mapping):
        return model.model_validate(dict(value))
    return value


def coerce_entries(value: Any, model: type[S]) -> Any:
    """Parse every mapping in a list of section entries.

    Non-list values and non-mapping entries are kept as declared.
    """
    if isinstance(value, (list, tuple)):
        return [coerce_section(entry, model) for entry in value]
    return value
