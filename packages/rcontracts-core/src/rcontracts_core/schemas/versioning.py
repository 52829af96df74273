"""Versioning metadata for reactive contracts."""

from __future__ import annotations

import re
from typing import Any

from pydantic import Field

from rcontracts_core.schemas.base import SectionModel

SEMVER_PATTERN = re.compile(r"^\d+\.\d+\.\d+$")


class VersioningConfig(SectionModel):
    """Contract version and migration hook.

    Attributes:
        version: Semantic version string, e.g. "1.2.0".
        deprecated: Dotted paths scheduled for removal.
        migration: Callable converting data of the previous version.
    """

    version: Any = Field(default=None, description="Semantic version")
    deprecated: Any = Field(default=None, description="Deprecated field paths")
    migration: Any = Field(default=None, description="Migration callable")
