"""Shared pytest fixtures for rcontracts-core tests.

Provides sample contracts, compiler configurations and temporary
project directories used across the unit tests.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
import structlog

from rcontracts_core import CompilerConfig, Contract, contract, derive, max_latency

if TYPE_CHECKING:
    from collections.abc import Callable


USER_PROFILE_SOURCE = '''\
from rcontracts_core import contract, days_ago, derive, max_latency

UserProfileContract = contract(
    name="UserProfile",
    intent="Display user profile with activity summary",
    shape={
        "user": {
            "id": "string",
            "name": "string",
            "avatar": "Resource<optimized:200x200>",
        },
        "activity": {
            "lastActive": "date",
            "status": derive(
                lambda ctx: "active" if ctx["lastActive"] > days_ago(7) else "inactive",
                dependencies=["activity.lastActive"],
                preferred_layer="consumer",
            ),
        },
    },
    constraints={"latency": max_latency("100ms", fallback="cachedVersion")},
    reactivity={"realtime": ["activity.status"], "static": ["user.name"]},
)
'''


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> None:
    """Configure structlog to print to stdout for test capture."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,
    )


@pytest.fixture
def user_profile_contract() -> Contract:
    """Return the UserProfile contract used throughout the tests.

    Returns:
        Valid contract with a nested shape, a resource, a derived field,
        a latency constraint and reactivity.
    """
    return contract(
        name="UserProfile",
        intent="Display user profile with activity summary",
        shape={
            "user": {
                "id": "string",
                "name": "string",
                "avatar": "Resource<optimized:200x200>",
            },
            "activity": {
                "lastActive": "date",
                "status": derive(
                    lambda ctx: "active",
                    dependencies=["activity.lastActive"],
                    preferred_layer="consumer",
                ),
            },
        },
        constraints={"latency": max_latency("100ms", fallback="cachedVersion")},
        reactivity={"realtime": ["activity.status"], "static": ["user.name"]},
    )


@pytest.fixture
def minimal_contract() -> Contract:
    """Return a valid contract with a single primitive field."""
    return contract(
        name="Minimal",
        intent="Smallest contract that compiles cleanly",
        shape={"id": "string"},
    )


@pytest.fixture
def default_config() -> CompilerConfig:
    """Return the default compiler configuration."""
    return CompilerConfig()


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Create an empty project with a contracts/ directory.

    Returns:
        Project root path.
    """
    (tmp_path / "contracts").mkdir()
    return tmp_path


@pytest.fixture
def write_source(project_dir: Path) -> Callable[..., Path]:
    """Factory fixture writing contract source files into the project.

    Returns:
        Function taking (relative path, content) and returning the file path.
    """

    def _write(relative: str, content: str = USER_PROFILE_SOURCE) -> Path:
        path = project_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    return _write
