"""Shared test fixtures for rcontracts-cli tests.

Provides CliRunner fixtures and helpers that scaffold contract projects
inside an isolated filesystem.
"""

from __future__ import annotations

import sys
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
import structlog
from click.testing import CliRunner

CONFIG_FILENAME = "rcontracts.yaml"

VALID_CONTRACT = '''\
from rcontracts_core import contract, derive, max_latency

UserProfileContract = contract(
    name="UserProfile",
    intent="Display user profile with activity summary",
    shape={
        "user": {"id": "string", "name": "string", "avatar": "Resource<optimized:200x200>"},
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
    reactivity={"realtime": ["activity.status"]},
)
'''

INVALID_CONTRACT = '''\
from rcontracts_core import contract

BrokenContract = contract(
    name="Broken",
    intent="Contract with an unknown type",
    shape={"id": "uuid"},
)
'''

TIGHT_LATENCY_CONTRACT = '''\
from rcontracts_core import contract, max_latency

TickerContract = contract(
    name="Ticker",
    intent="Show the live price ticker",
    shape={"price": "number"},
    constraints={"latency": max_latency("5ms", fallback="cachedVersion")},
)
'''


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> None:
    """Keep compiler log events out of the command output under test."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


@pytest.fixture(autouse=True)
def clear_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure RCONTRACTS_CONFIG from the environment never leaks in."""
    monkeypatch.delenv("RCONTRACTS_CONFIG", raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click test runner.

    Returns:
        CliRunner instance for testing CLI commands.
    """
    return CliRunner()


@pytest.fixture
def isolated_runner(cli_runner: CliRunner) -> Generator[CliRunner, None, None]:
    """Create a Click test runner with an isolated filesystem.

    Yields:
        CliRunner instance with isolated filesystem.
    """
    with cli_runner.isolated_filesystem():
        yield cli_runner


@pytest.fixture
def write_contract(isolated_runner: CliRunner) -> Callable[..., Path]:
    """Factory fixture writing contract sources in the isolated filesystem.

    Returns:
        Function taking (relative path, content) and returning the path.
    """

    def _write(
        relative: str = "contracts/user_profile_contract.py",
        content: str = VALID_CONTRACT,
    ) -> Path:
        path = Path(relative)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    return _write


@pytest.fixture
def create_config(isolated_runner: CliRunner) -> Callable[[str], Path]:
    """Factory fixture to create rcontracts.yaml with custom content.

    Returns:
        Function that creates rcontracts.yaml with given content.
    """

    def _create(content: str, filename: str = CONFIG_FILENAME) -> Path:
        path = Path(filename)
        path.write_text(content)
        return path

    return _create


@pytest.fixture
def contract_sources() -> dict[str, str]:
    """Return contract source texts keyed by scenario.

    Returns:
        Mapping with "valid", "invalid" and "tight_latency" sources.
    """
    return {
        "valid": VALID_CONTRACT,
        "invalid": INVALID_CONTRACT,
        "tight_latency": TIGHT_LATENCY_CONTRACT,
    }
