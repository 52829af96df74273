"""Compiler configuration loading.

Resolution order:
1. Explicit path argument
2. RCONTRACTS_CONFIG environment variable
3. rcontracts.yaml or rcontracts.yml in the project root
4. Built-in defaults

Every failure is raised as ConfigurationError with file and field
context, so callers handle one exception type.
"""

from __future__ import annotations

import os
from pathlib import Path

import structlog
import yaml
from pydantic import ValidationError as PydanticValidationError

from rcontracts_core.errors import ConfigurationError
from rcontracts_core.schemas import CompilerConfig

logger = structlog.get_logger(__name__)

CONFIG_ENV_VAR = "RCONTRACTS_CONFIG"
CONFIG_FILENAMES = ("rcontracts.yaml", "rcontracts.yml")


def find_config_file(cwd: Path | str | None = None) -> Path | None:
    """Locate the configuration file without loading it.

    Args:
        cwd: Project root. Defaults to the current directory.

    Returns:
        Path to the configuration file, or None if defaults apply.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)

    root = Path(cwd) if cwd is not None else Path.cwd()
    for filename in CONFIG_FILENAMES:
        candidate = root / filename
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Path | str | None = None, cwd: Path | str | None = None) -> CompilerConfig:
    """Load the compiler configuration.

    Args:
        path: Explicit configuration file. Must exist if given.
        cwd: Project root searched when no path is given.

    Returns:
        Validated CompilerConfig; defaults if no file is found.

    Raises:
        ConfigurationError: If the file is missing, unreadable, not valid
            YAML, or does not match the schema.

    Example:
        >>> config = load_config(cwd="/app")
        >>> config.output.frontend
        'generated/frontend'
    """
    config_path = Path(path) if path is not None else find_config_file(cwd)

    if config_path is None:
        logger.debug("config_defaults_used", cwd=str(cwd or Path.cwd()))
        return CompilerConfig()

    try:
        config = CompilerConfig.from_yaml(config_path)
    except FileNotFoundError:
        raise ConfigurationError(
            "Configuration file not found",
            file_path=str(config_path),
        ) from None
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        raise ConfigurationError(
            f"Invalid YAML: {getattr(e, 'problem', None) or e}",
            file_path=str(config_path),
            line_number=mark.line + 1 if mark is not None else None,
            internal_details=str(e),
        ) from e
    except PydanticValidationError as e:
        first = e.errors()[0]
        raise ConfigurationError(
            f"Invalid configuration: {first['msg']}",
            file_path=str(config_path),
            field_path=".".join(str(part) for part in first["loc"]) or None,
            internal_details=str(e),
        ) from e
    except OSError as e:
        raise ConfigurationError(
            f"Cannot read configuration: {e.strerror or e}",
            file_path=str(config_path),
            internal_details=repr(e),
        ) from e

    logger.debug("config_loaded", path=str(config_path))
    return config
