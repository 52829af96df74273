"""Contract source discovery.

The orchestrator asks a FileDiscovery for candidate source paths and
never walks the filesystem itself. GlobFileDiscovery is the default;
tests and dev-server integrations pass their own.
"""

from __future__ import annotations

import fnmatch
import glob
from pathlib import Path, PurePosixPath
from typing import Protocol

from rcontracts_core.errors import DiscoveryError

CONTRACT_FILE_SUFFIX = "_contract.py"
_GLOB_CHARS = frozenset("*?[")


class FileDiscovery(Protocol):
    """Capability returning contract source paths for a glob pattern."""

    def discover(self, pattern: str, cwd: Path) -> list[str]:
        """Return matching paths, relative to cwd unless the pattern is absolute."""
        ...


class GlobFileDiscovery:
    """Recursive glob relative to the project root.

    Example:
        >>> GlobFileDiscovery().discover("contracts/**/*_contract.py", Path("/app"))
        ['contracts/billing/invoice_contract.py', 'contracts/user_contract.py']
    """

    def discover(self, pattern: str, cwd: Path) -> list[str]:
        """Return sorted file paths matching pattern.

        Args:
            pattern: Glob pattern; ``**`` matches any number of directories.
            cwd: Directory the pattern is resolved against.

        Returns:
            Sorted POSIX-style paths of regular files.

        Raises:
            DiscoveryError: If the pattern cannot be resolved.
        """
        root = Path(cwd)
        if not root.is_dir():
            raise DiscoveryError(
                f"Project directory does not exist: {root}",
                pattern=pattern,
            )

        try:
            matches = glob.glob(pattern, root_dir=root, recursive=True)
        except (OSError, ValueError) as e:
            raise DiscoveryError(
                f"Cannot resolve contracts pattern: {pattern}",
                pattern=pattern,
                internal_details=repr(e),
            ) from e

        return sorted(
            Path(match).as_posix()
            for match in matches
            if (root / match).is_file()
        )


def glob_base(pattern: str) -> str:
    """Return the directory prefix of a glob pattern before any wildcard.

    Example:
        >>> glob_base("contracts/**/*_contract.py")
        'contracts'
    """
    parts: list[str] = []
    for part in PurePosixPath(pattern).parts[:-1]:
        if _GLOB_CHARS.intersection(part):
            break
        parts.append(part)
    return str(PurePosixPath(*parts)) if parts else "."


def matches_pattern(path: str, pattern: str) -> bool:
    """Return True if a relative POSIX path matches a contracts glob.

    ``**/`` also matches zero directories, as it does for discovery.
    """
    candidates = {pattern, pattern.replace("**/", "")}
    return any(fnmatch.fnmatchcase(path, candidate) for candidate in candidates)


def is_contract_file(path: str | Path) -> bool:
    """Return True if path names a contract source (``*_contract.py``)."""
    return Path(path).name.endswith(CONTRACT_FILE_SUFFIX)
