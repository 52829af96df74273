"""Artifact writer shared by the three emitters."""

from __future__ import annotations

from pathlib import Path

import structlog

from rcontracts_core.errors import GenerationError

logger = structlog.get_logger(__name__)


def write_artifact(path: Path, content: str) -> bool:
    """Write a generated artifact, skipping byte-identical content.

    Parent directories are created as needed. Content is written as UTF-8
    without newline translation so repeated runs are byte-identical.

    Args:
        path: Destination file.
        content: Full file content.

    Returns:
        True if the file was created or its content changed.

    Raises:
        GenerationError: If the directory or file cannot be written.
    """
    data = content.encode("utf-8")

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        if path.is_file() and path.read_bytes() == data:
            logger.debug("artifact_unchanged", path=str(path))
            return False
        path.write_bytes(data)
    except OSError as e:
        raise GenerationError(
            f"Cannot write {path}: {e.strerror or e}",
            output_path=str(path),
            internal_details=repr(e),
        ) from e

    logger.debug("artifact_written", path=str(path), size=len(data))
    return True
