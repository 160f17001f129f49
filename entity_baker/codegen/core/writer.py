"""
Filesystem output for generated artifacts.
"""

from pathlib import Path
from typing import Iterable, List, Tuple

from ...logging_config import get_logger
from .errors import FilesystemError

logger = get_logger(__name__)


def ensure_directory(path: Path) -> Path:
    """Create a directory (and its parents) if it does not exist."""
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FilesystemError(f"Could not create directory '{path}': {e}", path) from e
    return path


def file_exists(path: Path) -> bool:
    try:
        return path.exists()
    except OSError as e:
        raise FilesystemError(f"Could not check '{path}': {e}", path) from e


def write_text_file(path: Path, content: str) -> Path:
    """Write text as UTF-8, creating parent directories as needed."""
    ensure_directory(path.parent)
    try:
        # newline="" keeps the line endings chosen by the generator
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(content)
    except OSError as e:
        raise FilesystemError(f"Could not write '{path}': {e}", path) from e
    return path


def write_artifacts(artifacts: Iterable) -> Tuple[List[Path], List[Path]]:
    """
    Write generated artifacts to disk.

    Artifacts that must not overwrite (extension files) are skipped when
    their file already exists.

    Returns:
        Tuple of (written paths, skipped paths)
    """
    written: List[Path] = []
    skipped: List[Path] = []

    for artifact in artifacts:
        if not artifact.overwrite and file_exists(artifact.path):
            logger.debug(f"Keeping existing file {artifact.path}")
            skipped.append(artifact.path)
            continue

        write_text_file(artifact.path, artifact.content)
        logger.debug(f"Wrote {artifact.kind} file {artifact.path}")
        written.append(artifact.path)

    return written, skipped
