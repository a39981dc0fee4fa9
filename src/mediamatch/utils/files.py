"""File system utilities.

UTF-8 text reading for sidecar files and media file discovery for the
command line interface.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from mediamatch.core.models import MediaFile

logger = logging.getLogger(__name__)

# NFO files are small; anything larger is not worth scanning
MAX_TEXT_BYTES = 1024 * 1024


def safe_read_text(path: str | Path, max_bytes: int = MAX_TEXT_BYTES) -> str | None:
    """Read a text file as UTF-8, replacing undecodable bytes.

    Args:
        path: File to read
        max_bytes: Only this many leading bytes are read

    Returns:
        File content, or None if the file cannot be read
    """
    try:
        with Path(path).open("rb") as f:
            data = f.read(max_bytes)
    except OSError as e:
        logger.warning("Failed to read %s: %s", path, e)
        return None
    return data.decode("utf-8", errors="replace")


def discover_files(paths: Iterable[str | Path], *, recursive: bool = True) -> list[MediaFile]:
    """Collect files from files and directories.

    Directories are walked (recursively by default) in sorted order;
    hidden entries are skipped. Duplicates are dropped, first occurrence
    wins.

    Args:
        paths: Files and/or directories
        recursive: Descend into subdirectories

    Returns:
        Discovered files in a deterministic order
    """
    seen: set[Path] = set()
    found: list[MediaFile] = []

    for raw in paths:
        path = Path(raw).expanduser().absolute()
        if path.is_dir():
            pattern = "**/*" if recursive else "*"
            candidates = sorted(
                p for p in path.glob(pattern)
                if p.is_file() and not any(part.startswith(".") for part in p.relative_to(path).parts)
            )
        elif path.is_file():
            candidates = [path]
        else:
            logger.warning("Path not found: %s", path)
            continue

        for candidate in candidates:
            if candidate not in seen:
                seen.add(candidate)
                found.append(MediaFile(path=candidate))

    return found
