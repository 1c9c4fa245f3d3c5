"""Map a descriptor path to a file on disk."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from ..inspector.normalize import strip_bundler_prefix

logger = logging.getLogger("jumptocode.helper")

_WINDOWS_ABS_RE = re.compile(r"^[A-Za-z]:[\\/]")


def resolve_path(file: str, root: str | Path) -> Path:
    """Absolute path for `file`: absolute paths stay, others are joined to `root`."""
    cleaned = strip_bundler_prefix(file)
    if cleaned.startswith("/") or _WINDOWS_ABS_RE.match(cleaned):
        return Path(cleaned).resolve()
    return (Path(root) / cleaned).resolve()


def find_in_common_dirs(path: Path, root: str | Path, dirs: list[str]) -> Path | None:
    """Look for `path`'s basename directly under conventional folders of `root`."""
    for folder in dirs:
        candidate = Path(root) / folder / path.name
        if candidate.is_file():
            logger.info("found %s under %s/", path.name, folder)
            return candidate
    return None


def locate_file(file: str, root: str | Path, dirs: list[str]) -> Path | None:
    """Existing file for a descriptor path, or None."""
    if not file or not file.strip():
        return None
    path = resolve_path(file, root)
    if path.is_file():
        return path
    return find_in_common_dirs(path, root, dirs)


__all__ = ["find_in_common_dirs", "locate_file", "resolve_path"]
