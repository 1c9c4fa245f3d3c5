"""Canonical source locations and short display paths."""

from __future__ import annotations

import re
from typing import Any

from .model import SourceLocation

SOURCE_ROOTS: tuple[str, ...] = ("src", "app", "components", "pages", "lib")
ELLIPSIS = "..."

# `webpack:///src/x.tsx`, `webpack://app/./src/x.tsx`, `vite://...` etc.
_SCHEME_RE = re.compile(r"^([A-Za-z][A-Za-z0-9+.\-]*):///?")
# A drive letter (`C:/...`) looks like a one-letter scheme; keep it.
_DRIVE_RE = re.compile(r"^[A-Za-z]:[\\/]")


def strip_bundler_prefix(file: str) -> str:
    """Remove a bundler URL scheme and a leading `./` from a descriptor path."""
    path = (file or "").strip()
    if not _DRIVE_RE.match(path):
        match = _SCHEME_RE.match(path)
        if match:
            scheme = match.group(1).lower()
            rest = path[match.end():]
            # file:///abs/path keeps its leading slash.
            path = "/" + rest.lstrip("/") if scheme == "file" else rest
    if path.startswith("./"):
        path = path[2:]
    return path


def _segments(path: str) -> list[str]:
    return [seg for seg in re.split(r"[\\/]+", path) if seg and seg != "."]


def display_path(file: str) -> str:
    """Short path for UI: from the first conventional source root, else a tail."""
    segments = _segments(strip_bundler_prefix(file))
    if not segments:
        return file
    for root in SOURCE_ROOTS:
        if root in segments:
            return "/".join(segments[segments.index(root):])
    if len(segments) > 3:
        return f"{ELLIPSIS}/" + "/".join(segments[-2:])
    return segments[-1]


def normalize(raw: Any) -> SourceLocation:
    """Canonicalize a raw descriptor (mapping with fileName/lineNumber, or a SourceLocation).

    The file keeps its original spelling; only `display_path` shortens it.
    """
    if isinstance(raw, SourceLocation):
        return raw
    if isinstance(raw, dict):
        file = raw.get("fileName", raw.get("file"))
        line = raw.get("lineNumber", raw.get("line"))
    else:
        raise TypeError(f"cannot normalize {type(raw).__name__}")
    if isinstance(file, str):
        file = file.strip()
    if isinstance(line, str) and line.strip().isdigit():
        line = int(line.strip())
    return SourceLocation(file=file, line=line)


__all__ = ["ELLIPSIS", "SOURCE_ROOTS", "display_path", "normalize", "strip_bundler_prefix"]
