"""Value types shared by the resolution pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# Traversal budgets. Every walk in the inspector is bounded by one of these so a
# cyclic or pathological record tree yields an absence outcome, never a hang.
MAX_ANCESTOR_HOPS = 100
MAX_DEBUG_SOURCE_DEPTH = 50
MAX_COMPONENT_NAME_DEPTH = 20
MAX_REGISTRY_NODES = 10_000


@dataclass(frozen=True)
class SourceLocation:
    file: str
    line: int

    def __post_init__(self) -> None:
        if not isinstance(self.file, str) or not self.file:
            raise ValueError("source file must be a non-empty string")
        if isinstance(self.line, bool) or not isinstance(self.line, int) or self.line < 1:
            raise ValueError(f"source line must be a positive integer, got {self.line!r}")

    def to_dict(self) -> dict[str, Any]:
        return {"file": self.file, "line": self.line}

    def __str__(self) -> str:
        return f"{self.file}:{self.line}"


@dataclass(frozen=True)
class Found:
    location: SourceLocation
    origin: Any = None
    kind: str = field(default="found", init=False)

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, **self.location.to_dict()}


@dataclass(frozen=True)
class NoHandleFound:
    """No internal handle was reachable from the element within budget."""

    kind: str = field(default="no_handle", init=False)

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind}


@dataclass(frozen=True)
class NoDebugSourceFound:
    """A record was found but nothing in its ancestry carries a debug descriptor."""

    kind: str = field(default="no_debug_source", init=False)

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind}


ResolutionOutcome = Found | NoHandleFound | NoDebugSourceFound


__all__ = [
    "MAX_ANCESTOR_HOPS",
    "MAX_COMPONENT_NAME_DEPTH",
    "MAX_DEBUG_SOURCE_DEPTH",
    "MAX_REGISTRY_NODES",
    "Found",
    "NoDebugSourceFound",
    "NoHandleFound",
    "ResolutionOutcome",
    "SourceLocation",
]
