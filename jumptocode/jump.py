"""The calling layer: resolve an element, then ask the helper to open it.

UI rendering is not done here. The flow reports `Notice` values describing
what a page overlay should show: transient toasts for ordinary results and a
persistent notice (with the path to copy) when the editor is missing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from .helper.client import EditorUnavailable, FileNotFound, OpenClient, Opened, OpenResult
from .inspector.model import Found, NoDebugSourceFound, NoHandleFound, ResolutionOutcome
from .inspector.normalize import display_path
from .inspector.resolver import Resolver

logger = logging.getLogger("jumptocode")


@dataclass(frozen=True)
class Notice:
    message: str
    level: str = "info"
    persistent: bool = False
    file: str | None = None
    line: int | None = None

    @property
    def is_error(self) -> bool:
        return self.level != "info"


@dataclass
class InspectorSession:
    """Per-page toggle state, owned by the caller.

    In click mode the session turns itself off after a successful open; in
    hover mode it stays on until toggled.
    """

    enabled: bool = False
    mode: str = "click"
    last_outcome: ResolutionOutcome | None = None

    def toggle(self) -> Notice:
        self.enabled = not self.enabled
        logger.info("inspector %s", "enabled" if self.enabled else "disabled")
        if self.enabled:
            return Notice("JumpToCode: Click any React component")
        return Notice("JumpToCode: Disabled")


@dataclass
class JumpReport:
    outcome: ResolutionOutcome | None = None
    opened: OpenResult | None = None
    notices: list[Notice] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "outcome": self.outcome.to_dict() if self.outcome is not None else None,
            "opened": self.opened.kind if self.opened is not None else None,
            "notices": [n.message for n in self.notices],
        }


def outcome_notice(outcome: ResolutionOutcome) -> Notice:
    if isinstance(outcome, NoHandleFound):
        return Notice("No React fiber found. Not a React component or dev mode disabled", level="warning")
    if isinstance(outcome, NoDebugSourceFound):
        return Notice("Debug source not found. Try clicking a different element", level="warning")
    loc = outcome.location
    return Notice(f"Opening {display_path(loc.file)}:{loc.line}", file=loc.file, line=loc.line)


def open_notice(result: OpenResult) -> Notice:
    if isinstance(result, Opened):
        return Notice(f"Opened in {result.editor or 'editor'}!", file=result.file, line=result.line)
    if isinstance(result, EditorUnavailable):
        return Notice(
            result.message or "Editor not found",
            level="error",
            persistent=True,
            file=result.file,
            line=result.line,
        )
    if isinstance(result, FileNotFound):
        return Notice(f"File not found: {result.file}", level="error", file=result.file)
    return Notice(result.message or "Failed to open file", level="error")


def jump(session: InspectorSession, resolver: Resolver, client: OpenClient, target: Any) -> JumpReport:
    """Resolve `target` and open it, if the session is enabled."""
    report = JumpReport()
    if not session.enabled:
        return report

    outcome = resolver.resolve(target)
    session.last_outcome = outcome
    report.outcome = outcome
    report.notices.append(outcome_notice(outcome))
    if not isinstance(outcome, Found):
        return report

    result = client.open(outcome.location)
    report.opened = result
    report.notices.append(open_notice(result))
    if isinstance(result, Opened) and session.mode == "click":
        session.enabled = False
    return report


__all__ = ["InspectorSession", "JumpReport", "Notice", "jump", "open_notice", "outcome_notice"]
