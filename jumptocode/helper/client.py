"""Client for the helper service, used by the calling layer after a resolution."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from ..config import HelperConfig
from ..http_client import HttpClientError, get_json, post_json
from ..inspector.model import SourceLocation

logger = logging.getLogger("jumptocode.helper")


@dataclass(frozen=True)
class Opened:
    file: str
    line: int
    editor: str = ""
    kind: str = field(default="opened", init=False)


@dataclass(frozen=True)
class FileNotFound:
    file: str
    message: str = ""
    kind: str = field(default="file_not_found", init=False)


@dataclass(frozen=True)
class EditorUnavailable:
    """The editor CLI is missing; `file`/`line` are echoed for manual navigation."""

    file: str
    line: int
    message: str = ""
    kind: str = field(default="editor_unavailable", init=False)


@dataclass(frozen=True)
class OpenFailed:
    message: str
    kind: str = field(default="failed", init=False)


OpenResult = Opened | FileNotFound | EditorUnavailable | OpenFailed


def classify_reply(status: int, body: Any, location: SourceLocation) -> OpenResult:
    """Map a helper reply onto one of the four open outcomes."""
    data = body if isinstance(body, dict) else {}
    if 200 <= status < 300 and data.get("success", True):
        return Opened(
            file=str(data.get("file") or location.file),
            line=int(data.get("line") or location.line),
            editor=str(data.get("editor") or ""),
        )
    message = str(data.get("alertMessage") or data.get("error") or (body if isinstance(body, str) else "") or "")
    if data.get("vscodeNotInstalled") or status == 503:
        line = data.get("line")
        return EditorUnavailable(
            file=str(data.get("file") or location.file),
            line=int(line) if isinstance(line, int) and line >= 1 else location.line,
            message=str(data.get("error") or message),
        )
    if status == 404:
        return FileNotFound(file=str(data.get("file") or location.file), message=message)
    return OpenFailed(message=str(data.get("error") or message or f"Failed to open file (HTTP {status})"))


class OpenClient:
    def __init__(self, config: HelperConfig | None = None) -> None:
        self.config = config or HelperConfig.from_env()

    @property
    def base_url(self) -> str:
        return self.config.helper_url.rstrip("/")

    def health(self) -> dict[str, Any] | None:
        """Helper status payload, or None when the helper is not reachable."""
        try:
            data = get_json(f"{self.base_url}/health", timeout=self.config.http_timeout)
        except (HttpClientError, ValueError) as exc:
            logger.debug("helper health check failed: %s", exc)
            return None
        return data if isinstance(data, dict) else None

    def open(self, location: SourceLocation) -> OpenResult:
        try:
            status, body = post_json(
                f"{self.base_url}/open",
                location.to_dict(),
                timeout=self.config.http_timeout,
            )
        except HttpClientError as exc:
            logger.warning("helper server not reachable at %s: %s", self.base_url, exc)
            return OpenFailed(message=f"Helper server not running on {self.base_url}")
        result = classify_reply(status, body, location)
        logger.info("open %s -> %s", location, result.kind)
        return result


__all__ = [
    "EditorUnavailable",
    "FileNotFound",
    "OpenClient",
    "OpenFailed",
    "OpenResult",
    "Opened",
    "classify_reply",
]
