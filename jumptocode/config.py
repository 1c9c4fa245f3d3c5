from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_HELPER_PORT = 5123
DEFAULT_EDITOR = "code"


def expand_path(raw: str) -> str:
    return str(Path(raw).expanduser())


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() not in {"0", "false", "no", "off"}


@dataclass
class HelperConfig:
    """Settings for the local "open at file:line" service and its client."""

    host: str = "127.0.0.1"
    port: int = DEFAULT_HELPER_PORT
    editor: str = DEFAULT_EDITOR
    project_root: str = field(default_factory=os.getcwd)
    editor_timeout: float = 10.0
    helper_url: str = f"http://localhost:{DEFAULT_HELPER_PORT}"
    http_timeout: float = 5.0
    common_dirs: list[str] = field(default_factory=lambda: ["src", "app", "components", "pages"])

    @classmethod
    def from_env(cls) -> HelperConfig:
        port = int(os.environ.get("JUMPTOCODE_PORT", str(DEFAULT_HELPER_PORT)))
        root = expand_path(os.environ.get("JUMPTOCODE_ROOT") or os.getcwd())
        helper_url = (os.environ.get("JUMPTOCODE_HELPER_URL") or f"http://localhost:{port}").rstrip("/")
        return cls(
            host=os.environ.get("JUMPTOCODE_HOST", "127.0.0.1"),
            port=port,
            editor=os.environ.get("JUMPTOCODE_EDITOR", DEFAULT_EDITOR).strip() or DEFAULT_EDITOR,
            project_root=root,
            editor_timeout=float(os.environ.get("JUMPTOCODE_EDITOR_TIMEOUT", "10")),
            helper_url=helper_url,
            http_timeout=float(os.environ.get("JUMPTOCODE_HTTP_TIMEOUT", "5")),
        )


@dataclass
class InspectorConfig:
    """Settings for attaching the inspector to a page over CDP."""

    cdp_port: int = 9222
    cdp_timeout: float = 5.0
    probe_neighbors: bool = True
    use_registry: bool = True
    tab_url_prefix: str = "http://localhost:"

    @classmethod
    def from_env(cls) -> InspectorConfig:
        return cls(
            cdp_port=int(os.environ.get("JUMPTOCODE_CDP_PORT", "9222")),
            cdp_timeout=float(os.environ.get("JUMPTOCODE_CDP_TIMEOUT", "5")),
            probe_neighbors=_env_flag("JUMPTOCODE_PROBE_NEIGHBORS", True),
            use_registry=_env_flag("JUMPTOCODE_USE_REGISTRY", True),
            tab_url_prefix=os.environ.get("JUMPTOCODE_TAB_URL_PREFIX", "http://localhost:"),
        )

    def is_tab_allowed(self, url: str) -> bool:
        if not self.tab_url_prefix:
            return True
        return (url or "").startswith(self.tab_url_prefix)
