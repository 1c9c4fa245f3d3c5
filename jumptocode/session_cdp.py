"""Raw CDP connection and tab discovery for the page inspector."""

from __future__ import annotations

import json
import logging
import socket
import time
from contextlib import suppress
from typing import Any

import websocket

from .config import InspectorConfig
from .http_client import HttpClientError, get_json

logger = logging.getLogger("jumptocode.cdp")


class CdpConnection:
    """Low-level CDP WebSocket connection."""

    def __init__(self, ws_url: str, timeout: float = 5.0):
        self.ws = websocket.create_connection(ws_url, timeout=timeout)
        self.ws_url = ws_url
        self.timeout = timeout
        self._next_id = 1

    def send(self, method: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """Send CDP command and wait for response."""
        msg_id = self._next_id
        self._next_id += 1

        msg: dict[str, Any] = {"id": msg_id, "method": method}
        if params:
            msg["params"] = params

        try:
            self.ws.settimeout(min(2.0, max(0.5, float(self.timeout))))
            self.ws.send(json.dumps(msg))
        except Exception as exc:  # noqa: BLE001
            raise HttpClientError(str(exc)) from exc

        return self._recv_until(msg_id)

    def _recv_until(self, expected_id: int) -> dict[str, Any]:
        """Wait for response with specific ID."""
        deadline = time.time() + self.timeout
        while True:
            remaining = deadline - time.time()
            if remaining <= 0:
                raise HttpClientError("CDP response timed out")

            # websocket-client `recv()` blocks unless a socket timeout is set.
            try:
                self.ws.settimeout(min(0.5, remaining))
                raw = self.ws.recv()
            except Exception as exc:  # noqa: BLE001
                msg = str(exc).lower()
                if isinstance(exc, TimeoutError) or "timed out" in msg:
                    continue
                raise HttpClientError(str(exc)) from exc

            try:
                data = json.loads(raw)
            except json.JSONDecodeError:
                continue

            # Events are not subscribed to; skip any that arrive between replies.
            if not isinstance(data, dict) or "id" not in data:
                continue

            if data.get("id") == expected_id:
                if "error" in data:
                    raise HttpClientError(str(data["error"]))
                return data.get("result", {})

    def close(self) -> None:
        """Close the WebSocket connection."""
        sock = getattr(self.ws, "sock", None)
        if sock is not None:
            with suppress(Exception):
                sock.shutdown(socket.SHUT_RDWR)
            with suppress(Exception):
                sock.close()


def list_tabs(config: InspectorConfig) -> list[dict[str, Any]]:
    """Return page targets exposed by the local Chrome, filtered to allowed URLs."""
    try:
        targets = get_json(f"http://127.0.0.1:{config.cdp_port}/json/list") or []
    except (HttpClientError, OSError, ValueError) as exc:
        raise HttpClientError(f"CDP not reachable on port {config.cdp_port}: {exc}") from exc
    out: list[dict[str, Any]] = []
    for target in targets:
        if not isinstance(target, dict) or target.get("type") != "page":
            continue
        if not target.get("webSocketDebuggerUrl"):
            continue
        if not config.is_tab_allowed(str(target.get("url") or "")):
            continue
        out.append(target)
    return out


def connect_tab(config: InspectorConfig, tab_id: str | None = None) -> tuple[CdpConnection, dict[str, Any]]:
    """Open a CDP connection to `tab_id`, or to the first allowed page tab."""
    tabs = list_tabs(config)
    if tab_id:
        tabs = [t for t in tabs if t.get("id") == tab_id]
    if not tabs:
        raise HttpClientError(
            f"No debuggable tab found (url prefix {config.tab_url_prefix!r}, port {config.cdp_port})"
        )
    target = tabs[0]
    logger.info("attaching to tab %s (%s)", target.get("id"), target.get("url"))
    conn = CdpConnection(str(target["webSocketDebuggerUrl"]), timeout=config.cdp_timeout)
    return conn, target


__all__ = ["CdpConnection", "connect_tab", "list_tabs"]
