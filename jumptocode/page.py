"""Attach the inspector to a live tab and pick the element to resolve."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator
from contextlib import contextmanager, suppress
from typing import Any

from .config import InspectorConfig
from .errors import JumpError
from .http_client import HttpClientError
from .inspector.remote import RemoteGraph, RemoteRef, from_remote_object
from .inspector.resolver import Resolver
from .session_cdp import CdpConnection, connect_tab

logger = logging.getLogger("jumptocode.page")

TARGET_GROUP = "jumptocode-target"


def _element_expression(selector: str | None, point: tuple[float, float] | None) -> str:
    if selector:
        return f"document.querySelector({json.dumps(selector)})"
    if point is not None:
        x, y = point
        return f"document.elementFromPoint({float(x)}, {float(y)})"
    raise ValueError("selector or point is required")


def pick_element(
    session: Any,
    *,
    selector: str | None = None,
    point: tuple[float, float] | None = None,
) -> RemoteRef:
    """Evaluate a selector or viewport point to a remote element handle."""
    expression = _element_expression(selector, point)
    where = f"selector {selector!r}" if selector else f"point {point}"
    result = session.send(
        "Runtime.evaluate",
        {"expression": expression, "objectGroup": TARGET_GROUP, "returnByValue": False, "silent": True},
    )
    details = result.get("exceptionDetails")
    if details:
        raise JumpError(
            tool="resolve",
            action="pick_element",
            reason=f"Evaluating {where} threw: {details.get('text') or 'exception'}",
            suggestion="Check the CSS selector syntax",
        )
    ref = from_remote_object(result.get("result"))
    if not isinstance(ref, RemoteRef):
        raise JumpError(
            tool="resolve",
            action="pick_element",
            reason=f"No element at {where}",
            suggestion="Use a selector that matches a rendered element, or coordinates inside the viewport",
        )
    return ref


@contextmanager
def attach(config: InspectorConfig, tab_id: str | None = None) -> Generator[tuple[CdpConnection, dict[str, Any]], None, None]:
    """Context manager for a CDP connection to a local development tab."""
    try:
        conn, target = connect_tab(config, tab_id)
    except HttpClientError as exc:
        raise JumpError(
            tool="resolve",
            action="connect",
            reason=str(exc),
            suggestion=f"Start Chrome with --remote-debugging-port={config.cdp_port} and open your dev server",
        ) from exc
    try:
        yield conn, target
    finally:
        with suppress(Exception):
            conn.send("Runtime.releaseObjectGroup", {"objectGroup": TARGET_GROUP})
        conn.close()


def resolve_in_tab(
    config: InspectorConfig,
    *,
    selector: str | None = None,
    point: tuple[float, float] | None = None,
    tab_id: str | None = None,
) -> dict[str, Any]:
    """Resolve one element of a live tab. Returns the outcome plus diagnostics."""
    with attach(config, tab_id) as (conn, target):
        try:
            element = pick_element(conn, selector=selector, point=point)
            resolver = Resolver(
                RemoteGraph(conn),
                probe_neighbors=config.probe_neighbors,
                use_registry=config.use_registry,
            )
            info = resolver.describe(element)
        except HttpClientError as exc:
            raise JumpError(
                tool="resolve",
                action="inspect",
                reason=str(exc),
                suggestion="Reload the tab and retry; a blocking dialog can stall CDP calls",
            ) from exc
        info["tab"] = {"id": target.get("id"), "url": target.get("url")}
        return info


__all__ = ["attach", "pick_element", "resolve_in_tab"]
