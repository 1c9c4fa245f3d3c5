"""Resolution orchestrator: element -> node record -> source location."""

from __future__ import annotations

import logging
from typing import Any

from .debug_source import component_name, extract
from .graph import HostGraph
from .handles import locate_handle
from .model import Found, NoDebugSourceFound, NoHandleFound, ResolutionOutcome
from .normalize import display_path
from .registry import fallback_locate

logger = logging.getLogger("jumptocode.inspector")


class Resolver:
    """Resolves elements of one host graph.

    Absence at any stage is an outcome, not an exception. Transport failures
    of the graph backend (e.g. a dropped CDP socket) propagate unchanged.
    """

    def __init__(self, graph: HostGraph, *, probe_neighbors: bool = True, use_registry: bool = True) -> None:
        self.graph = graph
        self.probe_neighbors = probe_neighbors
        self.use_registry = use_registry

    def find_record(self, target: Any) -> Any:
        match = locate_handle(self.graph, target, probe_neighbors=self.probe_neighbors)
        if match is not None:
            return match.record
        if not self.use_registry:
            return None
        return fallback_locate(self.graph, target)

    def resolve(self, target: Any) -> ResolutionOutcome:
        try:
            record = self.find_record(target)
            if record is None:
                logger.info("no internal handle for %s", self.graph.describe(target))
                return NoHandleFound()

            location = extract(self.graph, record)
            if location is None:
                logger.info("no debug source above %s", self.graph.describe(record))
                return NoDebugSourceFound()

            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(
                    "resolved %s (%s) -> %s",
                    self.graph.describe(target),
                    component_name(self.graph, record) or "host element",
                    location,
                )
            logger.info("resolved %s:%s", display_path(location.file), location.line)
            return Found(location=location, origin=target)
        finally:
            self.graph.release()

    def describe(self, target: Any) -> dict[str, Any]:
        """Resolution plus the nearest component name, for diagnostics."""
        try:
            record = self.find_record(target)
            name = component_name(self.graph, record) if record is not None else None
        finally:
            self.graph.release()
        outcome = self.resolve(target)
        out = outcome.to_dict()
        out["component"] = name
        if isinstance(outcome, Found):
            out["display"] = display_path(outcome.location.file)
        return out


def resolve(graph: HostGraph, target: Any, *, probe_neighbors: bool = True, use_registry: bool = True) -> ResolutionOutcome:
    return Resolver(graph, probe_neighbors=probe_neighbors, use_registry=use_registry).resolve(target)


__all__ = ["Resolver", "resolve"]
