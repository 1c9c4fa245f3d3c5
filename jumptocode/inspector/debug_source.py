"""Debug-source extraction from a node record's ancestry."""

from __future__ import annotations

import logging
from typing import Any

from .graph import HostGraph
from .model import MAX_COMPONENT_NAME_DEPTH, MAX_DEBUG_SOURCE_DEPTH, SourceLocation
from .normalize import normalize

logger = logging.getLogger("jumptocode.inspector")


def read_descriptor(graph: HostGraph, record: Any) -> SourceLocation | None:
    """`record._debugSource` as a SourceLocation, if present and well-formed."""
    if record is None:
        return None
    source = graph.get(record, "_debugSource")
    if source is None:
        return None
    file = graph.get(source, "fileName")
    line = graph.get(source, "lineNumber")
    if isinstance(line, float) and line.is_integer():
        line = int(line)
    try:
        return normalize({"fileName": file, "lineNumber": line})
    except ValueError:
        logger.debug("ignoring malformed descriptor %r:%r", file, line)
        return None


def extract(
    graph: HostGraph,
    record: Any,
    *,
    check_alternate: bool = True,
    max_depth: int = MAX_DEBUG_SOURCE_DEPTH,
) -> SourceLocation | None:
    """Walk `return` links looking for a debug-source descriptor.

    At each record the own descriptor wins, then the owner's (the JSX call
    site that created it), then the alternate twin's.
    """
    current = record
    depth = 0
    while current is not None and depth < max_depth:
        found = read_descriptor(graph, current)
        if found is not None:
            logger.debug("descriptor at depth %d", depth)
            return found

        found = read_descriptor(graph, graph.get(current, "_debugOwner"))
        if found is not None:
            logger.debug("owner descriptor at depth %d", depth)
            return found

        if check_alternate:
            found = read_descriptor(graph, graph.get(current, "alternate"))
            if found is not None:
                logger.debug("alternate descriptor at depth %d", depth)
                return found

        current = graph.get(current, "return")
        depth += 1

    logger.debug("no descriptor after %d records", depth)
    return None


def component_name(graph: HostGraph, record: Any, *, max_depth: int = MAX_COMPONENT_NAME_DEPTH) -> str | None:
    """Name of the nearest composite component at or above `record`."""
    current = record
    depth = 0
    while current is not None and depth < max_depth:
        type_ = graph.get(current, "type")
        if type_ is not None and graph.is_function(type_):
            name = graph.get(type_, "displayName") or graph.get(type_, "name")
            return str(name) if name else "anonymous"
        current = graph.get(current, "return")
        depth += 1
    return None


__all__ = ["component_name", "extract", "read_descriptor"]
