"""Fallback route to a node record through the devtools hook registry.

Used when no element-attached handle is reachable (minified builds, unusual
attachment points). Searches every mounted root for the record rendering the
target element; if none does, returns the first root's top-level record so
the extractor can still try a coarse ancestor walk.
"""

from __future__ import annotations

import logging
from typing import Any

from .graph import HostError, HostGraph
from .model import MAX_REGISTRY_NODES

logger = logging.getLogger("jumptocode.inspector")

DEFAULT_RENDERER_IDS = (1,)


def _renderer_ids(graph: HostGraph, hook: Any) -> list[Any]:
    renderers = graph.get(hook, "renderers")
    ids = graph.map_keys(renderers) if renderers is not None else []
    return ids or list(DEFAULT_RENDERER_IDS)


def fiber_roots(graph: HostGraph, hook: Any) -> list[Any]:
    """Mounted roots across all renderers, in registry order."""
    roots: list[Any] = []
    for renderer_id in _renderer_ids(graph, hook):
        try:
            found = graph.call(hook, "getFiberRoots", renderer_id)
        except HostError as exc:
            logger.warning("getFiberRoots(%r) failed: %s", renderer_id, exc)
            continue
        if found is not None:
            roots.extend(graph.items(found))
    return roots


def find_record_for_element(
    graph: HostGraph,
    top: Any,
    target: Any,
    *,
    budget: list[int] | None = None,
) -> Any:
    """Depth-first search under `top` for the record whose `stateNode` is `target`."""
    remaining = budget if budget is not None else [MAX_REGISTRY_NODES]
    seen: set[Any] = set()
    stack = [top] if top is not None else []
    while stack:
        record = stack.pop()
        key = graph.identity(record)
        if key in seen:
            continue
        if remaining[0] <= 0:
            logger.debug("registry search budget exhausted")
            return None
        remaining[0] -= 1
        seen.add(key)

        state_node = graph.get(record, "stateNode")
        if state_node is not None and graph.same(state_node, target):
            return record

        # Siblings are pushed first so the child subtree is searched before them.
        # The top record's own siblings are outside the subtree.
        sibling = graph.get(record, "sibling") if record is not top else None
        if sibling is not None:
            stack.append(sibling)
        child = graph.get(record, "child")
        if child is not None:
            stack.append(child)
    return None


def fallback_locate(graph: HostGraph, target: Any) -> Any:
    """Return a node record for `target` via the registry, or None."""
    hook = graph.devtools_hook()
    if hook is None:
        logger.debug("devtools hook not available")
        return None
    if not graph.has_method(hook, "getFiberRoots"):
        logger.debug("devtools hook has no getFiberRoots")
        return None

    roots = [r for r in fiber_roots(graph, hook) if graph.get(r, "current") is not None]
    if not roots:
        return None

    budget = [MAX_REGISTRY_NODES]
    for root in roots:
        record = find_record_for_element(graph, graph.get(root, "current"), target, budget=budget)
        if record is not None:
            logger.debug("matched target via registry search")
            return record

    logger.info("no exact registry match; starting from the first root record")
    return graph.get(roots[0], "current")


__all__ = ["fallback_locate", "find_record_for_element", "fiber_roots"]
