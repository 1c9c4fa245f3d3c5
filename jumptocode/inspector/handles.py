"""Internal-handle locator.

React attaches a pointer to its per-node record directly on DOM elements,
under a key made of a fixed prefix plus a random suffix. The prefix changed
across library generations, so each known prefix is a strategy with its own
extraction rule, evaluated against the element's keys in enumeration order.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .graph import HostGraph
from .model import MAX_ANCESTOR_HOPS

logger = logging.getLogger("jumptocode.inspector")


def _take(graph: HostGraph, value: Any) -> Any:
    return value


def _from_props(graph: HostGraph, props: Any) -> Any:
    # Props carry the creating record as `_owner`; only a mounted owner is useful.
    owner = graph.get(props, "_owner")
    if owner is not None and graph.get(owner, "stateNode") is not None:
        return owner
    return props


def _from_container(graph: HostGraph, container: Any) -> Any:
    # A container key marks a root wrapper; the record tree hangs off `current`.
    current = graph.get(container, "current")
    return current if current is not None else container


@dataclass(frozen=True)
class HandleStrategy:
    name: str
    prefix: str
    extract: Callable[[HostGraph, Any], Any]
    probes_neighbors: bool = False

    def matches(self, key: str) -> bool:
        return key.startswith(self.prefix)


HANDLE_STRATEGIES: tuple[HandleStrategy, ...] = (
    HandleStrategy("fiber", "__reactFiber$", _take, probes_neighbors=True),
    HandleStrategy("internal_instance", "__reactInternalInstance$", _take, probes_neighbors=True),
    HandleStrategy("props", "__reactProps$", _from_props),
    HandleStrategy("container", "__reactContainer$", _from_container),
)

NEIGHBOR_STRATEGIES = tuple(s for s in HANDLE_STRATEGIES if s.probes_neighbors)


@dataclass(frozen=True)
class HandleMatch:
    record: Any
    strategy: str
    key: str
    hops: int


def match_handle(
    graph: HostGraph,
    element: Any,
    strategies: tuple[HandleStrategy, ...] = HANDLE_STRATEGIES,
) -> tuple[HandleStrategy, str, Any] | None:
    """First (strategy, key, record) on `element`, by key enumeration order."""
    for key in graph.keys(element):
        for strategy in strategies:
            if not strategy.matches(key):
                continue
            value = graph.get(element, key)
            if value is None:
                continue
            return strategy, key, strategy.extract(graph, value)
    return None


def _probe_neighbors(graph: HostGraph, element: Any) -> tuple[HandleStrategy, str, Any] | None:
    # Styling libraries often wrap the node React owns; look one level around it.
    for child in graph.children(element):
        found = match_handle(graph, child, NEIGHBOR_STRATEGIES)
        if found is not None:
            return found
    for sibling in (graph.previous_sibling(element), graph.next_sibling(element)):
        if sibling is None:
            continue
        found = match_handle(graph, sibling, NEIGHBOR_STRATEGIES)
        if found is not None:
            return found
    return None


def locate_handle(
    graph: HostGraph,
    target: Any,
    *,
    probe_neighbors: bool = True,
    max_hops: int = MAX_ANCESTOR_HOPS,
) -> HandleMatch | None:
    element = target
    hops = 0
    while element is not None and hops < max_hops:
        found = match_handle(graph, element)
        if found is None and probe_neighbors and hops == 0:
            found = _probe_neighbors(graph, element)
        if found is not None:
            strategy, key, record = found
            logger.debug("handle %s found at hop %d (%s)", strategy.name, hops, key)
            return HandleMatch(record=record, strategy=strategy.name, key=key, hops=hops)
        element = graph.parent(element)
        hops += 1

    logger.debug("no internal handle after %d hops", hops)
    return None


def locate(graph: HostGraph, target: Any, *, probe_neighbors: bool = True) -> Any:
    """Return the node record reachable from `target`, or None."""
    match = locate_handle(graph, target, probe_neighbors=probe_neighbors)
    return match.record if match is not None else None


__all__ = ["HANDLE_STRATEGIES", "HandleMatch", "HandleStrategy", "locate", "locate_handle", "match_handle"]
