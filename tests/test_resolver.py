from __future__ import annotations

from jumptocode.inspector.memory import HostElement, HostObject, MemoryGraph, devtools_hook, fiber
from jumptocode.inspector.model import MAX_ANCESTOR_HOPS, Found, NoDebugSourceFound, NoHandleFound, SourceLocation
from jumptocode.inspector.resolver import Resolver, resolve


def test_owner_descriptor_end_to_end() -> None:
    owner = fiber("App", source=("/repo/src/App.tsx", 42))
    record = fiber("div", owner=owner)
    el = HostElement("div", {"__reactFiber$x9": record})
    outcome = resolve(MemoryGraph(), el)
    assert outcome == Found(SourceLocation("/repo/src/App.tsx", 42), origin=el)
    assert outcome.to_dict() == {"kind": "found", "file": "/repo/src/App.tsx", "line": 42}


def test_no_handle_in_long_chain_without_registry() -> None:
    top = HostElement("html")
    node = top
    for _ in range(MAX_ANCESTOR_HOPS):
        node = node.append(HostElement("div"))
    assert isinstance(resolve(MemoryGraph(), node), NoHandleFound)


def test_no_debug_source() -> None:
    el = HostElement("div", {"__reactFiber$x": fiber("div", parent=fiber("body"))})
    outcome = resolve(MemoryGraph(), el)
    assert isinstance(outcome, NoDebugSourceFound)
    assert outcome.to_dict() == {"kind": "no_debug_source"}


def test_resolve_is_idempotent() -> None:
    el = HostElement("span", {"__reactFiber$x": fiber("span", source=("/repo/src/S.tsx", 4))})
    resolver = Resolver(MemoryGraph())
    first = resolver.resolve(el)
    second = resolver.resolve(el)
    assert first == second
    assert first.to_dict() == second.to_dict()


def test_registry_fallback_is_used_when_no_handle() -> None:
    target = HostElement("button")
    comp = fiber("Button", source=("/repo/src/Button.tsx", 12))
    host = fiber("button", parent=comp, state_node=target)
    comp["child"] = host
    hook = devtools_hook({1: [HostObject(current=comp)]})
    graph = MemoryGraph(hook=hook)
    assert resolve(graph, target) == Found(SourceLocation("/repo/src/Button.tsx", 12), origin=target)
    assert isinstance(resolve(graph, target, use_registry=False), NoHandleFound)


def test_resolver_does_not_mutate_records() -> None:
    owner = fiber("App", source=("/repo/src/App.tsx", 1))
    record = fiber("div", owner=owner)
    before = dict(record.props)
    el = HostElement("div", {"__reactFiber$x": record})
    resolve(MemoryGraph(), el)
    assert record.props == before


def test_describe_includes_component_and_display_path() -> None:
    from jumptocode.inspector.memory import HostFunction

    comp = fiber(HostFunction("Card"), source=("webpack:///src/Card.tsx", 9))
    el = HostElement("div", {"__reactFiber$x": fiber("div", parent=comp)})
    info = Resolver(MemoryGraph()).describe(el)
    assert info["kind"] == "found"
    assert info["component"] == "Card"
    assert info["display"] == "src/Card.tsx"
    assert info["file"] == "webpack:///src/Card.tsx"
