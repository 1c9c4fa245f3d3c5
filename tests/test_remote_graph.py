from __future__ import annotations

import itertools
from typing import Any

import pytest

from jumptocode.http_client import HttpClientError
from jumptocode.inspector import remote as remote_module
from jumptocode.inspector.graph import HostError
from jumptocode.inspector.memory import HostElement, HostFunction, HostObject, MemoryGraph, devtools_hook, fiber
from jumptocode.inspector.model import Found, NoHandleFound, SourceLocation
from jumptocode.inspector.remote import RemoteGraph, RemoteRef, from_remote_object
from jumptocode.inspector.resolver import Resolver


class _FakePage:
    """Answers the CDP calls RemoteGraph makes, backed by in-memory objects.

    Like a real page, every returned handle gets a fresh objectId.
    """

    def __init__(self, hook: Any = None) -> None:
        self.world = MemoryGraph(hook=hook)
        self.handles: dict[str, Any] = {}
        self._ids = itertools.count(1)
        self.calls: list[str] = []
        self.released: list[str] = []

    def remote(self, value: Any) -> dict[str, Any]:
        if value is None:
            return {"type": "undefined"}
        if isinstance(value, bool):
            return {"type": "boolean", "value": value}
        if isinstance(value, str):
            return {"type": "string", "value": value}
        if isinstance(value, (int, float)):
            return {"type": "number", "value": value}
        oid = f"obj-{next(self._ids)}"
        self.handles[oid] = value
        if isinstance(value, HostFunction) or callable(value):
            return {"type": "function", "objectId": oid, "description": "function"}
        if isinstance(value, list):
            return {"type": "object", "subtype": "array", "objectId": oid}
        if isinstance(value, HostElement):
            return {"type": "object", "subtype": "node", "objectId": oid, "description": value.tag}
        return {"type": "object", "objectId": oid}

    def _arg(self, arg: dict[str, Any]) -> Any:
        if "objectId" in arg:
            return self.handles[arg["objectId"]]
        return arg.get("value")

    def send(self, method: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        params = params or {}
        self.calls.append(method)
        if method == "Runtime.releaseObjectGroup":
            self.released.append(params["objectGroup"])
            return {}
        if method == "Runtime.evaluate":
            assert params["expression"] == remote_module._HOOK_EXPR
            return {"result": self.remote(self.world.hook)}
        if method == "Runtime.getProperties":
            items = self.handles[params["objectId"]]
            props = [{"name": str(i), "value": self.remote(v)} for i, v in enumerate(items)]
            props.append({"name": "length", "value": {"type": "number", "value": len(items)}})
            return {"result": props}
        assert method == "Runtime.callFunctionOn"
        this = self.handles[params["objectId"]]
        args = [self._arg(a) for a in params.get("arguments", [])]
        decl = params["functionDeclaration"]
        by_value = params.get("returnByValue")
        try:
            value = self._dispatch(decl, this, args)
        except HostError as exc:
            return {"result": {"type": "object"}, "exceptionDetails": {"text": "Uncaught", "exception": {"description": str(exc)}}}
        if by_value:
            return {"result": {"type": "object", "value": value}}
        return {"result": self.remote(value)}

    def _dispatch(self, decl: str, this: Any, args: list[Any]) -> Any:
        world = self.world
        if decl == remote_module._KEYS_JS:
            return world.keys(this)
        if decl == remote_module._GET_JS:
            return world.get(this, args[0])
        if decl == remote_module._CHILDREN_JS:
            return world.children(this)
        if decl == remote_module._ITEMS_JS:
            return world.items(this)
        if decl == remote_module._MAP_KEYS_JS:
            return world.map_keys(this)
        if decl == remote_module._CALL_JS:
            return world.call(this, args[0], *args[1:])
        if decl == remote_module._SAME_JS:
            return this is args[0]
        raise AssertionError(f"unexpected function {decl}")


def _ref(page: _FakePage, value: Any) -> RemoteRef:
    ref = from_remote_object(page.remote(value))
    assert isinstance(ref, RemoteRef)
    return ref


def test_from_remote_object_maps_primitives_and_absence() -> None:
    assert from_remote_object({"type": "undefined"}) is None
    assert from_remote_object({"type": "object", "subtype": "null", "value": None}) is None
    assert from_remote_object({"type": "string", "value": "x"}) == "x"
    assert from_remote_object({"type": "number", "value": 3}) == 3
    assert from_remote_object({"type": "number", "unserializableValue": "NaN"}) is None
    ref = from_remote_object({"type": "function", "objectId": "1", "description": "f"})
    assert isinstance(ref, RemoteRef) and ref.type == "function"


def test_resolve_over_cdp_matches_in_memory_result() -> None:
    owner = fiber(HostFunction("App"), source=("/repo/src/App.tsx", 42))
    el = HostElement("div", {"id": "root", "__reactFiber$abc": fiber("div", owner=owner)})
    page = _FakePage()
    target = _ref(page, el)
    outcome = Resolver(RemoteGraph(page)).resolve(target)
    assert outcome == Found(SourceLocation("/repo/src/App.tsx", 42), origin=target)
    assert page.released == ["jumptocode"]


def test_remote_first_hop_probe_walks_children_array() -> None:
    wrapper = HostElement("div")
    inner = wrapper.append(HostElement("button"))
    inner["__reactFiber$k"] = fiber("button", source=("/repo/src/B.tsx", 3))
    page = _FakePage()
    outcome = Resolver(RemoteGraph(page)).resolve(_ref(page, wrapper))
    assert isinstance(outcome, Found)
    assert "Runtime.getProperties" in page.calls


def test_remote_registry_fallback_uses_identity_check() -> None:
    target = HostElement("button")
    comp = fiber("Button", source=("/repo/src/Button.tsx", 12))
    comp["child"] = fiber("button", parent=comp, state_node=target)
    page = _FakePage(hook=devtools_hook({1: [HostObject(current=comp)]}))
    ref = _ref(page, target)
    outcome = Resolver(RemoteGraph(page)).resolve(ref)
    assert outcome == Found(SourceLocation("/repo/src/Button.tsx", 12), origin=ref)


def test_remote_no_hook_is_no_handle() -> None:
    page = _FakePage()
    assert isinstance(Resolver(RemoteGraph(page)).resolve(_ref(page, HostElement("p"))), NoHandleFound)


def test_remote_call_raises_host_error_on_page_exception() -> None:
    def boom(renderer_id: int) -> None:
        raise RuntimeError("nope")

    page = _FakePage()
    graph = RemoteGraph(page)
    with pytest.raises(HostError, match="nope"):
        graph.call(_ref(page, HostObject(getFiberRoots=boom)), "getFiberRoots", 1)


def test_release_swallows_transport_errors() -> None:
    class _Broken:
        def send(self, method: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
            raise HttpClientError("socket closed")

    RemoteGraph(_Broken()).release()


def test_transport_errors_propagate_from_resolve() -> None:
    class _Broken:
        def send(self, method: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
            raise HttpClientError("socket closed")

    with pytest.raises(HttpClientError):
        Resolver(RemoteGraph(_Broken())).resolve(RemoteRef("obj-1"))
