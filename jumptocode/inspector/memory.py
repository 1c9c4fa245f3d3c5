"""In-process host graph.

Models just enough of a page for the resolver: elements with a DOM tree,
plain property bags (records, descriptors, hook objects) and named functions
standing in for component types. Also loads JSON page snapshots so a
resolution can be replayed offline.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path
from typing import Any

from .graph import HostError, HostGraph


class HostObject:
    """Ordered property bag. Key order is the for-in enumeration order."""

    def __init__(self, props: dict[str, Any] | None = None, **kwargs: Any) -> None:
        self.props: dict[str, Any] = {**(props or {}), **kwargs}

    def __getitem__(self, key: str) -> Any:
        return self.props.get(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self.props[key] = value

    def __iter__(self) -> Iterator[str]:
        return iter(self.props)

    def __repr__(self) -> str:
        return f"<HostObject keys={list(self.props)[:6]}>"


class HostFunction(HostObject):
    """A host function value, used as a component `type`."""

    def __init__(self, name: str = "", display_name: str | None = None) -> None:
        props: dict[str, Any] = {"name": name}
        if display_name:
            props["displayName"] = display_name
        super().__init__(props)

    def __repr__(self) -> str:
        return f"<HostFunction {self.props.get('name') or 'anonymous'}>"


class HostElement(HostObject):
    """DOM element. Parent/sibling relations are derived from the child lists."""

    def __init__(self, tag: str = "div", props: dict[str, Any] | None = None, **kwargs: Any) -> None:
        super().__init__(props, **kwargs)
        self.tag = tag
        self.parent: HostElement | None = None
        self.children: list[HostElement] = []

    def append(self, child: HostElement) -> HostElement:
        if child.parent is not None:
            child.parent.children.remove(child)
        child.parent = self
        self.children.append(child)
        return child

    def _sibling(self, offset: int) -> HostElement | None:
        if self.parent is None:
            return None
        siblings = self.parent.children
        idx = siblings.index(self) + offset
        if 0 <= idx < len(siblings):
            return siblings[idx]
        return None

    def __repr__(self) -> str:
        return f"<HostElement {self.tag}>"


def fiber(
    type_: Any = None,
    *,
    parent: HostObject | None = None,
    owner: HostObject | None = None,
    source: tuple[str, int] | None = None,
    alternate: HostObject | None = None,
    state_node: Any = None,
    child: HostObject | None = None,
    sibling: HostObject | None = None,
) -> HostObject:
    """Build a record with the usual relation names."""
    props: dict[str, Any] = {"type": type_, "return": parent, "child": child, "sibling": sibling}
    props["stateNode"] = state_node
    props["alternate"] = alternate
    props["_debugOwner"] = owner
    props["_debugSource"] = HostObject(fileName=source[0], lineNumber=source[1]) if source else None
    return HostObject(props)


class MemoryGraph(HostGraph):
    def __init__(self, hook: Any = None) -> None:
        self.hook = hook

    def keys(self, obj: Any) -> list[str]:
        if isinstance(obj, HostObject):
            return list(obj.props)
        if isinstance(obj, dict):
            return [str(k) for k in obj]
        return []

    def get(self, obj: Any, key: str) -> Any:
        if isinstance(obj, HostElement):
            if key == "parentNode":
                return obj.parent
            if key == "previousElementSibling":
                return obj._sibling(-1)
            if key == "nextElementSibling":
                return obj._sibling(1)
        if isinstance(obj, HostObject):
            return obj.props.get(key)
        if isinstance(obj, dict):
            return obj.get(key)
        return None

    def children(self, element: Any) -> list[Any]:
        if isinstance(element, HostElement):
            return list(element.children)
        return []

    def items(self, obj: Any) -> list[Any]:
        if isinstance(obj, (list, tuple, set, frozenset)):
            return list(obj)
        return []

    def map_keys(self, obj: Any) -> list[Any]:
        if isinstance(obj, dict):
            return list(obj)
        if isinstance(obj, HostObject):
            return list(obj.props)
        return []

    def call(self, obj: Any, method: str, *args: Any) -> Any:
        fn = self.get(obj, method)
        if not callable(fn):
            raise HostError(f"{method} is not a function")
        try:
            return fn(*args)
        except Exception as exc:  # noqa: BLE001
            raise HostError(str(exc)) from exc

    def same(self, a: Any, b: Any) -> bool:
        return a is b

    def is_function(self, obj: Any) -> bool:
        return isinstance(obj, HostFunction) or callable(obj)

    def devtools_hook(self) -> Any:
        return self.hook


def devtools_hook(roots_by_renderer: dict[int, Iterable[Any]]) -> HostObject:
    """Build a debug-hook registry exposing `renderers` and `getFiberRoots`."""
    table = {int(k): list(v) for k, v in roots_by_renderer.items()}

    def get_fiber_roots(renderer_id: int) -> list[Any]:
        return table.get(int(renderer_id), [])

    return HostObject(renderers={k: HostObject() for k in table}, getFiberRoots=get_fiber_roots)


# Snapshot format:
#   {"objects": {"<id>": {"$element": "div", "parent": "<id>", "props": {...}},
#                "<id>": {"$function": "Button"},
#                "<id>": {"props": {...}}},
#    "roots": {"1": ["<id>", ...]},
#    "target": "<id>"}
# Inside props, {"$ref": "<id>"} points at another object.


def _load_value(raw: Any, resolve: Callable[[str], Any]) -> Any:
    if isinstance(raw, dict):
        if set(raw) == {"$ref"}:
            return resolve(str(raw["$ref"]))
        return HostObject({k: _load_value(v, resolve) for k, v in raw.items()})
    if isinstance(raw, list):
        return [_load_value(v, resolve) for v in raw]
    return raw


def load_snapshot(data: dict[str, Any]) -> tuple[MemoryGraph, dict[str, Any]]:
    """Rebuild a host graph from snapshot data. Returns (graph, objects by id)."""
    specs = data.get("objects") or {}
    if not isinstance(specs, dict):
        raise ValueError("snapshot 'objects' must be a mapping")

    objects: dict[str, Any] = {}
    for oid, spec in specs.items():
        spec = spec or {}
        if "$function" in spec:
            objects[oid] = HostFunction(str(spec["$function"] or ""), spec.get("displayName"))
        elif "$element" in spec:
            objects[oid] = HostElement(str(spec["$element"] or "div"))
        else:
            objects[oid] = HostObject()

    def resolve(ref: str) -> Any:
        if ref not in objects:
            raise ValueError(f"snapshot reference to unknown object {ref!r}")
        return objects[ref]

    for oid, spec in specs.items():
        spec = spec or {}
        obj = objects[oid]
        for key, raw in (spec.get("props") or {}).items():
            obj.props[key] = _load_value(raw, resolve)
        parent_id = spec.get("parent")
        if isinstance(obj, HostElement) and parent_id is not None:
            parent = resolve(str(parent_id))
            if not isinstance(parent, HostElement):
                raise ValueError(f"parent of {oid!r} is not an element")
            parent.append(obj)

    hook = None
    roots = data.get("roots")
    if isinstance(roots, dict) and roots:
        hook = devtools_hook({int(rid): [resolve(str(r)) for r in refs] for rid, refs in roots.items()})
    return MemoryGraph(hook=hook), objects


def read_snapshot(path: str | Path) -> tuple[MemoryGraph, dict[str, Any], Any]:
    """Load a snapshot file. Returns (graph, objects, target element or None)."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    graph, objects = load_snapshot(data)
    target_id = data.get("target")
    target = objects.get(str(target_id)) if target_id is not None else None
    return graph, objects, target


__all__ = [
    "HostElement",
    "HostFunction",
    "HostObject",
    "MemoryGraph",
    "devtools_hook",
    "fiber",
    "load_snapshot",
    "read_snapshot",
]
