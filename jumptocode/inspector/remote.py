"""Host graph over CDP remote objects.

Every read is a `Runtime.callFunctionOn` against the page's main world, so
React's element-attached properties and the devtools hook are visible. All
handles are allocated in one object group; `release()` frees them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol

from ..http_client import HttpClientError
from .graph import HostError, HostGraph

logger = logging.getLogger("jumptocode.inspector")

OBJECT_GROUP = "jumptocode"

_KEYS_JS = "function() { const out = []; for (const k in this) out.push(k); return out; }"
_GET_JS = "function(k) { return this[k]; }"
_CHILDREN_JS = "function() { return Array.from(this.children || []); }"
_ITEMS_JS = "function() { return Array.from(this); }"
_MAP_KEYS_JS = "function() { return this instanceof Map ? Array.from(this.keys()) : Object.keys(this); }"
_CALL_JS = "function(name, ...args) { return this[name](...args); }"
_SAME_JS = "function(other) { return this === other; }"
_HOOK_EXPR = "globalThis.__REACT_DEVTOOLS_GLOBAL_HOOK__"


class CdpSender(Protocol):
    def send(self, method: str, params: dict[str, Any] | None = None) -> dict[str, Any]: ...


@dataclass(frozen=True)
class RemoteRef:
    """Handle to a non-primitive value living in the page."""

    object_id: str
    type: str = "object"
    subtype: str | None = None
    class_name: str | None = None
    description: str | None = None

    def __repr__(self) -> str:
        return f"<RemoteRef {self.description or self.type}>"


def from_remote_object(obj: Any) -> Any:
    """Map a CDP RemoteObject to None, a Python primitive or a RemoteRef."""
    if not isinstance(obj, dict):
        return None
    kind = obj.get("type")
    if kind == "undefined" or obj.get("subtype") == "null":
        return None
    if kind in ("string", "number", "boolean"):
        # NaN/Infinity arrive as unserializableValue with no value.
        return obj.get("value")
    object_id = obj.get("objectId")
    if not isinstance(object_id, str) or not object_id:
        return obj.get("value")
    return RemoteRef(
        object_id=object_id,
        type=str(kind or "object"),
        subtype=obj.get("subtype"),
        class_name=obj.get("className"),
        description=obj.get("description"),
    )


def _argument(value: Any) -> dict[str, Any]:
    if isinstance(value, RemoteRef):
        return {"objectId": value.object_id}
    return {"value": value}


class RemoteGraph(HostGraph):
    def __init__(self, session: CdpSender, *, object_group: str = OBJECT_GROUP) -> None:
        self.session = session
        self.object_group = object_group

    def _call_on(self, target: Any, declaration: str, *args: Any, by_value: bool = False) -> Any:
        if not isinstance(target, RemoteRef):
            return None
        params: dict[str, Any] = {
            "objectId": target.object_id,
            "functionDeclaration": declaration,
            "returnByValue": by_value,
            "silent": True,
        }
        if args:
            params["arguments"] = [_argument(a) for a in args]
        if not by_value:
            params["objectGroup"] = self.object_group
        result = self.session.send("Runtime.callFunctionOn", params)
        details = result.get("exceptionDetails")
        if details:
            exc = details.get("exception") if isinstance(details, dict) else None
            desc = exc.get("description") if isinstance(exc, dict) else None
            raise HostError(str(desc or details.get("text") or "host exception"))
        remote = result.get("result")
        if by_value:
            return remote.get("value") if isinstance(remote, dict) else None
        return from_remote_object(remote)

    def _list(self, ref: Any) -> list[Any]:
        if not isinstance(ref, RemoteRef):
            return []
        result = self.session.send(
            "Runtime.getProperties",
            {"objectId": ref.object_id, "ownProperties": True, "generatePreview": False},
        )
        indexed: list[tuple[int, Any]] = []
        for prop in result.get("result") or []:
            name = prop.get("name") if isinstance(prop, dict) else None
            if not isinstance(name, str) or not name.isdigit():
                continue
            indexed.append((int(name), from_remote_object(prop.get("value"))))
        indexed.sort(key=lambda pair: pair[0])
        return [value for _, value in indexed]

    def keys(self, obj: Any) -> list[str]:
        try:
            out = self._call_on(obj, _KEYS_JS, by_value=True)
        except HostError as exc:
            logger.debug("key enumeration failed on %s: %s", self.describe(obj), exc)
            return []
        return [str(k) for k in out] if isinstance(out, list) else []

    def get(self, obj: Any, key: str) -> Any:
        try:
            return self._call_on(obj, _GET_JS, key)
        except HostError as exc:
            logger.debug("read of %r failed on %s: %s", key, self.describe(obj), exc)
            return None

    def children(self, element: Any) -> list[Any]:
        try:
            return self._list(self._call_on(element, _CHILDREN_JS))
        except HostError:
            return []

    def items(self, obj: Any) -> list[Any]:
        try:
            return self._list(self._call_on(obj, _ITEMS_JS))
        except HostError:
            return []

    def map_keys(self, obj: Any) -> list[Any]:
        try:
            out = self._call_on(obj, _MAP_KEYS_JS, by_value=True)
        except HostError:
            return []
        return list(out) if isinstance(out, list) else []

    def call(self, obj: Any, method: str, *args: Any) -> Any:
        if not isinstance(obj, RemoteRef):
            raise HostError(f"cannot call {method} on a primitive")
        return self._call_on(obj, _CALL_JS, method, *args)

    def same(self, a: Any, b: Any) -> bool:
        if not isinstance(a, RemoteRef) or not isinstance(b, RemoteRef):
            return a is not None and a == b
        if a.object_id == b.object_id:
            return True
        try:
            return bool(self._call_on(a, _SAME_JS, b, by_value=True))
        except HostError:
            return False

    def identity(self, obj: Any) -> Any:
        if isinstance(obj, RemoteRef):
            return obj.object_id
        return id(obj)

    def is_function(self, obj: Any) -> bool:
        return isinstance(obj, RemoteRef) and obj.type == "function"

    def devtools_hook(self) -> Any:
        result = self.session.send(
            "Runtime.evaluate",
            {"expression": _HOOK_EXPR, "objectGroup": self.object_group, "silent": True},
        )
        if result.get("exceptionDetails"):
            return None
        return from_remote_object(result.get("result"))

    def describe(self, obj: Any) -> str:
        if isinstance(obj, RemoteRef):
            return obj.description or obj.class_name or obj.type
        return repr(obj)

    def release(self) -> None:
        try:
            self.session.send("Runtime.releaseObjectGroup", {"objectGroup": self.object_group})
        except HttpClientError as exc:
            logger.debug("releaseObjectGroup failed: %s", exc)


__all__ = ["OBJECT_GROUP", "RemoteGraph", "RemoteRef", "from_remote_object"]
