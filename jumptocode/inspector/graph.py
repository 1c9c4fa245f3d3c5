"""Read-only view of host page objects.

The resolution pipeline never touches page objects directly. It asks a
`HostGraph` for property keys, property values and DOM relations, so the same
traversal runs over in-process objects (`MemoryGraph`) and over CDP remote
objects (`RemoteGraph`).

Conventions shared by every backend:
- `get` returns None for missing, null and undefined values.
- Primitive values (strings, numbers, booleans) come back as Python values.
- Everything else is an opaque handle only meaningful to the same graph.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class HostError(Exception):
    """The host raised while evaluating a read (e.g. a throwing getter or hook method)."""


class HostGraph(ABC):
    @abstractmethod
    def keys(self, obj: Any) -> list[str]:
        """Property names of `obj` in for-in enumeration order."""

    @abstractmethod
    def get(self, obj: Any, key: str) -> Any:
        """Value of `obj[key]`, or None."""

    @abstractmethod
    def children(self, element: Any) -> list[Any]:
        """Direct element children of a DOM node."""

    @abstractmethod
    def items(self, obj: Any) -> list[Any]:
        """Members of an iterable host collection (array, Set)."""

    @abstractmethod
    def map_keys(self, obj: Any) -> list[Any]:
        """Keys of a host Map (or own keys of a plain object)."""

    @abstractmethod
    def call(self, obj: Any, method: str, *args: Any) -> Any:
        """Invoke `obj[method](*args)`; raises HostError if the host throws."""

    @abstractmethod
    def same(self, a: Any, b: Any) -> bool:
        """Identity comparison of two host values."""

    @abstractmethod
    def is_function(self, obj: Any) -> bool: ...

    @abstractmethod
    def devtools_hook(self) -> Any:
        """The page's debug-hook registry object, or None."""

    def parent(self, element: Any) -> Any:
        return self.get(element, "parentNode")

    def previous_sibling(self, element: Any) -> Any:
        return self.get(element, "previousElementSibling")

    def next_sibling(self, element: Any) -> Any:
        return self.get(element, "nextElementSibling")

    def identity(self, obj: Any) -> Any:
        """Hashable key that is equal for two handles to the same host object."""
        return id(obj)

    def has_method(self, obj: Any, method: str) -> bool:
        return self.is_function(self.get(obj, method))

    def describe(self, obj: Any) -> str:
        return repr(obj)

    def release(self) -> None:
        """Drop any host-side handles allocated since the last release."""


__all__ = ["HostError", "HostGraph"]
