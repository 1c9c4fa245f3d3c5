from __future__ import annotations

from jumptocode.inspector.debug_source import component_name, extract
from jumptocode.inspector.memory import HostFunction, HostObject, MemoryGraph, fiber
from jumptocode.inspector.model import MAX_DEBUG_SOURCE_DEPTH, SourceLocation


def _record_chain(length: int) -> list[HostObject]:
    """records[0] is the leaf; records[i] is i hops up `return`."""
    records = [fiber("div")]
    for _ in range(length - 1):
        parent = fiber("div")
        records[-1]["return"] = parent
        records.append(parent)
    return records


def _describe(file: str, line: int) -> HostObject:
    return HostObject(fileName=file, lineNumber=line)


def test_own_descriptor_is_returned() -> None:
    leaf = fiber("div", source=("/repo/src/A.tsx", 3))
    assert extract(MemoryGraph(), leaf) == SourceLocation("/repo/src/A.tsx", 3)


def test_descriptor_beyond_depth_budget_is_not_found() -> None:
    records = _record_chain(60)
    records[55]["_debugSource"] = _describe("/repo/src/Deep.tsx", 1)
    assert extract(MemoryGraph(), records[0]) is None


def test_depth_budget_boundary() -> None:
    records = _record_chain(60)
    records[MAX_DEBUG_SOURCE_DEPTH - 1]["_debugSource"] = _describe("/repo/src/At49.tsx", 49)
    assert extract(MemoryGraph(), records[0]) == SourceLocation("/repo/src/At49.tsx", 49)

    records = _record_chain(60)
    records[MAX_DEBUG_SOURCE_DEPTH]["_debugSource"] = _describe("/repo/src/At50.tsx", 50)
    assert extract(MemoryGraph(), records[0]) is None


def test_owner_descriptor_preferred_over_return_ancestor() -> None:
    records = _record_chain(4)
    records[2]["_debugSource"] = _describe("/repo/src/Ancestor.tsx", 10)
    owner = fiber("Card", source=("/repo/src/Owner.tsx", 77))
    records[0]["_debugOwner"] = owner
    assert extract(MemoryGraph(), records[0]) == SourceLocation("/repo/src/Owner.tsx", 77)


def test_alternate_descriptor_used_when_current_has_none() -> None:
    twin = fiber("div", source=("/repo/src/Twin.tsx", 8))
    leaf = fiber("div", alternate=twin, parent=fiber("div", source=("/repo/src/Up.tsx", 1)))
    assert extract(MemoryGraph(), leaf) == SourceLocation("/repo/src/Twin.tsx", 8)
    assert extract(MemoryGraph(), leaf, check_alternate=False) == SourceLocation("/repo/src/Up.tsx", 1)


def test_owner_without_descriptor_keeps_climbing() -> None:
    parent = fiber("Layout", source=("/repo/src/Layout.tsx", 5))
    leaf = fiber("div", owner=fiber("Nameless"), parent=parent)
    assert extract(MemoryGraph(), leaf) == SourceLocation("/repo/src/Layout.tsx", 5)


def test_malformed_descriptor_is_skipped() -> None:
    parent = fiber("div", source=("/repo/src/Good.tsx", 2))
    leaf = fiber("div", parent=parent)
    leaf["_debugSource"] = HostObject(fileName="", lineNumber=0)
    assert extract(MemoryGraph(), leaf) == SourceLocation("/repo/src/Good.tsx", 2)


def test_float_line_numbers_from_the_host_are_accepted() -> None:
    leaf = fiber("div")
    leaf["_debugSource"] = HostObject(fileName="/repo/src/F.tsx", lineNumber=12.0)
    assert extract(MemoryGraph(), leaf) == SourceLocation("/repo/src/F.tsx", 12)


def test_cyclic_return_links_terminate() -> None:
    a, b = fiber("div"), fiber("div")
    a["return"] = b
    b["return"] = a
    assert extract(MemoryGraph(), a) is None


def test_none_record_is_not_found() -> None:
    assert extract(MemoryGraph(), None) is None


def test_component_name_prefers_display_name() -> None:
    comp = fiber(HostFunction("Btn", display_name="Button"))
    host = fiber("button", parent=comp)
    assert component_name(MemoryGraph(), host) == "Button"


def test_component_name_none_for_host_only_chain() -> None:
    assert component_name(MemoryGraph(), fiber("div", parent=fiber("span"))) is None


def test_component_name_budget() -> None:
    records = _record_chain(30)
    records[25]["type"] = HostFunction("Far")
    assert component_name(MemoryGraph(), records[0]) is None
    records[19]["type"] = HostFunction("Near")
    assert component_name(MemoryGraph(), records[0]) == "Near"
