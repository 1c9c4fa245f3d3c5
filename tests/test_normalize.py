from __future__ import annotations

import pytest

from jumptocode.inspector.model import SourceLocation
from jumptocode.inspector.normalize import display_path, normalize, strip_bundler_prefix


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("webpack:///src/components/Button.tsx", "src/components/Button.tsx"),
        ("webpack://src/App.tsx", "src/App.tsx"),
        ("./src/App.tsx", "src/App.tsx"),
        ("webpack:///./src/App.tsx", "src/App.tsx"),
        ("file:///home/me/app/src/App.tsx", "/home/me/app/src/App.tsx"),
        ("/Users/me/app/src/App.tsx", "/Users/me/app/src/App.tsx"),
        ("C:/work/app/src/App.tsx", "C:/work/app/src/App.tsx"),
    ],
)
def test_strip_bundler_prefix(raw: str, expected: str) -> None:
    assert strip_bundler_prefix(raw) == expected


def test_display_path_starts_at_source_root() -> None:
    assert display_path("webpack:///src/components/Button.tsx") == "src/components/Button.tsx"
    assert display_path("/home/me/proj/app/routes/index.tsx") == "app/routes/index.tsx"


def test_display_path_prefers_earlier_root_names() -> None:
    assert display_path("/repo/app/src/main.tsx") == "src/main.tsx"


def test_display_path_long_unknown_path_uses_last_two_segments() -> None:
    assert display_path("/home/me/proj/ui/Button.tsx") == ".../ui/Button.tsx"


def test_display_path_short_unknown_path_is_filename() -> None:
    assert display_path("/ui/widgets/Button.tsx") == "Button.tsx"
    assert display_path("Button.tsx") == "Button.tsx"


def test_normalize_keeps_raw_file() -> None:
    loc = normalize({"fileName": "webpack:///src/App.tsx", "lineNumber": 7})
    assert loc == SourceLocation("webpack:///src/App.tsx", 7)


def test_normalize_accepts_string_line_and_rejects_invalid() -> None:
    assert normalize({"file": " /a/b.tsx ", "line": "3"}) == SourceLocation("/a/b.tsx", 3)
    with pytest.raises(ValueError):
        normalize({"fileName": "/a/b.tsx", "lineNumber": 0})
    with pytest.raises(ValueError):
        normalize({"fileName": "", "lineNumber": 1})
    with pytest.raises(TypeError):
        normalize("not a descriptor")


def test_source_location_invariants() -> None:
    with pytest.raises(ValueError):
        SourceLocation("/a.tsx", True)  # type: ignore[arg-type]
    assert str(SourceLocation("/a.tsx", 2)) == "/a.tsx:2"
