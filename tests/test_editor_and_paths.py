from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from jumptocode.helper import editor as editor_module
from jumptocode.helper.editor import EditorLauncher, EditorLaunchError, EditorNotFound
from jumptocode.helper.paths import locate_file, resolve_path


def test_resolve_path_keeps_absolute_and_joins_relative(tmp_path: Path) -> None:
    assert resolve_path("/abs/file.tsx", tmp_path) == Path("/abs/file.tsx").resolve()
    assert resolve_path("webpack:///src/a.tsx", tmp_path) == (tmp_path / "src" / "a.tsx").resolve()
    assert resolve_path("./lib/b.ts", tmp_path) == (tmp_path / "lib" / "b.ts").resolve()


def test_locate_file_returns_none_for_blank_or_missing(tmp_path: Path) -> None:
    assert locate_file("", tmp_path, ["src"]) is None
    assert locate_file("src/missing.tsx", tmp_path, ["src"]) is None


def test_build_command_uses_goto_with_line(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(editor_module.shutil, "which", lambda cmd: f"/usr/bin/{cmd}")
    cmd = EditorLauncher("code").build_command("/repo/src/App.tsx", 42)
    assert cmd == ["/usr/bin/code", "--reuse-window", "--goto", "/repo/src/App.tsx:42"]


def test_open_raises_when_editor_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(editor_module.shutil, "which", lambda cmd: None)
    launcher = EditorLauncher("code")
    assert not launcher.available()
    with pytest.raises(EditorNotFound):
        launcher.open("/repo/src/App.tsx", 1)


def test_open_nonzero_exit_is_launch_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(editor_module.shutil, "which", lambda cmd: "/usr/bin/code")

    def fake_run(cmd, **kwargs):  # noqa: ANN001, ANN003, ANN202
        return subprocess.CompletedProcess(cmd, 1, stdout="", stderr="cannot open")

    monkeypatch.setattr(editor_module.subprocess, "run", fake_run)
    with pytest.raises(EditorLaunchError, match="cannot open"):
        EditorLauncher("code").open("/repo/src/App.tsx", 1)


def test_open_exec_error_is_launch_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(editor_module.shutil, "which", lambda cmd: "/usr/bin/code")

    def fake_run(cmd, **kwargs):  # noqa: ANN001, ANN003, ANN202
        raise subprocess.TimeoutExpired(cmd, 10)

    monkeypatch.setattr(editor_module.subprocess, "run", fake_run)
    with pytest.raises(EditorLaunchError):
        EditorLauncher("code").open("/repo/src/App.tsx", 1)


def test_open_success_passes_goto_target(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(editor_module.shutil, "which", lambda cmd: "/usr/bin/code")
    seen: list[list[str]] = []

    def fake_run(cmd, **kwargs):  # noqa: ANN001, ANN003, ANN202
        seen.append(cmd)
        return subprocess.CompletedProcess(cmd, 0, stdout="ok", stderr="")

    monkeypatch.setattr(editor_module.subprocess, "run", fake_run)
    assert EditorLauncher("code").open("/repo/src/App.tsx", 7) == "ok"
    assert seen[0][-1] == "/repo/src/App.tsx:7"


def test_editor_label() -> None:
    assert EditorLauncher("code").label == "VS Code"
    assert EditorLauncher("/opt/bin/cursor").label == "Cursor"
    assert EditorLauncher("vim-remote").label == "vim-remote"
