"""Editor launcher: `code --reuse-window --goto path:line`."""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger("jumptocode.helper")

EDITOR_LABELS = {"code": "VS Code", "code-insiders": "VS Code Insiders", "codium": "VSCodium", "cursor": "Cursor"}


class EditorNotFound(Exception):
    pass


class EditorLaunchError(Exception):
    pass


@dataclass
class EditorLauncher:
    command: str = "code"
    timeout: float = 10.0

    @property
    def label(self) -> str:
        return EDITOR_LABELS.get(Path(self.command).name, self.command)

    def available(self) -> bool:
        return shutil.which(self.command) is not None

    def build_command(self, path: str | Path, line: int) -> list[str]:
        executable = shutil.which(self.command) or self.command
        return [executable, "--reuse-window", "--goto", f"{path}:{line}"]

    def open(self, path: str | Path, line: int) -> str:
        """Launch the editor at `path:line`. Returns the editor's stdout."""
        if not self.available():
            raise EditorNotFound(f"{self.label} not installed or '{self.command}' command not in PATH")
        cmd = self.build_command(path, line)
        logger.info("opening %s:%s in %s", path, line, self.label)
        logger.debug("command: %s", cmd)
        try:
            proc = subprocess.run(cmd, capture_output=True, text=True, timeout=self.timeout, check=False)
        except (OSError, subprocess.SubprocessError) as exc:
            raise EditorLaunchError(str(exc)) from exc
        if proc.returncode != 0:
            detail = (proc.stderr or proc.stdout or "").strip()
            raise EditorLaunchError(f"exit code {proc.returncode}" + (f": {detail}" if detail else ""))
        return proc.stdout or ""


__all__ = ["EditorLaunchError", "EditorLauncher", "EditorNotFound"]
