"""
Helper side of the jump: turns `{file, line}` into an editor-open command.

- paths: descriptor path -> file on disk
- editor: editor CLI detection and launch
- server: local HTTP service (/health, /open)
- client: typed client used by the calling layer
"""

from .client import EditorUnavailable, FileNotFound, OpenClient, OpenFailed, Opened, OpenResult, classify_reply
from .editor import EditorLauncher, EditorLaunchError, EditorNotFound
from .server import HelperService, create_server, serve

__all__ = [
    "EditorLaunchError",
    "EditorLauncher",
    "EditorNotFound",
    "EditorUnavailable",
    "FileNotFound",
    "HelperService",
    "OpenClient",
    "OpenFailed",
    "OpenResult",
    "Opened",
    "classify_reply",
    "create_server",
    "serve",
]
