"""Local HTTP service that opens `{file, line}` in the editor.

Routes:
- GET  /health -> service status
- POST /open   -> {"file": str, "line": int?}
- OPTIONS *    -> CORS preflight for http://localhost:<port> origins

Every reply is JSON. Failures carry `alertUser` plus an `alertMessage` the
page can show verbatim; an unavailable editor is flagged with
`vscodeNotInstalled` and echoes the resolved file and line.
"""

from __future__ import annotations

import json
import logging
import math
import re
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any

from .. import __version__
from ..config import HelperConfig
from .editor import EditorLauncher, EditorLaunchError, EditorNotFound
from .paths import locate_file

logger = logging.getLogger("jumptocode.helper")

ALLOWED_ORIGIN_RE = re.compile(r"^http://localhost:\d+$")
MAX_BODY_BYTES = 64 * 1024


def _parse_line(raw: Any) -> int:
    if isinstance(raw, bool):
        return 1
    if isinstance(raw, (int, float)) and math.isfinite(raw) and raw >= 1:
        return int(raw)
    if isinstance(raw, str) and raw.strip().isdigit() and int(raw.strip()) >= 1:
        return int(raw.strip())
    return 1


class HelperService:
    """Request handling independent of the HTTP transport."""

    def __init__(self, config: HelperConfig, launcher: EditorLauncher | None = None) -> None:
        self.config = config
        self.launcher = launcher or EditorLauncher(config.editor, timeout=config.editor_timeout)

    def health(self) -> tuple[int, dict[str, Any]]:
        return HTTPStatus.OK, {
            "status": "ok",
            "message": "JumpToCode helper server is running",
            "version": __version__,
        }

    def open(self, payload: Any) -> tuple[int, dict[str, Any]]:
        if not isinstance(payload, dict):
            return HTTPStatus.BAD_REQUEST, {"error": "Invalid JSON body", "alertUser": True}
        file = payload.get("file")
        if not isinstance(file, str) or not file.strip():
            logger.error("missing file path in request")
            return HTTPStatus.BAD_REQUEST, {"error": "Missing file path", "alertUser": True}
        line = _parse_line(payload.get("line"))
        logger.info("received request: %s:%s", file, line)

        path = locate_file(file, self.config.project_root, self.config.common_dirs)
        if path is None:
            logger.error("file not found: %s", file)
            return HTTPStatus.NOT_FOUND, {
                "error": "File not found",
                "file": file,
                "alertUser": True,
                "alertMessage": f"File not found: {file}",
            }

        editor = self.launcher.label
        try:
            self.launcher.open(path, line)
        except EditorNotFound as exc:
            logger.warning("%s", exc)
            return HTTPStatus.SERVICE_UNAVAILABLE, {
                "error": str(exc),
                "vscodeNotInstalled": True,
                "file": str(path),
                "line": line,
                "alertUser": True,
                "alertMessage": (
                    f"{editor} not found!\n\nFile: {path}\nLine: {line}\n\n"
                    f"Please install {editor} or add '{self.launcher.command}' command to your PATH."
                ),
            }
        except EditorLaunchError as exc:
            logger.error("error opening file: %s", exc)
            return HTTPStatus.INTERNAL_SERVER_ERROR, {
                "error": f"Failed to open file in {editor}",
                "details": str(exc),
                "file": str(path),
                "line": line,
                "alertUser": True,
                "alertMessage": f"Failed to open in {editor}\n\nFile: {path}\nLine: {line}\n\nError: {exc}",
            }

        logger.info("opened %s:%s", path, line)
        return HTTPStatus.OK, {
            "success": True,
            "message": "File opened successfully",
            "editor": editor,
            "file": str(path),
            "line": line,
        }


class HelperRequestHandler(BaseHTTPRequestHandler):
    server: HelperHTTPServer
    server_version = f"jumptocode/{__version__}"

    def log_message(self, format: str, *args: Any) -> None:  # noqa: A002
        logger.debug("%s - %s", self.address_string(), format % args)

    def _cors_headers(self) -> None:
        origin = self.headers.get("Origin") or ""
        if ALLOWED_ORIGIN_RE.match(origin):
            self.send_header("Access-Control-Allow-Origin", origin)
            self.send_header("Vary", "Origin")
            self.send_header("Access-Control-Allow-Methods", "POST, GET, OPTIONS")
            self.send_header("Access-Control-Allow-Headers", "Content-Type")

    def _reply(self, status: int, body: dict[str, Any]) -> None:
        data = json.dumps(body, ensure_ascii=False).encode()
        self.send_response(int(status))
        self.send_header("Content-Type", "application/json; charset=utf-8")
        self.send_header("Content-Length", str(len(data)))
        self._cors_headers()
        self.end_headers()
        self.wfile.write(data)

    def _read_json(self) -> Any:
        try:
            length = int(self.headers.get("Content-Length") or 0)
        except ValueError:
            length = 0
        if length <= 0 or length > MAX_BODY_BYTES:
            return None
        raw = self.rfile.read(length)
        try:
            return json.loads(raw.decode())
        except (UnicodeDecodeError, json.JSONDecodeError):
            return None

    def do_OPTIONS(self) -> None:  # noqa: N802
        self.send_response(HTTPStatus.NO_CONTENT)
        self._cors_headers()
        self.send_header("Content-Length", "0")
        self.end_headers()

    def do_GET(self) -> None:  # noqa: N802
        if self.path.split("?", 1)[0] != "/health":
            self._reply(HTTPStatus.NOT_FOUND, {"error": "Not found"})
            return
        self._reply(*self.server.service.health())

    def do_POST(self) -> None:  # noqa: N802
        if self.path.split("?", 1)[0] != "/open":
            self._reply(HTTPStatus.NOT_FOUND, {"error": "Not found"})
            return
        try:
            status, body = self.server.service.open(self._read_json())
        except Exception as exc:  # noqa: BLE001
            logger.exception("unexpected error handling /open")
            status, body = HTTPStatus.INTERNAL_SERVER_ERROR, {
                "error": "Internal error",
                "details": str(exc),
                "alertUser": True,
            }
        self._reply(status, body)


class HelperHTTPServer(ThreadingHTTPServer):
    daemon_threads = True

    def __init__(self, address: tuple[str, int], service: HelperService) -> None:
        self.service = service
        super().__init__(address, HelperRequestHandler)


def create_server(config: HelperConfig, service: HelperService | None = None) -> HelperHTTPServer:
    return HelperHTTPServer((config.host, config.port), service or HelperService(config))


def serve(config: HelperConfig | None = None) -> None:
    config = config or HelperConfig.from_env()
    httpd = create_server(config)
    host, port = httpd.server_address[:2]
    logger.info("JumpToCode helper server v%s running on http://%s:%s", __version__, host, port)
    logger.info("project root: %s", config.project_root)
    launcher = httpd.service.launcher
    if launcher.available():
        logger.info("%s detected and ready", launcher.label)
    else:
        logger.warning("'%s' command not found in PATH; pages will show the file location instead", launcher.command)
    try:
        httpd.serve_forever()
    except KeyboardInterrupt:
        logger.info("shutting down JumpToCode helper server")
    finally:
        httpd.server_close()


__all__ = ["HelperHTTPServer", "HelperService", "create_server", "serve"]
