from __future__ import annotations

import json
import urllib.parse
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

USER_AGENT = "jumptocode/1.0"


class HttpClientError(Exception):
    pass


def _ensure_http(url: str) -> None:
    parsed = urllib.parse.urlparse(url)
    if parsed.scheme not in ("http", "https"):
        raise HttpClientError("Only http/https are supported")


def _decode(body: bytes) -> Any:
    if not body:
        return None
    try:
        return json.loads(body.decode())
    except (UnicodeDecodeError, json.JSONDecodeError):
        return body.decode(errors="replace")


def get_json(url: str, timeout: float = 2.0) -> Any:
    """Fetch JSON from URL."""
    _ensure_http(url)
    req = Request(url, headers={"User-Agent": USER_AGENT})
    try:
        with urlopen(req, timeout=timeout) as resp:
            return json.loads(resp.read().decode())
    except (TimeoutError, URLError) as exc:
        raise HttpClientError(str(exc)) from exc


def post_json(url: str, payload: dict[str, Any], timeout: float = 5.0) -> tuple[int, Any]:
    """POST a JSON body and return (status, decoded body).

    Non-2xx replies are returned, not raised: callers classify them. Only
    transport failures raise HttpClientError.
    """
    _ensure_http(url)
    data = json.dumps(payload).encode()
    req = Request(
        url,
        data=data,
        method="POST",
        headers={"User-Agent": USER_AGENT, "Content-Type": "application/json"},
    )
    try:
        with urlopen(req, timeout=timeout) as resp:
            return resp.status, _decode(resp.read())
    except HTTPError as exc:
        try:
            body = exc.read()
        except Exception:  # noqa: BLE001
            body = b""
        return exc.code, _decode(body)
    except (TimeoutError, URLError) as exc:
        raise HttpClientError(str(exc)) from exc
