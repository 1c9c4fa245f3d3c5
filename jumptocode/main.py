"""
Command-line entry point.

    jumptocode serve                      run the helper service
    jumptocode health                     check that the helper is up
    jumptocode resolve --selector CSS     resolve an element of a live tab
    jumptocode resolve --point X Y --open resolve and open in the editor
    jumptocode snapshot page.json         resolve over a saved page snapshot
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import Any

from . import __version__
from .config import HelperConfig, InspectorConfig
from .errors import JumpError
from .helper.client import OpenClient
from .helper.server import serve
from .inspector.memory import read_snapshot
from .inspector.model import SourceLocation
from .inspector.resolver import Resolver
from .jump import open_notice

logger = logging.getLogger("jumptocode")


def _configure_logging() -> None:
    level = logging.DEBUG if os.environ.get("JUMPTOCODE_TRACE") == "1" else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(message)s", stream=sys.stderr)


def _print(payload: Any) -> None:
    sys.stdout.write(json.dumps(payload, ensure_ascii=False, indent=2) + "\n")
    sys.stdout.flush()


def _open_found(info: dict[str, Any]) -> dict[str, Any]:
    if info.get("kind") != "found":
        return info
    result = OpenClient(HelperConfig.from_env()).open(SourceLocation(info["file"], int(info["line"])))
    notice = open_notice(result)
    info["open"] = {"kind": result.kind, "message": notice.message, "persistent": notice.persistent}
    return info


def _cmd_serve(args: argparse.Namespace) -> int:
    config = HelperConfig.from_env()
    if args.port is not None:
        config.port = args.port
    if args.root:
        config.project_root = os.path.abspath(os.path.expanduser(args.root))
    if args.editor:
        config.editor = args.editor
    serve(config)
    return 0


def _cmd_health(args: argparse.Namespace) -> int:  # noqa: ARG001
    client = OpenClient(HelperConfig.from_env())
    data = client.health()
    if data is None:
        _print({"status": "offline", "url": client.base_url})
        return 1
    _print(data)
    return 0


def _cmd_resolve(args: argparse.Namespace) -> int:
    from .page import resolve_in_tab

    config = InspectorConfig.from_env()
    if args.no_registry:
        config.use_registry = False
    point = (args.point[0], args.point[1]) if args.point else None
    info = resolve_in_tab(config, selector=args.selector, point=point, tab_id=args.tab)
    if args.open:
        info = _open_found(info)
    _print(info)
    return 0 if info.get("kind") == "found" else 2


def _cmd_snapshot(args: argparse.Namespace) -> int:
    try:
        graph, objects, target = read_snapshot(args.path)
    except (OSError, ValueError) as exc:
        raise JumpError(
            tool="snapshot",
            action="load",
            reason=f"Cannot load snapshot {args.path}: {exc}",
            suggestion="Pass a JSON snapshot file with 'objects' and 'target'",
        ) from exc
    if args.target:
        target = objects.get(args.target)
    if target is None:
        raise JumpError(
            tool="snapshot",
            action="load",
            reason="Snapshot has no target element",
            suggestion="Pass --target <object id>",
        )
    info = Resolver(graph, use_registry=not args.no_registry).describe(target)
    if args.open:
        info = _open_found(info)
    _print(info)
    return 0 if info.get("kind") == "found" else 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="jumptocode", description="Jump from a rendered element to its source line")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command", required=True)

    p_serve = sub.add_parser("serve", help="run the open-in-editor helper service")
    p_serve.add_argument("--port", type=int, default=None)
    p_serve.add_argument("--root", default=None, help="project root for relative paths")
    p_serve.add_argument("--editor", default=None, help="editor CLI (default: code)")
    p_serve.set_defaults(func=_cmd_serve)

    p_health = sub.add_parser("health", help="check the helper service")
    p_health.set_defaults(func=_cmd_health)

    p_resolve = sub.add_parser("resolve", help="resolve an element of a live tab over CDP")
    where = p_resolve.add_mutually_exclusive_group(required=True)
    where.add_argument("--selector", help="CSS selector of the element")
    where.add_argument("--point", type=float, nargs=2, metavar=("X", "Y"), help="viewport coordinates")
    p_resolve.add_argument("--tab", default=None, help="CDP target id (default: first localhost tab)")
    p_resolve.add_argument("--open", action="store_true", help="open the result through the helper")
    p_resolve.add_argument("--no-registry", action="store_true", help="skip the devtools hook fallback")
    p_resolve.set_defaults(func=_cmd_resolve)

    p_snap = sub.add_parser("snapshot", help="resolve over a saved page snapshot")
    p_snap.add_argument("path")
    p_snap.add_argument("--target", default=None, help="object id of the element")
    p_snap.add_argument("--open", action="store_true")
    p_snap.add_argument("--no-registry", action="store_true")
    p_snap.set_defaults(func=_cmd_snapshot)
    return parser


def main(argv: list[str] | None = None) -> int:
    _configure_logging()
    args = build_parser().parse_args(argv)
    try:
        return int(args.func(args))
    except JumpError as exc:
        logger.error("%s", exc)
        _print(exc.to_dict())
        return 1


if __name__ == "__main__":
    sys.exit(main())
