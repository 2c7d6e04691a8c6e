"""batwifi CLI.

Serve the status API:
  batwifi serve --port 8080

Query once from the shell:
  batwifi battery --format table
  batwifi wifi

Parse a saved tool output offline:
  batwifi parse --platform linux --kind wifi scan.txt
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from batwifi.config import Settings, load_settings
from batwifi.registry.catalog import Platform, resolve_catalog
from batwifi.service import BATTERY, WIFI, StatusService, StatusUnavailable, to_payload
from batwifi.storage.audit_store import AuditStore

LOG = logging.getLogger("batwifi")


def configure_logging(level: str) -> None:
    """Configure logging to stdout for CLI runs."""
    lvl = (level or "INFO").upper()
    numeric = getattr(logging, lvl, logging.INFO)
    logging.basicConfig(
        level=numeric,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
        stream=sys.stdout,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="batwifi", description="Battery and wifi status as JSON")
    parser.add_argument("--config", default="config/runtime.yaml", help="Path to runtime.yaml")
    parser.add_argument("--log-level", default=None, help="Override log level")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)

    for name in (BATTERY, WIFI):
        p = sub.add_parser(name, help=f"Print {name} status once")
        p.add_argument("--format", choices=["json", "table"], default="json")

    parse = sub.add_parser("parse", help="Parse a saved command output file")
    parse.add_argument("--platform", required=True, choices=[p.value for p in Platform])
    parse.add_argument("--kind", required=True, choices=[BATTERY, WIFI])
    parse.add_argument("--format", choices=["json", "table"], default="json")
    parse.add_argument("path", help="File with the tool's stdout ('-' for stdin)")
    return parser


def render_table(kind: str, payload: Dict[str, Any]) -> Table:
    if kind == BATTERY:
        table = Table(title="Battery")
        table.add_column("Field")
        table.add_column("Value")
        for key, value in payload.items():
            table.add_row(key, "" if value is None else str(value))
        return table

    fields: List[str] = []
    for network in payload.values():
        for key in network:
            if key not in fields:
                fields.append(key)
    table = Table(title="Wifi networks")
    table.add_column("Cell")
    for key in fields:
        table.add_column(key)
    for cell_id, network in payload.items():
        table.add_row(cell_id, *[network.get(key, "") for key in fields])
    return table


def emit(kind: str, payload: Dict[str, Any], fmt: str) -> None:
    if fmt == "table":
        Console().print(render_table(kind, payload))
    else:
        print(json.dumps(payload, ensure_ascii=False, indent=2))


def handle_serve(args: argparse.Namespace, settings: Settings) -> int:
    import uvicorn

    from batwifi.api.server import create_app

    host = args.host or settings.host
    port = args.port or settings.port
    LOG.info("Server running on %s:%s", host, port)
    uvicorn.run(create_app(settings), host=host, port=port, log_level=settings.log_level.lower())
    return 0


def handle_status(args: argparse.Namespace, settings: Settings) -> int:
    from batwifi.api.server import build_catalog

    audit = AuditStore(settings.audit_log) if settings.audit_log else None
    service = StatusService(build_catalog(settings), audit=audit)
    collect = service.battery_status if args.command == BATTERY else service.wifi_status
    try:
        payload = asyncio.run(collect())
    except StatusUnavailable as exc:
        print(exc.message, file=sys.stderr)
        return 1
    emit(args.command, payload, args.format)
    return 0


def handle_parse(args: argparse.Namespace, settings: Settings) -> int:
    catalog = resolve_catalog(
        Platform(args.platform),
        {"battery_device": settings.battery_device, "wifi_interface": settings.wifi_interface},
    )
    if args.path == "-":
        text = sys.stdin.read()
    else:
        with open(args.path, "r", encoding="utf-8") as f:
            text = f.read()

    parse = catalog.battery_parser if args.kind == BATTERY else catalog.wifi_parser
    try:
        payload = to_payload(parse(text))
    except Exception:
        LOG.exception("parse failed platform=%s kind=%s", args.platform, args.kind)
        print(StatusUnavailable(args.kind).message, file=sys.stderr)
        return 1
    emit(args.kind, payload, args.format)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    try:
        settings = load_settings(args.config)
        if args.command != "parse":
            from batwifi.api.server import build_catalog

            build_catalog(settings)
    except ValueError as exc:
        print(f"invalid configuration: {exc}", file=sys.stderr)
        return 2
    configure_logging(args.log_level or settings.log_level)

    if args.command == "serve":
        return handle_serve(args, settings)
    if args.command in (BATTERY, WIFI):
        return handle_status(args, settings)
    return handle_parse(args, settings)


if __name__ == "__main__":
    raise SystemExit(main())
