"""HTTP surface: battery and wifi status as JSON, plus the demo page."""

from __future__ import annotations

import logging
import os
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from batwifi.adapters.exec.local import LocalExecutor
from batwifi.config import Settings
from batwifi.registry.catalog import CatalogEntry, platform_from_setting, resolve_catalog
from batwifi.service import StatusService, StatusUnavailable
from batwifi.storage.audit_store import AuditStore

LOG = logging.getLogger("batwifi.api")

NOT_FOUND_MESSAGE = "404 - Resource Not found"
CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}

BATTERY_PATHS = ["/battery", "/battery/{rest:path}"]
WIFI_PATHS = [
    "/network",
    "/network/{rest:path}",
    "/networks",
    "/networks/{rest:path}",
    "/wifi",
    "/wifi/{rest:path}",
]


def build_catalog(settings: Settings) -> CatalogEntry:
    platform = platform_from_setting(settings.platform)
    return resolve_catalog(
        platform,
        {"battery_device": settings.battery_device, "wifi_interface": settings.wifi_interface},
    )


def create_app(
    settings: Settings,
    executor: Optional[LocalExecutor] = None,
    catalog: Optional[CatalogEntry] = None,
) -> FastAPI:
    catalog = catalog or build_catalog(settings)
    audit = AuditStore(settings.audit_log) if settings.audit_log else None
    service = StatusService(catalog, executor=executor, audit=audit)
    LOG.info("status api platform=%s", catalog.platform.value)

    app = FastAPI(title="batwifi", description="Battery and wifi status API", version="0.1.0")

    @app.exception_handler(StatusUnavailable)
    async def on_status_unavailable(request: Request, exc: StatusUnavailable) -> PlainTextResponse:
        return PlainTextResponse(exc.message, status_code=500)

    @app.exception_handler(StarletteHTTPException)
    async def on_http_error(request: Request, exc: StarletteHTTPException) -> PlainTextResponse:
        if exc.status_code == 404:
            return PlainTextResponse(NOT_FOUND_MESSAGE, status_code=404)
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code)

    @app.get("/", include_in_schema=False)
    async def root() -> RedirectResponse:
        return RedirectResponse(url=f"/public/{settings.demo_page}", status_code=301)

    async def battery() -> JSONResponse:
        return JSONResponse(await service.battery_status(), headers=CORS_HEADERS)

    async def wifi() -> JSONResponse:
        return JSONResponse(await service.wifi_status(), headers=CORS_HEADERS)

    for path in BATTERY_PATHS:
        app.add_api_route(path, battery, methods=["GET"], tags=["Battery"])
    for path in WIFI_PATHS:
        app.add_api_route(path, wifi, methods=["GET"], tags=["Wifi"])

    if settings.static_dir and os.path.isdir(settings.static_dir):
        app.mount("/public", StaticFiles(directory=settings.static_dir), name="public")

    return app
