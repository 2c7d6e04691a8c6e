"""Status service: run the platform command, parse it, check the record.

Two failure classes end in a fixed per-domain message: the command failed
(non-zero exit or the executor raised) or the parser raised. Missing data is not a
failure; the parsers return partial or empty records for it.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, Optional

from batwifi.adapters.exec.local import LocalExecutor
from batwifi.models import BatteryRecord
from batwifi.registry.catalog import CatalogEntry
from batwifi.reporting.schema_validate import BATTERY_SCHEMA, WIFI_SCHEMA, validate_schema
from batwifi.storage.audit_store import AuditStore

LOG = logging.getLogger("batwifi.service")

BATTERY = "battery"
WIFI = "wifi"

BATTERY_ERROR_MESSAGE = "500 - Unable to retrieve battery status"
WIFI_ERROR_MESSAGE = "500 - Unable to retrieve wifi status"

ERROR_MESSAGES = {BATTERY: BATTERY_ERROR_MESSAGE, WIFI: WIFI_ERROR_MESSAGE}


class StatusUnavailable(Exception):
    def __init__(self, kind: str) -> None:
        self.kind = kind
        self.message = ERROR_MESSAGES[kind]
        super().__init__(self.message)


def to_payload(parsed: Any) -> Any:
    if isinstance(parsed, BatteryRecord):
        return parsed.to_dict()
    return parsed


class StatusService:
    def __init__(
        self,
        catalog: CatalogEntry,
        executor: Optional[LocalExecutor] = None,
        audit: Optional[AuditStore] = None,
    ) -> None:
        self.catalog = catalog
        self.executor = executor or LocalExecutor()
        self.audit = audit

    async def battery_status(self) -> Dict[str, Any]:
        return await self._collect(BATTERY, self.catalog.battery_command, self.catalog.battery_parser, BATTERY_SCHEMA)

    async def wifi_status(self) -> Dict[str, Any]:
        return await self._collect(WIFI, self.catalog.wifi_command, self.catalog.wifi_parser, WIFI_SCHEMA)

    async def _collect(
        self,
        kind: str,
        command: str,
        parse: Callable[[str], Any],
        schema: Dict[str, Any],
    ) -> Dict[str, Any]:
        stdout = ""
        if command:
            stdout = await self._execute(kind, command)

        try:
            payload = to_payload(parse(stdout))
            validate_schema(payload, schema)
        except Exception as exc:
            LOG.exception("%s parse failed platform=%s", kind, self.catalog.platform.value)
            raise StatusUnavailable(kind) from exc
        return payload

    async def _execute(self, kind: str, command: str) -> str:
        start_ts = time.time()
        returncode: Optional[int] = None
        try:
            result = await self.executor.run(command)
            returncode = result.returncode
        except Exception as exc:
            LOG.error("%s command could not be run err=%s: %s", kind, type(exc).__name__, exc)
            raise StatusUnavailable(kind) from exc
        finally:
            self._audit(kind, command, start_ts, returncode)

        if not result.ok:
            LOG.error("child process failed with error code: %s stderr=%s", result.returncode, result.stderr.strip()[:200])
            raise StatusUnavailable(kind)
        return result.stdout

    def _audit(self, kind: str, command: str, start_ts: float, returncode: Optional[int]) -> None:
        if not self.audit:
            return
        try:
            self.audit.record_execution(kind, self.catalog.platform.value, command, start_ts, returncode)
        except OSError as exc:
            LOG.warning("audit write failed path=%s err=%s", self.audit.path, exc)
