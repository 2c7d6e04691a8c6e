"""Audit store: one JSON line per status command execution."""

import json
import os
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional


class AuditStore:
    def __init__(self, path: str) -> None:
        self.path = path

    def record_execution(
        self,
        kind: str,
        platform: str,
        command: str,
        start_ts: float,
        returncode: Optional[int],
    ) -> Dict[str, Any]:
        record = {
            "kind": kind,
            "platform": platform,
            "cmd": command,
            "started_at": datetime.fromtimestamp(start_ts, timezone.utc).isoformat(),
            "elapsed_ms": int((time.time() - start_ts) * 1000),
            "returncode": returncode,
            "ok": returncode == 0,
        }
        self.write(record)
        return record

    def write(self, record: Dict[str, Any]) -> None:
        if not self.path:
            return
        parent = os.path.dirname(self.path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(self.path, "a", encoding="utf-8") as f:
            f.write(json.dumps(record, ensure_ascii=False) + "\n")

    def read_all(self) -> list[Dict[str, Any]]:
        if not self.path or not os.path.exists(self.path):
            return []
        with open(self.path, "r", encoding="utf-8") as f:
            return [json.loads(line) for line in f if line.strip()]
