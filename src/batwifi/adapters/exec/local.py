"""Local execution adapter."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

LOG = logging.getLogger("batwifi.exec")


@dataclass(frozen=True)
class ExecResult:
    stdout: str
    stderr: str
    returncode: int

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class LocalExecutor:
    def __init__(self, config: Optional[Dict[str, Any]] = None) -> None:
        self.config = config or {}
        self.encoding = self.config.get("encoding", "utf-8")

    async def run(self, command: str) -> ExecResult:
        """Run ``command`` through the shell and capture its output.

        Raises OSError when the shell itself cannot be spawned.
        """
        LOG.debug("exec start cmd=%s", command[:100])
        proc = await asyncio.create_subprocess_shell(
            command,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        out, err = await proc.communicate()
        result = ExecResult(
            stdout=(out or b"").decode(self.encoding, errors="replace"),
            stderr=(err or b"").decode(self.encoding, errors="replace"),
            returncode=proc.returncode if proc.returncode is not None else -1,
        )
        LOG.debug("exec finished returncode=%s stdout_len=%s", result.returncode, len(result.stdout))
        return result
