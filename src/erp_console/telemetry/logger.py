from __future__ import annotations

import json
import sys
import threading
from pathlib import Path
from typing import TextIO

from erp_client_sdk.env import EnvReader

from ..config import ConsoleConfig
from .events import TelemetryEvent

DEFAULT_TELEMETRY_DIR = Path("artifacts") / "telemetry"


class TelemetryLogger:
    """Appends events as JSON lines; a disabled logger drops everything."""

    def __init__(
        self,
        *,
        app_name: str,
        enabled: bool | None = None,
        log_file: str | Path | None = None,
        stdout_sink: bool = False,
        stdout_stream: TextIO | None = None,
    ) -> None:
        self.app_name = app_name
        self.enabled = EnvReader().flag("ERP_TELEMETRY_ENABLED") if enabled is None else enabled
        self.log_file = Path(log_file) if log_file else DEFAULT_TELEMETRY_DIR / f"{app_name}.jsonl"
        self.stdout_sink = stdout_sink
        self.stdout_stream = stdout_stream
        self.emitted = 0
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: ConsoleConfig, *, app_name: str = "erp_console") -> TelemetryLogger:
        return cls(app_name=app_name, enabled=config.telemetry_enabled, log_file=config.telemetry_log_file)

    def serialize(self, event: TelemetryEvent) -> str:
        return json.dumps({**event.to_dict(), "app_name": self.app_name}, sort_keys=True, default=str)

    def emit(self, event: TelemetryEvent) -> bool:
        if not self.enabled:
            return False
        line = self.serialize(event) + "\n"
        # Mutations may emit from worker threads.
        with self._lock:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)
            with self.log_file.open("a", encoding="utf-8") as fp:
                fp.write(line)
            if self.stdout_sink:
                stream = self.stdout_stream or sys.stdout
                stream.write(line)
                stream.flush()
            self.emitted += 1
        return True
