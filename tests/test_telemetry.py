from __future__ import annotations

import io
import json
from datetime import datetime, timezone

import pytest

from erp_console.config import ConsoleConfig
from erp_console.telemetry import TelemetryLogger, build_event


def test_build_event_rejects_unknown_category() -> None:
    with pytest.raises(ValueError, match="Unsupported telemetry category"):
        build_event(category="clicks", name="x", module="m", action="a")


def test_build_event_rejects_pii_context() -> None:
    with pytest.raises(ValueError, match="customer_name"):
        build_event(category="mutation", name="x", module="m", action="a", context={"customer_name": "Lan"})


def test_build_event_finds_nested_camel_case_pii() -> None:
    with pytest.raises(ValueError, match=r"filters\.bankName"):
        build_event(category="error", name="x", module="m", action="a", context={"filters": {"bankName": "ACB"}})
    event = build_event(category="mutation", name="x", module="m", action="a", context={"filters": {"status": "pending"}})
    assert event.context == {"filters": {"status": "pending"}}


def test_disabled_logger_writes_nothing(tmp_path) -> None:
    target = tmp_path / "events.jsonl"
    telemetry = TelemetryLogger(app_name="erp_console", enabled=False, log_file=target)
    assert telemetry.emit(build_event(category="navigation", name="open", module="m", action="load")) is False
    assert not target.exists()


def test_enabled_logger_appends_jsonl(tmp_path) -> None:
    target = tmp_path / "nested" / "events.jsonl"
    stream = io.StringIO()
    telemetry = TelemetryLogger(app_name="erp_console", enabled=True, log_file=target, stdout_sink=True, stdout_stream=stream)
    event = build_event(
        category="api_call_result",
        name="list",
        module="promotions",
        action="load",
        success=True,
        now=datetime(2024, 5, 1, tzinfo=timezone.utc),
    )
    assert telemetry.emit(event)
    assert telemetry.emit(event)
    lines = target.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    record = json.loads(lines[0])
    assert record == {
        "action": "load",
        "app_name": "erp_console",
        "category": "api_call_result",
        "module": "promotions",
        "name": "list",
        "success": True,
        "timestamp_utc": "2024-05-01T00:00:00+00:00",
    }
    assert stream.getvalue().count("\n") == 2
    assert telemetry.emitted == 2


def test_enabled_flag_from_env(monkeypatch) -> None:
    monkeypatch.setenv("ERP_TELEMETRY_ENABLED", "yes")
    assert TelemetryLogger(app_name="erp_console").enabled


def test_from_config(tmp_path) -> None:
    config = ConsoleConfig(telemetry_enabled=True, telemetry_log_file=str(tmp_path / "t.jsonl"))
    telemetry = TelemetryLogger.from_config(config)
    assert telemetry.enabled
    assert telemetry.log_file == tmp_path / "t.jsonl"
