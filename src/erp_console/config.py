from __future__ import annotations

from dataclasses import dataclass

from dotenv import load_dotenv

from erp_client_sdk.env import EnvReader


class ConsoleConfigError(ValueError):
    """Raised when console configuration values are malformed."""


@dataclass(frozen=True)
class ConsoleConfig:
    search_debounce_ms: int = 400
    query_stale_seconds: float = 300.0
    default_page_size: int = 20
    telemetry_enabled: bool = False
    telemetry_log_file: str | None = None


def load_console_config(env_file: str | None = None) -> ConsoleConfig:
    load_dotenv(env_file)
    env = EnvReader(ConsoleConfigError)
    return ConsoleConfig(
        search_debounce_ms=env.number("ERP_SEARCH_DEBOUNCE_MS", 400, minimum=0),
        query_stale_seconds=env.number("ERP_QUERY_STALE_SECONDS", 300.0, minimum=0.0),
        default_page_size=env.number("ERP_DEFAULT_PAGE_SIZE", 20, minimum=0, strict=True),
        telemetry_enabled=env.flag("ERP_TELEMETRY_ENABLED"),
        telemetry_log_file=env.text("ERP_TELEMETRY_LOG_FILE") or None,
    )
