from __future__ import annotations

import os

import pytest

from erp_client_sdk.config import ConfigError, load_config
from erp_client_sdk.env import EnvReader
from erp_console.config import ConsoleConfigError, load_console_config


def test_load_config_requires_base_url() -> None:
    with pytest.raises(ConfigError, match="ERP_API_BASE_URL"):
        load_config()


def test_load_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ERP_API_BASE_URL", "https://erp.example.com/api/")
    cfg = load_config()
    assert cfg.env_name == "dev"
    assert cfg.api_base_url == "https://erp.example.com/api"
    assert cfg.connect_timeout_seconds == 5.0
    assert cfg.read_timeout_seconds == 30.0
    assert cfg.retries == 0
    assert cfg.verify_ssl is True


def test_load_config_profile(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ERP_ENV", "staging")
    monkeypatch.setenv("ERP_API_BASE_URL_STAGING", "https://staging.example.com/api")
    monkeypatch.setenv("ERP_API_BASE_URL", "https://fallback.example.com")
    cfg = load_config()
    assert cfg.api_base_url == "https://staging.example.com/api"
    assert cfg.env_name == "staging"


@pytest.mark.parametrize(
    ("key", "value"),
    [
        ("ERP_TIMEOUT_SECONDS", "0"),
        ("ERP_CONNECT_TIMEOUT_SECONDS", "0"),
        ("ERP_READ_TIMEOUT_SECONDS", "0"),
        ("ERP_RETRIES", "-1"),
        ("ERP_RETRY_BACKOFF_SECONDS", "-0.1"),
        ("ERP_MAX_CONNECTIONS", "0"),
        ("ERP_TIMEOUT_SECONDS", "abc"),
        ("ERP_RETRIES", "abc"),
    ],
)
def test_load_config_rejects_invalid_values(monkeypatch: pytest.MonkeyPatch, key: str, value: str) -> None:
    monkeypatch.setenv("ERP_API_BASE_URL", "https://erp.example.com")
    monkeypatch.setenv(key, value)
    with pytest.raises(ConfigError, match=key):
        load_config()


def test_load_config_reads_env_file(tmp_path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("ERP_API_BASE_URL=https://from-file.example.com\nERP_RETRIES=2\n", encoding="utf-8")
    try:
        cfg = load_config(str(env_file))
    finally:
        # load_dotenv writes straight into os.environ.
        os.environ.pop("ERP_API_BASE_URL", None)
        os.environ.pop("ERP_RETRIES", None)
    assert cfg.api_base_url == "https://from-file.example.com"
    assert cfg.retries == 2


def test_console_config_defaults() -> None:
    cfg = load_console_config()
    assert cfg.search_debounce_ms == 400
    assert cfg.query_stale_seconds == 300.0
    assert cfg.default_page_size == 20
    assert cfg.telemetry_enabled is False


def test_console_config_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ERP_SEARCH_DEBOUNCE_MS", "300")
    monkeypatch.setenv("ERP_DEFAULT_PAGE_SIZE", "50")
    monkeypatch.setenv("ERP_TELEMETRY_ENABLED", "yes")
    cfg = load_console_config()
    assert cfg.search_debounce_ms == 300
    assert cfg.default_page_size == 50
    assert cfg.telemetry_enabled is True


@pytest.mark.parametrize(
    ("key", "value"),
    [
        ("ERP_SEARCH_DEBOUNCE_MS", "-1"),
        ("ERP_SEARCH_DEBOUNCE_MS", "soon"),
        ("ERP_DEFAULT_PAGE_SIZE", "0"),
        ("ERP_QUERY_STALE_SECONDS", "-5"),
    ],
)
def test_console_config_rejects_invalid_values(monkeypatch: pytest.MonkeyPatch, key: str, value: str) -> None:
    monkeypatch.setenv(key, value)
    with pytest.raises(ConsoleConfigError, match=key):
        load_console_config()


def test_env_reader_number_and_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    env = EnvReader(ConfigError)
    monkeypatch.setenv("ERP_SAMPLE_INT", " 7 ")
    monkeypatch.setenv("ERP_SAMPLE_FLAG", "On")
    monkeypatch.setenv("ERP_SAMPLE_BLANK", "  ")
    assert env.number("ERP_SAMPLE_INT", 1, minimum=1) == 7
    assert env.number("ERP_SAMPLE_BLANK", 2.5) == 2.5
    assert env.flag("ERP_SAMPLE_FLAG") is True
    assert env.flag("ERP_SAMPLE_BLANK", True) is True
    with pytest.raises(ConfigError, match=r"ERP_SAMPLE_INT: expected > 7"):
        env.number("ERP_SAMPLE_INT", 10, minimum=7, strict=True)
