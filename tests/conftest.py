from __future__ import annotations

import pytest

from erp_client_sdk.config import ClientConfig
from erp_client_sdk.http_client import HttpClient
from erp_client_sdk.tracing import TraceContext

BASE_URL = "https://erp.example.com/api"


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.value = start

    def __call__(self) -> float:
        return self.value

    def advance(self, seconds: float) -> None:
        self.value += seconds

    def advance_ms(self, millis: int) -> None:
        self.value += millis / 1000


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def client_config() -> ClientConfig:
    return ClientConfig(env_name="test", api_base_url=BASE_URL)


@pytest.fixture
def http(client_config: ClientConfig) -> HttpClient:
    return HttpClient(client_config, trace=TraceContext())


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in (
        "ERP_ENV",
        "ERP_API_BASE_URL",
        "ERP_API_BASE_URL_DEV",
        "ERP_TIMEOUT_SECONDS",
        "ERP_RETRIES",
        "ERP_SEARCH_DEBOUNCE_MS",
        "ERP_QUERY_STALE_SECONDS",
        "ERP_DEFAULT_PAGE_SIZE",
        "ERP_TELEMETRY_ENABLED",
        "ERP_TELEMETRY_LOG_FILE",
    ):
        monkeypatch.delenv(key, raising=False)
