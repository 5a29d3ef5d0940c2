from __future__ import annotations

import json
from urllib.parse import parse_qs, urlparse

import pytest
import requests
import responses

from erp_client_sdk import http_client as http_client_module
from erp_client_sdk.config import ClientConfig
from erp_client_sdk.exceptions import (
    ConflictError,
    NotFoundError,
    ResponseFormatError,
    ServerError,
    TransportError,
    ValidationError,
)
from erp_client_sdk.http_client import HttpClient, clean_params
from erp_client_sdk.tracing import TRACE_HEADER, TraceContext

from conftest import BASE_URL


def test_clean_params_drops_empty_values() -> None:
    assert clean_params({"page": 1, "search": "", "status": None, "warehouseId": 0}) == {"page": 1, "warehouseId": 0}
    assert clean_params(None) is None


@responses.activate
def test_get_sends_trace_and_clean_params(http: HttpClient) -> None:
    responses.add(
        responses.GET,
        f"{BASE_URL}/warehouses",
        json={"success": True, "data": []},
        headers={TRACE_HEADER: "server-trace"},
    )
    payload = http.request("GET", "/warehouses", params={"page": 2, "search": "", "status": None})
    assert payload == {"success": True, "data": []}
    request = responses.calls[0].request
    assert parse_qs(urlparse(request.url).query) == {"page": ["2"]}
    assert request.headers["Accept"] == "application/json"
    assert request.headers[TRACE_HEADER]
    assert http.trace.trace_id == "server-trace"
    assert http.last_operation is not None
    assert http.last_operation.result == "success"


@responses.activate
def test_empty_body_returns_none(http: HttpClient) -> None:
    responses.add(responses.DELETE, f"{BASE_URL}/warehouses/3", status=204)
    assert http.request("DELETE", "/warehouses/3") is None


@responses.activate
def test_undecodable_success_body(http: HttpClient) -> None:
    responses.add(
        responses.GET,
        f"{BASE_URL}/inventory/warehouse/2",
        body="<html>gateway</html>",
        content_type="text/html",
    )
    with pytest.raises(ResponseFormatError) as excinfo:
        http.request("GET", "/inventory/warehouse/2", module="inventory", operation="by_warehouse")
    assert excinfo.value.code == "INVALID_RESPONSE"
    assert excinfo.value.status_code == 200
    assert excinfo.value.details["content_type"].startswith("text/html")
    assert http.last_operation.result == "error"
    assert http.last_operation.status_code == 200


@responses.activate
def test_error_envelope_is_mapped(http: HttpClient) -> None:
    responses.add(
        responses.POST,
        f"{BASE_URL}/payment-receipts",
        status=400,
        json={"success": False, "error": {"code": "VALIDATION_ERROR", "message": "Invalid amount", "details": [{"field": "amount", "message": "Must be positive"}]}},
    )
    with pytest.raises(ValidationError) as excinfo:
        http.request("POST", "/payment-receipts", json_body={"amount": -1}, module="payment_receipts", operation="create")
    assert excinfo.value.message == "Invalid amount"
    assert excinfo.value.field_errors() == {"amount": ["Must be positive"]}
    assert http.last_operation.module == "payment_receipts"
    assert http.last_operation.result == "error"
    assert json.loads(responses.calls[0].request.body) == {"amount": -1}


@responses.activate
def test_non_json_error_body(http: HttpClient) -> None:
    responses.add(responses.GET, f"{BASE_URL}/products/9", status=404, body="Not Found")
    with pytest.raises(NotFoundError) as excinfo:
        http.request("GET", "/products/9")
    assert excinfo.value.message == "Not Found"


@responses.activate
def test_transport_error(http: HttpClient) -> None:
    responses.add(responses.GET, f"{BASE_URL}/inventory", body=requests.ConnectionError("refused"))
    with pytest.raises(TransportError) as excinfo:
        http.request("GET", "/inventory")
    assert excinfo.value.status_code == 0
    assert excinfo.value.code == "TRANSPORT_ERROR"


@responses.activate
def test_reads_are_not_retried_by_default(http: HttpClient) -> None:
    responses.add(responses.GET, f"{BASE_URL}/promotions", status=503, json={"message": "down"})
    with pytest.raises(ServerError):
        http.request("GET", "/promotions")
    assert len(responses.calls) == 1


@responses.activate
def test_configured_read_retry(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(http_client_module.time, "sleep", lambda _seconds: None)
    client = HttpClient(ClientConfig(env_name="test", api_base_url=BASE_URL, retries=2), trace=TraceContext())
    responses.add(responses.GET, f"{BASE_URL}/promotions", status=503, json={"message": "down"})
    responses.add(responses.GET, f"{BASE_URL}/promotions", json={"success": True, "data": []})
    assert client.request("GET", "/promotions") == {"success": True, "data": []}
    assert len(responses.calls) == 2


@responses.activate
def test_mutations_are_never_retried(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(http_client_module.time, "sleep", lambda _seconds: None)
    client = HttpClient(ClientConfig(env_name="test", api_base_url=BASE_URL, retries=3), trace=TraceContext())
    responses.add(responses.PUT, f"{BASE_URL}/promotions/1/approve", status=500, json={"message": "boom"})
    with pytest.raises(ServerError):
        client.request("PUT", "/promotions/1/approve", json_body={})
    assert len(responses.calls) == 1


@responses.activate
def test_request_hooks(http: HttpClient) -> None:
    seen: list[tuple[str, str]] = []
    statuses: list[int] = []
    http.before_request = lambda method, url, _options: seen.append((method, url))
    http.after_response = lambda response: statuses.append(response.status_code)
    responses.add(responses.GET, f"{BASE_URL}/products", json={"data": []})
    http.request("get", "products")
    assert seen == [("GET", f"{BASE_URL}/products")]
    assert statuses == [200]


def test_trace_context_absorbs_headers_and_payload() -> None:
    trace = TraceContext()
    headers = trace.stamp({"Accept": "application/json"})
    assert headers[TRACE_HEADER] == trace.trace_id
    assert trace.absorb({"x-request-id": "gateway-1"}) == "gateway-1"
    assert trace.absorb(payload={"error": {"traceId": "api-2"}}) == "api-2"
    assert trace.absorb({}, payload=["not", "a", "mapping"]) == "api-2"


@responses.activate
def test_error_body_trace_wins(http: HttpClient) -> None:
    responses.add(
        responses.PUT,
        f"{BASE_URL}/stock-transactions/4/approve",
        status=409,
        json={"success": False, "error": {"code": "INVALID_STATUS", "message": "Already approved", "traceId": "srv-9"}},
    )
    with pytest.raises(ConflictError) as excinfo:
        http.request("PUT", "/stock-transactions/4/approve", json_body={})
    assert excinfo.value.trace_id == "srv-9"
    assert http.last_operation.trace_id == "srv-9"
