from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable
from urllib.parse import urljoin

import requests
from requests.adapters import HTTPAdapter

from .config import ClientConfig
from .error_mapper import map_error
from .exceptions import ResponseFormatError, TransportError
from .tracing import TraceContext

logger = logging.getLogger(__name__)

ResponseHook = Callable[[requests.Response], None]
RequestHook = Callable[[str, str, dict[str, Any]], None]

# Only reads are replayed; a repeated write could approve or delete twice.
RETRYABLE_METHODS = frozenset({"GET", "HEAD"})


@dataclass
class LastOperation:
    module: str
    operation: str
    duration_ms: int
    result: str
    trace_id: str | None
    status_code: int | None = None


def clean_params(params: dict[str, Any] | None) -> dict[str, Any] | None:
    if params is None:
        return None
    return {key: value for key, value in params.items() if value not in (None, "")}


def _error_payload(response: requests.Response) -> dict[str, Any]:
    try:
        payload = response.json()
    except ValueError:
        return {"message": response.text or response.reason or ""}
    if isinstance(payload, dict):
        return payload
    return {"message": str(payload)}


@dataclass
class HttpClient:
    """JSON transport for the ERP API.

    Returns the decoded body of 2xx responses (``None`` when empty) and raises
    an :class:`~erp_client_sdk.exceptions.ApiError` subclass otherwise.
    """

    config: ClientConfig
    trace: TraceContext | None = None
    session: requests.Session | None = None
    before_request: RequestHook | None = None
    after_response: ResponseHook | None = None
    last_operation: LastOperation | None = None

    def __post_init__(self) -> None:
        if self.trace is None:
            self.trace = TraceContext()
        if self.session is None:
            self.session = requests.Session()
            pool = HTTPAdapter(pool_connections=self.config.max_connections, pool_maxsize=self.config.max_connections)
            for scheme in ("http://", "https://"):
                self.session.mount(scheme, pool)

    def url_for(self, path: str) -> str:
        return urljoin(self.config.api_base_url.rstrip("/") + "/", path.lstrip("/"))

    def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        json_body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        module: str = "unknown",
        operation: str = "unknown",
    ) -> dict[str, Any] | list[Any] | None:
        verb = method.upper()
        url = self.url_for(path)
        options = {
            "headers": self.trace.stamp({"Accept": "application/json", **(headers or {})}),
            "json_body": json_body,
            "params": clean_params(params),
        }
        if self.before_request:
            self.before_request(verb, url, options)

        started = time.monotonic()
        try:
            response = self._send(verb, url, options)
        except requests.RequestException as exc:
            self._finish(module, operation, started, "error")
            logger.warning(
                "http_transport_error",
                extra={"api_module": module, "operation": operation, "error_type": type(exc).__name__},
            )
            raise TransportError(
                code="TRANSPORT_ERROR",
                message=str(exc),
                details={"type": type(exc).__name__},
                trace_id=self.trace.trace_id,
                status_code=0,
            ) from exc

        if self.after_response:
            self.after_response(response)
        self.trace.absorb(response.headers)

        if response.ok:
            try:
                body = response.json() if response.content else None
            except ValueError as exc:
                self._finish(module, operation, started, "error", response.status_code)
                logger.warning(
                    "http_undecodable_response",
                    extra={"api_module": module, "operation": operation, "status_code": response.status_code},
                )
                raise ResponseFormatError(
                    code="INVALID_RESPONSE",
                    message="The server returned a response that is not valid JSON",
                    details={"content_type": response.headers.get("Content-Type")},
                    trace_id=self.trace.trace_id,
                    status_code=response.status_code,
                ) from exc
            self._finish(module, operation, started, "success", response.status_code)
            return body

        payload = _error_payload(response)
        self.trace.absorb(payload=payload)
        self._finish(module, operation, started, "error", response.status_code)
        logger.info(
            "http_error_response",
            extra={"api_module": module, "operation": operation, "status_code": response.status_code},
        )
        raise map_error(response.status_code, payload, self.trace.trace_id)

    def _send(self, verb: str, url: str, options: dict[str, Any]) -> requests.Response:
        attempts = 1 + (self.config.retries if verb in RETRYABLE_METHODS else 0)
        for attempt in range(1, attempts + 1):
            final = attempt == attempts
            try:
                response = self.session.request(
                    method=verb,
                    url=url,
                    headers=options["headers"],
                    json=options["json_body"],
                    params=options["params"],
                    timeout=(self.config.connect_timeout_seconds, self.config.read_timeout_seconds),
                    verify=self.config.verify_ssl,
                )
            except requests.RequestException:
                if final:
                    raise
            else:
                if final or response.status_code < 500:
                    return response
            delay = self.config.retry_backoff_seconds * (2 ** (attempt - 1))
            logger.debug("http_retry", extra={"url": url, "attempt": attempt, "delay_seconds": delay})
            time.sleep(delay)
        raise RuntimeError("retry loop exited without a response")

    def _finish(
        self, module: str, operation: str, started: float, result: str, status_code: int | None = None
    ) -> None:
        self.last_operation = LastOperation(
            module=module,
            operation=operation,
            duration_ms=int((time.monotonic() - started) * 1000),
            result=result,
            trace_id=self.trace.trace_id,
            status_code=status_code,
        )
