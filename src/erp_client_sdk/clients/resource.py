from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Mapping

from pydantic import BaseModel

from ..exceptions import ResponseFormatError
from ..models import DetailEnvelope, ListEnvelope, ListQuery
from .base import BaseClient


def dump_body(payload: BaseModel | Mapping[str, Any] | None) -> dict[str, Any] | None:
    if payload is None:
        return None
    if isinstance(payload, BaseModel):
        return payload.model_dump(by_alias=True, exclude_none=True, mode="json")
    return {key: value for key, value in payload.items() if value is not None}


def expect_object(payload: Any, operation: str) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise ValueError(f"Expected {operation} response to be a JSON object")
    return payload


@dataclass
class ResourceClient(BaseClient):
    """CRUD over one REST collection that answers with ``{success, data, meta}`` envelopes."""

    path: ClassVar[str] = ""
    module: ClassVar[str] = "unknown"
    record_model: ClassVar[type[BaseModel]] = BaseModel
    create_model: ClassVar[type[BaseModel] | None] = None

    def _validate_body(self, payload: BaseModel | Mapping[str, Any]) -> BaseModel | Mapping[str, Any]:
        if self.create_model is not None and not isinstance(payload, BaseModel):
            return self.create_model.model_validate(payload)
        return payload

    def _parse(self, envelope: type[BaseModel], payload: Any, operation: str) -> Any:
        """Validate a 2xx body against ``envelope``; a mismatch is reported as an API error."""
        try:
            return envelope.model_validate(expect_object(payload, operation))
        except ValueError as exc:
            last = self.http.last_operation
            raise ResponseFormatError(
                code="INVALID_RESPONSE",
                message=f"Unexpected {operation} response from {self.module}",
                details={"operation": operation, "reason": str(exc)},
                trace_id=self.http.trace.trace_id,
                status_code=last.status_code if last and last.status_code else 200,
            ) from exc

    def _detail(self, payload: Any, operation: str) -> Any:
        return self._parse(DetailEnvelope[self.record_model], payload, operation).data

    def list(self, query: ListQuery | Mapping[str, Any] | None = None) -> ListEnvelope:
        if isinstance(query, ListQuery):
            params = query.to_params()
        else:
            params = dict(query or {})
        payload = self._request("GET", self.path, params=params, module=self.module, operation="list")
        return self._parse(ListEnvelope[self.record_model], payload, "list")

    def get(self, record_id: int) -> Any:
        payload = self._request("GET", f"{self.path}/{record_id}", module=self.module, operation="get")
        return self._detail(payload, "get")

    def create(self, payload: BaseModel | Mapping[str, Any]) -> Any:
        body = dump_body(self._validate_body(payload))
        data = self._request("POST", self.path, json_body=body, module=self.module, operation="create")
        return self._detail(data, "create")

    def update(self, record_id: int, payload: BaseModel | Mapping[str, Any]) -> Any:
        body = dump_body(payload)
        data = self._request(
            "PUT", f"{self.path}/{record_id}", json_body=body, module=self.module, operation="update"
        )
        return self._detail(data, "update")

    def delete(self, record_id: int) -> None:
        self._request("DELETE", f"{self.path}/{record_id}", module=self.module, operation="delete")

    def action(
        self,
        record_id: int,
        name: str,
        body: BaseModel | Mapping[str, Any] | None = None,
        method: str = "PUT",
    ) -> Any:
        data = self._request(
            method,
            f"{self.path}/{record_id}/{name}",
            json_body=dump_body(body) or {},
            module=self.module,
            operation=name,
        )
        return self._detail(data, name)
