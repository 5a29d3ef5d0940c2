from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, Generic, List, TypeVar

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

RecordT = TypeVar("RecordT")

# Amounts go back to the API as JSON numbers, not strings.
WireDecimal = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class CamelModel(BaseModel):
    """Wire model for resources the API serialises in camelCase."""

    model_config = ConfigDict(extra="allow", populate_by_name=True, alias_generator=to_camel)


class SnakeModel(BaseModel):
    """Wire model for resources the API serialises in snake_case (inventory rows)."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class PaginationMeta(CamelModel):
    page: int = 1
    limit: int = 20
    total: int = 0
    total_pages: int = 0


class ListEnvelope(CamelModel, Generic[RecordT]):
    success: bool = True
    data: List[RecordT] = Field(default_factory=list)
    message: str | None = None
    meta: PaginationMeta | None = None
    timestamp: str | None = None


class DetailEnvelope(CamelModel, Generic[RecordT]):
    success: bool = True
    data: RecordT
    message: str | None = None
    timestamp: str | None = None


class ListQuery(CamelModel):
    page: int | None = Field(default=None, ge=1)
    limit: int | None = Field(default=None, gt=0)
    search: str | None = None
    sort_by: str | None = None
    sort_order: SortOrder | None = None

    def to_params(self) -> dict[str, Any]:
        params = self.model_dump(by_alias=True, exclude_none=True, mode="json")
        return {key: value for key, value in params.items() if value != ""}


class DeleteResult(CamelModel):
    id: int | None = None
    deleted: bool | None = None


class BaseRecord(CamelModel):
    id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
