from datetime import UTC, datetime
from typing import Generic, Optional, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


def as_utc(value: datetime) -> datetime:
    # SQLite stores naive timestamps; everything is written in UTC
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)


class CamelModel(BaseModel):
    """Base for API payloads: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class _RecordCreate(CamelModel):
    model_config = ConfigDict(extra="forbid")

    account_id: str = Field(..., min_length=1, description="Identifier of the owning account")
    description: str = Field(..., min_length=1)
    amount: float = Field(..., description="Amount moved by this record")
    date: datetime = Field(..., description="When the money moved")


class _RecordUpdate(CamelModel):
    model_config = ConfigDict(extra="forbid")

    description: Optional[str] = Field(default=None, min_length=1)
    amount: Optional[float] = None
    date: Optional[datetime] = None

    @model_validator(mode="after")
    def _require_fields(self):
        if not self.model_fields_set:
            raise ValueError("At least one field must be supplied")
        nulls = sorted(name for name in self.model_fields_set if getattr(self, name) is None)
        if nulls:
            raise ValueError(f"Fields may not be null: {', '.join(nulls)}")
        return self


class _RecordResponse(CamelModel):
    id: UUID
    account_id: str
    description: str
    amount: float
    date: datetime
    created_at: datetime
    updated_at: datetime

    @field_validator("date", "created_at", "updated_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        return as_utc(value)


class CreditCreate(_RecordCreate):
    from_: str = Field(..., alias="from", min_length=1, description="Counterparty that paid the account")


class CreditUpdate(_RecordUpdate):
    from_: Optional[str] = Field(default=None, alias="from", min_length=1)


class CreditResponse(_RecordResponse):
    from_: str = Field(..., alias="from")


class DebitCreate(_RecordCreate):
    to: str = Field(..., min_length=1, description="Counterparty the account paid")


class DebitUpdate(_RecordUpdate):
    to: Optional[str] = Field(default=None, min_length=1)


class DebitResponse(_RecordResponse):
    to: str


class CreditFilter(CamelModel):
    from_: Optional[str] = Field(default=None, alias="from")
    amount: Optional[float] = None
    date: Optional[datetime] = None


class DebitFilter(CamelModel):
    to: Optional[str] = None
    amount: Optional[float] = None
    date: Optional[datetime] = None


class QueryOptions(CamelModel):
    sort_by: Optional[str] = Field(default=None, description="field:asc|desc, comma separated")
    limit: Optional[int] = None
    page: Optional[int] = None


RecordT = TypeVar("RecordT", bound=BaseModel)


class Page(CamelModel, Generic[RecordT]):
    results: list[RecordT]
    page: int
    limit: int
    total_pages: int
    total_results: int
