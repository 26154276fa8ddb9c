from __future__ import annotations
from datetime import datetime, UTC
from uuid import UUID, uuid4
from sqlmodel import Field, SQLModel


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Credit(SQLModel, table=True):
    id: UUID = Field(default_factory=uuid4, primary_key=True, index=True)
    account_id: str = Field(index=True)
    from_: str = Field(index=True)
    description: str
    amount: float = Field(index=True)
    date: datetime = Field(index=True)
    created_at: datetime = Field(default_factory=_utcnow, index=True)
    updated_at: datetime = Field(default_factory=_utcnow)


class Debit(SQLModel, table=True):
    id: UUID = Field(default_factory=uuid4, primary_key=True, index=True)
    account_id: str = Field(index=True)
    to: str = Field(index=True)
    description: str
    amount: float = Field(index=True)
    date: datetime = Field(index=True)
    created_at: datetime = Field(default_factory=_utcnow, index=True)
    updated_at: datetime = Field(default_factory=_utcnow)
