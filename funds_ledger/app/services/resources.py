from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel
from sqlmodel import SQLModel

from ..models import (
    CreditCreate,
    CreditFilter,
    CreditModel,
    CreditResponse,
    CreditUpdate,
    DebitCreate,
    DebitFilter,
    DebitModel,
    DebitResponse,
    DebitUpdate,
)


@dataclass(frozen=True)
class ResourceType:
    """Everything the generic service and pagination code need to know about one resource."""

    name: str
    path: str
    model: type[SQLModel]
    create_schema: type[BaseModel]
    update_schema: type[BaseModel]
    response_schema: type[BaseModel]
    filter_schema: type[BaseModel]
    filter_fields: tuple[str, ...]

    @property
    def event_prefix(self) -> str:
        return self.name.lower()

    def attribute_for(self, key: str) -> Optional[str]:
        """Resolve a public field name (``accountId``, ``from``) or a Python
        attribute name (``account_id``, ``from_``) to the table attribute.

        Returns ``None`` for names the resource does not have.
        """
        fields = self.response_schema.model_fields
        if key in fields:
            return key
        for name, info in fields.items():
            if info.alias == key:
                return name
        return None


CREDITS = ResourceType(
    name="Credit",
    path="credits",
    model=CreditModel,
    create_schema=CreditCreate,
    update_schema=CreditUpdate,
    response_schema=CreditResponse,
    filter_schema=CreditFilter,
    filter_fields=("from", "amount", "date"),
)

DEBITS = ResourceType(
    name="Debit",
    path="debits",
    model=DebitModel,
    create_schema=DebitCreate,
    update_schema=DebitUpdate,
    response_schema=DebitResponse,
    filter_schema=DebitFilter,
    filter_fields=("to", "amount", "date"),
)
