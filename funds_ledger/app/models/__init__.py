from .db import Credit as CreditModel
from .db import Debit as DebitModel
from .schemas import (
    CreditCreate,
    CreditFilter,
    CreditResponse,
    CreditUpdate,
    DebitCreate,
    DebitFilter,
    DebitResponse,
    DebitUpdate,
    Page,
    QueryOptions,
)

__all__ = [
    "CreditCreate",
    "CreditFilter",
    "CreditResponse",
    "CreditUpdate",
    "DebitCreate",
    "DebitFilter",
    "DebitResponse",
    "DebitUpdate",
    "Page",
    "QueryOptions",
    "CreditModel",
    "DebitModel",
]
