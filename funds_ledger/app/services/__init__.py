from .filters import pick, split_query
from .pagination import Page, paginate, parse_sort_by
from .records import RecordService
from .repository import RecordRepository
from .resources import CREDITS, DEBITS, ResourceType

__all__ = [
    "CREDITS",
    "DEBITS",
    "Page",
    "RecordRepository",
    "RecordService",
    "ResourceType",
    "paginate",
    "parse_sort_by",
    "pick",
    "split_query",
]
