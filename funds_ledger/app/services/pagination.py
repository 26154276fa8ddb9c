"""Filtered, sorted, page-bounded queries shared by every resource type.

``paginate`` never fails on malformed options: an unusable ``limit`` or
``page`` falls back to its default and unknown sort fields are dropped. Only
storage failures propagate, as :class:`StorageUnavailableError`.

Boundary rules:

* ``totalPages`` is ``ceil(totalResults / limit)``, so an empty result set
  reports ``totalPages == 0`` while still answering page 1 with an empty
  ``results`` list.
* ``limit`` and ``page`` must be positive integers; zero, negatives and
  non-numeric values are replaced with the defaults (10 and 1).
* ``limit`` is capped at ``MAX_LIMIT`` (100). ``page`` has no cap: a page
  past ``totalPages`` returns no rows without querying, so the offset sent to
  the store never exceeds ``totalResults``.
* Every ordering ends with ``id`` ascending so rows that tie on the requested
  keys always come back in the same order.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, Optional, TypeVar

from .repository import RecordRepository, SortClause
from .resources import ResourceType

DEFAULT_LIMIT = 10
DEFAULT_PAGE = 1
MAX_LIMIT = 100
DEFAULT_SORT_FIELD = "created_at"
TIEBREAK_FIELD = "id"

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    results: list[T] = field(default_factory=list)
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    total_pages: int = 0
    total_results: int = 0


def _positive_int(value: Any, default: int) -> int:
    if value is None or isinstance(value, bool):
        return default
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        return default
    return number if number > 0 else default


def parse_sort_by(resource: ResourceType, sort_by: Optional[str]) -> list[SortClause]:
    """Turn ``"amount:desc,date"`` into ``[("amount", True), ("date", False), ("id", False)]``.

    Direction defaults to ascending; anything other than ``desc`` counts as
    ascending. Fields the resource does not know are skipped, and a repeated
    field keeps its first direction.
    """
    clauses: list[SortClause] = []
    seen: set[str] = set()
    for raw in (sort_by or "").split(","):
        key, _, direction = raw.strip().partition(":")
        attribute = resource.attribute_for(key.strip())
        if attribute is None or attribute in seen:
            continue
        seen.add(attribute)
        clauses.append((attribute, direction.strip().lower() == "desc"))

    if not clauses:
        clauses.append((DEFAULT_SORT_FIELD, False))
        seen.add(DEFAULT_SORT_FIELD)
    if TIEBREAK_FIELD not in seen:
        clauses.append((TIEBREAK_FIELD, False))
    return clauses


def resolve_filter(resource: ResourceType, filters: Mapping[str, Any]) -> dict[str, Any]:
    resolved: dict[str, Any] = {}
    for key, value in filters.items():
        attribute = resource.attribute_for(key)
        if attribute is not None:
            resolved[attribute] = value
    return resolved


def paginate(
    repository: RecordRepository,
    resource: ResourceType,
    filters: Mapping[str, Any],
    options: Mapping[str, Any],
    default_limit: int = DEFAULT_LIMIT,
) -> Page:
    criteria = resolve_filter(resource, filters)
    sort = parse_sort_by(resource, options.get("sortBy", options.get("sort_by")))
    limit = min(_positive_int(options.get("limit"), default_limit), MAX_LIMIT)
    page = _positive_int(options.get("page"), DEFAULT_PAGE)

    total_results = repository.count(criteria)
    total_pages = math.ceil(total_results / limit)

    results: list[Any] = []
    if page <= total_pages:
        results = repository.find_many(criteria, sort, skip=(page - 1) * limit, limit=limit)

    return Page(
        results=results,
        page=page,
        limit=limit,
        total_pages=total_pages,
        total_results=total_results,
    )
