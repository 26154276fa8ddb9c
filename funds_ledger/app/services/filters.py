from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from .resources import ResourceType

OPTION_KEYS = ("sortBy", "limit", "page")


def pick(source: Mapping[str, Any], keys: Iterable[str]) -> dict[str, Any]:
    """Return the entries of ``source`` whose key is in ``keys``; nothing else."""
    return {key: source[key] for key in keys if key in source}


def split_query(
    resource: ResourceType, params: Mapping[str, Any]
) -> tuple[dict[str, Any], dict[str, Any]]:
    return pick(params, resource.filter_fields), pick(params, OPTION_KEYS)
