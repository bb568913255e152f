"""Cache keys, cacheability and TTLs for ad reads.

List keys are built from a normalized view of the query so that
near-identical searches share an entry:

- unset and empty values are dropped
- ``search``, ``location`` and ``color`` are trimmed and lower-cased
- numeric range bounds are rounded to coarse buckets (price to 1000, ...)
- keys are serialized in sorted order
"""

from __future__ import annotations

import json
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any

from marketplace_ads.domain.filters import AdFilters, Paging, Sorting, is_set

LIST_PREFIX = "ads:list:"
AD_PREFIX = "ads:ad:"

AD_TTL_SECONDS = 900
BASE_LIST_TTL_SECONDS = 180
SHORT_LIST_TTL_SECONDS = 60
LONG_LIST_TTL_SECONDS = 300

MAX_CACHEABLE_FILTERS = 6
SHORT_TTL_FILTER_THRESHOLD = 5
LONG_TTL_FILTER_LIMIT = 2

# Too selective to yield reusable hits
UNCACHEABLE_FIELDS = frozenset({"posted_by", "manufacturer_ids", "model_ids", "variant_ids"})

LOWERCASED_FIELDS = frozenset({"search", "location", "color"})

BUCKET_STEPS: dict[str, int] = {
    "price_min": 1000,
    "price_max": 1000,
    "max_mileage": 1000,
    "min_area": 10,
    "max_area": 10,
    "min_payload": 100,
    "max_payload": 100,
}


def normalize_filters(filters: AdFilters) -> dict[str, Any]:
    """JSON-compatible, canonical form of the set filters."""
    normalized: dict[str, Any] = {}
    for name in filters.active_fields():
        value = getattr(filters, name)
        if name in LOWERCASED_FIELDS:
            value = value.strip().lower()
        elif name in BUCKET_STEPS:
            value = bucket(value, BUCKET_STEPS[name])
        normalized[name] = _plain(value)
    return normalized


def bucket(value: Decimal | int, step: int) -> int:
    """Round ``value`` to the nearest multiple of ``step`` (halves round up)."""
    steps = (Decimal(value) / step).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return int(steps) * step


def list_key(filters: AdFilters, paging: Paging, sorting: Sorting) -> str:
    payload = {
        **normalize_filters(filters),
        "page": paging.page,
        "limit": paging.limit,
        "sort_by": sorting.sort_by,
        "sort_order": sorting.sort_order.upper(),
    }
    return LIST_PREFIX + json.dumps(payload, sort_keys=True, separators=(",", ":"))


def ad_key(ad_id: str) -> str:
    return f"{AD_PREFIX}{ad_id}"


def is_cacheable(filters: AdFilters) -> bool:
    active = filters.active_fields()
    if len(active) > MAX_CACHEABLE_FILTERS:
        return False
    if is_set(filters.search):
        return False
    return not UNCACHEABLE_FIELDS.intersection(active)


def list_ttl(filters: AdFilters) -> int:
    active_count = len(filters.active_fields())
    has_search = is_set(filters.search)

    if has_search or active_count > SHORT_TTL_FILTER_THRESHOLD:
        return SHORT_LIST_TTL_SECONDS
    if active_count <= LONG_TTL_FILTER_LIMIT:
        return LONG_LIST_TTL_SECONDS
    return BASE_LIST_TTL_SECONDS


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (tuple, list)):
        return sorted(str(item).strip().lower() for item in value)
    return value
