"""
Envelope unwrapping.

Backend responses carry their payload in several wrapper shapes
(``{"item": ...}``, ``{"items": [...], "meta": {...}}``,
``{"success": true, "data": ...}``, bare arrays). The helpers below locate the
payload using a fixed, per-resource key order: the first key that is present
wins and later keys are never consulted, even when the winner has an
unexpected shape.
"""

import math
from typing import Any, Callable, List, Optional, Sequence, TypeVar

from wearsearch_client.core.schemas import Page
from .guards import get_record, is_record, pick, to_int

T = TypeVar("T")

ITEM_KEYS = ("item", "product")
PRODUCT_LIST_KEYS = ("items", "products", "data")
STORE_ITEM_KEYS = ("item", "store")
STORE_LIST_KEYS = ("items", "stores", "data")
BRAND_ITEM_KEYS = ("item", "brand")
BRAND_LIST_KEYS = ("items", "brands", "data")


def unwrap_success_envelope(body: Any) -> Any:
    """``{"success": true, "data": X}`` -> ``X``; any other body is returned as-is."""
    if is_record(body) and body.get("success") is True and "data" in body:
        return body["data"]
    return body


def unwrap_item_envelope(body: Any, keys: Sequence[str] = ITEM_KEYS) -> Any:
    if not is_record(body):
        return body
    for key in keys:
        value = body.get(key)
        if value is not None:
            return value
    return body


def get_array_prop(body: Any, key: str) -> Optional[list]:
    if not is_record(body):
        return None
    value = body.get(key)
    return value if isinstance(value, list) else None


def unwrap_list_envelope(body: Any, keys: Sequence[str]) -> list:
    if isinstance(body, list):
        return body
    if not is_record(body):
        return []
    for key in keys:
        value = body.get(key)
        if value is None:
            continue
        return value if isinstance(value, list) else []
    return []


def extract_page_meta(body: Any, item_count: int) -> dict:
    """
    Pagination numbers for a list body.

    A ``meta`` record takes precedence over top-level ``total``/``page`` keys;
    when neither exists the page is assumed to hold everything.
    """
    source = get_record(body, "meta")
    if source is None:
        source = body if is_record(body) else {}

    total = pick(source, ("total", "totalItems", "total_items", "count"), to_int)
    page = pick(source, ("page", "current_page", "currentPage"), to_int)
    limit = pick(source, ("limit", "per_page", "perPage", "pageSize"), to_int)
    total_pages = pick(source, ("totalPages", "total_pages", "pages"), to_int)

    total = total if total is not None and total >= 0 else item_count
    page = page if page is not None and page > 0 else 1
    if limit is not None and limit <= 0:
        limit = None
    if total_pages is None or total_pages < 0:
        total_pages = math.ceil(total / limit) if limit else 1
    total_pages = max(total_pages, 1)

    return {"total": total, "page": page, "limit": limit, "total_pages": total_pages}


def normalize_page(body: Any, keys: Sequence[str], normalize: Callable[[Any], T]) -> Page:
    raw_items: List[Any] = unwrap_list_envelope(body, keys)
    items = [normalize(raw) for raw in raw_items]
    return Page(items=items, **extract_page_meta(body, len(items)))
