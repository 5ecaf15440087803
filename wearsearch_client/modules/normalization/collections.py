"""
Collection (named wishlist folder) normalizers.
"""

from typing import Any, Dict, List

from wearsearch_client.core.schemas import Collection, CollectionItem
from .guards import as_record, get_record, is_record, now_iso, pick, to_boolean, to_int, to_optional_string
from .products import normalize_product

COLLECTION_ITEM_LIST_KEYS = ("items", "products", "collection_items")


def has_product_reference(raw: Any) -> bool:
    return bool(
        pick(raw, ("product_id", "productId", "product.id", "product.product_id", "product.productId"))
    )


def normalize_collection(raw: Any) -> Collection:
    """Single collection; an inline ``items`` list is kept, rows without a product dropped."""
    record = as_record(raw)
    inline = record.get("items")
    return Collection(
        id=pick(record, ("id", "collection_id", "collectionId"), to_optional_string) or "",
        name=pick(record, ("name",), to_optional_string) or "",
        emoji=pick(record, ("emoji",), to_optional_string),
        description=pick(record, ("description",), to_optional_string),
        product_count=pick(record, ("product_count", "productCount"), to_int) or 0,
        is_public=pick(record, ("is_public", "isPublic"), to_boolean) or False,
        created_at=pick(record, ("created_at", "createdAt"), to_optional_string) or now_iso(),
        updated_at=pick(record, ("updated_at", "updatedAt"), to_optional_string) or now_iso(),
        items=[
            normalize_collection_item(entry)
            for entry in inline
            if is_record(entry) and has_product_reference(entry)
        ] if isinstance(inline, list) else [],
    )


def normalize_collection_item(raw: Any) -> CollectionItem:
    record = as_record(raw)
    product = record.get("product")
    return CollectionItem(
        product_id=pick(record, ("product_id", "productId", "product.id", "id"), to_optional_string) or "",
        added_at=pick(record, ("added_at", "addedAt"), to_optional_string) or now_iso(),
        notes=pick(record, ("notes",), to_optional_string),
        # Flat rows carry the product fields on the item itself
        product=normalize_product(product if is_record(product) else record),
    )


def extract_collection_items(body: Any) -> List[Any]:
    if isinstance(body, list):
        return body
    if not is_record(body):
        return []
    for key in COLLECTION_ITEM_LIST_KEYS:
        if isinstance(body.get(key), list):
            return body[key]
    data = get_record(body, "data")
    if data is not None:
        for key in ("items", "products"):
            if isinstance(data.get(key), list):
                return data[key]
    return []


def group_items_by_collection(raw: Any) -> Dict[str, List[CollectionItem]]:
    """
    Items keyed by collection id.

    Accepts a flat list of rows carrying ``collection_id`` or a mapping of
    collection id to item list.
    """
    grouped: Dict[str, List[CollectionItem]] = {}
    if isinstance(raw, list):
        for entry in raw:
            if not is_record(entry) or not has_product_reference(entry):
                continue
            collection_id = (pick(entry, ("collection_id", "collectionId"), to_optional_string) or "").strip()
            if not collection_id:
                continue
            grouped.setdefault(collection_id, []).append(normalize_collection_item(entry))
    elif is_record(raw):
        for key, value in raw.items():
            if isinstance(value, list):
                grouped[str(key)] = [normalize_collection_item(entry) for entry in value]
    return grouped


def normalize_collections(body: Any) -> List[Collection]:
    """
    Collection list with items attached.

    Inline ``items`` on a collection win over a sibling item list grouped by
    ``collection_id``.
    """
    payload = get_record(body, "data")
    if payload is None:
        payload = body if is_record(body) else None

    if isinstance(body, list):
        raw_collections = body
    elif payload is not None:
        candidate = pick(payload, ("collections", "items"))
        raw_collections = candidate if isinstance(candidate, list) else []
    else:
        raw_collections = []

    sibling_items = None
    if payload is not None and isinstance(payload.get("collections"), list):
        sibling_items = payload.get("items")
    if sibling_items is None and is_record(body) and isinstance(body.get("collections"), list):
        sibling_items = body.get("items")
    items_by_collection = group_items_by_collection(sibling_items)

    collections = []
    for raw in raw_collections:
        collection = normalize_collection(raw)
        if not (is_record(raw) and isinstance(raw.get("items"), list)):
            collection.items = items_by_collection.get(collection.id, [])
        collections.append(collection)
    return collections


def unwrap_collection_payload(body: Any) -> Any:
    """Single collection from create/update responses."""
    data = get_record(body, "data")
    record = as_record(body)
    for candidate in (
        record.get("collection"),
        record.get("item"),
        data.get("collection") if data else None,
        data.get("item") if data else None,
        data,
    ):
        if candidate is not None:
            return candidate
    return body
