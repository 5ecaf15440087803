"""
Wishlist normalizers.
"""

from typing import Any, Optional

from wearsearch_client.core.schemas import (
    FavoriteProduct,
    PublicWishlist,
    PublicWishlistItem,
    ShareLink,
    WishlistItem,
    WishlistMutation,
    WishlistResponse,
    WishlistSettings,
)
from .envelopes import unwrap_list_envelope
from .guards import (
    as_record,
    get_record,
    is_record,
    now_iso,
    pick,
    to_boolean,
    to_float,
    to_int,
    to_optional_string,
    to_string_map,
)
from .products import normalize_favorite_product

WISHLIST_LIST_KEYS = ("items", "wishlist", "favorites", "products", "data")
FAVORITES_LIST_KEYS = ("favorites", "products", "items", "data")
PUBLIC_WISHLIST_LIST_KEYS = ("items", "products", "favorites")


def normalize_wishlist_item(raw: Any) -> WishlistItem:
    record = as_record(raw)
    product_id = pick(
        record,
        ("product_id", "productId", "product.id", "product.product_id", "item_id"),
        to_optional_string,
    ) or ""
    item_id = pick(record, ("id", "wishlist_item_id", "wishlistItemId"), to_optional_string) or product_id

    quantity = pick(record, ("quantity", "qty"), to_int)
    if quantity is None or quantity < 1:
        quantity = 1

    attributes = to_string_map(record.get("attributes"))
    if attributes is None:
        attributes = to_string_map(record.get("options"))

    return WishlistItem(
        id=item_id,
        product_id=product_id,
        name=pick(record, ("name", "title", "product.name", "product.title"), to_optional_string) or "",
        image_url=pick(
            record,
            ("image_url", "imageUrl", "image", "product.image_url", "product.image"),
            to_optional_string,
        ),
        price=pick(record, ("price", "price_at_add", "current_price", "product.price"), to_float),
        currency=pick(record, ("currency", "product.currency"), to_optional_string),
        store_id=pick(record, ("store_id", "storeId", "store.id"), to_optional_string),
        variant_id=pick(record, ("variant_id", "variantId", "variant.id"), to_optional_string),
        variant_name=pick(record, ("variant_name", "variantName", "variant.name"), to_optional_string),
        quantity=quantity,
        added_at=pick(record, ("added_at", "addedAt", "created_at", "createdAt"), to_optional_string) or now_iso(),
        in_stock=pick(record, ("in_stock", "inStock", "available", "is_available"), to_boolean),
        url=pick(record, ("url", "product_url", "productUrl"), to_optional_string),
        attributes=attributes,
        position=pick(record, ("position", "sort_order"), to_int),
    )


def normalize_wishlist_response(raw: Any) -> WishlistResponse:
    body = raw
    # {"wishlist": {...}} carries the whole wishlist, not a list of items
    nested = get_record(raw, "wishlist")
    if nested is not None:
        body = nested
    record = as_record(body)
    items = [normalize_wishlist_item(entry) for entry in unwrap_list_envelope(body, WISHLIST_LIST_KEYS)]
    total_items = pick(record, ("total_items", "totalItems", "total", "count"), to_int)
    return WishlistResponse(
        items=items,
        total_items=total_items if total_items is not None else len(items),
        total_value=pick(record, ("total_value", "totalValue"), to_float),
    )


def normalize_wishlist_mutation(raw: Any) -> WishlistMutation:
    record = as_record(raw)
    wishlist = record.get("wishlist")
    item = record.get("item")
    return WishlistMutation(
        wishlist=normalize_wishlist_response(wishlist) if is_record(wishlist) else None,
        item=normalize_wishlist_item(item) if is_record(item) else None,
        message=pick(record, ("message",), to_optional_string),
    )


def normalize_wishlist_settings(raw: Any) -> WishlistSettings:
    record = as_record(raw)
    return WishlistSettings(
        is_public=pick(record, ("is_public", "isPublic"), to_boolean) or False,
        share_id=pick(record, ("share_id", "shareId"), to_optional_string),
        share_url=pick(record, ("share_url", "shareUrl"), to_optional_string),
    )


def normalize_share_link(raw: Any) -> ShareLink:
    record = as_record(raw)
    return ShareLink(
        share_id=pick(record, ("share_id", "shareId"), to_optional_string) or "",
        share_url=pick(record, ("share_url", "shareUrl", "url"), to_optional_string) or "",
    )


def normalize_public_wishlist_item(raw: Any) -> PublicWishlistItem:
    record = as_record(raw)
    return PublicWishlistItem(
        id=pick(record, ("id", "product_id", "item_id"), to_optional_string) or "",
        name=pick(record, ("name", "title", "product_name"), to_optional_string) or "",
        brand=pick(record, ("brand", "brand_name"), to_optional_string),
        image_url=pick(record, ("image_url", "image", "thumbnail"), to_optional_string),
        price=pick(record, ("price",), to_float),
        added_at=pick(record, ("added_at", "created_at"), to_optional_string),
    )


def normalize_public_wishlist(raw: Any) -> PublicWishlist:
    record = as_record(raw)
    if any(record.get(key) is not None for key in PUBLIC_WISHLIST_LIST_KEYS):
        source = unwrap_list_envelope(record, PUBLIC_WISHLIST_LIST_KEYS)
    else:
        source = unwrap_list_envelope(get_record(record, "data"), ("items",))
    items = [normalize_public_wishlist_item(entry) for entry in source]
    count = pick(record, ("items_count", "total", "count"), to_int)
    return PublicWishlist(
        owner_name=pick(
            record,
            ("owner_name", "user_name", "user.name", "username"),
            to_optional_string,
        ) or "User",
        items=items,
        items_count=count if count is not None else len(items),
    )


def normalize_favorites(raw: Any) -> list:
    """Favorites list from a bare array, ``{"favorites": []}`` or ``{"data": []}``."""
    return [normalize_favorite_product(entry) for entry in unwrap_list_envelope(raw, FAVORITES_LIST_KEYS)]


def favorite_product_id(raw: Any) -> Optional[str]:
    if isinstance(raw, FavoriteProduct):
        return raw.product_id or raw.id
    return pick(raw, ("product_id", "productId", "id"), to_optional_string)
