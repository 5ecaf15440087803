"""
Catalog normalizers: products, brands, stores and recommendation variants.

Each field is looked up under an ordered alias list (legacy snake_case,
camelCase, nested) and the first alias that coerces cleanly wins.
"""

from typing import Any, Optional

from wearsearch_client.core.schemas import (
    Brand,
    BrandRef,
    FavoriteProduct,
    Product,
    RecommendedProduct,
    SimilarProduct,
    Store,
)
from .guards import (
    as_record,
    is_record,
    pick,
    to_boolean,
    to_float,
    to_int,
    to_optional_string,
    to_string_list,
)

PRODUCT_ID_KEYS = ("id", "product_id", "productId", "item_id", "itemId")
PRODUCT_NAME_KEYS = ("name", "title", "product_name", "productName")
PRICE_KEYS = ("price", "price_min", "min_price", "priceMin")
PRICE_MIN_KEYS = ("price_min", "min_price", "priceMin")
PRICE_MAX_KEYS = ("price_max", "max_price", "priceMax")
IMAGE_KEYS = ("image_url", "imageUrl", "image", "thumbnail", "thumbnail_url")


def normalize_brand_ref(raw: Any) -> Optional[BrandRef]:
    """
    Brand reference carried on a product.

    Accepts a nested ``brand`` record, a ``brand`` display string, or flat
    ``brand_id`` / ``brand_name`` keys. Returns None when nothing identifies a
    brand.
    """
    record = as_record(raw)
    nested = record.get("brand")
    if is_record(nested):
        brand_id = pick(nested, ("id", "brand_id", "brandId"), to_optional_string) or ""
        name = pick(nested, ("name", "title", "display_name"), to_optional_string) or ""
    else:
        brand_id = pick(record, ("brand_id", "brandId"), to_optional_string) or ""
        name = (
            pick(record, ("brand_name", "brandName"), to_optional_string)
            or to_optional_string(nested)
            or ""
        )
    if not brand_id and not name:
        return None
    return BrandRef(id=brand_id, name=name)


def _product_fields(raw: Any) -> dict:
    record = as_record(raw)
    images = to_string_list(record.get("images"))
    if not images:
        images = to_string_list(record.get("image_urls") or record.get("imageUrls"))
    image_url = pick(record, IMAGE_KEYS, to_optional_string)
    if image_url is None:
        image_url = images[0] if images else ""

    return {
        "id": pick(record, PRODUCT_ID_KEYS, to_optional_string) or "",
        "name": pick(record, PRODUCT_NAME_KEYS, to_optional_string) or "",
        "category": pick(record, ("category", "category_name", "categoryName", "category.name"), to_optional_string) or "",
        "type": pick(record, ("type", "product_type", "productType"), to_optional_string) or "",
        "description": pick(record, ("description", "long_description"), to_optional_string) or "",
        "price": pick(record, PRICE_KEYS, to_float),
        "price_min": pick(record, PRICE_MIN_KEYS, to_float),
        "price_max": pick(record, PRICE_MAX_KEYS, to_float),
        "currency": pick(record, ("currency", "currency_code", "currencyCode"), to_optional_string),
        "image_url": image_url,
        "images": images,
        "brand": normalize_brand_ref(record),
        "gender": pick(record, ("gender",), to_optional_string),
        "color": pick(record, ("color", "colour"), to_optional_string),
    }


def normalize_product(raw: Any) -> Product:
    return Product(**_product_fields(raw))


def normalize_recommendation(raw: Any) -> RecommendedProduct:
    record = as_record(raw)
    return RecommendedProduct(
        **_product_fields(record),
        reason=pick(record, ("reason",), to_optional_string),
        score=pick(record, ("score",), to_float),
    )


def normalize_similar_product(raw: Any) -> SimilarProduct:
    record = as_record(raw)
    return SimilarProduct(
        **_product_fields(record),
        similarity_score=pick(record, ("similarity_score", "similarityScore"), to_float),
    )


def normalize_favorite_product(raw: Any) -> FavoriteProduct:
    """A favorites entry: either a flat product row or ``{"product": {...}}``."""
    record = as_record(raw)
    nested = record.get("product")
    fields = _product_fields(nested if is_record(nested) else record)
    product_id = (
        pick(record, ("product_id", "productId", "product.id"), to_optional_string)
        or fields["id"]
    )
    if not fields["id"]:
        fields["id"] = product_id
    return FavoriteProduct(
        **fields,
        product_id=product_id,
        favorite_id=pick(record, ("favorite_id", "favoriteId"), to_optional_string),
        added_at=pick(record, ("added_at", "addedAt", "created_at", "createdAt"), to_optional_string),
    )


def normalize_store(raw: Any) -> Store:
    record = as_record(raw)
    return Store(
        id=pick(record, ("id", "store_id", "storeId"), to_optional_string) or "",
        name=pick(record, ("name", "title", "store_name"), to_optional_string) or "",
        telegram_url=pick(record, ("telegram_url", "telegramUrl", "telegram"), to_optional_string),
        instagram_url=pick(record, ("instagram_url", "instagramUrl", "instagram"), to_optional_string),
        tiktok_url=pick(record, ("tiktok_url", "tiktokUrl", "tiktok"), to_optional_string),
        shipping_info=pick(record, ("shipping_info", "shippingInfo", "shipping"), to_optional_string),
        logo_url=pick(record, ("logo_url", "logoUrl", "logo"), to_optional_string),
        is_verified=pick(record, ("is_verified", "isVerified", "verified"), to_boolean) or False,
        is_recommended=pick(record, ("is_recommended", "isRecommended", "recommended"), to_boolean) or False,
        product_count=pick(record, ("product_count", "productCount", "products_count"), to_int) or 0,
        brand_count=pick(record, ("brand_count", "brandCount", "brands_count"), to_int) or 0,
        average_rating=pick(record, ("average_rating", "averageRating", "rating"), to_float),
        total_ratings=pick(record, ("total_ratings", "totalRatings", "ratings_count"), to_int),
        created_at=pick(record, ("created_at", "createdAt"), to_optional_string),
        updated_at=pick(record, ("updated_at", "updatedAt"), to_optional_string),
    )


def normalize_brand(raw: Any) -> Brand:
    record = as_record(raw)
    return Brand(
        id=pick(record, ("id", "brand_id", "brandId"), to_optional_string) or "",
        name=pick(record, ("name", "title", "display_name"), to_optional_string) or "",
        slug=pick(record, ("slug",), to_optional_string),
        logo_url=pick(record, ("logo_url", "logoUrl", "logo"), to_optional_string),
        description=pick(record, ("description",), to_optional_string),
        website_url=pick(record, ("website_url", "websiteUrl", "website"), to_optional_string),
        product_count=pick(record, ("product_count", "productCount", "products_count"), to_int) or 0,
    )


def prepare_product_payload(payload: dict) -> dict:
    """
    Outgoing admin product payload.

    ``store_price`` is only copied to ``price`` when ``price`` is absent; an
    explicit ``price`` always wins.
    """
    prepared = {key: value for key, value in dict(payload or {}).items() if value is not None}
    if prepared.get("price") is None and prepared.get("store_price") is not None:
        prepared["price"] = prepared["store_price"]
    return prepared
