"""
Category, banner and SEO metadata normalizers.
"""

from typing import Any, Dict, List, Optional

from wearsearch_client.core.schemas import Banner, BannerAnalytics, Category, SeoData
from .guards import as_record, get_record, is_record, pick, to_boolean, to_float, to_int, to_optional_string

BANNER_TARGET_TYPES = ("all", "category", "brand", "product")


def normalize_category(raw: Any) -> Category:
    record = as_record(raw)
    name = pick(record, ("name", "title"), to_optional_string) or ""
    subcategories = record.get("subcategories")
    return Category(
        id=pick(record, ("id", "category_id", "categoryId"), to_optional_string) or "",
        name=name,
        slug=pick(record, ("slug",), to_optional_string) or "",
        description=pick(record, ("description",), to_optional_string),
        image_url=pick(record, ("image_url", "imageUrl", "image"), to_optional_string),
        product_count=pick(record, ("product_count", "productCount", "products_count"), to_int) or 0,
        parent_id=pick(record, ("parent_id", "parentId"), to_optional_string),
        is_active=pick(record, ("is_active", "isActive"), to_boolean) is not False,
        sort_order=pick(record, ("sort_order", "sortOrder"), to_int),
        subcategories=[
            normalize_category(entry) for entry in subcategories if is_record(entry)
        ] if isinstance(subcategories, list) else [],
    )


def extract_category_list(body: Any) -> Any:
    """``data.items``, then ``items``, then a bare array; None when none is a list."""
    data = get_record(body, "data")
    for candidate in (
        data.get("items") if data else None,
        body.get("items") if is_record(body) else None,
        body,
    ):
        if isinstance(candidate, list):
            return candidate
    return None


def build_category_tree(categories: List[Category]) -> List[Category]:
    """
    Nest a flat category list under ``parent_id``.

    Categories whose parent is not in the list are kept at the root.
    """
    by_id: Dict[str, Category] = {}
    for category in categories:
        by_id[category.id] = category.model_copy(update={"subcategories": []})

    roots = []
    for category in categories:
        node = by_id[category.id]
        parent = by_id.get(category.parent_id) if category.parent_id else None
        if parent is not None and parent is not node:
            parent.subcategories.append(node)
        else:
            roots.append(node)
    return roots


def normalize_banner(raw: Any) -> Banner:
    record = as_record(raw)
    target_type = pick(record, ("target_type", "targetType"), to_optional_string)
    return Banner(
        id=pick(record, ("id", "banner_id", "bannerId"), to_optional_string) or "",
        title=pick(record, ("title", "name"), to_optional_string) or "",
        subtitle=pick(record, ("subtitle",), to_optional_string),
        description=pick(record, ("description",), to_optional_string),
        image_url=pick(record, ("image_url", "imageUrl", "image"), to_optional_string) or "",
        link_url=pick(record, ("link_url", "linkUrl", "url"), to_optional_string),
        link_text=pick(record, ("link_text", "linkText"), to_optional_string) or "",
        position=pick(record, ("position",), to_int) or 0,
        is_active=pick(record, ("is_active", "isActive"), to_boolean) is not False,
        start_date=pick(record, ("start_date", "startDate"), to_optional_string),
        end_date=pick(record, ("end_date", "endDate"), to_optional_string),
        click_count=pick(record, ("click_count", "clickCount", "clicks"), to_int) or 0,
        impression_count=pick(record, ("impression_count", "impressionCount", "impressions"), to_int) or 0,
        target_type=target_type if target_type in BANNER_TARGET_TYPES else "all",
        target_id=pick(record, ("target_id", "targetId"), to_optional_string),
        priority=pick(record, ("priority",), to_int) or 0,
        created_at=pick(record, ("created_at", "createdAt"), to_optional_string),
        updated_at=pick(record, ("updated_at", "updatedAt"), to_optional_string),
    )


def normalize_banner_analytics(raw: Any) -> BannerAnalytics:
    record = as_record(raw)
    return BannerAnalytics(
        banner_id=pick(record, ("banner_id", "bannerId", "id"), to_optional_string) or "",
        clicks=pick(record, ("clicks", "click_count"), to_int) or 0,
        impressions=pick(record, ("impressions", "impression_count"), to_int) or 0,
        click_through_rate=pick(record, ("click_through_rate", "clickThroughRate", "ctr"), to_float) or 0.0,
        start_date=pick(record, ("start_date", "period.start_date", "startDate"), to_optional_string),
        end_date=pick(record, ("end_date", "period.end_date", "endDate"), to_optional_string),
    )


def normalize_seo(raw: Any, fallback: Optional[SeoData] = None) -> SeoData:
    """
    SEO record from ``{"item": {...}}`` or a bare record.

    Missing title or description are taken from ``fallback``.
    """
    fallback = fallback or SeoData()
    record = as_record(raw)
    item = record.get("item")
    if is_record(item):
        record = item
    return SeoData(
        meta_title=pick(record, ("meta_title", "metaTitle", "title"), to_optional_string) or fallback.meta_title,
        meta_description=(
            pick(record, ("meta_description", "metaDescription", "description"), to_optional_string)
            or fallback.meta_description
        ),
        canonical_url=pick(record, ("canonical_url", "canonicalUrl"), to_optional_string),
        h1_title=pick(record, ("h1_title", "h1Title", "h1"), to_optional_string) or fallback.h1_title,
        content_text=pick(record, ("content_text", "contentText"), to_optional_string),
        keywords=pick(record, ("keywords",), to_optional_string),
    )
