"""
SEO metadata API Service

Every page type has a built-in default so callers always get a title and a
description, whether or not the backend answers.
"""

import logging
from typing import Optional, Union

from wearsearch_client.core.config import get_settings
from wearsearch_client.core.schemas import SeoData
from wearsearch_client.modules.http.client import ApiClient
from wearsearch_client.modules.http.endpoints import SeoEndpoints
from wearsearch_client.modules.http.recovery import recover_with
from wearsearch_client.modules.normalization.content import normalize_seo
from wearsearch_client.modules.observability.logging_config import get_logger

logger = get_logger(__name__)

HOME_SEO = SeoData(
    meta_title="Wearsearch - Discover Exceptional Fashion",
    meta_description=(
        "Discover and shop the latest fashion trends. Find clothing, footwear, and accessories "
        "from top stores with worldwide shipping."
    ),
    h1_title="Discover Exceptional Fashion",
)


def default_category_seo(slug: str) -> SeoData:
    return SeoData(
        meta_title=f"{slug} - Wearsearch",
        meta_description=f"Browse our collection of {slug}. Find the perfect items for your style.",
    )


def default_color_seo(slug: str) -> SeoData:
    return SeoData(
        meta_title=f"{slug} Products - Wearsearch",
        meta_description=(
            f"Shop {slug} fashion items. Browse our curated collection of {slug} clothing and accessories."
        ),
    )


PRODUCT_SEO = SeoData(
    meta_title="Product - Wearsearch",
    meta_description="View product details, pricing, and availability from multiple stores.",
)
STORE_SEO = SeoData(
    meta_title="Store - Wearsearch",
    meta_description="Browse products from this store and discover their collection.",
)
BRAND_SEO = SeoData(
    meta_title="Brand - Wearsearch",
    meta_description="Discover products from this brand and explore their collection.",
)


class SeoService:
    def __init__(self, api: ApiClient, language: Optional[str] = None):
        self.api = api
        self.language = language or get_settings().DEFAULT_LANGUAGE

    async def _fetch(self, path: str, fallback: SeoData, label: str, lang: Optional[str]) -> SeoData:
        body = await recover_with(
            self.api.get(path, params={"lang": lang or self.language}),
            lambda: None,
            f"[SEO API] {label}",
            level=logging.ERROR,
        )
        return normalize_seo(body, fallback)

    async def get_home_seo(self, lang: Optional[str] = None) -> SeoData:
        return await self._fetch(SeoEndpoints.HOME, HOME_SEO, "home", lang)

    async def get_category_seo(self, slug: str, lang: Optional[str] = None) -> SeoData:
        return await self._fetch(
            SeoEndpoints.page("category", slug), default_category_seo(slug), f"category {slug}", lang
        )

    async def get_color_seo(self, slug: str, lang: Optional[str] = None) -> SeoData:
        return await self._fetch(SeoEndpoints.page("color", slug), default_color_seo(slug), f"color {slug}", lang)

    async def get_product_seo(self, product_id: Union[str, int], lang: Optional[str] = None) -> SeoData:
        return await self._fetch(SeoEndpoints.page("product", product_id), PRODUCT_SEO, f"product {product_id}", lang)

    async def get_store_seo(self, store_id: Union[str, int], lang: Optional[str] = None) -> SeoData:
        return await self._fetch(SeoEndpoints.page("store", store_id), STORE_SEO, f"store {store_id}", lang)

    async def get_brand_seo(self, brand_id: Union[str, int], lang: Optional[str] = None) -> SeoData:
        return await self._fetch(SeoEndpoints.page("brand", brand_id), BRAND_SEO, f"brand {brand_id}", lang)
