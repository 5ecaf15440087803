"""
Brands API Service
"""

from typing import Any, Dict, List, Union

from wearsearch_client.core.exceptions import ApiError
from wearsearch_client.core.schemas import ActionResult, Brand, Page
from wearsearch_client.modules.http.client import ApiClient
from wearsearch_client.modules.http.endpoints import BrandEndpoints
from wearsearch_client.modules.normalization.envelopes import (
    BRAND_ITEM_KEYS,
    BRAND_LIST_KEYS,
    PRODUCT_LIST_KEYS,
    normalize_page,
    unwrap_item_envelope,
    unwrap_list_envelope,
)
from wearsearch_client.modules.normalization.products import normalize_brand, normalize_product
from wearsearch_client.modules.normalization.users import normalize_action_result
from wearsearch_client.modules.observability.logging_config import get_logger
from .products import FiltersArg, filters_to_params

logger = get_logger(__name__)


class BrandsService:
    def __init__(self, api: ApiClient):
        self.api = api

    async def get_all(self) -> List[Brand]:
        try:
            body = await self.api.get(BrandEndpoints.LIST)
        except ApiError as e:
            logger.error(f"[Brands API] Failed to fetch brands: {e}")
            raise
        return [normalize_brand(raw) for raw in unwrap_list_envelope(body, BRAND_LIST_KEYS)]

    async def get_by_id(self, brand_id: Union[str, int]) -> Brand:
        try:
            body = await self.api.get(BrandEndpoints.detail(brand_id))
        except ApiError as e:
            logger.error(f"[Brands API] Failed to fetch brand {brand_id}: {e}")
            raise
        return normalize_brand(unwrap_item_envelope(body, BRAND_ITEM_KEYS))

    async def get_products(self, brand_id: Union[str, int], filters: FiltersArg = None) -> Page:
        try:
            body = await self.api.get(BrandEndpoints.products(brand_id), params=filters_to_params(filters))
        except ApiError as e:
            logger.error(f"[Brands API] Failed to fetch products for brand {brand_id}: {e}")
            raise
        return normalize_page(body, PRODUCT_LIST_KEYS, normalize_product)

    async def create(self, payload: Dict[str, Any]) -> Brand:
        body = await self.api.post(BrandEndpoints.CREATE, json=payload)
        return normalize_brand(unwrap_item_envelope(body, BRAND_ITEM_KEYS))

    async def update(self, brand_id: Union[str, int], payload: Dict[str, Any]) -> Brand:
        body = await self.api.put(BrandEndpoints.detail(brand_id), json=payload)
        return normalize_brand(unwrap_item_envelope(body, BRAND_ITEM_KEYS))

    async def delete(self, brand_id: Union[str, int]) -> ActionResult:
        body = await self.api.delete(BrandEndpoints.detail(brand_id))
        return normalize_action_result(body)
