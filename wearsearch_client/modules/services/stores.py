"""
Stores API Service
"""

from typing import Any, Dict, Union

from wearsearch_client.core.exceptions import ApiError
from wearsearch_client.core.schemas import ActionResult, Page, Store
from wearsearch_client.modules.http.client import ApiClient
from wearsearch_client.modules.http.endpoints import StoreEndpoints
from wearsearch_client.modules.normalization.envelopes import (
    PRODUCT_LIST_KEYS,
    STORE_ITEM_KEYS,
    STORE_LIST_KEYS,
    normalize_page,
    unwrap_item_envelope,
)
from wearsearch_client.modules.normalization.products import normalize_product, normalize_store
from wearsearch_client.modules.normalization.users import normalize_action_result
from wearsearch_client.modules.observability.logging_config import get_logger
from .products import FiltersArg, filters_to_params

logger = get_logger(__name__)


class StoresService:
    def __init__(self, api: ApiClient):
        self.api = api

    async def get_all(self, filters: FiltersArg = None) -> Page:
        try:
            body = await self.api.get(StoreEndpoints.LIST, params=filters_to_params(filters))
        except ApiError as e:
            logger.error(f"[Stores API] Failed to fetch stores: {e}")
            raise
        return normalize_page(body, STORE_LIST_KEYS, normalize_store)

    async def get_by_id(self, store_id: Union[str, int]) -> Store:
        try:
            body = await self.api.get(StoreEndpoints.detail(store_id))
        except ApiError as e:
            logger.error(f"[Stores API] Failed to fetch store {store_id}: {e}")
            raise
        return normalize_store(unwrap_item_envelope(body, STORE_ITEM_KEYS))

    async def get_products(self, store_id: Union[str, int], filters: FiltersArg = None) -> Page:
        try:
            body = await self.api.get(StoreEndpoints.products(store_id), params=filters_to_params(filters))
        except ApiError as e:
            logger.error(f"[Stores API] Failed to fetch products for store {store_id}: {e}")
            raise
        return normalize_page(body, PRODUCT_LIST_KEYS, normalize_product)

    # Admin operations

    async def create(self, payload: Dict[str, Any]) -> Store:
        try:
            body = await self.api.post(StoreEndpoints.CREATE, json=payload)
        except ApiError as e:
            logger.error(f"[Stores API] Failed to create store: {e.message}")
            raise
        return normalize_store(unwrap_item_envelope(body, STORE_ITEM_KEYS))

    async def update(self, store_id: Union[str, int], payload: Dict[str, Any]) -> Store:
        try:
            body = await self.api.put(StoreEndpoints.admin(store_id), json=payload)
        except ApiError as e:
            logger.error(f"[Stores API] Failed to update store {store_id}: {e.message}")
            raise
        return normalize_store(unwrap_item_envelope(body, STORE_ITEM_KEYS))

    async def delete(self, store_id: Union[str, int]) -> ActionResult:
        try:
            body = await self.api.delete(StoreEndpoints.admin(store_id))
        except ApiError as e:
            logger.error(f"[Stores API] Failed to delete store {store_id}: {e.message}")
            raise
        return normalize_action_result(body)
