"""
Products API Service
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel

from wearsearch_client.core.exceptions import ApiError
from wearsearch_client.core.schemas import ActionResult, Page, Product, Store
from wearsearch_client.modules.http.client import ApiClient
from wearsearch_client.modules.http.endpoints import ProductEndpoints
from wearsearch_client.modules.normalization.envelopes import (
    ITEM_KEYS,
    PRODUCT_LIST_KEYS,
    STORE_LIST_KEYS,
    normalize_page,
    unwrap_item_envelope,
    unwrap_list_envelope,
)
from wearsearch_client.modules.normalization.guards import is_record, pick, to_optional_string
from wearsearch_client.modules.normalization.products import (
    normalize_product,
    normalize_store,
    prepare_product_payload,
)
from wearsearch_client.modules.normalization.users import normalize_action_result
from wearsearch_client.modules.observability.logging_config import get_logger

logger = get_logger(__name__)


class ProductFilters(BaseModel):
    page: Optional[int] = None
    limit: Optional[int] = None
    search: Optional[str] = None
    category: Optional[str] = None
    type: Optional[str] = None
    color: Optional[str] = None
    gender: Optional[str] = None
    brand_id: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    sort: Optional[str] = None


FiltersArg = Union[ProductFilters, Dict[str, Any], None]


def filters_to_params(filters: FiltersArg) -> Dict[str, Any]:
    if filters is None:
        return {}
    if isinstance(filters, BaseModel):
        return filters.model_dump(exclude_none=True)
    return {key: value for key, value in dict(filters).items() if value is not None}


class ProductsService:
    def __init__(self, api: ApiClient):
        self.api = api

    async def get_all(self, filters: FiltersArg = None) -> Page:
        try:
            body = await self.api.get(ProductEndpoints.LIST, params=filters_to_params(filters))
        except ApiError as e:
            logger.error(f"[Products API] Failed to fetch products: {e}")
            raise
        return normalize_page(body, PRODUCT_LIST_KEYS, normalize_product)

    async def get_by_id(self, product_id: Union[str, int]) -> Product:
        try:
            body = await self.api.get(ProductEndpoints.detail(product_id))
        except ApiError as e:
            logger.error(f"[Products API] Failed to fetch product {product_id}: {e}")
            raise
        return normalize_product(unwrap_item_envelope(body, ITEM_KEYS))

    async def get_related(self, product_id: Union[str, int]) -> List[Product]:
        try:
            body = await self.api.get(ProductEndpoints.related(product_id))
        except ApiError as e:
            logger.error(f"[Products API] Failed to fetch related products for {product_id}: {e}")
            raise
        return [normalize_product(raw) for raw in unwrap_list_envelope(body, PRODUCT_LIST_KEYS)]

    async def search(self, query: str, filters: FiltersArg = None) -> Page:
        params = {"q": query, **filters_to_params(filters)}
        try:
            body = await self.api.get(ProductEndpoints.SEARCH, params=params)
        except ApiError as e:
            logger.error(f"[Products API] Failed to search products for {query!r}: {e}")
            raise
        return normalize_page(body, PRODUCT_LIST_KEYS, normalize_product)

    async def get_by_category(self, category: str, filters: FiltersArg = None) -> Page:
        try:
            body = await self.api.get(ProductEndpoints.by_category(category), params=filters_to_params(filters))
        except ApiError as e:
            logger.error(f"[Products API] Failed to fetch products for category {category}: {e}")
            raise
        return normalize_page(body, PRODUCT_LIST_KEYS, normalize_product)

    async def get_categories(self) -> List[str]:
        body = await self.api.get(ProductEndpoints.CATEGORIES)
        categories = []
        for raw in unwrap_list_envelope(body, ("categories", "items", "data")):
            name = to_optional_string(raw)
            if name is None and is_record(raw):
                name = pick(raw, ("name", "slug", "title"), to_optional_string)
            if name:
                categories.append(name)
        return categories

    async def get_stores(self, product_id: Union[str, int]) -> List[Store]:
        """Stores that carry a product."""
        body = await self.api.get(ProductEndpoints.stores(product_id))
        return [normalize_store(raw) for raw in unwrap_list_envelope(body, STORE_LIST_KEYS)]

    # Admin operations

    async def create(self, payload: Dict[str, Any]) -> Product:
        try:
            body = await self.api.post(ProductEndpoints.CREATE, json=prepare_product_payload(payload))
        except ApiError as e:
            logger.error(f"[Products API] Failed to create product: {e}")
            raise
        return normalize_product(unwrap_item_envelope(body, ITEM_KEYS))

    async def update(self, product_id: Union[str, int], payload: Dict[str, Any]) -> Product:
        try:
            body = await self.api.put(ProductEndpoints.admin(product_id), json=prepare_product_payload(payload))
        except ApiError as e:
            logger.error(f"[Products API] Failed to update product {product_id}: {e}")
            raise
        return normalize_product(unwrap_item_envelope(body, ITEM_KEYS))

    async def delete(self, product_id: Union[str, int]) -> ActionResult:
        try:
            body = await self.api.delete(ProductEndpoints.admin(product_id))
        except ApiError as e:
            logger.error(f"[Products API] Failed to delete product {product_id}: {e}")
            raise
        return normalize_action_result(body)
