"""
Read-through catalog endpoints.

Each route calls the upstream marketplace API through the shared client and
returns the normalized models, so consumers never see the raw response shapes.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from wearsearch_client.core.exceptions import ApiError
from wearsearch_client.core.schemas import Brand, Page, Product, Store
from wearsearch_client.modules.observability.logging_config import get_logger
from wearsearch_client.modules.services import WearsearchClient, get_client
from wearsearch_client.modules.services.products import ProductFilters

logger = get_logger(__name__)

router = APIRouter(prefix="/catalog", tags=["catalog"])


def get_catalog_client() -> WearsearchClient:
    return get_client()


def _upstream_error(error: ApiError) -> HTTPException:
    status = error.status if error.status and error.status >= 400 else 502
    logger.warning(f"[Catalog API] Upstream error {error.status or error.code}: {error.message}")
    return HTTPException(status_code=status, detail=error.to_dict())


@router.get("/products")
async def list_products(
    page: Optional[int] = Query(None, ge=1),
    limit: Optional[int] = Query(None, ge=1, le=100),
    search: Optional[str] = None,
    category: Optional[str] = None,
    type: Optional[str] = None,
    color: Optional[str] = None,
    gender: Optional[str] = None,
    brand_id: Optional[str] = None,
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
    sort: Optional[str] = None,
    client: WearsearchClient = Depends(get_catalog_client),
) -> Page:
    filters = ProductFilters(
        page=page,
        limit=limit,
        search=search,
        category=category,
        type=type,
        color=color,
        gender=gender,
        brand_id=brand_id,
        min_price=min_price,
        max_price=max_price,
        sort=sort,
    )
    try:
        return await client.products.get_all(filters)
    except ApiError as e:
        raise _upstream_error(e)


@router.get("/products/{product_id}")
async def get_product(product_id: str, client: WearsearchClient = Depends(get_catalog_client)) -> Product:
    try:
        return await client.products.get_by_id(product_id)
    except ApiError as e:
        raise _upstream_error(e)


@router.get("/stores")
async def list_stores(
    page: Optional[int] = Query(None, ge=1),
    limit: Optional[int] = Query(None, ge=1, le=100),
    search: Optional[str] = None,
    client: WearsearchClient = Depends(get_catalog_client),
) -> Page:
    try:
        return await client.stores.get_all({"page": page, "limit": limit, "search": search})
    except ApiError as e:
        raise _upstream_error(e)


@router.get("/stores/{store_id}")
async def get_store(store_id: str, client: WearsearchClient = Depends(get_catalog_client)) -> Store:
    try:
        return await client.stores.get_by_id(store_id)
    except ApiError as e:
        raise _upstream_error(e)


@router.get("/brands")
async def list_brands(client: WearsearchClient = Depends(get_catalog_client)) -> List[Brand]:
    try:
        return await client.brands.get_all()
    except ApiError as e:
        raise _upstream_error(e)
