"""
Categories API Service

Categories live on the legacy ``/api`` routes. Every read degrades instead of
raising: list reads fall back to a fixed category set, single reads to None.
"""

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel

from wearsearch_client.core.schemas import Category
from wearsearch_client.modules.http.client import ApiClient
from wearsearch_client.modules.http.endpoints import CategoryEndpoints
from wearsearch_client.modules.http.recovery import recover_with
from wearsearch_client.modules.normalization.content import (
    build_category_tree,
    extract_category_list,
    normalize_category,
)
from wearsearch_client.modules.normalization.guards import is_record
from wearsearch_client.modules.observability.logging_config import get_logger

logger = get_logger(__name__)

FALLBACK_CATEGORIES = (
    ("1", "Clothing", "clothing", "Fashion clothing for all occasions"),
    ("2", "Shoes", "shoes", "Footwear for every style"),
    ("3", "Accessories", "accessories", "Complete your look with accessories"),
    ("4", "Bags", "bags", "Handbags, backpacks, and more"),
)


def fallback_categories() -> List[Category]:
    return [
        Category(id=category_id, name=name, slug=slug, description=description, sort_order=position)
        for position, (category_id, name, slug, description) in enumerate(FALLBACK_CATEGORIES, start=1)
    ]


class CategoryFilters(BaseModel):
    page: Optional[int] = None
    limit: Optional[int] = None
    search: Optional[str] = None
    # "" asks for top-level categories
    parent_id: Optional[str] = None
    is_active: Optional[bool] = None
    sort_by: Optional[Literal["name", "productCount", "createdAt", "sortOrder"]] = None
    sort_order: Optional[Literal["asc", "desc"]] = None

    def to_params(self) -> Dict[str, Any]:
        params = {
            "page": self.page,
            "limit": self.limit,
            "search": self.search,
            "parentId": self.parent_id,
            "isActive": self.is_active,
            "sortBy": self.sort_by,
            "sortOrder": self.sort_order,
        }
        return {key: value for key, value in params.items() if value is not None}


class CategoriesService:
    def __init__(self, api: ApiClient):
        self.api = api

    async def get_categories(self, filters: Optional[CategoryFilters] = None) -> List[Category]:
        params = filters.to_params() if filters is not None else None
        body = await recover_with(
            self.api.get(CategoryEndpoints.LIST, params=params),
            lambda: None,
            "[Categories API] get_categories",
        )
        raw_categories = extract_category_list(body)
        if raw_categories is None:
            return fallback_categories()
        return [normalize_category(raw) for raw in raw_categories if is_record(raw)]

    async def _get_one(self, path: str, label: str) -> Optional[Category]:
        body = await recover_with(self.api.get(path), lambda: None, label)
        if is_record(body) and is_record(body.get("data")):
            body = body["data"]
        return normalize_category(body) if is_record(body) else None

    async def get_by_id(self, category_id: Union[str, int]) -> Optional[Category]:
        return await self._get_one(CategoryEndpoints.detail(category_id), f"[Categories API] get_by_id {category_id}")

    async def get_by_slug(self, slug: str) -> Optional[Category]:
        return await self._get_one(CategoryEndpoints.by_slug(slug), f"[Categories API] get_by_slug {slug}")

    async def get_main_categories(self) -> List[Category]:
        return await self.get_categories(
            CategoryFilters(parent_id="", is_active=True, sort_by="sortOrder", sort_order="asc")
        )

    async def get_subcategories(self, parent_id: str) -> List[Category]:
        return await self.get_categories(
            CategoryFilters(parent_id=parent_id, is_active=True, sort_by="sortOrder", sort_order="asc")
        )

    async def search_categories(self, query: str, limit: int = 10) -> List[Category]:
        return await self.get_categories(CategoryFilters(search=query, limit=limit, is_active=True))

    async def get_category_tree(self) -> List[Category]:
        categories = await self.get_categories(CategoryFilters(is_active=True))
        return build_category_tree(categories)
