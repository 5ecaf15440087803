"""
User context and team management API Service

The user context says which stores and brands the signed-in user owns or
manages and which dashboard to show. Every call is hard-fail; errors are
re-raised with the failed action prefixed to the message.
"""

from typing import List

from wearsearch_client.core.exceptions import ApiError
from wearsearch_client.core.schemas import TeamMember, UserContext
from wearsearch_client.modules.http.client import ApiClient
from wearsearch_client.modules.http.endpoints import BrandEndpoints, StoreEndpoints, UserEndpoints
from wearsearch_client.modules.normalization.envelopes import unwrap_list_envelope
from wearsearch_client.modules.normalization.guards import to_optional_string
from wearsearch_client.modules.normalization.users import normalize_team_member, normalize_user_context
from wearsearch_client.modules.observability.logging_config import get_logger

logger = get_logger(__name__)

MEMBER_LIST_KEYS = ("members", "data", "items")


def _prefixed(error: ApiError, action: str) -> ApiError:
    return ApiError(
        f"{action}: {error.message}",
        status=error.status,
        code=error.code,
        error_code=error.error_code,
        url=error.url,
        body=error.body,
    )


class UserContextService:
    def __init__(self, api: ApiClient):
        self.api = api

    async def get_context(self) -> UserContext:
        try:
            body = await self.api.get(UserEndpoints.CONTEXT)
        except ApiError as e:
            raise _prefixed(e, "Failed to fetch user context") from e
        context = normalize_user_context(body)
        logger.debug(f"[UserContext API] Dashboard type for {context.user_id}: {context.dashboard_type}")
        return context

    async def get_store_members(self, store_id: str) -> List[TeamMember]:
        try:
            body = await self.api.get(StoreEndpoints.members(store_id))
        except ApiError as e:
            raise _prefixed(e, "Failed to fetch store members") from e
        return [normalize_team_member(raw) for raw in unwrap_list_envelope(body, MEMBER_LIST_KEYS)]

    async def add_store_member(self, store_id: str, user_id: str) -> None:
        try:
            await self.api.post(StoreEndpoints.members(store_id), json={"user_id": user_id})
        except ApiError as e:
            raise _prefixed(e, "Failed to add store member") from e

    async def remove_store_member(self, store_id: str, user_id: str) -> None:
        try:
            await self.api.delete(StoreEndpoints.member(store_id, user_id))
        except ApiError as e:
            raise _prefixed(e, "Failed to remove store member") from e

    async def get_brand_members(self, brand_id: str) -> List[TeamMember]:
        try:
            body = await self.api.get(BrandEndpoints.members(brand_id))
        except ApiError as e:
            raise _prefixed(e, "Failed to fetch brand members") from e
        return [normalize_team_member(raw) for raw in unwrap_list_envelope(body, MEMBER_LIST_KEYS)]

    async def add_brand_member(self, brand_id: str, user_id: str, role: str = "manager") -> None:
        try:
            await self.api.post(BrandEndpoints.members(brand_id), json={"user_id": user_id, "role": role})
        except ApiError as e:
            raise _prefixed(e, "Failed to add brand member") from e

    async def remove_brand_member(self, brand_id: str, user_id: str) -> None:
        try:
            await self.api.delete(BrandEndpoints.member(brand_id, user_id))
        except ApiError as e:
            raise _prefixed(e, "Failed to remove brand member") from e

    async def get_store_product_sizes(self, store_id: str, product_id: str) -> List[str]:
        try:
            body = await self.api.get(StoreEndpoints.product_sizes(store_id, product_id))
        except ApiError as e:
            raise _prefixed(e, "Failed to fetch product sizes") from e
        sizes = (to_optional_string(raw) for raw in unwrap_list_envelope(body, ("sizes", "data")))
        return [size for size in sizes if size]

    async def update_store_product_sizes(self, store_id: str, product_id: str, sizes: List[str]) -> None:
        try:
            await self.api.put(StoreEndpoints.product_sizes(store_id, product_id), json={"sizes": sizes})
        except ApiError as e:
            raise _prefixed(e, "Failed to update product sizes") from e
