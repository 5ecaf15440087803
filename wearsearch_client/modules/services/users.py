"""
User profile and favorites API Service
"""

from typing import Any, Dict, List, Union

from wearsearch_client.core.exceptions import ApiError, backend_error_detail
from wearsearch_client.core.schemas import ActionResult, FavoriteProduct, FavoriteStatus, User
from wearsearch_client.modules.http.client import ApiClient
from wearsearch_client.modules.http.endpoints import UserEndpoints
from wearsearch_client.modules.http.recovery import recover_with, status_in
from wearsearch_client.modules.normalization.envelopes import unwrap_item_envelope
from wearsearch_client.modules.normalization.guards import get_record, is_record, pick, to_optional_string
from wearsearch_client.modules.normalization.users import (
    normalize_action_result,
    normalize_favorite_status,
    normalize_user,
)
from wearsearch_client.modules.normalization.wishlist import favorite_product_id, normalize_favorites
from wearsearch_client.modules.observability.logging_config import get_logger

logger = get_logger(__name__)


class UserService:
    def __init__(self, api: ApiClient):
        self.api = api

    async def get_profile(self) -> User:
        body = await self.api.get(UserEndpoints.PROFILE)
        return normalize_user(unwrap_item_envelope(body, ("user", "profile")))

    async def update_profile(self, updates: Dict[str, Any]) -> User:
        body = await self.api.put(UserEndpoints.PROFILE, json=updates)
        return normalize_user(unwrap_item_envelope(body, ("user", "profile")))

    async def get_favorites(self) -> List[FavoriteProduct]:
        """Favorites of the signed-in user; empty when signed out or the route is missing."""
        body = await recover_with(
            self.api.get(UserEndpoints.FAVORITES),
            lambda: [],
            "[User API] get_favorites",
            when=status_in(401, 404),
        )
        return normalize_favorites(body)

    async def add_favorite(self, product_id: Union[str, int]) -> FavoriteStatus:
        body = await self.api.post(UserEndpoints.favorite(product_id))
        favorite = get_record(body, "favorite")
        return FavoriteStatus(
            is_favorited=True,
            favorite_id=pick(favorite, ("id", "favorite_id"), to_optional_string) if favorite else None,
        )

    async def remove_favorite(self, product_id: Union[str, int]) -> ActionResult:
        body = await self.api.delete(UserEndpoints.favorite(product_id))
        return normalize_action_result(body)

    async def check_favorite(self, product_id: Union[str, int]) -> FavoriteStatus:
        try:
            body = await self.api.get(UserEndpoints.check_favorite(product_id))
        except ApiError as e:
            logger.info(f"[User API] Favorite check unavailable ({e.status}); scanning favorites list")
            return FavoriteStatus(is_favorited=await self.is_favorite(product_id))
        if not is_record(body):
            return FavoriteStatus()
        return normalize_favorite_status(body)

    async def toggle_favorite(self, product_id: Union[str, int]) -> FavoriteStatus:
        body = await self.api.post(UserEndpoints.TOGGLE_FAVORITE, json={"product_id": product_id})
        return normalize_favorite_status(body)

    async def is_favorite(self, product_id: Union[str, int]) -> bool:
        try:
            favorites = await self.get_favorites()
        except ApiError as e:
            logger.error(f"[User API] Failed to resolve favorite state of {product_id}: {e}")
            return False
        target = str(product_id)
        return any(favorite_product_id(favorite) == target for favorite in favorites)

    async def delete_account(self, password: str) -> ActionResult:
        try:
            body = await self.api.delete(UserEndpoints.DELETE_ACCOUNT, json={"password": password})
        except ApiError as e:
            detail = backend_error_detail(e)
            if detail:
                raise ApiError(detail, status=e.status, code=e.code, error_code=e.error_code, url=e.url, body=e.body) from e
            raise
        return normalize_action_result(body)
