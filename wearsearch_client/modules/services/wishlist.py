"""
Wishlist API Service

Private wishlist of the signed-in user plus the public, share-id based view.
Write operations return a WishlistMutation; when the backend echoes the full
wishlist instead of a ``{"wishlist": ..., "item": ...}`` envelope the echo is
normalized into ``mutation.wishlist``.
"""

from typing import Any, Dict, Optional

from wearsearch_client.core.exceptions import ApiError
from wearsearch_client.core.schemas import (
    PublicWishlist,
    ShareLink,
    WishlistMutation,
    WishlistResponse,
    WishlistSettings,
)
from wearsearch_client.modules.http.client import ApiClient
from wearsearch_client.modules.http.endpoints import WishlistEndpoints
from wearsearch_client.modules.http.recovery import recover_with
from wearsearch_client.modules.normalization.guards import get_array, is_record
from wearsearch_client.modules.normalization.wishlist import (
    normalize_public_wishlist,
    normalize_share_link,
    normalize_wishlist_mutation,
    normalize_wishlist_response,
    normalize_wishlist_settings,
)
from wearsearch_client.modules.observability.logging_config import get_logger

logger = get_logger(__name__)


def _to_mutation(body: Any) -> WishlistMutation:
    mutation = normalize_wishlist_mutation(body)
    if mutation.wishlist is None and mutation.item is None and get_array(body, "items") is not None:
        mutation.wishlist = normalize_wishlist_response(body)
    return mutation


class WishlistService:
    def __init__(self, api: ApiClient):
        self.api = api

    async def get_wishlist(self) -> WishlistResponse:
        try:
            body = await self.api.get(WishlistEndpoints.LIST)
        except ApiError as e:
            logger.error(f"[Wishlist API] Failed to fetch wishlist: {e}")
            raise
        return normalize_wishlist_response(body)

    async def add_item(
        self,
        product_id: str,
        store_id: Optional[str] = None,
        variant_id: Optional[str] = None,
        quantity: int = 1,
        notes: Optional[str] = None,
    ) -> WishlistMutation:
        payload = {
            "product_id": product_id,
            "store_id": store_id,
            "variant_id": variant_id,
            "quantity": quantity,
            "notes": notes,
        }
        try:
            body = await self.api.post(
                WishlistEndpoints.ITEMS,
                json={key: value for key, value in payload.items() if value is not None},
            )
        except ApiError as e:
            logger.error(f"[Wishlist API] Failed to add {product_id} to wishlist: {e}")
            raise
        return _to_mutation(body)

    async def update_item(self, item_id: str, updates: Dict[str, Any]) -> WishlistMutation:
        try:
            body = await self.api.patch(WishlistEndpoints.item(item_id), json=updates)
        except ApiError as e:
            logger.error(f"[Wishlist API] Failed to update wishlist item {item_id}: {e}")
            raise
        return _to_mutation(body)

    async def remove_item(self, item_id: str) -> WishlistMutation:
        try:
            body = await self.api.delete(WishlistEndpoints.item(item_id))
        except ApiError as e:
            logger.error(f"[Wishlist API] Failed to remove wishlist item {item_id}: {e}")
            raise
        return _to_mutation(body)

    async def clear(self) -> WishlistMutation:
        try:
            body = await self.api.delete(WishlistEndpoints.LIST)
        except ApiError as e:
            logger.error(f"[Wishlist API] Failed to clear wishlist: {e}")
            raise
        mutation = _to_mutation(body)
        if mutation.wishlist is None:
            mutation.wishlist = WishlistResponse()
        return mutation

    async def get_settings(self) -> WishlistSettings:
        """Sharing settings; a wishlist that never had settings saved reads as private."""
        body = await recover_with(
            self.api.get(WishlistEndpoints.SETTINGS),
            lambda: None,
            "[Wishlist API] get_settings",
        )
        if not is_record(body):
            return WishlistSettings()
        return normalize_wishlist_settings(body)

    async def update_settings(self, is_public: bool) -> WishlistSettings:
        body = await self.api.put(WishlistEndpoints.SETTINGS, json={"is_public": is_public})
        settings = normalize_wishlist_settings(body)
        if not is_record(body) or ("is_public" not in body and "isPublic" not in body):
            settings.is_public = is_public
        return settings

    async def get_share_link(self) -> ShareLink:
        try:
            body = await self.api.post(WishlistEndpoints.SHARE)
        except ApiError as e:
            logger.error(f"[Wishlist API] Failed to create share link: {e}")
            raise
        return normalize_share_link(body)

    async def get_public_wishlist(self, share_id: str) -> PublicWishlist:
        try:
            body = await self.api.get(WishlistEndpoints.public(share_id))
        except ApiError as e:
            logger.error(f"[Wishlist API] Failed to fetch public wishlist {share_id}: {e}")
            raise
        return normalize_public_wishlist(body)
