"""
Store ratings API Service. Every call is hard-fail.
"""

from typing import List, Optional

from wearsearch_client.core.exceptions import ApiError
from wearsearch_client.core.schemas import ActionResult, Rating
from wearsearch_client.modules.http.client import ApiClient
from wearsearch_client.modules.http.endpoints import RatingEndpoints
from wearsearch_client.modules.normalization.envelopes import unwrap_item_envelope, unwrap_list_envelope
from wearsearch_client.modules.normalization.reviews import normalize_rating
from wearsearch_client.modules.normalization.users import normalize_action_result
from wearsearch_client.modules.observability.logging_config import get_logger

logger = get_logger(__name__)

RATING_LIST_KEYS = ("data", "ratings", "items")


class RatingsService:
    def __init__(self, api: ApiClient):
        self.api = api

    async def add_rating(
        self,
        store_id: str,
        product_id: str,
        user_id: str,
        rating: float,
        comment: Optional[str] = None,
    ) -> Rating:
        payload = {
            "store_id": store_id,
            "product_id": product_id,
            "user_id": user_id,
            "rating": rating,
        }
        if comment is not None:
            payload["comment"] = comment
        try:
            body = await self.api.post(RatingEndpoints.ADD, json=payload)
        except ApiError as e:
            logger.error(f"[Ratings API] Failed to rate store {store_id}: {e}")
            raise
        return normalize_rating(unwrap_item_envelope(body, ("rating", "data")))

    async def get_store_ratings(self, store_id: str) -> List[Rating]:
        try:
            body = await self.api.get(RatingEndpoints.by_store(store_id))
        except ApiError as e:
            logger.error(f"[Ratings API] Failed to fetch ratings for store {store_id}: {e}")
            raise
        return [normalize_rating(raw) for raw in unwrap_list_envelope(body, RATING_LIST_KEYS)]

    async def get_user_ratings(self, user_id: str) -> List[Rating]:
        try:
            body = await self.api.get(RatingEndpoints.by_user(user_id))
        except ApiError as e:
            logger.error(f"[Ratings API] Failed to fetch ratings for user {user_id}: {e}")
            raise
        return [normalize_rating(raw) for raw in unwrap_list_envelope(body, RATING_LIST_KEYS)]

    async def delete_rating(self, rating_id: str, user_id: str) -> ActionResult:
        try:
            body = await self.api.delete(RatingEndpoints.detail(rating_id), json={"user_id": user_id})
        except ApiError as e:
            logger.error(f"[Ratings API] Failed to delete rating {rating_id}: {e}")
            raise
        return normalize_action_result(body)
