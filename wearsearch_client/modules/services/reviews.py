"""
Reviews API Service
"""

from typing import Optional, Union

from wearsearch_client.core.schemas import ActionResult, Review, ReviewSort, ReviewsResponse
from wearsearch_client.modules.http.client import ApiClient
from wearsearch_client.modules.http.endpoints import ProductEndpoints, ReviewEndpoints
from wearsearch_client.modules.http.recovery import recover_with
from wearsearch_client.modules.normalization.envelopes import unwrap_item_envelope
from wearsearch_client.modules.normalization.guards import pick, to_int
from wearsearch_client.modules.normalization.reviews import (
    empty_reviews_response,
    normalize_review,
    normalize_reviews_response,
)
from wearsearch_client.modules.normalization.users import normalize_action_result
from wearsearch_client.modules.observability.logging_config import get_logger

logger = get_logger(__name__)


class ReviewsService:
    def __init__(self, api: ApiClient):
        self.api = api

    async def get_product_reviews(
        self,
        product_id: Union[str, int],
        sort: Optional[ReviewSort] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> ReviewsResponse:
        """Reviews with rating stats. A product without reviews (or a failed read) yields an empty response."""
        body = await recover_with(
            self.api.get(
                ProductEndpoints.reviews(product_id),
                params={"sort": sort, "limit": limit or None, "offset": offset or None},
            ),
            lambda: None,
            f"[Reviews API] get_product_reviews {product_id}",
        )
        if body is None:
            return empty_reviews_response()
        return normalize_reviews_response(body)

    async def submit_review(
        self,
        product_id: Union[str, int],
        rating: float,
        title: Optional[str] = None,
        text: Optional[str] = None,
    ) -> Review:
        payload = {"rating": rating, "title": title, "text": text}
        body = await self.api.post(
            ProductEndpoints.reviews(product_id),
            json={key: value for key, value in payload.items() if value is not None},
        )
        logger.info(f"[Reviews API] Review submitted for product {product_id}")
        return normalize_review(unwrap_item_envelope(body, ("review",)))

    async def toggle_helpful(self, review_id: Union[str, int]) -> int:
        """Returns the new helpful count."""
        body = await self.api.post(ReviewEndpoints.helpful(review_id))
        return pick(body, ("helpful_count", "helpfulCount"), to_int) or 0

    async def delete_review(self, review_id: Union[str, int]) -> ActionResult:
        body = await self.api.delete(ReviewEndpoints.detail(review_id))
        return normalize_action_result(body)
