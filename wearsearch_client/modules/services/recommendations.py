"""
Recommendations API Service
"""

import logging
from typing import List, Union

from wearsearch_client.core.schemas import InteractionType, RecommendedProduct, SimilarProduct
from wearsearch_client.modules.http.client import ApiClient
from wearsearch_client.modules.http.endpoints import ProductEndpoints, RecommendationEndpoints
from wearsearch_client.modules.http.recovery import recover_with
from wearsearch_client.modules.normalization.envelopes import unwrap_list_envelope
from wearsearch_client.modules.normalization.products import normalize_recommendation, normalize_similar_product
from wearsearch_client.modules.observability.logging_config import get_logger

logger = get_logger(__name__)


class RecommendationsService:
    def __init__(self, api: ApiClient):
        self.api = api

    async def get_recommendations(self, limit: int = 10) -> List[RecommendedProduct]:
        body = await recover_with(
            self.api.get(RecommendationEndpoints.LIST, params={"limit": limit}),
            lambda: [],
            "[Recommendations API] get_recommendations",
        )
        return [normalize_recommendation(raw) for raw in unwrap_list_envelope(body, ("recommendations",))]

    async def get_similar_products(self, product_id: Union[str, int], limit: int = 6) -> List[SimilarProduct]:
        body = await recover_with(
            self.api.get(ProductEndpoints.similar(product_id), params={"limit": limit}),
            lambda: [],
            f"[Recommendations API] get_similar_products {product_id}",
        )
        return [normalize_similar_product(raw) for raw in unwrap_list_envelope(body, ("products",))]

    async def track_interaction(self, product_id: Union[str, int], interaction_type: InteractionType) -> None:
        """Fire-and-forget; failures are logged at debug level only."""
        await recover_with(
            self.api.post(
                RecommendationEndpoints.INTERACTIONS,
                json={"product_id": product_id, "type": interaction_type},
            ),
            lambda: None,
            "[Recommendations API] track_interaction",
            level=logging.DEBUG,
        )
