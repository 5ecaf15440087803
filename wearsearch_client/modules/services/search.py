"""
Search history API Service
"""

from typing import List, Optional

from wearsearch_client.core.schemas import ActionResult, PopularQuery, SearchHistoryItem
from wearsearch_client.modules.http.client import ApiClient
from wearsearch_client.modules.http.endpoints import SearchEndpoints
from wearsearch_client.modules.http.recovery import recover_with
from wearsearch_client.modules.normalization.envelopes import get_array_prop, unwrap_list_envelope
from wearsearch_client.modules.normalization.users import (
    normalize_action_result,
    normalize_popular_query,
    normalize_search_history_item,
)
from wearsearch_client.modules.observability.logging_config import get_logger

logger = get_logger(__name__)

# Shown when the popular-queries endpoint is unavailable
DEFAULT_POPULAR_QUERIES = ("nike", "adidas", "sneakers", "кросівки")


def default_popular_queries() -> List[PopularQuery]:
    return [PopularQuery(query=query, count=0) for query in DEFAULT_POPULAR_QUERIES]


class SearchService:
    def __init__(self, api: ApiClient):
        self.api = api

    async def get_search_history(self, limit: int = 10) -> List[SearchHistoryItem]:
        body = await recover_with(
            self.api.get(SearchEndpoints.HISTORY, params={"limit": limit}),
            lambda: [],
            "[Search API] get_search_history",
        )
        return [normalize_search_history_item(raw) for raw in unwrap_list_envelope(body, ("history",))]

    async def clear_search_history(self) -> ActionResult:
        body = await self.api.delete(SearchEndpoints.HISTORY)
        return normalize_action_result(body)

    async def get_popular_queries(self, limit: int = 5) -> List[PopularQuery]:
        body = await recover_with(
            self.api.get(SearchEndpoints.POPULAR, params={"limit": limit}),
            lambda: None,
            "[Search API] get_popular_queries",
        )
        raw_queries = body if isinstance(body, list) else get_array_prop(body, "popular")
        if raw_queries is None:
            return default_popular_queries()
        return [normalize_popular_query(raw) for raw in raw_queries]

    async def track_search(self, query: str, results_count: Optional[int] = None) -> None:
        await recover_with(
            self.api.post(
                SearchEndpoints.TRACK,
                json={"query": query.strip(), "results_count": results_count},
            ),
            lambda: None,
            "[Search API] track_search",
        )
