"""
Banners API Service
"""

from typing import Any, Dict, List, Optional

from wearsearch_client.core.exceptions import ApiError
from wearsearch_client.core.schemas import ActionResult, Banner, BannerAnalytics, BannerTargetType
from wearsearch_client.modules.http.client import ApiClient
from wearsearch_client.modules.http.endpoints import BannerEndpoints
from wearsearch_client.modules.normalization.content import normalize_banner, normalize_banner_analytics
from wearsearch_client.modules.normalization.envelopes import unwrap_item_envelope, unwrap_list_envelope
from wearsearch_client.modules.normalization.users import normalize_action_result
from wearsearch_client.modules.observability.logging_config import get_logger

logger = get_logger(__name__)

BANNER_ITEM_KEYS = ("banner", "item")
BANNER_LIST_KEYS = ("banners", "items")


class BannersService:
    def __init__(self, api: ApiClient):
        self.api = api

    async def get_banners(
        self,
        target_type: Optional[BannerTargetType] = None,
        target_id: Optional[str] = None,
        include_inactive: bool = False,
    ) -> List[Banner]:
        params = {
            "target_type": target_type,
            "target_id": target_id,
            "include_inactive": True if include_inactive else None,
        }
        try:
            body = await self.api.get(BannerEndpoints.LIST, params=params)
        except ApiError as e:
            logger.error(f"[Banners API] Failed to fetch banners: {e}")
            raise
        return [normalize_banner(raw) for raw in unwrap_list_envelope(body, BANNER_LIST_KEYS)]

    async def get_banner(self, banner_id: str) -> Banner:
        try:
            body = await self.api.get(BannerEndpoints.detail(banner_id))
        except ApiError as e:
            logger.error(f"[Banners API] Failed to fetch banner {banner_id}: {e}")
            raise
        return normalize_banner(unwrap_item_envelope(body, BANNER_ITEM_KEYS))

    # Admin operations

    async def create_banner(self, payload: Dict[str, Any]) -> Banner:
        body = await self.api.post(BannerEndpoints.LIST, json=payload)
        return normalize_banner(unwrap_item_envelope(body, BANNER_ITEM_KEYS))

    async def update_banner(self, banner_id: str, payload: Dict[str, Any]) -> Banner:
        body = await self.api.put(BannerEndpoints.detail(banner_id), json=payload)
        return normalize_banner(unwrap_item_envelope(body, BANNER_ITEM_KEYS))

    async def delete_banner(self, banner_id: str) -> ActionResult:
        body = await self.api.delete(BannerEndpoints.detail(banner_id))
        return normalize_action_result(body)

    async def get_analytics(
        self,
        banner_id: str,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> BannerAnalytics:
        body = await self.api.get(
            BannerEndpoints.analytics(banner_id),
            params={"start_date": start_date, "end_date": end_date},
        )
        return normalize_banner_analytics(body)

    # Tracking never raises; a missing endpoint (404) is not worth logging

    async def _track(self, path: str, event: str, page_url: str, user_agent: str) -> None:
        try:
            await self.api.post(path, json={"page_url": page_url, "user_agent": user_agent})
        except ApiError as e:
            if e.status != 404:
                logger.error(f"[Banners API] Failed to track banner {event}: {e}")

    async def track_impression(self, banner_id: str, page_url: str = "", user_agent: str = "") -> None:
        await self._track(BannerEndpoints.impression(banner_id), "impression", page_url, user_agent)

    async def track_click(self, banner_id: str, page_url: str = "", user_agent: str = "") -> None:
        await self._track(BannerEndpoints.click(banner_id), "click", page_url, user_agent)
