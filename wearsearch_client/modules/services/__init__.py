"""
Per-resource API services and the WearsearchClient facade that wires them to
one session and one pair of HTTP clients.
"""

from typing import Optional

import httpx

from wearsearch_client.core.config import get_settings
from wearsearch_client.modules.http.client import ApiClient
from wearsearch_client.modules.observability.logging_config import get_logger
from wearsearch_client.modules.session.auth_session import AuthSession
from wearsearch_client.modules.session.guest_favorites import GuestFavorites
from wearsearch_client.modules.session.storage import Storage, create_storage
from .auth import AuthService
from .banners import BannersService
from .brands import BrandsService
from .categories import CategoriesService, CategoryFilters
from .collections import CollectionsService
from .products import ProductFilters, ProductsService
from .ratings import RatingsService
from .recommendations import RecommendationsService
from .reviews import ReviewsService
from .search import SearchService
from .seo import SeoService
from .stores import StoresService
from .user_context import UserContextService
from .users import UserService
from .wishlist import WishlistService

logger = get_logger(__name__)


class WearsearchClient:
    """
    Facade over every API service.

    Owns the storage, the AuthSession shared by both HTTP clients, and one
    instance of each service. Use as an async context manager or call
    ``aclose()`` when done.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        legacy_base_url: Optional[str] = None,
        storage: Optional[Storage] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        enable_legacy_fallback: Optional[bool] = None,
    ):
        settings = get_settings()
        if enable_legacy_fallback is None:
            enable_legacy_fallback = settings.ENABLE_LEGACY_FALLBACK

        self.storage = storage if storage is not None else create_storage(settings.STORAGE_PATH)
        self.session = AuthSession(self.storage)
        self.guest_favorites = GuestFavorites(self.storage)

        self.legacy_api = ApiClient(
            base_url=legacy_base_url or settings.API_LEGACY_BASE_URL,
            session=self.session,
            transport=transport,
            name="legacy",
        )
        self.api = ApiClient(
            base_url=base_url or settings.API_BASE_URL,
            session=self.session,
            transport=transport,
            name="api",
            fallback=self.legacy_api if enable_legacy_fallback else None,
        )

        self.auth = AuthService(
            self.api,
            self.session,
            self.guest_favorites,
            legacy=self.legacy_api if enable_legacy_fallback else None,
        )
        self.products = ProductsService(self.api)
        self.stores = StoresService(self.api)
        self.brands = BrandsService(self.api)
        self.wishlist = WishlistService(self.api)
        # Collection routes always retry legacy on 404
        self.collections = CollectionsService(self.api, legacy=self.legacy_api)
        self.reviews = ReviewsService(self.api)
        self.ratings = RatingsService(self.api)
        self.recommendations = RecommendationsService(self.api)
        self.search = SearchService(self.api)
        self.users = UserService(self.api)
        self.user_context = UserContextService(self.api)
        # Categories are only served by the legacy routes
        self.categories = CategoriesService(self.legacy_api)
        self.banners = BannersService(self.api)
        self.seo = SeoService(self.api)

        logger.info(
            f"[WearsearchClient] Initialized for {self.api.base_url} "
            f"(legacy fallback: {'on' if enable_legacy_fallback else 'off'})"
        )

    async def aclose(self) -> None:
        await self.api.aclose()
        await self.legacy_api.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()


_client: Optional[WearsearchClient] = None


def get_client() -> WearsearchClient:
    """Process-wide client built from settings."""
    global _client
    if _client is None:
        _client = WearsearchClient()
    return _client


async def close_client() -> None:
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None


__all__ = [
    "AuthService",
    "BannersService",
    "BrandsService",
    "CategoriesService",
    "CategoryFilters",
    "CollectionsService",
    "ProductFilters",
    "ProductsService",
    "RatingsService",
    "RecommendationsService",
    "ReviewsService",
    "SearchService",
    "SeoService",
    "StoresService",
    "UserContextService",
    "UserService",
    "WearsearchClient",
    "WishlistService",
    "close_client",
    "get_client",
]
