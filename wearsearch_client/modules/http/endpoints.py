"""
Endpoint registry. Paths are relative to the configured API base URL
(``.../api/v1``).
"""


class AuthEndpoints:
    LOGIN = "/auth/login"
    REGISTER = "/auth/register"
    LOGOUT = "/auth/logout"
    ME = "/auth/me"
    PASSWORD = "/auth/password"
    FORGOT_PASSWORD = "/auth/forgot-password"
    RESET_PASSWORD = "/auth/reset-password"


class ProductEndpoints:
    LIST = "/items"
    SEARCH = "/items/search"
    CATEGORIES = "/items/categories"
    CREATE = "/admin/products"

    @staticmethod
    def detail(product_id) -> str:
        return f"/items/{product_id}"

    @staticmethod
    def stores(product_id) -> str:
        return f"/items/{product_id}/stores"

    @staticmethod
    def related(product_id) -> str:
        return f"/items/{product_id}/related"

    @staticmethod
    def similar(product_id) -> str:
        return f"/items/{product_id}/similar"

    @staticmethod
    def reviews(product_id) -> str:
        return f"/items/{product_id}/reviews"

    @staticmethod
    def by_category(category) -> str:
        return f"/items/category/{category}"

    @staticmethod
    def admin(product_id) -> str:
        return f"/admin/products/{product_id}"


class StoreEndpoints:
    LIST = "/stores"
    CREATE = "/admin/stores"

    @staticmethod
    def detail(store_id) -> str:
        return f"/stores/{store_id}"

    @staticmethod
    def products(store_id) -> str:
        return f"/stores/{store_id}/products"

    @staticmethod
    def members(store_id) -> str:
        return f"/stores/{store_id}/members"

    @staticmethod
    def member(store_id, user_id) -> str:
        return f"/stores/{store_id}/members/{user_id}"

    @staticmethod
    def admin(store_id) -> str:
        return f"/admin/stores/{store_id}"

    @staticmethod
    def product_sizes(store_id, product_id) -> str:
        return f"/stores/{store_id}/products/{product_id}/sizes"


class BrandEndpoints:
    LIST = "/brands"
    CREATE = "/brands"

    @staticmethod
    def detail(brand_id) -> str:
        return f"/brands/{brand_id}"

    @staticmethod
    def products(brand_id) -> str:
        return f"/brands/{brand_id}/products"

    @staticmethod
    def members(brand_id) -> str:
        return f"/brands/{brand_id}/members"

    @staticmethod
    def member(brand_id, user_id) -> str:
        return f"/brands/{brand_id}/members/{user_id}"


class UserEndpoints:
    PROFILE = "/user/profile"
    FAVORITES = "/user/favorites"
    TOGGLE_FAVORITE = "/user/favorites/toggle"
    DELETE_ACCOUNT = "/user/account"
    CONTEXT = "/users/me/context"
    COLLECTIONS = "/users/me/collections"
    FAVORITES_SYNC = "/favorites/sync"

    @staticmethod
    def favorite(product_id) -> str:
        return f"/user/favorites/{product_id}"

    @staticmethod
    def check_favorite(product_id) -> str:
        return f"/user/favorites/{product_id}/check"

    @staticmethod
    def collection(collection_id) -> str:
        return f"/users/me/collections/{collection_id}"

    @staticmethod
    def collection_items(collection_id) -> str:
        return f"/users/me/collections/{collection_id}/items"

    @staticmethod
    def collection_item(collection_id, product_id) -> str:
        return f"/users/me/collections/{collection_id}/items/{product_id}"

    # Pre-v1 collection routes, served by the legacy client
    @staticmethod
    def legacy_collection(collection_id) -> str:
        return f"/user/collections/{collection_id}"

    @staticmethod
    def legacy_collection_items(collection_id) -> str:
        return f"/user/collections/{collection_id}/items"

    @staticmethod
    def legacy_collection_item(collection_id, product_id) -> str:
        return f"/user/collections/{collection_id}/items/{product_id}"


class WishlistEndpoints:
    LIST = "/wishlist"
    ITEMS = "/wishlist/items"
    SETTINGS = "/wishlist/settings"
    SHARE = "/wishlist/share"

    @staticmethod
    def item(item_id) -> str:
        return f"/wishlist/items/{item_id}"

    @staticmethod
    def public(share_id) -> str:
        return f"/wishlist/public/{share_id}"


class ReviewEndpoints:
    @staticmethod
    def helpful(review_id) -> str:
        return f"/reviews/{review_id}/helpful"

    @staticmethod
    def detail(review_id) -> str:
        return f"/reviews/{review_id}"


class RatingEndpoints:
    ADD = "/ratings"

    @staticmethod
    def by_store(store_id) -> str:
        return f"/ratings/store/{store_id}"

    @staticmethod
    def by_user(user_id) -> str:
        return f"/ratings/user/{user_id}"

    @staticmethod
    def detail(rating_id) -> str:
        return f"/ratings/{rating_id}"


class RecommendationEndpoints:
    LIST = "/recommendations"
    INTERACTIONS = "/interactions"


class SearchEndpoints:
    HISTORY = "/search/history"
    POPULAR = "/search/popular"
    TRACK = "/search/track"


class CategoryEndpoints:
    """Served by the legacy ``/api`` client."""
    LIST = "/categories"

    @staticmethod
    def detail(category_id) -> str:
        return f"/categories/{category_id}"

    @staticmethod
    def by_slug(slug) -> str:
        return f"/categories/slug/{slug}"


class BannerEndpoints:
    LIST = "/banners"

    @staticmethod
    def detail(banner_id) -> str:
        return f"/banners/{banner_id}"

    @staticmethod
    def impression(banner_id) -> str:
        return f"/banners/{banner_id}/impression"

    @staticmethod
    def click(banner_id) -> str:
        return f"/banners/{banner_id}/click"

    @staticmethod
    def analytics(banner_id) -> str:
        return f"/banners/{banner_id}/analytics"


class SeoEndpoints:
    HOME = "/seo/home/home"

    @staticmethod
    def page(page_type, slug) -> str:
        return f"/seo/{page_type}/{slug}"
