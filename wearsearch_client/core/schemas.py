"""
Normalized domain models returned by the API client modules.

Every model is the "strict output" side of the normalization layer: required
fields always carry a value, optional fields are None when the backend did not
send them.
"""

from typing import Dict, Generic, List, Literal, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")

DashboardType = Literal["super_admin", "brand_owner", "store_owner", "store_manager", "user"]
InteractionType = Literal["view", "favorite", "cart", "purchase"]
ReviewSort = Literal["newest", "oldest", "highest", "lowest", "helpful"]
BannerTargetType = Literal["all", "category", "brand", "product"]


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

class BrandRef(BaseModel):
    id: str = ""
    name: str = ""


class Product(BaseModel):
    id: str
    name: str = ""
    category: str = ""
    type: str = ""
    description: str = ""
    price: Optional[float] = None
    price_min: Optional[float] = None
    price_max: Optional[float] = None
    currency: Optional[str] = None
    image_url: str = ""
    images: List[str] = Field(default_factory=list)
    brand: Optional[BrandRef] = None
    gender: Optional[str] = None
    color: Optional[str] = None


class RecommendedProduct(Product):
    reason: Optional[str] = None
    score: Optional[float] = None


class SimilarProduct(Product):
    similarity_score: Optional[float] = None


class FavoriteProduct(Product):
    product_id: str = ""
    favorite_id: Optional[str] = None
    added_at: Optional[str] = None


class Store(BaseModel):
    id: str
    name: str = ""
    telegram_url: Optional[str] = None
    instagram_url: Optional[str] = None
    tiktok_url: Optional[str] = None
    shipping_info: Optional[str] = None
    logo_url: Optional[str] = None
    is_verified: bool = False
    is_recommended: bool = False
    product_count: int = 0
    brand_count: int = 0
    average_rating: Optional[float] = None
    total_ratings: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class Brand(BaseModel):
    id: str
    name: str = ""
    slug: Optional[str] = None
    logo_url: Optional[str] = None
    description: Optional[str] = None
    website_url: Optional[str] = None
    product_count: int = 0


class Page(BaseModel, Generic[T]):
    """One page of a list endpoint."""
    items: List[T] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: Optional[int] = None
    total_pages: int = 1


# ---------------------------------------------------------------------------
# Wishlist, favorites and collections
# ---------------------------------------------------------------------------

class WishlistItem(BaseModel):
    id: str
    product_id: str
    name: str = ""
    image_url: Optional[str] = None
    price: Optional[float] = None
    currency: Optional[str] = None
    store_id: Optional[str] = None
    variant_id: Optional[str] = None
    variant_name: Optional[str] = None
    quantity: int = 1
    added_at: str
    in_stock: Optional[bool] = None
    url: Optional[str] = None
    attributes: Optional[Dict[str, str]] = None
    position: Optional[int] = None


class WishlistResponse(BaseModel):
    items: List[WishlistItem] = Field(default_factory=list)
    total_items: int = 0
    total_value: Optional[float] = None


class WishlistMutation(BaseModel):
    """Result of a wishlist write; ``wishlist`` is set when the backend echoes it."""
    wishlist: Optional[WishlistResponse] = None
    item: Optional[WishlistItem] = None
    message: Optional[str] = None


class WishlistSettings(BaseModel):
    is_public: bool = False
    share_id: Optional[str] = None
    share_url: Optional[str] = None


class ShareLink(BaseModel):
    share_id: str = ""
    share_url: str = ""


class PublicWishlistItem(BaseModel):
    id: str = ""
    name: str = ""
    brand: Optional[str] = None
    image_url: Optional[str] = None
    price: Optional[float] = None
    added_at: Optional[str] = None


class PublicWishlist(BaseModel):
    owner_name: str = "User"
    items: List[PublicWishlistItem] = Field(default_factory=list)
    items_count: int = 0


class CollectionItem(BaseModel):
    product_id: str
    added_at: str
    notes: Optional[str] = None
    product: Optional[Product] = None


class Collection(BaseModel):
    id: str
    name: str = ""
    emoji: Optional[str] = None
    description: Optional[str] = None
    product_count: int = 0
    is_public: bool = False
    created_at: str
    updated_at: str
    items: List[CollectionItem] = Field(default_factory=list)


class FavoriteStatus(BaseModel):
    is_favorited: bool = False
    favorite_id: Optional[str] = None


# ---------------------------------------------------------------------------
# Reviews and ratings
# ---------------------------------------------------------------------------

class Review(BaseModel):
    id: str = ""
    product_id: Optional[str] = None
    store_id: Optional[str] = None
    user_id: str = ""
    user_name: str = "Anonymous"
    user_avatar: Optional[str] = None
    rating: float = 0
    title: Optional[str] = None
    text: str = ""
    helpful_count: int = 0
    is_verified_purchase: bool = False
    created_at: str

    @property
    def subject_type(self) -> Optional[str]:
        if self.product_id:
            return "product"
        if self.store_id:
            return "store"
        return None


class ReviewStats(BaseModel):
    average_rating: float = 0
    total_reviews: int = 0
    rating_distribution: Dict[int, int] = Field(
        default_factory=lambda: {5: 0, 4: 0, 3: 0, 2: 0, 1: 0}
    )


class ReviewsResponse(BaseModel):
    reviews: List[Review] = Field(default_factory=list)
    stats: ReviewStats = Field(default_factory=ReviewStats)
    total: int = 0


class Rating(BaseModel):
    id: str = ""
    store_id: str = ""
    product_id: Optional[str] = None
    user_id: str = ""
    rating: float = 0
    comment: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


# ---------------------------------------------------------------------------
# Users, auth and search
# ---------------------------------------------------------------------------

class User(BaseModel):
    id: str = ""
    email: Optional[str] = None
    username: Optional[str] = None
    display_name: Optional[str] = None
    role: str = "user"
    avatar: Optional[str] = None
    bio: Optional[str] = None
    created_at: Optional[str] = None


class AuthResult(BaseModel):
    token: Optional[str] = None
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None
    user: Optional[User] = None
    message: Optional[str] = None


class EntityRef(BaseModel):
    id: str = ""
    name: str = ""
    logo_url: Optional[str] = None


class StoreAccess(BaseModel):
    owned: List[EntityRef] = Field(default_factory=list)
    managed: List[EntityRef] = Field(default_factory=list)
    all: List[EntityRef] = Field(default_factory=list)


class BrandAccess(BaseModel):
    owned: List[EntityRef] = Field(default_factory=list)
    managed: List[EntityRef] = Field(default_factory=list)


class UserContext(BaseModel):
    user_id: str = ""
    roles: List[str] = Field(default_factory=list)
    is_admin: bool = False
    is_store_owner: bool = False
    is_brand_owner: bool = False
    is_store_manager: bool = False
    stores: StoreAccess = Field(default_factory=StoreAccess)
    brands: BrandAccess = Field(default_factory=BrandAccess)
    dashboard_type: DashboardType = "user"


class TeamMember(BaseModel):
    user_id: str = ""
    email: str = ""
    name: Optional[str] = None
    role: str = "manager"
    added_at: str


class SearchHistoryItem(BaseModel):
    query: str = ""
    results_count: Optional[int] = None
    searched_at: str


class PopularQuery(BaseModel):
    query: str = ""
    count: int = 0


class ActionResult(BaseModel):
    """Acknowledgement body of delete / action endpoints."""
    success: bool = True
    message: str = ""


# ---------------------------------------------------------------------------
# Categories, banners and SEO metadata
# ---------------------------------------------------------------------------

class Category(BaseModel):
    id: str
    name: str = ""
    slug: str = ""
    description: Optional[str] = None
    image_url: Optional[str] = None
    product_count: int = 0
    parent_id: Optional[str] = None
    is_active: bool = True
    sort_order: Optional[int] = None
    subcategories: List["Category"] = Field(default_factory=list)


class Banner(BaseModel):
    id: str
    title: str = ""
    subtitle: Optional[str] = None
    description: Optional[str] = None
    image_url: str = ""
    link_url: Optional[str] = None
    link_text: str = ""
    position: int = 0
    is_active: bool = True
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    click_count: int = 0
    impression_count: int = 0
    target_type: BannerTargetType = "all"
    target_id: Optional[str] = None
    priority: int = 0
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class BannerAnalytics(BaseModel):
    banner_id: str = ""
    clicks: int = 0
    impressions: int = 0
    click_through_rate: float = 0.0
    start_date: Optional[str] = None
    end_date: Optional[str] = None


class SeoData(BaseModel):
    """Page metadata; title and description are always present."""
    meta_title: str = ""
    meta_description: str = ""
    canonical_url: Optional[str] = None
    h1_title: Optional[str] = None
    content_text: Optional[str] = None
    keywords: Optional[str] = None
