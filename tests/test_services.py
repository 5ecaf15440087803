import asyncio
import json

import httpx
import pytest

from wearsearch_client.core.config import get_settings
from wearsearch_client.core.exceptions import ApiError
from wearsearch_client.modules.services.categories import fallback_categories
from wearsearch_client.modules.services.products import ProductFilters
from wearsearch_client.modules.services.search import DEFAULT_POPULAR_QUERIES
from wearsearch_client.modules.services.seo import HOME_SEO, PRODUCT_SEO
from wearsearch_client.modules.session.guest_favorites import GUEST_FAVORITES_KEY
from wearsearch_client.modules.session.storage import MemoryStorage

from tests.helpers import Recorder

VALID_ID = "11111111-1111-1111-1111-111111111111"


def run_with(client, coro_factory):
    async def main():
        async with client:
            return await coro_factory(client)
    return asyncio.run(main())


def _offline(request):
    raise httpx.ConnectError("connection refused", request=request)


# Products, stores, brands

def test_products_page_from_success_envelope(make_client):
    recorder = Recorder({
        ("GET", "/api/v1/items"): (200, {
            "success": True,
            "data": {"items": [{"id": 1, "title": "Tee", "price": "10"}], "meta": {"total": 10, "page": 2, "limit": 1}},
        }),
    })
    page = run_with(make_client(recorder), lambda c: c.products.get_all(ProductFilters(page=2, limit=1, category="tops")))

    assert [p.name for p in page.items] == ["Tee"]
    assert page.items[0].price == 10.0
    assert (page.total, page.page, page.total_pages) == (10, 2, 10)
    assert recorder.requests[0].url.params["category"] == "tops"


def test_product_detail_unwraps_item_envelope(make_client):
    recorder = Recorder({("GET", "/api/v1/items/5"): (200, {"item": {"id": 5, "name": "A"}, "product": {"id": 6}})})
    product = run_with(make_client(recorder), lambda c: c.products.get_by_id(5))
    assert product.id == "5"


def test_create_product_sends_explicit_price(make_client):
    recorder = Recorder({("POST", "/api/v1/admin/products"): (201, {"product": {"id": "n1", "price": 10}})})
    product = run_with(
        make_client(recorder),
        lambda c: c.products.create({"name": "New", "price": 10, "store_price": 12, "brand_id": None}),
    )
    assert product.id == "n1"
    assert json.loads(recorder.requests[0].content) == {"name": "New", "price": 10, "store_price": 12}


def test_create_store_failure_raises_with_backend_message(make_client):
    recorder = Recorder({("POST", "/api/v1/admin/stores"): (500, {"message": "Store name already exists"})})

    async def attempt(client):
        with pytest.raises(ApiError) as excinfo:
            await client.stores.create({"name": "Dup"})
        return excinfo.value

    error = run_with(make_client(recorder), attempt)
    assert error.message == "Store name already exists"
    assert error.status == 500


def test_brands_list(make_client):
    recorder = Recorder({("GET", "/api/v1/brands"): (200, {"brands": [{"id": 1, "name": "Acme", "products_count": "4"}]})})
    brands = run_with(make_client(recorder), lambda c: c.brands.get_all())
    assert brands[0].name == "Acme"
    assert brands[0].product_count == 4


# Soft-fail reads

def test_popular_queries_fall_back_when_offline(make_client):
    queries = run_with(make_client(_offline), lambda c: c.search.get_popular_queries())
    assert [q.query for q in queries] == ["nike", "adidas", "sneakers", "кросівки"]
    assert all(q.count == 0 for q in queries)


def test_popular_queries_from_backend(make_client):
    recorder = Recorder({("GET", "/api/v1/search/popular"): (200, {"popular": [{"query": "boots", "search_count": "7"}]})})
    queries = run_with(make_client(recorder), lambda c: c.search.get_popular_queries(limit=3))
    assert [(q.query, q.count) for q in queries] == [("boots", 7)]
    assert recorder.requests[0].url.params["limit"] == "3"


def test_clear_search_history_is_hard_fail(make_client):
    recorder = Recorder({("DELETE", "/api/v1/search/history"): (500, {"error": "db down"})})

    async def attempt(client):
        with pytest.raises(ApiError):
            await client.search.clear_search_history()

    run_with(make_client(recorder), attempt)


def test_track_search_swallows_failures(make_client):
    assert run_with(make_client(_offline), lambda c: c.search.track_search("  boots  ", 3)) is None


def test_recommendations_degrade_to_empty(make_client):
    recorder = Recorder({("GET", "/api/v1/recommendations"): (500, {"message": "boom"})})
    assert run_with(make_client(recorder), lambda c: c.recommendations.get_recommendations()) == []


def test_similar_products(make_client):
    recorder = Recorder({
        ("GET", "/api/v1/items/p1/similar"): (200, {"products": [{"id": "p2", "similarity_score": "0.8"}]}),
    })
    similar = run_with(make_client(recorder), lambda c: c.recommendations.get_similar_products("p1"))
    assert similar[0].similarity_score == 0.8


def test_product_reviews_fall_back_to_empty_response(make_client):
    response = run_with(make_client(Recorder()), lambda c: c.reviews.get_product_reviews("p1", sort="newest"))
    assert response.reviews == []
    assert response.total == 0
    assert response.stats.rating_distribution == {5: 0, 4: 0, 3: 0, 2: 0, 1: 0}


def test_wishlist_settings_default_to_private(make_client):
    settings = run_with(make_client(Recorder()), lambda c: c.wishlist.get_settings())
    assert settings.is_public is False


# Wishlist

def test_wishlist_add_item_returns_mutation(make_client):
    recorder = Recorder({
        ("POST", "/api/v1/wishlist/items"): (201, {"item": {"product_id": "p1", "price_at_add": "19.99", "store_id": "s1"}}),
    })
    mutation = run_with(make_client(recorder), lambda c: c.wishlist.add_item("p1", store_id="s1"))
    assert mutation.item.id == "p1"
    assert mutation.item.price == 19.99
    assert mutation.wishlist is None
    assert json.loads(recorder.requests[0].content) == {"product_id": "p1", "store_id": "s1", "quantity": 1}


def test_wishlist_mutation_echoing_full_wishlist(make_client):
    recorder = Recorder({("DELETE", "/api/v1/wishlist/items/w1"): (200, {"items": [{"product_id": "p2"}]})})
    mutation = run_with(make_client(recorder), lambda c: c.wishlist.remove_item("w1"))
    assert [item.product_id for item in mutation.wishlist.items] == ["p2"]


def test_public_wishlist(make_client):
    recorder = Recorder({("GET", "/api/v1/wishlist/public/share1"): (200, {"user_name": "Ann", "items": [{"id": "p1"}]})})
    public = run_with(make_client(recorder), lambda c: c.wishlist.get_public_wishlist("share1"))
    assert public.owner_name == "Ann"
    assert public.items_count == 1


# Collections

def test_delete_collection_retries_legacy_route_on_404(make_client):
    recorder = Recorder({("DELETE", "/api/user/collections/c1"): (200, {"success": True, "data": None})})
    run_with(make_client(recorder), lambda c: c.collections.delete_collection("c1"))
    assert recorder.paths() == [
        ("DELETE", "/api/v1/users/me/collections/c1"),
        ("DELETE", "/api/user/collections/c1"),
    ]


def test_add_to_collection_sends_both_spellings(make_client):
    recorder = Recorder({
        ("POST", "/api/v1/users/me/collections/c1/items"): (201, {"item": {"product_id": "p1", "notes": "gift"}}),
    })
    item = run_with(make_client(recorder), lambda c: c.collections.add_to_collection("c1", "p1", notes="gift"))
    assert item.product_id == "p1"
    assert item.notes == "gift"
    assert json.loads(recorder.requests[0].content) == {
        "product_id": "p1",
        "productId": "p1",
        "collection_id": "c1",
        "collectionId": "c1",
        "notes": "gift",
    }


def test_collection_items_soft_and_hard_failures(make_client):
    forbidden = Recorder({("GET", "/api/v1/users/me/collections/c1/items"): (403, {"message": "Forbidden"})})
    assert run_with(make_client(forbidden), lambda c: c.collections.get_collection_items("c1")) == []

    bad_request = Recorder({("GET", "/api/v1/users/me/collections/c1/items"): (400, {"message": "Bad currency"})})

    async def attempt(client):
        with pytest.raises(ApiError):
            await client.collections.get_collection_items("c1", currency="XXX")

    run_with(make_client(bad_request), attempt)


def test_get_collections(make_client):
    recorder = Recorder({
        ("GET", "/api/v1/users/me/collections"): (200, {
            "success": True,
            "data": {
                "collections": [{"id": "c1", "name": "Summer"}],
                "items": [{"collection_id": "c1", "product_id": "p1", "name": "Sandals"}],
            },
        }),
    })
    collections = run_with(make_client(recorder), lambda c: c.collections.get_collections())
    assert collections[0].items[0].product.name == "Sandals"
    assert "X-Skip-Retry" not in recorder.requests[0].headers


# Reviews and ratings

def test_toggle_helpful_count(make_client):
    recorder = Recorder({("POST", "/api/v1/reviews/r1/helpful"): (200, {"helpfulCount": 4})})
    assert run_with(make_client(recorder), lambda c: c.reviews.toggle_helpful("r1")) == 4


def test_store_ratings_are_unwrapped(make_client):
    recorder = Recorder({
        ("GET", "/api/v1/ratings/store/s1"): (200, {"success": True, "count": 1, "data": [{"id": 1, "store_id": "s1", "rating": 5}]}),
    })
    ratings = run_with(make_client(recorder), lambda c: c.ratings.get_store_ratings("s1"))
    assert [(r.id, r.rating) for r in ratings] == [("1", 5.0)]


def test_delete_rating_sends_user_id(make_client):
    recorder = Recorder({("DELETE", "/api/v1/ratings/r1"): (200, {"success": True, "message": "Deleted"})})
    result = run_with(make_client(recorder), lambda c: c.ratings.delete_rating("r1", "u1"))
    assert json.loads(recorder.requests[0].content) == {"user_id": "u1"}
    assert result.success is True


# Users and context

def test_favorites_empty_when_signed_out(make_client):
    recorder = Recorder({("GET", "/api/v1/user/favorites"): (401, {"message": "Unauthorized"})})
    assert run_with(make_client(recorder), lambda c: c.users.get_favorites()) == []


def test_check_favorite_falls_back_to_favorites_list(make_client):
    recorder = Recorder({
        ("GET", "/api/v1/user/favorites/p1/check"): (500, {"message": "boom"}),
        ("GET", "/api/v1/user/favorites"): (200, [{"product_id": "p1"}]),
    })
    status = run_with(make_client(recorder), lambda c: c.users.check_favorite("p1"))
    assert status.is_favorited is True


def test_delete_account_prefers_backend_error_string(make_client):
    recorder = Recorder({("DELETE", "/api/v1/user/account"): (400, {"message": "Bad Request", "error": "Invalid password"})})

    async def attempt(client):
        with pytest.raises(ApiError) as excinfo:
            await client.users.delete_account("wrong")
        return excinfo.value

    assert run_with(make_client(recorder), attempt).message == "Invalid password"


def test_user_context(make_client):
    recorder = Recorder({
        ("GET", "/api/v1/users/me/context"): (200, {
            "success": True,
            "data": {"user_id": "u1", "roles": ["user"], "brands": {"owned": [{"id": "b1", "name": "Acme"}]}},
        }),
    })
    context = run_with(make_client(recorder), lambda c: c.user_context.get_context())
    assert context.dashboard_type == "brand_owner"
    assert context.brands.owned[0].name == "Acme"


def test_user_context_errors_name_the_action(make_client):
    async def attempt(client):
        with pytest.raises(ApiError) as excinfo:
            await client.user_context.get_store_members("s1")
        return excinfo.value

    error = run_with(make_client(Recorder()), attempt)
    assert error.message == "Failed to fetch store members: Not found"
    assert error.status == 404


# Auth

def _login_routes(sync_answer):
    return Recorder({
        ("POST", "/api/v1/auth/login"): (200, {
            "access_token": "tok",
            "expires_in": 3600,
            "user": {"id": "u1", "email": "a@b.c", "role": "user"},
        }),
        ("POST", "/api/v1/favorites/sync"): sync_answer,
    })


def test_login_stores_token_and_syncs_guest_favorites(make_client):
    storage = MemoryStorage({GUEST_FAVORITES_KEY: json.dumps([VALID_ID, "junk"])})
    recorder = _login_routes((200, {"success": True, "data": {"added": 1, "total": 1}}))
    client = make_client(recorder, storage=storage)

    result = run_with(client, lambda c: c.auth.login("a@b.c", "secret"))

    assert result.token == "tok"
    assert client.session.get_token() == "tok"
    assert client.session.user_id == "u1"
    assert client.session.get_user()["email"] == "a@b.c"
    sync_request = recorder.requests[1]
    assert json.loads(sync_request.content) == {"guestFavorites": [VALID_ID]}
    assert sync_request.headers["Authorization"] == "Bearer tok"
    assert client.guest_favorites.get_all() == []


def test_failed_sync_keeps_guest_favorites(make_client):
    storage = MemoryStorage({GUEST_FAVORITES_KEY: json.dumps([VALID_ID])})
    client = make_client(_login_routes((500, {"error": "sync failed"})), storage=storage)

    run_with(client, lambda c: c.auth.login("a@b.c", "secret"))

    assert client.session.get_token() == "tok"
    assert client.guest_favorites.get_all() == [VALID_ID]


def test_logout_always_clears_session(make_client):
    client = make_client(Recorder({("POST", "/api/v1/auth/logout"): (500, {"message": "boom"})}))
    client.session.set_auth("tok")
    run_with(client, lambda c: c.auth.logout())
    assert client.session.get_token() is None


def test_concurrent_current_user_calls_share_one_request(make_client):
    recorder = Recorder({("GET", "/api/v1/auth/me"): (200, {"user": {"id": "u1", "role": "admin"}})})

    async def both(client):
        return await asyncio.gather(client.auth.get_current_user(), client.auth.get_current_user())

    first, second = run_with(make_client(recorder), both)
    assert first.id == second.id == "u1"
    assert len(recorder.requests) == 1


def test_check_admin_is_soft(make_client):
    assert run_with(make_client(_offline), lambda c: c.auth.check_admin()) is False


def test_change_password_prefers_backend_error_string(make_client):
    recorder = Recorder({("PUT", "/api/v1/auth/password"): (400, {"error": "Current password is incorrect"})})

    async def attempt(client):
        with pytest.raises(ApiError) as excinfo:
            await client.auth.change_password("old", "new")
        return excinfo.value

    assert run_with(make_client(recorder), attempt).message == "Current password is incorrect"


# Admin and profile writes

def _server_error(request):
    return httpx.Response(500, json={"message": "boom"})


@pytest.mark.parametrize(
    "operation",
    [
        lambda c: c.products.update("p1", {"name": "X"}),
        lambda c: c.products.delete("p1"),
        lambda c: c.stores.update("s1", {"name": "X"}),
        lambda c: c.stores.delete("s1"),
        lambda c: c.brands.create({"name": "X"}),
        lambda c: c.brands.update("b1", {"name": "X"}),
        lambda c: c.brands.delete("b1"),
        lambda c: c.brands.get_products("b1"),
        lambda c: c.ratings.add_rating("s1", "p1", "u1", 5),
        lambda c: c.ratings.get_user_ratings("u1"),
        lambda c: c.users.get_profile(),
        lambda c: c.users.update_profile({"bio": "hi"}),
        lambda c: c.users.toggle_favorite("p1"),
        lambda c: c.wishlist.update_settings(True),
        lambda c: c.auth.register("a@b.c", "secret"),
    ],
)
def test_hard_fail_operations_raise(make_client, operation):
    async def attempt(client):
        with pytest.raises(ApiError) as excinfo:
            await operation(client)
        return excinfo.value

    error = run_with(make_client(_server_error), attempt)
    assert error.status == 500
    assert error.message == "boom"


def test_update_product_prepares_payload(make_client):
    recorder = Recorder({("PUT", "/api/v1/admin/products/p1"): (200, {"item": {"id": "p1", "name": "New"}})})
    product = run_with(make_client(recorder), lambda c: c.products.update("p1", {"name": "New", "store_price": 15}))
    assert product.name == "New"
    assert json.loads(recorder.requests[0].content) == {"name": "New", "store_price": 15, "price": 15}


def test_delete_product_returns_action_result(make_client):
    recorder = Recorder({("DELETE", "/api/v1/admin/products/p1"): (200, {"success": True, "message": "Deleted"})})
    result = run_with(make_client(recorder), lambda c: c.products.delete("p1"))
    assert (result.success, result.message) == (True, "Deleted")


def test_update_and_delete_store(make_client):
    recorder = Recorder({
        ("PUT", "/api/v1/admin/stores/s1"): (200, {"store": {"id": "s1", "name": "Renamed", "verified": True}}),
        ("DELETE", "/api/v1/admin/stores/s1"): (200, {"success": False, "message": "Store has products"}),
    })

    async def both(client):
        return await client.stores.update("s1", {"name": "Renamed"}), await client.stores.delete("s1")

    store, result = run_with(make_client(recorder), both)
    assert store.name == "Renamed"
    assert store.is_verified is True
    assert result.success is False
    assert result.message == "Store has products"


def test_brand_writes_unwrap_brand_envelope(make_client):
    recorder = Recorder({
        ("POST", "/api/v1/brands"): (201, {"success": True, "data": {"brand": {"id": 3, "name": "Acme"}}}),
        ("PUT", "/api/v1/brands/3"): (200, {"item": {"id": 3, "name": "Acme Co"}}),
        ("DELETE", "/api/v1/brands/3"): (200, {"message": "Brand deleted"}),
    })

    async def flow(client):
        created = await client.brands.create({"name": "Acme"})
        updated = await client.brands.update("3", {"name": "Acme Co"})
        deleted = await client.brands.delete("3")
        return created, updated, deleted

    created, updated, deleted = run_with(make_client(recorder), flow)
    assert created.id == "3"
    assert updated.name == "Acme Co"
    assert deleted.success is True
    assert deleted.message == "Brand deleted"


def test_brand_products_page(make_client):
    recorder = Recorder({
        ("GET", "/api/v1/brands/b1/products"): (200, {"products": [{"id": 1}, {"id": 2}], "meta": {"total": 12, "limit": 2}}),
    })
    page = run_with(make_client(recorder), lambda c: c.brands.get_products("b1", {"page": 1, "limit": 2}))
    assert [p.id for p in page.items] == ["1", "2"]
    assert (page.total, page.total_pages) == (12, 6)
    assert recorder.requests[0].url.params["limit"] == "2"


def test_add_rating_omits_missing_comment(make_client):
    recorder = Recorder({
        ("POST", "/api/v1/ratings"): (201, {"success": True, "data": {"id": "r1", "storeId": "s1", "userId": "u1", "rating": 4}}),
    })
    rating = run_with(make_client(recorder), lambda c: c.ratings.add_rating("s1", "p1", "u1", 4))
    assert (rating.id, rating.store_id, rating.rating) == ("r1", "s1", 4.0)
    assert json.loads(recorder.requests[0].content) == {
        "store_id": "s1",
        "product_id": "p1",
        "user_id": "u1",
        "rating": 4,
    }


def test_user_ratings_from_bare_list(make_client):
    recorder = Recorder({("GET", "/api/v1/ratings/user/u1"): (200, [{"id": 1, "store": {"id": "s1"}, "score": "3"}])})
    ratings = run_with(make_client(recorder), lambda c: c.ratings.get_user_ratings("u1"))
    assert ratings[0].store_id == "s1"
    assert ratings[0].rating == 3.0


def test_profile_read_and_update(make_client):
    recorder = Recorder({
        ("GET", "/api/v1/user/profile"): (200, {"profile": {"id": "u1", "displayName": "Ann"}}),
        ("PUT", "/api/v1/user/profile"): (200, {"success": True, "data": {"user": {"id": "u1", "bio": "hi"}}}),
    })

    async def flow(client):
        return await client.users.get_profile(), await client.users.update_profile({"bio": "hi"})

    profile, updated = run_with(make_client(recorder), flow)
    assert profile.display_name == "Ann"
    assert updated.bio == "hi"
    assert json.loads(recorder.requests[1].content) == {"bio": "hi"}


def test_toggle_favorite(make_client):
    recorder = Recorder({("POST", "/api/v1/user/favorites/toggle"): (200, {"isFavorited": True, "favoriteId": 9})})
    status = run_with(make_client(recorder), lambda c: c.users.toggle_favorite("p1"))
    assert status.is_favorited is True
    assert status.favorite_id == "9"
    assert json.loads(recorder.requests[0].content) == {"product_id": "p1"}


def test_update_wishlist_settings_echoes_requested_visibility(make_client):
    recorder = Recorder({("PUT", "/api/v1/wishlist/settings"): (200, {"success": True, "data": {"message": "Saved"}})})
    settings = run_with(make_client(recorder), lambda c: c.wishlist.update_settings(True))
    assert settings.is_public is True
    assert json.loads(recorder.requests[0].content) == {"is_public": True}


def test_update_wishlist_settings_prefers_backend_value(make_client):
    recorder = Recorder({("PUT", "/api/v1/wishlist/settings"): (200, {"isPublic": False})})
    settings = run_with(make_client(recorder), lambda c: c.wishlist.update_settings(True))
    assert settings.is_public is False


def test_register_stores_token_without_sync_when_no_guest_favorites(make_client):
    recorder = Recorder({
        ("POST", "/api/v1/auth/register"): (201, {"success": True, "data": {"token": "t2", "user": {"id": "u2"}}}),
    })
    client = make_client(recorder)
    result = run_with(client, lambda c: c.auth.register("a@b.c", "secret", display_name="Ann"))

    assert result.user.id == "u2"
    assert client.session.get_token() == "t2"
    assert recorder.paths() == [("POST", "/api/v1/auth/register")]
    assert json.loads(recorder.requests[0].content) == {
        "email": "a@b.c",
        "password": "secret",
        "display_name": "Ann",
    }


def test_auth_retries_legacy_route_on_404_when_enabled(make_client):
    recorder = Recorder({("POST", "/api/auth/login"): (200, {"access_token": "legacy-tok"})})
    client = make_client(recorder, enable_legacy_fallback=True)

    result = run_with(client, lambda c: c.auth.login("a@b.c", "secret"))

    assert result.token == "legacy-tok"
    assert recorder.paths() == [("POST", "/api/v1/auth/login"), ("POST", "/api/auth/login")]


def test_auth_does_not_retry_legacy_when_disabled_or_not_404(make_client):
    async def attempt(client):
        with pytest.raises(ApiError) as excinfo:
            await client.auth.login("a@b.c", "secret")
        return excinfo.value

    disabled = Recorder({("POST", "/api/auth/login"): (200, {"access_token": "legacy-tok"})})
    assert run_with(make_client(disabled), attempt).status == 404
    assert disabled.paths() == [("POST", "/api/v1/auth/login")]

    server_error = Recorder({
        ("POST", "/api/v1/auth/login"): (500, {"message": "down"}),
        ("POST", "/api/auth/login"): (200, {"access_token": "legacy-tok"}),
    })
    assert run_with(make_client(server_error, enable_legacy_fallback=True), attempt).status == 500
    assert server_error.paths() == [("POST", "/api/v1/auth/login")]


def test_popular_queries_fall_back_on_unexpected_shape(make_client):
    recorder = Recorder({("GET", "/api/v1/search/popular"): (200, {"queries": []})})
    queries = run_with(make_client(recorder), lambda c: c.search.get_popular_queries())
    assert [q.query for q in queries] == list(DEFAULT_POPULAR_QUERIES)

    empty = Recorder({("GET", "/api/v1/search/popular"): (200, {"popular": []})})
    assert run_with(make_client(empty), lambda c: c.search.get_popular_queries()) == []


# Categories, banners and SEO

def test_categories_from_legacy_route(make_client):
    recorder = Recorder({
        ("GET", "/api/categories"): (200, {"data": {"items": [{"id": 1, "name": "Shoes", "slug": "shoes"}, "junk"]}}),
    })
    categories = run_with(make_client(recorder), lambda c: c.categories.get_categories())
    assert [c.slug for c in categories] == ["shoes"]


def test_categories_fall_back_when_offline_or_malformed(make_client):
    offline = run_with(make_client(_offline), lambda c: c.categories.get_categories())
    assert [c.name for c in offline] == ["Clothing", "Shoes", "Accessories", "Bags"]

    recorder = Recorder({("GET", "/api/categories"): (200, {"categories": "nope"})})
    malformed = run_with(make_client(recorder), lambda c: c.categories.get_categories())
    assert malformed == fallback_categories()


def test_main_categories_request_top_level(make_client):
    recorder = Recorder({("GET", "/api/categories"): (200, {"success": True, "data": []})})
    assert run_with(make_client(recorder), lambda c: c.categories.get_main_categories()) == []
    params = recorder.requests[0].url.params
    assert params["parentId"] == ""
    assert params["isActive"] == "true"
    assert (params["sortBy"], params["sortOrder"]) == ("sortOrder", "asc")


def test_category_lookup_is_soft(make_client):
    recorder = Recorder({("GET", "/api/categories/c1"): (200, {"data": {"id": "c1", "name": "Bags"}})})

    async def flow(client):
        return await client.categories.get_by_id("c1"), await client.categories.get_by_slug("missing")

    found, missing = run_with(make_client(recorder), flow)
    assert found.name == "Bags"
    assert missing is None


def test_category_tree(make_client):
    recorder = Recorder({
        ("GET", "/api/categories"): (200, {"items": [
            {"id": "1", "name": "Shoes"},
            {"id": "2", "name": "Boots", "parentId": "1"},
        ]}),
    })
    tree = run_with(make_client(recorder), lambda c: c.categories.get_category_tree())
    assert [c.id for c in tree] == ["1"]
    assert [c.name for c in tree[0].subcategories] == ["Boots"]


def test_banners_list_and_detail(make_client):
    recorder = Recorder({
        ("GET", "/api/v1/banners"): (200, {"success": True, "data": {
            "banners": [{"id": "b1", "title": "Sale", "click_count": "3", "target_type": "brand"}],
            "total": 1,
        }}),
        ("GET", "/api/v1/banners/b1"): (200, {"success": True, "data": {"banner": {"id": "b1", "title": "Sale"}}}),
    })

    async def flow(client):
        banners = await client.banners.get_banners(target_type="brand", include_inactive=True)
        return banners, await client.banners.get_banner("b1")

    banners, banner = run_with(make_client(recorder), flow)
    assert banners[0].click_count == 3
    assert banners[0].target_type == "brand"
    assert banner.title == "Sale"
    params = recorder.requests[0].url.params
    assert params["target_type"] == "brand"
    assert params["include_inactive"] == "true"
    assert "target_id" not in params


def test_banner_writes_raise(make_client):
    async def attempt(client):
        with pytest.raises(ApiError):
            await client.banners.create_banner({"title": "New", "image_url": "x.png"})

    run_with(make_client(_server_error), attempt)


def test_banner_tracking_never_raises(make_client):
    recorder = Recorder({("POST", "/api/v1/banners/b1/click"): (500, {"message": "boom"})})

    async def flow(client):
        await client.banners.track_impression("b1", page_url="https://wearsearch.test/")
        await client.banners.track_click("b1")

    run_with(make_client(recorder), flow)
    assert json.loads(recorder.requests[0].content) == {"page_url": "https://wearsearch.test/", "user_agent": ""}
    assert recorder.paths()[1] == ("POST", "/api/v1/banners/b1/click")


def test_banner_analytics(make_client):
    recorder = Recorder({
        ("GET", "/api/v1/banners/b1/analytics"): (200, {"success": True, "data": {"banner_id": "b1", "clicks": 2, "impressions": 40}}),
    })
    analytics = run_with(make_client(recorder), lambda c: c.banners.get_analytics("b1", start_date="2024-01-01"))
    assert (analytics.clicks, analytics.impressions) == (2, 40)
    assert recorder.requests[0].url.params["start_date"] == "2024-01-01"


def test_product_seo_from_item(make_client):
    recorder = Recorder({
        ("GET", "/api/v1/seo/product/p1"): (200, {"success": True, "item": {"meta_title": "Boots", "canonical_url": "/p/p1"}}),
    })
    seo = run_with(make_client(recorder), lambda c: c.seo.get_product_seo("p1", lang="uk"))
    assert seo.meta_title == "Boots"
    assert seo.meta_description == PRODUCT_SEO.meta_description
    assert seo.canonical_url == "/p/p1"
    assert recorder.requests[0].url.params["lang"] == "uk"


def test_seo_defaults_when_backend_fails(make_client):
    async def flow(client):
        return await client.seo.get_home_seo(), await client.seo.get_category_seo("sneakers")

    home, category = run_with(make_client(_offline), flow)
    assert home == HOME_SEO
    assert category.meta_title == "sneakers - Wearsearch"


def test_seo_uses_configured_language(make_client):
    recorder = Recorder({("GET", "/api/v1/seo/home/home"): (200, {"item": {"meta_title": "Home"}})})
    run_with(make_client(recorder), lambda c: c.seo.get_home_seo())
    assert recorder.requests[0].url.params["lang"] == get_settings().DEFAULT_LANGUAGE
