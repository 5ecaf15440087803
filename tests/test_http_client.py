import asyncio

import httpx
import pytest

from wearsearch_client.core.exceptions import (
    DEFAULT_ERROR_MESSAGE,
    ApiError,
    handle_api_error,
    is_route_not_found,
)
from wearsearch_client.modules.http.client import ApiClient, is_public_endpoint
from wearsearch_client.modules.session.auth_session import AuthSession
from wearsearch_client.modules.session.storage import MemoryStorage

from tests.helpers import BASE_URL, LEGACY_BASE_URL, Recorder


def _status_error(status, body=None):
    request = httpx.Request("GET", "http://api.test/api/v1/items")
    kwargs = {"json": body} if body is not None else {}
    response = httpx.Response(status, request=request, **kwargs)
    return httpx.HTTPStatusError(f"HTTP {status}", request=request, response=response)


def test_error_message_precedence():
    assert handle_api_error(_status_error(400, {"message": "A", "error": "B"})).message == "A"
    assert handle_api_error(_status_error(400, {"error": "B"})).message == "B"

    nested = handle_api_error(_status_error(422, {"error": {"code": "VALIDATION", "message": "Bad input"}}))
    assert nested.message == "Bad input"
    assert nested.status == 422
    assert nested.code == "ERR_BAD_REQUEST"
    assert nested.error_code == "VALIDATION"

    bare = handle_api_error(_status_error(503))
    assert bare.message == "HTTP 503"
    assert bare.code == "ERR_BAD_RESPONSE"
    assert bare.is_server_error()


def test_transport_errors_carry_codes():
    request = httpx.Request("GET", "http://api.test/api/v1/items")
    timeout = handle_api_error(httpx.ReadTimeout("timed out", request=request))
    assert timeout.code == "ECONNABORTED"
    assert timeout.status is None

    network = handle_api_error(httpx.ConnectError("connection refused", request=request))
    assert network.code == "ERR_NETWORK"
    assert network.is_network_error()
    assert "Network error" in network.user_message


def test_generic_errors():
    assert handle_api_error(ValueError("")).message == DEFAULT_ERROR_MESSAGE
    assert handle_api_error(ValueError("plain")).message == "plain"


def test_route_not_found_detection():
    assert is_route_not_found({"error": {"code": "ROUTE_NOT_FOUND", "message": "x"}})
    assert is_route_not_found({"message": "Route not found"})
    assert not is_route_not_found({"error": {"code": "NOT_FOUND", "message": "Product not found"}})
    assert not is_route_not_found(None)


def test_public_endpoints():
    assert is_public_endpoint("/items/1")
    assert is_public_endpoint("/wishlist/public/abc")
    assert is_public_endpoint("/banners/b1/click")
    assert not is_public_endpoint("/wishlist")
    assert not is_public_endpoint("/user/favorites")


def test_bearer_token_is_attached():
    recorder = Recorder({("GET", "/api/v1/wishlist"): (200, {"items": []})})
    session = AuthSession(MemoryStorage())
    session.set_auth("tok")

    async def run():
        async with ApiClient(BASE_URL, session=session, transport=httpx.MockTransport(recorder)) as api:
            await api.get("/wishlist")

    asyncio.run(run())
    assert recorder.requests[0].headers["Authorization"] == "Bearer tok"


def test_unauthorized_response_clears_session():
    recorder = Recorder({("GET", "/api/v1/user/profile"): (401, {"message": "Token expired"})})
    session = AuthSession(MemoryStorage())
    session.set_auth("tok")

    async def run():
        async with ApiClient(BASE_URL, session=session, transport=httpx.MockTransport(recorder)) as api:
            with pytest.raises(ApiError) as excinfo:
                await api.get("/user/profile")
        return excinfo.value

    error = asyncio.run(run())
    assert error.status == 401
    assert error.message == "Token expired"
    assert session.get_token() is None


def test_success_envelope_and_params():
    recorder = Recorder({("GET", "/api/v1/items"): (200, {"success": True, "data": {"items": [1]}})})

    async def run():
        async with ApiClient(BASE_URL, session=AuthSession(), transport=httpx.MockTransport(recorder)) as api:
            return await api.get("/items", params={"page": 2, "search": None, "in_stock": True})

    assert asyncio.run(run()) == {"items": [1]}
    params = recorder.requests[0].url.params
    assert params["page"] == "2"
    assert params["in_stock"] == "true"
    assert "search" not in params


def test_empty_and_non_json_bodies_read_as_none():
    recorder = Recorder({
        ("DELETE", "/api/v1/wishlist"): lambda request: httpx.Response(204),
        ("GET", "/api/v1/pages/home"): lambda request: httpx.Response(200, text="<html>"),
    })

    async def run():
        async with ApiClient(BASE_URL, session=AuthSession(), transport=httpx.MockTransport(recorder)) as api:
            return await api.delete("/wishlist"), await api.get("/pages/home")

    assert asyncio.run(run()) == (None, None)


def test_route_not_found_falls_back_to_legacy_client():
    route_missing = (404, {"error": {"code": "ROUTE_NOT_FOUND", "message": "Route not found"}})
    recorder = Recorder({
        ("GET", "/api/v1/items"): route_missing,
        ("GET", "/api/items"): (200, {"items": [{"id": 1}]}),
        ("GET", "/api/v1/pages/home"): route_missing,
    })
    session = AuthSession()

    async def run():
        transport = httpx.MockTransport(recorder)
        legacy = ApiClient(LEGACY_BASE_URL, session=session, transport=transport, name="legacy")
        api = ApiClient(BASE_URL, session=session, transport=transport, fallback=legacy)
        try:
            body = await api.get("/items")
            with pytest.raises(ApiError):
                await api.get("/pages/home")
        finally:
            await api.aclose()
            await legacy.aclose()
        return body

    assert asyncio.run(run()) == {"items": [{"id": 1}]}
    assert recorder.paths() == [
        ("GET", "/api/v1/items"),
        ("GET", "/api/items"),
        ("GET", "/api/v1/pages/home"),
    ]
