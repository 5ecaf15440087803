"""
Shared HTTP client for the marketplace API.

One configured ``httpx.AsyncClient`` per base URL: fixed timeout, JSON
headers, bearer token injected from the explicit AuthSession, and one error
path that logs, clears the session on 401, and always raises ApiError.
Recovery is left to each call site.
"""

import json
import re
from typing import Any, Dict, Optional

import httpx

from wearsearch_client.core.config import get_settings
from wearsearch_client.core.exceptions import ApiError, handle_api_error, is_route_not_found
from wearsearch_client.modules.normalization.envelopes import unwrap_success_envelope
from wearsearch_client.modules.observability.logging_config import get_logger
from wearsearch_client.modules.session.auth_session import AuthSession

logger = get_logger(__name__)

# Endpoints that work without a token; calling anything else unauthenticated logs a warning
PUBLIC_ENDPOINT_PATTERNS = [
    "/auth/login",
    "/auth/register",
    "/auth/forgot-password",
    "/auth/reset-password",
    "/auth/me",
    "/items",
    "/brands",
    "/categories",
    "/stores",
    "/search",
    "/seo/",
    "/pages/",
    re.compile(r"^/wishlist/public/"),
    re.compile(r"^/banners/[^/]+/(impression|click)$"),
]

# v1-only routes that never retry against the legacy API
NO_LEGACY_FALLBACK_PREFIXES = ("/pages/",)
NO_LEGACY_FALLBACK_PATHS = ("/admin/dashboard",)

# Noisy read endpoints skipped in debug logging of attached tokens
QUIET_PATHS = ("/items", "/search", "/pages", "/auth/me")


def is_public_endpoint(path: str) -> bool:
    for pattern in PUBLIC_ENDPOINT_PATTERNS:
        if isinstance(pattern, str):
            if pattern in path:
                return True
        elif pattern.search(path):
            return True
    return False


def _clean_params(params: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if not params:
        return None
    cleaned = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        cleaned[key] = value
    return cleaned or None


class ApiClient:
    def __init__(
        self,
        base_url: str = None,
        session: AuthSession = None,
        timeout: float = None,
        transport: httpx.AsyncBaseTransport = None,
        name: str = "api",
        fallback: "ApiClient" = None,
    ):
        settings = get_settings()
        self.session = session if session is not None else AuthSession()
        self.name = name
        self.fallback = fallback
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self._base_path = httpx.URL(self.base_url).path.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout if timeout is not None else settings.REQUEST_TIMEOUT_SECONDS,
            headers={"Content-Type": "application/json", "Accept": "application/json"},
            event_hooks={"request": [self._attach_auth]},
            transport=transport,
        )

    def _relative_path(self, path: str) -> str:
        if self._base_path and path.startswith(self._base_path):
            return path[len(self._base_path):] or "/"
        return path

    async def _attach_auth(self, request: httpx.Request) -> None:
        token = self.session.get_token()
        path = self._relative_path(request.url.path)
        if token:
            request.headers["Authorization"] = f"Bearer {token}"
            if not any(quiet in path for quiet in QUIET_PATHS):
                logger.debug(f"[HTTP:{self.name}] Auth token attached to {request.method} {path}")
        elif not is_public_endpoint(path):
            logger.warning(f"[HTTP:{self.name}] No token available for {request.method} {path}")

    def _on_error(self, error: ApiError, method: str, url: str) -> None:
        if error.status == 401:
            if self.session.is_authenticated():
                logger.warning(f"[HTTP:{self.name}] Authentication error on {method} {url}; clearing stored token")
            self.session.clear()
            return
        if error.status == 429:
            logger.info(f"[HTTP:{self.name}] Rate limited on {method} {url}")
            return
        logger.error(
            f"[HTTP:{self.name}] {method} {url} failed: status={error.status} "
            f"code={error.code} message={error.message}"
        )

    def _should_fall_back(self, error: ApiError, url: str) -> bool:
        if self.fallback is None or error.status != 404:
            return False
        if url.startswith(NO_LEGACY_FALLBACK_PREFIXES) or url in NO_LEGACY_FALLBACK_PATHS:
            return False
        return is_route_not_found(error.body)

    @staticmethod
    def _parse_body(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.warning(f"Non-JSON response body from {response.request.method} {response.request.url}")
            return None

    async def request(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Send one request and return the parsed body with ``{success, data}`` unwrapped."""
        try:
            response = await self._client.request(
                method, url, params=_clean_params(params), json=json, headers=headers
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            api_error = handle_api_error(exc)
            if api_error.url is None:
                api_error.url = url
            if self._should_fall_back(api_error, url):
                logger.info(f"[HTTP:{self.name}] Falling back to legacy API for {method} {url}")
                return await self.fallback.request(method, url, params=params, json=json, headers=headers)
            self._on_error(api_error, method, url)
            raise api_error from exc
        return unwrap_success_envelope(self._parse_body(response))

    async def get(self, url: str, params: Optional[Dict[str, Any]] = None, **kwargs) -> Any:
        return await self.request("GET", url, params=params, **kwargs)

    async def post(self, url: str, json: Any = None, **kwargs) -> Any:
        return await self.request("POST", url, json=json, **kwargs)

    async def put(self, url: str, json: Any = None, **kwargs) -> Any:
        return await self.request("PUT", url, json=json, **kwargs)

    async def patch(self, url: str, json: Any = None, **kwargs) -> Any:
        return await self.request("PATCH", url, json=json, **kwargs)

    async def delete(self, url: str, json: Any = None, **kwargs) -> Any:
        return await self.request("DELETE", url, json=json, **kwargs)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()
