"""
Auth API Service

Login and register persist the returned token through the AuthSession handed
to the HTTP client, then push any guest favorites to the account. Logout
always clears the session, whatever the backend answers.
"""

import asyncio
from typing import Any, Awaitable, Callable, Dict, Optional, TypeVar

from wearsearch_client.core.exceptions import ApiError, backend_error_detail
from wearsearch_client.core.schemas import ActionResult, AuthResult, User
from wearsearch_client.modules.http.client import ApiClient
from wearsearch_client.modules.http.endpoints import AuthEndpoints, UserEndpoints
from wearsearch_client.modules.normalization.envelopes import unwrap_item_envelope
from wearsearch_client.modules.normalization.guards import pick, to_boolean, to_int
from wearsearch_client.modules.normalization.users import (
    normalize_action_result,
    normalize_auth_result,
    normalize_user,
)
from wearsearch_client.modules.observability.logging_config import get_logger
from wearsearch_client.modules.session.auth_session import AuthSession
from wearsearch_client.modules.session.guest_favorites import GuestFavorites

logger = get_logger(__name__)

T = TypeVar("T")


class AuthService:
    def __init__(
        self,
        api: ApiClient,
        session: AuthSession,
        guest_favorites: GuestFavorites,
        legacy: Optional[ApiClient] = None,
    ):
        self.api = api
        self.session = session
        self.guest_favorites = guest_favorites
        # Only set when legacy fallback is enabled
        self.legacy = legacy
        self._current_user_task: Optional[asyncio.Task] = None

    async def _call(self, call: Callable[[ApiClient], Awaitable[T]], label: str) -> T:
        try:
            return await call(self.api)
        except ApiError as e:
            if self.legacy is None or not e.is_not_found():
                raise
            logger.warning(f"[Auth API] v1 {label} route not found, falling back to legacy /api")
            return await call(self.legacy)

    async def _store_auth(self, result: AuthResult) -> None:
        if not result.token:
            logger.error("[Auth API] No token received in auth response")
            return
        self.session.set_auth_from_login(
            result.token,
            user_id=result.user.id if result.user else None,
            expires_in=result.expires_in,
            refresh_token=result.refresh_token,
        )
        if result.user:
            self.session.set_user(result.user.model_dump())
        await self.sync_guest_favorites()

    async def login(self, email: str, password: str) -> AuthResult:
        credentials = {"email": email, "password": password}
        try:
            body = await self._call(lambda client: client.post(AuthEndpoints.LOGIN, json=credentials), "login")
        except ApiError as e:
            logger.error(f"[Auth API] Login failed: {e}")
            raise
        result = normalize_auth_result(body)
        await self._store_auth(result)
        logger.info(f"[Auth API] Login completed for user {result.user.id if result.user else 'unknown'}")
        return result

    async def register(self, email: str, password: str, **profile: Any) -> AuthResult:
        payload = {"email": email, "password": password, **profile}
        body = await self._call(lambda client: client.post(AuthEndpoints.REGISTER, json=payload), "register")
        result = normalize_auth_result(body)
        await self._store_auth(result)
        return result

    async def logout(self) -> None:
        try:
            await self._call(lambda client: client.post(AuthEndpoints.LOGOUT), "logout")
        except ApiError as e:
            logger.warning(f"[Auth API] Logout request failed: {e}")
        finally:
            self.session.clear()

    async def _fetch_current_user(self) -> User:
        body = await self._call(lambda client: client.get(AuthEndpoints.ME), "me")
        return normalize_user(unwrap_item_envelope(body, ("user",)))

    def _reset_current_user(self, _task: asyncio.Task) -> None:
        self._current_user_task = None

    async def get_current_user(self) -> User:
        """Current user; concurrent callers share one in-flight request."""
        if self._current_user_task is None:
            self._current_user_task = asyncio.ensure_future(self._fetch_current_user())
            self._current_user_task.add_done_callback(self._reset_current_user)
        return await asyncio.shield(self._current_user_task)

    async def forgot_password(self, email: str) -> ActionResult:
        body = await self._call(
            lambda client: client.post(AuthEndpoints.FORGOT_PASSWORD, json={"email": email}),
            "forgot-password",
        )
        return normalize_action_result(body)

    async def reset_password(self, token: str, new_password: str) -> ActionResult:
        payload = {"token": token, "newPassword": new_password}
        body = await self._call(
            lambda client: client.post(AuthEndpoints.RESET_PASSWORD, json=payload),
            "reset-password",
        )
        return normalize_action_result(body)

    async def change_password(self, current_password: str, new_password: str) -> ActionResult:
        payload = {"current_password": current_password, "new_password": new_password}
        try:
            body = await self.api.put(AuthEndpoints.PASSWORD, json=payload)
        except ApiError as e:
            detail = backend_error_detail(e)
            if detail:
                raise ApiError(detail, status=e.status, code=e.code, error_code=e.error_code, url=e.url, body=e.body) from e
            if self.legacy is not None and e.is_not_found():
                body = await self.legacy.put(AuthEndpoints.PASSWORD, json=payload)
                return normalize_action_result(body)
            raise
        return normalize_action_result(body)

    async def update_profile(self, updates: Dict[str, Any]) -> User:
        body = await self.api.put(AuthEndpoints.ME, json=updates)
        user = normalize_user(unwrap_item_envelope(body, ("user",)))
        self.session.set_user(user.model_dump())
        return user

    async def check_admin(self) -> bool:
        try:
            user = await self.get_current_user()
        except ApiError:
            return False
        return user.role == "admin"

    async def sync_guest_favorites(self) -> None:
        """Push guest favorites to the account; they are kept locally if the push fails."""
        guest_favorites = self.guest_favorites.get_valid()
        if not guest_favorites:
            logger.debug("[Auth API] No guest favorites to sync")
            return

        logger.info(f"[Auth API] Syncing {len(guest_favorites)} guest favorites")
        try:
            body = await self.api.post(UserEndpoints.FAVORITES_SYNC, json={"guestFavorites": guest_favorites})
        except ApiError as e:
            detail = backend_error_detail(e)
            logger.error(f"[Auth API] Guest favorites sync failed: {detail or e.message}")
            return

        if pick(body, ("success",), to_boolean) is not False:
            logger.info(
                f"[Auth API] Synced {pick(body, ('added',), to_int) or 0} favorites. "
                f"Total: {pick(body, ('total',), to_int) or 0}"
            )
            self.guest_favorites.clear()

    def is_authenticated(self) -> bool:
        return self.session.is_authenticated()
