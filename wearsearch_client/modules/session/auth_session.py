"""
Auth Session

Explicit holder of the bearer token and refresh token. The HTTP client reads
the token from the session it was constructed with; login sets it, logout and
a 401 response clear it.
"""

import json
import time
from typing import Any, Callable, Dict, Optional

from wearsearch_client.modules.observability.logging_config import get_logger
from .storage import MemoryStorage, Storage

logger = get_logger(__name__)

AUTH_TOKEN_KEY = "wearsearch.auth"
LEGACY_TOKEN_KEY = "access_token"
REFRESH_TOKEN_KEY = "refresh_token"
USER_KEY = "user"

# Warn when a token has less than this left (ms)
EXPIRY_WARNING_MS = 5 * 60 * 1000


class AuthSession:
    def __init__(self, storage: Storage = None, clock: Callable[[], float] = time.time):
        self.storage = storage if storage is not None else MemoryStorage()
        self._clock = clock

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def _read_auth_data(self) -> Optional[Dict[str, Any]]:
        raw = self.storage.get_item(AUTH_TOKEN_KEY)
        if not raw:
            return None
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("[AuthSession] Stored auth data is not valid JSON; ignoring it")
            return None
        return data if isinstance(data, dict) else None

    def set_auth(
        self,
        token: str,
        user_id: Optional[str] = None,
        expires_at: Optional[int] = None,
        refresh_token: Optional[str] = None,
    ) -> None:
        """Persist a token. ``expires_at`` is epoch milliseconds."""
        auth_data = {"token": token, "userId": user_id, "expiresAt": expires_at}
        self.storage.set_item(AUTH_TOKEN_KEY, json.dumps(auth_data))
        self.storage.set_item(LEGACY_TOKEN_KEY, token)
        if refresh_token:
            self.storage.set_item(REFRESH_TOKEN_KEY, refresh_token)

    def set_auth_from_login(self, token: str, user_id: Optional[str], expires_in: Optional[int],
                            refresh_token: Optional[str] = None) -> None:
        expires_at = self._now_ms() + expires_in * 1000 if expires_in else None
        self.set_auth(token, user_id=user_id, expires_at=expires_at, refresh_token=refresh_token)

    def get_token(self) -> Optional[str]:
        data = self._read_auth_data()
        if data and data.get("token"):
            expires_at = data.get("expiresAt")
            if isinstance(expires_at, (int, float)):
                now = self._now_ms()
                if now > expires_at:
                    logger.warning(
                        f"[AuthSession] Token expired {round((now - expires_at) / 1000)}s ago; clearing"
                    )
                    self.clear()
                    return None
                if expires_at - now < EXPIRY_WARNING_MS:
                    logger.info(f"[AuthSession] Token expires in {round((expires_at - now) / 1000)}s")
            return str(data["token"])
        return self.storage.get_item(LEGACY_TOKEN_KEY)

    @property
    def token(self) -> Optional[str]:
        return self.get_token()

    @property
    def refresh_token(self) -> Optional[str]:
        return self.storage.get_item(REFRESH_TOKEN_KEY)

    @property
    def user_id(self) -> Optional[str]:
        data = self._read_auth_data()
        return data.get("userId") if data else None

    def is_authenticated(self) -> bool:
        return bool(self.get_token())

    def set_user(self, user: Dict[str, Any]) -> None:
        self.storage.set_item(USER_KEY, json.dumps(user))

    def get_user(self) -> Optional[Dict[str, Any]]:
        raw = self.storage.get_item(USER_KEY)
        if not raw:
            return None
        try:
            user = json.loads(raw)
        except json.JSONDecodeError:
            return None
        return user if isinstance(user, dict) else None

    def clear(self) -> None:
        for key in (AUTH_TOKEN_KEY, LEGACY_TOKEN_KEY, REFRESH_TOKEN_KEY, USER_KEY):
            self.storage.remove_item(key)
