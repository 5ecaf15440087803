"""
Guest Favorites

Favorite product ids kept for unauthenticated users and synced to the backend
after login. Only UUIDs are accepted; malformed stored entries are dropped
silently (logged, never surfaced).
"""

import json
import re
from typing import List

from wearsearch_client.modules.observability.logging_config import get_logger
from .storage import MemoryStorage, Storage

logger = get_logger(__name__)

GUEST_FAVORITES_KEY = "guestFavorites"

UUID_REGEX = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE)


def is_valid_uuid(value) -> bool:
    return isinstance(value, str) and bool(UUID_REGEX.match(value))


class GuestFavorites:
    def __init__(self, storage: Storage = None):
        self.storage = storage if storage is not None else MemoryStorage()

    def get_all(self) -> List[str]:
        raw = self.storage.get_item(GUEST_FAVORITES_KEY)
        if not raw:
            return []
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"[GuestFavorites] Failed to load guest favorites: {e}")
            return []
        return parsed if isinstance(parsed, list) else []

    def get_valid(self) -> List[str]:
        """Valid UUID favorites; rewrites storage when invalid entries were found."""
        all_favorites = self.get_all()
        valid = [entry for entry in all_favorites if is_valid_uuid(entry)]
        if len(valid) != len(all_favorites):
            logger.warning(f"[GuestFavorites] Removed {len(all_favorites) - len(valid)} invalid favorite IDs")
            self._save(valid)
        return valid

    def add(self, product_id: str) -> bool:
        if not is_valid_uuid(product_id):
            logger.warning(f"[GuestFavorites] Invalid product ID format: {product_id!r}")
            return False
        favorites = self.get_all()
        if product_id not in favorites:
            favorites.append(product_id)
            self._save(favorites)
        return True

    def remove(self, product_id: str) -> None:
        self._save([entry for entry in self.get_all() if entry != product_id])

    def has(self, product_id: str) -> bool:
        return product_id in self.get_all()

    def count(self) -> int:
        return len(self.get_all())

    def clear(self) -> None:
        self.storage.remove_item(GUEST_FAVORITES_KEY)

    def _save(self, favorites: List[str]) -> None:
        self.storage.set_item(GUEST_FAVORITES_KEY, json.dumps(favorites))
