from .auth_session import AuthSession
from .guest_favorites import GuestFavorites, is_valid_uuid
from .storage import JsonFileStorage, MemoryStorage, Storage, create_storage

__all__ = [
    "AuthSession",
    "GuestFavorites",
    "JsonFileStorage",
    "MemoryStorage",
    "Storage",
    "create_storage",
    "is_valid_uuid",
]
