from .client import ApiClient, is_public_endpoint
from .recovery import recover_with, status_in

__all__ = ["ApiClient", "is_public_endpoint", "recover_with", "status_in"]
