"""
Typed async client for the Wearsearch marketplace API.
"""

from wearsearch_client.core.exceptions import ApiError
from wearsearch_client.modules.services import WearsearchClient, get_client

__version__ = "0.1.0"

__all__ = ["ApiError", "WearsearchClient", "get_client", "__version__"]
