"""
API route handlers.
"""

from .health_api import router as health_router
from .catalog_api import router as catalog_router

__all__ = ["health_router", "catalog_router"]
