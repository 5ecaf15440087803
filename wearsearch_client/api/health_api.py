"""
Health check endpoints.
"""

from datetime import datetime, timezone

from fastapi import APIRouter

from wearsearch_client.core.config import get_settings

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/")
async def health():
    settings = get_settings()
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "upstream": settings.API_BASE_URL,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
