"""
FastAPI application entry point.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from wearsearch_client.api import catalog_router, health_router
from wearsearch_client.core.config import get_settings
from wearsearch_client.modules.observability.logging_config import get_logger, setup_logging
from wearsearch_client.modules.services import close_client

settings = get_settings()

setup_logging()
logger = get_logger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Wearsearch marketplace client - normalized read-through catalog API",
    debug=settings.DEBUG,
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(GZipMiddleware, minimum_size=1000)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(catalog_router)


@app.get("/")
async def root():
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
        "docs": "/docs",
        "redoc": "/redoc"
    }


@app.on_event("startup")
async def startup_event():
    logger.info(f"[{settings.APP_NAME}] Starting up...")
    logger.info(f"  Version: {settings.APP_VERSION}")
    logger.info(f"  Environment: {settings.ENVIRONMENT}")
    logger.info(f"  Upstream API: {settings.API_BASE_URL}")
    logger.info(f"  Host: {settings.HOST}:{settings.PORT}")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info(f"[{settings.APP_NAME}] Shutting down...")
    await close_client()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "wearsearch_client.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG
    )
