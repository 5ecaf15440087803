"""
Application configuration.

Values come from the process environment (a local .env file is loaded first),
falling back to the defaults below.
"""

from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

load_dotenv()


class Settings(BaseSettings):
    # Service metadata
    APP_NAME: str = "wearsearch-client"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 8010

    # Upstream marketplace API
    API_BASE_URL: str = "http://localhost:3000/api/v1"
    API_LEGACY_BASE_URL: str = "http://localhost:3000/api"
    REQUEST_TIMEOUT_SECONDS: float = 30.0
    ENABLE_LEGACY_FALLBACK: bool = False

    # Language sent with SEO metadata requests
    DEFAULT_LANGUAGE: str = "en"

    # Persisted client state (auth token, guest favorites). Memory only when unset.
    STORAGE_PATH: Optional[str] = None

    LOG_LEVEL: str = "INFO"

    # CORS for the read-through service
    ALLOWED_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    @property
    def allowed_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
