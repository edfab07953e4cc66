"""Application configuration via environment variables.

Provides type-safe settings loading using pydantic-settings.
Environment variables can be loaded from a .env file. Structured values
(SERVICE_CONFIG, IDAM_USERS) are given as JSON.
"""

from typing import Optional
from functools import lru_cache

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict

from .service_config import ServiceConfigItem


class IdamUserCredentials(BaseModel):
    """System user used to call CCD on behalf of a jurisdiction."""
    username: str
    password: str


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings have sensible defaults for development.

    Environment Variables:
        CCD_API_URL: CCD data store base URL
        IDAM_API_URL: IDAM base URL
        IDAM_CLIENT_ID / IDAM_CLIENT_SECRET: OAuth2 client used for system users
        IDAM_USERS: JSON mapping of jurisdiction -> {"username", "password"}
        S2S_URL: Service-to-service auth provider base URL
        S2S_NAME: Microservice name used to lease service tokens
        DOCUMENT_MANAGEMENT_URL: Document store base URL (for document links)
        PAYMENTS_API_URL: Payments processor base URL
        SERVICE_CONFIG: JSON list of per-service configuration items
        HTTP_TIMEOUT_SECONDS: Timeout applied by the HTTP adapters
        CELERY_BROKER_URL: Envelopes queue broker
        LOG_LEVEL: Logging level (default INFO)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # CCD
    CCD_API_URL: str = "http://localhost:4452"

    # Authentication
    IDAM_API_URL: str = "http://localhost:5000"
    IDAM_CLIENT_ID: str = "bsp"
    IDAM_CLIENT_SECRET: str = "dev-client-secret"
    IDAM_REDIRECT_URI: str = "http://localhost/receiver"
    IDAM_USERS: dict[str, IdamUserCredentials] = {}
    S2S_URL: str = "http://localhost:4552"
    S2S_NAME: str = "bulk_scan_orchestrator"

    # Collaborators
    DOCUMENT_MANAGEMENT_URL: str = "http://localhost:3453"
    DOCUMENT_MANAGEMENT_CONTEXT_PATH: str = "documents"
    PAYMENTS_API_URL: str = "http://localhost:8583"
    HTTP_TIMEOUT_SECONDS: float = 30.0

    # Services
    SERVICE_CONFIG: list[ServiceConfigItem] = []

    # Queue / Celery
    CELERY_BROKER_URL: str = "redis://localhost:6379/0"
    CELERY_RESULT_BACKEND: Optional[str] = None
    ENVELOPES_QUEUE_NAME: str = "envelopes"

    # Application
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True
    ENVIRONMENT: str = "development"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache for singleton behavior.
    Call get_settings.cache_clear() to reload settings.
    """
    return Settings()
