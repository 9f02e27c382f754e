"""
Centralized application configuration.

This module handles every environment variable of the storefront using
Pydantic Settings, and resolves the Squarespace connection values the
client is built from.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings

SQUARESPACE_DEFAULT_API_URL = "https://api.squarespace.com"

# Commerce API paths, relative to the API base URL
SQUARESPACE_ENDPOINTS = {
    "PRODUCTS": "/1.0/commerce/products",
    "ORDERS": "/1.0/commerce/orders",
    "INVENTORY": "/1.0/commerce/inventory",
    "TRANSACTIONS": "/1.0/commerce/transactions",
    "PROFILES": "/1.0/commerce/profiles",
    "WEBHOOKS": "/1.0/webhooks/subscriptions",
}


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Defaults are suitable for local development; only the Squarespace site
    identifier and one credential have to be provided to talk to the API.
    """

    # === BASIC APP CONFIGURATION ===
    APP_NAME: str = "Store.AdrienBird.net API"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = Field(default="development", validation_alias=AliasChoices("ENVIRONMENT", "ENV"))
    DEBUG: bool = False

    # === SERVER CONFIGURATION ===
    HOST: str = "0.0.0.0"
    PORT: int = 8080
    LOG_LEVEL: str = "INFO"
    ENABLE_DOCS: bool = True
    ALLOWED_ORIGINS: str = "https://adrienbird.net"

    # === SQUARESPACE CONFIGURATION ===
    SQUARESPACE_API_URL: str = SQUARESPACE_DEFAULT_API_URL
    SQUARESPACE_SITE_ID: str = ""
    SQUARESPACE_API_KEY: Optional[str] = None
    SQUARESPACE_ACCESS_TOKEN: Optional[str] = None
    SQUARESPACE_USER_AGENT: str = "store.adrienbird.net/1.0"

    # === LOGGING CONFIGURATION ===
    LOG_FILE_PATH: Optional[str] = None
    LOG_MAX_SIZE_MB: int = 10
    LOG_BACKUP_COUNT: int = 5

    # === PRODUCT GRID ===
    PRODUCT_GRID_DEFAULT_LIMIT: int = 12

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore",
    }

    @field_validator("ENVIRONMENT", mode="before")
    @classmethod
    def normalize_environment(cls, v):
        """Anything other than production runs as development."""
        if isinstance(v, str) and v.strip().lower() == "production":
            return "production"
        return "development"

    @field_validator("SQUARESPACE_API_KEY", "SQUARESPACE_ACCESS_TOKEN", mode="before")
    @classmethod
    def blank_credential_is_unset(cls, v):
        """An empty credential variable counts as not configured."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("SQUARESPACE_API_URL")
    @classmethod
    def strip_trailing_slash(cls, v):
        """Endpoints start with '/', so the base URL must not end with one."""
        return v.rstrip("/")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Validate that the log level is a known level name."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of: {valid_levels}")
        return v.upper()

    @field_validator("PORT")
    @classmethod
    def validate_port(cls, v):
        """Validate that the port is in range."""
        if not 1 <= v <= 65535:
            raise ValueError("PORT must be between 1 and 65535")
        return v

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def allowed_origins(self) -> List[str]:
        """ALLOWED_ORIGINS parsed as a comma separated list."""
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]


@dataclass(frozen=True)
class SquarespaceConfig:
    """
    Connection values for the Squarespace Commerce API.

    Attributes:
        api_url: API base URL, without trailing slash
        site_id: Squarespace site identifier (every endpoint is scoped to it)
        api_key: API key, used when no access token is configured
        access_token: OAuth access token, preferred over the API key
        environment: "development" or "production"
    """

    api_url: str
    site_id: str
    api_key: Optional[str] = None
    access_token: Optional[str] = None
    environment: str = "development"

    @property
    def has_credentials(self) -> bool:
        return bool(self.access_token or self.api_key)


@lru_cache()
def get_settings() -> Settings:
    """
    Return the settings instance (cached).

    Returns:
        Settings: Application settings
    """
    return Settings()


def resolve_squarespace_config(settings: Optional[Settings] = None) -> SquarespaceConfig:
    """
    Select the Squarespace connection values from the settings.

    Nothing is validated here; the client refuses to start without a site id.

    Args:
        settings: Settings to read from (defaults to the cached settings)

    Returns:
        SquarespaceConfig: Resolved configuration
    """
    settings = settings or get_settings()
    return SquarespaceConfig(
        api_url=settings.SQUARESPACE_API_URL,
        site_id=settings.SQUARESPACE_SITE_ID,
        api_key=settings.SQUARESPACE_API_KEY,
        access_token=settings.SQUARESPACE_ACCESS_TOKEN,
        environment=settings.ENVIRONMENT,
    )
