import json
from typing import Annotated, Any

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """
    Storefront configuration loaded from environment variables and `.env`.

    Printify credentials are optional at load time so the HTTP layer can answer
    with a configuration error instead of failing at import.
    """

    # API Configuration
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Merch Storefront API"
    PROJECT_DESCRIPTION: str = "Checkout and catalog API backed by Printify print-on-demand"
    VERSION: str = "0.1.0"

    # Application Settings
    DEBUG: bool = Field(False, description="Debug mode")
    ENVIRONMENT: str = Field("production", description="Runtime environment")
    LOG_LEVEL: str = Field("INFO", description="Root logging level")
    SENTRY_DSN: str | None = Field(None, description="Sentry DSN for error tracking")
    CORS_ORIGINS: Annotated[list[str], NoDecode] = Field(
        default=["http://localhost:3000"], description="Allowed CORS origins outside debug mode"
    )
    SLOW_REQUEST_MS: float = Field(
        8000.0, description="Requests slower than this are logged as warnings (checkout waits on Printify)"
    )

    # Printify API settings
    PRINTIFY_API_BASE_URL: str = Field("https://api.printify.com/v1", description="Printify REST API base URL")
    PRINTIFY_API_TOKEN: str | None = Field(None, description="Printify personal access token")
    PRINTIFY_SHOP_ID: str | None = Field(None, description="Printify shop identifier")
    PRINTIFY_TIMEOUT: float = Field(45.0, description="Request timeout in seconds")
    PRINTIFY_MAX_RETRIES: int = Field(3, description="Attempts per request including the first one")
    PRINTIFY_RATE_LIMIT: int = Field(600, description="Requests allowed per rate window")
    PRINTIFY_RATE_WINDOW_SECONDS: float = Field(60.0, description="Length of the rate window in seconds")
    PRINTIFY_USER_AGENT: str = Field("SDFM-Store/1.0", description="User-Agent sent to Printify")

    # Checkout settings
    ORDER_EXTERNAL_ID_PREFIX: str = Field("SDFM", description="Prefix for the external order id")
    PRODUCTION_SUBMIT_DELAY_SECONDS: float = Field(
        2.0, description="Wait before re-reading a new order and sending it to production"
    )
    STORE_CURRENCY: str = Field("USD", description="Currency used for prices and estimates")

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def __init__(self, **data: Any):
        super().__init__(**data)

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, value):
        if isinstance(value, str):
            if value.strip().startswith("["):
                return json.loads(value)
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("PRINTIFY_MAX_RETRIES")
    @classmethod
    def validate_max_retries(cls, v):
        if v < 1:
            raise ValueError("PRINTIFY_MAX_RETRIES must be at least 1")
        return v

    @field_validator("PRINTIFY_RATE_LIMIT")
    @classmethod
    def validate_rate_limit(cls, v):
        if v < 1:
            raise ValueError("PRINTIFY_RATE_LIMIT must be at least 1")
        return v

    @field_validator("STORE_CURRENCY")
    @classmethod
    def validate_currency(cls, v):
        if len(v) != 3:
            raise ValueError("STORE_CURRENCY must be a 3-letter ISO code")
        return v.upper()

    @computed_field
    @property
    def is_development(self) -> bool:
        """True when debug payloads may be exposed to clients."""
        return self.DEBUG or self.ENVIRONMENT.lower() in ["development", "dev", "local"]


# Singleton para configuración
_settings_instance = None


def get_settings() -> Settings:
    """
    Return the cached settings instance.

    Avoids reading the environment on every request.
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
