"""
Application Configuration Module

Centralizes all configuration using environment variables with Pydantic Settings.
Every integration is optional. A missing credential disables that integration
(logged at startup) instead of failing the boot:

    - DATABASE_URL unset      → orders are logged but not persisted
    - TWILIO_* unset          → SMS notifications are skipped
    - SENDGRID_API_KEY unset  → email notifications are skipped
    - PUSH_SERVER_KEY unset   → push notifications are skipped

The ENV_MODE variable picks the notification backend: development logs
messages through the mock service, staging and production talk to Twilio
and SendGrid.

Usage:
    from rollhouse.core.config import get_settings

    settings = get_settings()
    if settings.store_configured:
        ...
"""

import logging
import sys
from enum import Enum
from typing import Optional
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_CORS_ORIGINS = [
    "http://localhost:5500",
    "http://localhost:3000",
    "http://127.0.0.1:5500",
    "http://127.0.0.1:3000",
]


class EnvironmentMode(str, Enum):
    """
    Application environment modes.

    Attributes:
        DEVELOPMENT: Notifications are logged, never sent
        PRODUCTION: Live Twilio / SendGrid delivery
        STAGING: Real integrations with test credentials
    """
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    STAGING = "staging"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables or .env file.
    Sensitive values (API keys) should NEVER be committed to version control.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # ENVIRONMENT
    # ==========================================================================

    env_mode: EnvironmentMode = Field(
        default=EnvironmentMode.DEVELOPMENT,
        description="Application environment mode"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode with verbose logging"
    )

    # ==========================================================================
    # APPLICATION
    # ==========================================================================

    app_name: str = Field(
        default="Rollhouse Ordering Backend",
        description="Application display name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version"
    )
    api_host: str = Field(
        default="0.0.0.0",
        description="API server host"
    )
    api_port: int = Field(
        default=3001,
        description="API server port"
    )
    frontend_url: Optional[str] = Field(
        default=None,
        description="Extra browser origin allowed by CORS"
    )

    # ==========================================================================
    # ORDER STORE
    # ==========================================================================

    database_url: Optional[str] = Field(
        default=None,
        description="SQLAlchemy async URL (postgresql+psycopg://... or sqlite+aiosqlite://...)"
    )
    database_echo: bool = Field(
        default=False,
        description="Log every SQL statement"
    )

    # ==========================================================================
    # TWILIO (SMS)
    # ==========================================================================

    twilio_account_sid: Optional[str] = Field(
        default=None,
        description="Twilio Account SID"
    )
    twilio_auth_token: Optional[str] = Field(
        default=None,
        description="Twilio Auth Token"
    )
    twilio_phone_number: Optional[str] = Field(
        default=None,
        description="Twilio phone number for sending SMS"
    )

    # ==========================================================================
    # SENDGRID (EMAIL)
    # ==========================================================================

    sendgrid_api_key: Optional[str] = Field(
        default=None,
        description="SendGrid API Key"
    )
    email_from: str = Field(
        default="noreply@locodhaasu.com",
        description="From email address for SendGrid"
    )

    # ==========================================================================
    # PUSH
    # ==========================================================================

    push_server_key: Optional[str] = Field(
        default=None,
        description="Push service key; push is a logging stub when set"
    )

    # ==========================================================================
    # RESTAURANT STAFF
    # ==========================================================================

    admin_phone: Optional[str] = Field(
        default=None,
        description="Phone number that receives new-order SMS"
    )
    admin_email: Optional[str] = Field(
        default=None,
        description="Email address that receives new-order emails"
    )

    # ==========================================================================
    # BUSINESS CONFIGURATION
    # ==========================================================================

    restaurant_name: str = Field(
        default="LOCO DHAASU",
        description="Restaurant display name"
    )
    order_tracking_url: str = Field(
        default="locodhaasu.com/orders",
        description="Tracking link included in customer SMS"
    )
    default_country_code: str = Field(
        default="+34",
        description="Country prefix used when normalizing local phone numbers"
    )

    # ==========================================================================
    # VALIDATORS
    # ==========================================================================

    @field_validator("env_mode", mode="before")
    @classmethod
    def validate_env_mode(cls, v: str) -> EnvironmentMode:
        """Convert string to EnvironmentMode enum."""
        if isinstance(v, EnvironmentMode):
            return v
        try:
            return EnvironmentMode(v.lower())
        except ValueError:
            valid = [e.value for e in EnvironmentMode]
            raise ValueError(f"Invalid env_mode. Must be one of: {valid}")

    # ==========================================================================
    # COMPUTED PROPERTIES
    # ==========================================================================

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.env_mode == EnvironmentMode.DEVELOPMENT

    @property
    def store_configured(self) -> bool:
        return bool(self.database_url)

    @property
    def twilio_configured(self) -> bool:
        return bool(
            self.twilio_account_sid
            and self.twilio_auth_token
            and self.twilio_phone_number
        )

    @property
    def sendgrid_configured(self) -> bool:
        return bool(self.sendgrid_api_key)

    @property
    def push_configured(self) -> bool:
        return bool(self.push_server_key)

    @property
    def cors_origins(self) -> list[str]:
        """Browser origins allowed to call the API."""
        origins = list(DEFAULT_CORS_ORIGINS)
        if self.frontend_url:
            origins.append(self.frontend_url)
        return origins

    # ==========================================================================
    # VALIDATION METHODS
    # ==========================================================================

    def integration_status(self) -> dict[str, bool]:
        """
        Report which optional integrations are configured.

        Returns:
            Mapping of integration name to configured flag
        """
        return {
            "order_store": self.store_configured,
            "twilio": self.twilio_configured,
            "sendgrid": self.sendgrid_configured,
            "push": self.push_configured,
        }


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Settings are loaded once per process; call ``get_settings.cache_clear()``
    after changing the environment.
    """
    return Settings()


# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """
    Configure application-wide logging.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)

    Returns:
        Configured package logger
    """
    settings = get_settings()

    if settings.debug:
        level = logging.DEBUG

    log_format = "%(asctime)s │ %(levelname)-8s │ %(name)-25s │ %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        level=level,
        format=log_format,
        datefmt=date_format,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("twilio.http_client").setLevel(logging.WARNING)

    return logging.getLogger("rollhouse")
