"""
Configuration module for the storefront backend.

Loads environment variables and validates required settings.
"""
import logging
import os
from typing import List
from dotenv import load_dotenv

# Load .env file
load_dotenv()

logger = logging.getLogger(__name__)


class Settings:
    """Application settings loaded from environment variables."""

    # Shopify Storefront API
    PUBLIC_STORE_DOMAIN: str = os.getenv("PUBLIC_STORE_DOMAIN", "")
    PUBLIC_STOREFRONT_API_TOKEN: str = os.getenv("PUBLIC_STOREFRONT_API_TOKEN", "")
    STOREFRONT_API_VERSION: str = os.getenv("STOREFRONT_API_VERSION", "2025-01")
    STOREFRONT_TIMEOUT_SECONDS: float = float(os.getenv("STOREFRONT_TIMEOUT_SECONDS", "10"))

    # Google Gemini API
    # A missing key is not a startup error: the recommendation endpoints
    # report it per request and the widget pipeline falls back.
    GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")

    # Application Settings
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS Settings (production only, comma separated)
    CORS_ALLOWED_ORIGINS: List[str] = [
        origin.strip()
        for origin in os.getenv("CORS_ALLOWED_ORIGINS", "").split(",")
        if origin.strip()
    ]

    @classmethod
    def validate(cls) -> None:
        """
        Validate that all required settings are configured.

        Raises:
            ValueError: If any required setting is missing.
        """
        required_settings = {
            "PUBLIC_STORE_DOMAIN": cls.PUBLIC_STORE_DOMAIN,
        }

        missing = [key for key, value in required_settings.items() if not value]

        if missing:
            raise ValueError(
                f"Missing required environment variables: {', '.join(missing)}. "
                "Please check your .env file."
            )

    @classmethod
    def is_production(cls) -> bool:
        """Check if running in production environment."""
        return cls.ENVIRONMENT.lower() == "production"

    @classmethod
    def is_development(cls) -> bool:
        """Check if running in development environment."""
        return cls.ENVIRONMENT.lower() == "development"


# Create a singleton instance
settings = Settings()

# Validate settings on module import (will fail fast if misconfigured)
# Skip validation during tests or when importing for introspection
if os.getenv("VALIDATE_CONFIG", "true").lower() == "true":
    try:
        settings.validate()
    except ValueError as e:
        # In development, warn but don't crash
        if settings.is_development():
            logger.warning(f"{e} The storefront endpoints will fail until .env is configured.")
        else:
            raise
