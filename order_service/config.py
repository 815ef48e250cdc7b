"""Configuration management using environment variables"""
import os
import logging
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./orders.db"

logger = logging.getLogger(__name__)


class Settings:
    """Application settings - read once at import time"""

    def __init__(self):
        # Environment
        self.environment = os.getenv("ENVIRONMENT", "development")

        # Database configuration (SQLite by default - any async SQLAlchemy URL works)
        if self.environment == "production":
            self.database_url = self._get_required("DATABASE_URL")
            if self.database_url.startswith("sqlite"):
                logger.warning(
                    "⚠️  Using SQLite in production - concurrent writers will contend for the database file"
                )
        else:
            self.database_url = os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)

        # Currency used when an order line does not name one
        default_currency = os.getenv("DEFAULT_CURRENCY", "COP").strip()
        if not default_currency:
            raise ValueError("DEFAULT_CURRENCY cannot be empty")
        self.default_currency = default_currency.upper()

        # Event publication (events are always recorded in the event store)
        self.publish_events = os.getenv("PUBLISH_EVENTS", "true").lower() == "true"

        # Logging
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()

    def _get_required(self, key: str) -> str:
        """Get required environment variable or raise error."""
        value = os.getenv(key, "").strip()
        if not value:
            raise ValueError(
                f"Missing required environment variable: {key}. "
                f"Required in production mode."
            )
        return value


# Global settings instance
settings = Settings()
