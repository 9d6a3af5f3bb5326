# config/appconfig.py
"""
Application Configuration
Database, security, practice and logging settings for the chart service
"""
from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings

# Calculate the project root
BASE_DIR = Path(__file__).resolve().parent.parent


class AppSettings(BaseSettings):
    """Configuration for the Behavioral-Health Chart Service"""

    # ============================================================================
    # APPLICATION
    # ============================================================================
    APP_NAME: str = "Behavioral Health Chart Service"
    ENVIRONMENT: Literal["development", "production", "test"] = "development"
    LOG_LEVEL: str = "INFO"

    # ============================================================================
    # DATABASE
    # ============================================================================
    DATABASE_URL: str = f"sqlite+aiosqlite:///{BASE_DIR / 'chart.db'}"
    DATABASE_ECHO: bool = False

    # ============================================================================
    # SECURITY
    # ============================================================================
    SECRET_KEY: str = "dev-only-secret-change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRY: int = 480  # minutes (8h shift)
    # Self-registration with this address creates the first admin
    BOOTSTRAP_ADMIN_EMAIL: Optional[str] = None

    # ============================================================================
    # PRACTICE
    # ============================================================================
    PRACTICE_TIMEZONE: str = "America/Chicago"
    PRACTICE_TIMEZONE_LABEL: str = "CT"
    DEFAULT_LOCATION_ID: str = "default"
    PRACTICE_NAME: str = "Behavioral Health Practice"
    PRACTICE_ADDRESS: str = ""
    PRACTICE_PHONE: str = ""

    # ============================================================================
    # AUDIT TRAIL
    # ============================================================================
    AUDIT_LOG_MAX_ENTRIES: int = 10000
    AUDIT_PAGE_SIZE: int = 50

    class Config:
        env_file = ".env"
        extra = "ignore"

    # ========================================================================
    # COMPUTED PROPERTIES
    # ========================================================================
    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    @property
    def LOGGING_CONFIG(self) -> dict:
        """dictConfig payload applied once at startup."""
        return {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": "[%(asctime)s] %(levelname)s - %(name)s - %(message)s",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                },
            },
            "loggers": {
                "app": {"handlers": ["console"], "level": self.LOG_LEVEL, "propagate": False},
                "uvicorn": {"handlers": ["console"], "level": "INFO", "propagate": False},
                "sqlalchemy.engine": {"handlers": ["console"], "level": "WARNING", "propagate": False},
            },
            "root": {"handlers": ["console"], "level": "WARNING"},
        }


settings = AppSettings()
