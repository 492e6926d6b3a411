"""
Expansion Readiness Settings
Centralized configuration from environment variables

All sensitive data MUST come from environment variables.
"""

import os
from dataclasses import dataclass, field
from typing import Dict, List

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _get_env(key: str, default: str = "", required: bool = False) -> str:
    """Get environment variable with optional requirement enforcement."""
    value = os.getenv(key, default)
    if required and not value:
        raise ValueError(f"Required environment variable {key} is not set!")
    return value


def _get_env_int(key: str, default: int) -> int:
    """Get integer environment variable."""
    return int(os.getenv(key, str(default)))


def _get_env_bool(key: str, default: bool = False) -> bool:
    """Get boolean environment variable."""
    return os.getenv(key, str(default)).lower() in ("true", "1", "yes")


def _get_env_list(key: str, default: str = "", separator: str = ",") -> List[str]:
    """Get list from comma-separated environment variable."""
    value = os.getenv(key, default)
    return [item.strip() for item in value.split(separator) if item.strip()]


# =============================================================================
# DATABASE SETTINGS
# =============================================================================
@dataclass
class DatabaseSettings:
    """MySQL database configuration - ALL from environment."""

    host: str = field(default_factory=lambda: _get_env("MYSQL_HOST", "localhost"))
    port: int = field(default_factory=lambda: _get_env_int("MYSQL_PORT", 3306))
    user: str = field(default_factory=lambda: _get_env("MYSQL_USER", "fleet_reader"))
    password: str = field(default_factory=lambda: _get_env("MYSQL_PASSWORD", ""))
    database: str = field(
        default_factory=lambda: _get_env("MYSQL_DATABASE", "fleet_ops")
    )
    charset: str = "utf8mb4"

    # Connection pool
    pool_size: int = field(default_factory=lambda: _get_env_int("MYSQL_POOL_SIZE", 10))
    max_overflow: int = field(
        default_factory=lambda: _get_env_int("MYSQL_MAX_OVERFLOW", 5)
    )
    pool_recycle: int = field(
        default_factory=lambda: _get_env_int("MYSQL_POOL_RECYCLE", 3600)
    )

    @property
    def url(self) -> str:
        """SQLAlchemy connection URL (PyMySQL driver)."""
        return (
            f"mysql+pymysql://{self.user}:{self.password}@"
            f"{self.host}:{self.port}/{self.database}?charset={self.charset}"
        )


# =============================================================================
# READINESS SETTINGS
# =============================================================================
@dataclass
class ReadinessSettings:
    """Expansion readiness defaults."""

    # Tenant resolution lives outside this service; requests without a
    # company_id are scored for this company.
    default_company_id: str = field(
        default_factory=lambda: _get_env("DEFAULT_COMPANY_ID", "demo-fleet")
    )
    default_time_range: str = field(
        default_factory=lambda: _get_env("DEFAULT_TIME_RANGE", "month")
    )
    # "Today" for period resolution is taken in the company's timezone
    business_tz: str = field(
        default_factory=lambda: _get_env("BUSINESS_TZ", "America/Chicago")
    )


# =============================================================================
# APPLICATION SETTINGS
# =============================================================================
@dataclass
class AppSettings:
    """General application settings."""

    debug: bool = field(default_factory=lambda: _get_env_bool("DEBUG", False))
    log_level: str = field(default_factory=lambda: _get_env("LOG_LEVEL", "INFO"))
    log_to_file: bool = field(
        default_factory=lambda: _get_env_bool("LOG_TO_FILE", True)
    )
    version: str = "1.0.0"
    cors_origins: List[str] = field(
        default_factory=lambda: _get_env_list("CORS_ORIGINS", "http://localhost:3000")
    )


# =============================================================================
# GLOBAL SETTINGS INSTANCE
# =============================================================================
class Settings:
    """Global settings container - singleton pattern."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self):
        """Initialize all settings."""
        self.database = DatabaseSettings()
        self.readiness = ReadinessSettings()
        self.app = AppSettings()

    def validate(self) -> List[str]:
        """Validate settings and return list of warnings."""
        warnings = []

        if not self.database.password:
            warnings.append("⚠️ MYSQL_PASSWORD not set")

        if self.readiness.default_time_range not in ("month", "90d", "180d", "365d"):
            warnings.append(
                f"⚠️ DEFAULT_TIME_RANGE={self.readiness.default_time_range!r} is not a "
                "supported range - requests without ?range= will be rejected"
            )

        return warnings

    def to_dict(self) -> Dict:
        """Export settings as dictionary (for debugging, excludes secrets)."""
        return {
            "version": self.app.version,
            "debug": self.app.debug,
            "database_host": self.database.host,
            "database_name": self.database.database,
            "default_company_id": self.readiness.default_company_id,
            "default_time_range": self.readiness.default_time_range,
            "business_tz": self.readiness.business_tz,
        }


# Create global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get global settings instance."""
    return settings


# Export commonly used settings
DATABASE = settings.database
READINESS = settings.readiness
APP = settings.app
