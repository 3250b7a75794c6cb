"""
Centralized application configuration.

All settings are read from environment variables (or a local ``.env`` file)
using Pydantic Settings, so every value is validated on startup.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

VALID_ISOLATION_LEVELS = [
    "SERIALIZABLE",
    "REPEATABLE READ",
    "READ COMMITTED",
    "READ UNCOMMITTED",
]


class Settings(BaseSettings):
    """
    Application settings backed by Pydantic Settings.

    Defaults are suitable for local development against a SQLite file.
    """

    # === BASIC APP SETTINGS ===
    APP_NAME: str = "Comptoirs Order Lines"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = Field(default=False)

    # === LOGGING ===
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FILE_PATH: Optional[str] = Field(default="logs/app.log")
    LOG_MAX_SIZE_MB: int = Field(default=10)
    LOG_BACKUP_COUNT: int = Field(default=5)
    LOG_FORMAT: str = Field(default="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    # === DATABASE ===
    DATABASE_URL: str = Field(default="sqlite+aiosqlite:///./comptoirs.db")
    DB_POOL_SIZE: int = Field(default=10)
    DB_MAX_OVERFLOW: int = Field(default=20)
    DB_POOL_TIMEOUT: int = Field(default=30)
    DB_POOL_RECYCLE: int = Field(default=3600)
    DB_ECHO: bool = Field(default=False)
    # None keeps the driver default; SERIALIZABLE avoids lost updates on product counters
    DB_ISOLATION_LEVEL: Optional[str] = Field(default=None)

    # === RETRIES (connection setup only) ===
    MAX_RETRIES: int = Field(default=3)
    RETRY_DELAY_SECONDS: float = Field(default=1.0)
    RETRY_BACKOFF_FACTOR: float = Field(default=2.0)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore",
    }

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Check that the log level is a known logging level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of: {valid_levels}")
        return v.upper()

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v):
        """Check that the environment name is supported."""
        valid_envs = ["development", "staging", "production", "testing"]
        if v.lower() not in valid_envs:
            raise ValueError(f"ENVIRONMENT must be one of: {valid_envs}")
        return v.lower()

    @field_validator("DB_ISOLATION_LEVEL", mode="before")
    @classmethod
    def validate_isolation_level(cls, v):
        """Normalize the isolation level to the names SQLAlchemy expects."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        normalized = v.strip().upper().replace("_", " ")
        if normalized not in VALID_ISOLATION_LEVELS:
            raise ValueError(f"DB_ISOLATION_LEVEL must be one of: {VALID_ISOLATION_LEVELS}")
        return normalized

    @field_validator("DB_POOL_SIZE", "DB_POOL_TIMEOUT", "MAX_RETRIES")
    @classmethod
    def validate_positive(cls, v):
        """Pool and retry settings must be at least 1."""
        if v < 1:
            raise ValueError("value must be >= 1")
        return v

    @property
    def is_production(self) -> bool:
        """True when running in production."""
        return self.ENVIRONMENT == "production"

    @property
    def is_development(self) -> bool:
        """True when running in development."""
        return self.ENVIRONMENT == "development"

    @property
    def is_sqlite(self) -> bool:
        """True when DATABASE_URL points at SQLite."""
        return self.DATABASE_URL.startswith("sqlite")

    @property
    def database_host(self) -> str:
        """Host part of DATABASE_URL, without credentials (for logs and errors)."""
        if self.is_sqlite:
            return "sqlite"
        _, _, rest = self.DATABASE_URL.partition("://")
        host = rest.rsplit("@", 1)[-1]
        return host.split("/", 1)[0]

    def get_engine_options(self, database_url: Optional[str] = None) -> dict:
        """
        Keyword arguments for ``create_async_engine``.

        Args:
            database_url: URL the engine is built for. Defaults to DATABASE_URL.

        Returns:
            dict: Engine options for that database
        """
        database_url = database_url or self.DATABASE_URL
        options = {"echo": self.DB_ECHO}

        if self.DB_ISOLATION_LEVEL:
            options["isolation_level"] = self.DB_ISOLATION_LEVEL

        if database_url.startswith("sqlite"):
            # SQLite pools are chosen by the connection layer
            options["connect_args"] = {"check_same_thread": False}
            return options

        options.update(
            {
                "pool_size": self.DB_POOL_SIZE,
                "max_overflow": self.DB_MAX_OVERFLOW,
                "pool_timeout": self.DB_POOL_TIMEOUT,
                "pool_recycle": self.DB_POOL_RECYCLE,
                "pool_pre_ping": True,
            }
        )
        return options


@lru_cache()
def get_settings() -> Settings:
    """
    Return the cached settings instance.

    Returns:
        Settings: Application settings
    """
    return Settings()


def reload_settings() -> Settings:
    """
    Drop the cached settings and load them again (useful in tests).

    Returns:
        Settings: Fresh settings instance
    """
    get_settings.cache_clear()
    return get_settings()


def get_environment_info() -> dict:
    """
    Summarize the running environment.

    Returns:
        dict: Environment information
    """
    settings = get_settings()

    return {
        "app_name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "debug": settings.DEBUG,
        "is_production": settings.is_production,
        "log_level": settings.LOG_LEVEL,
        "database_host": settings.database_host,
        "isolation_level": settings.DB_ISOLATION_LEVEL,
    }
