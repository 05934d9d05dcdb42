from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from pathlib import Path
from typing import Literal
from functools import lru_cache


class Settings(BaseSettings):
    """
    Application settings loaded from environment.
    """

    # Environment
    ENV: Literal["development", "testing", "staging", "production"] = "development"
    APP_NAME: str = "store-api"

    # HTTP server
    HOST: str = "127.0.0.1"
    PORT: int = 3000

    # Database configuration (SQLite through aiosqlite)
    DATABASE_URL: str = "sqlite+aiosqlite:///./database/database.sqlite"

    # Test database configuration
    TEST_DATABASE_URL: str = "sqlite+aiosqlite:///:memory:"
    TESTING: bool = False

    # SQLAlchemy
    SQLALCHEMY_ECHO: bool = False

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"
    LOG_TO_STDOUT: bool = True
    LOG_DIR: Path = Path("./logs")
    LOG_MAX_BYTES: int = 10_000_000  # 10 MB
    LOG_BACKUP_COUNT: int = 5
    ENABLE_SQL_LOGGING: bool = False

    # --- Derived settings ---
    @property
    def database_url(self) -> str:
        """
        Return the database URL the application should connect to.

        When `TESTING=True` the test URL (in-memory SQLite by default) is used so a
        test run never touches the database file of a running instance.
        """
        if self.TESTING:
            return self.TEST_DATABASE_URL
        return self.DATABASE_URL

    @property
    def is_development(self) -> bool:
        return self.ENV == "development"

    # --- Validators ---
    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str | None) -> str | None:
        """
        Normalize LOG_LEVEL to uppercase before the Literal check runs, so
        `LOG_LEVEL=debug` in a .env file is accepted.
        """
        return v.upper() if isinstance(v, str) else v

    @field_validator("LOG_FORMAT", mode="before")
    @classmethod
    def normalize_log_format(cls, v: str | None) -> str | None:
        return v.lower() if isinstance(v, str) else v

    model_config = SettingsConfigDict(
        # .env next to the package root (src/store_api/.env)
        env_file=str(Path(__file__).parent.parent / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )


# get_settings() takes no arguments and always returns the same settings from the environment,
# so caching it with @lru_cache() avoids re-reading the .env file on every call.
@lru_cache()
def get_settings() -> Settings:
    return Settings()
