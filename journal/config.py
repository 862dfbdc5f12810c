# @TASK S0-T0.2 - pydantic-settings based application settings

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Journal search application settings.

    All values are loaded from environment variables.
    A .env file in the working directory is also supported.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # --- Database ---
    DATABASE_URL: str = "sqlite+aiosqlite:///./journal.db"

    # --- Search ---
    SEARCH_CONCURRENT_QUERIES: bool = True  # fan matcher reads out over separate sessions
    SEARCH_MAX_QUERY_LENGTH: int = 200

    # --- Logging ---
    LOG_LEVEL: str = "INFO"

    # --- HTTP ---
    CORS_ORIGINS: list[str] = [
        "http://localhost:8081",
        "http://127.0.0.1:8081",
    ]

    @property
    def async_database_url(self) -> str:
        """Ensure the database URL uses an async driver."""
        url = self.DATABASE_URL
        if url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        elif url.startswith("sqlite://"):
            url = url.replace("sqlite://", "sqlite+aiosqlite://", 1)
        return url


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings singleton."""
    return Settings()
