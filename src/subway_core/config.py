"""Application configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    database_url: str = "postgresql+asyncpg://localhost/subway"

    # Log every SQL statement (noisy, for local debugging only)
    echo_sql: bool = False

    # Logging
    log_level: str = "info"


settings = Settings()
