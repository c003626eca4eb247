from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "Leave Management"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: Literal["development", "staging", "production"] = "development"
    database_url: str = "postgresql+asyncpg://leave:leave@db:5432/leave"
    cors_origins: list[str] = ["http://localhost:8080", "http://localhost:4004"]
    log_level: str = "INFO"
    create_tables_on_startup: bool = True

    # Leave policy defaults
    default_leave_balance: int = 20
    low_balance_threshold: int = 5
    warning_balance_threshold: int = 10


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return cached settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
