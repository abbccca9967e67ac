"""
PressButton – Application configuration.
Reads environment variables from a .env file via pydantic-settings.
"""

from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration loaded from environment / .env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # ── App ──
    APP_NAME: str = "PressButton API"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    # ── Database ──
    DATABASE_URL: str = "sqlite+aiosqlite:///./pressbutton.db"
    # Deadline (seconds) for a single transactional unit; 0 disables it.
    STORE_TIMEOUT_SECONDS: Optional[float] = 30.0

    # ── JWT ──
    SECRET_KEY: str = "change-me-to-a-random-secret"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7


settings = Settings()
