"""
Runtime configuration helpers for the VidHub backend.

Values come from the process environment first and fall back to the
``.env`` file located in the project root.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve the project root
BASE_DIR = Path(__file__).resolve().parents[1]

# Absolute path to .env
ENV_PATH = BASE_DIR / ".env"

# Load .env defaults without overriding environment variables provided by the platform
load_dotenv(dotenv_path=ENV_PATH, override=False)

_PLACEHOLDER_SECRETS = {"", "changeme", "change-me", "placeholder", "example", "your-key-here"}


class Settings(BaseSettings):
    app_name: str = Field(default="VidHub", alias="APP_NAME")
    api_version: str = Field(default="0.1.0", alias="API_VERSION")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Snapshot document holding every collection
    data_path: Path = Field(default=BASE_DIR / "database.json", alias="DATA_PATH")

    jwt_secret_key: str | None = Field(default=None, alias="JWT_SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    jwt_expires_minutes: int = Field(default=1440, alias="JWT_EXPIRES_MINUTES")

    cors_origins: str = Field(default="*", alias="CORS_ORIGINS")

    # Realtime rooms
    broadcast_send_timeout: float = Field(default=2.0, alias="BROADCAST_SEND_TIMEOUT")

    # Feed / scheduler
    feed_limit: int = Field(default=50, alias="FEED_LIMIT")
    publish_interval_seconds: float = Field(default=60.0, alias="PUBLISH_INTERVAL_SECONDS")
    disable_scheduler: bool = Field(default=False, alias="DISABLE_SCHEDULER")

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def cors_origin_list(self) -> list[str]:
        origins = [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]
        return origins or ["*"]

    def require_jwt_secret(self) -> str:
        """Return the signing secret, refusing empty or placeholder values."""

        value = (self.jwt_secret_key or "").strip()
        if value.lower() in _PLACEHOLDER_SECRETS:
            raise RuntimeError("JWT_SECRET_KEY is required and must not use placeholder defaults")
        return value


@lru_cache()
def get_settings() -> Settings:
    return Settings()


__all__ = ["BASE_DIR", "Settings", "get_settings"]
