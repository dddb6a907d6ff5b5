"""
Application configuration using Pydantic Settings.
All config is loaded from environment variables / .env file.
"""

from functools import lru_cache

from pydantic import ValidationError
from pydantic_settings import BaseSettings

from notekeeper.core.exceptions import ConfigurationError

# Values the app cannot start without. Blank strings count as missing.
REQUIRED_SETTINGS = ("SUPABASE_URL", "SUPABASE_KEY", "TEXT_ASSIST_API_KEY")


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    # ── App ──────────────────────────────────────────────
    APP_NAME: str = "notekeeper"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: str = "http://localhost:8081,http://localhost:19006"  # comma-separated

    # ── Supabase (identity + profiles) ───────────────────
    SUPABASE_URL: str
    SUPABASE_KEY: str  # anon/public key
    OAUTH_REDIRECT_URL: str = "zapweb://auth/callback"

    # ── Text assist (chat-completion API) ────────────────
    TEXT_ASSIST_API_KEY: str
    TEXT_ASSIST_BASE_URL: str = "https://api.deepseek.com/v1"
    TEXT_ASSIST_MODEL: str = "deepseek-chat"
    TEXT_ASSIST_TEMPERATURE: float = 0.7
    TEXT_ASSIST_TIMEOUT: float | None = 60.0  # seconds, None = wait forever

    # ── Local note storage ───────────────────────────────
    NOTES_STORAGE_DIR: str = ".notekeeper"
    NOTES_STORAGE_KEY: str = "@notes_app_storage"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore",
    }

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


def load_settings(**overrides) -> Settings:
    """Build settings and fail fast if a required value is missing.

    Raises:
        ConfigurationError: listing every missing or blank required variable.
    """
    try:
        settings = Settings(**overrides)
    except ValidationError as e:
        missing = sorted(
            str(err["loc"][0]) for err in e.errors() if err["type"] == "missing"
        )
        if not missing:
            raise ConfigurationError(f"Invalid configuration: {e}") from e
        raise ConfigurationError(
            f"Missing required configuration: {', '.join(missing)}"
        ) from e

    blank = [name for name in REQUIRED_SETTINGS if not getattr(settings, name).strip()]
    if blank:
        raise ConfigurationError(f"Missing required configuration: {', '.join(blank)}")
    return settings


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance (singleton)."""
    return load_settings()
