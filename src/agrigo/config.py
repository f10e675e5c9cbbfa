"""Application settings read from the environment (``AGRIGO_*``).

Persistence settings live in ``domain.toml`` next to the domain; this module
only covers what the HTTP service and token signing need.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

_DEV_SECRET = "agrigo-dev-secret-change-me"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="AGRIGO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "AgriGo API"
    app_description: str = "Marketplace connecting farmers and consumers"

    # Tokens
    token_secret: str = _DEV_SECRET
    refresh_secret: str = _DEV_SECRET + "-refresh"
    access_token_ttl: int = 7 * 24 * 60 * 60  # seconds
    refresh_token_ttl: int = 30 * 24 * 60 * 60  # seconds

    # CORS, comma separated
    cors_origins: str = "http://127.0.0.1:5500"

    @property
    def allowed_origins(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
