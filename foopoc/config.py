"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Settings are frozen once built; get_settings() is cached (one instance per process)
    - load_settings() either returns a complete Settings or raises ConfigError
      listing every missing or invalid field
    - Secrets come from the environment or a local .env file, never hardcoded

Design Decisions:
    - Defaults only for non-secret settings; the store URL, client credentials,
      provider URL and redirect URI are required
"""

import logging
from functools import lru_cache

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from foopoc.core.errors import ConfigError


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, frozen=True, extra="ignore",
    )

    # Database
    postgresql_url: str
    database_pool_size: int = 10
    database_max_overflow: int = 5

    @field_validator("postgresql_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Plain postgresql:// URLs are served by the asyncpg driver."""
        if isinstance(v, str):
            for prefix in ("postgresql://", "postgres://"):
                if v.startswith(prefix):
                    return v.replace(prefix, "postgresql+asyncpg://", 1)
        return v

    # Identity provider
    oidc_client_id: str
    oidc_client_secret: str
    oidc_provider_url: str
    redirect_uri: str
    http_timeout_seconds: float = 10.0
    cookie_secure: bool = False

    # Observability
    log_level: str = "DEBUG"
    log_format: str = "json"
    log_to_file: bool = False
    log_file_path: str = "logs/app.json"

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {v!r}")
        return level

    @field_validator("log_format")
    @classmethod
    def check_log_format(cls, v: str) -> str:
        fmt = v.strip().lower()
        if fmt not in ("json", "text"):
            raise ValueError("log_format must be 'json' or 'text'")
        return fmt

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    shutdown_grace_seconds: int = 5


def load_settings(**overrides) -> Settings:
    """Build Settings from the environment, collecting every field error."""
    try:
        return Settings(**overrides)
    except ValidationError as exc:
        fields = sorted({
            ".".join(str(loc) for loc in err["loc"]) for err in exc.errors()
        })
        raise ConfigError(fields) from exc


@lru_cache
def get_settings() -> Settings:
    return load_settings()
