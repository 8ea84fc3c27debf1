"""
Typed configuration for the sandwich API.

Values come from environment variables (or a .env file) and are read once
per process through get_settings().
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from sandwich.models import OG_HOST_NAME

logger = logging.getLogger(__name__)

# Passwords that only make sense on a developer laptop
WEAK_ADMIN_PASSWORDS = frozenset({"", "admin", "password", "123456", "sandwich"})


class Settings(BaseSettings):
    """Sandwich API settings.

    Defaults target a local PocketBase; deployments override them through
    the environment.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # --- PocketBase ---
    pocketbase_url: str = Field(default="http://127.0.0.1:8090", description="PocketBase base URL")
    pocketbase_admin_email: str = Field(default="admin@sandwich.local", description="Superuser login")
    pocketbase_admin_password: str = Field(default="", description="Superuser password")
    skip_pb_auth: bool = Field(default=False, description="Do not log in to PocketBase at startup")

    # --- HTTP ---
    allowed_origins_str: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        alias="ALLOWED_ORIGINS",
        description="Comma-separated CORS origins",
    )

    # --- Reporting ---
    stats_cache_ttl_seconds: float = Field(default=60, ge=0, description="Lifetime of cached collection totals")
    max_reported_errors: int = Field(default=5, ge=1, description="Failure messages returned by batch endpoints")
    max_import_errors: int = Field(default=10, ge=1, description="Row errors returned by CSV imports")
    og_host_name: str = Field(default=OG_HOST_NAME, description="Host name of canonical OG Project entries")

    @field_validator("pocketbase_admin_password")
    @classmethod
    def warn_on_weak_password(cls, v: str) -> str:
        if v in WEAK_ADMIN_PASSWORDS:
            logger.warning(
                "SECURITY WARNING: POCKETBASE_ADMIN_PASSWORD is empty or a well-known default; "
                "set a strong value outside local development."
            )
        return v

    @property
    def allowed_origins(self) -> list[str]:
        return [origin.strip() for origin in self.allowed_origins_str.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Process-wide settings instance."""
    return Settings()
