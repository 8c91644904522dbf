"""Configuration management for Inkpress.

This module uses Pydantic Settings to load and validate configuration from
environment variables and .env files. Configuration is loaded at application
startup and is immutable during runtime.
"""

import json
from dataclasses import dataclass
from datetime import timedelta
from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from inkpress.core.durations import parse_duration

MIN_SECRET_KEY_LENGTH = 32

_PLACEHOLDER_SECRETS = {
    "changeme",
    "change-me",
    "secret",
    "password",
    "your-super-secret-jwt-key-change-this-in-production",
}


class Settings(BaseSettings):
    """Application configuration settings.

    Settings are loaded from environment variables and .env files.
    All configuration values are validated at startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="INKPRESS_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Settings
    app_name: str = "Inkpress"
    app_version: str = "0.1.0"
    environment: Literal["development", "production", "testing"] = "development"
    debug: bool = False
    api_prefix: str = "/api/v1"

    # Server Settings
    host: str = "0.0.0.0"
    port: int = 8000

    # Database Settings
    database_url: str = "sqlite+aiosqlite:///./data/inkpress.db"
    db_echo: bool = False

    # Security Settings
    secret_key: str = Field(
        ...,
        description="Secret key for access token signing (at least 32 characters)",
    )
    access_token_lifetime: str = Field(
        default="7d",
        description="Access token lifetime as a duration string, e.g. '15m' or '7d'",
    )
    refresh_token_expire_days: int = Field(default=30, ge=1)

    # Password hashing (Argon2id)
    password_hash_cost: int = Field(default=12, description="Argon2 time cost (iterations)")
    password_hash_memory_kib: int = 19456
    password_hash_parallelism: int = 1

    # CORS Settings
    cors_origins: Annotated[list[str], NoDecode] = Field(
        default=["http://localhost:3000", "http://localhost:5173"]
    )
    cors_allow_credentials: bool = True

    # Logging Settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: str | list[str]) -> list[str]:
        """Parse CORS origins from a JSON list, comma-separated string or list."""
        if isinstance(v, str):
            if v.strip().startswith("["):
                return json.loads(v)
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, v: str) -> str:
        """Fail closed on short or placeholder signing secrets."""
        if len(v) < MIN_SECRET_KEY_LENGTH:
            raise ValueError(
                f"secret_key must be at least {MIN_SECRET_KEY_LENGTH} characters"
            )
        if v.lower() in _PLACEHOLDER_SECRETS or "change-me" in v.lower():
            raise ValueError("secret_key must not be a placeholder value")
        return v

    @field_validator("access_token_lifetime")
    @classmethod
    def validate_access_token_lifetime(cls, v: str) -> str:
        """Reject lifetimes that do not parse as a duration."""
        parse_duration(v)
        return v

    @model_validator(mode="after")
    def validate_hash_parameters(self) -> "Settings":
        """Validate Argon2 parameters against the library's lower bounds."""
        if self.password_hash_cost < 1:
            raise ValueError("password_hash_cost must be at least 1")
        if self.password_hash_parallelism < 1:
            raise ValueError("password_hash_parallelism must be at least 1")
        if self.password_hash_memory_kib < 8 * self.password_hash_parallelism:
            raise ValueError(
                "password_hash_memory_kib must be at least 8 * password_hash_parallelism"
            )
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment == "testing"

    @property
    def database_url_sync(self) -> str:
        """Get synchronous database URL for migrations."""
        url = self.database_url
        if url.startswith("sqlite+aiosqlite"):
            return url.replace("sqlite+aiosqlite", "sqlite")
        if url.startswith("postgresql+asyncpg"):
            return url.replace("postgresql+asyncpg", "postgresql")
        return url


@dataclass(frozen=True)
class AuthConfig:
    """Immutable authentication configuration.

    Built once from :class:`Settings` and handed to the credential hasher,
    token issuer/verifier and session store. Nothing in the auth core reads
    settings on its own.
    """

    secret_key: str
    access_token_lifetime: timedelta
    refresh_token_lifetime: timedelta
    hash_time_cost: int = 12
    hash_memory_kib: int = 19456
    hash_parallelism: int = 1
    algorithm: str = "HS256"
    issuer: str = "inkpress"

    @classmethod
    def from_settings(cls, settings: Settings) -> "AuthConfig":
        """Build the auth configuration from application settings."""
        return cls(
            secret_key=settings.secret_key,
            access_token_lifetime=parse_duration(settings.access_token_lifetime),
            refresh_token_lifetime=timedelta(days=settings.refresh_token_expire_days),
            hash_time_cost=settings.password_hash_cost,
            hash_memory_kib=settings.password_hash_memory_kib,
            hash_parallelism=settings.password_hash_parallelism,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    This function caches the settings instance to avoid reloading
    configuration on every call. Settings are loaded once at startup.

    Returns:
        Settings: Cached application settings instance.
    """
    return Settings()


@lru_cache
def get_auth_config() -> AuthConfig:
    """Get the cached auth configuration derived from settings."""
    return AuthConfig.from_settings(get_settings())
