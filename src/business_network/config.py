# ABOUTME: Configuration module for application settings.
# ABOUTME: Uses pydantic-settings for environment variable overrides and provides cached access.

from functools import lru_cache
from pathlib import Path
from typing import Annotated, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support.

    All settings can be overridden via environment variables with the
    BUSINESS_NETWORK_ prefix (e.g., BUSINESS_NETWORK_DB_PATH).
    """

    model_config = SettingsConfigDict(
        env_prefix="BUSINESS_NETWORK_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    db_path: Annotated[Path, Field(description="Path to SQLite database file")] = (
        Path.home() / ".business-network" / "data.db"
    )

    accounts_file: Annotated[Path, Field(description="Path to local accounts JSON file")] = (
        Path.home() / ".business-network" / "accounts.json"
    )

    log_level: Annotated[str, Field(description="Root log level")] = "WARNING"

    log_format: Annotated[
        Literal["console", "json"], Field(description="Log renderer: console or json")
    ] = "console"

    directory_lookup_workers: Annotated[
        int, Field(description="Threads used for directory status lookups", ge=1)
    ] = 8

    min_password_length: Annotated[
        int, Field(description="Minimum password length at registration", ge=1)
    ] = 6

    password_hash_iterations: Annotated[
        int, Field(description="PBKDF2 iterations for password hashes", ge=1)
    ] = 200_000


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings.

    Returns a cached Settings instance. Use get_settings.cache_clear()
    to clear the cache if needed.

    Returns:
        Cached Settings instance.
    """
    return Settings()
