"""
Configuration settings for the Student DBMS.

Uses Pydantic Settings to load environment variables for the snapshot location,
snapshot write retries, and logging. Values can also come from a local `.env`.
"""
from __future__ import annotations

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Persistence
    snapshot_path: str = Field("student_dbms.snapshot", alias="SNAPSHOT_PATH")
    snapshot_write_attempts: int = Field(3, ge=1, alias="SNAPSHOT_WRITE_ATTEMPTS")

    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("WARNING", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
