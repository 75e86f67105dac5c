"""Runtime configuration based on environment variables."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AnyHttpUrl, BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ApiSettings(BaseModel):
    base_url: AnyHttpUrl = Field(
        default="http://localhost:3000/api",
        description="Root of the search backend; /search and /artist/{id} hang off it.",
    )
    request_timeout_seconds: float | None = Field(default=10.0, gt=0, le=600)
    user_agent: str = "ArtistExplorer/0.1"


class SessionSettings(BaseModel):
    debounce_seconds: float = Field(default=0.3, ge=0)
    min_query_length: int = Field(default=2, ge=1)
    search_limit: int = Field(default=20, ge=1, le=100)
    suggestion_display_limit: int = Field(default=8, ge=1)


class ExplorerSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="EXPLORER_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    environment: Literal["dev", "staging", "prod"] = "dev"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    api: ApiSettings = Field(default_factory=ApiSettings)
    session: SessionSettings = Field(default_factory=SessionSettings)


@lru_cache
def get_settings() -> ExplorerSettings:
    """Return cached settings instance."""

    return ExplorerSettings()


__all__ = [
    "ApiSettings",
    "ExplorerSettings",
    "SessionSettings",
    "get_settings",
]
