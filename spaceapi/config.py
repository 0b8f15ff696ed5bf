"""Process-wide settings, read from the environment and an optional ``.env`` file."""
from __future__ import annotations

from functools import lru_cache
from typing import List, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SPACEAPI_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "SpaceAPI Endpoint"
    auth_key: Optional[str] = None
    data_file: str = "spaceapi.json"
    host: str = "0.0.0.0"
    port: int = Field(default=8080, validation_alias=AliasChoices("PORT", "SPACEAPI_PORT"))
    cleanup_enabled: bool = True
    trusted_proxies: List[str] = Field(default_factory=list)
    log_level: str = "INFO"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
