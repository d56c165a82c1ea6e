from __future__ import annotations

from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application runtime configuration."""

    app_name: str = Field(default="soundscape-backend", alias="APP_NAME")
    allow_origins_raw: str | None = Field(default=None, alias="ALLOW_ORIGINS")
    freesound_api_key: str | None = Field(default=None, alias="FREESOUND_API_KEY")
    freesound_base_url: str = Field(default="https://freesound.org/apiv2", alias="FREESOUND_BASE_URL")
    freesound_timeout: float = Field(default=30.0, alias="FREESOUND_TIMEOUT")
    max_duration_seconds: int = Field(default=600, alias="MAX_DURATION_SECONDS")
    default_duration_seconds: int = Field(default=30, alias="DEFAULT_DURATION_SECONDS")
    default_volume: float = Field(default=0.7, alias="DEFAULT_VOLUME")
    stream_chunk_ms: int = Field(default=5000, alias="STREAM_CHUNK_MS")
    stream_pace_ms: int = Field(default=100, alias="STREAM_PACE_MS")
    default_stream_duration_ms: int = Field(default=300000, alias="DEFAULT_STREAM_DURATION_MS")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", case_sensitive=False)

    @property
    def allow_origins(self) -> List[str]:
        if not self.allow_origins_raw:
            return ["http://localhost:3000", "http://127.0.0.1:3000"]
        return [origin.strip() for origin in self.allow_origins_raw.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
