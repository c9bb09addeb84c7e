from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="TED_",
        case_sensitive=False,
    )

    env: str = Field(default="development")
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")

    listen_host: str = Field(default="0.0.0.0", min_length=1)
    listen_port: int = Field(default=9191, ge=1, le=65535)
    metrics_path: str = Field(default="/metrics", min_length=2, max_length=128)

    post_rate_minutes: int = Field(default=1, ge=1, le=60 * 24)
    strict_post_errors: bool = Field(default=False)

    @field_validator("metrics_path")
    @classmethod
    def _metrics_path_is_absolute(cls, v: str) -> str:
        if not v.startswith("/"):
            raise ValueError("metrics_path must start with '/'")
        return v.rstrip("/") or "/"

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, v: str) -> str:
        return v.upper()

    @property
    def is_production(self) -> bool:
        return self.env.lower() == "production"


def load_settings() -> Settings:
    return Settings()
