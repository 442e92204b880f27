"""Configuration management for the application."""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Remote school API
    calendar_api_url: str = Field(default="http://localhost:3001")
    calendar_api_token: str | None = Field(default=None)
    request_timeout: float = Field(default=10.0)

    # Logged-in user (resolved by the auth layer in front of this service)
    viewer_id: int | None = Field(default=None)
    viewer_role: str = Field(default="student")

    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")

    @property
    def is_admin(self) -> bool:
        return self.viewer_role == "admin"


class AppConfig:
    """Application configuration loaded from config.yaml."""

    def __init__(self, config_path: Path | None = None) -> None:
        if config_path is None:
            config_path = Path("config.yaml")

        self._config: dict[str, Any] = {}
        if config_path.exists():
            with open(config_path) as f:
                self._config = yaml.safe_load(f) or {}

    @property
    def calendar(self) -> dict[str, Any]:
        """Calendar screen configuration."""
        defaults = {
            "default_event_type": "Meeting",
            "max_event_dots": 3,
        }
        return {**defaults, **self._config.get("calendar", {})}

    @property
    def server(self) -> dict[str, Any]:
        """Server configuration."""
        return self._config.get(
            "server",
            {
                "host": "0.0.0.0",
                "port": 8000,
            },
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


@lru_cache
def get_app_config() -> AppConfig:
    """Get cached app config instance."""
    return AppConfig()
