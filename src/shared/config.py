"""Configuration for the web search server host process.

Supports a YAML configuration file and environment variable overrides.
Only the host surface reads settings; search defaults are fixed in
``websearch_server.constants``.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseSettings):
    """HTTP listener configuration."""
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8080, gt=0, lt=65536)

    model_config = SettingsConfigDict(
        env_prefix="WEBSEARCH_SERVER_",
        env_file=".env",
        extra="ignore"
    )


class Settings(BaseSettings):
    """Main application settings."""
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")

    server: ServerSettings = Field(default_factory=ServerSettings)

    model_config = SettingsConfigDict(
        env_prefix="WEBSEARCH_",
        env_file=".env",
        extra="ignore"
    )

    @property
    def json_logs(self) -> bool:
        return self.environment == "production"

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file, falling back to defaults."""
        return cls(**load_yaml_config(path))


def load_yaml_config(path: str | Path) -> dict[str, Any]:
    """Load a YAML configuration file."""
    path = Path(path)
    if not path.exists():
        return {}

    with open(path) as f:
        return yaml.safe_load(f) or {}


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    config_path = os.environ.get("WEBSEARCH_CONFIG_PATH", "config/settings.yaml")
    return Settings.from_yaml(config_path)
