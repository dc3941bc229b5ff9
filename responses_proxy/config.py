"""
FastAPI application configuration module
"""

from functools import lru_cache
from typing import List

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from .schemas import PluginConfig

# Load .env and let it override the process environment, even when values are empty
load_dotenv(override=True)


def _default_plugins() -> List[PluginConfig]:
    return [PluginConfig(name="v1-responses", enabled=True)]


class Settings(BaseSettings):
    """Application settings"""

    # Server Configuration
    LISTEN_PORT: int = 3000

    # Upstream Configuration
    UPSTREAM_BASE_URL: str = "http://localhost:1234/v1"
    UPSTREAM_API_KEY_HEADER: str = "Authorization"
    UPSTREAM_API_KEY: str = ""
    UPSTREAM_HEALTH_CHECK_PATH: str = "/models"

    # Timeouts (seconds)
    REQUEST_TIMEOUT: float = 120.0
    HEALTH_CHECK_TIMEOUT: float = 5.0

    # Plugins, in dispatch order. JSON in the environment:
    # PLUGINS='[{"name": "v1-responses", "enabled": true}]'
    PLUGINS: List[PluginConfig] = Field(default_factory=_default_plugins)

    # Logging Configuration - three levels: false, info, debug
    LOG_LEVEL: str = "info"
    LOG_FORMAT: str = "pretty"

    @field_validator("UPSTREAM_BASE_URL")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("LOG_LEVEL")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        value = (value or "").lower()
        return value if value in ["false", "info", "debug"] else "info"

    @field_validator("LOG_FORMAT")
    @classmethod
    def _normalize_log_format(cls, value: str) -> str:
        value = (value or "").lower()
        return value if value in ["pretty", "json"] else "pretty"

    def auth_headers(self) -> dict:
        """Credential header sent to the upstream, empty when no key is configured."""
        if not self.UPSTREAM_API_KEY:
            return {}
        return {self.UPSTREAM_API_KEY_HEADER: f"Bearer {self.UPSTREAM_API_KEY}"}

    def enabled_plugins(self) -> List[PluginConfig]:
        return [plugin for plugin in self.PLUGINS if plugin.enabled]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
