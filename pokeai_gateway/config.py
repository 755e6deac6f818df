"""
Gateway configuration.

Settings are read once from the environment (and an optional .env file).
The core never touches them directly: it receives a GatewayConfig built
from them, so tests can pass fake credentials.
"""
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Service settings from environment variables."""

    # Server
    host: str = "0.0.0.0"
    port: int = 8787

    # Upstream LLM credentials - either may be missing
    openai_api_key: Optional[str] = None
    deepseek_api_key: Optional[str] = None
    default_model: Optional[str] = None
    llm_temperature: float = 0.7
    upstream_timeout: float = 120.0  # LLM calls can be slow

    # Pokemon data source
    pokeapi_base_url: str = "https://pokeapi.co/api/v2"

    # Deployment tag, e.g. "production"
    environment: Optional[str] = None

    # Logging
    log_level: str = "info"
    log_path: str = ""  # e.g. /app/logs/gateway.log

    # Version
    version: str = "1.0.0"

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("openai_api_key", "deepseek_api_key", "default_model", "environment")
    @classmethod
    def _blank_is_absent(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        return value or None


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


@dataclass(frozen=True)
class GatewayConfig:
    """Read-only context threaded through providers, coordinator and resolvers."""
    openai_api_key: Optional[str] = None
    deepseek_api_key: Optional[str] = None
    default_model: Optional[str] = None
    environment: Optional[str] = None
    temperature: float = 0.7
    pokeapi_base_url: str = "https://pokeapi.co/api/v2"

    @classmethod
    def from_settings(cls, settings: Settings) -> "GatewayConfig":
        return cls(
            openai_api_key=settings.openai_api_key,
            deepseek_api_key=settings.deepseek_api_key,
            default_model=settings.default_model,
            environment=settings.environment,
            temperature=settings.llm_temperature,
            pokeapi_base_url=settings.pokeapi_base_url.rstrip("/"),
        )

    @property
    def has_openai(self) -> bool:
        return bool(self.openai_api_key)

    @property
    def has_deepseek(self) -> bool:
        return bool(self.deepseek_api_key)
