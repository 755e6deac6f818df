"""
Factory for creating LLM provider instances.
"""
from typing import Optional

import httpx

from .base import LLMProvider, ProviderId
from .deepseek_provider import DeepSeekProvider
from .openai_provider import OpenAIProvider
from ..config import GatewayConfig

_PROVIDERS: dict[ProviderId, type[LLMProvider]] = {
    ProviderId.OPENAI: OpenAIProvider,
    ProviderId.DEEPSEEK: DeepSeekProvider,
}


def get_llm_provider(provider: ProviderId, http: httpx.AsyncClient, config: GatewayConfig) -> LLMProvider:
    """Build the Provider Client for `provider` on top of a shared HTTP client."""
    return _PROVIDERS[provider](http, temperature=config.temperature)


def api_key_for(provider: ProviderId, config: GatewayConfig) -> Optional[str]:
    """Return the configured credential for `provider`, or None when absent."""
    if provider is ProviderId.OPENAI:
        return config.openai_api_key
    return config.deepseek_api_key
