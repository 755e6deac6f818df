"""
Provider selection with a single fallback.

call_ai() sends a conversation to the preferred provider. If that fails
for any reason and the other provider has a credential, it retries once
there with the other provider's default model. A failure of the fallback
propagates as-is.
"""
import logging
from typing import Optional, Sequence

import httpx

from .base import Message, ProviderId, ProviderResult
from .factory import api_key_for, get_llm_provider
from ..config import GatewayConfig
from ..errors import ProviderError
from ..stats import get_llm_stats

logger = logging.getLogger(__name__)


def resolve_model(provider: ProviderId, model: Optional[str], config: GatewayConfig) -> str:
    """
    Effective model for a request: explicit override, else the provider default.

    For OpenAI the configured DEFAULT_MODEL takes precedence over the
    built-in "gpt-3.5-turbo".
    """
    if model:
        return model
    if provider is ProviderId.OPENAI:
        return config.default_model or "gpt-3.5-turbo"
    return "deepseek-chat"


async def call_ai(
    messages: Sequence[Message],
    config: GatewayConfig,
    http: httpx.AsyncClient,
    provider: ProviderId = ProviderId.OPENAI,
    model: Optional[str] = None,
) -> ProviderResult:
    """
    Run a chat completion, falling back to the other provider on failure.

    The returned ProviderResult names the provider and model that actually
    answered, which may differ from the ones requested.
    """
    primary = get_llm_provider(provider, http, config)

    try:
        return await primary.send_chat(
            messages,
            api_key_for(provider, config),
            resolve_model(provider, model, config),
        )
    except ProviderError as e:
        fallback = provider.other
        fallback_key = api_key_for(fallback, config)
        if not fallback_key:
            raise

        logger.warning(
            "%s failed (%s), falling back to %s",
            primary.display_name, e, fallback.value
        )
        get_llm_stats().record_fallback(provider.value, fallback.value)

    backup = get_llm_provider(fallback, http, config)
    return await backup.send_chat(messages, fallback_key, backup.default_model)
