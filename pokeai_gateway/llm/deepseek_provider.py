"""
DeepSeek implementation of the LLM provider.

DeepSeek exposes an OpenAI-compatible endpoint. Its error bodies are not
inspected for quota markers: every non-2xx status is a plain UpstreamError.
"""
from .base import LLMProvider, ProviderId


class DeepSeekProvider(LLMProvider):
    """DeepSeek chat completions."""

    provider_id = ProviderId.DEEPSEEK
    display_name = "DeepSeek"
    endpoint = "https://api.deepseek.com/v1/chat/completions"
    default_model = "deepseek-chat"
