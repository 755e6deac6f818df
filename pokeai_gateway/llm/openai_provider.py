"""
OpenAI implementation of the LLM provider.

OpenAI flags an exhausted balance with error.type == "insufficient_quota";
such responses raise QuotaExceeded instead of a generic UpstreamError.
"""
from .base import LLMProvider, ProviderId


class OpenAIProvider(LLMProvider):
    """OpenAI chat completions."""

    provider_id = ProviderId.OPENAI
    display_name = "OpenAI"
    endpoint = "https://api.openai.com/v1/chat/completions"
    default_model = "gpt-3.5-turbo"
    detects_quota = True
