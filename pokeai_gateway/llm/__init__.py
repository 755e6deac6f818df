"""
Upstream LLM providers and the fallback coordinator.
"""
from .base import LLMProvider, Message, ProviderId, ProviderResult, Usage
from .coordinator import call_ai, resolve_model
from .factory import api_key_for, get_llm_provider

__all__ = [
    "LLMProvider",
    "Message",
    "ProviderId",
    "ProviderResult",
    "Usage",
    "call_ai",
    "resolve_model",
    "api_key_for",
    "get_llm_provider",
]
