"""
PokeAI Gateway - GraphQL over two interchangeable LLM providers and PokeAPI.
"""
from .config import GatewayConfig, Settings, get_settings
from .errors import (
    DownstreamDataError,
    GatewayError,
    MissingCredential,
    ProviderConnectionError,
    ProviderError,
    QuotaExceeded,
    ResolverError,
    UpstreamError,
)

__all__ = [
    "GatewayConfig",
    "Settings",
    "get_settings",
    "DownstreamDataError",
    "GatewayError",
    "MissingCredential",
    "ProviderConnectionError",
    "ProviderError",
    "QuotaExceeded",
    "ResolverError",
    "UpstreamError",
]
