"""
Error taxonomy for the gateway.

ProviderError covers everything a Provider Client can raise; the
coordinator falls back on any of them. DownstreamDataError belongs to the
Pokemon data source. ResolverError is what reaches GraphQL clients.
"""
from typing import Optional


class GatewayError(Exception):
    """Base class for all gateway errors."""


class ProviderError(GatewayError):
    """A Provider Client could not produce a result."""

    def __init__(self, provider: str, message: str):
        self.provider = provider
        super().__init__(message)


class MissingCredential(ProviderError):
    """No API key is configured for the provider."""

    def __init__(self, provider: str):
        super().__init__(provider, f"{provider} API key is not configured")


class UpstreamError(ProviderError):
    """The provider answered with a non-2xx status (or an unreadable body)."""

    def __init__(self, provider: str, status: int, body: str, message: Optional[str] = None):
        self.status = status
        self.body = body
        super().__init__(provider, message or f"{provider} API error: {status} {body}")


class QuotaExceeded(UpstreamError):
    """The provider account has run out of balance."""

    def __init__(self, provider: str, status: int, body: str):
        super().__init__(
            provider,
            status,
            body,
            message=f"{provider} account balance is insufficient, please top up and try again",
        )


class ProviderConnectionError(ProviderError):
    """The request never got an HTTP response (DNS, connect, read errors)."""

    def __init__(self, provider: str, cause: Exception):
        self.cause = cause
        super().__init__(provider, f"{provider} request failed: {cause}")


class DownstreamDataError(GatewayError):
    """The Pokemon data source failed or returned something unusable."""

    def __init__(self, identifier: str, message: str, status: Optional[int] = None):
        self.identifier = identifier
        self.status = status
        super().__init__(message)


class ResolverError(GatewayError):
    """An unrecovered failure, prefixed with the operation that hit it."""

    def __init__(self, operation: str, cause: Exception):
        self.operation = operation
        self.cause = cause
        super().__init__(f"{operation}: {cause}")
