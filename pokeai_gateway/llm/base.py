"""
Abstract base class for the upstream chat-completion providers.

Both providers speak the same wire protocol (POST {model, messages,
temperature} with a bearer token, answer with a "choices" array), so the
request/response handling lives here. Subclasses set their identity,
endpoint and default model, and whether error bodies are checked for a
quota-exhaustion marker.
"""
import enum
import json
import logging
import time
from abc import ABC
from dataclasses import dataclass, field
from typing import Any, Literal, Optional, Sequence

import httpx

from ..errors import MissingCredential, ProviderConnectionError, QuotaExceeded, UpstreamError
from ..stats import get_llm_stats

logger = logging.getLogger(__name__)

NO_RESPONSE = "No response"


def _token_count(value: Any) -> int:
    """Token counts that are not whole numbers are reported as 0."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return 0


class ProviderId(str, enum.Enum):
    """Which upstream answered (or should answer) a request."""
    OPENAI = "openai"
    DEEPSEEK = "deepseek"

    @classmethod
    def parse(cls, value: Optional[str]) -> "ProviderId":
        """Parse a client-supplied provider name; None means the default (openai)."""
        if value is None:
            return cls.OPENAI
        try:
            return cls(value.strip().lower())
        except ValueError:
            supported = ", ".join(p.value for p in cls)
            raise ValueError(f"Unknown provider: {value}. Supported providers: {supported}") from None

    @property
    def other(self) -> "ProviderId":
        return ProviderId.DEEPSEEK if self is ProviderId.OPENAI else ProviderId.OPENAI


@dataclass(frozen=True)
class Message:
    """A single message in a conversation."""
    role: Literal["system", "user", "assistant"]
    content: str

    def to_dict(self) -> dict:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class Usage:
    """Token accounting as reported by the upstream."""
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    @classmethod
    def from_payload(cls, payload: Any) -> Optional["Usage"]:
        if not isinstance(payload, dict):
            return None
        return cls(
            prompt_tokens=_token_count(payload.get("prompt_tokens")),
            completion_tokens=_token_count(payload.get("completion_tokens")),
            total_tokens=_token_count(payload.get("total_tokens")),
        )


@dataclass(frozen=True)
class ProviderResult:
    """Normalized result of one chat completion."""
    content: str
    provider: ProviderId
    model: str
    usage: Optional[Usage] = None
    latency_ms: Optional[int] = field(default=None, compare=False)


class LLMProvider(ABC):
    """
    One upstream chat-completion API.

    Implementations set:
        provider_id    - ProviderId of the upstream
        display_name   - human readable name used in error messages
        endpoint       - fixed chat-completions URL
        default_model  - model used when the caller does not pick one
    """

    provider_id: ProviderId
    display_name: str
    endpoint: str
    default_model: str

    # Whether error bodies are inspected for a quota-exhaustion marker
    detects_quota: bool = False

    def __init__(self, http: httpx.AsyncClient, temperature: float = 0.7):
        self._http = http
        self._temperature = temperature

    async def send_chat(
        self,
        messages: Sequence[Message],
        api_key: Optional[str],
        model: Optional[str] = None,
    ) -> ProviderResult:
        """
        Perform one chat completion.

        Args:
            messages: Conversation, usually an optional system message plus one user message
            api_key: Bearer token for the upstream; None or "" fails before any request
            model: Model identifier, defaults to the provider's default model

        Returns:
            ProviderResult. Missing content becomes "No response"; missing
            usage is left as None for the caller to fill in.

        Raises:
            MissingCredential, UpstreamError (or a subclass), ProviderConnectionError
        """
        if not api_key:
            raise MissingCredential(self.display_name)

        model = model or self.default_model
        payload = {
            "model": model,
            "messages": [m.to_dict() for m in messages],
            "temperature": self._temperature,
        }
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {api_key}",
        }

        logger.debug(
            "%s request: model=%s, messages=%d",
            self.display_name, model, len(messages)
        )

        stats = get_llm_stats()
        start_time = time.time()

        try:
            response = await self._http.post(self.endpoint, json=payload, headers=headers)
        except httpx.HTTPError as e:
            latency_ms = int((time.time() - start_time) * 1000)
            stats.record_failure(self.provider_id.value, latency_ms, str(e))
            logger.error("%s request failed after %dms: %s", self.display_name, latency_ms, e)
            raise ProviderConnectionError(self.display_name, e) from e

        latency_ms = int((time.time() - start_time) * 1000)

        if not response.is_success:
            error = self.error_for(response)
            stats.record_failure(self.provider_id.value, latency_ms, str(error))
            logger.error(
                "%s API error: status=%d body=%s",
                self.display_name, response.status_code, response.text[:500]
            )
            raise error

        try:
            data = response.json()
        except json.JSONDecodeError as e:
            stats.record_failure(self.provider_id.value, latency_ms, str(e))
            logger.error("%s returned a non-JSON body: %s", self.display_name, response.text[:200])
            raise UpstreamError(self.display_name, response.status_code, response.text) from e

        try:
            result = ProviderResult(
                content=self.extract_content(data),
                provider=self.provider_id,
                model=model,
                usage=Usage.from_payload(data.get("usage") if isinstance(data, dict) else None),
                latency_ms=latency_ms,
            )
        except (AttributeError, TypeError, ValueError) as e:
            stats.record_failure(self.provider_id.value, latency_ms, str(e))
            logger.error("%s returned an unusable body: %s", self.display_name, response.text[:200])
            raise UpstreamError(self.display_name, response.status_code, response.text) from e

        tokens_used = result.usage.total_tokens if result.usage else None
        stats.record_success(self.provider_id.value, latency_ms, tokens_used)
        logger.debug(
            "%s response: latency=%dms, tokens=%s, content_len=%d",
            self.display_name, latency_ms, tokens_used, len(result.content)
        )
        return result

    @staticmethod
    def extract_content(data: Any) -> str:
        """Return choices[0].message.content, or "No response" when any part is missing."""
        if not isinstance(data, dict):
            return NO_RESPONSE
        choices = data.get("choices")
        if not isinstance(choices, list) or not choices:
            return NO_RESPONSE
        first = choices[0]
        message = first.get("message") if isinstance(first, dict) else None
        content = message.get("content") if isinstance(message, dict) else None
        if not isinstance(content, str) or not content:
            return NO_RESPONSE
        return content

    def error_for(self, response: httpx.Response) -> UpstreamError:
        """
        Map a non-2xx response to an exception.

        Only providers with detects_quota set look for the
        error.type == "insufficient_quota" marker; the rest always raise a
        generic UpstreamError.
        """
        if self.detects_quota and _is_quota_error(response):
            return QuotaExceeded(self.display_name, response.status_code, response.text)
        return UpstreamError(self.display_name, response.status_code, response.text)


def _is_quota_error(response: httpx.Response) -> bool:
    try:
        data = response.json()
    except json.JSONDecodeError:
        return False
    error = data.get("error") if isinstance(data, dict) else None
    return isinstance(error, dict) and error.get("type") == "insufficient_quota"
