"""
Performance and error tracking for upstream LLM calls.
"""
import logging
import time
from collections import Counter, deque
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass
class LLMCallRecord:
    """Record of a single provider call."""
    timestamp: float
    provider: str
    latency_ms: int
    success: bool
    tokens_used: Optional[int] = None
    error: Optional[str] = None


class LLMStats:
    """Tracks provider call statistics. Observability only."""

    def __init__(self, max_history: int = 1000):
        self._calls: deque[LLMCallRecord] = deque(maxlen=max_history)
        self._total_calls: int = 0
        self._total_failures: int = 0
        self._total_tokens: int = 0
        self._total_fallbacks: int = 0
        self._calls_by_provider: Counter = Counter()
        self._failures_by_provider: Counter = Counter()

    def record_success(self, provider: str, latency_ms: int, tokens: Optional[int] = None):
        """Record a successful provider call."""
        self._calls.append(LLMCallRecord(
            timestamp=time.time(),
            provider=provider,
            latency_ms=latency_ms,
            success=True,
            tokens_used=tokens,
        ))
        self._total_calls += 1
        self._calls_by_provider[provider] += 1
        if tokens:
            self._total_tokens += tokens

    def record_failure(self, provider: str, latency_ms: int, error: str):
        """Record a failed provider call."""
        self._calls.append(LLMCallRecord(
            timestamp=time.time(),
            provider=provider,
            latency_ms=latency_ms,
            success=False,
            error=error,
        ))
        self._total_calls += 1
        self._total_failures += 1
        self._calls_by_provider[provider] += 1
        self._failures_by_provider[provider] += 1

        logger.warning(
            "LLM call failed: provider=%s, latency=%dms, error=%s",
            provider, latency_ms, error
        )

    def record_fallback(self, from_provider: str, to_provider: str):
        """Record that a request was retried on the other provider."""
        self._total_fallbacks += 1
        logger.debug("Fallback recorded: %s -> %s", from_provider, to_provider)

    def get_summary(self) -> dict:
        """Get a summary of provider call statistics."""
        summary = {
            "total_calls": self._total_calls,
            "total_failures": self._total_failures,
            "total_fallbacks": self._total_fallbacks,
            "failure_rate": 0.0,
            "avg_latency_ms": 0,
            "max_latency_ms": 0,
            "min_latency_ms": 0,
            "p95_latency_ms": 0,
            "total_tokens": self._total_tokens,
            "by_provider": {
                provider: {
                    "calls": calls,
                    "failures": self._failures_by_provider.get(provider, 0),
                }
                for provider, calls in self._calls_by_provider.items()
            },
            "recent_errors": [],
        }
        if not self._calls:
            return summary

        latencies = [c.latency_ms for c in self._calls]
        sorted_latencies = sorted(latencies)

        # P95 latency
        p95_idx = int(len(sorted_latencies) * 0.95)

        summary.update({
            "failure_rate": round(self._total_failures / self._total_calls * 100, 2),
            "avg_latency_ms": round(sum(latencies) / len(latencies)),
            "max_latency_ms": max(latencies),
            "min_latency_ms": min(latencies),
            "p95_latency_ms": sorted_latencies[min(p95_idx, len(sorted_latencies) - 1)],
            # Last 5 errors, newest first
            "recent_errors": [
                {
                    "timestamp": c.timestamp,
                    "provider": c.provider,
                    "error": c.error,
                    "latency_ms": c.latency_ms,
                }
                for c in reversed(self._calls)
                if not c.success
            ][:5],
        })
        return summary


# Global stats instance
_llm_stats: Optional[LLMStats] = None


def get_llm_stats() -> LLMStats:
    """Get the global LLM stats tracker."""
    global _llm_stats
    if _llm_stats is None:
        _llm_stats = LLMStats()
    return _llm_stats


def reset_llm_stats() -> None:
    """Drop all recorded statistics."""
    global _llm_stats
    _llm_stats = None
