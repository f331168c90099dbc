"""
Retry schedules for per-chunk translation attempts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from doc_translate_ai.config import ProcessingConfig, RetryStrategy


class RetryPolicy(Protocol):
    """How many attempts a chunk gets and how long to wait between them."""

    max_attempts: int

    def delay_for(self, attempt: int) -> float:
        """Seconds to wait after failed attempt number ``attempt`` (1-based)."""
        ...


@dataclass(frozen=True)
class FixedDelayRetry:
    """Constant delay between attempts (main chunked pipeline)."""

    max_attempts: int = 3
    delay: float = 5.0

    def delay_for(self, attempt: int) -> float:
        return self.delay


@dataclass(frozen=True)
class ExponentialBackoffRetry:
    """Doubling delay between attempts: base * 2**attempt (2s, 4s, ... for base 1s)."""

    max_attempts: int = 3
    base_delay: float = 1.0

    def delay_for(self, attempt: int) -> float:
        return self.base_delay * (2**attempt)


def create_retry_policy(
    strategy: RetryStrategy | str,
    *,
    max_attempts: int = 3,
    delay: float = 5.0,
) -> RetryPolicy:
    """
    Create a retry policy.

    Args:
        strategy: "fixed" or "exponential".
        max_attempts: Total attempts per chunk (>= 1).
        delay: Fixed delay, or base delay for exponential backoff, in seconds.

    Raises:
        ValueError: If the strategy is unknown or max_attempts < 1.
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")

    if isinstance(strategy, str):
        try:
            strategy = RetryStrategy(strategy.lower())
        except ValueError:
            valid = [s.value for s in RetryStrategy]
            raise ValueError(
                f"Invalid retry strategy: {strategy}. Valid options: {valid}"
            ) from None

    if strategy == RetryStrategy.EXPONENTIAL:
        return ExponentialBackoffRetry(max_attempts=max_attempts, base_delay=delay)
    return FixedDelayRetry(max_attempts=max_attempts, delay=delay)


def retry_policy_from_config(config: ProcessingConfig) -> RetryPolicy:
    return create_retry_policy(
        config.retry_strategy,
        max_attempts=config.max_retries,
        delay=config.retry_delay,
    )
