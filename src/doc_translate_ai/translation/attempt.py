"""
Bounded-retry translation of a single chunk.

State machine per chunk:

    PENDING -> ATTEMPTING -> SUCCEEDED_NON_EMPTY
                          -> SUCCEEDED_EMPTY        (no retry)
                          -> RETRY_SCHEDULED -> ATTEMPTING ...
                          -> EXHAUSTED_FAILURE      (after max_attempts)

Upstream exceptions never escape this module; they become a FAILED result.
Cancellation is the only error that propagates.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from doc_translate_ai.documents import ChunkPayload
from doc_translate_ai.errors import TranslationCancelledError
from doc_translate_ai.llm.base import LLMProvider
from doc_translate_ai.translation.cancellation import CancellationToken, SleepFunc, pause
from doc_translate_ai.translation.retry import FixedDelayRetry, RetryPolicy
from doc_translate_ai.translation.splitter import ChunkSpec

# (level, message, context)
LogCallback = Callable[[str, str, dict[str, Any]], None] | None


class ChunkStatus(str, Enum):
    """Final classification of a chunk."""

    SUCCESS = "success"
    EMPTY = "empty"
    FAILED = "failed"


class AttemptState(str, Enum):
    """States of the per-chunk attempt loop."""

    PENDING = "pending"
    ATTEMPTING = "attempting"
    RETRY_SCHEDULED = "retry_scheduled"
    SUCCEEDED_NON_EMPTY = "succeeded_non_empty"
    SUCCEEDED_EMPTY = "succeeded_empty"
    EXHAUSTED_FAILURE = "exhausted_failure"


@dataclass(frozen=True)
class ChunkResult:
    """Outcome of translating one chunk."""

    spec: ChunkSpec
    status: ChunkStatus
    text: str = ""
    attempts: int = 0
    latency_ms: float = 0.0
    error: str | None = None
    last_exception: BaseException | None = field(default=None, repr=False, compare=False)


class TranslationAttempt:
    """
    Runs the attempt loop for one chunk against an LLM provider.

    Fragments of a streamed response are joined only after the stream has
    finished; an interrupted stream counts as a failed attempt, never as a
    truncated result.
    """

    def __init__(
        self,
        provider: LLMProvider,
        retry_policy: RetryPolicy | None = None,
        *,
        temperature: float = 0.3,
        max_tokens: int = 32000,
        sleep: SleepFunc | None = None,
        log_callback: LogCallback = None,
    ):
        """
        Args:
            provider: Translation backend.
            retry_policy: Attempt budget and delays (default: 3 attempts, 5s apart).
            temperature: Sampling temperature forwarded to the provider.
            max_tokens: Output token limit forwarded to the provider.
            sleep: Replacement for the delay coroutine.
            log_callback: Optional callback accepting (level, message, context).
        """
        self._provider = provider
        self._retry_policy = retry_policy or FixedDelayRetry()
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._sleep = sleep
        self._log_callback = log_callback

    @property
    def retry_policy(self) -> RetryPolicy:
        return self._retry_policy

    def _log(self, level: str, message: str, context: dict[str, Any] | None = None) -> None:
        """Log a message via callback if available."""
        if self._log_callback:
            self._log_callback(level, message, context or {})

    async def run(
        self,
        spec: ChunkSpec,
        payload: ChunkPayload,
        instructions: str,
        cancel_token: CancellationToken | None = None,
    ) -> ChunkResult:
        """
        Translate one chunk, retrying failed calls.

        Args:
            spec: Chunk being translated.
            payload: Sub-document bytes for the chunk.
            instructions: Prompt text.
            cancel_token: Optional cancellation signal.

        Returns:
            ChunkResult classified SUCCESS, EMPTY or FAILED.

        Raises:
            TranslationCancelledError: If the run was cancelled.
        """
        max_attempts = self._retry_policy.max_attempts
        state = AttemptState.PENDING
        attempts = 0
        last_error: Exception | None = None
        start_time = time.perf_counter()

        while True:
            if cancel_token is not None:
                cancel_token.raise_if_cancelled()

            state = AttemptState.ATTEMPTING
            attempts += 1

            try:
                text = await self._call(payload, instructions, cancel_token)
            except TranslationCancelledError:
                raise
            except Exception as e:
                last_error = e
                self._log(
                    "WARNING",
                    f"Chunk {spec.index} ({spec.label}) attempt {attempts}/{max_attempts} failed: {e}",
                    {
                        "chunk": spec.index,
                        "attempt": attempts,
                        "error": str(e),
                        "error_type": type(e).__name__,
                    },
                )

                if attempts >= max_attempts:
                    state = AttemptState.EXHAUSTED_FAILURE
                    break

                state = AttemptState.RETRY_SCHEDULED
                delay = self._retry_policy.delay_for(attempts)
                self._log(
                    "INFO",
                    f"Retrying chunk {spec.index} in {delay:g}s",
                    {"chunk": spec.index, "attempt": attempts, "delay_seconds": delay},
                )
                await pause(delay, cancel_token, self._sleep)
                continue

            if text.strip():
                state = AttemptState.SUCCEEDED_NON_EMPTY
                text = text.strip()
            else:
                # Valid response with nothing to translate; retrying will not help
                state = AttemptState.SUCCEEDED_EMPTY
                text = ""
            break

        latency_ms = (time.perf_counter() - start_time) * 1000

        if state == AttemptState.EXHAUSTED_FAILURE:
            return ChunkResult(
                spec=spec,
                status=ChunkStatus.FAILED,
                attempts=attempts,
                latency_ms=latency_ms,
                error=str(last_error),
                last_exception=last_error,
            )

        status = ChunkStatus.SUCCESS if state == AttemptState.SUCCEEDED_NON_EMPTY else ChunkStatus.EMPTY
        return ChunkResult(
            spec=spec,
            status=status,
            text=text,
            attempts=attempts,
            latency_ms=latency_ms,
        )

    async def _call(
        self,
        payload: ChunkPayload,
        instructions: str,
        cancel_token: CancellationToken | None,
    ) -> str:
        parts: list[str] = []
        async for fragment in self._provider.stream_document(
            payload.data,
            payload.mime_type,
            instructions,
            temperature=self._temperature,
            max_tokens=self._max_tokens,
        ):
            if cancel_token is not None:
                cancel_token.raise_if_cancelled()
            parts.append(fragment)
        return "".join(parts)
