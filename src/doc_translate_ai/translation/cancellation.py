"""
Cooperative cancellation for a translation run.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

from doc_translate_ai.errors import TranslationCancelledError

SleepFunc = Callable[[float], Awaitable[None]]


class CancellationToken:
    """
    Cancellation signal shared between a caller and one running translation.

    The pipeline checks it before each chunk and attempt, between streamed
    fragments, and while waiting out retry or pacing delays.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise TranslationCancelledError()

    async def sleep(self, seconds: float) -> None:
        """Sleep, waking early (and raising) if cancelled meanwhile."""
        self.raise_if_cancelled()
        if seconds <= 0:
            return
        try:
            await asyncio.wait_for(self._event.wait(), timeout=seconds)
        except asyncio.TimeoutError:
            return
        self.raise_if_cancelled()


async def pause(
    seconds: float,
    cancel_token: CancellationToken | None = None,
    sleep: SleepFunc | None = None,
) -> None:
    """
    Wait between attempts or chunks.

    An explicit ``sleep`` wins (tests inject one); otherwise the token's
    interruptible sleep is used when a token is given.
    """
    if sleep is not None:
        if cancel_token is not None:
            cancel_token.raise_if_cancelled()
        await sleep(seconds)
        if cancel_token is not None:
            cancel_token.raise_if_cancelled()
    elif cancel_token is not None:
        await cancel_token.sleep(seconds)
    elif seconds > 0:
        await asyncio.sleep(seconds)
