"""Tests for the per-chunk attempt loop."""

import pytest
from conftest import BrokenStream, FakeProvider

from doc_translate_ai.documents import ChunkPayload
from doc_translate_ai.errors import TranslationCancelledError
from doc_translate_ai.translation import (
    CancellationToken,
    ChunkSpec,
    ChunkStatus,
    FixedDelayRetry,
    TranslationAttempt,
)
from doc_translate_ai.translation.retry import ExponentialBackoffRetry

SPEC = ChunkSpec(index=1, start_page=0, end_page=5)
PAYLOAD = ChunkPayload(data=b"%PDF", mime_type="application/pdf")


@pytest.mark.asyncio
async def test_success_on_first_attempt(sleep):
    provider = FakeProvider.scripted(["  Hola mundo \n"])
    attempt = TranslationAttempt(provider, sleep=sleep)

    result = await attempt.run(SPEC, PAYLOAD, "translate")

    assert result.status == ChunkStatus.SUCCESS
    assert result.text == "Hola mundo"
    assert result.attempts == 1
    assert sleep.delays == []


@pytest.mark.asyncio
async def test_always_failing_call_is_attempted_max_times(sleep):
    provider = FakeProvider(lambda _p, _n: ConnectionError("upstream 503"))
    attempt = TranslationAttempt(provider, FixedDelayRetry(max_attempts=3, delay=5.0), sleep=sleep)

    result = await attempt.run(SPEC, PAYLOAD, "translate")

    assert result.status == ChunkStatus.FAILED
    assert result.attempts == 3
    assert len(provider.calls) == 3
    assert result.error == "upstream 503"
    assert isinstance(result.last_exception, ConnectionError)
    assert sleep.delays == [5.0, 5.0]


@pytest.mark.asyncio
async def test_success_on_second_attempt(sleep):
    provider = FakeProvider.scripted([TimeoutError("timed out"), "Bonjour"])
    attempt = TranslationAttempt(provider, sleep=sleep)

    result = await attempt.run(SPEC, PAYLOAD, "translate")

    assert result.status == ChunkStatus.SUCCESS
    assert result.text == "Bonjour"
    assert result.attempts == 2
    assert sleep.delays == [5.0]


@pytest.mark.parametrize("reply", ["", "   \n\t ", []])
@pytest.mark.asyncio
async def test_empty_response_is_not_retried(sleep, reply):
    provider = FakeProvider.scripted([reply, "never used"])
    attempt = TranslationAttempt(provider, FixedDelayRetry(max_attempts=5), sleep=sleep)

    result = await attempt.run(SPEC, PAYLOAD, "translate")

    assert result.status == ChunkStatus.EMPTY
    assert result.text == ""
    assert result.attempts == 1
    assert len(provider.calls) == 1


@pytest.mark.asyncio
async def test_fragments_are_joined(sleep):
    provider = FakeProvider.scripted([["Guten ", "Tag", ", Welt"]])

    result = await TranslationAttempt(provider, sleep=sleep).run(SPEC, PAYLOAD, "translate")

    assert result.text == "Guten Tag, Welt"


@pytest.mark.asyncio
async def test_interrupted_stream_is_a_failed_attempt(sleep):
    provider = FakeProvider.scripted(
        [BrokenStream(["partial ", "text"], ConnectionResetError("reset")), "complete text"]
    )

    result = await TranslationAttempt(provider, sleep=sleep).run(SPEC, PAYLOAD, "translate")

    assert result.status == ChunkStatus.SUCCESS
    assert result.text == "complete text"
    assert result.attempts == 2


@pytest.mark.asyncio
async def test_exponential_strategy_delays(sleep):
    provider = FakeProvider(lambda _p, _n: RuntimeError("boom"))
    attempt = TranslationAttempt(provider, ExponentialBackoffRetry(max_attempts=3), sleep=sleep)

    await attempt.run(SPEC, PAYLOAD, "translate")

    assert sleep.delays == [2.0, 4.0]


@pytest.mark.asyncio
async def test_forwards_generation_options(sleep):
    provider = FakeProvider.scripted(["ok"])
    attempt = TranslationAttempt(provider, temperature=0.1, max_tokens=1000, sleep=sleep)

    await attempt.run(SPEC, PAYLOAD, "the prompt")

    call = provider.calls[0]
    assert (call.prompt, call.temperature, call.max_tokens) == ("the prompt", 0.1, 1000)
    assert call.mime_type == "application/pdf"


@pytest.mark.asyncio
async def test_failed_attempts_are_logged(sleep):
    entries = []
    provider = FakeProvider.scripted([ValueError("bad gateway"), "ok"])
    attempt = TranslationAttempt(
        provider, sleep=sleep, log_callback=lambda *entry: entries.append(entry)
    )

    await attempt.run(SPEC, PAYLOAD, "translate")

    levels = [level for level, _msg, _ctx in entries]
    assert levels == ["WARNING", "INFO"]
    assert entries[0][2]["error_type"] == "ValueError"


@pytest.mark.asyncio
async def test_cancelled_token_stops_before_calling(sleep):
    provider = FakeProvider.scripted(["ok"])
    token = CancellationToken()
    token.cancel()

    with pytest.raises(TranslationCancelledError):
        await TranslationAttempt(provider, sleep=sleep).run(SPEC, PAYLOAD, "translate", token)

    assert provider.calls == []


@pytest.mark.asyncio
async def test_cancellation_during_retry_delay_is_not_a_failure():
    token = CancellationToken()

    async def cancelling_sleep(seconds):
        token.cancel()

    provider = FakeProvider(lambda _p, _n: RuntimeError("boom"))
    attempt = TranslationAttempt(provider, sleep=cancelling_sleep)

    with pytest.raises(TranslationCancelledError):
        await attempt.run(SPEC, PAYLOAD, "translate", token)

    assert len(provider.calls) == 1
