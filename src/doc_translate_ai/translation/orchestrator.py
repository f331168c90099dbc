"""
Chunked document translation.

Drives one document through the pipeline:
- choose a chunk size and split the document into page ranges
- translate each range in order with bounded retry
- keep going past failed chunks and assemble what succeeded
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from doc_translate_ai.config import Settings
from doc_translate_ai.documents import SourceDocument
from doc_translate_ai.errors import NoTranslatableContentError, UpstreamServiceError
from doc_translate_ai.llm.base import LLMProvider
from doc_translate_ai.translation.assembler import (
    CHUNK_SEPARATOR,
    ResultAssembler,
    TranslationOutcome,
)
from doc_translate_ai.translation.attempt import (
    ChunkResult,
    ChunkStatus,
    LogCallback,
    TranslationAttempt,
)
from doc_translate_ai.translation.cancellation import CancellationToken, SleepFunc, pause
from doc_translate_ai.translation.policy import ChunkSizePolicy
from doc_translate_ai.translation.prompts import build_chunk_prompt
from doc_translate_ai.translation.retry import (
    FixedDelayRetry,
    RetryPolicy,
    retry_policy_from_config,
)
from doc_translate_ai.translation.splitter import ChunkSpec, PageRangeSplitter

DEFAULT_CHUNK_DELAY = 2.0


@dataclass
class ProgressInfo:
    """Progress information for callbacks."""

    stage: str  # Current stage name (splitting, translation, complete)
    stage_display: str  # Human-readable stage description
    chunk_current: int | None = None  # 1-based chunk index
    chunk_total: int | None = None
    page_start: int | None = None  # 1-based inclusive page range of the chunk
    page_end: int | None = None
    percent: float = 0.0
    detail: str | None = None


# Type alias for progress callback
ProgressCallback = Callable[[ProgressInfo], None] | None


@dataclass
class RunAccumulator:
    """Mutable state of one orchestration run."""

    results: list[ChunkResult] = field(default_factory=list)
    text: str = ""
    pages_processed: int = 0
    chunks_succeeded: int = 0
    chunks_failed: int = 0
    progress_callback: ProgressCallback = None

    def report(self, info: ProgressInfo) -> None:
        """Report progress to this run's callback, if any."""
        if self.progress_callback:
            self.progress_callback(info)

    def add(self, result: ChunkResult) -> None:
        self.results.append(result)

        if result.status == ChunkStatus.SUCCESS:
            if self.text:
                self.text += CHUNK_SEPARATOR
            self.text += result.text
            self.pages_processed += result.spec.page_count
            self.chunks_succeeded += 1
        elif result.status == ChunkStatus.EMPTY:
            self.pages_processed += result.spec.page_count
        else:
            self.chunks_failed += 1


class ChunkedTranslationOrchestrator:
    """
    Sequential chunk-by-chunk translator.

    At most one request is in flight: chunk N+1 starts only after chunk N
    (including its retries) has resolved, and a fixed pacing delay separates
    consecutive chunks. Output order is therefore chunk order.
    """

    def __init__(
        self,
        provider: LLMProvider,
        *,
        policy: ChunkSizePolicy | None = None,
        splitter: PageRangeSplitter | None = None,
        retry_policy: RetryPolicy | None = None,
        chunk_delay: float = DEFAULT_CHUNK_DELAY,
        temperature: float = 0.3,
        max_tokens: int = 32000,
        raise_on_total_upstream_failure: bool = False,
        sleep: SleepFunc | None = None,
        log_callback: LogCallback = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            provider: Translation backend (owned by the caller).
            policy: Chunk size policy.
            splitter: Page-range splitter.
            retry_policy: Per-chunk attempt budget and delays.
            chunk_delay: Seconds to wait between chunks.
            temperature: Sampling temperature.
            max_tokens: Output token limit per chunk.
            raise_on_total_upstream_failure: Raise UpstreamServiceError instead of
                NoTranslatableContentError when every chunk failed.
            sleep: Replacement for the delay coroutine.
            log_callback: Optional callback accepting (level, message, context).
        """
        self._provider = provider
        self._policy = policy or ChunkSizePolicy()
        self._splitter = splitter or PageRangeSplitter()
        self._chunk_delay = chunk_delay
        self._raise_on_total_upstream_failure = raise_on_total_upstream_failure
        self._sleep = sleep
        self._log_callback = log_callback
        self._attempt = TranslationAttempt(
            provider,
            retry_policy or FixedDelayRetry(),
            temperature=temperature,
            max_tokens=max_tokens,
            sleep=sleep,
            log_callback=log_callback,
        )
        self._assembler = ResultAssembler()

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        provider: LLMProvider,
        **kwargs,
    ) -> ChunkedTranslationOrchestrator:
        """Build an orchestrator from configuration."""
        return cls(
            provider,
            policy=ChunkSizePolicy.from_config(settings.chunking),
            retry_policy=retry_policy_from_config(settings.processing),
            chunk_delay=settings.processing.chunk_delay,
            temperature=settings.translation.temperature,
            max_tokens=settings.translation.max_tokens,
            raise_on_total_upstream_failure=settings.processing.raise_on_total_upstream_failure,
            **kwargs,
        )

    def _log(self, level: str, message: str, context: dict | None = None) -> None:
        """Log a message via callback if available."""
        if self._log_callback:
            self._log_callback(level, message, context or {})

    async def translate(
        self,
        doc: SourceDocument,
        target_language: str = "en",
        high_fidelity: bool = False,
        *,
        progress_callback: ProgressCallback = None,
        cancel_token: CancellationToken | None = None,
    ) -> TranslationOutcome:
        """
        Translate a whole document.

        Args:
            doc: Loaded source document.
            target_language: Target language code.
            high_fidelity: Structure-preserving markdown instead of prose.
            progress_callback: Optional callback for progress updates.
            cancel_token: Optional cancellation signal.

        Returns:
            TranslationOutcome, possibly covering only part of the document.

        Raises:
            NoTranslatableContentError: If no chunk produced text.
            UpstreamServiceError: If every chunk failed and the orchestrator is
                configured to report that as an upstream failure.
            TranslationCancelledError: If cancelled.
        """
        chunk_size = self._policy.decide(doc.size_bytes, doc.page_count)
        chunks = self._splitter.split(doc, chunk_size)

        self._log(
            "INFO",
            f"Translating {doc.file_name}: {doc.page_count} pages in {len(chunks)} chunk(s) "
            f"of up to {chunk_size} pages",
            {
                "file_name": doc.file_name,
                "mime_type": doc.mime_type,
                "size_bytes": doc.size_bytes,
                "total_pages": doc.page_count,
                "chunk_size": chunk_size,
                "chunks": len(chunks),
                "target_language": target_language,
                "high_fidelity": high_fidelity,
            },
        )

        if not chunks:
            raise NoTranslatableContentError(details="Document has no pages")

        acc = RunAccumulator(progress_callback=progress_callback)
        acc.report(
            ProgressInfo(
                stage="splitting",
                stage_display="Preparing document",
                chunk_total=len(chunks),
                detail=f"{len(chunks)} chunk(s) of up to {chunk_size} pages",
            )
        )

        for spec in chunks:
            if cancel_token is not None:
                cancel_token.raise_if_cancelled()

            result = await self._translate_chunk(
                doc, spec, len(chunks), target_language, high_fidelity, cancel_token, acc
            )
            acc.add(result)
            self._log_chunk_result(result)

            acc.report(
                ProgressInfo(
                    stage="translation",
                    stage_display="Translating",
                    chunk_current=spec.index,
                    chunk_total=len(chunks),
                    page_start=spec.start_page + 1,
                    page_end=spec.end_page,
                    percent=100.0 * spec.index / len(chunks),
                    detail=result.status.value,
                )
            )

            if spec.index < len(chunks):
                await pause(self._chunk_delay, cancel_token, self._sleep)

        return self._finish(doc, acc, target_language, high_fidelity)

    async def _translate_chunk(
        self,
        doc: SourceDocument,
        spec: ChunkSpec,
        total_chunks: int,
        target_language: str,
        high_fidelity: bool,
        cancel_token: CancellationToken | None,
        acc: RunAccumulator,
    ) -> ChunkResult:
        acc.report(
            ProgressInfo(
                stage="translation",
                stage_display="Translating",
                chunk_current=spec.index,
                chunk_total=total_chunks,
                page_start=spec.start_page + 1,
                page_end=spec.end_page,
                percent=100.0 * (spec.index - 1) / total_chunks,
            )
        )

        try:
            payload = self._splitter.extract(doc, spec)
        except Exception as e:
            # Unreadable page range: fail this chunk without spending attempts
            return ChunkResult(
                spec=spec,
                status=ChunkStatus.FAILED,
                attempts=0,
                error=f"Could not extract {spec.label}: {e}",
                last_exception=e,
            )

        prompt = build_chunk_prompt(
            target_language,
            high_fidelity,
            page_label=spec.label,
            total_chunks=total_chunks,
        )

        self._log(
            "DEBUG",
            f"Sending chunk {spec.index}/{total_chunks} ({spec.label}, {payload.size_bytes} bytes)",
            {"chunk": spec.index, "mime_type": payload.mime_type, "bytes": payload.size_bytes},
        )

        return await self._attempt.run(spec, payload, prompt, cancel_token)

    def _log_chunk_result(self, result: ChunkResult) -> None:
        spec = result.spec
        context = {
            "chunk": spec.index,
            "start_page": spec.start_page,
            "end_page": spec.end_page,
            "status": result.status.value,
            "attempts": result.attempts,
            "latency_ms": round(result.latency_ms, 1),
        }

        if result.status == ChunkStatus.SUCCESS:
            self._log(
                "INFO",
                f"Chunk {spec.index} ({spec.label}) translated: {len(result.text)} characters",
                context,
            )
        elif result.status == ChunkStatus.EMPTY:
            self._log("INFO", f"Chunk {spec.index} ({spec.label}) returned no text", context)
        else:
            self._log(
                "ERROR",
                f"Chunk {spec.index} ({spec.label}) failed after {result.attempts} attempt(s): "
                f"{result.error}",
                {**context, "error": result.error},
            )

    def _finish(
        self,
        doc: SourceDocument,
        acc: RunAccumulator,
        target_language: str,
        high_fidelity: bool,
    ) -> TranslationOutcome:
        if not acc.text.strip():
            if self._raise_on_total_upstream_failure and acc.chunks_failed == len(acc.results):
                last = acc.results[-1]
                raise UpstreamServiceError(
                    "Translation service failed for every part of the document. "
                    "Please try again later.",
                    last.error,
                ) from last.last_exception

            self._log(
                "ERROR",
                "No translated text produced",
                {"chunks": len(acc.results), "failed": acc.chunks_failed},
            )
            raise NoTranslatableContentError(
                details=f"{acc.chunks_failed} of {len(acc.results)} chunk(s) failed"
            )

        outcome = self._assembler.assemble(
            acc.text,
            acc.results,
            total_pages=doc.page_count,
            target_language=target_language,
            high_fidelity=high_fidelity,
            file_name=doc.file_name,
        )

        self._log(
            "INFO",
            f"Translation completed: {outcome.successful_chunks}/{outcome.chunks_processed} chunks, "
            f"{outcome.word_count} words, {outcome.char_count} characters",
            {
                "chunks_processed": outcome.chunks_processed,
                "successful_chunks": outcome.successful_chunks,
                "pages_processed": outcome.pages_processed,
                "failed_page_ranges": [list(r) for r in outcome.failed_page_ranges],
            },
        )

        acc.report(
            ProgressInfo(
                stage="complete",
                stage_display="Complete",
                chunk_current=outcome.chunks_processed,
                chunk_total=outcome.chunks_processed,
                percent=100.0,
                detail=f"{outcome.word_count} words",
            )
        )

        return outcome
