"""
Chunked translation pipeline for doc-translate-ai.

Provides:
- Tiered chunk sizing and page-range splitting
- Bounded per-chunk retry with pluggable delay schedules
- Sequential orchestration with partial-result assembly
"""

from doc_translate_ai.translation.assembler import (
    CHUNK_SEPARATOR,
    ResultAssembler,
    TranslationOutcome,
    count_words,
)
from doc_translate_ai.translation.attempt import ChunkResult, ChunkStatus, TranslationAttempt
from doc_translate_ai.translation.cancellation import CancellationToken
from doc_translate_ai.translation.orchestrator import (
    ChunkedTranslationOrchestrator,
    ProgressCallback,
    ProgressInfo,
)
from doc_translate_ai.translation.policy import ChunkSizePolicy
from doc_translate_ai.translation.retry import (
    ExponentialBackoffRetry,
    FixedDelayRetry,
    create_retry_policy,
)
from doc_translate_ai.translation.splitter import ChunkSpec, PageRangeSplitter

__all__ = [
    "CHUNK_SEPARATOR",
    "CancellationToken",
    "ChunkResult",
    "ChunkSizePolicy",
    "ChunkSpec",
    "ChunkStatus",
    "ChunkedTranslationOrchestrator",
    "ExponentialBackoffRetry",
    "FixedDelayRetry",
    "PageRangeSplitter",
    "ProgressCallback",
    "ProgressInfo",
    "ResultAssembler",
    "TranslationAttempt",
    "TranslationOutcome",
    "count_words",
    "create_retry_policy",
]
