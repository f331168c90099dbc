"""
Final result assembly.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from doc_translate_ai.translation.attempt import ChunkResult, ChunkStatus

PROCESSING_METHOD = "ai-powered"

# Markdown thematic break between consecutive translated chunks
CHUNK_SEPARATOR = "\n\n---\n\n"


@dataclass(frozen=True)
class TranslationOutcome:
    """Translated text plus run accounting."""

    text: str
    word_count: int
    char_count: int
    total_pages: int
    chunks_processed: int
    successful_chunks: int
    pages_processed: int = 0
    empty_chunks: int = 0
    failed_chunks: int = 0
    failed_page_ranges: list[tuple[int, int]] = field(default_factory=list)
    processing_method: str = PROCESSING_METHOD
    target_language: str = ""
    high_fidelity: bool = False
    file_name: str = ""
    # Set once the outcome is stored in the history database
    translation_id: int | None = None

    @property
    def is_partial(self) -> bool:
        """True when some chunks contributed nothing because they failed."""
        return self.failed_chunks > 0

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["failed_page_ranges"] = [list(r) for r in self.failed_page_ranges]
        return data


def count_words(text: str) -> int:
    """Count non-empty tokens separated by runs of whitespace."""
    return len(text.split())


class ResultAssembler:
    """Builds the TranslationOutcome from accumulated chunk output."""

    def assemble(
        self,
        text: str,
        results: list[ChunkResult],
        *,
        total_pages: int,
        target_language: str = "",
        high_fidelity: bool = False,
        file_name: str = "",
    ) -> TranslationOutcome:
        """
        Compute final counts.

        Args:
            text: Accumulated output of successful chunks.
            results: Per-chunk results in index order.
            total_pages: Page count of the source document.
            target_language: Target language code.
            high_fidelity: Fidelity mode used.
            file_name: Source file name.

        Returns:
            TranslationOutcome for the run.
        """
        final_text = text.strip()
        successful = [r for r in results if r.status == ChunkStatus.SUCCESS]
        empty = [r for r in results if r.status == ChunkStatus.EMPTY]
        failed = [r for r in results if r.status == ChunkStatus.FAILED]

        return TranslationOutcome(
            text=final_text,
            word_count=count_words(final_text),
            char_count=len(final_text),
            total_pages=total_pages,
            chunks_processed=len(results),
            successful_chunks=len(successful),
            pages_processed=sum(r.spec.page_count for r in successful + empty),
            empty_chunks=len(empty),
            failed_chunks=len(failed),
            failed_page_ranges=[(r.spec.start_page, r.spec.end_page) for r in failed],
            target_language=target_language,
            high_fidelity=high_fidelity,
            file_name=file_name,
        )
