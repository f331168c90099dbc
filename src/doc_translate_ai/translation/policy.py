"""
Chunk size selection.

Large inline documents hit request-size and context limits, while many small
requests waste time. The tiers below pick pages-per-request from the file size
and page count; the first matching tier wins.
"""

from __future__ import annotations

from dataclasses import dataclass

from doc_translate_ai.config import MIB, ChunkingConfig


@dataclass(frozen=True)
class ChunkSizePolicy:
    """Tiered pages-per-request policy."""

    large_file_bytes: int = 50 * MIB
    large_file_chunk_pages: int = 25
    many_pages_threshold: int = 200
    many_pages_chunk_pages: int = 30
    default_chunk_pages: int = 50
    fixed_chunk_pages: int | None = None

    @classmethod
    def from_config(cls, config: ChunkingConfig) -> ChunkSizePolicy:
        return cls(
            large_file_bytes=config.large_file_bytes,
            large_file_chunk_pages=config.large_file_chunk_pages,
            many_pages_threshold=config.many_pages_threshold,
            many_pages_chunk_pages=config.many_pages_chunk_pages,
            default_chunk_pages=config.default_chunk_pages,
            fixed_chunk_pages=config.fixed_chunk_pages,
        )

    def decide(self, total_bytes: int, total_pages: int) -> int:
        """
        Pick the chunk size in pages.

        Args:
            total_bytes: Size of the whole source file.
            total_pages: Page count of the source file.

        Returns:
            Pages per chunk (always >= 1).
        """
        if self.fixed_chunk_pages is not None:
            if self.fixed_chunk_pages < 1:
                raise ValueError(f"Chunk size must be at least 1, got {self.fixed_chunk_pages}")
            return self.fixed_chunk_pages

        if total_bytes > self.large_file_bytes:
            return self.large_file_chunk_pages
        if total_pages > self.many_pages_threshold:
            return self.many_pages_chunk_pages
        return self.default_chunk_pages
