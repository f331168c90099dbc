"""
Base classes and interfaces for document pagers.

A pager knows how many pages a document has and how to cut a page range out
of it as an independent sub-document of the same kind.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ChunkPayload:
    """Physical bytes sent to the translation backend for one chunk."""

    data: bytes
    mime_type: str

    @property
    def size_bytes(self) -> int:
        return len(self.data)


class DocumentPager(ABC):
    """Abstract base class for page counting and page-range extraction."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Pager name."""
        ...

    @abstractmethod
    def can_handle(self, mime_type: str) -> bool:
        """Check if this pager understands the given media type."""
        ...

    @abstractmethod
    def page_count(self, content: bytes) -> int:
        """
        Count pages in a document.

        Args:
            content: Raw document bytes.

        Returns:
            Number of pages (0 for a document without content).
        """
        ...

    @abstractmethod
    def extract_page_range(self, content: bytes, start: int, end: int) -> ChunkPayload:
        """
        Extract the half-open page range ``[start, end)``.

        Args:
            content: Raw document bytes.
            start: First page (0-indexed, inclusive).
            end: Last page (exclusive).

        Returns:
            ChunkPayload holding only that page range.
        """
        ...

    def _check_range(self, start: int, end: int, total: int) -> None:
        if start < 0 or end <= start or end > total:
            raise ValueError(f"Invalid page range [{start}, {end}) for {total} pages")
