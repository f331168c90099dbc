"""
Page-range splitting.
"""

from __future__ import annotations

from dataclasses import dataclass

from doc_translate_ai.documents import ChunkPayload, DocumentPager, SourceDocument, get_pager


@dataclass(frozen=True)
class ChunkSpec:
    """Half-open page range ``[start_page, end_page)`` translated as one unit."""

    index: int  # 1-based
    start_page: int
    end_page: int

    @property
    def page_count(self) -> int:
        return self.end_page - self.start_page

    @property
    def label(self) -> str:
        """Human-readable 1-based inclusive page range, e.g. "pages 51-100"."""
        if self.page_count == 1:
            return f"page {self.start_page + 1}"
        return f"pages {self.start_page + 1}-{self.end_page}"


class PageRangeSplitter:
    """
    Partition a document into contiguous page ranges.

    The ranges tile ``[0, total_pages)`` in order with no gaps or overlap.
    Payload extraction is delegated to the document's pager so chunk specs
    stay metadata only.
    """

    def __init__(self, pager: DocumentPager | None = None):
        """
        Args:
            pager: Pager used for extraction; resolved per document when omitted.
        """
        self._pager = pager
        self._pagers: dict[str, DocumentPager] = {}

    def split(self, doc: SourceDocument, chunk_size_pages: int) -> list[ChunkSpec]:
        """
        Build the ordered chunk list for a document.

        Args:
            doc: Source document.
            chunk_size_pages: Maximum pages per chunk.

        Returns:
            Ordered ChunkSpecs; empty for a zero-page document.
        """
        if chunk_size_pages < 1:
            raise ValueError(f"Chunk size must be at least 1, got {chunk_size_pages}")

        total = doc.page_count
        return [
            ChunkSpec(
                index=step + 1,
                start_page=start,
                end_page=min(start + chunk_size_pages, total),
            )
            for step, start in enumerate(range(0, total, chunk_size_pages))
        ]

    def extract(self, doc: SourceDocument, spec: ChunkSpec) -> ChunkPayload:
        """Cut the sub-document for one chunk."""
        pager = self._pager or self._pager_for(doc.mime_type)
        return pager.extract_page_range(doc.content, spec.start_page, spec.end_page)

    def _pager_for(self, mime_type: str) -> DocumentPager:
        if mime_type not in self._pagers:
            self._pagers[mime_type] = get_pager(mime_type)
        return self._pagers[mime_type]
