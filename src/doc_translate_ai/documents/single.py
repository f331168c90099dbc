"""
Single-page pass-through for images and legacy Word binaries.
"""

from __future__ import annotations

from doc_translate_ai.config import DOC_MIME_TYPE, IMAGE_MIME_TYPES
from doc_translate_ai.documents.base import ChunkPayload, DocumentPager


class SinglePagePager(DocumentPager):
    """
    Treat the whole file as one page.

    Images have no pages to split, and legacy ``.doc`` files cannot be parsed
    locally, so both are sent to the model unchanged.
    """

    SUPPORTED = (*IMAGE_MIME_TYPES, DOC_MIME_TYPE)

    def __init__(self, mime_type: str):
        self.mime_type = mime_type

    @property
    def name(self) -> str:
        return "single_page"

    def can_handle(self, mime_type: str) -> bool:
        return mime_type == self.mime_type

    def page_count(self, content: bytes) -> int:
        return 1 if content else 0

    def extract_page_range(self, content: bytes, start: int, end: int) -> ChunkPayload:
        self._check_range(start, end, self.page_count(content))
        return ChunkPayload(data=content, mime_type=self.mime_type)
