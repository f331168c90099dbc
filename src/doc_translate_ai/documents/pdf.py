"""
PyMuPDF-based page splitting for PDFs.
"""

from __future__ import annotations

import fitz  # PyMuPDF

from doc_translate_ai.config import PDF_MIME_TYPE
from doc_translate_ai.documents.base import ChunkPayload, DocumentPager
from doc_translate_ai.errors import UnsupportedFileTypeError


class PdfPager(DocumentPager):
    """
    Count and split PDF pages using PyMuPDF.

    Page ranges are copied into a fresh PDF so each chunk is a valid,
    self-contained document.
    """

    @property
    def name(self) -> str:
        return "pymupdf"

    def can_handle(self, mime_type: str) -> bool:
        return mime_type == PDF_MIME_TYPE

    def _open(self, content: bytes) -> fitz.Document:
        try:
            return fitz.open(stream=content, filetype="pdf")
        except Exception as e:
            raise UnsupportedFileTypeError(
                PDF_MIME_TYPE, "File does not appear to be a valid PDF"
            ) from e

    def page_count(self, content: bytes) -> int:
        if not content:
            return 0
        with self._open(content) as doc:
            return len(doc)

    def extract_page_range(self, content: bytes, start: int, end: int) -> ChunkPayload:
        """
        Copy pages ``[start, end)`` into a new PDF.

        A range that covers the whole document returns the source bytes as-is.
        """
        with self._open(content) as src:
            total = len(src)
            self._check_range(start, end, total)

            if start == 0 and end == total:
                return ChunkPayload(data=content, mime_type=PDF_MIME_TYPE)

            with fitz.open() as sub:
                # insert_pdf takes an inclusive to_page
                sub.insert_pdf(src, from_page=start, to_page=end - 1)
                data = sub.tobytes(garbage=3, deflate=True)

        return ChunkPayload(data=data, mime_type=PDF_MIME_TYPE)
