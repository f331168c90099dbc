"""
Source document handle and pager lookup.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from doc_translate_ai.config import DOCX_MIME_TYPE, PDF_MIME_TYPE
from doc_translate_ai.documents.base import DocumentPager
from doc_translate_ai.documents.docx import DocxPager
from doc_translate_ai.documents.pdf import PdfPager
from doc_translate_ai.documents.single import SinglePagePager
from doc_translate_ai.errors import UnsupportedFileTypeError


@dataclass(frozen=True)
class SourceDocument:
    """An uploaded document, loaded once and never modified."""

    content: bytes = field(repr=False)
    mime_type: str
    file_name: str
    size_bytes: int
    page_count: int


def get_pager(mime_type: str) -> DocumentPager:
    """
    Resolve the pager for a media type.

    Raises:
        UnsupportedFileTypeError: If no pager handles the type.
    """
    if mime_type == PDF_MIME_TYPE:
        return PdfPager()
    if mime_type == DOCX_MIME_TYPE:
        return DocxPager()
    if mime_type in SinglePagePager.SUPPORTED:
        return SinglePagePager(mime_type)
    raise UnsupportedFileTypeError(mime_type)


def load_source_document(
    content: bytes,
    mime_type: str,
    file_name: str = "document",
    pager: DocumentPager | None = None,
) -> SourceDocument:
    """
    Load a document and count its pages.

    Args:
        content: Raw file bytes.
        mime_type: Declared media type.
        file_name: Original file name (for output naming and history).
        pager: Pager override; resolved from mime_type when omitted.

    Returns:
        SourceDocument ready for splitting.
    """
    pager = pager or get_pager(mime_type)
    return SourceDocument(
        content=content,
        mime_type=mime_type,
        file_name=file_name,
        size_bytes=len(content),
        page_count=pager.page_count(content),
    )
