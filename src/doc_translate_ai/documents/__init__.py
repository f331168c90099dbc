"""
Document loading and page-range extraction for doc-translate-ai.

Provides pagers for each accepted input type:
- PdfPager for PDFs (PyMuPDF)
- DocxPager for Word documents (python-docx, word-count based virtual pages)
- SinglePagePager for images and legacy .doc files
"""

from doc_translate_ai.documents.base import ChunkPayload, DocumentPager
from doc_translate_ai.documents.docx import DocxPager
from doc_translate_ai.documents.pdf import PdfPager
from doc_translate_ai.documents.single import SinglePagePager
from doc_translate_ai.documents.source import SourceDocument, get_pager, load_source_document

__all__ = [
    "ChunkPayload",
    "DocumentPager",
    "DocxPager",
    "PdfPager",
    "SinglePagePager",
    "SourceDocument",
    "get_pager",
    "load_source_document",
]
