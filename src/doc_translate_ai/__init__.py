"""
doc-translate-ai: chunked AI translation of PDFs, Word documents and images.

This package provides tools for:
- Splitting large documents into page ranges sized for inline LLM requests
- Translating each range with bounded retries and assembling partial results
- Keeping a DuckDB history of translations and a processing log
- Exporting translations to TXT, HTML, DOCX and PDF
"""

__version__ = "0.1.0"
__author__ = "yharby"

from doc_translate_ai.config import Settings, load_config
from doc_translate_ai.database import Database, Stage, TranslationRecord
from doc_translate_ai.errors import (
    DocTranslateError,
    FileTooLargeError,
    InputValidationError,
    MissingFileError,
    NoTranslatableContentError,
    TranslationCancelledError,
    UnsupportedFileTypeError,
    UpstreamServiceError,
)
from doc_translate_ai.service import DocumentTranslationService, translate_document
from doc_translate_ai.translation import (
    CancellationToken,
    ChunkedTranslationOrchestrator,
    ProgressInfo,
    TranslationOutcome,
)
from doc_translate_ai.validation import UploadedFile, validate_upload

__all__ = [
    # Config
    "Settings",
    "load_config",
    # Database
    "Database",
    "Stage",
    "TranslationRecord",
    # Errors
    "DocTranslateError",
    "InputValidationError",
    "MissingFileError",
    "UnsupportedFileTypeError",
    "FileTooLargeError",
    "NoTranslatableContentError",
    "UpstreamServiceError",
    "TranslationCancelledError",
    # Service
    "DocumentTranslationService",
    "translate_document",
    "UploadedFile",
    "validate_upload",
    # Translation
    "CancellationToken",
    "ChunkedTranslationOrchestrator",
    "ProgressInfo",
    "TranslationOutcome",
]
