"""
Error taxonomy for doc-translate-ai.

Only these errors leave the translation pipeline. Per-chunk upstream failures
are absorbed by the retry loop and surface, if at all, as one of the aggregate
errors below.
"""

from __future__ import annotations


class DocTranslateError(Exception):
    """Base class for all errors reported to callers."""

    code = "error"

    def __init__(self, message: str, details: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, str | None]:
        """Serialize for JSON responses and CLI output."""
        return {"error": self.message, "code": self.code, "details": self.details}


class InputValidationError(DocTranslateError):
    """Uploaded file was rejected before translation started."""

    code = "invalid_input"


class MissingFileError(InputValidationError):
    """No file (or an empty file) was provided."""

    code = "missing_file"

    def __init__(self, message: str = "No file provided", details: str | None = None):
        super().__init__(message, details)


class UnsupportedFileTypeError(InputValidationError):
    """Media type is not one of the accepted document/image types."""

    code = "unsupported_file_type"

    def __init__(self, mime_type: str, details: str | None = None):
        super().__init__(
            f"Unsupported file type: {mime_type or 'unknown'}. "
            "Please upload a PDF, Word document, or image file (JPEG, PNG, WebP, GIF)",
            details,
        )
        self.mime_type = mime_type


class FileTooLargeError(InputValidationError):
    """File exceeds the configured size ceiling."""

    code = "file_too_large"

    def __init__(self, size_bytes: int, max_size_bytes: int):
        max_mb = max_size_bytes / (1024 * 1024)
        super().__init__(
            f"File size must be less than {max_mb:.0f}MB",
            f"received {size_bytes} bytes",
        )
        self.size_bytes = size_bytes
        self.max_size_bytes = max_size_bytes


class NoTranslatableContentError(DocTranslateError):
    """The whole run produced no translated text."""

    code = "no_translatable_content"

    def __init__(
        self,
        message: str = (
            "Could not extract or translate text from the document. The document might "
            "contain only images without readable text, or the content might be in an "
            "unsupported format."
        ),
        details: str | None = None,
    ):
        super().__init__(message, details)


class UpstreamServiceError(DocTranslateError):
    """The AI translation service failed for every chunk."""

    code = "upstream_service_error"


class TranslationCancelledError(DocTranslateError):
    """The caller cancelled the run before it completed."""

    code = "cancelled"

    def __init__(self, message: str = "Translation cancelled", details: str | None = None):
        super().__init__(message, details)
