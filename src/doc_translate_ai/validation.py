"""
Upload validation.

Checks run before any page is loaded; a rejected file never reaches the
translation pipeline.
"""

from __future__ import annotations

import mimetypes
from dataclasses import dataclass, field
from pathlib import Path

from doc_translate_ai.config import DEFAULT_ALLOWED_MIME_TYPES, DOC_MIME_TYPE, DOCX_MIME_TYPE, MIB
from doc_translate_ai.errors import FileTooLargeError, MissingFileError, UnsupportedFileTypeError

DEFAULT_MAX_FILE_SIZE = 200 * MIB

# Types the platform registry may not know about
_EXTENSION_TYPES = {
    ".docx": DOCX_MIME_TYPE,
    ".doc": DOC_MIME_TYPE,
    ".webp": "image/webp",
}


@dataclass(frozen=True)
class UploadedFile:
    """A file handed to the service for translation."""

    content: bytes = field(repr=False)
    mime_type: str
    file_name: str = "document"
    size_bytes: int = -1

    def __post_init__(self) -> None:
        if self.size_bytes < 0:
            object.__setattr__(self, "size_bytes", len(self.content))

    @classmethod
    def from_path(cls, path: Path | str, mime_type: str | None = None) -> UploadedFile:
        """
        Read a file from disk.

        Args:
            path: File to read.
            mime_type: Media type override; guessed from the extension when omitted.

        Raises:
            MissingFileError: If the path does not exist.
        """
        path = Path(path)
        if not path.is_file():
            raise MissingFileError(details=str(path))

        content = path.read_bytes()
        return cls(
            content=content,
            mime_type=mime_type or guess_mime_type(path),
            file_name=path.name,
            size_bytes=len(content),
        )


def guess_mime_type(path: Path | str) -> str:
    """Media type from the file extension, or "" if unknown."""
    suffix = Path(path).suffix.lower()
    if suffix in _EXTENSION_TYPES:
        return _EXTENSION_TYPES[suffix]
    mime_type, _ = mimetypes.guess_type(str(path))
    return mime_type or ""


def validate_upload(
    file: UploadedFile | None,
    max_size_bytes: int = DEFAULT_MAX_FILE_SIZE,
    allowed_types: list[str] | None = None,
) -> UploadedFile:
    """
    Reject files the pipeline cannot accept.

    Args:
        file: Uploaded file.
        max_size_bytes: Size ceiling in bytes.
        allowed_types: Accepted media types.

    Returns:
        The same file, for chaining.

    Raises:
        MissingFileError: No file or empty content.
        UnsupportedFileTypeError: Media type not allowed.
        FileTooLargeError: File larger than the ceiling.
    """
    if file is None or not file.content:
        raise MissingFileError()

    allowed = allowed_types if allowed_types is not None else DEFAULT_ALLOWED_MIME_TYPES
    if file.mime_type not in allowed:
        raise UnsupportedFileTypeError(file.mime_type, details=file.file_name)

    if file.size_bytes > max_size_bytes:
        raise FileTooLargeError(file.size_bytes, max_size_bytes)

    return file
