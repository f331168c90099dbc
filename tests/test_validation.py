"""Tests for upload validation."""

import pytest

from doc_translate_ai.config import DOC_MIME_TYPE, DOCX_MIME_TYPE, MIB, PDF_MIME_TYPE
from doc_translate_ai.errors import (
    FileTooLargeError,
    MissingFileError,
    UnsupportedFileTypeError,
)
from doc_translate_ai.validation import UploadedFile, guess_mime_type, validate_upload


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("report.pdf", PDF_MIME_TYPE),
        ("Letter.DOCX", DOCX_MIME_TYPE),
        ("old.doc", DOC_MIME_TYPE),
        ("photo.webp", "image/webp"),
        ("scan.png", "image/png"),
        ("no_extension", ""),
    ],
)
def test_guess_mime_type(name, expected):
    assert guess_mime_type(name) == expected


def test_from_path(tmp_path):
    path = tmp_path / "report.pdf"
    path.write_bytes(b"%PDF-1.7 content")

    upload = UploadedFile.from_path(path)

    assert upload.file_name == "report.pdf"
    assert upload.mime_type == PDF_MIME_TYPE
    assert upload.size_bytes == len(b"%PDF-1.7 content")


def test_from_missing_path(tmp_path):
    with pytest.raises(MissingFileError):
        UploadedFile.from_path(tmp_path / "nope.pdf")


def test_size_defaults_to_content_length():
    assert UploadedFile(b"abc", PDF_MIME_TYPE).size_bytes == 3


def test_accepts_valid_upload():
    upload = UploadedFile(b"%PDF", PDF_MIME_TYPE, "a.pdf")

    assert validate_upload(upload) is upload


@pytest.mark.parametrize("upload", [None, UploadedFile(b"", PDF_MIME_TYPE)])
def test_rejects_missing_file(upload):
    with pytest.raises(MissingFileError) as exc_info:
        validate_upload(upload)
    assert exc_info.value.code == "missing_file"


def test_rejects_unsupported_type():
    with pytest.raises(UnsupportedFileTypeError) as exc_info:
        validate_upload(UploadedFile(b"hello", "text/plain", "notes.txt"))

    assert "Unsupported file type: text/plain" in exc_info.value.message


def test_rejects_oversized_file():
    upload = UploadedFile(b"x", PDF_MIME_TYPE, size_bytes=201 * MIB)

    with pytest.raises(FileTooLargeError) as exc_info:
        validate_upload(upload)

    assert exc_info.value.message == "File size must be less than 200MB"
    assert exc_info.value.to_dict()["code"] == "file_too_large"


def test_custom_allowed_types():
    upload = UploadedFile(b"\x89PNG", "image/png")

    with pytest.raises(UnsupportedFileTypeError):
        validate_upload(upload, allowed_types=[PDF_MIME_TYPE])
