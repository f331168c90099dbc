"""Tests for page counting and page-range extraction."""

import fitz
import pytest
from conftest import make_docx, make_pdf

from doc_translate_ai.config import DOC_MIME_TYPE, DOCX_MIME_TYPE, PDF_MIME_TYPE
from doc_translate_ai.documents import (
    DocxPager,
    PdfPager,
    SinglePagePager,
    get_pager,
    load_source_document,
)
from doc_translate_ai.errors import UnsupportedFileTypeError


class TestPdfPager:
    def test_page_count(self):
        assert PdfPager().page_count(make_pdf(7)) == 7

    def test_extract_range_builds_sub_document(self):
        payload = PdfPager().extract_page_range(make_pdf(6), 2, 5)

        assert payload.mime_type == PDF_MIME_TYPE
        with fitz.open(stream=payload.data, filetype="pdf") as sub:
            assert len(sub) == 3
            assert "Page 3" in sub[0].get_text()
            assert "Page 5" in sub[2].get_text()

    def test_full_range_returns_source_bytes(self):
        content = make_pdf(3)

        assert PdfPager().extract_page_range(content, 0, 3).data == content

    def test_invalid_range(self):
        with pytest.raises(ValueError):
            PdfPager().extract_page_range(make_pdf(3), 2, 4)

    def test_not_a_pdf(self):
        with pytest.raises(UnsupportedFileTypeError):
            PdfPager().page_count(b"definitely not a pdf")

    def test_empty_content_has_no_pages(self):
        assert PdfPager().page_count(b"") == 0


class TestDocxPager:
    def test_virtual_pages_by_word_count(self):
        paragraphs = [" ".join(["word"] * 10) for _ in range(3)]
        pager = DocxPager(words_per_page=10)

        assert pager.page_count(make_docx(paragraphs)) == 3

    def test_extract_range_is_markdown_text(self):
        content = make_docx(["alpha beta", "gamma delta"], heading="Report")
        pager = DocxPager(words_per_page=2)

        pages = pager.paginate(content)
        payload = pager.extract_page_range(content, 0, len(pages))
        text = payload.data.decode("utf-8")

        assert payload.mime_type == "text/markdown"
        assert text.startswith("# Report")
        assert "alpha beta" in text
        assert "gamma delta" in text

    def test_document_parsed_once_across_extractions(self, monkeypatch):
        content = make_docx([" ".join(["word"] * 10) for _ in range(4)])
        other = make_docx(["just one page"])
        pager = DocxPager(words_per_page=10)
        loads = []
        original_load = pager._load

        def counting_load(data):
            loads.append(data)
            return original_load(data)

        monkeypatch.setattr(pager, "_load", counting_load)

        assert pager.page_count(content) == 4
        for start in range(4):
            pager.extract_page_range(content, start, start + 1)
        assert len(loads) == 1

        assert pager.page_count(other) == 1
        assert len(loads) == 2

    def test_document_without_text_has_no_pages(self):
        assert DocxPager().page_count(make_docx([])) == 0

    def test_not_a_docx(self):
        with pytest.raises(UnsupportedFileTypeError):
            DocxPager().page_count(b"PK but not really")


class TestSinglePagePager:
    def test_image_is_one_page(self):
        pager = SinglePagePager("image/png")

        assert pager.page_count(b"\x89PNG") == 1
        payload = pager.extract_page_range(b"\x89PNG", 0, 1)
        assert (payload.data, payload.mime_type) == (b"\x89PNG", "image/png")


class TestGetPager:
    @pytest.mark.parametrize(
        ("mime_type", "pager_type"),
        [
            (PDF_MIME_TYPE, PdfPager),
            (DOCX_MIME_TYPE, DocxPager),
            (DOC_MIME_TYPE, SinglePagePager),
            ("image/webp", SinglePagePager),
        ],
    )
    def test_resolves_supported_types(self, mime_type, pager_type):
        assert isinstance(get_pager(mime_type), pager_type)

    def test_rejects_unknown_type(self):
        with pytest.raises(UnsupportedFileTypeError) as exc_info:
            get_pager("text/plain")
        assert exc_info.value.mime_type == "text/plain"


def test_load_source_document():
    content = make_pdf(4)

    doc = load_source_document(content, PDF_MIME_TYPE, "scan.pdf")

    assert doc.page_count == 4
    assert doc.size_bytes == len(content)
    assert doc.file_name == "scan.pdf"
