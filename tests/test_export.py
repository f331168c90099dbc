"""Tests for export writers."""

import pytest
from docx import Document

from doc_translate_ai.config import ExportFormat
from doc_translate_ai.export import (
    EXPORTERS,
    DOCXExporter,
    HTMLExporter,
    export_text,
    generate_filename,
)
from doc_translate_ai.export.pdf import sanitize_markdown_for_pdf

MARKDOWN = """# Annual Report

Revenue grew **12%** this year.

- North
- South

| Region | Sales |
| --- | --- |
| North | 10 |

---

Second part."""


def test_generate_filename():
    assert generate_filename("Q3 report.pdf", "docx") == "Q3 report_translated.docx"
    assert generate_filename("weird/name?.png", ".txt") == "name__translated.txt"


def test_text_export(tmp_path):
    [result] = export_text("Hola mundo", ["txt"], tmp_path, stem="hello.pdf")

    assert result.success
    assert result.output_path == tmp_path / "hello_translated.txt"
    assert result.output_path.read_text(encoding="utf-8") == "Hola mundo\n"


def test_html_render():
    html = HTMLExporter().render(MARKDOWN, title="Report <2024>", language="en")

    assert '<html lang="en" dir="ltr">' in html
    assert "<title>Report &lt;2024&gt;</title>" in html
    assert "<h1>Annual Report</h1>" in html
    assert "<strong>12%</strong>" in html
    assert "<table>" in html


def test_html_rtl_language():
    html = HTMLExporter().render("مرحبا", language="ar")

    assert 'dir="rtl"' in html


def test_docx_export(tmp_path):
    path = DOCXExporter().export(MARKDOWN, tmp_path / "out.docx", title="Report")

    doc = Document(str(path))
    texts = [p.text for p in doc.paragraphs]
    assert "Report" in texts
    assert "Annual Report" in texts
    assert "Revenue grew 12% this year." in texts
    assert "North" in texts
    assert len(doc.tables) == 1
    assert doc.tables[0].cell(1, 1).text == "10"


def test_pdf_sanitizer_drops_anchor_links():
    assert sanitize_markdown_for_pdf("See [intro](#intro) and [x]()") == "See intro and x"


def test_pdf_export(tmp_path):
    [result] = export_text(MARKDOWN, [ExportFormat.PDF], tmp_path, stem="report.pdf")

    assert result.success, result.error
    assert result.output_path.read_bytes().startswith(b"%PDF")


def test_unknown_format():
    with pytest.raises(ValueError, match="Invalid export format"):
        export_text("text", ["odt"], "unused")


def test_failing_writer_is_reported(tmp_path, monkeypatch):
    class BrokenExporter:
        def export(self, content, output_path, title="", language="en"):
            raise OSError("disk full")

    monkeypatch.setitem(EXPORTERS, ExportFormat.HTML, BrokenExporter)

    results = export_text("text", ["txt", "html"], tmp_path)

    assert [r.success for r in results] == [True, False]
    assert results[1].error == "disk full"
