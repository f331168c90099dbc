"""
Export module for doc-translate-ai.

Writes translated text as plain text, HTML, DOCX, or PDF.
"""

from __future__ import annotations

from pathlib import Path

from doc_translate_ai.config import ExportFormat
from doc_translate_ai.export.common import ExportResult, generate_filename
from doc_translate_ai.export.docx import DOCXExporter
from doc_translate_ai.export.html import HTMLExporter
from doc_translate_ai.export.pdf import PDFExporter
from doc_translate_ai.export.text import TextExporter

EXPORTERS = {
    ExportFormat.TXT: TextExporter,
    ExportFormat.HTML: HTMLExporter,
    ExportFormat.DOCX: DOCXExporter,
    ExportFormat.PDF: PDFExporter,
}


def _parse_format(fmt: ExportFormat | str) -> ExportFormat:
    if isinstance(fmt, ExportFormat):
        return fmt
    try:
        return ExportFormat(fmt.lower().lstrip("."))
    except ValueError:
        valid = [f.value for f in ExportFormat]
        raise ValueError(f"Invalid export format: {fmt}. Valid options: {valid}") from None


def export_text(
    content: str,
    formats: list[ExportFormat | str],
    output_dir: Path | str,
    stem: str = "document",
    title: str = "",
    language: str = "en",
) -> list[ExportResult]:
    """
    Write translated text in several formats.

    Args:
        content: Translated text (markdown or plain prose).
        formats: Formats to write.
        output_dir: Output directory (created if missing).
        stem: Original file name or stem used to name outputs.
        title: Document title for formats that carry one.
        language: Target language code.

    Returns:
        One ExportResult per format; a failed writer is reported, not raised.

    Raises:
        ValueError: If a format is unknown.
    """
    parsed = [_parse_format(fmt) for fmt in formats]
    output_dir = Path(output_dir)

    results = []
    for fmt in parsed:
        output_path = output_dir / generate_filename(stem, fmt.value)
        try:
            EXPORTERS[fmt]().export(content, output_path, title=title, language=language)
            results.append(ExportResult(format=fmt.value, output_path=output_path, success=True))
        except Exception as e:
            results.append(
                ExportResult(
                    format=fmt.value,
                    output_path=output_path,
                    success=False,
                    error=str(e),
                )
            )
    return results


__all__ = [
    "DOCXExporter",
    "EXPORTERS",
    "ExportResult",
    "HTMLExporter",
    "PDFExporter",
    "TextExporter",
    "export_text",
    "generate_filename",
]
