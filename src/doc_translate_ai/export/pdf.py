"""
PDF exporter for translated text.

Uses markdown-pdf (PyMuPDF based) with a compact A4 stylesheet and RTL support.
"""

from __future__ import annotations

import re
from pathlib import Path

from markdown_pdf import MarkdownPdf, Section

from doc_translate_ai.export.common import is_rtl, normalize_bullets

_CSS = """
body {
    font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif;
    font-size: 10pt;
    line-height: 1.3;
    color: #333;
}

h1 {
    font-size: 15pt;
    color: #1a1a2e;
    border-bottom: 1px solid #4a90d9;
    padding-bottom: 4px;
}

h2 {
    font-size: 13pt;
    color: #16213e;
    border-bottom: 1px solid #ddd;
    padding-bottom: 3px;
}

h3 {
    font-size: 11pt;
    color: #1f4068;
}

p {
    text-align: justify;
    margin-top: 2px;
    margin-bottom: 4px;
}

table {
    border-spacing: 0;
    width: 100%;
    font-size: 9pt;
    border: 1px solid #000;
}

th, td {
    border: 0.5px solid #000;
    text-align: left;
    padding: 2px 4px;
}

th {
    font-weight: bold;
    border-bottom: 2px solid #666;
}

blockquote {
    border-left: 3px solid #4a90d9;
    padding: 4px 10px;
    font-style: italic;
}

hr {
    border: none;
    border-top: 1px solid #ddd;
    margin: 20px 0;
}
"""

_RTL_CSS = """
body {
    direction: rtl;
    text-align: right;
    font-family: 'Traditional Arabic', 'Simplified Arabic', 'Tahoma', sans-serif;
}

th, td {
    text-align: right;
}

blockquote {
    border-left: none;
    border-right: 3px solid #4a90d9;
}
"""


def sanitize_markdown_for_pdf(content: str) -> str:
    """
    Remove markdown patterns markdown-pdf cannot render.

    Anchor links to missing sections raise "No destination" errors, so
    ``[text](#anchor)`` and ``[text]()`` are reduced to their text.
    """
    content = normalize_bullets(content)
    content = re.sub(r"\[([^\]]+)\]\(#[^)]*\)", r"\1", content)
    content = re.sub(r"\[([^\]]+)\]\(\s*\)", r"\1", content)
    return content


class PDFExporter:
    """Writes the translation as a PDF."""

    extension = "pdf"

    def export(
        self,
        content: str,
        output_path: Path,
        title: str = "",
        language: str = "en",
    ) -> Path:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        css = _CSS + (_RTL_CSS if is_rtl(language) else "")

        body = sanitize_markdown_for_pdf(content)
        if title:
            body = f"# {title}\n\n{body}"

        # Single section so content flows across pages without forced breaks
        pdf = MarkdownPdf(toc_level=0)
        pdf.add_section(Section(body, toc=False), user_css=css)
        if title:
            pdf.meta["title"] = title
        pdf.meta["author"] = "doc-translate-ai"
        pdf.save(str(output_path))
        return output_path
