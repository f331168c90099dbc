"""
DOCX exporter for translated text.

Parses the markdown with mistune into an AST and writes each block to a
python-docx document. Right-to-left languages get right-aligned paragraphs.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import mistune
from docx import Document as DocxDocument
from docx.enum.table import WD_TABLE_ALIGNMENT
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml import parse_xml
from docx.oxml.ns import nsdecls
from docx.shared import Inches, Pt, RGBColor

from doc_translate_ai.export.common import is_rtl, normalize_bullets

if TYPE_CHECKING:
    from docx.document import Document
    from docx.text.paragraph import Paragraph


class DOCXExporter:
    """Writes the translation as a Word document."""

    extension = "docx"

    COLORS = {
        "primary": RGBColor(0x1A, 0x1A, 0x2E),  # Dark blue
        "secondary": RGBColor(0x4A, 0x90, 0xD9),  # Light blue
        "text": RGBColor(0x33, 0x33, 0x33),  # Dark gray
        "light": RGBColor(0x66, 0x66, 0x66),  # Medium gray
    }

    def export(
        self,
        content: str,
        output_path: Path,
        title: str = "",
        language: str = "en",
    ) -> Path:
        """
        Write a .docx file.

        Args:
            content: Translated markdown or plain text.
            output_path: Destination file.
            title: Optional title heading and document property.
            language: Target language code (controls text direction).

        Returns:
            The written path.
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        rtl = is_rtl(language)
        docx = DocxDocument()
        self._setup_styles(docx, rtl)

        if title:
            docx.core_properties.title = title
            heading = docx.add_heading(title, level=0)
            self._align(heading, rtl)

        self.render_markdown(docx, content, rtl)
        docx.save(str(output_path))
        return output_path

    def render_markdown(self, docx: Document, content: str, rtl: bool = False) -> None:
        """Parse markdown and append its blocks to the document."""
        md = mistune.create_markdown(renderer=None, plugins=["table", "strikethrough"])

        # Parse to AST - returns (tokens, state) tuple
        result = md.parse(normalize_bullets(content))
        tokens = result[0] if isinstance(result, tuple) else result

        self._render_tokens(docx, tokens, rtl)

    def _align(self, para: Paragraph, rtl: bool) -> None:
        if rtl:
            para.alignment = WD_ALIGN_PARAGRAPH.RIGHT

    def _render_tokens(self, docx: Document, tokens: list[dict[str, Any]], rtl: bool) -> None:
        """Render AST tokens to Word document."""
        for token in tokens:
            token_type = token.get("type")

            if token_type == "heading":
                level = min(token.get("attrs", {}).get("level", 1), 9)
                h = docx.add_heading(self._extract_text(token.get("children", [])), level=level)
                self._align(h, rtl)

            elif token_type == "paragraph":
                children = token.get("children", [])
                if children:
                    para = docx.add_paragraph()
                    self._render_inline(para, children)
                    self._align(para, rtl)

            elif token_type == "thematic_break":
                para = docx.add_paragraph()
                para.alignment = WD_ALIGN_PARAGRAPH.CENTER
                run = para.add_run("─" * 40)
                run.font.color.rgb = RGBColor(0xDD, 0xDD, 0xDD)

            elif token_type == "block_code":
                para = docx.add_paragraph()
                para.paragraph_format.left_indent = Inches(0.15)
                run = para.add_run(token.get("raw", ""))
                run.font.name = "Consolas"
                run.font.size = Pt(8)

            elif token_type == "list":
                ordered = token.get("attrs", {}).get("ordered", False)
                self._render_list(docx, token.get("children", []), ordered, rtl)

            elif token_type == "block_quote":
                para = docx.add_paragraph()
                if rtl:
                    para.paragraph_format.right_indent = Inches(0.5)
                else:
                    para.paragraph_format.left_indent = Inches(0.5)
                run = para.add_run(self._extract_text(token.get("children", [])))
                run.font.italic = True
                run.font.color.rgb = self.COLORS["light"]
                self._align(para, rtl)

            elif token_type == "table":
                self._render_table(docx, token, rtl)

    def _render_list(
        self,
        docx: Document,
        items: list[dict[str, Any]],
        ordered: bool,
        rtl: bool,
        level: int = 0,
    ) -> None:
        """Render a list with nesting."""
        style = "List Number" if ordered else "List Bullet"
        if level > 0:
            nested_style = f"{style} {min(level + 1, 3)}"
            try:
                docx.styles[nested_style]
                style = nested_style
            except KeyError:
                pass

        for item in items:
            if item.get("type") != "list_item":
                continue

            text_parts = []
            nested_lists = []
            for child in item.get("children", []):
                if child.get("type") == "list":
                    nested_lists.append(child)
                else:
                    text_parts.append(self._extract_text(child.get("children", [child])))

            text = " ".join(part for part in text_parts if part).strip()
            if text:
                para = docx.add_paragraph(text, style=style)
                self._align(para, rtl)

            for nested in nested_lists:
                self._render_list(
                    docx,
                    nested.get("children", []),
                    nested.get("attrs", {}).get("ordered", False),
                    rtl,
                    level + 1,
                )

    def _render_table(self, docx: Document, token: dict[str, Any], rtl: bool) -> None:
        """Render a markdown table to Word table."""
        # mistune: table -> table_head (cells) + table_body (rows of cells)
        rows_data: list[list[str]] = []
        for child in token.get("children", []):
            if child.get("type") == "table_head":
                rows_data.append(self._cell_texts(child))
            elif child.get("type") == "table_body":
                for row in child.get("children", []):
                    if row.get("type") == "table_row":
                        rows_data.append(self._cell_texts(row))

        rows_data = [row for row in rows_data if row]
        if not rows_data:
            return

        num_cols = max(len(row) for row in rows_data)
        table = docx.add_table(rows=len(rows_data), cols=num_cols)
        table.style = "Table Grid"
        table.alignment = WD_TABLE_ALIGNMENT.RIGHT if rtl else WD_TABLE_ALIGNMENT.LEFT

        for i, row_data in enumerate(rows_data):
            for j, cell_text in enumerate(row_data):
                cell = table.rows[i].cells[j]
                cell.text = ""
                run = cell.paragraphs[0].add_run(cell_text)
                run.font.size = Pt(9)

                # Header row
                if i == 0:
                    run.font.bold = True
                    shading = parse_xml(f'<w:shd {nsdecls("w")} w:fill="F5F5F5"/>')
                    cell._tc.get_or_add_tcPr().append(shading)

        docx.add_paragraph()

    def _cell_texts(self, row: dict[str, Any]) -> list[str]:
        return [
            self._extract_text(cell.get("children", []))
            for cell in row.get("children", [])
            if cell.get("type") == "table_cell"
        ]

    def _render_inline(self, para: Paragraph, children: list[dict[str, Any]]) -> None:
        """Render inline content (text, bold, italic, code, links)."""
        for child in children:
            child_type = child.get("type")

            if child_type == "text":
                para.add_run(child.get("raw", ""))

            elif child_type == "strong":
                run = para.add_run(self._extract_text(child.get("children", [])))
                run.font.bold = True

            elif child_type == "emphasis":
                run = para.add_run(self._extract_text(child.get("children", [])))
                run.font.italic = True

            elif child_type == "codespan":
                run = para.add_run(child.get("raw", ""))
                run.font.name = "Consolas"
                run.font.size = Pt(9)

            elif child_type == "softbreak":
                para.add_run(" ")

            elif child_type == "linebreak":
                para.add_run("\n")

            else:
                text = self._extract_text([child])
                if text:
                    para.add_run(text)

    def _extract_text(self, children: list[dict[str, Any]]) -> str:
        """Extract plain text from nested token structure."""
        parts = []
        for child in children:
            if child.get("type") == "text":
                parts.append(child.get("raw", ""))
            elif "children" in child:
                parts.append(self._extract_text(child["children"]))
            elif "raw" in child:
                parts.append(child["raw"])
        return "".join(parts)

    def _setup_styles(self, docx: Document, rtl: bool) -> None:
        """Body and heading styles."""
        styles = docx.styles

        normal_style = styles["Normal"]
        normal_style.font.size = Pt(10)
        normal_style.font.color.rgb = self.COLORS["text"]
        normal_style.paragraph_format.space_after = Pt(4)
        normal_style.paragraph_format.line_spacing = 1.15
        if rtl:
            normal_style.paragraph_format.alignment = WD_ALIGN_PARAGRAPH.RIGHT

        heading_sizes = {1: 14, 2: 12, 3: 11}
        for level, size in heading_sizes.items():
            h_style = styles[f"Heading {level}"]
            h_style.font.size = Pt(size)
            h_style.font.color.rgb = (
                self.COLORS["primary"] if level == 1 else self.COLORS["secondary"]
            )
