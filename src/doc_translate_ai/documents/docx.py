"""
Virtual pagination for DOCX files.

Uses python-docx to read the document structure. DOCX has no fixed pages, so
content blocks are grouped into pages of roughly WORDS_PER_PAGE words and a
page range is sent to the model as markdown text.
"""

from __future__ import annotations

import hashlib
import io
import zipfile

from docx import Document
from docx.document import Document as DocxDocument
from docx.opc.exceptions import PackageNotFoundError
from docx.table import Table
from docx.text.paragraph import Paragraph

from doc_translate_ai.config import DOCX_MIME_TYPE
from doc_translate_ai.documents.base import ChunkPayload, DocumentPager
from doc_translate_ai.errors import UnsupportedFileTypeError

# Rough estimate: ~500 words per printed page
WORDS_PER_PAGE = 500

TEXT_MIME_TYPE = "text/markdown"


class DocxPager(DocumentPager):
    """
    Split DOCX documents into word-count based virtual pages.

    Preserves basic formatting (headings, lists, tables) as markdown.
    """

    def __init__(self, words_per_page: int = WORDS_PER_PAGE):
        self.words_per_page = words_per_page
        # Pages of the most recently paginated document, keyed by content digest
        self._cached: tuple[bytes, list[list[str]]] | None = None

    @property
    def name(self) -> str:
        return "docx_direct"

    def can_handle(self, mime_type: str) -> bool:
        return mime_type == DOCX_MIME_TYPE

    def page_count(self, content: bytes) -> int:
        if not content:
            return 0
        return len(self.paginate(content))

    def extract_page_range(self, content: bytes, start: int, end: int) -> ChunkPayload:
        pages = self.paginate(content)
        self._check_range(start, end, len(pages))

        blocks = [block for page in pages[start:end] for block in page]
        return ChunkPayload(
            data="\n\n".join(blocks).encode("utf-8"),
            mime_type=TEXT_MIME_TYPE,
        )

    def paginate(self, content: bytes) -> list[list[str]]:
        """
        Group markdown blocks into pages; a document without text has none.

        Pages of the last document seen are reused without re-parsing.
        """
        digest = hashlib.sha256(content).digest()
        if self._cached is not None and self._cached[0] == digest:
            return self._cached[1]

        pages: list[list[str]] = []
        current: list[str] = []
        words = 0

        for block in self._extract_blocks(self._load(content)):
            current.append(block)
            words += len(block.split())
            if words >= self.words_per_page:
                pages.append(current)
                current = []
                words = 0

        if current:
            pages.append(current)

        self._cached = (digest, pages)
        return pages

    def _load(self, content: bytes) -> DocxDocument:
        try:
            return Document(io.BytesIO(content))
        except (PackageNotFoundError, zipfile.BadZipFile, KeyError, ValueError) as e:
            raise UnsupportedFileTypeError(
                DOCX_MIME_TYPE, "File does not appear to be a valid Word document"
            ) from e

    def _extract_blocks(self, doc: DocxDocument) -> list[str]:
        """Convert body paragraphs and tables to markdown blocks in document order."""
        paragraphs = {para._element: para for para in doc.paragraphs}
        tables = {table._element: table for table in doc.tables}
        blocks: list[str] = []

        for element in doc.element.body:
            if element in paragraphs:
                block = self._paragraph_to_markdown(paragraphs[element])
            elif element in tables:
                block = self._table_to_markdown(tables[element])
            else:
                continue
            if block:
                blocks.append(block)

        return blocks

    def _paragraph_to_markdown(self, para: Paragraph) -> str:
        text = para.text.strip()
        if not text:
            return ""

        style_name = para.style.name if para.style is not None else ""
        if style_name.startswith("Heading"):
            try:
                level = int(style_name.replace("Heading ", "").replace("Heading", "1"))
                level = min(level, 6)  # Max 6 levels in markdown
            except ValueError:
                level = 1
            return f"{'#' * level} {text}"
        if style_name == "Title":
            return f"# {text}"
        if style_name == "Subtitle":
            return f"## {text}"
        if "List" in style_name:
            return f"- {text}"
        return text

    def _table_to_markdown(self, table: Table) -> str:
        """Convert a DOCX table to markdown format."""
        rows = []
        for row in table.rows:
            cells = [cell.text.strip().replace("\n", " ") for cell in row.cells]
            rows.append("| " + " | ".join(cells) + " |")

        if rows:
            # Add header separator after first row
            num_cols = len(table.rows[0].cells)
            rows.insert(1, "| " + " | ".join(["---"] * num_cols) + " |")

        return "\n".join(rows)
