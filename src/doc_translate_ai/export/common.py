"""
Helpers shared by the exporters.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from doc_translate_ai.translation.prompts import RTL_LANGUAGES

_BULLETS = ("•", "●", "○", "▪", "▫", "◦")


@dataclass
class ExportResult:
    """Result of writing one output format."""

    format: str
    output_path: Path
    success: bool
    error: str | None = None


def is_rtl(language: str) -> bool:
    """True for right-to-left target languages."""
    return language.lower() in RTL_LANGUAGES


def sanitize_filename(name: str) -> str:
    """Sanitize filename for filesystem compatibility."""
    return "".join(c if c.isalnum() or c in "._- " else "_" for c in name)


def generate_filename(original_name: str, extension: str) -> str:
    """
    Output file name for a translated document.

    Example: ``report.pdf`` with ``docx`` gives ``report_translated.docx``.
    """
    stem = sanitize_filename(Path(original_name).stem) or "document"
    return f"{stem}_translated.{extension.lstrip('.')}"


def normalize_bullets(content: str) -> str:
    """Convert Unicode bullet characters to markdown list syntax."""
    result = []

    for line in content.split("\n"):
        stripped = line.lstrip()
        indent = line[: len(line) - len(stripped)]

        if stripped.startswith(_BULLETS) and len(stripped) > 1:
            result.append(f"{indent}- {stripped[1:].strip()}")
        else:
            result.append(line)

    return "\n".join(result)
