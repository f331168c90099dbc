"""
Plain text exporter.
"""

from __future__ import annotations

from pathlib import Path


class TextExporter:
    """Writes the translation as UTF-8 text."""

    extension = "txt"

    def export(
        self,
        content: str,
        output_path: Path,
        title: str = "",
        language: str = "en",
    ) -> Path:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content.rstrip() + "\n", encoding="utf-8")
        return output_path
