"""
HTML exporter.

Renders the translated markdown into a standalone page with mistune.
"""

from __future__ import annotations

import html
from pathlib import Path

import mistune

from doc_translate_ai.export.common import is_rtl, normalize_bullets

_CSS = """
body {
    font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif;
    max-width: 820px;
    margin: 2em auto;
    padding: 0 1em;
    line-height: 1.5;
    color: #333;
}
h1 { color: #1a1a2e; border-bottom: 1px solid #4a90d9; padding-bottom: 4px; }
h2 { color: #16213e; border-bottom: 1px solid #ddd; padding-bottom: 3px; }
h3 { color: #1f4068; }
table { border-collapse: collapse; width: 100%; margin: 1em 0; }
th, td { border: 1px solid #999; padding: 4px 8px; text-align: start; }
th { background: #f5f5f5; }
blockquote { border-inline-start: 3px solid #4a90d9; margin: 1em 0; padding: 4px 12px; color: #666; }
hr { border: none; border-top: 1px solid #ddd; margin: 2em 0; }
code { background: #f4f4f4; padding: 1px 3px; border-radius: 2px; }
"""


class HTMLExporter:
    """Writes the translation as an HTML page."""

    extension = "html"

    def __init__(self) -> None:
        self._markdown = mistune.create_markdown(
            escape=True, plugins=["table", "strikethrough"]
        )

    def render(self, content: str, title: str = "", language: str = "en") -> str:
        """Render markdown content to a full HTML document."""
        body = self._markdown(normalize_bullets(content))
        direction = "rtl" if is_rtl(language) else "ltr"
        safe_title = html.escape(title or "Translation")

        return f"""<!DOCTYPE html>
<html lang="{html.escape(language)}" dir="{direction}">
<head>
<meta charset="utf-8">
<title>{safe_title}</title>
<style>{_CSS}</style>
</head>
<body>
{body}
</body>
</html>
"""

    def export(
        self,
        content: str,
        output_path: Path,
        title: str = "",
        language: str = "en",
    ) -> Path:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.render(content, title, language), encoding="utf-8")
        return output_path
