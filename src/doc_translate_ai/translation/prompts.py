"""
Instruction prompts for chunk translation.

Two fidelity modes:
- standard: clean plain prose
- high-fidelity: structure-preserving markdown with heading rules
"""

from __future__ import annotations

LANGUAGE_NAMES = {
    "en": "English",
    "es": "Spanish",
    "fr": "French",
    "de": "German",
    "pt": "Portuguese",
    "it": "Italian",
    "nl": "Dutch",
    "sv": "Swedish",
    "da": "Danish",
    "no": "Norwegian",
    "fi": "Finnish",
    "pl": "Polish",
    "cs": "Czech",
    "tr": "Turkish",
    "el": "Greek",
    "ru": "Russian",
    "ar": "Arabic",
    "he": "Hebrew",
    "fa": "Persian",
    "ur": "Urdu",
    "hi": "Hindi",
    "mr": "Marathi",
    "bn": "Bengali",
    "ta": "Tamil",
    "te": "Telugu",
    "kn": "Kannada",
    "ml": "Malayalam",
    "gu": "Gujarati",
    "pa": "Punjabi",
    "or": "Odia",
    "si": "Sinhala",
    "zh": "Chinese",
    "ja": "Japanese",
    "ko": "Korean",
    "th": "Thai",
    "vi": "Vietnamese",
}

RTL_LANGUAGES = {"ar", "he", "fa", "ur"}


def language_name(code: str) -> str:
    """Display name for a language code; unknown codes are returned as given."""
    return LANGUAGE_NAMES.get(code.lower(), code)


def build_chunk_prompt(
    target_language: str,
    high_fidelity: bool,
    page_label: str | None = None,
    total_chunks: int = 1,
) -> str:
    """
    Build the instruction prompt for one chunk.

    Args:
        target_language: Target language code or name.
        high_fidelity: Request structure-preserving markdown instead of prose.
        page_label: Page range of this chunk, e.g. "pages 51-100".
        total_chunks: Number of chunks in the run (adds a continuity note when > 1).

    Returns:
        Prompt text.
    """
    target = language_name(target_language)

    part_note = ""
    if page_label and total_chunks > 1:
        part_note = (
            f"\nThe attached document contains {page_label} of a longer document that is "
            "being translated in parts. Translate only what is in this part and do not add "
            "introductions or summaries.\n"
        )

    if high_fidelity:
        format_rules = f"""3. FORMAT: Return the translated {target} text as markdown that preserves the document structure:
   - Use # only for the document title, ## for section headings, ### for subsections
   - Never skip heading levels and never turn body text into headings
   - Use **bold** for emphasized or label text and *italic* for secondary emphasis
   - Use - for bullet lists and 1. 2. 3. for numbered lists, keeping the original nesting
   - Reproduce tables as markdown tables with a header row
   - Keep paragraph breaks where the original has them"""
    else:
        format_rules = f"""3. FORMAT: Return ONLY the translated {target} text as continuous, well-formatted prose.
   - Keep paragraph breaks, drop decorative layout
   - No markdown syntax"""

    return f"""You are an expert multilingual translator. Analyze the attached document and perform these tasks:
{part_note}
1. EXTRACT TEXT: Extract ALL readable text from the document, including:
   - Complex scripts (Malayalam, Hindi, Arabic, Tamil, Telugu, Kannada, Chinese, ...)
   - Latin-script languages
   - Any text embedded in images (use OCR capabilities)
   - Headers, footers, footnotes, and all content areas

2. TRANSLATE: Translate the extracted text into natural, fluent {target} while:
   - Preserving the original meaning and context
   - Maintaining proper grammar and flow
   - Keeping technical terms and proper names in appropriate form
   - Handling cultural nuances correctly
   If the text is already in {target}, return it unchanged apart from formatting.

{format_rules}

4. NO COMMENTARY: No preambles, explanations, or phrases like "Here's the translation:".

5. EMPTY INPUT: If no meaningful text can be extracted, return an empty response."""
