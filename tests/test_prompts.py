"""Tests for chunk prompts."""

from doc_translate_ai.translation.prompts import build_chunk_prompt, language_name


def test_language_name():
    assert language_name("es") == "Spanish"
    assert language_name("ML") == "Malayalam"
    assert language_name("Klingon") == "Klingon"


def test_standard_mode_asks_for_plain_prose():
    prompt = build_chunk_prompt("fr", high_fidelity=False)

    assert "French" in prompt
    assert "No markdown" in prompt


def test_high_fidelity_mode_asks_for_markdown_structure():
    prompt = build_chunk_prompt("fr", high_fidelity=True)

    assert "markdown" in prompt
    assert "## for section headings" in prompt


def test_part_note_only_for_multi_chunk_runs():
    single = build_chunk_prompt("en", False, page_label="pages 1-10", total_chunks=1)
    multi = build_chunk_prompt("en", False, page_label="pages 11-20", total_chunks=3)

    assert "pages 1-10" not in single
    assert "pages 11-20" in multi
