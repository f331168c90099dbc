"""Tests for final result assembly."""

from doc_translate_ai.translation import ChunkResult, ChunkSpec, ChunkStatus, ResultAssembler
from doc_translate_ai.translation.assembler import count_words


def test_count_words_splits_on_whitespace_runs():
    assert count_words("  one\ttwo\n\nthree   four ") == 4
    assert count_words("") == 0


def test_assemble_counts():
    results = [
        ChunkResult(ChunkSpec(1, 0, 3), ChunkStatus.SUCCESS, text="مرحبا بالعالم"),
        ChunkResult(ChunkSpec(2, 3, 6), ChunkStatus.FAILED, error="timeout"),
        ChunkResult(ChunkSpec(3, 6, 8), ChunkStatus.EMPTY),
    ]

    outcome = ResultAssembler().assemble(
        "  مرحبا بالعالم \n", results, total_pages=8, target_language="ar", file_name="x.pdf"
    )

    assert outcome.text == "مرحبا بالعالم"
    assert outcome.word_count == 2
    assert outcome.char_count == len("مرحبا بالعالم")
    assert outcome.chunks_processed == 3
    assert outcome.successful_chunks == 1
    assert outcome.pages_processed == 5
    assert outcome.failed_page_ranges == [(3, 6)]
    assert outcome.processing_method == "ai-powered"


def test_to_dict_is_json_friendly():
    outcome = ResultAssembler().assemble(
        "text",
        [ChunkResult(ChunkSpec(1, 0, 1), ChunkStatus.FAILED)],
        total_pages=1,
    )

    data = outcome.to_dict()

    assert data["failed_page_ranges"] == [[0, 1]]
    assert data["translation_id"] is None
