"""Tests for the typer CLI."""

import pytest
from typer.testing import CliRunner

from doc_translate_ai.cli import app
from doc_translate_ai.database import Database, TranslationRecord

runner = CliRunner()


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        f"""
paths:
  database_path: "{tmp_path / 'history.duckdb'}"
  output_dir: "{tmp_path / 'out'}"
"""
    )
    return path


def seed(tmp_path, text="Hola mundo"):
    db = Database(tmp_path / "history.duckdb")
    translation_id = db.add_translation(
        TranslationRecord(
            original_file_name="carta.pdf",
            target_language="es",
            translated_text=text,
            word_count=2,
            chunks_processed=1,
            successful_chunks=1,
        )
    )
    db.close()
    return translation_id


def test_init_writes_config(tmp_path):
    path = tmp_path / "config.yaml"

    result = runner.invoke(app, ["init", str(path)])

    assert result.exit_code == 0
    assert "chunking:" in path.read_text()


def test_history_empty(config_file):
    result = runner.invoke(app, ["history", "-c", str(config_file)])

    assert result.exit_code == 0
    assert "No translations found" in result.output


def test_history_and_show(tmp_path, config_file):
    translation_id = seed(tmp_path)

    history = runner.invoke(app, ["history", "-c", str(config_file)])
    show = runner.invoke(app, ["show", str(translation_id), "-c", str(config_file)])

    assert "carta.pdf" in history.output
    assert "Hola mundo" in show.output


def test_export_stored_translation(tmp_path, config_file):
    translation_id = seed(tmp_path)

    result = runner.invoke(
        app, ["export", str(translation_id), "-f", "txt", "-c", str(config_file)]
    )

    assert result.exit_code == 0
    assert (tmp_path / "out" / "carta_translated.txt").read_text(encoding="utf-8") == "Hola mundo\n"


def test_delete(tmp_path, config_file):
    translation_id = seed(tmp_path)

    result = runner.invoke(app, ["delete", str(translation_id), "-y", "-c", str(config_file)])
    again = runner.invoke(app, ["delete", str(translation_id), "-y", "-c", str(config_file)])

    assert result.exit_code == 0
    assert again.exit_code == 1


def test_translate_rejects_unsupported_file(tmp_path, config_file):
    path = tmp_path / "notes.txt"
    path.write_text("hello")

    result = runner.invoke(app, ["translate", str(path), "--no-save", "-c", str(config_file)])

    assert result.exit_code == 1
    assert "Unsupported file type" in result.output


def test_update_from_file(tmp_path, config_file):
    translation_id = seed(tmp_path)
    edited = tmp_path / "edited.md"
    edited.write_text("Hola mundo entero\n", encoding="utf-8")

    result = runner.invoke(
        app, ["update", str(translation_id), str(edited), "-c", str(config_file)]
    )

    assert result.exit_code == 0
    assert "3 words" in result.output
    db = Database(tmp_path / "history.duckdb")
    assert db.get_translation(translation_id).translated_text == "Hola mundo entero"
    db.close()


def test_update_unknown_id(tmp_path, config_file):
    edited = tmp_path / "edited.md"
    edited.write_text("texto", encoding="utf-8")

    result = runner.invoke(app, ["update", "7", str(edited), "-c", str(config_file)])

    assert result.exit_code == 1
    assert "not found" in result.output


def test_stats(tmp_path, config_file):
    seed(tmp_path)

    result = runner.invoke(app, ["stats", "-c", str(config_file)])

    assert result.exit_code == 0
    assert "Translations: 1" in result.output
    assert "Spanish (1)" in result.output
