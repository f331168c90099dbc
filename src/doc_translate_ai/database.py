"""
DuckDB database operations for doc-translate-ai.

Handles translation history and the processing log.
"""

from __future__ import annotations

import json
import uuid
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

import duckdb

from doc_translate_ai.translation.assembler import TranslationOutcome, count_words


class Stage(str, Enum):
    """Processing stages used to tag log entries."""

    VALIDATE = "validate"
    TRANSLATE = "translate"
    SAVE = "save"
    EXPORT = "export"


@dataclass
class TranslationRecord:
    """Stored translation."""

    id: int | None = None
    original_file_name: str = ""
    mime_type: str = ""
    file_size: int = 0
    page_count: int = 0
    target_language: str = ""
    high_fidelity: bool = False
    translated_text: str = ""
    word_count: int = 0
    char_count: int = 0
    chunks_processed: int = 0
    successful_chunks: int = 0
    processing_method: str = "ai-powered"
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_outcome(
        cls,
        outcome: TranslationOutcome,
        mime_type: str = "",
        file_size: int = 0,
    ) -> TranslationRecord:
        return cls(
            original_file_name=outcome.file_name,
            mime_type=mime_type,
            file_size=file_size,
            page_count=outcome.total_pages,
            target_language=outcome.target_language,
            high_fidelity=outcome.high_fidelity,
            translated_text=outcome.text,
            word_count=outcome.word_count,
            char_count=outcome.char_count,
            chunks_processed=outcome.chunks_processed,
            successful_chunks=outcome.successful_chunks,
            processing_method=outcome.processing_method,
        )


class Database:
    """DuckDB database wrapper for doc-translate-ai."""

    _SCHEMA = """
    -- Translation history
    CREATE TABLE IF NOT EXISTS translations (
        id INTEGER PRIMARY KEY,
        original_file_name VARCHAR NOT NULL,
        mime_type VARCHAR,
        file_size BIGINT DEFAULT 0,
        page_count INTEGER DEFAULT 0,
        target_language VARCHAR NOT NULL,
        high_fidelity BOOLEAN DEFAULT FALSE,
        translated_text TEXT NOT NULL,
        word_count INTEGER DEFAULT 0,
        char_count INTEGER DEFAULT 0,
        chunks_processed INTEGER DEFAULT 0,
        successful_chunks INTEGER DEFAULT 0,
        processing_method VARCHAR,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    );

    CREATE SEQUENCE IF NOT EXISTS translations_id_seq START 1;

    -- Processing log for audit trail
    CREATE TABLE IF NOT EXISTS processing_log (
        id INTEGER PRIMARY KEY,
        run_id VARCHAR NOT NULL,
        translation_id INTEGER,
        stage VARCHAR NOT NULL,
        level VARCHAR NOT NULL,
        message TEXT NOT NULL,
        context JSON,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    );

    CREATE SEQUENCE IF NOT EXISTS processing_log_id_seq START 1;

    CREATE INDEX IF NOT EXISTS idx_translations_language ON translations(target_language);
    CREATE INDEX IF NOT EXISTS idx_log_lookup ON processing_log(run_id, stage, level);
    """

    _COLUMNS = (
        "id, original_file_name, mime_type, file_size, page_count, target_language, "
        "high_fidelity, translated_text, word_count, char_count, chunks_processed, "
        "successful_chunks, processing_method, created_at, updated_at"
    )

    def __init__(self, db_path: Path | str):
        """Initialize database connection."""
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn: duckdb.DuckDBPyConnection | None = None
        self._run_id = str(uuid.uuid4())

    @property
    def conn(self) -> duckdb.DuckDBPyConnection:
        """Get or create database connection."""
        if self._conn is None:
            self._conn = duckdb.connect(str(self.db_path))
            self._conn.execute(self._SCHEMA)
        return self._conn

    @property
    def run_id(self) -> str:
        """Get current run ID."""
        return self._run_id

    def new_run(self) -> str:
        """Start a new run and return its ID."""
        self._run_id = str(uuid.uuid4())
        return self._run_id

    def close(self) -> None:
        """Close database connection."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    # ==================== Translations ====================

    def add_translation(self, record: TranslationRecord) -> int:
        """Store a translation and return its ID."""
        result = self.conn.execute(
            """
            INSERT INTO translations (
                id, original_file_name, mime_type, file_size, page_count, target_language,
                high_fidelity, translated_text, word_count, char_count, chunks_processed,
                successful_chunks, processing_method
            )
            VALUES (nextval('translations_id_seq'), ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            RETURNING id
            """,
            [
                record.original_file_name,
                record.mime_type,
                record.file_size,
                record.page_count,
                record.target_language,
                record.high_fidelity,
                record.translated_text,
                record.word_count,
                record.char_count,
                record.chunks_processed,
                record.successful_chunks,
                record.processing_method,
            ],
        ).fetchone()
        return result[0] if result else 0

    def get_translation(self, translation_id: int) -> TranslationRecord | None:
        """Get a translation by ID."""
        row = self.conn.execute(
            f"SELECT {self._COLUMNS} FROM translations WHERE id = ?", [translation_id]
        ).fetchone()
        if row:
            return self._row_to_translation(row)
        return None

    def list_translations(
        self,
        limit: int = 50,
        offset: int = 0,
        target_language: str | None = None,
    ) -> list[TranslationRecord]:
        """List translations, newest first."""
        where_clause = "WHERE target_language = ?" if target_language else ""
        params: list = [target_language] if target_language else []

        rows = self.conn.execute(
            f"""
            SELECT {self._COLUMNS}
            FROM translations
            {where_clause}
            ORDER BY created_at DESC, id DESC
            LIMIT ? OFFSET ?
            """,
            [*params, limit, offset],
        ).fetchall()
        return [self._row_to_translation(row) for row in rows]

    def update_translation_text(self, translation_id: int, text: str) -> bool:
        """
        Replace the translated text of a stored translation.

        Returns:
            False if no translation has that ID.
        """
        if self.get_translation(translation_id) is None:
            return False

        text = text.strip()
        self.conn.execute(
            """
            UPDATE translations
            SET translated_text = ?, word_count = ?, char_count = ?,
                updated_at = CURRENT_TIMESTAMP
            WHERE id = ?
            """,
            [text, count_words(text), len(text), translation_id],
        )
        return True

    def delete_translation(self, translation_id: int) -> bool:
        """Delete a translation. Returns False if it did not exist."""
        if self.get_translation(translation_id) is None:
            return False
        self.conn.execute("DELETE FROM translations WHERE id = ?", [translation_id])
        return True

    def _row_to_translation(self, row: tuple) -> TranslationRecord:
        """Convert database row to TranslationRecord."""
        return TranslationRecord(
            id=row[0],
            original_file_name=row[1],
            mime_type=row[2] or "",
            file_size=row[3] or 0,
            page_count=row[4] or 0,
            target_language=row[5],
            high_fidelity=bool(row[6]),
            translated_text=row[7],
            word_count=row[8] or 0,
            char_count=row[9] or 0,
            chunks_processed=row[10] or 0,
            successful_chunks=row[11] or 0,
            processing_method=row[12] or "",
            created_at=row[13],
            updated_at=row[14],
        )

    # ==================== Logging ====================

    def log(
        self,
        level: str,
        stage: str,
        message: str,
        translation_id: int | None = None,
        context: dict | None = None,
    ) -> None:
        """Insert a log entry."""
        context_json = json.dumps(context, default=str) if context else None
        self.conn.execute(
            """
            INSERT INTO processing_log
            (id, run_id, translation_id, stage, level, message, context)
            VALUES (nextval('processing_log_id_seq'), ?, ?, ?, ?, ?, ?)
            """,
            [self._run_id, translation_id, stage, level, message, context_json],
        )

    def get_logs(
        self,
        run_id: str | None = None,
        level: str | None = None,
        stage: str | None = None,
        limit: int = 100,
    ) -> list[dict]:
        """Get log entries, newest first."""
        conditions = []
        params = []

        if run_id:
            conditions.append("run_id = ?")
            params.append(run_id)
        if level:
            conditions.append("level = ?")
            params.append(level.upper())
        if stage:
            conditions.append("stage = ?")
            params.append(stage)

        where_clause = f"WHERE {' AND '.join(conditions)}" if conditions else ""

        rows = self.conn.execute(
            f"""
            SELECT run_id, translation_id, stage, level, message, context, created_at
            FROM processing_log
            {where_clause}
            ORDER BY created_at DESC, id DESC
            LIMIT ?
            """,
            [*params, limit],
        ).fetchall()

        return [
            {
                "run_id": row[0],
                "translation_id": row[1],
                "stage": row[2],
                "level": row[3],
                "message": row[4],
                "context": json.loads(row[5]) if row[5] else None,
                "created_at": row[6],
            }
            for row in rows
        ]

    def get_statistics(self) -> dict:
        """Summary counts for the CLI."""
        total, words = self.conn.execute(
            "SELECT COUNT(*), COALESCE(SUM(word_count), 0) FROM translations"
        ).fetchone()
        languages = self.conn.execute(
            "SELECT target_language, COUNT(*) FROM translations GROUP BY target_language "
            "ORDER BY COUNT(*) DESC"
        ).fetchall()
        errors = self.conn.execute(
            "SELECT COUNT(*) FROM processing_log WHERE level = 'ERROR'"
        ).fetchone()[0]

        return {
            "total_translations": total,
            "total_words": words,
            "languages": {row[0]: row[1] for row in languages},
            "errors": errors,
        }
