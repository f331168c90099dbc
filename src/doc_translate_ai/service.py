"""
Document translation service.

The entry point used by the CLI and by library callers: validates an upload,
runs the chunked pipeline, stores the result, and exports it.
"""

from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import Any

from rich.console import Console

from doc_translate_ai.config import LOG_LEVELS, ExportFormat, Settings, load_config
from doc_translate_ai.database import Database, Stage, TranslationRecord
from doc_translate_ai.documents import load_source_document
from doc_translate_ai.errors import DocTranslateError
from doc_translate_ai.export import ExportResult, export_text
from doc_translate_ai.llm import LLMProvider, create_llm_provider
from doc_translate_ai.translation import (
    CancellationToken,
    ChunkedTranslationOrchestrator,
    ProgressCallback,
    TranslationOutcome,
    count_words,
)
from doc_translate_ai.translation.attempt import LogCallback
from doc_translate_ai.translation.cancellation import SleepFunc
from doc_translate_ai.validation import UploadedFile, validate_upload

_LEVEL_STYLES = {"DEBUG": "dim", "INFO": "cyan", "WARNING": "yellow", "ERROR": "red"}


class DocumentTranslationService:
    """
    Translates uploaded documents and keeps a history of results.

    The LLM provider and database are owned by whoever creates the service;
    both can be injected, otherwise they are built from settings on first use.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        provider: LLMProvider | None = None,
        db: Database | None = None,
        *,
        sleep: SleepFunc | None = None,
        log_callback: LogCallback = None,
        console: Console | None = None,
    ):
        """
        Initialize the service.

        Args:
            settings: Application settings (defaults when omitted).
            provider: Translation backend; created from settings when omitted.
            db: History database; nothing is persisted when omitted.
            sleep: Replacement for the delay coroutine (tests).
            log_callback: Extra receiver for log entries.
            console: Console used when console logging is enabled.
        """
        self.settings = settings or Settings()
        self.db = db
        self._provider = provider
        self._sleep = sleep
        self._log_callback = log_callback
        self._console = console or Console(stderr=True)
        self._min_level = LOG_LEVELS[self.settings.logging.level]

    @property
    def provider(self) -> LLMProvider:
        """Translation backend, created on first use."""
        if self._provider is None:
            cfg = self.settings.translation
            self._provider = create_llm_provider(
                cfg.provider.value,
                api_key=cfg.openrouter_api_key,
                model=cfg.model,
                base_url=cfg.base_url,
                timeout=cfg.timeout_seconds,
            )
        return self._provider

    def _log(
        self,
        level: str,
        stage: Stage,
        message: str,
        context: dict[str, Any] | None = None,
        translation_id: int | None = None,
    ) -> None:
        """Route a log entry to the database, the console and the extra callback."""
        if LOG_LEVELS.get(level, 0) < self._min_level:
            return

        if self.db is not None:
            self.db.log(level, stage.value, message, translation_id=translation_id, context=context)
        if self.settings.logging.console:
            style = _LEVEL_STYLES.get(level, "white")
            self._console.print(f"[{style}]{level:<7}[/{style}] {message}")
        if self._log_callback:
            self._log_callback(level, message, context or {})

    def _stage_logger(self, stage: Stage) -> LogCallback:
        def log(level: str, message: str, context: dict[str, Any]) -> None:
            self._log(level, stage, message, context)

        return log

    def create_orchestrator(self, **overrides: Any) -> ChunkedTranslationOrchestrator:
        """Build an orchestrator wired to this service's provider and log."""
        kwargs: dict[str, Any] = {
            "sleep": self._sleep,
            "log_callback": self._stage_logger(Stage.TRANSLATE),
        }
        kwargs.update(overrides)
        return ChunkedTranslationOrchestrator.from_settings(self.settings, self.provider, **kwargs)

    async def translate_document(
        self,
        file: UploadedFile | None,
        target_language: str | None = None,
        high_fidelity: bool | None = None,
        *,
        progress_callback: ProgressCallback = None,
        cancel_token: CancellationToken | None = None,
        save: bool = True,
    ) -> TranslationOutcome:
        """
        Translate one uploaded file.

        Args:
            file: Uploaded file.
            target_language: Target language code (settings default when None).
            high_fidelity: Fidelity mode (settings default when None).
            progress_callback: Optional callback for progress updates.
            cancel_token: Optional cancellation signal.
            save: Store the result in the history database.

        Returns:
            TranslationOutcome (with translation_id set when stored).

        Raises:
            InputValidationError: If the upload is rejected.
            NoTranslatableContentError: If no text could be produced.
            UpstreamServiceError: If every chunk failed upstream (when configured).
            TranslationCancelledError: If cancelled.
        """
        if self.db is not None:
            self.db.new_run()

        cfg = self.settings.translation
        target_language = target_language or cfg.target_language
        if high_fidelity is None:
            high_fidelity = cfg.high_fidelity

        try:
            validate_upload(
                file,
                max_size_bytes=self.settings.upload.max_file_size_bytes,
                allowed_types=self.settings.upload.allowed_mime_types,
            )
            doc = load_source_document(file.content, file.mime_type, file.file_name)
        except DocTranslateError as e:
            self._log("WARNING", Stage.VALIDATE, f"Upload rejected: {e.message}", e.to_dict())
            raise

        self._log(
            "INFO",
            Stage.VALIDATE,
            f"Accepted {doc.file_name} ({doc.mime_type}, {doc.size_bytes} bytes, "
            f"{doc.page_count} pages)",
            {"file_name": doc.file_name, "mime_type": doc.mime_type, "size_bytes": doc.size_bytes},
        )

        orchestrator = self.create_orchestrator()
        try:
            outcome = await orchestrator.translate(
                doc,
                target_language,
                high_fidelity,
                progress_callback=progress_callback,
                cancel_token=cancel_token,
            )
        except DocTranslateError as e:
            level = "WARNING" if e.code == "cancelled" else "ERROR"
            self._log(level, Stage.TRANSLATE, f"Translation failed: {e.message}", e.to_dict())
            raise

        if save and self.db is not None:
            record = TranslationRecord.from_outcome(
                outcome, mime_type=doc.mime_type, file_size=doc.size_bytes
            )
            translation_id = self.db.add_translation(record)
            outcome = dataclasses.replace(outcome, translation_id=translation_id)
            self._log(
                "INFO",
                Stage.SAVE,
                f"Saved translation #{translation_id}",
                {"words": outcome.word_count},
                translation_id=translation_id,
            )

        return outcome

    def update_translation(self, translation_id: int, text: str) -> bool:
        """
        Replace a stored translation with edited text.

        Returns:
            False if no translation has that ID.

        Raises:
            ValueError: If the service has no history database.
        """
        if self.db is None:
            raise ValueError("No history database configured")

        if not self.db.update_translation_text(translation_id, text):
            self._log(
                "WARNING",
                Stage.SAVE,
                f"Translation #{translation_id} not found",
                translation_id=translation_id,
            )
            return False

        self._log(
            "INFO",
            Stage.SAVE,
            f"Updated translation #{translation_id}",
            {"words": count_words(text)},
            translation_id=translation_id,
        )
        return True

    def export(
        self,
        outcome_or_text: TranslationOutcome | str,
        formats: list[ExportFormat | str] | None = None,
        output_dir: Path | str | None = None,
        stem: str | None = None,
        language: str | None = None,
    ) -> list[ExportResult]:
        """
        Write a translation to disk.

        Args:
            outcome_or_text: Outcome from translate_document, or raw text.
            formats: Output formats (settings default when None).
            output_dir: Output directory (settings default when None).
            stem: Original file name used to name outputs.
            language: Target language code for text direction.

        Returns:
            One ExportResult per format.
        """
        if isinstance(outcome_or_text, TranslationOutcome):
            text = outcome_or_text.text
            stem = stem or outcome_or_text.file_name
            language = language or outcome_or_text.target_language
            translation_id = outcome_or_text.translation_id
        else:
            text = outcome_or_text
            translation_id = None

        stem = stem or "document"
        results = export_text(
            text,
            formats or list(self.settings.export.formats),
            output_dir or self.settings.paths.output_dir,
            stem=stem,
            title=Path(stem).stem,
            language=language or self.settings.translation.target_language,
        )

        for result in results:
            if result.success:
                self._log(
                    "INFO",
                    Stage.EXPORT,
                    f"Exported {result.format.upper()} to {result.output_path}",
                    translation_id=translation_id,
                )
            else:
                self._log(
                    "ERROR",
                    Stage.EXPORT,
                    f"{result.format.upper()} export failed: {result.error}",
                    {"format": result.format, "error": result.error},
                    translation_id=translation_id,
                )
        return results


async def translate_document(
    file: UploadedFile | Path | str,
    target_language: str | None = None,
    high_fidelity: bool | None = None,
    *,
    config_path: Path | str | None = None,
    provider: LLMProvider | None = None,
    progress_callback: ProgressCallback = None,
    cancel_token: CancellationToken | None = None,
) -> TranslationOutcome:
    """
    Translate a file with settings from the nearest config file.

    Nothing is stored; use DocumentTranslationService for history.

    Args:
        file: Uploaded file or path to one.
        target_language: Target language code.
        high_fidelity: Fidelity mode.
        config_path: Explicit config file.
        provider: Translation backend override.
        progress_callback: Optional callback for progress updates.
        cancel_token: Optional cancellation signal.
    """
    if not isinstance(file, UploadedFile):
        file = UploadedFile.from_path(file)

    service = DocumentTranslationService(load_config(config_path), provider=provider)
    return await service.translate_document(
        file,
        target_language,
        high_fidelity,
        progress_callback=progress_callback,
        cancel_token=cancel_token,
        save=False,
    )
