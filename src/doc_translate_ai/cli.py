"""
CLI for doc-translate-ai.

Provides commands for translating documents, browsing translation history,
re-exporting stored translations, and viewing processing logs.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table

from doc_translate_ai.config import Settings, create_default_config, load_config
from doc_translate_ai.database import Database
from doc_translate_ai.errors import DocTranslateError
from doc_translate_ai.export import ExportResult
from doc_translate_ai.service import DocumentTranslationService
from doc_translate_ai.translation import ProgressInfo, TranslationOutcome
from doc_translate_ai.translation.prompts import language_name
from doc_translate_ai.validation import UploadedFile

app = typer.Typer(
    name="doc-translate",
    help="AI-powered translation of PDFs, Word documents and images.",
    add_completion=False,
)

console = Console()


def get_settings(config_path: Path | None = None) -> Settings:
    """Load settings from config file or defaults."""
    if config_path and config_path.exists():
        return load_config(config_path)
    return load_config()


def get_database(settings: Settings) -> Database:
    """Get database instance."""
    return Database(settings.paths.database_path)


def _print_exports(results: list[ExportResult]) -> None:
    for result in results:
        if result.success:
            console.print(f"  [green]✓[/green] {result.format.upper()}: {result.output_path}")
        else:
            console.print(f"  [red]✗[/red] {result.format.upper()}: {result.error}")


def _print_summary(outcome: TranslationOutcome) -> None:
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Key", style="cyan")
    table.add_column("Value")

    table.add_row("File", outcome.file_name)
    table.add_row("Language", language_name(outcome.target_language))
    table.add_row("Mode", "high fidelity" if outcome.high_fidelity else "standard")
    table.add_row("Pages", f"{outcome.pages_processed}/{outcome.total_pages}")
    table.add_row("Chunks", f"{outcome.successful_chunks}/{outcome.chunks_processed}")
    table.add_row("Words", str(outcome.word_count))
    table.add_row("Characters", str(outcome.char_count))
    if outcome.translation_id is not None:
        table.add_row("Saved as", f"#{outcome.translation_id}")
    if outcome.failed_page_ranges:
        ranges = ", ".join(f"{start + 1}-{end}" for start, end in outcome.failed_page_ranges)
        table.add_row("Failed pages", f"[red]{ranges}[/red]")

    style = "yellow" if outcome.is_partial else "green"
    title = "Partial translation" if outcome.is_partial else "Translation complete"
    console.print(Panel(table, title=f"[bold {style}]{title}[/bold {style}]", border_style=style))


@app.command()
def translate(
    file: Path = typer.Argument(..., help="PDF, Word document or image to translate"),
    target: str | None = typer.Option(None, "--target", "-t", help="Target language code"),
    high_fidelity: bool | None = typer.Option(
        None,
        "--high-fidelity/--standard",
        help="Structure-preserving markdown instead of plain prose",
    ),
    formats: list[str] | None = typer.Option(
        None, "--format", "-f", help="Export format (txt, html, docx, pdf); repeatable"
    ),
    output_dir: Path | None = typer.Option(None, "--output", "-o", help="Output directory"),
    chunk_size: int | None = typer.Option(
        None, "--chunk-size", min=1, help="Force pages per request"
    ),
    no_save: bool = typer.Option(False, "--no-save", help="Do not store in history"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """Translate a document."""
    settings = get_settings(config)
    if chunk_size is not None:
        settings.chunking.fixed_chunk_pages = chunk_size

    db = None if no_save else get_database(settings)

    try:
        upload = UploadedFile.from_path(file)
        service = DocumentTranslationService(settings, db=db)

        with Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(complete_style="green", finished_style="green"),
            TaskProgressColumn(),
            TextColumn("{task.fields[detail]}", style="dim"),
            TimeElapsedColumn(),
            console=console,
        ) as progress:
            task = progress.add_task("[cyan]Preparing...", total=100, detail="")

            def on_progress(info: ProgressInfo) -> None:
                if info.chunk_current and info.chunk_total:
                    detail = f"chunk {info.chunk_current}/{info.chunk_total}"
                    if info.page_start and info.page_end:
                        detail += f" (pages {info.page_start}-{info.page_end})"
                else:
                    detail = info.detail or ""
                progress.update(
                    task,
                    completed=info.percent,
                    description=f"[cyan]{info.stage_display}",
                    detail=detail,
                )

            outcome = asyncio.run(
                service.translate_document(
                    upload,
                    target,
                    high_fidelity,
                    progress_callback=on_progress,
                    save=not no_save,
                )
            )

        _print_summary(outcome)

        if formats or settings.export.auto_export:
            console.print("\n[bold]Exports[/bold]")
            _print_exports(service.export(outcome, formats or None, output_dir))

    except DocTranslateError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        if e.details:
            console.print(f"[dim]{e.details}[/dim]")
        raise typer.Exit(1) from None
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None
    finally:
        if db is not None:
            db.close()


@app.command()
def history(
    limit: int = typer.Option(50, "--limit", "-n", help="Max entries to show"),
    offset: int = typer.Option(0, "--offset", help="Entries to skip"),
    target: str | None = typer.Option(None, "--target", "-t", help="Filter by language"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """List stored translations, newest first."""
    settings = get_settings(config)
    db = get_database(settings)

    records = db.list_translations(limit=limit, offset=offset, target_language=target)
    if not records:
        console.print("[yellow]No translations found[/yellow]")
        return

    table = Table(title="Translation History")
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("File")
    table.add_column("Lang", style="magenta")
    table.add_column("Pages", justify="right")
    table.add_column("Words", justify="right")
    table.add_column("Chunks", justify="right")
    table.add_column("Created", style="dim")

    for rec in records:
        chunks = f"{rec.successful_chunks}/{rec.chunks_processed}"
        if rec.successful_chunks < rec.chunks_processed:
            chunks = f"[yellow]{chunks}[/yellow]"
        table.add_row(
            str(rec.id),
            rec.original_file_name,
            rec.target_language,
            str(rec.page_count),
            str(rec.word_count),
            chunks,
            str(rec.created_at)[:19],
        )

    console.print(table)


@app.command()
def show(
    translation_id: int = typer.Argument(..., help="Translation ID"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """Print a stored translation."""
    settings = get_settings(config)
    db = get_database(settings)

    record = db.get_translation(translation_id)
    if record is None:
        console.print(f"[red]Translation #{translation_id} not found[/red]")
        raise typer.Exit(1)

    console.print(
        Panel(
            record.translated_text,
            title=f"[bold]{record.original_file_name}[/bold] → {language_name(record.target_language)}",
            subtitle=f"{record.word_count} words",
        )
    )


@app.command()
def export(
    translation_id: int = typer.Argument(..., help="Translation ID"),
    formats: list[str] | None = typer.Option(
        None, "--format", "-f", help="Export format (txt, html, docx, pdf); repeatable"
    ),
    output_dir: Path | None = typer.Option(None, "--output", "-o", help="Output directory"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """Export a stored translation."""
    settings = get_settings(config)
    db = get_database(settings)

    record = db.get_translation(translation_id)
    if record is None:
        console.print(f"[red]Translation #{translation_id} not found[/red]")
        raise typer.Exit(1)

    service = DocumentTranslationService(settings, db=db)
    try:
        results = service.export(
            record.translated_text,
            formats or None,
            output_dir,
            stem=record.original_file_name,
            language=record.target_language,
        )
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None

    _print_exports(results)


@app.command()
def update(
    translation_id: int = typer.Argument(..., help="Translation ID"),
    text_file: Path = typer.Argument(..., help="File with the edited translation"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """Replace a stored translation with edited text."""
    if not text_file.exists():
        console.print(f"[red]File not found: {text_file}[/red]")
        raise typer.Exit(1)

    text = text_file.read_text(encoding="utf-8")
    if not text.strip():
        console.print("[red]Edited translation is empty[/red]")
        raise typer.Exit(1)

    settings = get_settings(config)
    db = get_database(settings)
    try:
        service = DocumentTranslationService(settings, db=db)
        if not service.update_translation(translation_id, text):
            console.print(f"[red]Translation #{translation_id} not found[/red]")
            raise typer.Exit(1)
        record = db.get_translation(translation_id)
    finally:
        db.close()

    console.print(
        f"[green]Updated translation #{translation_id}[/green] ({record.word_count} words)"
    )


@app.command()
def delete(
    translation_id: int = typer.Argument(..., help="Translation ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """Delete a stored translation."""
    settings = get_settings(config)
    db = get_database(settings)

    if not yes and not typer.confirm(f"Delete translation #{translation_id}?"):
        raise typer.Abort()

    if not db.delete_translation(translation_id):
        console.print(f"[red]Translation #{translation_id} not found[/red]")
        raise typer.Exit(1)

    console.print(f"[green]Deleted translation #{translation_id}[/green]")


@app.command()
def stats(
    config: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """Show translation statistics."""
    settings = get_settings(config)
    db = get_database(settings)

    stats_data = db.get_statistics()
    languages = ", ".join(
        f"{language_name(code)} ({count})" for code, count in stats_data["languages"].items()
    )

    console.print(
        Panel(
            f"""
Translations: {stats_data["total_translations"]}
Words: {stats_data["total_words"]}
Languages: {languages or "-"}
Logged errors: {stats_data["errors"]}
        """.strip(),
            title="Translation Statistics",
        )
    )


@app.command()
def logs(
    run_id: str | None = typer.Option(None, "--run", "-r", help="Filter by run ID"),
    level: str | None = typer.Option(None, "--level", "-l", help="Filter by level"),
    stage: str | None = typer.Option(None, "--stage", "-s", help="Filter by stage"),
    limit: int = typer.Option(50, "--limit", "-n", help="Max entries to show"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """View processing logs."""
    settings = get_settings(config)
    db = get_database(settings)

    entries = db.get_logs(run_id=run_id, level=level, stage=stage, limit=limit)
    if not entries:
        console.print("[yellow]No log entries found[/yellow]")
        return

    table = Table(title="Processing Logs")
    table.add_column("Time", style="dim")
    table.add_column("Level")
    table.add_column("Stage", style="cyan")
    table.add_column("Message")
    table.add_column("ID", justify="right")
    table.add_column("Run", style="dim", no_wrap=True)

    for entry in entries:
        lvl = entry["level"]
        level_style = {
            "INFO": "green",
            "WARNING": "yellow",
            "ERROR": "red",
        }.get(lvl, "white")

        table.add_row(
            str(entry["created_at"])[:19],
            f"[{level_style}]{lvl}[/{level_style}]",
            entry["stage"],
            entry["message"][:80],
            str(entry["translation_id"] or ""),
            entry["run_id"],
        )

    console.print(table)


@app.command()
def init(
    output_path: Path = typer.Argument(Path("config.yaml"), help="Output path for config file"),
) -> None:
    """Generate a default configuration file."""
    if output_path.exists():
        overwrite = typer.confirm(f"{output_path} already exists. Overwrite?")
        if not overwrite:
            raise typer.Abort()

    create_default_config(output_path)
    console.print(f"[green]Created config file: {output_path}[/green]")
    console.print("\nSet OPENROUTER_API_KEY, then run:")
    console.print("  doc-translate translate document.pdf --target es")


def main() -> None:
    """Entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
