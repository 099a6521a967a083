"""Prescription Intelligence Pipeline CLI."""

import mimetypes
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from rxint.config import settings
from rxint.exceptions import OCRInitError, RxIntError
from rxint.knowledge import load_knowledge_base
from rxint.logging_config import setup_logging
from rxint.models import AnalysisResult, Document
from rxint.pipeline import AnalysisPipeline, TesseractOCR, schedule_for_frequency

app = typer.Typer(
    name="rxint",
    help="Offline prescription analysis: medications, conditions and confidence",
    add_completion=False,
)
console = Console()

# Extensions mimetypes does not know on every platform
EXTRA_TYPES = {".webp": "image/webp", ".jpg": "image/jpeg", ".jpeg": "image/jpeg"}


def guess_mime_type(path: Path) -> str:
    """MIME type from the file extension."""
    suffix = path.suffix.lower()
    if suffix in EXTRA_TYPES:
        return EXTRA_TYPES[suffix]
    mime_type, _ = mimetypes.guess_type(path.name)
    return mime_type or "application/octet-stream"


def load_document(path: Path, mime_type: Optional[str] = None) -> Document:
    return Document(
        content=path.read_bytes(),
        mime_type=mime_type or guess_mime_type(path),
        filename=path.name,
    )


def render_result(result: AnalysisResult) -> None:
    """Print an analysis result as rich tables."""
    meds = Table(title="Medications", show_lines=False)
    meds.add_column("Name", style="bold")
    meds.add_column("Strength")
    meds.add_column("Form")
    meds.add_column("Frequency")
    meds.add_column("Instructions")
    meds.add_column("Suggested times", style="dim")
    for med in result.medications:
        schedule = schedule_for_frequency(med.frequency)
        meds.add_row(
            escape(med.name),
            med.strength,
            med.dosage_form.value,
            med.frequency,
            escape(med.instructions or ""),
            ", ".join(schedule.times_of_day) + (" (as needed)" if schedule.as_needed else ""),
        )
    console.print(meds)

    conditions = Table(title="Detected conditions")
    conditions.add_column("Condition", style="bold")
    conditions.add_column("Confidence", justify="right")
    conditions.add_column("Source")
    conditions.add_column("Evidence")
    for disease in result.diseases:
        evidence = sorted(disease.matched_terms | disease.related_medications)
        conditions.add_row(
            disease.disease_name,
            f"{disease.confidence:.2f}",
            disease.source.value,
            escape(", ".join(evidence)),
        )
    console.print(conditions)

    c = result.confidence
    console.print(
        f"[bold]Confidence:[/bold] overall {c.overall:.2f} | ocr {c.ocr:.2f} | "
        f"parsing {c.medication_parsing:.2f} | detection {c.disease_detection:.2f} "
        f"[dim]({result.extraction.strategy.value})[/dim]"
    )
    if result.needs_review:
        console.print("[yellow]Low confidence: review the extracted data carefully.[/yellow]")


@app.callback()
def main(
    log_level: str = typer.Option(settings.log_level, help="Logging level"),
) -> None:
    """Configure logging for all commands."""
    setup_logging(log_level)


@app.command()
def analyze(
    file_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Image or PDF prescription"),
    mime_type: Optional[str] = typer.Option(None, "--type", help="Override the detected MIME type"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
) -> None:
    """Analyze a single prescription."""
    document = load_document(file_path, mime_type)

    # Initialized lazily: text-layer PDFs never touch Tesseract
    engine = TesseractOCR()
    try:
        result = AnalysisPipeline(engine).analyze(document, prescription_id=file_path.stem)
    except RxIntError as exc:
        console.print(f"[bold red]Analysis failed:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=1)
    finally:
        engine.terminate()

    if as_json:
        sys.stdout.write(result.model_dump_json(indent=2) + "\n")
    else:
        console.print(f"[bold blue]Analyzed:[/bold blue] {file_path}")
        render_result(result)


@app.command()
def batch(
    directory: Path = typer.Argument(..., exists=True, file_okay=False, help="Directory of prescriptions"),
    output_dir: Optional[Path] = typer.Option(None, help="Write one JSON result per document here"),
) -> None:
    """Analyze every image and PDF in a directory with one shared OCR engine."""
    allowed = set(settings.allowed_types)
    files = sorted(p for p in directory.iterdir() if p.is_file() and guess_mime_type(p) in allowed)
    if not files:
        console.print(f"[yellow]No supported documents in {directory}[/yellow]")
        raise typer.Exit()

    if output_dir:
        output_dir.mkdir(parents=True, exist_ok=True)

    summary = Table(title=f"Batch: {directory}")
    summary.add_column("File")
    summary.add_column("Medications", justify="right")
    summary.add_column("Conditions", justify="right")
    summary.add_column("Overall", justify="right")
    summary.add_column("Status")

    failures = 0
    engine = TesseractOCR()
    pipeline = AnalysisPipeline(engine)
    try:
        for path in files:
            try:
                result = pipeline.analyze(load_document(path), prescription_id=path.stem)
            except OCRInitError as exc:
                console.print(f"[bold red]OCR engine unavailable:[/bold red] {escape(str(exc))}")
                raise typer.Exit(code=2)
            except RxIntError as exc:
                failures += 1
                summary.add_row(path.name, "-", "-", "-", f"[red]{escape(str(exc))}[/red]")
                continue

            if output_dir:
                (output_dir / f"{path.stem}.json").write_text(result.model_dump_json(indent=2))
            state = "[yellow]review[/yellow]" if result.needs_review else "[green]ok[/green]"
            summary.add_row(
                path.name,
                str(len(result.medications)),
                str(len(result.diseases)),
                f"{result.confidence.overall:.2f}",
                state,
            )
    finally:
        engine.terminate()

    console.print(summary)
    if failures:
        raise typer.Exit(code=1)


@app.command()
def diseases(
    category: Optional[str] = typer.Option(None, help="Filter by category"),
    search: Optional[str] = typer.Option(None, help="Search name, description or category"),
) -> None:
    """List the chronic conditions in the knowledge base."""
    kb = load_knowledge_base()
    if category:
        entries = kb.diseases_by_category(category)
    elif search:
        entries = kb.search_diseases(search)
    else:
        entries = kb.diseases

    table = Table(title="Knowledge base conditions")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="bold")
    table.add_column("Category")
    table.add_column("Description")
    for disease in entries:
        table.add_row(disease.id, disease.name, disease.category.value, disease.description)
    console.print(table)


@app.command()
def status() -> None:
    """Show OCR engine and knowledge base status."""
    console.print("[bold blue]Prescription Intelligence Pipeline Status[/bold blue]")
    console.print()

    kb = load_knowledge_base()
    console.print(f"Knowledge base: {kb.summary()}")

    engine = TesseractOCR()
    try:
        engine.initialize()
    except OCRInitError as exc:
        console.print(f"OCR engine: [red]unavailable[/red] ({escape(str(exc))})")
        raise typer.Exit(code=1)
    else:
        console.print(f"OCR engine: [green]tesseract {engine.version}[/green] (lang={engine.language})")
    finally:
        engine.terminate()


if __name__ == "__main__":
    app()
