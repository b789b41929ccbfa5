"""Command-line interface for the localization pipeline."""

import asyncio
from collections import Counter
from pathlib import Path
from typing import List, Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .config import config
from .diagnostics import DiagnosticRecord, Diagnostics
from .errors import ExportError, InputValidationError, ProviderError
from .extraction.txt_parser import TxtParser
from .extraction.txt_writer import TxtWriter
from .logger import setup_logging
from .models.entry import ProcessedEntry
from .models.languages import TARGET_LANGUAGES, SelectionMode, resolve_languages
from .reporting.csv_report import CsvReportGenerator
from .translation.clients import ProviderKind, create_provider, settings_for
from .translation.orchestrator import BatchResult
from .translation.pipeline import localize
from .validation.risk_scanner import scan_for_risks

console = Console()

LEVEL_STYLES = {"debug": "dim", "info": "blue", "warning": "yellow", "error": "red"}


@click.group()
@click.version_option(version=__version__)
@click.option("--log-level", default=None, help="Log level (defaults to LOG_LEVEL or INFO)")
def cli(log_level: Optional[str]):
    """Tagged-text localization with risk scanning."""
    setup_logging(log_level or config.log_level, rich_output=True)


@cli.command()
@click.option(
    "--input", "-i",
    "input_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Path to input tagged .txt file"
)
@click.option("--language", "-l", default=None, help="Single target language code (e.g. de-DE)")
@click.option("--languages", "languages", default=None, help="Comma-separated list of target language codes")
@click.option("--all", "all_languages", is_flag=True, help="Translate into every supported language")
@click.option(
    "--provider", "-p",
    type=click.Choice([kind.value for kind in ProviderKind]),
    default=ProviderKind.ECHO.value,
    show_default=True,
    help="Translation backend"
)
@click.option("--endpoint", default=None, help="Endpoint override for the local provider")
@click.option("--server-url", default=None, help="tagloc server for the remote provider")
@click.option(
    "--upstream",
    type=click.Choice([kind.value for kind in ProviderKind if kind != ProviderKind.REMOTE]),
    default=ProviderKind.ECHO.value,
    help="Provider the remote server should use"
)
@click.option(
    "--chunk-size", "-c",
    type=click.IntRange(min=0),
    default=None,
    help="Maximum strings per request, 0 for one request per language (defaults to CHUNK_SIZE)"
)
@click.option("--context", default=None, help="Free-text guidance for the translator")
@click.option(
    "--output-dir", "-o",
    type=click.Path(file_okay=False),
    default=".",
    show_default=True,
    help="Directory for localized files"
)
@click.option("--zip", "as_zip", is_flag=True, help="Write all languages into localized_batch.zip")
@click.option("--keep-header", is_flag=True, help="Copy unrecognized header lines into the localized files")
@click.option("--report", "report_path", type=click.Path(dir_okay=False), default=None, help="Write a CSV risk report")
@click.option("--dry-run", is_flag=True, help="Preview results without writing files")
def translate(
    input_path: str,
    language: Optional[str],
    languages: Optional[str],
    all_languages: bool,
    provider: str,
    endpoint: Optional[str],
    server_url: Optional[str],
    upstream: str,
    chunk_size: Optional[int],
    context: Optional[str],
    output_dir: str,
    as_zip: bool,
    keep_header: bool,
    report_path: Optional[str],
    dry_run: bool,
):
    """Translate a tagged text file into target languages."""
    # Validate config
    errors = config.validate(provider)
    if errors:
        console.print("[red]Configuration errors:[/red]")
        for error in errors:
            console.print(f"  - {error}")
        raise click.Abort()

    try:
        targets = resolve_languages(*_selection(language, languages, all_languages))
    except InputValidationError as e:
        console.print(f"[red]{escape(e.message)}[/red]")
        raise click.Abort()

    console.print(f"[blue]Reading:[/blue] {input_path}")
    try:
        text = Path(input_path).read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as e:
        console.print(f"[red]Input is not valid UTF-8:[/red] {escape(str(e))}")
        raise click.Abort()
    console.print(f"[blue]Target languages:[/blue] {', '.join(t.code for t in targets)}")

    diagnostics = Diagnostics("cli")
    diagnostics.subscribe(_print_record)

    try:
        client = create_provider(
            settings_for(provider, endpoint=endpoint, server_url=server_url, upstream=upstream),
            diagnostics=diagnostics,
        )
        run = asyncio.run(
            localize(
                text,
                targets,
                client,
                chunk_size=config.chunk_size if chunk_size is None else chunk_size,
                context=context,
                diagnostics=diagnostics,
            )
        )
    except (InputValidationError, ProviderError) as e:
        console.print(f"[red]Error:[/red] {escape(e.message)}")
        raise click.Abort()

    console.print(f"[green]Found:[/green] {len(run.parse.entries)} entries")

    _print_stats(run.batch)
    if run.entries:
        _print_risk_breakdown(run.entries)

    if dry_run:
        console.print("\n[yellow]Dry run - no files written[/yellow]")
        return

    if not run.entries:
        console.print("\n[red]No language succeeded - nothing to write[/red]")
        raise SystemExit(1)

    writer = TxtWriter()
    try:
        if as_zip:
            archive = Path(output_dir) / "localized_batch.zip"
            archive.parent.mkdir(parents=True, exist_ok=True)
            archive.write_bytes(writer.to_archive(run.entries, run.parse.metadata, keep_header))
            console.print(f"[blue]Writing:[/blue] {archive}")
        else:
            for path in writer.write_all(run.entries, run.parse.metadata, output_dir, keep_header):
                console.print(f"[blue]Writing:[/blue] {path}")

        if report_path:
            CsvReportGenerator().write(run.entries, report_path)
            console.print(f"[blue]Report:[/blue] {report_path}")
    except (ExportError, OSError) as e:
        console.print(f"[red]Export failed:[/red] {escape(str(e))}")
        raise SystemExit(1)

    console.print("[green]Done![/green]")


@cli.command()
@click.argument("original")
@click.argument("translated")
@click.option("--language", "-l", required=True, help="Target language code (e.g. ar-SA)")
def scan(original: str, translated: str, language: str):
    """Scan a single original/translated pair for localization risks."""
    risks = scan_for_risks(original, translated, language)

    if not risks:
        console.print("[green]PASS[/green] - no risks found")
        return

    table = Table(title=f"Risks for {language}")
    table.add_column("Type", style="yellow")
    table.add_column("Message")
    for risk in risks:
        table.add_row(risk.kind.value, risk.message)
    console.print(table)


@cli.command()
@click.option(
    "--input", "-i",
    "input_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Path to tagged .txt file"
)
def stats(input_path: str):
    """Show statistics for a tagged text file."""
    try:
        parsed = TxtParser().parse_file(input_path)
    except UnicodeDecodeError as e:
        console.print(f"[red]Input is not valid UTF-8:[/red] {escape(str(e))}")
        raise click.Abort()
    metadata = parsed.metadata

    table = Table(title=f"Statistics for {Path(input_path).name}")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("Source language", metadata.language_id or "-")
    table.add_row("Table", metadata.table_id or "-")
    table.add_row("Entries", str(len(parsed.entries)))
    table.add_row("Unique keys", str(len({e.string_key for e in parsed.entries})))
    table.add_row("Tables", ", ".join(sorted({e.table_id for e in parsed.entries if e.table_id})) or "-")
    table.add_row("Unrecognized header lines", str(len(metadata.raw_header)))

    console.print(table)


@cli.command(name="languages")
def list_languages():
    """List the supported target languages."""
    table = Table(title="Supported languages")
    table.add_column("Code", style="cyan")
    table.add_column("Label")
    for option in TARGET_LANGUAGES:
        table.add_row(option.code, option.label)
    console.print(table)


def _selection(language: Optional[str], languages: Optional[str], all_languages: bool):
    """Map the CLI flags to a selection mode."""
    if all_languages:
        return SelectionMode.ALL, None, None
    if languages:
        return SelectionMode.CUSTOM, None, [code.strip() for code in languages.split(",")]
    return SelectionMode.SINGLE, language, None


def _print_record(record: DiagnosticRecord):
    """Diagnostics subscriber printing warnings and errors."""
    if record.level not in ("warning", "error"):
        return
    style = LEVEL_STYLES[record.level]
    prefix = f"[{record.language}] " if record.language else ""
    console.print(f"  [{style}]{escape(prefix + record.message)}[/{style}]", highlight=False)


def _print_stats(batch: BatchResult):
    """Print per-language translation statistics."""
    table = Table(title="Translation Stats")
    table.add_column("Language", style="cyan")
    table.add_column("Status")
    table.add_column("Strings", justify="right")
    table.add_column("Chunks", justify="right")
    table.add_column("Missing", justify="right")
    table.add_column("With risks", justify="right")

    for s in batch.stats:
        status = "[green]ok[/green]" if s.succeeded else f"[red]skipped[/red] {escape(s.error or '')}"
        table.add_row(s.language, status, str(s.total), str(s.chunks), str(s.missing), str(s.risky))

    console.print(table)


def _print_risk_breakdown(entries: List[ProcessedEntry]):
    """Print risk counts by type."""
    counts = Counter(risk.kind.value for entry in entries for risk in entry.risks)
    clean = sum(1 for entry in entries if entry.passed)
    total = len(entries)

    lines = [f"[green]PASS:[/green] {clean} ({clean/total*100:.1f}%)"]
    for kind, count in sorted(counts.items()):
        lines.append(f"[yellow]{kind}:[/yellow] {count}")

    console.print(Panel("\n".join(lines), title="Risk Breakdown"))


if __name__ == "__main__":
    cli()
