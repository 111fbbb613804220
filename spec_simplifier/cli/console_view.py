from __future__ import annotations

from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn, TimeElapsedColumn
from rich.table import Table

from spec_simplifier.domain.models import DiscoverySummary, OutcomeStatus, ProcessingOutcome, RunReport, SpecRecord
from spec_simplifier.services.simplify_service import ProgressListener


class ConsoleProgress(ProgressListener):
    """rich progress bar plus one coloured line per finished spec file."""

    def __init__(self, console: Console):
        self.console = console
        self._progress: Optional[Progress] = None
        self._task = None

    def on_start(self, total: int) -> None:
        if total == 0:
            return
        self._progress = Progress(
            TextColumn("[bold cyan]Simplifying spec files"),
            BarColumn(),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            TextColumn("{task.description}"),
            console=self.console,
        )
        self._task = self._progress.add_task("", total=total)
        self._progress.start()

    def on_record_start(self, index: int, record: SpecRecord) -> None:
        if self._progress is not None:
            self._progress.update(self._task, description=record.spec_name)

    def on_retry(self, record: SpecRecord, attempt: int, error: Exception, delay: float) -> None:
        self.console.print(
            f"[yellow]Retrying {record.spec_name} in {delay:g}s (attempt {attempt + 1}): {error}[/yellow]"
        )

    def on_outcome(self, index: int, outcome: ProcessingOutcome, report: RunReport) -> None:
        name = outcome.record.spec_name
        if outcome.status is OutcomeStatus.SUCCESS:
            self.console.print(f"[green]✓ {name}[/green]")
        elif outcome.status is OutcomeStatus.SKIPPED:
            self.console.print(f"[yellow]- {name}: no new content received, file not updated[/yellow]")
        else:
            self.console.print(f"[red]✗ {name}: {outcome.error}[/red]")

        if self._progress is not None:
            self._progress.advance(self._task)

    def on_finish(self, report: RunReport) -> None:
        if self._progress is not None:
            self._progress.stop()
            self._progress = None


def prompt_directory(console: Console) -> str:
    return console.input("[yellow]Enter the directory path to search for spec files: [/yellow]").strip()


def show_discovery(console: Console, root: Path, summary: DiscoverySummary) -> None:
    console.print(f"[green]Search completed under {root}. Found {summary.total} spec files.[/green]")
    console.print(f"[cyan]Total spec files:[/cyan] {summary.total}")
    console.print(f"[cyan]Spec files with related files:[/cyan] {summary.paired}")


def show_summary(console: Console, report: RunReport, report_path: Path) -> None:
    table = Table(title="Processed Files Summary", show_header=False)
    table.add_row("[green]✓ Successfully processed[/green]", str(report.succeeded))
    table.add_row("[yellow]- Skipped[/yellow]", str(report.skipped))
    table.add_row("[red]✗ Errors[/red]", str(report.failed))
    table.add_row("Total", str(report.total_processed))
    console.print(table)
    console.print(f"[cyan]Report generated: {report_path}[/cyan]")
