"""
Display management for the labeltracks CLI with Rich components.
"""

from typing import List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.progress import (
    Progress, SpinnerColumn, TextColumn, BarColumn,
    TaskProgressColumn, TimeElapsedColumn
)
from rich.table import Table

from ..core.config import LabelTracksConfig
from ..models.releases import ReleaseSummary
from ..services.pipeline import PipelineResult
from ..utils.string_utils import extract_issue_number


class DisplayManager:
    """Console output for an export run."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def display_run_header(self, config: LabelTracksConfig):
        """Show what is about to be exported."""
        lines = [
            f"[bold]Label:[/bold] {config.label_id}",
            f"[bold]Title pattern:[/bold] {config.title_pattern}",
            f"[bold]Output:[/bold] {config.output_path}",
        ]
        if config.expand_versions:
            lines.append("[dim]Expanding master versions[/dim]")
        if config.diagnostics:
            lines.append("[yellow]Diagnostics enabled[/yellow]")
        self.console.print(Panel(
            "\n".join(lines),
            title="[bold cyan]labeltracks export[/bold cyan]",
            border_style="cyan",
            box=box.ROUNDED,
            padding=(0, 2)
        ))

    def display_selected_releases(self, releases: List[ReleaseSummary]):
        """Table of the releases that passed the title filter."""
        if not releases:
            self.console.print("[yellow]No releases match the title pattern.[/yellow]")
            return

        table = Table(box=box.SIMPLE, show_header=True, header_style="bold cyan")
        table.add_column("Issue", justify="right", style="bold white")
        table.add_column("Title")
        table.add_column("Year", justify="right", style="dim")
        table.add_column("Discogs ID", justify="right", style="dim")
        for release in releases:
            table.add_row(
                str(extract_issue_number(release.title)),
                release.title,
                str(release.year) if release.year else "",
                str(release.id),
            )
        self.console.print(table)

    def create_progress_bar(self) -> Progress:
        """Create a progress bar for release detail fetching."""
        return Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            TimeElapsedColumn(),
            console=self.console,
            expand=True
        )

    def display_summary(self, result: PipelineResult):
        """Display final export summary."""
        content = (
            f"[bold green]✓[/bold green] Rows written: [green]{result.rows_written}[/green]\n"
            f"[dim blue]ℹ[/dim blue] [dim]Releases listed: {result.releases_listed}, "
            f"matched: {result.releases_matched}, fetched: {result.releases_fetched}[/dim]\n"
        )
        if result.skipped:
            content += f"[bold red]✗[/bold red] Releases skipped: [red]{len(result.skipped)}[/red]\n"
        content += f"[bold]File:[/bold] {result.output_path}"

        self.console.print(Panel(
            content,
            title="[bold cyan]EXPORT SUMMARY[/bold cyan]",
            border_style="cyan",
            box=box.ROUNDED,
            padding=(1, 2)
        ))

    def display_error(self, message: str):
        self.console.print(f"[bold red]✗[/bold red] [red]{message}[/red]")
