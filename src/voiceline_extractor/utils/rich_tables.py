# ABOUTME: Rich tables for the extraction run summary and the logging setup
# ABOUTME: One row per scanned category with a totals footer, and the active log sinks

from collections.abc import Sequence
from typing import Any

from rich.box import ROUNDED
from rich.console import Console
from rich.table import Table

from voiceline_extractor.core.models import CategorySummary

LOG_FILE_LABELS = {
    "main": "📝 Main Log",
    "json": "📊 JSON Log",
    "errors": "🚨 Error Log",
}


def _styled_table(title: str, **options: Any) -> Table:
    return Table(
        title=title,
        box=ROUNDED,
        header_style="bold magenta",
        border_style="cyan",
        title_justify="left",
        expand=False,
        **options,
    )


def create_extraction_summary_table(summaries: Sequence[CategorySummary]) -> Table:
    """Create a table with one row per scanned category.

    When more than one category was scanned a footer carries the run totals.
    Categories that recorded error lines have their error count highlighted.
    """
    show_totals = len(summaries) > 1
    table = _styled_table(
        "[bold cyan]🎙️ Extraction Summary[/bold cyan]", row_styles=["", "dim"], show_footer=show_totals
    )

    counts = [
        ("Probed", [summary.coordinates_probed for summary in summaries]),
        ("Hits", [summary.hits for summary in summaries]),
        ("Files", [summary.files_written for summary in summaries]),
        ("Errors", [summary.errors for summary in summaries]),
    ]
    table.add_column("Category", style="bold blue", footer="total")
    for name, values in counts:
        table.add_column(
            name,
            justify="right",
            style="red" if name == "Errors" else "green",
            footer=f"{sum(values):,}" if show_totals else "",
        )
    table.add_column("Log", style="white", overflow="fold")

    for summary in summaries:
        errors = f"[bold]{summary.errors:,}[/bold]" if summary.errors else "0"
        table.add_row(
            summary.category.value,
            f"{summary.coordinates_probed:,}",
            f"{summary.hits:,}",
            f"{summary.files_written:,}",
            errors,
            str(summary.log_path) if summary.log_path else "-",
        )

    return table


def create_logging_status_table(status: dict[str, Any]) -> Table:
    """Create a table describing the loguru sinks configured for this process."""
    table = _styled_table("[bold green]🔍 Logging Configuration[/bold green]")
    table.add_column("Setting", style="blue")
    table.add_column("Value", style="white", overflow="fold")

    table.add_row("🔧 Mode", status["mode"].title())
    table.add_row("📁 Log Directory", status["log_directory"] or "N/A (production mode)")
    table.add_row("🔇 Suppressed Libraries", ", ".join(status["third_party_suppressed"]) or "-")
    for key, label in LOG_FILE_LABELS.items():
        path = status["log_files"].get(key)
        if path:
            table.add_row(label, path)

    return table


def print_table(console: Console, table: Table) -> None:
    """Print ``table`` set off by a blank line on either side."""
    console.print()
    console.print(table)
    console.print()
