# ABOUTME: Simplified progress tracking using Rich's built-in capabilities
# ABOUTME: Spinner showing which store directory a scan is currently probing

from typing import Any

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn


class ScanProgressTracker:
    """Rich spinner whose description follows the scan position."""

    def __init__(self, progress: Progress, task_id: Any):
        self.progress = progress
        self.task_id = task_id

    def __enter__(self):
        self.progress.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.progress.stop()

    def update(self, description: str) -> None:
        """Progress callback handed to the walkers."""
        self.progress.update(self.task_id, description=f"🔎 {description}")


def create_scan_progress(
    console: Console, initial_description: str = "🔎 Probing voice lines..."
) -> ScanProgressTracker:
    """Create a simple progress display with spinner.

    Args:
        console: Rich console instance
        initial_description: Initial progress description

    Returns:
        Tracker wrapping the progress display
    """
    progress = Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )

    task_id = progress.add_task(initial_description, total=None)
    return ScanProgressTracker(progress, task_id)
