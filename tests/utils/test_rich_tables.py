# ABOUTME: Tests for rich table generators and the scan progress spinner
# ABOUTME: Renders tables to an in-memory console and checks progress descriptions

import io
from pathlib import Path

from rich.console import Console

from voiceline_extractor.core.models import Category, CategorySummary
from voiceline_extractor.utils.logging import create_scan_progress
from voiceline_extractor.utils.rich_tables import (
    create_extraction_summary_table,
    create_logging_status_table,
    print_table,
)


def render(table) -> str:
    console = Console(file=io.StringIO(), width=200)
    print_table(console, table)
    return console.file.getvalue()


def test_summary_table_has_row_per_category():
    summaries = [
        CategorySummary(category=Category.BATTLE, coordinates_probed=1006, hits=1, files_written=1),
        CategorySummary(
            category=Category.CUTSCENE,
            coordinates_probed=25000,
            hits=40,
            files_written=39,
            errors=1,
            log_path=Path("out/2024-07-02T09-30-15_cutscene.log"),
        ),
    ]

    table = create_extraction_summary_table(summaries)
    output = render(table)

    assert table.row_count == 2
    assert "battle" in output
    assert "25,000" in output
    assert "2024-07-02T09-30-15_cutscene.log" in output


def test_summary_table_footer_totals_multiple_categories():
    summaries = [
        CategorySummary(category=Category.BATTLE, coordinates_probed=1006, hits=1, files_written=1),
        CategorySummary(category=Category.MAHJONG, coordinates_probed=1003, hits=2, files_written=2, errors=2),
    ]

    table = create_extraction_summary_table(summaries)
    output = render(table)

    assert table.show_footer
    assert "total" in output
    assert "2,009" in output


def test_summary_table_single_category_has_no_footer():
    table = create_extraction_summary_table(
        [CategorySummary(category=Category.BATTLE, coordinates_probed=1006, hits=1, files_written=1)]
    )

    assert not table.show_footer


def test_logging_status_table_lists_files():
    status = {
        "mode": "interactive",
        "log_directory": "/tmp/logs",
        "log_files": {"main": "logs/voiceline-extractor.log", "json": None, "errors": "logs/errors.log"},
        "third_party_suppressed": ["asyncio"],
    }

    output = render(create_logging_status_table(status))

    assert "Interactive" in output
    assert "logs/voiceline-extractor.log" in output
    assert "logs/errors.log" in output


def test_scan_progress_follows_updates():
    tracker = create_scan_progress(Console(file=io.StringIO()))

    with tracker:
        tracker.update("sound/voice/vo_line/8201256")

    assert tracker.progress.tasks[0].description == "🔎 sound/voice/vo_line/8201256"
