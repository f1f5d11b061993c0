# ABOUTME: Main CLI application entry point using asyncclick
# ABOUTME: Provides the extract command that scans the game store for voice lines, plus logging status

import json
from pathlib import Path

import asyncclick as click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from voiceline_extractor.config import get_config
from voiceline_extractor.core.models import (
    Category,
    CategorySummary,
    ExpansionRange,
    ExtractionConfiguration,
    normalize_languages,
)
from voiceline_extractor.core.service import ExtractionService
from voiceline_extractor.store import LooseFileStore, StoreUnavailableError
from voiceline_extractor.utils.logging import (
    LoggingMode,
    configure_logging,
    create_scan_progress,
    get_logger,
    get_logging_status,
)
from voiceline_extractor.utils.rich_tables import (
    create_extraction_summary_table,
    create_logging_status_table,
    print_table,
)

console = Console()


def _selected_categories(extract_all: bool, battle: bool, mahjong: bool, cutscene: str | None) -> frozenset[Category]:
    if extract_all:
        return frozenset(Category)
    selected = set()
    if battle:
        selected.add(Category.BATTLE)
    if mahjong:
        selected.add(Category.MAHJONG)
    if cutscene is not None:
        selected.add(Category.CUTSCENE)
    return frozenset(selected)


def _display_summaries(summaries: list[CategorySummary], json_output: bool) -> None:
    if json_output:
        click.echo(json.dumps([summary.model_dump(mode="json") for summary in summaries]))
        return
    print_table(console, create_extraction_summary_table(summaries))


@click.command()
@click.option(
    "--game-directory",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Game installation directory (its game/sqpack tree, or an unpacked copy of it)",
)
@click.option(
    "--out-directory",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory the voice lines and extraction logs are written to",
)
@click.option("--language", "languages", multiple=True, help="Language code to extract, or 'all' (repeatable)")
@click.option("--all", "extract_all", is_flag=True, help="Extract every category")
@click.option("--battle", is_flag=True, help="Extract battle voice lines")
@click.option("--mahjong", is_flag=True, help="Extract mahjong voice lines")
@click.option(
    "--cutscene",
    is_flag=False,
    flag_value="all",
    default=None,
    metavar="[exX[-exY]]",
    help="Extract cutscene voice lines, optionally limited to expansions (ex0 or ffxiv is the base game)",
)
@click.pass_context
async def extract(
    ctx,
    game_directory: Path | None,
    out_directory: Path | None,
    languages: tuple[str, ...],
    extract_all: bool,
    battle: bool,
    mahjong: bool,
    cutscene: str | None,
):
    """
    🎙️ Extract voice lines from the game data.

    Probes the store for every candidate voice line id of the selected
    categories and writes each file found, with a sha256 manifest log per
    category.
    """
    config = get_config()
    json_output = ctx.obj.get("json_output", False) if ctx.obj else False
    logger = get_logger(__name__)

    game_directory = game_directory or config.game_directory
    out_directory = out_directory or config.out_directory
    categories = _selected_categories(extract_all, battle, mahjong, cutscene)

    if game_directory is None or out_directory is None or not categories:
        click.echo(ctx.get_help())
        raise click.exceptions.Exit(2)

    try:
        expansion_range = ExpansionRange.parse(cutscene, config.cutscene.max_expansions)
    except (ValueError, ValidationError) as e:
        raise click.BadParameter(str(e), param_hint="--cutscene") from e

    configuration = ExtractionConfiguration(
        out_directory=out_directory,
        languages=normalize_languages(languages, config.default_language),
        categories=categories,
        expansion_range=expansion_range,
    )

    try:
        store = LooseFileStore.from_game_directory(game_directory)
    except StoreUnavailableError as e:
        logger.error("Game could not be opened", error=str(e))
        console.print(f"[red]❌ Game could not be opened. Please make sure the path is correct: {escape(str(e))}[/red]")
        raise click.exceptions.Exit(1)

    if not json_output:
        console.print(
            Panel.fit(
                f"🎙️ [bold cyan]Voice Line Extraction[/bold cyan]\n"
                f"Categories: {', '.join(category.value for category in configuration.ordered_categories)}\n"
                f"Languages: {', '.join(configuration.languages)}",
                border_style="magenta",
            )
        )

    try:
        if json_output:
            summaries = ExtractionService(store, configuration, settings=config).run()
        else:
            tracker = create_scan_progress(console)
            service = ExtractionService(store, configuration, settings=config, on_progress=tracker.update)
            with tracker:
                summaries = service.run()
    except OSError as e:
        logger.error("Extraction aborted", error=str(e), error_type=type(e).__name__)
        console.print(f"[red]❌ Extraction aborted by a filesystem error: {escape(str(e))}[/red]")
        raise click.exceptions.Exit(1)

    _display_summaries(summaries, json_output)


def _initialize_logging(json_output: bool, log_level: str | None = None, log_file: str | None = None) -> None:
    """Initialize logging configuration."""
    config = get_config()
    mode = LoggingMode.PRODUCTION if json_output else LoggingMode.INTERACTIVE

    # Use config defaults when CLI parameters are not provided
    final_log_level = log_level or config.log_level
    final_log_file = log_file or (str(config.log_file) if config.log_file else None)

    configure_logging(mode=mode, log_level=final_log_level, log_file=final_log_file)


@click.command(name="logging-status")
def logging_status():
    """
    📊 Show current logging configuration and status.
    """
    status = get_logging_status()
    logging_table = create_logging_status_table(status)
    print_table(console, logging_table)


@click.group(invoke_without_command=True)
@click.option("--json", "json_output", is_flag=True, help="Output structured JSON logs instead of rich interface")
@click.option("--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING, ERROR)")
@click.option("--log-file", help="Custom log file path")
@click.pass_context
def app(ctx, json_output: bool, log_level: str | None, log_file: str | None):
    """
    🎙️ Voiceline Extractor - FFXIV voice line extraction

    Discovers voice lines in a store that can only be queried path by path,
    and extracts every one found along with an integrity log.
    """
    # Store global options in context for commands to access
    ctx.ensure_object(dict)
    ctx.obj["json_output"] = json_output

    # Initialize logging once here instead of in each command
    _initialize_logging(json_output, log_level, log_file)

    # Show help if no command provided
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# Add commands to the main group
app.add_command(extract)
app.add_command(logging_status)


if __name__ == "__main__":
    app()
