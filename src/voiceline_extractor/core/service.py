# ABOUTME: High-level service that runs the selected category scans for one extraction run
# ABOUTME: Gives every category its own sink, log file and termination state, in a fixed order

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from voiceline_extractor.config import Config, get_config
from voiceline_extractor.core.models import Category, CategorySummary, ExtractionConfiguration
from voiceline_extractor.core.walkers import FlatRangeWalker, NestedWalker, ProgressCallback, ScanStats
from voiceline_extractor.persistence.sink import ExtractionSink, utcnow
from voiceline_extractor.store.base import ContentStore
from voiceline_extractor.utils.logging import ScanContext, get_logger, with_run_context


class ExtractionService:
    """Service for scanning a content store and extracting every voice line found."""

    def __init__(
        self,
        store: ContentStore,
        configuration: ExtractionConfiguration,
        settings: Config | None = None,
        clock: Callable[[], datetime] = utcnow,
        on_progress: ProgressCallback | None = None,
    ):
        self.store = store
        self.configuration = configuration
        self.settings = settings or get_config()
        self.clock = clock
        self.on_progress = on_progress
        self.logger = get_logger(__name__)

    @with_run_context("voice_line_extraction")
    def run(self) -> list[CategorySummary]:
        """Scan every selected category, battle then mahjong then cutscene."""
        summaries: list[CategorySummary] = []
        for category in self.configuration.ordered_categories:
            summaries.append(self.extract_category(category))
        return summaries

    def extract_category(self, category: Category) -> CategorySummary:
        """Scan one category into its own timestamped manifest log.

        Filesystem failures are logged by the scan context and propagate after
        the log has been closed, leaving the partial output and partial log in place.
        """
        with self._scan_context(category) as logger:
            logger.info("Starting category extraction", out_directory=str(self.configuration.out_directory))
            with ExtractionSink(self.configuration.out_directory, category, clock=self.clock) as sink:
                stats = self._walk(category, sink)

            summary = CategorySummary(
                category=category,
                coordinates_probed=stats.coordinates_probed,
                hits=stats.hits,
                files_written=sink.files_written,
                errors=sink.errors,
                log_path=sink.log_path,
            )
            logger.info(
                "Category extraction complete",
                hits=summary.hits,
                files_written=summary.files_written,
                errors=summary.errors,
                log_path=str(summary.log_path),
            )
            return summary

    def _scan_context(self, category: Category) -> ScanContext:
        expansion_range = None
        if category is Category.CUTSCENE:
            selected = self.configuration.expansion_range
            expansion_range = (selected.start, selected.end)
        return ScanContext(category.value, self.configuration.languages, expansion_range, logger=self.logger)

    def _walk(self, category: Category, sink: ExtractionSink) -> ScanStats:
        languages = self.configuration.languages
        if category is Category.BATTLE:
            walker = FlatRangeWalker(self.store, sink, languages, self.settings.battle, self.on_progress)
        elif category is Category.MAHJONG:
            walker = FlatRangeWalker(self.store, sink, languages, self.settings.mahjong, self.on_progress)
        else:
            walker = NestedWalker(
                self.store,
                sink,
                languages,
                self.settings.cutscene,
                self.configuration.expansion_range,
                self.on_progress,
            )
        return walker.walk()
