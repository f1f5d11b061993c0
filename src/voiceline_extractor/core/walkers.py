# ABOUTME: Dimensional walkers that enumerate sparse voice line id spaces outer-to-inner
# ABOUTME: Combine path templates, per-language probing and run-length termination per dimension

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from voiceline_extractor.core.models import ExpansionRange, FlatCoordinate, NestedCoordinate
from voiceline_extractor.core.paths import FlatScheme, LegacyScheme, RegularScheme, scheme_for
from voiceline_extractor.core.prober import Renderer, any_exists, probe
from voiceline_extractor.core.termination import RunLengthTermination, ScanDecision
from voiceline_extractor.core.tuning import FlatScanTuning, NestedScanTuning, SchemeThresholds
from voiceline_extractor.persistence.sink import ExtractionSink
from voiceline_extractor.store.base import ContentStore
from voiceline_extractor.utils.logging import get_logger

logger = get_logger(__name__)

ProgressCallback = Callable[[str], None]

# flat scans report progress once per this many indices
FLAT_PROGRESS_INTERVAL = 256


@dataclass
class ScanStats:
    """Counters accumulated over one walker invocation."""

    coordinates_probed: int = 0
    hits: int = 0


class _Walker:
    def __init__(
        self,
        store: ContentStore,
        sink: ExtractionSink,
        languages: Sequence[str],
        on_progress: ProgressCallback | None = None,
    ):
        if not languages:
            raise ValueError("at least one language is required")
        self.store = store
        self.sink = sink
        self.languages = tuple(sorted(set(languages)))
        self.on_progress = on_progress
        self.stats = ScanStats()

    def _report(self, description: str) -> None:
        if self.on_progress is not None:
            self.on_progress(description)

    def _extract(self, coordinate, renderer: Renderer) -> bool:
        """Probe one coordinate and persist every language variant when any exists."""
        results = probe(self.store, coordinate, self.languages, renderer)
        self.stats.coordinates_probed += 1
        if not any_exists(results):
            return False
        self.stats.hits += 1
        for result in results.values():
            self.sink.record(result)
        return True


class FlatRangeWalker(_Walker):
    """Scan a single id dimension upward until the range ends or misses run out."""

    def __init__(
        self,
        store: ContentStore,
        sink: ExtractionSink,
        languages: Sequence[str],
        tuning: FlatScanTuning,
        on_progress: ProgressCallback | None = None,
    ):
        super().__init__(store, sink, languages, on_progress)
        self.tuning = tuning
        self.scheme = FlatScheme(tuning.directory)

    def walk(self) -> ScanStats:
        termination = RunLengthTermination(self.tuning.miss_threshold)
        logger.info(
            "Starting flat scan",
            directory=self.tuning.directory,
            start=self.tuning.start,
            end=self.tuning.end,
            miss_threshold=self.tuning.miss_threshold,
        )
        last_index = self.tuning.start
        for sequence_index in range(self.tuning.start, self.tuning.end):
            last_index = sequence_index
            if (sequence_index - self.tuning.start) % FLAT_PROGRESS_INTERVAL == 0:
                self._report(f"{self.tuning.directory}{sequence_index}")
            hit = self._extract(FlatCoordinate(sequence_index=sequence_index), self.scheme.render)
            if termination.observe(hit) is ScanDecision.STOP:
                logger.info(
                    "Miss threshold reached, ending flat scan",
                    directory=self.tuning.directory,
                    sequence_index=sequence_index,
                )
                break
        logger.info(
            "Finished flat scan",
            directory=self.tuning.directory,
            last_index=last_index,
            hits=self.stats.hits,
            coordinates_probed=self.stats.coordinates_probed,
        )
        return self.stats


class NestedWalker(_Walker):
    """Scan the cutscene hierarchy: expansion, patch bucket, bank, item.

    Each level owns a fresh termination counter when it is entered. The base
    game scans its legacy ``manfst`` buckets first, then regular ``voiceman``
    buckets from the end of the legacy table. The whole scan ends at the first
    expansion that yields no hits.
    """

    def __init__(
        self,
        store: ContentStore,
        sink: ExtractionSink,
        languages: Sequence[str],
        tuning: NestedScanTuning,
        expansion_range: ExpansionRange,
        on_progress: ProgressCallback | None = None,
    ):
        super().__init__(store, sink, languages, on_progress)
        self.tuning = tuning
        self.expansion_range = expansion_range

    def walk(self) -> ScanStats:
        logger.info(
            "Starting cutscene scan",
            expansion_start=self.expansion_range.start,
            expansion_end=self.expansion_range.end,
        )
        for expansion in self.expansion_range.indices():
            expansion_hits = self._walk_expansion(expansion)
            logger.info("Finished expansion", expansion=expansion, hits=expansion_hits)
            if expansion_hits == 0:
                logger.info("Expansion yielded no voice lines, ending cutscene scan", expansion=expansion)
                break
        logger.info(
            "Finished cutscene scan",
            hits=self.stats.hits,
            coordinates_probed=self.stats.coordinates_probed,
        )
        return self.stats

    def _walk_expansion(self, expansion: int) -> int:
        hits = 0
        regular_start = 0
        if expansion == 0:
            legacy_count = min(len(self.tuning.legacy_patch_buckets), self.tuning.patch_bucket_bound)
            hits += self._walk_patch_buckets(expansion, range(legacy_count), self.tuning.legacy)
            regular_start = legacy_count
        hits += self._walk_patch_buckets(
            expansion, range(regular_start, self.tuning.patch_bucket_bound), self.tuning.regular
        )
        return hits

    def _walk_patch_buckets(self, expansion: int, patch_buckets: range, thresholds: SchemeThresholds) -> int:
        termination = RunLengthTermination(thresholds.patch_bucket)
        hits = 0
        for patch_bucket in patch_buckets:
            scheme = scheme_for(expansion, patch_bucket, self.tuning.legacy_patch_buckets)
            bucket_hits = self._walk_banks(expansion, patch_bucket, scheme, thresholds)
            if bucket_hits:
                logger.debug(
                    "Patch bucket extracted",
                    expansion=expansion,
                    patch_bucket=patch_bucket,
                    hits=bucket_hits,
                )
            hits += bucket_hits
            if termination.observe(bucket_hits > 0) is ScanDecision.STOP:
                break
        return hits

    def _walk_banks(
        self,
        expansion: int,
        patch_bucket: int,
        scheme: LegacyScheme | RegularScheme,
        thresholds: SchemeThresholds,
    ) -> int:
        termination = RunLengthTermination(thresholds.bank)
        hits = 0
        for bank in range(self.tuning.bank_bound):
            first = NestedCoordinate(
                expansion_index=expansion, patch_bucket_index=patch_bucket, bank_index=bank, item_index=0
            )
            self._report(f"{scheme.directory(first)} bank {bank}")
            bank_hits = self._walk_items(first, scheme, thresholds)
            hits += bank_hits
            if termination.observe(bank_hits > 0) is ScanDecision.STOP:
                break
        return hits

    def _walk_items(
        self, first: NestedCoordinate, scheme: LegacyScheme | RegularScheme, thresholds: SchemeThresholds
    ) -> int:
        termination = RunLengthTermination(thresholds.item)
        hits = 0
        for item in range(first.item_index, self.tuning.item_bound):
            coordinate = first.model_copy(update={"item_index": item})
            hit = self._extract(coordinate, scheme.render)
            hits += hit
            if termination.observe(hit) is ScanDecision.STOP:
                break
        return hits
