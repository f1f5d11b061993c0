# ABOUTME: Extraction sink that persists found voice lines and writes the per-category manifest log
# ABOUTME: One timestamped UTF-8 log per category run, with a sha256 line per extracted file

from __future__ import annotations

import hashlib
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path
from typing import TextIO

from voiceline_extractor.core.models import Category, ManifestEntry, ProbeResult
from voiceline_extractor.utils.logging import get_logger

logger = get_logger(__name__)


def utcnow() -> datetime:
    """Returns the current UTC timestamp."""

    return datetime.now(UTC)


def log_file_name(category: Category | str, timestamp: datetime, sequence: int = 0) -> str:
    """``<ISO8601 timestamp with ':' replaced by '-'>[-<sequence>]_<category>.log``

    A non-zero ``sequence`` disambiguates runs started within the same second.
    """
    category = category.value if isinstance(category, Category) else category
    stamp = timestamp.strftime("%Y-%m-%dT%H:%M:%S").replace(":", "-")
    if sequence:
        stamp = f"{stamp}-{sequence}"
    return f"{stamp}_{category}.log"


def compute_content_hash(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


class ExtractionSink:
    """Writes extracted files under the output root and records them in the run's manifest log.

    Use as a context manager: the log file is opened on enter and flushed and
    closed on exit, including when a write failure aborts the scan.
    """

    def __init__(self, out_directory: str | Path, category: Category | str, clock: Callable[[], datetime] = utcnow):
        self.out_directory = Path(out_directory)
        self.category = category
        self.clock = clock
        self.log_path: Path | None = None
        self.files_written = 0
        self.errors = 0
        self._handle: TextIO | None = None
        self._last_directory: str | None = None

    def __enter__(self) -> ExtractionSink:
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    @property
    def is_open(self) -> bool:
        return self._handle is not None

    def open(self) -> None:
        if self._handle is not None:
            return
        self.out_directory.mkdir(parents=True, exist_ok=True)
        timestamp = self.clock()
        sequence = 0
        while True:
            self.log_path = self.out_directory / log_file_name(self.category, timestamp, sequence)
            try:
                self._handle = self.log_path.open("x", encoding="utf-8", newline="\n")
            except FileExistsError:
                sequence += 1
            else:
                break
        logger.debug("Opened extraction log", log_path=str(self.log_path))

    def close(self) -> None:
        if self._handle is None:
            return
        self._handle.flush()
        self._handle.close()
        self._handle = None
        logger.debug(
            "Closed extraction log",
            log_path=str(self.log_path),
            files_written=self.files_written,
            errors=self.errors,
        )

    def _write_line(self, line: str) -> None:
        if self._handle is None:
            raise RuntimeError("Extraction sink is not open")
        self._handle.write(line)

    def enter_directory(self, directory: str) -> None:
        """Create ``directory`` and write its manifest header unless it was the last one entered."""
        if directory == self._last_directory:
            return
        (self.out_directory / directory).mkdir(parents=True, exist_ok=True)
        self._write_line(f"{directory}, sha256\n")
        self._last_directory = directory

    def record_success(self, directory: str, file_name: str, data: bytes) -> ManifestEntry:
        """Persist ``data`` at ``<out>/<directory><file_name>``, overwriting, and log its hash."""
        self.enter_directory(directory)
        (self.out_directory / directory / file_name).write_bytes(data)
        entry = ManifestEntry(directory=directory, file_name=file_name, content_hash=compute_content_hash(data))
        self._write_line(entry.to_line())
        self.files_written += 1
        return entry

    def record_failure(self, directory: str, file_name: str, message: str) -> ManifestEntry:
        """Log that one file of a found coordinate could not be extracted."""
        self.enter_directory(directory)
        entry = ManifestEntry(directory=directory, file_name=file_name, error_message=message)
        self._write_line(entry.to_line())
        self.errors += 1
        logger.info("Voice line variant not extracted", path=entry.relative_path, error=message)
        return entry

    def record(self, result: ProbeResult) -> ManifestEntry:
        """Record a probe result as either a persisted file or an error line."""
        if result.exists and result.data is not None:
            return self.record_success(result.directory, result.file_name, result.data)
        message = str(result.error) if result.error is not None else "not found"
        return self.record_failure(result.directory, result.file_name, message)
