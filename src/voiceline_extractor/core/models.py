# ABOUTME: Domain models for probing the voice line namespace and recording what was extracted
# ABOUTME: Coordinates, language sets, run configuration, probe results and manifest entries

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from voiceline_extractor.store.base import ResourceReadError

ALL_LANGUAGES: tuple[str, ...] = ("de", "en", "fr", "ja")
DEFAULT_LANGUAGE = "en"


class Category(Enum):
    """Voice line categories, declared in processing order."""

    BATTLE = "battle"
    MAHJONG = "mahjong"
    CUTSCENE = "cutscene"


class FlatCoordinate(BaseModel):
    """Position in a single-dimension id space."""

    model_config = ConfigDict(frozen=True)

    sequence_index: int = Field(ge=0)


class NestedCoordinate(BaseModel):
    """Position in the expansion / patch bucket / bank / item hierarchy."""

    model_config = ConfigDict(frozen=True)

    expansion_index: int = Field(ge=0)
    patch_bucket_index: int = Field(ge=0)
    bank_index: int = Field(ge=0)
    item_index: int = Field(ge=0)


Coordinate = FlatCoordinate | NestedCoordinate


def normalize_languages(codes: Iterable[str], default: str = DEFAULT_LANGUAGE) -> tuple[str, ...]:
    """Deduplicate and sort language codes, expanding ``all`` and falling back to ``default``."""
    languages: set[str] = set()
    for code in codes:
        code = code.strip()
        if not code:
            continue
        if code == "all":
            languages.update(ALL_LANGUAGES)
        else:
            languages.add(code)
    if not languages:
        languages.add(default)
    return tuple(sorted(languages))


class ExpansionRange(BaseModel):
    """Half-open range ``[start, end)`` of expansion indices."""

    model_config = ConfigDict(frozen=True)

    start: int = Field(default=0, ge=0)
    end: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _check_order(self) -> ExpansionRange:
        if self.start > self.end:
            raise ValueError(f"expansion range start ({self.start}) must not exceed end ({self.end})")
        return self

    def indices(self) -> range:
        return range(self.start, self.end)

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    @classmethod
    def parse(cls, selection: str | None, max_expansions: int) -> ExpansionRange:
        """Parse a ``exX`` or ``exX-exY`` selection; ``ffxiv`` names the base game.

        The upper end of a selection is inclusive. ``None``, ``""`` and ``all`` select
        every expansion below ``max_expansions``.
        """
        if selection is None or selection.strip() in ("", "all"):
            return cls(start=0, end=max_expansions)

        def _index(token: str) -> int:
            token = token.strip().lower()
            if token == "ffxiv":
                return 0
            token = token.removeprefix("ex")
            if not token.isdigit():
                raise ValueError(f"Invalid expansion selection: {selection!r}")
            return int(token)

        if "-" in selection:
            first, _, last = selection.partition("-")
            return cls(start=_index(first), end=_index(last) + 1)
        start = _index(selection)
        return cls(start=start, end=start + 1)


class ExtractionConfiguration(BaseModel):
    """Immutable settings for one extraction run."""

    model_config = ConfigDict(frozen=True)

    out_directory: str
    languages: tuple[str, ...] = (DEFAULT_LANGUAGE,)
    categories: frozenset[Category] = frozenset()
    expansion_range: ExpansionRange = ExpansionRange()

    @field_validator("out_directory", mode="before")
    @classmethod
    def _ensure_trailing_separator(cls, value: str | Path) -> str:
        value = str(value)
        if not value.endswith(("/", os.sep)):
            value += "/"
        return value

    @field_validator("languages", mode="before")
    @classmethod
    def _normalize_languages(cls, value: Iterable[str]) -> tuple[str, ...]:
        if isinstance(value, str):
            value = [value]
        return normalize_languages(value)

    @property
    def ordered_categories(self) -> list[Category]:
        return [category for category in Category if category in self.categories]


@dataclass(frozen=True)
class ProbeResult:
    """Outcome of fetching one coordinate in one language."""

    language: str
    directory: str
    file_name: str
    exists: bool
    data: bytes | None = None
    error: Exception | None = None

    @property
    def path(self) -> str:
        return self.directory + self.file_name

    @property
    def present(self) -> bool:
        """Found in the store, even when its bytes could not be read."""
        return self.exists or isinstance(self.error, ResourceReadError)


class ManifestEntry(BaseModel):
    """One line of a category's extraction log."""

    model_config = ConfigDict(frozen=True)

    directory: str
    file_name: str
    content_hash: str | None = None
    error_message: str | None = None

    @model_validator(mode="after")
    def _check_outcome(self) -> ManifestEntry:
        if (self.content_hash is None) == (self.error_message is None):
            raise ValueError("a manifest entry carries either a content hash or an error message")
        return self

    @property
    def relative_path(self) -> str:
        return self.directory + self.file_name

    @property
    def succeeded(self) -> bool:
        return self.content_hash is not None

    def to_line(self) -> str:
        if self.content_hash is not None:
            return f"{self.file_name}, {self.content_hash}\n"
        return f"{self.file_name}, ERROR: {self.error_message}\n"


class CategorySummary(BaseModel):
    """Statistics for one category scan."""

    category: Category
    coordinates_probed: int = 0
    hits: int = 0
    files_written: int = 0
    errors: int = 0
    log_path: Path | None = None
