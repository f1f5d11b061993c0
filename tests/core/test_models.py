# ABOUTME: Tests for extraction domain models
# ABOUTME: Language normalisation, expansion selection parsing, configuration and manifest lines

import pytest
from pydantic import ValidationError

from voiceline_extractor.core.models import (
    ALL_LANGUAGES,
    Category,
    ExpansionRange,
    ExtractionConfiguration,
    ManifestEntry,
    NestedCoordinate,
    normalize_languages,
)


class TestNormalizeLanguages:
    def test_deduplicates_and_sorts(self):
        assert normalize_languages(["ja", "en", "ja", "fr"]) == ("en", "fr", "ja")

    def test_all_expands_to_every_language(self):
        assert normalize_languages(["all"]) == ALL_LANGUAGES
        assert normalize_languages(["en", "all"]) == ("de", "en", "fr", "ja")

    def test_empty_falls_back_to_default(self):
        assert normalize_languages([]) == ("en",)
        assert normalize_languages([], default="ja") == ("ja",)


class TestExpansionRange:
    def test_single_expansion(self):
        assert ExpansionRange.parse("ex2", max_expansions=10) == ExpansionRange(start=2, end=3)

    def test_base_game_aliases(self):
        assert ExpansionRange.parse("ex0", max_expansions=10) == ExpansionRange(start=0, end=1)
        assert ExpansionRange.parse("ffxiv", max_expansions=10) == ExpansionRange(start=0, end=1)

    def test_inclusive_range(self):
        assert ExpansionRange.parse("ex1-ex3", max_expansions=10) == ExpansionRange(start=1, end=4)
        assert ExpansionRange.parse("ex1-3", max_expansions=10) == ExpansionRange(start=1, end=4)
        assert ExpansionRange.parse("ffxiv-ex1", max_expansions=10) == ExpansionRange(start=0, end=2)

    def test_no_selection_scans_every_expansion(self):
        assert ExpansionRange.parse(None, max_expansions=6) == ExpansionRange(start=0, end=6)
        assert ExpansionRange.parse("all", max_expansions=6) == ExpansionRange(start=0, end=6)

    def test_invalid_selection(self):
        with pytest.raises(ValueError):
            ExpansionRange.parse("stormblood", max_expansions=10)

    def test_reversed_range_rejected(self):
        with pytest.raises(ValidationError):
            ExpansionRange.parse("ex3-ex1", max_expansions=10)

    def test_empty_range_has_no_indices(self):
        empty = ExpansionRange(start=4, end=4)

        assert empty.is_empty
        assert list(empty.indices()) == []


class TestExtractionConfiguration:
    def test_out_directory_gets_trailing_separator(self):
        configuration = ExtractionConfiguration(out_directory="/tmp/voice")

        assert configuration.out_directory == "/tmp/voice/"

    def test_languages_normalised(self):
        configuration = ExtractionConfiguration(out_directory="out/", languages=["ja", "en", "en"])

        assert configuration.languages == ("en", "ja")

    def test_categories_processed_in_fixed_order(self):
        configuration = ExtractionConfiguration(
            out_directory="out/", categories=["cutscene", "battle", "mahjong"]
        )

        assert configuration.ordered_categories == [Category.BATTLE, Category.MAHJONG, Category.CUTSCENE]

    def test_is_immutable(self):
        configuration = ExtractionConfiguration(out_directory="out/")

        with pytest.raises(ValidationError):
            configuration.out_directory = "elsewhere/"


class TestManifestEntry:
    def test_success_line(self):
        entry = ManifestEntry(directory="sound/voice/vo_line/", file_name="8201005_en.scd", content_hash="ab12")

        assert entry.succeeded
        assert entry.relative_path == "sound/voice/vo_line/8201005_en.scd"
        assert entry.to_line() == "8201005_en.scd, ab12\n"

    def test_error_line(self):
        entry = ManifestEntry(directory="d/", file_name="1_ja.scd", error_message="missing")

        assert not entry.succeeded
        assert entry.to_line() == "1_ja.scd, ERROR: missing\n"

    def test_requires_exactly_one_outcome(self):
        with pytest.raises(ValidationError):
            ManifestEntry(directory="d/", file_name="x.scd")
        with pytest.raises(ValidationError):
            ManifestEntry(directory="d/", file_name="x.scd", content_hash="ab", error_message="boom")


def test_coordinates_reject_negative_indices():
    with pytest.raises(ValidationError):
        NestedCoordinate(expansion_index=0, patch_bucket_index=-1, bank_index=0, item_index=0)
