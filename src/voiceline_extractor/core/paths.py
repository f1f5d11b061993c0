# ABOUTME: Path templates mapping abstract coordinates and languages onto exact store paths
# ABOUTME: Covers flat id categories plus the legacy and regular cutscene naming schemes

import string
from dataclasses import dataclass
from typing import NamedTuple

from voiceline_extractor.core.models import FlatCoordinate, NestedCoordinate
from voiceline_extractor.core.tuning import LEGACY_PATCH_BUCKETS

BANK_ALPHABET = string.digits + string.ascii_lowercase


class ResourcePath(NamedTuple):
    """Store path split into its directory (with trailing slash) and file name."""

    directory: str
    file_name: str

    @property
    def path(self) -> str:
        return self.directory + self.file_name


def encode_bank(bank_index: int) -> str:
    """Encode a bank index as one base-36 character (``0-9`` then ``a-z``)."""
    if not 0 <= bank_index < len(BANK_ALPHABET):
        raise ValueError(f"bank index must be in [0, {len(BANK_ALPHABET)}), got {bank_index}")
    return BANK_ALPHABET[bank_index]


@dataclass(frozen=True)
class FlatScheme:
    """``<directory><sequence_index>_<language>.scd``"""

    directory: str

    def render(self, coordinate: FlatCoordinate, language: str) -> ResourcePath:
        return ResourcePath(self.directory, f"{coordinate.sequence_index}_{language}.scd")


@dataclass(frozen=True)
class LegacyScheme:
    """Base game launch content stored under irregularly numbered ``manfst`` directories."""

    buckets: tuple[int, ...] = LEGACY_PATCH_BUCKETS

    def bucket_number(self, patch_bucket_index: int) -> int:
        return self.buckets[patch_bucket_index]

    def directory(self, coordinate: NestedCoordinate) -> str:
        bucket = self.bucket_number(coordinate.patch_bucket_index)
        return f"cut/ffxiv/sound/manfst/manfst{bucket:03d}/"

    def render(self, coordinate: NestedCoordinate, language: str) -> ResourcePath:
        bucket = self.bucket_number(coordinate.patch_bucket_index)
        bank = encode_bank(coordinate.bank_index)
        return ResourcePath(
            self.directory(coordinate),
            f"vo_manfst{bucket:03d}_{bank}{coordinate.item_index:05d}_m_{language}.scd",
        )


@dataclass(frozen=True)
class RegularScheme:
    """``voiceman`` directories numbered from the expansion and patch bucket."""

    @staticmethod
    def _voiceman_id(coordinate: NestedCoordinate) -> str:
        return f"{coordinate.expansion_index + 2:02d}{coordinate.patch_bucket_index:03d}"

    def directory(self, coordinate: NestedCoordinate) -> str:
        directory = f"cut/ex{coordinate.expansion_index}/sound/voicem/voiceman_{self._voiceman_id(coordinate)}/"
        return directory.replace("ex0", "ffxiv")

    def render(self, coordinate: NestedCoordinate, language: str) -> ResourcePath:
        bank = encode_bank(coordinate.bank_index)
        return ResourcePath(
            self.directory(coordinate),
            f"vo_voiceman_{self._voiceman_id(coordinate)}_{bank}{coordinate.item_index:05d}_m_{language}.scd",
        )


NestedScheme = LegacyScheme | RegularScheme


def scheme_for(
    expansion_index: int, patch_bucket_index: int, legacy_buckets: tuple[int, ...] = LEGACY_PATCH_BUCKETS
) -> NestedScheme:
    """Select the naming scheme for a patch bucket.

    Base game buckets below the legacy table length resolve through the table;
    everything else follows the regular ``voiceman`` numbering.
    """
    if expansion_index == 0 and patch_bucket_index < len(legacy_buckets):
        return LegacyScheme(legacy_buckets)
    return RegularScheme()


def render(
    coordinate: FlatCoordinate | NestedCoordinate,
    language: str,
    *,
    flat_directory: str | None = None,
    legacy_buckets: tuple[int, ...] = LEGACY_PATCH_BUCKETS,
) -> ResourcePath:
    """Render any coordinate to its store path.

    Flat coordinates need the category directory; nested coordinates pick their
    scheme from the expansion and patch bucket.
    """
    if isinstance(coordinate, FlatCoordinate):
        if flat_directory is None:
            raise ValueError("flat coordinates need a category directory")
        return FlatScheme(flat_directory).render(coordinate, language)
    scheme = scheme_for(coordinate.expansion_index, coordinate.patch_bucket_index, legacy_buckets)
    return scheme.render(coordinate, language)
