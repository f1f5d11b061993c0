# ABOUTME: Empirically tuned scan bounds and miss thresholds for each voice line category
# ABOUTME: Kept as named constants and frozen models so walkers never carry inline magic numbers

from pydantic import BaseModel, ConfigDict, Field, model_validator

BATTLE_DIRECTORY = "sound/voice/vo_line/"
BATTLE_START = 8201000
BATTLE_SPAN = 1 << 16

# Unverified against game data; override with VOICELINE_MAHJONG if the id window differs.
MAHJONG_DIRECTORY = "sound/voice/vo_emj/"
MAHJONG_START = 8291000
MAHJONG_SPAN = 1 << 16

FLAT_MISS_THRESHOLD = 1000

PATCH_BUCKET_BOUND = 1000
BANK_BOUND = 36
ITEM_BOUND = 100000
MAX_EXPANSIONS = 10

# manfst directory numbers used by the base game's launch content, in scan order.
# Entries after 206 are unverified guesses; a missing bucket only costs misses.
LEGACY_PATCH_BUCKETS: tuple[int, ...] = (
    0,
    5,
    7,
    9,
    50,
    200,
    206,
    207,
    208,
    209,
    300,
    306,
    307,
    308,
    309,
    400,
    406,
    407,
    408,
    409,
    500,
    506,
    507,
    508,
    509,
)

LEGACY_BANK_MISS_THRESHOLD = 4
LEGACY_ITEM_MISS_THRESHOLD = 1000

REGULAR_PATCH_BUCKET_MISS_THRESHOLD = 150
REGULAR_BANK_MISS_THRESHOLD = 4
REGULAR_ITEM_MISS_THRESHOLD = 500


class FlatScanTuning(BaseModel):
    """Scan window and miss threshold for a single-dimension category."""

    model_config = ConfigDict(frozen=True)

    directory: str = Field(description="Store directory holding the category's files, with trailing slash")
    start: int = Field(ge=0, description="First sequence index probed")
    end: int = Field(ge=0, description="Exclusive upper bound of the sequence index")
    miss_threshold: int = Field(default=FLAT_MISS_THRESHOLD, ge=0, description="Consecutive misses before stopping")

    @model_validator(mode="after")
    def _check_window(self) -> "FlatScanTuning":
        if self.start > self.end:
            raise ValueError(f"start ({self.start}) must not exceed end ({self.end})")
        if not self.directory.endswith("/"):
            raise ValueError("directory must end with '/'")
        return self


class SchemeThresholds(BaseModel):
    """Consecutive-miss thresholds for the patch bucket, bank and item levels."""

    model_config = ConfigDict(frozen=True)

    patch_bucket: int = Field(ge=0)
    bank: int = Field(ge=0)
    item: int = Field(ge=0)


class NestedScanTuning(BaseModel):
    """Bounds and thresholds for the cutscene hierarchy."""

    model_config = ConfigDict(frozen=True)

    patch_bucket_bound: int = Field(default=PATCH_BUCKET_BOUND, ge=0)
    bank_bound: int = Field(default=BANK_BOUND, ge=0, le=BANK_BOUND)
    item_bound: int = Field(default=ITEM_BOUND, ge=0, le=ITEM_BOUND)
    legacy_patch_buckets: tuple[int, ...] = LEGACY_PATCH_BUCKETS
    legacy: SchemeThresholds = SchemeThresholds(
        patch_bucket=len(LEGACY_PATCH_BUCKETS),
        bank=LEGACY_BANK_MISS_THRESHOLD,
        item=LEGACY_ITEM_MISS_THRESHOLD,
    )
    regular: SchemeThresholds = SchemeThresholds(
        patch_bucket=REGULAR_PATCH_BUCKET_MISS_THRESHOLD,
        bank=REGULAR_BANK_MISS_THRESHOLD,
        item=REGULAR_ITEM_MISS_THRESHOLD,
    )
    max_expansions: int = Field(default=MAX_EXPANSIONS, ge=0, description="Expansion bound when no range is given")

    @model_validator(mode="after")
    def _check_legacy_buckets(self) -> "NestedScanTuning":
        if any(bucket < 0 or bucket > 999 for bucket in self.legacy_patch_buckets):
            raise ValueError("legacy patch buckets must fit in three digits")
        return self


def default_battle_tuning() -> FlatScanTuning:
    return FlatScanTuning(directory=BATTLE_DIRECTORY, start=BATTLE_START, end=BATTLE_START + BATTLE_SPAN)


def default_mahjong_tuning() -> FlatScanTuning:
    return FlatScanTuning(directory=MAHJONG_DIRECTORY, start=MAHJONG_START, end=MAHJONG_START + MAHJONG_SPAN)
