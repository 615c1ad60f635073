# sprite_palette/constants.py
"""
Tunables used across the project.

- Sampler constants (SAMPLE_*)
- Selection constants (candidate pool, hue buckets, dark-shade and merge passes)
- Ordering constants (dominance, low-count correction)
- Tunables: frozen bundle of all of the above, overridable per call
"""
from __future__ import annotations

from dataclasses import dataclass

# ===============
# Sampler (SAMPLE)
# ===============
SAMPLE_PRECISION: int = 1
SAMPLE_COARSE_PRECISION: int = 60
SAMPLE_MAX_COLOURS: int = 30
SAMPLE_NEAR_BLACK: float = 26.5
SAMPLE_EDGE_DARK: float = 35.0

# ==========
# Selection
# ==========
TOP_N: int = 6
PICK_COUNT: int = 3
MIN_COUNT: int = 17

HUE_BIN: int = 60
HUE_BIN_STEP: int = 5
HUE_BIN_FLOOR: int = 10
MIN_HUE_GROUPS: int = 3
BUCKET_SHARE: float = 0.85

MUTE_SATURATION: float = 0.3
MUTE_LIGHTNESS: float = 0.3
MUTE_SIMILARITY: float = 0.8
MUTE_FACTOR_LOW: float = 0.5
MUTE_FACTOR_HIGH: float = 2.0

DARK_SUM: int = 225
GREY_SUM: int = 280
GREY_SATURATION: float = 0.1
SHADE_COUNT_WINDOW: float = 0.3

MERGE_LIGHTNESS: float = 10.0
MERGE_HUE: float = 10.0
REPLACEMENT_POOL: int = 6

LEAST_BORING_MIN_COUNT: int = 25

SWAP_SUM: int = 10
SWAP_SATURATION: float = 30.0

# =========
# Ordering
# =========
LOW_COUNT: int = 17
DOMINANCE_FACTOR: float = 1.29
SUPER_DOMINANCE_FACTOR: float = 3.0
SHADE_HUE: float = 10.0
DARK_LIGHTNESS: float = 20.0
BORING_SATURATION: float = 5.0
DULL_SATURATION: float = 20.0
DULL_LIGHTNESS: float = 20.0
LOW_FIRST_RATIO: float = 0.7
ORDERED_COUNT: int = 3


@dataclass(frozen=True)
class Tunables:
    """All thresholds in one place. Override with dataclasses.replace()."""

    precision: int = SAMPLE_PRECISION
    coarse_precision: int = SAMPLE_COARSE_PRECISION
    max_colours: int = SAMPLE_MAX_COLOURS
    near_black: float = SAMPLE_NEAR_BLACK
    edge_dark: float = SAMPLE_EDGE_DARK

    hue_bin: int = HUE_BIN
    hue_bin_step: int = HUE_BIN_STEP
    hue_bin_floor: int = HUE_BIN_FLOOR
    min_hue_groups: int = MIN_HUE_GROUPS
    bucket_share: float = BUCKET_SHARE

    mute_saturation: float = MUTE_SATURATION
    mute_lightness: float = MUTE_LIGHTNESS
    mute_similarity: float = MUTE_SIMILARITY
    mute_factor_low: float = MUTE_FACTOR_LOW
    mute_factor_high: float = MUTE_FACTOR_HIGH

    dark_sum: int = DARK_SUM
    grey_sum: int = GREY_SUM
    grey_saturation: float = GREY_SATURATION
    shade_count_window: float = SHADE_COUNT_WINDOW

    merge_lightness: float = MERGE_LIGHTNESS
    merge_hue: float = MERGE_HUE
    replacement_pool: int = REPLACEMENT_POOL

    least_boring_min_count: int = LEAST_BORING_MIN_COUNT

    swap_sum: int = SWAP_SUM
    swap_saturation: float = SWAP_SATURATION

    low_count: int = LOW_COUNT
    dominance_factor: float = DOMINANCE_FACTOR
    super_dominance_factor: float = SUPER_DOMINANCE_FACTOR
    shade_hue: float = SHADE_HUE
    dark_lightness: float = DARK_LIGHTNESS
    boring_saturation: float = BORING_SATURATION
    dull_saturation: float = DULL_SATURATION
    dull_lightness: float = DULL_LIGHTNESS
    low_first_ratio: float = LOW_FIRST_RATIO
    ordered_count: int = ORDERED_COUNT


DEFAULT_TUNABLES = Tunables()

__all__ = [
    "SAMPLE_PRECISION",
    "SAMPLE_COARSE_PRECISION",
    "SAMPLE_MAX_COLOURS",
    "SAMPLE_NEAR_BLACK",
    "SAMPLE_EDGE_DARK",
    "TOP_N",
    "PICK_COUNT",
    "MIN_COUNT",
    "HUE_BIN",
    "HUE_BIN_STEP",
    "HUE_BIN_FLOOR",
    "MIN_HUE_GROUPS",
    "BUCKET_SHARE",
    "MUTE_SATURATION",
    "MUTE_LIGHTNESS",
    "MUTE_SIMILARITY",
    "MUTE_FACTOR_LOW",
    "MUTE_FACTOR_HIGH",
    "DARK_SUM",
    "GREY_SUM",
    "GREY_SATURATION",
    "SHADE_COUNT_WINDOW",
    "MERGE_LIGHTNESS",
    "MERGE_HUE",
    "REPLACEMENT_POOL",
    "LEAST_BORING_MIN_COUNT",
    "SWAP_SUM",
    "SWAP_SATURATION",
    "LOW_COUNT",
    "DOMINANCE_FACTOR",
    "SUPER_DOMINANCE_FACTOR",
    "SHADE_HUE",
    "DARK_LIGHTNESS",
    "BORING_SATURATION",
    "DULL_SATURATION",
    "DULL_LIGHTNESS",
    "LOW_FIRST_RATIO",
    "ORDERED_COUNT",
    "Tunables",
    "DEFAULT_TUNABLES",
]
