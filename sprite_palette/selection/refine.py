# sprite_palette/selection/refine.py
"""
Hue-group refiner.

Each colour of the chosen subset stands for its hue bucket. The bucket size
shrinks in steps until the subset spans enough buckets (or the floor is hit);
then each bucket is represented by its brightest well-populated arena colour.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

from sprite_palette.colour_convert import hue_group_key, rgb_to_hsv
from sprite_palette.constants import DEFAULT_TUNABLES, Tunables
from sprite_palette.core_types import ColourArena, IdList


def distinct_hue_keys(arena: ColourArena, ids: Sequence[int], bin_size: int) -> List[int]:
    """Hue-group keys of `ids`, first-appearance order, no repeats."""
    keys: List[int] = []
    for cid in ids:
        key = hue_group_key(arena[cid].rgb, bin_size)
        if key not in keys:
            keys.append(key)
    return keys


def shrink_hue_bin(
    arena: ColourArena, ids: Sequence[int], tunables: Tunables = DEFAULT_TUNABLES
) -> Tuple[int, List[int]]:
    """
    Lower the bin size until the subset covers min_hue_groups keys or the bin
    reaches the floor. Returns (bin_size, keys).
    """
    bin_size = tunables.hue_bin
    keys = distinct_hue_keys(arena, ids, bin_size)
    while len(keys) < tunables.min_hue_groups and bin_size > tunables.hue_bin_floor:
        bin_size -= tunables.hue_bin_step
        keys = distinct_hue_keys(arena, ids, bin_size)
    return bin_size, keys


def bucket_representative(
    arena: ColourArena, key: int, bin_size: int, tunables: Tunables = DEFAULT_TUNABLES
) -> int:
    """
    Brightest (HSV value) arena colour among the bucket's well-populated members.
    The first one wins on equal value.
    """
    members = [s for s in arena if hue_group_key(s.rgb, bin_size) == key]
    threshold = max(s.count for s in members) * tunables.bucket_share
    strong = [s for s in members if s.count >= threshold]
    best = strong[0]
    best_v = rgb_to_hsv(best.rgb)[2]
    for s in strong[1:]:
        v = rgb_to_hsv(s.rgb)[2]
        if v > best_v:
            best, best_v = s, v
    return best.id


def refine_by_hue(
    arena: ColourArena,
    combo: Sequence[int],
    tunables: Tunables = DEFAULT_TUNABLES,
) -> Tuple[IdList, int]:
    """
    One representative per hue bucket of `combo`, sorted by count descending.

    Returns (ids, final_bin_size).
    """
    if not combo:
        return [], tunables.hue_bin
    bin_size, keys = shrink_hue_bin(arena, combo, tunables)
    reps = [bucket_representative(arena, key, bin_size, tunables) for key in keys]
    reps.sort(key=lambda cid: -arena[cid].count)
    return reps, bin_size


__all__ = [
    "distinct_hue_keys",
    "shrink_hue_bin",
    "bucket_representative",
    "refine_by_hue",
]
