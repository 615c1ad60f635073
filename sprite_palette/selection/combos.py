# sprite_palette/selection/combos.py
"""
Combination optimizer.

Brute-forces every k-subset of the candidates (k = min(pick_count, n)) and keeps
the one whose summed pairwise distance is largest. Enumeration is lexicographic
over candidate positions and a strictly greater score is needed to displace the
current best, so ties resolve to the first subset seen.
"""

from __future__ import annotations

from functools import partial
from itertools import combinations
from typing import Optional, Sequence, Tuple

from sprite_palette.colour_convert import euclidean_rgb_distance, perceptual_hsl_distance
from sprite_palette.constants import DEFAULT_TUNABLES, Tunables
from sprite_palette.core_types import (
    ColourArena,
    ColourCombo,
    ColourDistance,
    SpecialCaseRule,
)


def select_distance(
    rule: Optional[SpecialCaseRule], tunables: Tunables = DEFAULT_TUNABLES
) -> ColourDistance:
    """Euclidean RGB for colorDistance sprites, perceptual HSL otherwise."""
    if rule is not None and rule.mode == "colorDistance":
        return euclidean_rgb_distance
    return partial(perceptual_hsl_distance, tunables=tunables)


def combo_score(arena: ColourArena, combo: Sequence[int], distance: ColourDistance) -> float:
    """Sum of pairwise distances within one subset."""
    total = 0.0
    for i in range(len(combo)):
        for j in range(i + 1, len(combo)):
            total += distance(arena[combo[i]].rgb, arena[combo[j]].rgb)
    return total


def best_combination(
    arena: ColourArena,
    candidate_ids: Sequence[int],
    pick_count: int,
    distance: ColourDistance,
) -> Tuple[ColourCombo, float]:
    """
    Returns (best_subset_ids, score). Empty candidates give ((), 0.0).
    """
    k = min(pick_count, len(candidate_ids))
    if k <= 0:
        return (), 0.0

    best: ColourCombo = ()
    best_score = float("-inf")
    for combo in combinations(candidate_ids, k):
        score = combo_score(arena, combo, distance)
        if score > best_score:
            best, best_score = tuple(combo), score
    return best, best_score


__all__ = ["select_distance", "combo_score", "best_combination"]
