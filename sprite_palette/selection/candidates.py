# sprite_palette/selection/candidates.py
"""
Candidate reducer.

Narrows the arena to the few frequent colours worth combining, or, for
hand-picked sprites, returns the whole arena with the configured colours first.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Set

from sprite_palette.core_types import (
    ColourArena,
    IdList,
    PaletteConfig,
    RGBTuple,
    SpecialCaseRule,
)


def hand_picked_order(arena: ColourArena, picked: Sequence[RGBTuple]) -> IdList:
    """
    Arena ids with exact matches of `picked` first, everything else after.
    Both parts keep arena order. Colours absent from the arena are ignored.
    """
    wanted: Set[RGBTuple] = {(int(r), int(g), int(b)) for r, g, b in picked}
    head: List[int] = []
    tail: List[int] = []
    for sample in arena:
        (head if sample.rgb in wanted else tail).append(sample.id)
    return head + tail


def effective_top_n(rule: Optional[SpecialCaseRule], config: PaletteConfig) -> int:
    if rule is not None and rule.mode == "topNColors":
        return rule.int_parameter(config.top_n)
    return config.top_n


def reduce_candidates(
    arena: ColourArena,
    rule: Optional[SpecialCaseRule],
    config: PaletteConfig,
) -> IdList:
    """
    Top-N ids by count (stable), minus those under config.min_count.
    May be empty for sparse sprites.
    """
    ranked = sorted(arena, key=lambda s: -s.count)
    top = ranked[: effective_top_n(rule, config)]
    return [s.id for s in top if s.count >= config.min_count]


__all__ = ["hand_picked_order", "effective_top_n", "reduce_candidates"]
