# sprite_palette/selection/run.py
"""
Selection driver: reducer -> optimizer -> refiner -> reconciler -> assembly.
"""

from __future__ import annotations

from typing import Mapping, Optional

from sprite_palette.core_types import (
    DEFAULT_CONFIG,
    ColourArena,
    IdList,
    PaletteConfig,
    SpecialCaseRule,
)
from sprite_palette.selection.assemble import assemble
from sprite_palette.selection.candidates import hand_picked_order, reduce_candidates
from sprite_palette.selection.combos import best_combination, select_distance
from sprite_palette.selection.reconcile import reconcile, remainder_ids
from sprite_palette.selection.refine import refine_by_hue
from sprite_palette.special_cases import describe_rule, rule_for
from sprite_palette.utils import debug_log, key_value_pairs_to_string


def select_unique_colours(
    arena: ColourArena,
    identifier: Optional[int] = None,
    special_cases: Optional[Mapping[int, SpecialCaseRule]] = None,
    config: PaletteConfig = DEFAULT_CONFIG,
    debug: bool = False,
) -> IdList:
    """
    Order every arena id so the first pick_count are the most distinctive colours.

    Hand-picked sprites return their configured colours first and skip the
    reducer, optimizer, refiner, reconciler and assembly.
    """
    if not arena:
        return []
    rule = rule_for(special_cases, identifier)
    tunables = config.tunables

    if rule is not None and rule.mode == "handPickedColors":
        picked = rule.parameter if isinstance(rule.parameter, tuple) else ()
        ordered = hand_picked_order(arena, picked)
        if debug:
            debug_log(f"hand-picked {identifier}: {ordered}")
        return ordered

    candidates = reduce_candidates(arena, rule, config)
    combo, score = best_combination(
        arena, candidates, config.pick_count, select_distance(rule, tunables)
    )
    refined, bin_size = refine_by_hue(arena, combo, tunables)
    if debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Rule", describe_rule(rule)),
                    ("Candidates", len(candidates)),
                    ("Best", str(list(combo))),
                    ("Score", round(score, 4)),
                    ("Hue bin", bin_size),
                    ("Refined", str(refined)),
                ]
            )
        )

    selected = reconcile(arena, refined, rule, tunables, debug=debug)
    rest = remainder_ids(arena, selected)
    return assemble(arena, selected, rest, config.pick_count, tunables, debug)


__all__ = ["select_unique_colours"]
