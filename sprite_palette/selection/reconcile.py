# sprite_palette/selection/reconcile.py
"""
Dominant-colour reconciler.

Four ordered corrections applied to the refined selection:
  include_most_frequent  swap in the most frequent colour for its hue-group twin
  lift_dark_shades       trade very dark or grey picks for a brighter near-count colour
  merge_near_duplicates  replace the weaker of two look-alike picks
  add_least_boring       top up short selections with the most saturated colour
then dedupe_ids() and remainder_ids() split the arena into selection and rest.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Set

from sprite_palette.colour_convert import hue_group_key, rgb_sum, rgb_to_hsl, rgb_to_hsv
from sprite_palette.constants import DEFAULT_TUNABLES, ORDERED_COUNT, Tunables
from sprite_palette.core_types import ColourArena, IdList, SpecialCaseRule
from sprite_palette.utils import debug_log


def include_most_frequent(
    arena: ColourArena,
    selected: Sequence[int],
    rule: Optional[SpecialCaseRule],
    tunables: Tunables = DEFAULT_TUNABLES,
) -> IdList:
    """
    If the arena's most frequent colour is missing, it replaces the first pick in
    its hue group (bin from a mostFrequent rule, else the default bin).
    """
    out = list(selected)
    if not arena:
        return out
    top = arena[0]
    if top.id in out:
        return out
    bin_size = tunables.hue_bin
    if rule is not None and rule.mode == "mostFrequent":
        bin_size = rule.int_parameter(bin_size)
    key = hue_group_key(top.rgb, bin_size)
    for i, cid in enumerate(out):
        if hue_group_key(arena[cid].rgb, bin_size) == key:
            out[i] = top.id
            break
    return out


def _is_dark_or_grey(rgb, tunables: Tunables) -> bool:
    total = rgb_sum(rgb)
    if total < tunables.dark_sum:
        return True
    return rgb_to_hsv(rgb)[1] < tunables.grey_saturation and total < tunables.grey_sum


def lift_dark_shades(
    arena: ColourArena,
    selected: Sequence[int],
    tunables: Tunables = DEFAULT_TUNABLES,
) -> IdList:
    """
    Replace dark or grey picks with the brightest arena colour that is lighter,
    has a count within the shade window, and whose hue group no other pick of
    the incoming selection already holds.
    """
    before = list(selected)
    out: IdList = []
    for current in before:
        cur = arena[current]
        if not _is_dark_or_grey(cur.rgb, tunables):
            out.append(current)
            continue

        cur_sum = rgb_sum(cur.rgb)
        lower = cur.count * (1.0 - tunables.shade_count_window)
        upper = cur.count * (1.0 + tunables.shade_count_window)
        taken_keys = {hue_group_key(arena[o].rgb) for o in before if o != current}

        best = None
        best_v = -1.0
        for s in arena:
            if rgb_sum(s.rgb) <= cur_sum or not (lower <= s.count <= upper):
                continue
            if hue_group_key(s.rgb) in taken_keys:
                continue
            v = rgb_to_hsv(s.rgb)[2]
            if v > best_v:
                best, best_v = s, v
        out.append(best.id if best is not None else current)
    return out


def _looks_alike(a_rgb, b_rgb, tunables: Tunables) -> bool:
    ha, _sa, la = rgb_to_hsl(a_rgb)
    hb, _sb, lb = rgb_to_hsl(b_rgb)
    return (
        abs(la * 100.0 - lb * 100.0) <= tunables.merge_lightness
        and abs(ha - hb) <= tunables.merge_hue
    )


def merge_near_duplicates(
    arena: ColourArena,
    selected: Sequence[int],
    tunables: Tunables = DEFAULT_TUNABLES,
) -> IdList:
    """
    For each look-alike pair (close lightness and hue), the lower-count member is
    replaced by the first top-ranked unselected colour whose hue group is already
    in use. Pairs are visited in order against the live selection.
    """
    out = list(selected)
    pool = arena[: tunables.replacement_pool]
    for i in range(len(out)):
        for j in range(i + 1, len(out)):
            a, b = arena[out[i]], arena[out[j]]
            if not _looks_alike(a.rgb, b.rgb, tunables):
                continue
            weaker = a if a.count < b.count else b
            keys_in_use = {hue_group_key(arena[cid].rgb) for cid in out}
            replacement = next(
                (
                    s
                    for s in pool
                    if s.id not in out and hue_group_key(s.rgb) in keys_in_use
                ),
                None,
            )
            if replacement is None or weaker.id not in out:
                continue
            out[out.index(weaker.id)] = replacement.id
    return out


def add_least_boring(
    arena: ColourArena,
    selected: Sequence[int],
    rule: Optional[SpecialCaseRule],
    tunables: Tunables = DEFAULT_TUNABLES,
    target: int = ORDERED_COUNT,
) -> IdList:
    """
    Append the most saturated top-ranked colour when fewer than `target`
    picks remain. Candidates need more than the count floor (leastBoringColor
    rule, else the default) and an HSL triple not already picked. Nothing is
    appended when no candidate qualifies.
    """
    out = list(selected)
    if len(out) >= target:
        return out

    min_count = tunables.least_boring_min_count
    if rule is not None and rule.mode == "leastBoringColor":
        min_count = rule.int_parameter(min_count)

    picked_hsl = {rgb_to_hsl(arena[cid].rgb) for cid in out}
    best = None
    best_s = 0.0
    for s in arena[: tunables.replacement_pool]:
        hsl = rgb_to_hsl(s.rgb)
        if hsl[1] > best_s and hsl not in picked_hsl and s.count > min_count:
            best, best_s = s, hsl[1]
    if best is not None:
        out.append(best.id)
    return out


def dedupe_ids(ids: Sequence[int]) -> IdList:
    seen: Set[int] = set()
    out: IdList = []
    for cid in ids:
        if cid not in seen:
            seen.add(cid)
            out.append(cid)
    return out


def remainder_ids(arena: ColourArena, selected: Sequence[int]) -> IdList:
    """Arena ids not in `selected`, arena order."""
    chosen = set(selected)
    return [s.id for s in arena if s.id not in chosen]


def reconcile(
    arena: ColourArena,
    refined: Sequence[int],
    rule: Optional[SpecialCaseRule],
    tunables: Tunables = DEFAULT_TUNABLES,
    debug: bool = False,
) -> IdList:
    """
    Run the four corrections in order and dedupe the result. The least-boring
    top-up aims for the ordered_count head, whatever the combo size.
    """
    out: List[int] = include_most_frequent(arena, refined, rule, tunables)
    if debug:
        debug_log(f"most-frequent: {list(refined)} -> {out}")

    if rule is None or rule.mode != "colorDistance":
        lifted = lift_dark_shades(arena, out, tunables)
        if debug and lifted != out:
            debug_log(f"dark shades: {out} -> {lifted}")
        out = lifted

    merged = merge_near_duplicates(arena, out, tunables)
    if debug and merged != out:
        debug_log(f"near-duplicates: {out} -> {merged}")

    out = add_least_boring(arena, merged, rule, tunables, tunables.ordered_count)
    if debug and out != merged:
        debug_log(f"least boring: added {out[-1]}")
    return dedupe_ids(out)


__all__ = [
    "include_most_frequent",
    "lift_dark_shades",
    "merge_near_duplicates",
    "add_least_boring",
    "dedupe_ids",
    "remainder_ids",
    "reconcile",
]
