# sprite_palette/selection/assemble.py
"""
Final assembly and secondary swap.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

from sprite_palette.colour_convert import hue_group_key, rgb_sum, rgb_to_hsl
from sprite_palette.constants import DEFAULT_TUNABLES, ORDERED_COUNT, PICK_COUNT, Tunables
from sprite_palette.core_types import ColourArena, IdList
from sprite_palette.utils import debug_log


def pad_selection(
    selected: Sequence[int], rest: Sequence[int], size: int = ORDERED_COUNT
) -> Tuple[IdList, IdList]:
    """Move ids from the front of `rest` until the selection holds `size`."""
    top = list(selected)
    remaining = list(rest)
    while len(top) < size and remaining:
        top.append(remaining.pop(0))
    return top, remaining


def _same_shade(arena: ColourArena, a: int, b: int, tunables: Tunables) -> bool:
    ra, rb = arena[a].rgb, arena[b].rgb
    return (
        abs(rgb_sum(ra) - rgb_sum(rb)) <= tunables.swap_sum
        and hue_group_key(ra) == hue_group_key(rb)
        and rgb_to_hsl(ra)[1] * 100.0 > tunables.swap_saturation
        and rgb_to_hsl(rb)[1] * 100.0 > tunables.swap_saturation
    )


def secondary_swap(
    arena: ColourArena,
    top: Sequence[int],
    rest: Sequence[int],
    pick_count: int = PICK_COUNT,
    tunables: Tunables = DEFAULT_TUNABLES,
) -> Tuple[IdList, IdList, bool]:
    """
    Find the first pair in the leading pick_count ids with near-equal RGB sums,
    one hue group and real saturation. The lower-count member trades places with
    rest[0] and moves to the end of rest. At most one swap happens.

    Returns (top, rest, swapped).
    """
    out_top = list(top)
    out_rest = list(rest)
    if not out_rest:
        return out_top, out_rest, False

    n = min(pick_count, len(out_top))
    for i in range(n):
        for j in range(i + 1, n):
            a, b = out_top[i], out_top[j]
            if not _same_shade(arena, a, b, tunables):
                continue
            weaker_idx = i if arena[a].count < arena[b].count else j
            weaker = out_top[weaker_idx]
            out_top[weaker_idx] = out_rest.pop(0)
            out_rest.append(weaker)
            return out_top, out_rest, True
    return out_top, out_rest, False


def assemble(
    arena: ColourArena,
    selected: Sequence[int],
    rest: Sequence[int],
    pick_count: int = PICK_COUNT,
    tunables: Tunables = DEFAULT_TUNABLES,
    debug: bool = False,
) -> IdList:
    """
    Pad to the ordered_count head, swap once within the first pick_count if
    needed, then append the rest by count (stable).
    """
    top, remaining = pad_selection(selected, rest, tunables.ordered_count)
    top, remaining, swapped = secondary_swap(arena, top, remaining, pick_count, tunables)
    if debug and swapped:
        debug_log(f"secondary swap: top now {top}")
    ordered_rest: List[int] = sorted(remaining, key=lambda cid: -arena[cid].count)
    return top + ordered_rest


__all__ = ["pad_selection", "secondary_swap", "assemble"]
