# sprite_palette/palette.py
"""
Palette extraction entry points.

  extract_palette(image, identifier=None, special_cases=None, config=DEFAULT_CONFIG, debug=False)
      PixelImage -> PaletteResult
  palette_from_arena(arena, identifier=None, special_cases=None, config=DEFAULT_CONFIG, debug=False)
      ColourArena -> PaletteResult
  frequency_ranking(arena) -> IdList
  palette_entries(arena, ids) -> PaletteResult

No I/O and no shared state: identical inputs give identical results.
"""

from __future__ import annotations

import time
from typing import Mapping, Optional, Sequence

from .colour_convert import rgb_to_hex
from .core_types import (
    DEFAULT_CONFIG,
    NO_PALETTE,
    ColourArena,
    IdList,
    PaletteConfig,
    PaletteEntry,
    PaletteResult,
    PixelImage,
    SpecialCaseRule,
)
from .ordering import order_by_luminance
from .sampler import sample_colours, total_count
from .selection import select_unique_colours
from .utils import debug_log, format_seconds_compact


def frequency_ranking(arena: ColourArena) -> IdList:
    """Ids by count descending, arena order on ties."""
    return [s.id for s in sorted(arena, key=lambda s: -s.count)]


def palette_entries(arena: ColourArena, ids: Sequence[int]) -> PaletteResult:
    """Hex + share of all accepted pixels for each id."""
    total = total_count(arena)
    if total <= 0:
        return NO_PALETTE
    return tuple(
        PaletteEntry(hex=rgb_to_hex(arena[cid].rgb), percentage=arena[cid].count / total * 100.0)
        for cid in ids
    )


def palette_from_arena(
    arena: ColourArena,
    identifier: Optional[int] = None,
    special_cases: Optional[Mapping[int, SpecialCaseRule]] = None,
    config: PaletteConfig = DEFAULT_CONFIG,
    debug: bool = False,
) -> PaletteResult:
    """
    Run selection and ordering over a prepared arena.

    Arenas larger than max_colours skip the heuristics and come back in plain
    frequency order. Every other result, hand-picked or not, goes through the
    luminance orderer.
    """
    if not arena:
        return NO_PALETTE

    tunables = config.tunables
    if len(arena) > tunables.max_colours:
        if debug:
            debug_log(f"{len(arena)} colours > {tunables.max_colours}: frequency ranking")
        return palette_entries(arena, frequency_ranking(arena))

    ids = select_unique_colours(arena, identifier, special_cases, config, debug)
    ids = order_by_luminance(arena, ids, tunables)
    if debug:
        debug_log(f"final order: {ids}")
    return palette_entries(arena, ids)


def extract_palette(
    image: PixelImage,
    identifier: Optional[int] = None,
    special_cases: Optional[Mapping[int, SpecialCaseRule]] = None,
    config: PaletteConfig = DEFAULT_CONFIG,
    debug: bool = False,
) -> PaletteResult:
    """
    Sample a decoded sprite and return its ordered palette.

    Args:
      image         : PixelImage (row-major RGBA bytes)
      identifier    : special-case lookup key, or None
      special_cases : Mapping[int, SpecialCaseRule]; empty when None
      config        : PaletteConfig
      debug         : print one line per stage

    Returns:
      PaletteResult, empty (NO_PALETTE) when every pixel is filtered out.
    """
    t0 = time.perf_counter()
    arena = sample_colours(image, config.tunables, debug)
    result = palette_from_arena(arena, identifier, special_cases, config, debug)
    if debug:
        debug_log(
            f"palette: {len(result)} colours in {format_seconds_compact(time.perf_counter() - t0)}"
        )
    return result


__all__ = [
    "frequency_ranking",
    "palette_entries",
    "palette_from_arena",
    "extract_palette",
]
