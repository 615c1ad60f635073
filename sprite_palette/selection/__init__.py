# sprite_palette/selection/__init__.py
"""
Colour selection API.

Provides:
  select_unique_colours(arena, identifier=None, special_cases=None, config=DEFAULT_CONFIG, *, debug=False) -> IdList
    Reorder an arena's ids so the leading pick_count are the sprite's most
    distinctive colours.

    Args:
      arena         : ColourArena, count descending
      identifier    : int or None, special-case lookup key only
      special_cases : Mapping[int, SpecialCaseRule] or None
      config        : PaletteConfig (top_n, pick_count, min_count, tunables)
      debug         : bool, print one line per stage

    Returns:
      List of every arena id, selected colours first.

    Notes:
      - Candidate reducer, combination optimizer, hue-group refiner,
        dominant-colour reconciler and secondary swap run in that order.
      - handPickedColors rules short-circuit everything after the reducer.
"""

from .run import select_unique_colours

__all__ = ["select_unique_colours"]
