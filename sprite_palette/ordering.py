# sprite_palette/ordering.py
"""
Luminance orderer for the leading palette colours.

Default order is by HSV value + saturation, with low-count colours pushed back.
A clearly dominant colour is promoted unless it is a dull near-shade of another
pick. A lead colour dwarfed by both followers is demoted to the back.

Ties fall back to count then id, so the result depends only on the set of
colours given, which makes the orderer idempotent.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from .colour_convert import rgb_to_hsl, rgb_to_hsv
from .constants import DEFAULT_TUNABLES, Tunables
from .core_types import ColourArena, ColourSample, IdList


def brightness_score(rgb) -> float:
    """HSV value + saturation."""
    _h, s, v = rgb_to_hsv(rgb)
    return v + s


def _sort_key(sample: ColourSample, tunables: Tunables) -> Tuple[int, float, int, int]:
    low = sample.count < tunables.low_count
    score = 0.0 if low else -brightness_score(sample.rgb)
    return (1 if low else 0, score, -sample.count, sample.id)


def _dominates(sample: ColourSample, others: Sequence[ColourSample], factor: float) -> bool:
    return all(sample.count >= factor * o.count for o in others if o.id != sample.id)


def find_dominant(
    samples: Sequence[ColourSample], tunables: Tunables = DEFAULT_TUNABLES
) -> Optional[ColourSample]:
    """First sample whose count is at least dominance_factor x every other."""
    for s in samples:
        if _dominates(s, samples, tunables.dominance_factor):
            return s
    return None


def has_similar_dark_shade(
    dominant: ColourSample,
    samples: Sequence[ColourSample],
    tunables: Tunables = DEFAULT_TUNABLES,
) -> bool:
    """Dark dominant with a neighbour a few degrees of hue away."""
    dh, _ds, dl = rgb_to_hsl(dominant.rgb)
    if dl * 100.0 >= tunables.dark_lightness:
        return False
    for s in samples:
        h = rgb_to_hsl(s.rgb)[0]
        if h != dh and abs(h - dh) < tunables.shade_hue:
            return True
    return False


def is_boring(rgb, tunables: Tunables = DEFAULT_TUNABLES) -> bool:
    """Near-grey, or dull and dark."""
    _h, s, l = rgb_to_hsl(rgb)
    s_pct, l_pct = s * 100.0, l * 100.0
    return s_pct < tunables.boring_saturation or (
        s_pct < tunables.dull_saturation and l_pct < tunables.dull_lightness
    )


def order_samples(
    samples: Sequence[ColourSample], tunables: Tunables = DEFAULT_TUNABLES
) -> List[ColourSample]:
    ordered = sorted(samples, key=lambda s: _sort_key(s, tunables))

    dominant = find_dominant(ordered, tunables)
    if dominant is not None:
        super_dominant = _dominates(dominant, ordered, tunables.super_dominance_factor)
        if super_dominant or not (
            has_similar_dark_shade(dominant, ordered, tunables)
            or is_boring(dominant.rgb, tunables)
        ):
            ordered.remove(dominant)
            ordered.insert(0, dominant)

    if (
        len(ordered) >= 3
        and ordered[0].count < tunables.low_first_ratio * ordered[1].count
        and ordered[0].count < tunables.low_first_ratio * ordered[2].count
    ):
        too_low = ordered.pop(0)
        ordered.append(too_low)
        ordered[:2] = sorted(
            ordered[:2], key=lambda s: (-brightness_score(s.rgb), -s.count, s.id)
        )
    return ordered


def order_by_luminance(
    arena: ColourArena, ids: Sequence[int], tunables: Tunables = DEFAULT_TUNABLES
) -> IdList:
    """
    Reorder the first ordered_count ids; the tail is returned untouched.
    """
    head = [arena[cid] for cid in ids[: tunables.ordered_count]]
    tail = list(ids[tunables.ordered_count :])
    return [s.id for s in order_samples(head, tunables)] + tail


__all__ = [
    "brightness_score",
    "find_dominant",
    "has_similar_dark_shade",
    "is_boring",
    "order_samples",
    "order_by_luminance",
]
