# sprite_palette/sampler.py
"""
Pixel sampler.

Turns a decoded RGBA sprite into a quantised colour histogram (an arena of
ColourSample, count descending). Transparent pixels, near-black pixels and dark
anti-aliased pixels on the transparent edge are dropped. When the fine scan
yields too many distinct colours the whole image is re-scanned with a coarse
precision; the two scans are never merged.
"""

from __future__ import annotations

from typing import List, Tuple

import numpy as np

from .constants import DEFAULT_TUNABLES, Tunables
from .core_types import ColourArena, PixelImage, RGBTuple, U8Image, make_arena
from .utils import debug_log, key_value_pairs_to_string


def round_channels(rgb: np.ndarray, precision: int) -> np.ndarray:
    """Round channels to the nearest multiple of precision (half up). int32 out."""
    rgb_i = rgb.astype(np.int32, copy=False)
    if precision <= 1:
        return rgb_i.copy()
    rounded = np.floor(rgb_i / float(precision) + 0.5).astype(np.int32) * int(precision)
    return np.minimum(rounded, 255)


def transparent_edge_mask(alpha: np.ndarray) -> np.ndarray:
    """
    True where at least one in-bounds 4-neighbour is fully transparent.
    Pixels on the image border only look at the neighbours that exist.
    """
    transparent = alpha == 0
    padded = np.zeros((alpha.shape[0] + 2, alpha.shape[1] + 2), dtype=bool)
    padded[1:-1, 1:-1] = transparent
    return (
        padded[:-2, 1:-1]  # up
        | padded[2:, 1:-1]  # down
        | padded[1:-1, :-2]  # left
        | padded[1:-1, 2:]  # right
    )


def accepted_pixel_mask(
    rgba: U8Image, precision: int, tunables: Tunables = DEFAULT_TUNABLES
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Return (rounded_rgb int32 [H,W,3], accept bool [H,W]).

    Brightness is measured on the rounded channels.
    """
    rounded = round_channels(rgba[..., :3], precision)
    alpha = rgba[..., 3]
    brightness = rounded.sum(axis=-1) / 3.0

    accept = alpha != 0
    accept &= brightness >= tunables.near_black
    accept &= ~(transparent_edge_mask(alpha) & (brightness < tunables.edge_dark))
    return rounded, accept


def build_histogram(
    image: PixelImage, precision: int, tunables: Tunables = DEFAULT_TUNABLES
) -> List[Tuple[RGBTuple, int]]:
    """
    Single scan at the given precision.

    Returns [(rgb, count), ...] sorted by count descending; ties keep the order in
    which each colour first appears in a row-major scan.
    """
    rgba = image.as_array()
    if rgba.size == 0:
        return []
    rounded, accept = accepted_pixel_mask(rgba, precision, tunables)
    if not np.any(accept):
        return []

    samples = rounded[accept].reshape(-1, 3)
    uniques, first_idx, counts = np.unique(
        samples, axis=0, return_index=True, return_counts=True
    )
    order = np.lexsort((first_idx, -counts))
    return [
        (
            (int(uniques[i, 0]), int(uniques[i, 1]), int(uniques[i, 2])),
            int(counts[i]),
        )
        for i in order.tolist()
    ]


def sample_colours(
    image: PixelImage, tunables: Tunables = DEFAULT_TUNABLES, debug: bool = False
) -> ColourArena:
    """
    Histogram an image with the coarse-precision fallback.

    Returns an arena (ids = positions) sorted by count descending. Empty when
    every pixel is filtered out.
    """
    items = build_histogram(image, tunables.precision, tunables)
    precision = tunables.precision
    if len(items) > tunables.max_colours:
        fine_colours = len(items)
        precision = tunables.coarse_precision
        items = build_histogram(image, precision, tunables)
        if debug:
            debug_log(
                key_value_pairs_to_string(
                    [
                        ("Fine colours", fine_colours),
                        ("Coarse precision", precision),
                        ("Coarse colours", len(items)),
                    ]
                )
            )

    if debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Sampled", f"{image.width}x{image.height}"),
                    ("Precision", precision),
                    ("Colours", len(items)),
                    ("Accepted pixels", sum(n for _rgb, n in items)),
                ]
            )
        )
    return make_arena(items)


def total_count(arena: ColourArena) -> int:
    """Number of accepted pixels represented by the arena."""
    return sum(sample.count for sample in arena)


__all__ = [
    "round_channels",
    "transparent_edge_mask",
    "accepted_pixel_mask",
    "build_histogram",
    "sample_colours",
    "total_count",
]
