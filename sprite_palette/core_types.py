# sprite_palette/core_types.py
"""
Core type aliases, small value objects, and lightweight helpers.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, List, Literal, Optional, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from .constants import DEFAULT_TUNABLES, MIN_COUNT, PICK_COUNT, TOP_N, Tunables

# Basic aliases

RGBTuple = Tuple[int, int, int]
HexStr = str

U8Image = NDArray[np.uint8]  # (H, W, 4) RGBA

ColourId = int
ColourCombo = Tuple[ColourId, ...]
IdList = List[ColourId]

SpecialCaseMode = Literal[
    "colorDistance",
    "topNColors",
    "mostFrequent",
    "leastBoringColor",
    "handPickedColors",
]
SPECIAL_CASE_MODES: Tuple[str, ...] = (
    "colorDistance",
    "topNColors",
    "mostFrequent",
    "leastBoringColor",
    "handPickedColors",
)

# Errors


class InvalidColourFormat(ValueError):
    """Raised for hex strings that are not '#rgb' or '#rrggbb'."""


# Compat alias
InvalidColorFormat = InvalidColourFormat


class InvalidSpecialCase(ValueError):
    """Raised for special-case entries with an unknown mode or bad parameter."""


# Value objects


@dataclass(frozen=True)
class PixelImage:
    """Decoded sprite: row-major RGBA bytes, 4 per pixel."""

    width: int
    height: int
    rgba: bytes = field(repr=False)

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("image dimensions must be non-negative")
        expected = self.width * self.height * 4
        if len(self.rgba) != expected:
            raise ValueError(
                f"rgba buffer has {len(self.rgba)} bytes, expected {expected}"
            )

    @classmethod
    def from_array(cls, rgba: np.ndarray) -> "PixelImage":
        """Build from a uint8 (H,W,4) array."""
        arr = assert_u8_image_rgba(rgba)
        height, width = int(arr.shape[0]), int(arr.shape[1])
        return cls(width=width, height=height, rgba=np.ascontiguousarray(arr).tobytes())

    def as_array(self) -> U8Image:
        """Read-only (H,W,4) uint8 view of the buffer."""
        arr = np.frombuffer(self.rgba, dtype=np.uint8)
        return arr.reshape(self.height, self.width, 4)  # type: ignore[return-value]


@dataclass(frozen=True)
class ColourSample:
    """Histogram entry. id is the index in its arena and never changes."""

    rgb: RGBTuple
    count: int
    id: ColourId


ColourArena = Tuple[ColourSample, ...]


@dataclass(frozen=True)
class SpecialCaseRule:
    """Per-sprite override: heuristic mode plus its parameter."""

    mode: SpecialCaseMode
    parameter: Optional[Union[int, Tuple[RGBTuple, ...]]] = None

    def int_parameter(self, default: int) -> int:
        if isinstance(self.parameter, int):
            return self.parameter
        return default


@dataclass(frozen=True)
class PaletteEntry:
    """One output colour with its share of accepted pixels (0..100)."""

    hex: HexStr
    percentage: float


PaletteResult = Tuple[PaletteEntry, ...]
NO_PALETTE: PaletteResult = ()


@dataclass(frozen=True)
class PaletteConfig:
    """Pipeline sizes plus the threshold bundle."""

    top_n: int = TOP_N
    pick_count: int = PICK_COUNT
    min_count: int = MIN_COUNT
    tunables: Tunables = DEFAULT_TUNABLES


DEFAULT_CONFIG = PaletteConfig()

# Small helpers


def round_half_up(value: float) -> int:
    """Round .5 towards +inf, so 2.5 -> 3 and -2.5 -> -2."""
    return int(math.floor(value + 0.5))


def make_arena(items: Sequence[Tuple[RGBTuple, int]]) -> ColourArena:
    """Assign stable ids (list positions) to (rgb, count) pairs."""
    return tuple(
        ColourSample(rgb=(int(rgb[0]), int(rgb[1]), int(rgb[2])), count=int(n), id=i)
        for i, (rgb, n) in enumerate(items)
    )


def coerce_to_rgb_tuple(value: Union[Sequence[int], NDArray[np.generic]]) -> RGBTuple:
    """
    Coerce a 3-length sequence or array to an (int, int, int) RGB tuple.
    Accepts string channels such as ("246", "230", "82").
    """
    if isinstance(value, np.ndarray):
        if value.size < 3:
            raise ValueError("array too small for RGB")
        return (int(value[..., 0]), int(value[..., 1]), int(value[..., 2]))
    if len(value) < 3:  # type: ignore[arg-type]
        raise ValueError("sequence too small for RGB")
    v = value  # type: ignore[assignment]
    return (int(v[0]), int(v[1]), int(v[2]))


def assert_u8_image_rgba(image: np.ndarray) -> U8Image:
    """Validate a uint8 (H,W,4) image and return it typed as U8Image."""
    if image.dtype != np.uint8 or image.ndim != 3 or image.shape[-1] != 4:
        raise TypeError("expected uint8 (H,W,4) image")
    return image  # type: ignore[return-value]


# Callable signatures

ColourDistance = Callable[[RGBTuple, RGBTuple], float]

__all__ = [
    # aliases / types
    "RGBTuple",
    "HexStr",
    "U8Image",
    "ColourId",
    "ColourCombo",
    "IdList",
    "SpecialCaseMode",
    "SPECIAL_CASE_MODES",
    # errors
    "InvalidColourFormat",
    "InvalidColorFormat",
    "InvalidSpecialCase",
    # value objects
    "PixelImage",
    "ColourSample",
    "ColourArena",
    "SpecialCaseRule",
    "PaletteEntry",
    "PaletteResult",
    "NO_PALETTE",
    "PaletteConfig",
    "DEFAULT_CONFIG",
    # helpers
    "round_half_up",
    "make_arena",
    "coerce_to_rgb_tuple",
    "assert_u8_image_rgba",
    # callable signatures
    "ColourDistance",
]
