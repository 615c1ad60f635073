# sprite_palette/__init__.py
"""
sprite_palette package.

Purpose:
  Extract a small, ordered, visually distinctive colour palette from a sprite.
  See extract_palette.py for the CLI.

Public API:
  extract_palette  : PixelImage -> PaletteResult entry point.
  palette_from_arena: same pipeline starting from a sampled arena.
  colour_convert   : HSV/HSL/hex conversions, contrast helpers, distances.
  constants        : named thresholds and the Tunables bundle.
  core_types       : shared aliases and value objects (PixelImage, ColourSample,
                     SpecialCaseRule, PaletteEntry, PaletteConfig).
  sampler          : quantised colour histogram.
  selection        : reducer, optimizer, refiner, reconciler, assembly.
  ordering         : luminance orderer for the leading colours.
  special_cases    : rule tables (build, load, bundled roster).
  image_io         : Pillow decoding, cropping and PNG output.
  utils            : formatting and console logging helpers.

Quick start:
  from sprite_palette import extract_palette
  from sprite_palette.image_io import load_pixel_image
  palette = extract_palette(load_pixel_image(path))
"""

__version__ = "0.1.0"

# Re-export namespaces for convenience.
from . import colour_convert
from . import constants
from . import core_types
from . import sampler
from . import selection
from . import ordering
from . import special_cases
from . import image_io
from . import utils

from .core_types import (  # noqa: E402,F401
    DEFAULT_CONFIG,
    NO_PALETTE,
    InvalidColourFormat,
    InvalidColorFormat,
    InvalidSpecialCase,
    PaletteConfig,
    PaletteEntry,
    PixelImage,
    SpecialCaseRule,
)
from .palette import extract_palette, palette_from_arena  # noqa: E402,F401

__all__ = [
    "__version__",
    "colour_convert",
    "constants",
    "core_types",
    "sampler",
    "selection",
    "ordering",
    "special_cases",
    "image_io",
    "utils",
    "DEFAULT_CONFIG",
    "NO_PALETTE",
    "InvalidColourFormat",
    "InvalidColorFormat",
    "InvalidSpecialCase",
    "PaletteConfig",
    "PaletteEntry",
    "PixelImage",
    "SpecialCaseRule",
    "extract_palette",
    "palette_from_arena",
]
