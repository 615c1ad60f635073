"""
Test configuration and fixtures for sprite_palette tests.
"""
import numpy as np
import pytest

from sprite_palette.core_types import PixelImage, make_arena


def _image_from_counts(items):
    """Single-row opaque image holding each (rgb, count) run in order."""
    pixels = []
    for rgb, count in items:
        pixels.extend([tuple(rgb) + (255,)] * count)
    arr = np.array(pixels, dtype=np.uint8).reshape(1, len(pixels), 4)
    return PixelImage.from_array(arr)


@pytest.fixture
def image_from_counts():
    """Build an opaque PixelImage from [(rgb, count), ...]."""
    return _image_from_counts


@pytest.fixture
def image_from_array():
    """Build a PixelImage from a nested list of RGBA pixels, shape (H, W, 4)."""

    def build(pixels):
        return PixelImage.from_array(np.array(pixels, dtype=np.uint8))

    return build


@pytest.fixture
def arena_from():
    """Arena with ids = positions from [(rgb, count), ...]."""
    return make_arena


@pytest.fixture
def transparent_image():
    """4x4 fully transparent sprite."""
    return PixelImage.from_array(np.zeros((4, 4, 4), dtype=np.uint8))
