"""
Unit tests for image decoding, cropping and PNG output.
"""

import numpy as np
import pytest
from PIL import Image, UnidentifiedImageError

from sprite_palette import image_io
from sprite_palette.core_types import PixelImage
from sprite_palette.image_io import (
    crop_to_content,
    load_pixel_image,
    pad_to_square,
    pixel_image_from_pil,
    save_png,
)


def _sprite():
    """6x5 transparent canvas with a 2x3 opaque block at rows 1-2, cols 2-4."""
    arr = np.zeros((5, 6, 4), dtype=np.uint8)
    arr[1:3, 2:5] = (200, 50, 50, 255)
    return PixelImage.from_array(arr)


class TestLoad:
    """Decoding to RGBA PixelImage"""

    def test_rgb_png_becomes_opaque_rgba(self, tmp_path):
        path = tmp_path / "rgb.png"
        Image.new("RGB", (3, 2), (10, 20, 30)).save(path)
        image = load_pixel_image(path)
        assert (image.width, image.height) == (3, 2)
        arr = image.as_array()
        assert tuple(arr[0, 0]) == (10, 20, 30, 255)

    def test_palette_mode_with_transparency(self, tmp_path):
        path = tmp_path / "p.png"
        im = Image.new("P", (2, 1), 0)
        im.putpalette([0, 0, 0, 255, 0, 0] + [0] * 762)
        im.putpixel((1, 0), 1)
        im.save(path, transparency=0)
        arr = load_pixel_image(path).as_array()
        assert arr.shape == (1, 2, 4)
        assert arr[0, 0, 3] == 0
        assert tuple(arr[0, 1]) == (255, 0, 0, 255)

    def test_from_pil(self):
        image = pixel_image_from_pil(Image.new("L", (2, 2), 128))
        assert tuple(image.as_array()[1, 1]) == (128, 128, 128, 255)

    def test_undecodable_file_raises(self, tmp_path):
        bad = tmp_path / "b.png"
        bad.write_bytes(b"not an image")
        with pytest.raises(UnidentifiedImageError):
            load_pixel_image(bad)

    def test_module_docstring(self):
        assert image_io.__doc__ is not None
        assert "PixelImage" in image_io.__doc__


class TestCrop:
    def test_crops_to_visible_box(self):
        cropped = crop_to_content(_sprite())
        assert (cropped.width, cropped.height) == (3, 2)
        assert (cropped.as_array()[..., 3] == 255).all()

    def test_fully_transparent_returns_none(self, transparent_image):
        assert crop_to_content(transparent_image) is None


class TestPadToSquare:
    def test_centres_on_transparent_canvas(self):
        square = pad_to_square(crop_to_content(_sprite()))
        assert (square.width, square.height) == (3, 3)
        alpha = square.as_array()[..., 3]
        assert alpha[0].tolist() == [255, 255, 255]
        assert alpha[2].tolist() == [0, 0, 0]

    def test_square_unchanged(self, transparent_image):
        assert pad_to_square(transparent_image) is transparent_image


class TestSavePng:
    def test_writes_png_suffix(self, tmp_path):
        out = save_png(tmp_path / "sprite.webp", _sprite())
        assert out.suffix == ".png"
        assert out.exists()
        again = load_pixel_image(out)
        np.testing.assert_array_equal(again.as_array(), _sprite().as_array())
