# sprite_palette/image_io.py
"""
Image I/O helpers: decode sprites to PixelImage (RGBA in sRGB), crop away
transparent borders, pad to square, and write PNGs.
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import Optional

import numpy as np
from PIL import Image, ImageOps

from .core_types import PixelImage

try:
    from PIL import ImageCms  # ICC conversion if profile present
except ImportError:  # pragma: no cover
    ImageCms = None  # type: ignore[assignment]

SPRITE_EXTENSIONS = (".png", ".gif", ".webp", ".jpg", ".jpeg")


def _convert_to_srgb_rgba(im: Image.Image) -> Image.Image:
    im = ImageOps.exif_transpose(im)
    icc_bytes = im.info.get("icc_profile")

    if icc_bytes and ImageCms is not None:
        try:
            src_prof = ImageCms.ImageCmsProfile(io.BytesIO(icc_bytes))
            dst_prof = ImageCms.createProfile("sRGB")
            im2 = ImageCms.profileToProfile(
                im,
                src_prof,
                dst_prof,
                renderingIntent=ImageCms.Intent.PERCEPTUAL,
                outputMode="RGBA",
            )
            if im2 is None:
                return im.convert("RGBA")
            return im2
        except (ImageCms.PyCMSError, OSError, ValueError):
            return im.convert("RGBA")

    return im.convert("RGBA")


def pixel_image_from_pil(im: Image.Image) -> PixelImage:
    """Any Pillow image -> PixelImage (first frame for animations)."""
    rgba = np.array(_convert_to_srgb_rgba(im), dtype=np.uint8)
    return PixelImage.from_array(rgba)


def load_pixel_image(path: Path) -> PixelImage:
    with Image.open(path) as im0:
        im0.seek(0)
        return pixel_image_from_pil(im0)


def crop_to_content(image: PixelImage) -> Optional[PixelImage]:
    """
    Crop to the bounding box of non-transparent pixels.
    Returns None when every pixel is transparent.
    """
    arr = image.as_array()
    if arr.size == 0:
        return None
    visible = arr[..., 3] > 0
    if not np.any(visible):
        return None
    rows = np.flatnonzero(visible.any(axis=1))
    cols = np.flatnonzero(visible.any(axis=0))
    top, bottom = int(rows[0]), int(rows[-1]) + 1
    left, right = int(cols[0]), int(cols[-1]) + 1
    return PixelImage.from_array(np.ascontiguousarray(arr[top:bottom, left:right]))


def pad_to_square(image: PixelImage) -> PixelImage:
    """Centre the sprite on a transparent square canvas."""
    side = max(image.width, image.height)
    if image.width == image.height:
        return image
    out = np.zeros((side, side, 4), dtype=np.uint8)
    y0 = (side - image.height) // 2
    x0 = (side - image.width) // 2
    out[y0 : y0 + image.height, x0 : x0 + image.width] = image.as_array()
    return PixelImage.from_array(out)


def save_png(path: Path, image: PixelImage) -> Path:
    if path.suffix.lower() != ".png":
        path = path.with_suffix(".png")
    Image.fromarray(np.array(image.as_array())).save(path)
    return path


__all__ = [
    "SPRITE_EXTENSIONS",
    "pixel_image_from_pil",
    "load_pixel_image",
    "crop_to_content",
    "pad_to_square",
    "save_png",
]
