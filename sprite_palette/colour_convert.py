# sprite_palette/colour_convert.py
"""
Colour conversions, metrics and contrast helpers.

Exports:
  rgb_to_hsv(rgb) / hsv_to_rgb(h, s, v)
  rgb_to_hsl(rgb) / hsl_to_rgb(h, s, l)
  hex_to_rgb(hex_str, alpha, background) / rgb_to_hex(rgb)
  format_rgb_css(rgb), hex_to_hsv_css(hex_str), hex_to_hsl_css(hex_str)
  relative_luminance(rgb)
  contrasting_text_colour(hex_str), contrasting_base_text_colour(hex_str)
  contrasting_brightness(hex_str)
  hue_group_key(rgb, bin_size)
  rgb_sum(rgb)
  euclidean_rgb_distance(rgb1, rgb2)
  perceptual_hsl_distance(rgb1, rgb2, tunables)

All functions are pure. HSV hue is a fraction in [0, 1); HSL hue is whole
degrees in [0, 360). Saturation, value and lightness are in [0, 1].
"""

from __future__ import annotations

import math
from typing import Sequence, Tuple

from .constants import DEFAULT_TUNABLES, HUE_BIN, Tunables
from .core_types import HexStr, InvalidColourFormat, RGBTuple, round_half_up

WHITE: RGBTuple = (255, 255, 255)


# RGB <-> HSV


def rgb_to_hsv(rgb: Sequence[int]) -> Tuple[float, float, float]:
    """RGB 0..255 to (h 0..1, s 0..1, v 0..1)."""
    r, g, b = float(rgb[0]), float(rgb[1]), float(rgb[2])
    c_max = max(r, g, b)
    c_min = min(r, g, b)
    d = c_max - c_min

    h = 0.0
    s = 0.0 if c_max == 0 else d / c_max
    v = c_max / 255.0

    if d != 0:
        if c_max == r:
            h = ((g - b) / d + (6.0 if g < b else 0.0)) / 6.0
        elif c_max == g:
            h = ((b - r) / d + 2.0) / 6.0
        else:
            h = ((r - g) / d + 4.0) / 6.0
    return h, s, v


def hsv_to_rgb(h: float, s: float, v: float) -> RGBTuple:
    """(h 0..1, s 0..1, v 0..1) to RGB 0..255."""
    i = int(math.floor(h * 6.0))
    f = h * 6.0 - i
    p = v * (1.0 - s)
    q = v * (1.0 - f * s)
    t = v * (1.0 - (1.0 - f) * s)
    r, g, b = [
        (v, t, p),
        (q, v, p),
        (p, v, t),
        (p, q, v),
        (t, p, v),
        (v, p, q),
    ][i % 6]
    return (round_half_up(r * 255), round_half_up(g * 255), round_half_up(b * 255))


# RGB <-> HSL


def _hue_degrees(r: float, g: float, b: float, c_max: float, delta: float) -> int:
    """Whole-degree hue from normalised channels; 0 for greys."""
    if delta == 0:
        return 0
    if c_max == r:
        h = math.fmod((g - b) / delta, 6.0)
    elif c_max == g:
        h = (b - r) / delta + 2.0
    else:
        h = (r - g) / delta + 4.0
    deg = round_half_up(h * 60.0)
    if deg < 0:
        deg += 360
    return deg


def rgb_to_hsl(rgb: Sequence[int]) -> Tuple[int, float, float]:
    """RGB 0..255 to (h whole degrees, s 0..1, l 0..1)."""
    r, g, b = float(rgb[0]) / 255.0, float(rgb[1]) / 255.0, float(rgb[2]) / 255.0
    c_max = max(r, g, b)
    c_min = min(r, g, b)
    delta = c_max - c_min

    h = _hue_degrees(r, g, b, c_max, delta)
    l = (c_max + c_min) / 2.0
    s = 0.0 if delta == 0 else delta / (1.0 - abs(2.0 * l - 1.0))
    return h, s, l


def hsl_to_rgb(h: float, s: float, l: float) -> RGBTuple:
    """(h degrees, s 0..1, l 0..1) to RGB 0..255."""
    c = (1.0 - abs(2.0 * l - 1.0)) * s
    hp = (h % 360.0) / 60.0
    x = c * (1.0 - abs(hp % 2.0 - 1.0))
    if hp < 1:
        r1, g1, b1 = c, x, 0.0
    elif hp < 2:
        r1, g1, b1 = x, c, 0.0
    elif hp < 3:
        r1, g1, b1 = 0.0, c, x
    elif hp < 4:
        r1, g1, b1 = 0.0, x, c
    elif hp < 5:
        r1, g1, b1 = x, 0.0, c
    else:
        r1, g1, b1 = c, 0.0, x
    m = l - c / 2.0
    return (
        round_half_up((r1 + m) * 255),
        round_half_up((g1 + m) * 255),
        round_half_up((b1 + m) * 255),
    )


# Hex


def _parse_hex(hex_str: str) -> RGBTuple:
    """Parse '#rgb', '#rrggbb' or the same without '#'."""
    if not isinstance(hex_str, str):
        raise InvalidColourFormat(f"hex colour must be a string, got {type(hex_str).__name__}")
    s = hex_str.strip()
    if s.startswith("#"):
        s = s[1:]
    if len(s) == 3:
        s = "".join(ch + ch for ch in s)
    if len(s) != 6 or any(ch not in "0123456789abcdefABCDEF" for ch in s):
        raise InvalidColourFormat(f"invalid hex colour: {hex_str!r}")
    return (int(s[0:2], 16), int(s[2:4], 16), int(s[4:6], 16))


def hex_to_rgb(
    hex_str: str, alpha: float = 1.0, background: Sequence[int] = WHITE
) -> RGBTuple:
    """
    Parse a hex colour and composite it over `background` with `alpha`.
    Alpha is clamped to [0, 1]; alpha=1 returns the colour unchanged.
    """
    r, g, b = _parse_hex(hex_str)
    a = min(1.0, max(0.0, float(alpha)))
    return (
        round_half_up(r * a + background[0] * (1.0 - a)),
        round_half_up(g * a + background[1] * (1.0 - a)),
        round_half_up(b * a + background[2] * (1.0 - a)),
    )


def rgb_to_hex(rgb: Sequence[int]) -> HexStr:
    """RGB tuple to lowercase hex string '#rrggbb'."""
    r, g, b = int(rgb[0]), int(rgb[1]), int(rgb[2])
    return f"#{r:02x}{g:02x}{b:02x}"


def format_rgb_css(rgb: Sequence[int]) -> str:
    """'rgb(r, g, b)'."""
    return f"rgb({int(rgb[0])}, {int(rgb[1])}, {int(rgb[2])})"


def hex_to_hsv_css(hex_str: str) -> str:
    """'hsv(h, s%, v%)' with whole-degree hue and whole percentages."""
    r, g, b = _parse_hex(hex_str)
    rn, gn, bn = r / 255.0, g / 255.0, b / 255.0
    c_max = max(rn, gn, bn)
    delta = c_max - min(rn, gn, bn)
    h = _hue_degrees(rn, gn, bn, c_max, delta)
    s = 0.0 if c_max == 0 else delta / c_max
    return f"hsv({h}, {round_half_up(s * 100)}%, {round_half_up(c_max * 100)}%)"


def hex_to_hsl_css(hex_str: str) -> str:
    """'hsl(h, s%, l%)' with whole-degree hue and whole percentages."""
    h, s, l = rgb_to_hsl(_parse_hex(hex_str))
    return f"hsl({h}, {round_half_up(s * 100)}%, {round_half_up(l * 100)}%)"


# Luminance / contrast


def _linear_channel(channel: int) -> float:
    c = channel / 255.0
    return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4


def relative_luminance(rgb: Sequence[int]) -> float:
    """sRGB relative luminance in [0, 1]."""
    return (
        0.2126 * _linear_channel(int(rgb[0]))
        + 0.7152 * _linear_channel(int(rgb[1]))
        + 0.0722 * _linear_channel(int(rgb[2]))
    )


def contrasting_text_colour(hex_str: str) -> str:
    """'black' on light backgrounds (luminance > 0.5), else 'white'."""
    return "black" if relative_luminance(_parse_hex(hex_str)) > 0.5 else "white"


def contrasting_base_text_colour(hex_str: str) -> str:
    """Like contrasting_text_colour with the lower 0.3 threshold."""
    return "black" if relative_luminance(_parse_hex(hex_str)) > 0.3 else "white"


def contrasting_brightness(hex_str: str) -> str:
    """CSS brightness adjustment: '80%' for light colours, '120%' for dark."""
    return "80%" if relative_luminance(_parse_hex(hex_str)) > 0.5 else "120%"


# Grouping / metrics


def hue_group_key(rgb: Sequence[int], bin_size: int = HUE_BIN) -> int:
    """HSV hue in degrees rounded to the nearest multiple of bin_size."""
    h, _s, _v = rgb_to_hsv(rgb)
    return round_half_up((h * 360.0) / bin_size) * bin_size


def rgb_sum(rgb: Sequence[int]) -> int:
    return int(rgb[0]) + int(rgb[1]) + int(rgb[2])


def euclidean_rgb_distance(rgb1: Sequence[int], rgb2: Sequence[int]) -> float:
    """Straight-line distance in raw RGB space."""
    return math.sqrt(
        (rgb1[0] - rgb2[0]) ** 2 + (rgb1[1] - rgb2[1]) ** 2 + (rgb1[2] - rgb2[2]) ** 2
    )


def perceptual_hsl_distance(
    rgb1: Sequence[int], rgb2: Sequence[int], tunables: Tunables = DEFAULT_TUNABLES
) -> float:
    """
    Weighted HSL distance.

    Hue difference is wrapped, scaled to [0, 1] and multiplied by a mute factor:
    low when the pair is dark, desaturated and alike (hue barely reads), high
    otherwise. Saturation and lightness differences enter unscaled.
    """
    h1, s1, l1 = rgb_to_hsl(rgb1)
    h2, s2, l2 = rgb_to_hsl(rgb2)

    hue_diff = abs(h1 - h2)
    hue_diff = min(hue_diff, 360 - hue_diff) / 180.0

    s_diff = s1 - s2
    l_diff = l1 - l2

    avg_s = (s1 + s2) / 2.0
    avg_l = (l1 + l2) / 2.0
    s_similarity = 1.0 - abs(s_diff)
    l_similarity = 1.0 - abs(l_diff)

    muted = (
        avg_s < tunables.mute_saturation
        and avg_l < tunables.mute_lightness
        and s_similarity > tunables.mute_similarity
        and l_similarity > tunables.mute_similarity
    )
    mute = tunables.mute_factor_low if muted else tunables.mute_factor_high

    adjusted_hue = hue_diff * mute
    return math.sqrt(adjusted_hue**2 + s_diff**2 + l_diff**2)


__all__ = [
    "WHITE",
    "rgb_to_hsv",
    "hsv_to_rgb",
    "rgb_to_hsl",
    "hsl_to_rgb",
    "hex_to_rgb",
    "rgb_to_hex",
    "format_rgb_css",
    "hex_to_hsv_css",
    "hex_to_hsl_css",
    "relative_luminance",
    "contrasting_text_colour",
    "contrasting_base_text_colour",
    "contrasting_brightness",
    "hue_group_key",
    "rgb_sum",
    "euclidean_rgb_distance",
    "perceptual_hsl_distance",
]
