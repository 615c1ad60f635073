"""
Unit tests for colour conversions, contrast helpers and distance metrics.
"""

import pytest

from sprite_palette.colour_convert import (
    contrasting_base_text_colour,
    contrasting_brightness,
    contrasting_text_colour,
    euclidean_rgb_distance,
    format_rgb_css,
    hex_to_hsl_css,
    hex_to_hsv_css,
    hex_to_rgb,
    hsl_to_rgb,
    hsv_to_rgb,
    hue_group_key,
    perceptual_hsl_distance,
    relative_luminance,
    rgb_sum,
    rgb_to_hex,
    rgb_to_hsl,
    rgb_to_hsv,
)
from sprite_palette.core_types import InvalidColorFormat, InvalidColourFormat, round_half_up


class TestRoundHalfUp:
    """Browser-style rounding"""

    def test_halves_round_up(self):
        """0.5 steps always round towards +inf"""
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3
        assert round_half_up(-0.5) == 0
        assert round_half_up(-1.5) == -1

    def test_other_values(self):
        assert round_half_up(1.49) == 1
        assert round_half_up(-30.12) == -30


class TestHsv:
    """RGB <-> HSV"""

    def test_primaries(self):
        """Pure primaries land on 0, 1/3 and 2/3 hue"""
        assert rgb_to_hsv((255, 0, 0)) == (0.0, 1.0, 1.0)
        h, s, v = rgb_to_hsv((0, 0, 255))
        assert h == pytest.approx(4.0 / 6.0)
        assert (s, v) == (1.0, 1.0)

    def test_grey_and_black(self):
        assert rgb_to_hsv((128, 128, 128)) == (0.0, 0.0, pytest.approx(128 / 255))
        assert rgb_to_hsv((0, 0, 0)) == (0.0, 0.0, 0.0)

    def test_hsv_to_rgb(self):
        assert hsv_to_rgb(0.0, 1.0, 1.0) == (255, 0, 0)
        assert hsv_to_rgb(0.5, 1.0, 1.0) == (0, 255, 255)
        assert hsv_to_rgb(0.0, 0.0, 0.5) == (128, 128, 128)


class TestHsl:
    """RGB <-> HSL with whole-degree hue"""

    def test_primaries(self):
        assert rgb_to_hsl((255, 0, 0)) == (0, 1.0, 0.5)
        h, s, l = rgb_to_hsl((0, 255, 0))
        assert (h, s) == (120, 1.0)
        assert l == pytest.approx(0.5)
        assert rgb_to_hsl((0, 0, 255))[0] == 240

    def test_negative_hue_wraps(self):
        """Red-max colours with blue > green wrap to the top of the circle"""
        assert rgb_to_hsl((255, 0, 128))[0] == 330

    def test_grey_has_no_hue_or_saturation(self):
        h, s, l = rgb_to_hsl((200, 200, 200))
        assert (h, s) == (0, 0.0)
        assert l == pytest.approx(200 / 255)

    def test_hsl_to_rgb(self):
        assert hsl_to_rgb(0, 1.0, 0.5) == (255, 0, 0)
        assert hsl_to_rgb(240, 1.0, 0.5) == (0, 0, 255)
        assert hsl_to_rgb(0, 0.0, 1.0) == (255, 255, 255)


class TestHex:
    """Hex parsing, formatting and alpha compositing"""

    def test_long_and_short_forms(self):
        assert hex_to_rgb("#f6e652") == (246, 230, 82)
        assert hex_to_rgb("#ABC") == (170, 187, 204)
        assert hex_to_rgb("ff0000") == (255, 0, 0)

    def test_alpha_composites_over_background(self):
        """Half-transparent black over white rounds 127.5 up"""
        assert hex_to_rgb("#000000", alpha=0.5) == (128, 128, 128)
        assert hex_to_rgb("#000000", alpha=0.0, background=(10, 20, 30)) == (10, 20, 30)

    def test_alpha_is_clamped(self):
        assert hex_to_rgb("#123456", alpha=2.0) == hex_to_rgb("#123456")
        assert hex_to_rgb("#123456", alpha=-1.0) == (255, 255, 255)

    @pytest.mark.parametrize("bad", ["#12", "#gggggg", "", "#1234567", "red"])
    def test_malformed_hex_raises(self, bad):
        """Malformed strings fail fast instead of producing garbage channels"""
        with pytest.raises(InvalidColourFormat):
            hex_to_rgb(bad)

    def test_non_string_raises(self):
        with pytest.raises(InvalidColorFormat):
            hex_to_rgb(0xFF0000)

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            contrasting_text_colour("#zz")

    def test_rgb_to_hex(self):
        assert rgb_to_hex((200, 200, 200)) == "#c8c8c8"
        assert rgb_to_hex((0, 15, 255)) == "#000fff"

    def test_css_strings(self):
        assert format_rgb_css((1, 2, 3)) == "rgb(1, 2, 3)"
        assert hex_to_hsl_css("#ff0000") == "hsl(0, 100%, 50%)"
        assert hex_to_hsv_css("#ff0000") == "hsv(0, 100%, 100%)"
        assert hex_to_hsv_css("#000000") == "hsv(0, 0%, 0%)"


class TestContrast:
    """Relative luminance and text colour helpers"""

    def test_luminance_extremes(self):
        assert relative_luminance((255, 255, 255)) == pytest.approx(1.0)
        assert relative_luminance((0, 0, 0)) == 0.0

    def test_text_colour(self):
        assert contrasting_text_colour("#ffffff") == "black"
        assert contrasting_text_colour("#000000") == "white"

    def test_base_threshold_is_lower(self):
        """#a0a0a0 sits between the two thresholds (luminance ~0.35)"""
        assert contrasting_text_colour("#a0a0a0") == "white"
        assert contrasting_base_text_colour("#a0a0a0") == "black"

    def test_brightness_bucket(self):
        assert contrasting_brightness("#ffffff") == "80%"
        assert contrasting_brightness("#000000") == "120%"


class TestHueGroupKey:
    """Hue bucketing"""

    def test_default_bin(self):
        assert hue_group_key((255, 0, 0)) == 0
        assert hue_group_key((0, 0, 255)) == 240
        assert hue_group_key((255, 0, 128)) == 300

    def test_top_of_circle_is_its_own_key(self):
        """Hues just under 360 round to 360, not 0"""
        assert hue_group_key((255, 0, 10)) == 360

    def test_smaller_bin(self):
        assert hue_group_key((255, 0, 128), 10) == 330
        assert hue_group_key((255, 40, 0), 15) == 15
        assert hue_group_key((255, 40, 0), 20) == 0


class TestDistances:
    """Euclidean and perceptual HSL distance"""

    def test_rgb_sum(self):
        assert rgb_sum((1, 2, 3)) == 6

    def test_euclidean(self):
        assert euclidean_rgb_distance((0, 0, 0), (3, 4, 0)) == 5.0

    def test_perceptual_vivid_pair_uses_high_factor(self):
        """Red vs blue: 120 deg apart, scaled by 2.0"""
        assert perceptual_hsl_distance((255, 0, 0), (0, 0, 255)) == pytest.approx(4.0 / 3.0)

    def test_perceptual_muted_pair_uses_low_factor(self):
        """Dark, dull, alike colours barely count their hue difference"""
        assert perceptual_hsl_distance((40, 30, 30), (30, 40, 30)) == pytest.approx(1.0 / 3.0)

    def test_perceptual_identity(self):
        assert perceptual_hsl_distance((12, 34, 56), (12, 34, 56)) == 0.0
