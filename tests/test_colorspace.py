# Copyright (c) 2026 Tintwise
# SPDX-License-Identifier: MIT

"""Tests for color space conversions (hex ↔ sRGB ↔ OKLab ↔ OKLCH)."""

import itertools

import numpy as np
import pytest

from tintwise.schema import InvalidColorError, OKLCHColor
from tintwise.engine import colorspace
from tintwise.engine.colorspace import (
    format_hex,
    hex_to_oklch,
    hex_to_oklch_array,
    linear_rgb_to_oklab,
    linear_to_srgb,
    normalize_hex,
    normalize_hue,
    oklab_to_linear_rgb,
    oklab_to_oklch,
    oklch_array_to_hex,
    oklch_to_hex,
    oklch_to_oklab,
    oklch_to_srgb,
    parse_hex,
    srgb_to_linear,
    srgb_to_oklch,
)


# Every 17th level per channel: 16**3 = 4096 colors including 0 and 255
_LEVELS = range(0, 256, 17)
_GRID = [format_hex(r, g, b) for r, g, b in itertools.product(_LEVELS, repeat=3)]


class TestParseHex:

    def test_with_hash(self):
        assert parse_hex("#3366CC") == (0x33, 0x66, 0xCC)

    def test_without_hash(self):
        assert parse_hex("3366cc") == (0x33, 0x66, 0xCC)

    def test_lowercase(self):
        assert parse_hex("#ffffff") == (255, 255, 255)

    def test_normalize_uppercases(self):
        assert normalize_hex("3366cc") == "#3366CC"

    @pytest.mark.parametrize("bad", [
        "", "#", "#fff", "#12345", "#1234567", "#GGGGGG", "##123456",
        " #123456", "#123456 ", "rgb(1,2,3)",
    ])
    def test_malformed_rejected(self, bad):
        with pytest.raises(InvalidColorError):
            parse_hex(bad)

    def test_non_string_rejected(self):
        with pytest.raises(InvalidColorError):
            parse_hex(None)

    def test_error_is_value_error(self):
        with pytest.raises(ValueError, match="Invalid hex color"):
            hex_to_oklch("#12345")


class TestSRGBLinearRoundtrip:
    """sRGB ↔ Linear RGB conversions must roundtrip accurately."""

    def test_roundtrip_mid_gray(self):
        srgb = np.array([0.5, 0.5, 0.5])
        recovered = linear_to_srgb(srgb_to_linear(srgb))
        np.testing.assert_allclose(recovered, srgb, atol=1e-10)

    def test_roundtrip_extremes(self):
        srgb = np.array([0.0, 1.0, 0.0])
        recovered = linear_to_srgb(srgb_to_linear(srgb))
        np.testing.assert_allclose(recovered, srgb, atol=1e-10)

    def test_gamma_threshold(self):
        """Values below 0.04045 use linear segment."""
        val = 0.03
        linear = srgb_to_linear(np.array([val]))
        assert float(linear[0]) == pytest.approx(val / 12.92, abs=1e-10)

    def test_batch_roundtrip(self):
        srgb = np.random.RandomState(42).random((100, 3))
        recovered = linear_to_srgb(srgb_to_linear(srgb))
        np.testing.assert_allclose(recovered, srgb, atol=1e-10)


class TestMatrices:
    """Forward and inverse OKLab matrices must match."""

    def test_m1_inverse(self):
        np.testing.assert_allclose(colorspace._M1 @ colorspace._M1_INV, np.eye(3), atol=1e-12)

    def test_m2_inverse(self):
        np.testing.assert_allclose(colorspace._M2 @ colorspace._M2_INV, np.eye(3), atol=1e-12)

    def test_m1_inverse_matches_published(self):
        published = np.array([
            [4.0767416621, -3.3077115913, 0.2309699292],
            [-1.2684380046, 2.6097574011, -0.3413193965],
            [-0.0041960863, -0.7034186147, 1.7076147010],
        ])
        np.testing.assert_allclose(colorspace._M1_INV, published, atol=1e-6)

    def test_m2_inverse_matches_published(self):
        published = np.array([
            [1.0, 0.3963377774, 0.2158037573],
            [1.0, -0.1055613458, -0.0638541728],
            [1.0, -0.0894841775, -1.2914855480],
        ])
        np.testing.assert_allclose(colorspace._M2_INV, published, atol=1e-6)


class TestOKLab:

    def test_roundtrip_batch(self):
        rgb = np.random.RandomState(42).random((50, 3))
        recovered = oklab_to_linear_rgb(linear_rgb_to_oklab(rgb))
        np.testing.assert_allclose(recovered, rgb, atol=1e-12)

    def test_white_lightness_is_one(self):
        lab = linear_rgb_to_oklab(np.array([1.0, 1.0, 1.0]))
        assert lab[0] == pytest.approx(1.0, abs=1e-6)

    def test_black_lightness_is_zero(self):
        lab = linear_rgb_to_oklab(np.array([0.0, 0.0, 0.0]))
        assert lab[0] == pytest.approx(0.0, abs=1e-6)


class TestOKLCH:

    def test_roundtrip_chromatic(self):
        lab = np.array([0.7, 0.1, -0.05])
        recovered = oklch_to_oklab(oklab_to_oklch(lab))
        np.testing.assert_allclose(recovered, lab, atol=1e-10)

    def test_chroma_calculation(self):
        lch = oklab_to_oklch(np.array([0.5, 0.3, 0.4]))
        assert lch[1] == pytest.approx(0.5, abs=1e-10)

    def test_hue_range(self):
        lch = oklab_to_oklch(np.array([0.5, 0.1, -1e-18]))
        assert 0.0 <= lch[2] < 360.0

    def test_lightness_clamped(self):
        lch = oklab_to_oklch(np.array([1.2, 0.0, 0.0]))
        assert lch[0] == 1.0

    def test_normalize_hue(self):
        assert normalize_hue(370.0) == pytest.approx(10.0)
        assert normalize_hue(-10.0) == pytest.approx(350.0)
        assert normalize_hue(360.0) == 0.0

    def test_normalize_hue_tiny_negative(self):
        assert normalize_hue(-1e-15) == 0.0


class TestHexToOKLCH:

    def test_red_reference(self):
        c = hex_to_oklch("#FF0000")
        assert c.L == pytest.approx(0.628, abs=1e-3)
        assert c.C == pytest.approx(0.2577, abs=1e-3)
        assert c.H == pytest.approx(29.23, abs=0.1)

    def test_blue_reference(self):
        c = hex_to_oklch("#0000FF")
        assert c.L == pytest.approx(0.452, abs=1e-3)
        assert c.C == pytest.approx(0.313, abs=1e-3)
        assert c.H == pytest.approx(264.05, abs=0.1)

    def test_white(self):
        c = hex_to_oklch("#FFFFFF")
        assert c.L == pytest.approx(1.0, abs=1e-6)
        assert c.C < 1e-6

    def test_black(self):
        c = hex_to_oklch("#000000")
        assert c.L == 0.0
        assert c.C == 0.0

    def test_gray_is_achromatic(self):
        c = hex_to_oklch("#808080")
        assert c.C < 1e-6
        assert 0.0 <= c.H < 360.0

    def test_returns_oklch_color(self):
        assert isinstance(hex_to_oklch("#3366CC"), OKLCHColor)


class TestRoundtrip:
    """hex → OKLCH → hex must reproduce every in-gamut input."""

    @pytest.mark.parametrize("hex_color", [
        "#3366CC", "#1A3366", "#CC3366", "#FF0000", "#00FF00", "#0000FF",
        "#FFFFFF", "#000000", "#808080", "#010203", "#FEFDFC",
    ])
    def test_known_colors_exact(self, hex_color):
        assert oklch_to_hex(hex_to_oklch(hex_color)) == hex_color

    def test_grid_within_one_unit(self):
        for hex_color in _GRID:
            recovered = oklch_to_hex(hex_to_oklch(hex_color))
            diff = np.abs(np.array(parse_hex(recovered)) - np.array(parse_hex(hex_color)))
            assert diff.max() <= 1, (hex_color, recovered)

    def test_grid_batch_within_one_unit(self):
        recovered = oklch_array_to_hex(hex_to_oklch_array(_GRID))
        original = np.array([parse_hex(h) for h in _GRID])
        result = np.array([parse_hex(h) for h in recovered])
        assert np.abs(result - original).max() <= 1

    def test_batch_matches_scalar(self):
        colors = ["#3366CC", "#CC3366", "#808080"]
        batch = hex_to_oklch_array(colors)
        for row, hex_color in zip(batch, colors):
            c = hex_to_oklch(hex_color)
            np.testing.assert_allclose(row, [c.L, c.C, c.H], atol=1e-12)


class TestGamutBackstop:
    """Any OKLCH triple must encode to a valid hex color."""

    def test_out_of_gamut_encodes(self):
        result = oklch_to_hex(OKLCHColor(L=0.5, C=0.4, H=150.0))
        assert parse_hex(result)
        assert result == normalize_hex(result)

    def test_extreme_chroma_channels_in_range(self):
        srgb = oklch_to_srgb(np.array([0.9, 2.0, 300.0]))
        assert np.all(srgb >= 0.0)
        assert np.all(srgb <= 1.0)

    def test_white_and_black(self):
        assert oklch_to_hex(OKLCHColor(L=1.0, C=0.0, H=0.0)) == "#FFFFFF"
        assert oklch_to_hex(OKLCHColor(L=0.0, C=0.0, H=0.0)) == "#000000"

    def test_full_chain_roundtrip(self):
        srgb = np.array([0.2, 0.4, 0.8])
        np.testing.assert_allclose(oklch_to_srgb(srgb_to_oklch(srgb)), srgb, atol=1e-10)
