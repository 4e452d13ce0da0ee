# Copyright (c) 2026 Tintwise
# SPDX-License-Identifier: MIT

"""Tests for chroma envelope and linear-RGB clamping."""

import numpy as np
import pytest

from tintwise.config import EngineConfig
from tintwise.schema import OKLCHColor
from tintwise.engine.gamut import (
    clamp_chroma,
    clamp_chroma_array,
    clamp_linear_rgb,
    max_chroma,
)


class TestMaxChroma:

    def test_zero_at_black(self):
        assert max_chroma(0.0) == 0.0

    def test_zero_at_white(self):
        assert max_chroma(1.0) == 0.0

    def test_peak_at_mid_lightness(self):
        assert max_chroma(0.5) == pytest.approx(0.1)

    def test_custom_scale(self):
        config = EngineConfig(chroma_envelope_scale=0.2)
        assert max_chroma(0.5, config) == pytest.approx(0.05)


class TestClampChroma:

    def test_inside_envelope_untouched(self):
        c = OKLCHColor(L=0.5, C=0.05, H=120.0)
        assert clamp_chroma(c) is c

    def test_reduces_to_envelope(self):
        c = clamp_chroma(OKLCHColor(L=0.5, C=0.3, H=120.0))
        assert c.C == pytest.approx(0.1)

    def test_holds_lightness_and_hue(self):
        c = clamp_chroma(OKLCHColor(L=0.3, C=0.3, H=275.0))
        assert c.L == 0.3
        assert c.H == 275.0

    def test_monotonic_and_bounded(self):
        """Past the envelope, output sits exactly on it."""
        L = 0.6
        limit = max_chroma(L)
        previous = 0.0
        for requested in np.linspace(0.0, 0.5, 51):
            out = clamp_chroma(OKLCHColor(L=L, C=float(requested), H=40.0)).C
            assert out <= limit + 1e-12
            assert out >= previous
            if requested >= limit:
                assert out == pytest.approx(limit)
            previous = out

    def test_black_collapses_chroma(self):
        assert clamp_chroma(OKLCHColor(L=0.0, C=0.2, H=10.0)).C == 0.0


class TestClampChromaArray:

    def test_matches_scalar(self):
        lch = np.array([
            [0.5, 0.3, 120.0],
            [0.9, 0.01, 40.0],
            [0.2, 0.2, 300.0],
        ])
        clamped = clamp_chroma_array(lch)
        for row, out in zip(lch, clamped):
            expected = clamp_chroma(OKLCHColor(L=row[0], C=row[1], H=row[2]))
            np.testing.assert_allclose(out, [expected.L, expected.C, expected.H])

    def test_input_not_modified(self):
        lch = np.array([[0.5, 0.3, 120.0]])
        clamp_chroma_array(lch)
        assert lch[0, 1] == 0.3


class TestClampLinearRGB:

    def test_clips_each_channel(self):
        out = clamp_linear_rgb(np.array([-0.2, 0.5, 1.7]))
        np.testing.assert_array_equal(out, [0.0, 0.5, 1.0])

    def test_in_range_untouched(self):
        rgb = np.array([[0.1, 0.2, 0.3]])
        np.testing.assert_array_equal(clamp_linear_rgb(rgb), rgb)
