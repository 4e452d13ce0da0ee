# Copyright (c) 2026 Tintwise
# SPDX-License-Identifier: MIT

"""
Gamut clamping.

Two layers, applied in this order before every encode:

1. Chroma pre-clamp: caps chroma at an approximate envelope
   Cmax(L) = L * (1 - L) * 0.4, holding lightness and hue. Run by rule and
   anchor application so the hue/lightness intent survives.
2. Linear-RGB clamp: clips each linear channel to [0, 1]. Always applied
   inside the hex encoder; guarantees a valid encoding for any input.

The envelope is a rough estimate, not the true sRGB boundary in OKLCH. It
is conservative near black and white and is kept as-is for compatibility
with templates captured against it.
"""

from __future__ import annotations

from typing import Optional

import numpy as np
from numpy.typing import NDArray

from tintwise.config import DEFAULT_CONFIG, EngineConfig
from tintwise.schema.template import OKLCHColor


def clamp_linear_rgb(rgb: NDArray[np.float64]) -> NDArray[np.float64]:
    """Clip linear RGB channels independently to [0, 1]."""
    return np.clip(np.asarray(rgb, dtype=np.float64), 0.0, 1.0)


def max_chroma(L: float, config: Optional[EngineConfig] = None) -> float:
    """Approximate maximum displayable chroma at lightness L."""
    config = config or DEFAULT_CONFIG
    return L * (1.0 - L) * config.chroma_envelope_scale


def clamp_chroma(
    color: OKLCHColor,
    config: Optional[EngineConfig] = None,
) -> OKLCHColor:
    """
    Reduce chroma to the envelope at the color's lightness.

    Lightness and hue are unchanged. Colors already inside the envelope
    are returned as-is.
    """
    limit = max_chroma(color.L, config)
    if color.C <= limit:
        return color
    return OKLCHColor(L=color.L, C=max(limit, 0.0), H=color.H)


def clamp_chroma_array(
    lch: NDArray[np.float64],
    config: Optional[EngineConfig] = None,
) -> NDArray[np.float64]:
    """
    Vectorized clamp_chroma for an (..., 3) OKLCH array.

    Returns a new array; the input is not modified.
    """
    config = config or DEFAULT_CONFIG
    lch = np.array(lch, dtype=np.float64)
    L = lch[..., 0]
    limit = np.maximum(L * (1.0 - L) * config.chroma_envelope_scale, 0.0)
    lch[..., 1] = np.minimum(lch[..., 1], limit)
    return lch
