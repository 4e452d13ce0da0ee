# Copyright (c) 2026 Tintwise
# SPDX-License-Identifier: MIT

"""
Color space conversions.

Conversion chain: hex → sRGB → Linear RGB → OKLab → OKLCH, and back.

References:
- OKLab: https://bottosson.github.io/posts/oklab/
- OKLCH: Cylindrical form of OKLab (Lightness, Chroma, Hue)

All conversions are pure NumPy and stateless. The inverse direction always
clamps linear RGB to [0, 1] before encoding, so every OKLCH triple has a
valid hex encoding.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

import numpy as np
from numpy.typing import NDArray

from tintwise.schema.template import InvalidColorError, OKLCHColor
from tintwise.engine.gamut import clamp_linear_rgb


_HEX_RE = re.compile(r"#?([0-9A-Fa-f]{6})")


# =============================================================================
# Hex encoding
# =============================================================================


def parse_hex(hex_color: str) -> tuple[int, int, int]:
    """
    Decode a hex color string into 8-bit channels.

    Args:
        hex_color: "#3941C8" or "3941C8", either case

    Returns:
        (r, g, b) with each channel in [0, 255]

    Raises:
        InvalidColorError: Not exactly six hex digits (with optional '#')
    """
    if not isinstance(hex_color, str):
        raise InvalidColorError(hex_color)
    m = _HEX_RE.fullmatch(hex_color)
    if m is None:
        raise InvalidColorError(hex_color)
    digits = m.group(1)
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


def format_hex(r: int, g: int, b: int) -> str:
    """Encode 8-bit channels as "#RRGGBB"."""
    return f"#{r:02X}{g:02X}{b:02X}"


def normalize_hex(hex_color: str) -> str:
    """Validate and canonicalize to upper-case "#RRGGBB"."""
    return format_hex(*parse_hex(hex_color))


def normalize_hue(h: float) -> float:
    """Wrap a hue angle into [0, 360)."""
    h = h % 360.0
    # -1e-15 % 360.0 rounds up to 360.0
    if h >= 360.0:
        h = 0.0
    return h


# =============================================================================
# sRGB ↔ Linear RGB
# =============================================================================


def srgb_to_linear(srgb: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert sRGB values [0,1] to linear RGB.

    sRGB uses a piecewise gamma curve:
    - For values <= 0.04045: linear/12.92
    - For values > 0.04045: ((value + 0.055) / 1.055) ^ 2.4
    """
    srgb = np.asarray(srgb, dtype=np.float64)
    return np.where(
        srgb <= 0.04045,
        srgb / 12.92,
        np.power((srgb + 0.055) / 1.055, 2.4)
    )


def linear_to_srgb(linear: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert linear RGB [0,1] to sRGB values [0,1].

    Inverse of srgb_to_linear. Input is expected to be clamped already.
    """
    linear = np.asarray(linear, dtype=np.float64)
    # np.where evaluates both branches
    linear_safe = np.maximum(linear, 0.0)
    return np.where(
        linear_safe <= 0.0031308,
        linear_safe * 12.92,
        1.055 * np.power(linear_safe, 1.0 / 2.4) - 0.055
    )


# =============================================================================
# Linear RGB ↔ OKLab
# =============================================================================

# Matrices from https://bottosson.github.io/posts/oklab/

# Linear sRGB to LMS (cone responses)
_M1 = np.array([
    [0.4122214708, 0.5363325363, 0.0514459929],
    [0.2119034982, 0.6806995451, 0.1073969566],
    [0.0883024619, 0.2817188376, 0.6299787005],
], dtype=np.float64)

# LMS to OKLab
_M2 = np.array([
    [0.2104542553, 0.7936177850, -0.0040720468],
    [1.9779984951, -2.4285922050, 0.4505937099],
    [0.0259040371, 0.7827717662, -0.8086757660],
], dtype=np.float64)

# Inverses must match the forward matrices to floating-point precision:
# in-gamut colors round-trip exactly.
_M1_INV = np.linalg.inv(_M1)
_M2_INV = np.linalg.inv(_M2)


def linear_rgb_to_oklab(rgb: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert linear RGB to OKLab.

    Args:
        rgb: Array of shape (..., 3) with linear RGB values

    Returns:
        Array of shape (..., 3) with OKLab values (L, a, b)
    """
    rgb = np.asarray(rgb, dtype=np.float64)

    lms = np.einsum('...j,ij->...i', rgb, _M1)

    # Cube root (handle negative values for out-of-gamut colors)
    lms_cbrt = np.sign(lms) * np.abs(lms) ** (1.0 / 3.0)

    return np.einsum('...j,ij->...i', lms_cbrt, _M2)


def oklab_to_linear_rgb(lab: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert OKLab to linear RGB (unclamped).

    Args:
        lab: Array of shape (..., 3) with OKLab values (L, a, b)

    Returns:
        Array of shape (..., 3) with linear RGB values, possibly outside [0, 1]
    """
    lab = np.asarray(lab, dtype=np.float64)

    lms_cbrt = np.einsum('...j,ij->...i', lab, _M2_INV)
    lms = lms_cbrt ** 3

    return np.einsum('...j,ij->...i', lms, _M1_INV)


# =============================================================================
# OKLab ↔ OKLCH
# =============================================================================


def oklab_to_oklch(lab: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert OKLab to OKLCH (cylindrical coordinates).

    Args:
        lab: Array of shape (..., 3) with OKLab values (L, a, b)

    Returns:
        Array of shape (..., 3) with OKLCH values (L, C, H).
        L is clamped to [0, 1] and H is in degrees [0, 360).
    """
    lab = np.asarray(lab, dtype=np.float64)

    L = np.clip(lab[..., 0], 0.0, 1.0)
    a = lab[..., 1]
    b = lab[..., 2]

    C = np.sqrt(a**2 + b**2)
    H = np.degrees(np.arctan2(b, a)) % 360.0
    H = np.where(H >= 360.0, 0.0, H)

    return np.stack([L, C, H], axis=-1)


def oklch_to_oklab(lch: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert OKLCH to OKLab.

    Args:
        lch: Array of shape (..., 3) with OKLCH values (L, C, H)
        H is in degrees

    Returns:
        Array of shape (..., 3) with OKLab values (L, a, b)
    """
    lch = np.asarray(lch, dtype=np.float64)

    L = lch[..., 0]
    C = lch[..., 1]
    H_rad = np.radians(lch[..., 2])

    a = C * np.cos(H_rad)
    b = C * np.sin(H_rad)

    return np.stack([L, a, b], axis=-1)


# =============================================================================
# Full chain: sRGB ↔ OKLCH
# =============================================================================


def srgb_to_oklch(srgb: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert sRGB [0,1] to OKLCH.

    Full chain: sRGB → Linear RGB → OKLab → OKLCH

    Args:
        srgb: Array of shape (..., 3) with sRGB values [0, 1]

    Returns:
        Array of shape (..., 3) with OKLCH values (L, C, H)
        - L: Lightness [0, 1]
        - C: Chroma [0, ~0.4 for sRGB gamut]
        - H: Hue in degrees [0, 360)
    """
    linear = srgb_to_linear(srgb)
    lab = linear_rgb_to_oklab(linear)
    return oklab_to_oklch(lab)


def oklch_to_srgb(lch: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert OKLCH to sRGB [0,1].

    Full chain: OKLCH → OKLab → Linear RGB → (clamp) → sRGB

    Out-of-gamut values are clamped per channel in linear RGB, which is
    the backstop that guarantees a valid encoding for any triple.
    """
    lab = oklch_to_oklab(lch)
    linear = clamp_linear_rgb(oklab_to_linear_rgb(lab))
    return linear_to_srgb(linear)


def srgb_to_uint8(srgb: NDArray[np.float64]) -> NDArray[np.int64]:
    """Quantize sRGB [0,1] to integer channels [0, 255] by rounding."""
    srgb = np.asarray(srgb, dtype=np.float64)
    return np.clip(np.round(srgb * 255.0), 0, 255).astype(np.int64)


# =============================================================================
# Hex ↔ OKLCH
# =============================================================================


def hex_to_oklch(hex_color: str) -> OKLCHColor:
    """
    Convert a hex color string to OKLCH.

    Args:
        hex_color: Hex string like "#3941C8" or "3941C8"

    Returns:
        OKLCHColor. Hue is always numeric; for grays it is whatever angle
        the conversion produced and carries no meaning.

    Raises:
        InvalidColorError: Malformed hex string
    """
    srgb = np.array(parse_hex(hex_color), dtype=np.float64) / 255.0
    L, C, H = (float(v) for v in srgb_to_oklch(srgb))
    return OKLCHColor(L=L, C=max(C, 0.0), H=H)


def oklch_to_hex(color: OKLCHColor) -> str:
    """
    Convert an OKLCH color to a hex string.

    Linear-RGB clamping is applied; chroma pre-clamping is not (see
    tintwise.engine.gamut.clamp_chroma).

    Returns:
        Hex string like "#3941C8"
    """
    lch = np.array([color.L, color.C, color.H], dtype=np.float64)
    r, g, b = srgb_to_uint8(oklch_to_srgb(lch))
    return format_hex(int(r), int(g), int(b))


def hex_to_oklch_array(hex_colors: Iterable[str]) -> NDArray[np.float64]:
    """
    Convert many hex colors to an (N, 3) OKLCH array.

    Raises:
        InvalidColorError: Any entry is malformed
    """
    rgb = np.array([parse_hex(h) for h in hex_colors], dtype=np.float64).reshape(-1, 3)
    return srgb_to_oklch(rgb / 255.0)


def oklch_array_to_hex(lch: NDArray[np.float64]) -> list[str]:
    """Convert an (N, 3) OKLCH array to hex strings, linear-RGB clamped."""
    rgb = srgb_to_uint8(oklch_to_srgb(lch)).reshape(-1, 3)
    return [format_hex(int(r), int(g), int(b)) for r, g, b in rgb]
