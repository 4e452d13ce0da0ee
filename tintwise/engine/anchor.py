# Copyright (c) 2026 Tintwise
# SPDX-License-Identifier: MIT

"""
Anchor-shift engine.

An alternative to per-role rules: the operator picks one already-realized
role (the anchor) and gives it a new color. The OKLCH difference between
its original and new color is added to every other role, so the whole set
tracks the same perceptual motion. Any role can be the anchor, not only
Base.

The anchor itself gets the new color verbatim, never a re-derived one.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional

import numpy as np

from tintwise.config import EngineConfig
from tintwise.engine.colorspace import hex_to_oklch, hex_to_oklch_array, oklch_array_to_hex
from tintwise.engine.gamut import clamp_chroma_array
from tintwise.engine.rules import hue_difference

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ColorShift:
    """
    Uniform OKLCH offset between two colors.

    Attributes:
        dL: Lightness offset
        dC: Chroma offset
        dH: Hue offset in degrees, (-180, 180]
    """
    dL: float
    dC: float
    dH: float

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {"dL": self.dL, "dC": self.dC, "dH": self.dH}


def compute_shift(original: str, new: str) -> ColorShift:
    """
    OKLCH offset that moves original onto new.

    Raises:
        InvalidColorError: Either color is malformed
    """
    a = hex_to_oklch(original)
    b = hex_to_oklch(new)
    return ColorShift(dL=b.L - a.L, dC=b.C - a.C, dH=hue_difference(a.H, b.H))


def apply_anchor_shift(
    original_colors: Mapping[str, str],
    anchor_role: str,
    new_anchor_color: str,
    *,
    config: Optional[EngineConfig] = None,
) -> dict[str, str]:
    """
    Move every recorded color by the anchor's OKLCH shift.

    For each non-anchor role: add the shift, clamp L to [0, 1] and C to
    >= 0, wrap H to [0, 360), chroma pre-clamp, encode.

    Args:
        original_colors: Ordered role -> original hex color
        anchor_role: Role whose new color is supplied
        new_anchor_color: New hex color for the anchor role
        config: Engine thresholds (uses defaults if None)

    Returns:
        Role -> hex in the same order as original_colors. The anchor maps
        to new_anchor_color exactly as given. Empty when anchor_role has no
        original color; nothing is shifted and a warning is logged.

    Raises:
        InvalidColorError: Any color is malformed
    """
    if anchor_role not in original_colors:
        logger.warning("No original color for anchor role %s", anchor_role)
        return {}

    shift = compute_shift(original_colors[anchor_role], new_anchor_color)
    logger.debug("Anchor %s -> %s, shift %s", anchor_role, new_anchor_color, shift)

    others = [role for role in original_colors if role != anchor_role]
    shifted: dict[str, str] = {}
    if others:
        lch = hex_to_oklch_array(original_colors[role] for role in others)
        lch[:, 0] = np.clip(lch[:, 0] + shift.dL, 0.0, 1.0)
        lch[:, 1] = np.maximum(lch[:, 1] + shift.dC, 0.0)
        lch[:, 2] = (lch[:, 2] + shift.dH + 360.0) % 360.0
        lch = clamp_chroma_array(lch, config)
        shifted = dict(zip(others, oklch_array_to_hex(lch)))

    return {
        role: new_anchor_color if role == anchor_role else shifted[role]
        for role in original_colors
    }
