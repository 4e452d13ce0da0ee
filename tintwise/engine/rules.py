# Copyright (c) 2026 Tintwise
# SPDX-License-Identifier: MIT

"""
Relative rule engine.

compute_rule captures how a dependent color differs from its base in OKLCH;
apply_rule replays that difference against a new base.

- Lightness: signed offset, stored as a mode plus a non-negative magnitude
- Chroma: ratio to base chroma, or an absolute value when the base is
  achromatic (a ratio over ~0 would turn noise into saturation)
- Hue: signed offset, normalized to (-180, 180]

Neither direction fails on valid hex input. Out-of-range intermediates are
clamped, never rejected: consumers expect one color per role.
"""

from __future__ import annotations

import logging
from typing import Optional

from tintwise.config import DEFAULT_CONFIG, EngineConfig
from tintwise.schema.template import LightnessMode, OKLCHColor, RelativeRule
from tintwise.engine.colorspace import hex_to_oklch, normalize_hue, oklch_to_hex
from tintwise.engine.gamut import clamp_chroma

logger = logging.getLogger(__name__)


def hue_difference(h_from: float, h_to: float) -> float:
    """
    Signed shortest hue offset from h_from to h_to, in (-180, 180].

    Both inputs are expected in [0, 360), so one wrap is enough.
    """
    delta = h_to - h_from
    if delta > 180.0:
        delta -= 360.0
    elif delta <= -180.0:
        delta += 360.0
    return delta


def compute_rule(
    base: str,
    dependent: str,
    *,
    config: Optional[EngineConfig] = None,
) -> RelativeRule:
    """
    Capture the relation from a base color to a dependent color.

    Args:
        base: Base hex color
        dependent: Dependent hex color
        config: Engine thresholds (uses defaults if None)

    Returns:
        RelativeRule that maps base onto dependent

    Raises:
        InvalidColorError: Either color is malformed
    """
    config = config or DEFAULT_CONFIG
    base_lch = hex_to_oklch(base)
    dep_lch = hex_to_oklch(dependent)

    delta_l = dep_lch.L - base_lch.L
    mode = LightnessMode.LIGHTEN if delta_l >= 0.0 else LightnessMode.DARKEN

    if base_lch.C > config.achromatic_threshold:
        chroma_multiplier = dep_lch.C / base_lch.C
        chroma_absolute = None
    else:
        chroma_multiplier = 1.0
        chroma_absolute = dep_lch.C
        if dep_lch.C > config.achromatic_threshold:
            logger.warning(
                "Achromatic base %s: chroma of %s stored as absolute %.4f",
                base, dependent, dep_lch.C,
            )

    rule = RelativeRule(
        lightness_mode=mode,
        lightness_delta=min(abs(delta_l), 1.0),
        chroma_multiplier=chroma_multiplier,
        chroma_absolute=chroma_absolute,
        hue_delta=hue_difference(base_lch.H, dep_lch.H),
    )
    logger.debug("Captured rule %s -> %s: %s", base, dependent, rule)
    return rule


def derive_oklch(rule: RelativeRule, new_base: str) -> OKLCHColor:
    """
    Target OKLCH color for a rule on a new base, before any gamut clamping.

    Lightness is clamped to [0, 1] and hue wrapped to [0, 360); chroma is
    exactly what the rule asks for.

    Raises:
        InvalidColorError: new_base is malformed
    """
    base_lch = hex_to_oklch(new_base)

    L = min(max(base_lch.L + rule.signed_lightness_delta, 0.0), 1.0)

    if rule.chroma_absolute is not None:
        C = rule.chroma_absolute
    else:
        C = base_lch.C * rule.chroma_multiplier

    H = normalize_hue(base_lch.H + rule.hue_delta)

    return OKLCHColor(L=L, C=max(C, 0.0), H=H)


def apply_rule(
    rule: RelativeRule,
    new_base: str,
    *,
    config: Optional[EngineConfig] = None,
) -> str:
    """
    Reproduce a rule's dependent color against a new base.

    Chroma is pre-clamped to the envelope, then the color is encoded with
    the linear-RGB clamp.

    Args:
        rule: Captured relative rule
        new_base: New base hex color
        config: Engine thresholds (uses defaults if None)

    Returns:
        Hex string like "#3941C8"

    Raises:
        InvalidColorError: new_base is malformed
    """
    target = clamp_chroma(derive_oklch(rule, new_base), config)
    return oklch_to_hex(target)
