# Copyright (c) 2026 Tintwise
# SPDX-License-Identifier: MIT

"""Engine thresholds."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EngineConfig:
    """Configuration for rule capture and gamut clamping."""

    # Base chroma at or below this is treated as achromatic when capturing
    # a rule: the dependent chroma is stored absolutely, not as a ratio.
    achromatic_threshold: float = 0.01

    # Chroma envelope Cmax(L) = L * (1 - L) * scale.
    # A rough, conservative stand-in for the sRGB boundary in OKLCH.
    chroma_envelope_scale: float = 0.4


DEFAULT_CONFIG = EngineConfig()
