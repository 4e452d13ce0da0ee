# Copyright (c) 2026 Tintwise
# SPDX-License-Identifier: MIT

"""
Tintwise -- Relative color templates in OKLCH.

Captures how a set of colors relates to one Base color and replays that
relationship against any new Base, keeping results inside sRGB.

Quick start::

    from tintwise import Template, apply_template

    t = Template.capture("Card", {"Base": "#3366CC", "Color1": "#1A3366"})
    apply_template(t, {"Base": "#CC3366"})   # {"Base": ..., "Color1": ...}
    t.to_json()                              # Persistable form
"""

from __future__ import annotations

__version__ = "1.0.0"

from tintwise.config import DEFAULT_CONFIG, EngineConfig
from tintwise.schema import (
    BASE_ROLE,
    InvalidColorError,
    LightnessMode,
    MissingBaseError,
    OKLCHColor,
    RelativeRule,
    Template,
    TemplateRole,
)
from tintwise.engine import (
    Variant,
    apply_anchor_shift,
    apply_rule,
    apply_template,
    apply_template_with_anchor,
    assign_roles,
    compute_rule,
    generate_variants,
    hex_to_oklch,
    oklch_to_hex,
)

__all__ = [
    # Core API
    "compute_rule",
    "apply_rule",
    "apply_anchor_shift",
    "apply_template",
    "apply_template_with_anchor",
    "generate_variants",
    "assign_roles",
    "hex_to_oklch",
    "oklch_to_hex",
    # Types (commonly needed)
    "Template",
    "TemplateRole",
    "RelativeRule",
    "LightnessMode",
    "OKLCHColor",
    "Variant",
    # Errors
    "InvalidColorError",
    "MissingBaseError",
    # Config
    "EngineConfig",
    "DEFAULT_CONFIG",
    "BASE_ROLE",
    # Version
    "__version__",
]
