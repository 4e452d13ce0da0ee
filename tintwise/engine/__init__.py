# Copyright (c) 2026 Tintwise
# SPDX-License-Identifier: MIT

"""
Color relationship engine for Tintwise.

Pure, stateless OKLCH math: conversion, gamut clamping, relative rules,
anchor shifts and template application. Safe to call from any thread.
"""

from tintwise.engine.colorspace import hex_to_oklch, normalize_hex, oklch_to_hex
from tintwise.engine.gamut import clamp_chroma, max_chroma
from tintwise.engine.rules import apply_rule, compute_rule, derive_oklch
from tintwise.engine.anchor import ColorShift, apply_anchor_shift, compute_shift
from tintwise.engine.apply import (
    Variant,
    VariantResult,
    apply_template,
    apply_template_with_anchor,
    generate_variants,
)
from tintwise.engine.roles import RoleAssignment, assign_roles, infer_role_from_name

__all__ = [
    # Conversion
    "hex_to_oklch",
    "oklch_to_hex",
    "normalize_hex",
    # Gamut
    "max_chroma",
    "clamp_chroma",
    # Rules
    "compute_rule",
    "derive_oklch",
    "apply_rule",
    # Anchor shift
    "ColorShift",
    "compute_shift",
    "apply_anchor_shift",
    # Templates
    "apply_template",
    "apply_template_with_anchor",
    "Variant",
    "VariantResult",
    "generate_variants",
    # Roles
    "RoleAssignment",
    "assign_roles",
    "infer_role_from_name",
]
