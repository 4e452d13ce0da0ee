# Copyright (c) 2026 Tintwise
# SPDX-License-Identifier: MIT

"""
Schema definitions for captured color relationships.

All types in this module are immutable (frozen dataclasses).
Once a template is captured, its rules are fixed and can only be read.
"""

from tintwise.schema.template import (
    BASE_ROLE,
    SCHEMA_VERSION,
    InvalidColorError,
    LightnessMode,
    MissingBaseError,
    OKLCHColor,
    RelativeRule,
    Template,
    TemplateRole,
)

__all__ = [
    # Version
    "SCHEMA_VERSION",
    "BASE_ROLE",
    # Core types
    "OKLCHColor",
    "LightnessMode",
    "RelativeRule",
    # Top-level container
    "TemplateRole",
    "Template",
    # Errors
    "InvalidColorError",
    "MissingBaseError",
]
