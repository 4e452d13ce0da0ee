# Copyright (c) 2026 Tintwise
# SPDX-License-Identifier: MIT

"""
Template application.

Turns a captured Template plus new input colors into a role -> hex mapping
for the host to paint. Two modes:

- Base-driven (apply_template): a new Base, plus optional explicit colors
  for other roles; every role not given is derived from Base by its rule.
- Anchor-driven (apply_template_with_anchor, generate_variants): one role
  gets a new color and every other role follows by the same OKLCH shift.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Optional

from tintwise.config import EngineConfig
from tintwise.schema.template import BASE_ROLE, MissingBaseError, Template
from tintwise.engine.anchor import apply_anchor_shift
from tintwise.engine.colorspace import parse_hex
from tintwise.engine.rules import apply_rule

logger = logging.getLogger(__name__)


def apply_template(
    template: Template,
    changes: Mapping[str, str],
    *,
    config: Optional[EngineConfig] = None,
) -> dict[str, str]:
    """
    Apply a template against a new Base color.

    Args:
        template: Captured template
        changes: Role -> hex picked by the operator; must contain "Base".
            These colors are used verbatim.
        config: Engine thresholds (uses defaults if None)

    Returns:
        Role -> hex for every template role (template order), followed by
        any extra roles present only in changes.

    Raises:
        MissingBaseError: changes has no "Base"
        InvalidColorError: Any color in changes is malformed
    """
    if BASE_ROLE not in changes:
        raise MissingBaseError(tuple(changes))
    for color in changes.values():
        parse_hex(color)

    new_base = changes[BASE_ROLE]
    result: dict[str, str] = {}
    for role in template.roles:
        if role in changes:
            result[role] = changes[role]
        else:
            result[role] = apply_rule(template.rule(role), new_base, config=config)
    for role, color in changes.items():
        result.setdefault(role, color)

    logger.debug(
        "Applied template %s (%s) with Base %s: %s",
        template.name, template.id, new_base, result,
    )
    return result


def apply_template_with_anchor(
    template: Template,
    anchor_role: str,
    new_anchor_color: str,
    *,
    config: Optional[EngineConfig] = None,
) -> dict[str, str]:
    """
    Anchor-shift a template's original colors.

    Returns an empty mapping (and logs a warning) when anchor_role is not a
    template role.

    Raises:
        InvalidColorError: new_anchor_color is malformed
    """
    return apply_anchor_shift(
        template.original_colors, anchor_role, new_anchor_color, config=config,
    )


@dataclass(frozen=True, slots=True)
class Variant:
    """
    One requested variant of a template.

    Attributes:
        name: Display name (e.g. "Dark Mode", "Accent Red")
        anchor_role: Role whose color changes
        color: New hex color for that role
    """
    name: str
    anchor_role: str
    color: str

    @classmethod
    def from_dict(cls, data: dict) -> Variant:
        """Deserialize from dictionary."""
        return cls(
            name=data["name"],
            anchor_role=data.get("anchor_role", BASE_ROLE),
            color=data["color"],
        )


@dataclass(frozen=True, slots=True)
class VariantResult:
    """
    Colors produced for one variant.

    Attributes:
        variant: The request
        colors: Role -> hex, template role order
    """
    variant: Variant
    colors: dict[str, str]

    @property
    def name(self) -> str:
        """Variant display name."""
        return self.variant.name

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "name": self.variant.name,
            "anchor_role": self.variant.anchor_role,
            "anchor_color": self.variant.color,
            "colors": dict(self.colors),
        }


def generate_variants(
    template: Template,
    variants: Iterable[Variant],
    *,
    config: Optional[EngineConfig] = None,
) -> tuple[VariantResult, ...]:
    """
    Produce one anchor-shifted color set per variant, in request order.

    A variant whose anchor_role is not a template role gets an empty color
    map; the rest of the batch is unaffected.

    Raises:
        InvalidColorError: A variant's color is malformed
    """
    results = tuple(
        VariantResult(
            variant=v,
            colors=apply_template_with_anchor(template, v.anchor_role, v.color, config=config),
        )
        for v in variants
    )
    logger.debug("Generated %d variants of template %s", len(results), template.name)
    return results
