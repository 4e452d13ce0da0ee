# Copyright (c) 2026 Tintwise
# SPDX-License-Identifier: MIT

"""
Role assignment for analyzed reference designs.

The host walks its own document and hands over (layer name, hex color)
pairs. This module turns them into a role-labeled color set:
distinct colors, naturally sorted by layer name, named Base, Color1,
Color2, ... Explicit role tags in layer names take precedence.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Optional

from tintwise.schema.template import BASE_ROLE
from tintwise.engine.colorspace import normalize_hex


_DIGITS_RE = re.compile(r"(\d+)")

# Checked in order; first match wins
_ROLE_TAGS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\[Base\]", re.IGNORECASE), BASE_ROLE),
    (re.compile(r"\[Color1\]", re.IGNORECASE), "Color1"),
    (re.compile(r"\[Color2\]", re.IGNORECASE), "Color2"),
    (re.compile(r"\[Color3\]", re.IGNORECASE), "Color3"),
    (re.compile(r"\[Color4\]", re.IGNORECASE), "Color4"),
    (re.compile(r"\[Color5\]", re.IGNORECASE), "Color5"),
    # Legacy letter tags
    (re.compile(r"\[A\]", re.IGNORECASE), "Color1"),
    (re.compile(r"\[B\]", re.IGNORECASE), "Color2"),
    (re.compile(r"\[C\]", re.IGNORECASE), "Color3"),
)


def natural_sort_key(text: str) -> tuple[tuple[int, int, str], ...]:
    """
    Sort key that orders embedded numbers numerically.

    "Rectangle 2" sorts before "Rectangle 11".
    """
    return tuple(
        (0, int(part), "") if part.isdigit() else (1, 0, part.casefold())
        for part in _DIGITS_RE.split(text)
    )


def infer_role_from_name(name: str) -> Optional[str]:
    """Role tagged in a layer name, e.g. "Card [Base]" -> "Base"."""
    for pattern, role in _ROLE_TAGS:
        if pattern.search(name):
            return role
    return None


def role_name(index: int) -> str:
    """Role for the index-th distinct color: Base, Color1, Color2, ..."""
    return BASE_ROLE if index == 0 else f"Color{index}"


@dataclass(frozen=True, slots=True)
class RoleAssignment:
    """
    A distinct color found in a reference design, with its assigned role.

    Attributes:
        layer_name: Name of the first layer carrying this color
        color: Canonical hex color
        role: Assigned role name
    """
    layer_name: str
    color: str
    role: str

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {"layer_name": self.layer_name, "color": self.color, "role": self.role}


def assign_roles(layers: Iterable[tuple[str, str]]) -> tuple[RoleAssignment, ...]:
    """
    Assign roles to the distinct colors of a reference design.

    A layer name carrying a role tag ("Card [Base]", "Shadow [Color1]")
    claims that role. Remaining colors take the lowest free role names
    (Base, Color1, Color2, ...) in natural layer-name order. When two
    colors carry the same tag, the first in that order keeps it.

    Args:
        layers: (layer_name, hex_color) pairs in document order

    Returns:
        One assignment per distinct color (first layer wins), naturally
        sorted by layer name.

    Raises:
        InvalidColorError: Any color is malformed
    """
    first_by_color: dict[str, str] = {}
    for layer_name, color in layers:
        first_by_color.setdefault(normalize_hex(color), layer_name)

    ordered = sorted(
        ((name, color) for color, name in first_by_color.items()),
        key=lambda item: natural_sort_key(item[0]),
    )

    roles: list[Optional[str]] = []
    taken: set[str] = set()
    for name, _ in ordered:
        tagged = infer_role_from_name(name)
        if tagged is not None and tagged not in taken:
            taken.add(tagged)
            roles.append(tagged)
        else:
            roles.append(None)

    index = 0
    for i, role in enumerate(roles):
        if role is not None:
            continue
        while role_name(index) in taken:
            index += 1
        roles[i] = role_name(index)
        taken.add(roles[i])

    return tuple(
        RoleAssignment(layer_name=name, color=color, role=role)
        for (name, color), role in zip(ordered, roles)
    )


def role_colors(assignments: Sequence[RoleAssignment]) -> dict[str, str]:
    """Ordered role -> hex mapping, ready for Template.capture."""
    return {a.role: a.color for a in assignments}


def role_labels(assignments: Sequence[RoleAssignment]) -> dict[str, str]:
    """Ordered role -> layer name mapping, for Template.capture labels."""
    return {a.role: a.layer_name for a in assignments}
