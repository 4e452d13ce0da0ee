# Copyright (c) 2026 Tintwise
# SPDX-License-Identifier: MIT

"""
Template v1.0 — Canonical schema for captured color relationships.

Design principles:
- Immutable: All types are frozen dataclasses
- Relative: Dependent colors are stored as rules against Base, not as values
- Eager: Every rule is computed when the template is captured
- Serializable: JSON-ready, numeric fields round-trip exactly

OKLCH Color Space:
- L (Lightness): 0.0 = black, 1.0 = white
- C (Chroma): 0.0 = gray, ~0.32 = max saturation in sRGB
- H (Hue): 0-360 degrees (≈30=orange, ≈90=yellow, ≈145=green, ≈250=blue, ≈330=pink/red)
"""

from __future__ import annotations

import json
import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from tintwise.config import EngineConfig


# =============================================================================
# Schema Version
# =============================================================================

SCHEMA_VERSION = "1.0"

BASE_ROLE = "Base"


# =============================================================================
# Errors
# =============================================================================


class InvalidColorError(ValueError):
    """An encoded color is not a 6-hex-digit ``#RRGGBB`` string."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Invalid hex color: {value!r} (expected '#RRGGBB')")


class MissingBaseError(ValueError):
    """A color set has no ``Base`` role to anchor rules to."""

    def __init__(self, roles: tuple[str, ...] = ()) -> None:
        self.roles = roles
        found = ", ".join(roles) if roles else "none"
        super().__init__(f"No '{BASE_ROLE}' role found (roles: {found})")


# =============================================================================
# Core Color Types
# =============================================================================


@dataclass(frozen=True, slots=True)
class OKLCHColor:
    """
    A single color in OKLCH color space.

    Perceptual colors are computation values only; templates store hex.

    Attributes:
        L: Lightness (0.0 = black, 1.0 = white)
        C: Chroma (0.0 = neutral gray, typical max ~0.32 for sRGB)
        H: Hue in degrees [0, 360). Always numeric, even for grays,
           where it carries whatever angle the conversion produced.
    """
    L: float
    C: float
    H: float = 0.0

    def __post_init__(self) -> None:
        """Validate color values are within expected ranges."""
        if not 0.0 <= self.L <= 1.0:
            raise ValueError(f"Lightness must be 0-1, got {self.L}")
        if self.C < 0.0:
            raise ValueError(f"Chroma must be >= 0, got {self.C}")
        if not 0.0 <= self.H < 360.0:
            raise ValueError(f"Hue must be 0-360, got {self.H}")

    @property
    def hex(self) -> str:
        """Hex string like "#3941C8" (linear-RGB clamped, no chroma clamp)."""
        from tintwise.engine.colorspace import oklch_to_hex
        return oklch_to_hex(self)

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {"L": self.L, "C": self.C, "H": self.H}

    @classmethod
    def from_dict(cls, data: dict) -> OKLCHColor:
        """Deserialize from dictionary."""
        return cls(L=data["L"], C=data["C"], H=data.get("H", 0.0))


# =============================================================================
# Relative Rules
# =============================================================================


class LightnessMode(Enum):
    """Direction of a rule's lightness offset."""
    LIGHTEN = "lighten"
    DARKEN = "darken"


@dataclass(frozen=True, slots=True)
class RelativeRule:
    """
    How one dependent color differs from its base, in OKLCH.

    Storing offsets and ratios instead of absolute values is what lets a
    rule travel to any new base: a shadow stays proportionally darker and
    duller whatever the new base's own lightness is.

    Attributes:
        lightness_mode: Whether the offset lightens or darkens
        lightness_delta: Magnitude of the lightness offset (0-1)
        chroma_multiplier: Dependent chroma / base chroma. 1.0 when
            chroma_absolute is set.
        chroma_absolute: Fixed dependent chroma, set only when the base was
            achromatic at capture time. Takes precedence over the multiplier.
        hue_delta: Signed hue offset in degrees, (-180, 180]
    """
    lightness_mode: LightnessMode
    lightness_delta: float
    chroma_multiplier: float = 1.0
    chroma_absolute: Optional[float] = None
    hue_delta: float = 0.0

    def __post_init__(self) -> None:
        """Validate rule values are within expected ranges."""
        if not 0.0 <= self.lightness_delta <= 1.0:
            raise ValueError(
                f"Lightness delta must be 0-1, got {self.lightness_delta}"
            )
        if self.chroma_multiplier < 0.0:
            raise ValueError(
                f"Chroma multiplier must be >= 0, got {self.chroma_multiplier}"
            )
        if self.chroma_absolute is not None and self.chroma_absolute < 0.0:
            raise ValueError(
                f"Absolute chroma must be >= 0, got {self.chroma_absolute}"
            )
        if not -180.0 < self.hue_delta <= 180.0:
            raise ValueError(f"Hue delta must be in (-180, 180], got {self.hue_delta}")

    @property
    def signed_lightness_delta(self) -> float:
        """Lightness offset with the mode folded into the sign."""
        if self.lightness_mode is LightnessMode.DARKEN:
            return -self.lightness_delta
        return self.lightness_delta

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "lightness_mode": self.lightness_mode.value,
            "lightness_delta": self.lightness_delta,
            "chroma_multiplier": self.chroma_multiplier,
            "chroma_absolute": self.chroma_absolute,
            "hue_delta": self.hue_delta,
        }

    @classmethod
    def from_dict(cls, data: dict) -> RelativeRule:
        """Deserialize from dictionary."""
        return cls(
            lightness_mode=LightnessMode(data["lightness_mode"]),
            lightness_delta=data["lightness_delta"],
            chroma_multiplier=data.get("chroma_multiplier", 1.0),
            chroma_absolute=data.get("chroma_absolute"),
            hue_delta=data.get("hue_delta", 0.0),
        )


# =============================================================================
# Template
# =============================================================================


@dataclass(frozen=True, slots=True)
class TemplateRole:
    """
    One named color slot in a template.

    Attributes:
        role: Role name ("Base", "Color1", ...)
        label: Display label shown to the designer
        original_color: Hex color captured from the reference design
        rule: Relation to Base; None only for Base itself
    """
    role: str
    label: str
    original_color: str
    rule: Optional[RelativeRule] = None

    def to_dict(self) -> dict:
        """Serialize to dictionary (the role name is the enclosing key)."""
        d = {"label": self.label, "original_color": self.original_color}
        if self.rule is not None:
            d["rule"] = self.rule.to_dict()
        return d

    @classmethod
    def from_dict(cls, role: str, data: dict) -> TemplateRole:
        """Deserialize from dictionary."""
        rule = data.get("rule")
        return cls(
            role=role,
            label=data.get("label", role),
            original_color=data["original_color"],
            rule=RelativeRule.from_dict(rule) if rule else None,
        )


@dataclass(frozen=True, slots=True)
class Template:
    """
    A captured set of color relationships anchored to one Base color.

    Roles keep their capture order. The template owns its rules; rules have
    no identity outside it.

    Usage:
        template = Template.capture(
            "Card",
            {"Base": "#3366CC", "Color1": "#1A3366", "Color2": "#E6ECF8"},
        )
        template.rule("Color1")
        template.original_color("Base")
    """
    id: str
    name: str
    entries: tuple[TemplateRole, ...]
    version: str = field(default=SCHEMA_VERSION)

    def __post_init__(self) -> None:
        """Validate template structure and stored colors."""
        from tintwise.engine.colorspace import parse_hex

        names = [e.role for e in self.entries]
        if any(not name for name in names):
            raise ValueError("Role names cannot be empty")
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate role names: {names}")
        if BASE_ROLE not in names:
            raise MissingBaseError(tuple(names))
        for entry in self.entries:
            if entry.role == BASE_ROLE and entry.rule is not None:
                raise ValueError("Base role cannot carry a rule")
            if entry.role != BASE_ROLE and entry.rule is None:
                raise ValueError(f"Role '{entry.role}' has no rule")
            parse_hex(entry.original_color)

    @classmethod
    def capture(
        cls,
        name: str,
        colors: Mapping[str, str],
        *,
        labels: Optional[Mapping[str, str]] = None,
        template_id: Optional[str] = None,
        config: Optional[EngineConfig] = None,
    ) -> Template:
        """
        Capture a template from a fully role-labeled color set.

        Every non-Base role gets its rule computed against Base here.

        Args:
            name: Display name
            colors: Ordered mapping of role -> hex color; must contain "Base"
            labels: Optional display labels by role (defaults to role name)
            template_id: Optional id (defaults to a random hex uuid)
            config: Engine thresholds (uses defaults if None)

        Raises:
            MissingBaseError: No "Base" role in colors
            InvalidColorError: Any color is malformed
        """
        from tintwise.engine.colorspace import normalize_hex
        from tintwise.engine.rules import compute_rule

        if BASE_ROLE not in colors:
            raise MissingBaseError(tuple(colors))
        normalized = {role: normalize_hex(color) for role, color in colors.items()}
        labels = labels or {}
        base = normalized[BASE_ROLE]

        entries = tuple(
            TemplateRole(
                role=role,
                label=labels.get(role) or role,
                original_color=color,
                rule=None if role == BASE_ROLE else compute_rule(base, color, config=config),
            )
            for role, color in normalized.items()
        )
        return cls(
            id=template_id or uuid.uuid4().hex,
            name=name,
            entries=entries,
        )

    @property
    def roles(self) -> tuple[str, ...]:
        """Role names in capture order."""
        return tuple(e.role for e in self.entries)

    @property
    def base_color(self) -> str:
        """Original Base color."""
        return self.get_role(BASE_ROLE).original_color

    @property
    def original_colors(self) -> dict[str, str]:
        """Ordered role -> original hex color."""
        return {e.role: e.original_color for e in self.entries}

    @property
    def rules(self) -> dict[str, RelativeRule]:
        """Ordered role -> rule, for every non-Base role."""
        return {e.role: e.rule for e in self.entries if e.rule is not None}

    def get_role(self, role: str) -> TemplateRole:
        """Get a specific role entry by name."""
        for entry in self.entries:
            if entry.role == role:
                return entry
        raise KeyError(f"No role named '{role}'")

    def rule(self, role: str) -> Optional[RelativeRule]:
        """Rule for a role, or None for Base and unknown roles."""
        for entry in self.entries:
            if entry.role == role:
                return entry.rule
        return None

    def original_color(self, role: str) -> Optional[str]:
        """Original hex color for a role, or None if the role is unknown."""
        for entry in self.entries:
            if entry.role == role:
                return entry.original_color
        return None

    def label(self, role: str) -> Optional[str]:
        """Display label for a role, or None if the role is unknown."""
        for entry in self.entries:
            if entry.role == role:
                return entry.label
        return None

    def to_dict(self) -> dict:
        """Serialize to dictionary, role-keyed in capture order."""
        return {
            "version": self.version,
            "id": self.id,
            "name": self.name,
            "roles": {e.role: e.to_dict() for e in self.entries},
        }

    def to_json(self, indent: Optional[int] = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: dict) -> Template:
        """Deserialize from dictionary."""
        return cls(
            version=data.get("version", SCHEMA_VERSION),
            id=data["id"],
            name=data["name"],
            entries=tuple(
                TemplateRole.from_dict(role, entry)
                for role, entry in data["roles"].items()
            ),
        )

    @classmethod
    def from_json(cls, json_str: str) -> Template:
        """Deserialize from JSON string."""
        return cls.from_dict(json.loads(json_str))
