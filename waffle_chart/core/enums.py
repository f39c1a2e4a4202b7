from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    CATEGORY = "Category"
    VALUES = "Values"
    MIN_VALUE = "MinValue"
    MAX_VALUE = "MaxValue"
    PATHS = "Paths"

    @classmethod
    def from_name(cls, name: str) -> Role:
        """Resolve a free-form role name (``min_value``, ``MinValue``, ``min value``)."""
        key = "".join(ch for ch in str(name).lower() if ch not in "_- ")
        for role in cls:
            if role.value.lower() == key:
                return role
        raise ValueError(f"Unknown data role: {name!r}")


class CountSource(str, Enum):
    FROM_LABELS = "from_labels"
    FROM_TOTALS = "from_totals"
    UNAVAILABLE = "unavailable"


class OverflowPolicy(str, Enum):
    PRESERVE = "preserve"
    CLAMP = "clamp"


class GlyphShape(str, Enum):
    CIRCLE = "circle"
    PATH = "path"
