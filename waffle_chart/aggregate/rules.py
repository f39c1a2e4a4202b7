from __future__ import annotations

import math
import re
from collections.abc import Sequence
from datetime import date, datetime
from typing import Any

from ..core.enums import OverflowPolicy
from ..core.errors import InsufficientDataError, InvalidPathLabelError, MalformedBoundsError
from ..core.models import Bounds, ItemCount

# Letters that never occur in SVG path data.
_INVALID_PATH_CHARS = re.compile(r"[bdfgijknopruwxy]", re.IGNORECASE)


def is_contribution(value: Any) -> bool:
    """Loose truthiness: None, 0, False and NaN contribute nothing."""
    if value is None:
        return False
    if isinstance(value, float) and math.isnan(value):
        return False
    return bool(value)


def round_half_up(x: float) -> int:
    if not math.isfinite(x):
        raise ValueError(f"Cannot round non-finite value {x}")
    return math.floor(x + 0.5)


def validate_path_label(label: Any) -> str | None:
    if label is None:
        return None
    text = str(label)
    if _INVALID_PATH_CHARS.search(text):
        raise InvalidPathLabelError(f"Series label is not path data: {text!r}")
    return text


def sum_values(
    totals: list[float],
    values: Sequence[Any],
    paths: list[str | None],
    path: str | None,
) -> None:
    """Add ``values`` into ``totals`` in place; contributing indexes take ``path``."""
    for i, value in enumerate(values):
        if is_contribution(value):
            paths[i] = path
            totals[i] += value


def resolve_count(labels: Sequence[Any] | None, totals: Sequence[Any] | None) -> ItemCount:
    if labels is not None and totals is not None:
        if len(labels) >= len(totals):
            return ItemCount.from_labels(len(labels))
        return ItemCount.from_totals(len(totals))
    if labels is not None:
        return ItemCount.from_labels(len(labels))
    if totals is not None:
        return ItemCount.from_totals(len(totals))
    raise InsufficientDataError("No categories or values")


def bounded_percentage(total: float, index: int, bounds: Bounds) -> int:
    max_values = bounds.max or []
    local_max = max_values[index] if index < len(max_values) else None
    if local_max is None:
        raise MalformedBoundsError(f"Missing max bound at index {index}", index=index)

    min_values = bounds.min or []
    local_min = min_values[index] if index < len(min_values) else None
    if not is_contribution(local_min):
        local_min = 0

    value_range = local_max - local_min
    if not math.isfinite(value_range):
        raise MalformedBoundsError(
            f"Non-finite bounds (min {local_min}, max {local_max}) at index {index}", index=index
        )
    if value_range == 0:
        raise MalformedBoundsError(
            f"Max bound equals min bound ({local_max}) at index {index}", index=index
        )
    percentage = (total - local_min) * 100 / value_range
    if not math.isfinite(percentage):
        raise MalformedBoundsError(
            f"Bounds give a non-finite percentage at index {index}", index=index
        )
    return round_half_up(percentage)


def rescale_to_peak(totals: Sequence[float], peak: float) -> list[int]:
    """Scale ``totals`` so ``peak`` maps to 100.

    Raises:
        ValueError: If ``peak`` is not finite
    """
    values = []
    for t in totals:
        scaled = t * 100 / peak
        if not math.isfinite(scaled):
            # t * 100 overflowed; dividing first stays in range.
            scaled = t / peak * 100
        values.append(round_half_up(scaled))
    return values


def apply_overflow_policy(values: list[float], policy: OverflowPolicy) -> list[float]:
    if policy is OverflowPolicy.CLAMP:
        return [max(0, min(100, v)) for v in values]
    return values


def format_category_label(value: Any) -> Any:
    """Default label formatter: dates become ISO-style text, everything else passes."""
    if isinstance(value, datetime):
        if (value.hour, value.minute, value.second, value.microsecond) == (0, 0, 0, 0):
            return value.strftime("%Y-%m-%d")
        return value.strftime("%Y-%m-%d %H:%M")
    if isinstance(value, date):
        return value.strftime("%Y-%m-%d")
    return value
