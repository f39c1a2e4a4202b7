"""Error types for aggregation and the diagnostics they turn into.

None of these errors reach the end user. The aggregator catches them at its
boundary and reports them as ``Diagnostic`` records plus log lines.
"""

from __future__ import annotations

from dataclasses import dataclass


class WaffleChartError(Exception):
    """Base exception for waffle chart data errors."""

    kind = "malformed_input"


class InsufficientDataError(WaffleChartError):
    """Neither category labels nor value totals are available."""

    kind = "insufficient_data"


class MalformedBoundsError(WaffleChartError):
    """A max bound is missing or equal to its min bound."""

    kind = "malformed_bounds"

    def __init__(self, message: str, index: int | None = None):
        super().__init__(message)
        self.index = index


class InvalidPathLabelError(WaffleChartError):
    """A series label contains characters that cannot appear in path data."""

    kind = "invalid_path_label"


@dataclass(frozen=True)
class Diagnostic:
    kind: str
    message: str
    index: int | None = None

    @classmethod
    def from_error(cls, error: Exception) -> Diagnostic:
        if isinstance(error, WaffleChartError):
            return cls(kind=error.kind, message=str(error), index=getattr(error, "index", None))
        return cls(kind="malformed_input", message=f"{type(error).__name__}: {error}")
