from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .enums import CountSource, Role
from .errors import Diagnostic


@dataclass(frozen=True)
class Viewport:
    width: float
    height: float


@dataclass(frozen=True)
class TileSize:
    width: float
    height: float


@dataclass(frozen=True)
class LayoutPlan:
    rows: int
    columns: int
    tile_width: float
    tile_height: float
    total_area: float
    viewport: Viewport

    @property
    def capacity(self) -> int:
        return self.rows * self.columns

    @property
    def is_empty(self) -> bool:
        return self.capacity == 0


@dataclass(frozen=True)
class Placement:
    index: int
    x: float
    y: float
    width: float
    height: float


@dataclass
class Bounds:
    min: list[Any] | None = None
    max: list[Any] | None = None


@dataclass
class SeriesGroup:
    """One named series; ``label`` doubles as the glyph path for value series."""

    label: Any
    role: Role
    values: list[Any]


@dataclass(frozen=True)
class ItemCount:
    source: CountSource
    value: int = 0

    @classmethod
    def from_labels(cls, n: int) -> ItemCount:
        return cls(CountSource.FROM_LABELS, n)

    @classmethod
    def from_totals(cls, n: int) -> ItemCount:
        return cls(CountSource.FROM_TOTALS, n)

    @classmethod
    def unavailable(cls) -> ItemCount:
        return cls(CountSource.UNAVAILABLE, 0)

    @property
    def available(self) -> bool:
        return self.source is not CountSource.UNAVAILABLE


@dataclass
class AggregatedResult:
    count: ItemCount
    labels: list[Any] = field(default_factory=list)
    identities: list[Any] = field(default_factory=list)
    objects: list[Any] = field(default_factory=list)
    totals: list[float] = field(default_factory=list)
    values: list[float] = field(default_factory=list)
    paths: list[str | None] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def item_count(self) -> int:
        return self.count.value

    @classmethod
    def empty(cls, diagnostics: list[Diagnostic] | None = None) -> AggregatedResult:
        return cls(count=ItemCount.unavailable(), diagnostics=list(diagnostics or []))
