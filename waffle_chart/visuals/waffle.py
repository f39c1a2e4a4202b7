"""Per-update waffle chart view model."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..adapters.base import CategoricalReader
from ..aggregate.engine import aggregate_reader
from ..core.config import Settings
from ..core.errors import Diagnostic
from ..core.logging_config import get_logger
from ..core.models import LayoutPlan, Viewport
from ..layout.glyphs import CaptionLayout, GlyphLayout, caption_layout, fill_pattern, glyph_layout
from ..layout.optimizer import best_layout, place_items

logger = get_logger(__name__)

BLANK_TEXT = "(Blank)"


@dataclass(frozen=True)
class RenderState:
    """What the rendering layer built last time; owned by the caller."""

    item_count: int = 0
    paths: tuple[str | None, ...] = ()


@dataclass(frozen=True)
class TileAssignment:
    index: int
    x: float
    y: float
    width: float
    height: float
    value: float
    text: str
    percentage_text: str
    identity: Any
    color: str
    background_color: str
    path: str | None
    mask: list[list[bool]]
    glyphs: GlyphLayout
    caption: CaptionLayout


@dataclass
class ChartUpdate:
    plan: LayoutPlan
    tiles: list[TileAssignment]
    rebuild: bool
    state: RenderState
    diagnostics: list[Diagnostic] = field(default_factory=list)


def resolve_color(objects: Any, default_color: str) -> str:
    """Per-category fill from ``objects['dataPoint']['fill']['solid']['color']``."""
    try:
        color = objects["dataPoint"]["fill"]["solid"]["color"]
    except (KeyError, TypeError):
        return default_color
    return color or default_color


class WaffleChart:
    """Turns one data snapshot and viewport into positioned waffle tiles.

    Holds no state between calls: the previous ``RenderState`` comes in and
    the new one goes out with the result.
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or Settings()

    def update(
        self,
        reader: CategoricalReader,
        viewport: Viewport,
        state: RenderState | None = None,
        default_color: str | None = None,
    ) -> ChartUpdate:
        """Aggregate, lay out and assign every tile.

        Args:
            reader: Source of categories and series
            viewport: Available drawing area
            state: State returned by the previous update, if any
            default_color: Overrides the configured default fill colour

        Returns:
            ChartUpdate whose ``rebuild`` flag tells the renderer to recreate
            its tile elements (item count or glyph paths changed)
        """
        result = aggregate_reader(reader, overflow=self.settings.overflow_policy)
        count = result.item_count
        paths = tuple(result.paths)
        color = default_color or self.settings.default_color

        new_state = RenderState(item_count=count, paths=paths)
        rebuild = state is None or state != new_state

        plan = best_layout(viewport, count)
        tiles = []
        for placement in place_items(plan, count):
            i = placement.index
            value = result.values[i] or 0
            path = result.paths[i]
            tiles.append(
                TileAssignment(
                    index=i,
                    x=placement.x,
                    y=placement.y,
                    width=placement.width,
                    height=placement.height,
                    value=value,
                    text=str(result.labels[i]) if result.labels[i] else BLANK_TEXT,
                    percentage_text=f"{value}%",
                    identity=result.identities[i],
                    color=resolve_color(result.objects[i], color),
                    background_color=self.settings.background_color,
                    path=path,
                    mask=fill_pattern(value),
                    glyphs=glyph_layout(placement.width, placement.height, path),
                    caption=caption_layout(placement.width, placement.height),
                )
            )

        logger.debug(
            "Waffle chart updated",
            extra={"count": count, "rows": plan.rows, "columns": plan.columns, "rebuild": rebuild},
        )
        return ChartUpdate(
            plan=plan,
            tiles=tiles,
            rebuild=rebuild,
            state=new_state,
            diagnostics=result.diagnostics,
        )
