"""Grid layout search for waffle tiles.

Every tile keeps a fixed 600:800 (width:height) aspect ratio. For ``count``
items the optimizer tries every ``rows x columns`` grid with enough cells and
keeps the one whose tiles cover the most total area.
"""

from __future__ import annotations

import numpy as np

from ..core.logging_config import get_logger
from ..core.models import LayoutPlan, Placement, TileSize, Viewport

logger = get_logger(__name__)

TILE_RATIO_WIDTH = 600
TILE_RATIO_HEIGHT = 800


def fit_tile(width: float, height: float) -> TileSize:
    """Largest 600:800 tile that fits inside a ``width x height`` cell."""
    if width * TILE_RATIO_HEIGHT / TILE_RATIO_WIDTH <= height:
        return TileSize(width=width, height=width * TILE_RATIO_HEIGHT / TILE_RATIO_WIDTH)
    return TileSize(width=height * TILE_RATIO_WIDTH / TILE_RATIO_HEIGHT, height=height)


def row_areas(viewport: Viewport, count: int, rows: int) -> np.ndarray:
    """Total tile area for ``rows`` rows and every column count from 1 to ``count``.

    Entry ``[c - 1]`` holds the area for ``c`` columns; grids with fewer than
    ``count`` cells hold ``-inf``.
    """
    columns = np.arange(1, count + 1, dtype=float)
    cell_width = viewport.width / columns
    cell_height = viewport.height / rows

    width_bound = cell_width * TILE_RATIO_HEIGHT / TILE_RATIO_WIDTH <= cell_height
    tile_width = np.where(width_bound, cell_width, cell_height * TILE_RATIO_WIDTH / TILE_RATIO_HEIGHT)
    tile_height = np.where(width_bound, cell_width * TILE_RATIO_HEIGHT / TILE_RATIO_WIDTH, cell_height)

    areas = tile_width * tile_height * count
    return np.where(rows * columns >= count, areas, -np.inf)


def best_layout(viewport: Viewport, count: int) -> LayoutPlan:
    """Pick the grid that maximizes total tile area.

    Ties go to the first grid in (rows, columns) order, smaller rows first.
    When every grid has zero area the first admissible one (a single row)
    is returned, so each item still gets a placement.

    Raises:
        ValueError: If ``count`` is negative
    """
    if count < 0:
        raise ValueError(f"Item count must be non-negative, got {count}")
    if count == 0:
        return LayoutPlan(rows=0, columns=0, tile_width=0.0, tile_height=0.0, total_area=0.0, viewport=viewport)

    best_area = -np.inf
    rows = columns = 0
    for r in range(1, count + 1):
        areas = row_areas(viewport, count, r)
        # argmax returns the first maximum; later rows must be strictly larger.
        c = int(np.argmax(areas))
        if rows == 0 or areas[c] > best_area:
            best_area, rows, columns = areas[c], r, c + 1

    tile = fit_tile(viewport.width / columns, viewport.height / rows)
    plan = LayoutPlan(
        rows=rows,
        columns=columns,
        tile_width=tile.width,
        tile_height=tile.height,
        total_area=tile.width * tile.height * count,
        viewport=viewport,
    )
    logger.debug(
        "Chose waffle grid",
        extra={"count": count, "rows": rows, "columns": columns, "total_area": plan.total_area},
    )
    return plan


def tile_placement(plan: LayoutPlan, index: int) -> Placement:
    """Top-left corner of item ``index`` in a grid centered in the viewport.

    Raises:
        IndexError: If ``index`` is outside the plan's cells
    """
    if index < 0 or index >= plan.capacity:
        raise IndexError(f"Tile index {index} outside a {plan.rows}x{plan.columns} grid")

    global_x = plan.viewport.width / 2 - plan.tile_width * plan.columns / 2
    global_y = plan.viewport.height / 2 - plan.tile_height * plan.rows / 2
    return Placement(
        index=index,
        x=global_x + plan.tile_width * (index % plan.columns),
        y=global_y + plan.tile_height * (index // plan.columns),
        width=plan.tile_width,
        height=plan.tile_height,
    )


def place_items(plan: LayoutPlan, count: int) -> list[Placement]:
    return [tile_placement(plan, i) for i in range(count)]
