"""Waffle chart view model.

This package is the seam between the data/layout core and whatever draws the
chart. It never touches a drawing API: it hands the renderer positioned tiles
with everything needed to draw them.

Key Capabilities:
    1. One update call per data snapshot (aggregate, lay out, assign)
    2. Per-tile value, caption text, colour, glyph path and fill mask
    3. Explicit render state so the renderer knows when to rebuild elements

Main Components:
    - WaffleChart: builds a ChartUpdate from a reader and a viewport
    - RenderState: previous item count and glyph paths, owned by the caller

Usage:
    from waffle_chart.adapters import load_table
    from waffle_chart.core.models import Viewport
    from waffle_chart.visuals import WaffleChart

    chart = WaffleChart()
    update = chart.update(load_table("sales.yaml"), Viewport(1000, 500))
    for tile in update.tiles:
        draw(tile)
    next_update = chart.update(reader, viewport, state=update.state)

Architecture Notes:
    - Bad data never raises here; it yields zero tiles plus diagnostics
    - Updates are synchronous and share nothing between calls
"""

from __future__ import annotations

from .waffle import ChartUpdate, RenderState, TileAssignment, WaffleChart, resolve_color

__all__ = ["ChartUpdate", "RenderState", "TileAssignment", "WaffleChart", "resolve_color"]
