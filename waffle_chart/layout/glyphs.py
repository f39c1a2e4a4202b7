"""Glyph grid inside a single waffle tile.

A tile holds a 10x10 grid of glyphs, one per percent, filled bottom row first.
Below the glyph square sits a caption band with the percentage and the
category label.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from svgpathtools import parse_path

from ..core.enums import GlyphShape
from ..core.logging_config import get_logger

logger = get_logger(__name__)

GLYPH_GRID = 10
GLYPH_MARGIN = 20
GLYPH_PADDING = 3


@dataclass(frozen=True)
class GlyphLayout:
    shape: GlyphShape
    chart_side: float
    cell_side: float
    origin_x: float = GLYPH_MARGIN
    origin_y: float = GLYPH_MARGIN
    radius: float | None = None
    scale: float | None = None
    path: str | None = None


@dataclass(frozen=True)
class GlyphPosition:
    row: int
    column: int
    x: float
    y: float
    filled: bool


@dataclass(frozen=True)
class CaptionLayout:
    top: float
    font_size: float
    percentage_y: float
    description_y: float
    x: float


def fill_pattern(percent: float | None) -> list[list[bool]]:
    """Glyph mask for ``percent``, indexed ``[row][column]`` with row 0 on top.

    Glyphs are visited from the bottom row up, left to right, and each one is
    filled while the decrementing counter is still positive. Values above 100
    fill everything; zero, negative and NaN fill nothing.
    """
    mask = [[False] * GLYPH_GRID for _ in range(GLYPH_GRID)]
    remaining = percent if percent is not None else 0
    for i in range(GLYPH_GRID - 1, -1, -1):
        for j in range(GLYPH_GRID):
            mask[i][j] = remaining > 0
            remaining -= 1
    return mask


@lru_cache(maxsize=256)
def path_bbox(d: str) -> tuple[float, float] | None:
    """Width and height of SVG path data, or None if it cannot be measured."""
    try:
        path = parse_path(d)
        if len(path) == 0:
            return None
        xmin, xmax, ymin, ymax = path.bbox()
    except (ValueError, IndexError, TypeError) as e:
        logger.debug("Cannot measure glyph path", extra={"path": d, "error": str(e)})
        return None
    return xmax - xmin, ymax - ymin


def glyph_layout(tile_width: float, tile_height: float, path: str | None = None) -> GlyphLayout:
    side = min(tile_width, tile_height)
    chart_side = side - GLYPH_MARGIN * 2 if side >= GLYPH_MARGIN * 2 else 0
    cell_side = chart_side / GLYPH_GRID

    bbox = path_bbox(path) if path else None
    if bbox is not None and bbox[0] > 0 and bbox[1] > 0:
        # Scale by the larger dimension so the path stays inside its cell.
        scale = (cell_side - GLYPH_PADDING) / max(bbox) if cell_side >= GLYPH_PADDING else 0
        return GlyphLayout(
            shape=GlyphShape.PATH,
            chart_side=chart_side,
            cell_side=cell_side,
            scale=scale,
            path=path,
        )

    return GlyphLayout(
        shape=GlyphShape.CIRCLE,
        chart_side=chart_side,
        cell_side=cell_side,
        radius=cell_side / 2,
    )


def glyph_positions(layout: GlyphLayout, mask: list[list[bool]] | None = None) -> list[GlyphPosition]:
    """Glyph coordinates relative to the glyph square's origin.

    Circles are positioned by their centre; paths by the translation applied
    before scaling.
    """
    offset = layout.radius if layout.shape is GlyphShape.CIRCLE else 0
    positions = []
    for i in range(GLYPH_GRID):
        for j in range(GLYPH_GRID):
            positions.append(
                GlyphPosition(
                    row=i,
                    column=j,
                    x=offset + layout.cell_side * j,
                    y=offset + layout.cell_side * i,
                    filled=bool(mask[i][j]) if mask is not None else False,
                )
            )
    return positions


def caption_layout(tile_width: float, tile_height: float) -> CaptionLayout:
    top = min(tile_width, tile_height)
    band = max(tile_width, tile_height) - top
    # Two text lines; a sixth of each line's height is margin above and below.
    margin = band / 2 / 6
    font_size = band / 2 - margin * 2
    return CaptionLayout(
        top=top,
        font_size=font_size,
        percentage_y=font_size / 2 + margin,
        description_y=band / 2 + font_size / 2 + margin,
        x=tile_width / 2,
    )
