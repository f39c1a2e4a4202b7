from __future__ import annotations

from .glyphs import caption_layout, fill_pattern, glyph_layout, glyph_positions
from .optimizer import best_layout, fit_tile, place_items, tile_placement

__all__ = [
    "best_layout",
    "caption_layout",
    "fill_pattern",
    "fit_tile",
    "glyph_layout",
    "glyph_positions",
    "place_items",
    "tile_placement",
]
