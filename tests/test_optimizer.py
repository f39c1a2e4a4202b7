"""Tests for the waffle grid layout search."""
from __future__ import annotations

import math

import numpy as np
import pytest

from waffle_chart.core.models import Viewport
from waffle_chart.layout.optimizer import (
    best_layout,
    fit_tile,
    place_items,
    row_areas,
    tile_placement,
)


def brute_force(viewport: Viewport, count: int) -> tuple[int, int]:
    """Plain nested-loop search: strictly greater area wins, first found keeps ties."""
    best: tuple[float, int, int] | None = None
    for rows in range(1, count + 1):
        for columns in range(1, count + 1):
            if rows * columns < count:
                continue
            tile = fit_tile(viewport.width / columns, viewport.height / rows)
            area = tile.width * tile.height * count
            if best is None or area > best[0]:
                best = (area, rows, columns)
    assert best is not None
    return best[1], best[2]


class TestFitTile:
    def test_exact_fit(self) -> None:
        tile = fit_tile(600, 800)
        assert (tile.width, tile.height) == (600, 800)

    def test_width_bound(self) -> None:
        tile = fit_tile(300, 800)
        assert tile.width == 300
        assert tile.height == pytest.approx(400)

    def test_height_bound(self) -> None:
        tile = fit_tile(600, 400)
        assert tile.width == pytest.approx(300)
        assert tile.height == 400

    @pytest.mark.parametrize(
        "width,height",
        [(1, 1), (10, 1000), (1000, 10), (333.3, 250), (75, 100), (0.5, 0.2)],
    )
    def test_tile_fits_cell_with_fixed_ratio(self, width: float, height: float) -> None:
        tile = fit_tile(width, height)

        assert tile.width <= width + 1e-9
        assert tile.height <= height + 1e-9
        assert tile.width / tile.height == pytest.approx(600 / 800)


class TestBestLayout:
    def test_five_items_in_wide_viewport(self) -> None:
        viewport = Viewport(width=1000, height=500)
        plan = best_layout(viewport, 5)

        assert (plan.rows, plan.columns) == brute_force(viewport, 5)
        assert (plan.rows, plan.columns) == (1, 5)
        assert plan.tile_width == pytest.approx(200)
        assert plan.tile_height == pytest.approx(800 / 3)
        assert plan.total_area == pytest.approx(200 * 800 / 3 * 5)

    def test_three_items_prefer_square_grid(self) -> None:
        plan = best_layout(Viewport(width=600, height=800), 3)
        assert (plan.rows, plan.columns) == (2, 2)

    def test_equal_area_keeps_fewer_rows(self) -> None:
        """1x4 and 2x2 give identical tiles in 1200x800; 1x4 is found first."""
        plan = best_layout(Viewport(width=1200, height=800), 4)

        assert (plan.rows, plan.columns) == (1, 4)
        assert (plan.tile_width, plan.tile_height) == (300, 400)

    def test_single_item_fills_matching_viewport(self) -> None:
        plan = best_layout(Viewport(width=600, height=800), 1)
        assert (plan.rows, plan.columns, plan.tile_width, plan.tile_height) == (1, 1, 600, 800)

    @pytest.mark.parametrize("count", [1, 2, 3, 5, 7, 12, 17, 30])
    @pytest.mark.parametrize(
        "viewport",
        [Viewport(1000, 500), Viewport(300, 900), Viewport(640, 480), Viewport(1, 1)],
    )
    def test_matches_brute_force_and_has_capacity(self, viewport: Viewport, count: int) -> None:
        plan = best_layout(viewport, count)

        assert plan.rows * plan.columns >= count
        assert (plan.rows, plan.columns) == brute_force(viewport, count)

    def test_deterministic(self) -> None:
        viewport = Viewport(width=813, height=377)
        plans = {(p.rows, p.columns) for p in (best_layout(viewport, 9) for _ in range(5))}
        assert len(plans) == 1

    def test_zero_items_yield_empty_plan(self) -> None:
        plan = best_layout(Viewport(width=100, height=100), 0)

        assert plan.is_empty
        assert (plan.rows, plan.columns, plan.tile_width, plan.tile_height) == (0, 0, 0.0, 0.0)
        assert place_items(plan, 0) == []

    def test_zero_area_viewport_keeps_every_item(self) -> None:
        plan = best_layout(Viewport(width=0, height=0), 3)

        assert (plan.rows, plan.columns) == (1, 3)
        assert plan.total_area == 0
        placements = place_items(plan, 3)
        assert [(p.x, p.y, p.width, p.height) for p in placements] == [(0, 0, 0, 0)] * 3

    def test_negative_count_rejected(self) -> None:
        with pytest.raises(ValueError):
            best_layout(Viewport(width=100, height=100), -1)


def test_row_areas_mark_small_grids() -> None:
    viewport = Viewport(width=1000, height=500)
    single_row = row_areas(viewport, 5, 1)

    assert single_row.shape == (5,)
    assert single_row[3] == -np.inf  # 1x4 cannot hold 5 items
    assert math.isfinite(single_row[4])
    assert row_areas(viewport, 5, 2)[2] == pytest.approx(187.5 * 250 * 5)


def test_large_count_uses_single_row_strip() -> None:
    """A long strip viewport puts 2000 items in one row."""
    plan = best_layout(Viewport(width=2000 * 600, height=800), 2000)

    assert (plan.rows, plan.columns) == (1, 2000)
    assert (plan.tile_width, plan.tile_height) == (600, 800)


class TestPlacement:
    def test_two_items_side_by_side(self) -> None:
        plan = best_layout(Viewport(width=1200, height=800), 2)
        placements = place_items(plan, 2)

        assert [(p.x, p.y) for p in placements] == [(0, 0), (600, 0)]

    def test_grid_is_centered(self) -> None:
        plan = best_layout(Viewport(width=1000, height=500), 5)
        placements = place_items(plan, 5)

        assert [p.x for p in placements] == pytest.approx([0, 200, 400, 600, 800])
        assert all(p.y == pytest.approx(250 - 400 / 3) for p in placements)

    def test_row_major_wrapping(self) -> None:
        plan = best_layout(Viewport(width=600, height=800), 3)
        third = tile_placement(plan, 2)
        first = tile_placement(plan, 0)

        assert third.x == pytest.approx(first.x)
        assert third.y == pytest.approx(first.y + plan.tile_height)

    def test_centering_offsets(self) -> None:
        plan = best_layout(Viewport(width=600, height=800), 3)
        first = tile_placement(plan, 0)

        assert first.x == pytest.approx(600 / 2 - plan.tile_width * plan.columns / 2)
        assert first.y == pytest.approx(800 / 2 - plan.tile_height * plan.rows / 2)

    @pytest.mark.parametrize("index", [-1, 4])
    def test_index_outside_grid(self, index: int) -> None:
        plan = best_layout(Viewport(width=600, height=800), 3)
        with pytest.raises(IndexError):
            tile_placement(plan, index)

    def test_empty_plan_has_no_cells(self) -> None:
        plan = best_layout(Viewport(width=600, height=800), 0)
        with pytest.raises(IndexError):
            tile_placement(plan, 0)
