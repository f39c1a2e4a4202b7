from __future__ import annotations

from dataclasses import asdict
from pathlib import Path
from typing import Any

import typer

from .. import __version__
from ..adapters.table import TableReader, load_table
from ..aggregate.engine import aggregate_reader
from ..core.config import get_settings
from ..core.enums import OverflowPolicy
from ..core.logging_config import get_logger, setup_logging
from ..core.models import LayoutPlan, Viewport
from ..layout.glyphs import fill_pattern
from ..layout.optimizer import best_layout, place_items
from ..visuals.waffle import TileAssignment, WaffleChart
from . import output as cli_output

app = typer.Typer(help="Waffle chart layout CLI")

logger = get_logger(__name__)


@app.callback()
def callback(
    json_logs: bool = typer.Option(
        False, "--json-logs", help="Output logs in JSON format (default from WAFFLE_JSON_LOGS)"
    ),
    log_level: str | None = typer.Option(
        None, "--log-level", help="Logging level: DEBUG, INFO, WARNING, ERROR (default from WAFFLE_LOG_LEVEL)"
    ),
) -> None:
    """Configure global CLI options."""
    settings = get_settings()
    json_logs = json_logs or settings.json_logs
    log_level = log_level or settings.log_level
    setup_logging(json_output=json_logs, log_level=log_level)
    logger.debug("CLI initialized", extra={"json_logs": json_logs, "log_level": log_level})


@app.command()
def version() -> None:
    """Print version."""
    typer.echo(__version__)


@app.command("layout")
def layout_cmd(
    width: float = typer.Option(..., min=0.0, help="Viewport width"),
    height: float = typer.Option(..., min=0.0, help="Viewport height"),
    count: int = typer.Option(..., min=0, help="Number of tiles to place"),
    json_output: bool = typer.Option(False, "--json", help="Print JSON instead of text"),
) -> None:
    """Find the best rows x columns grid for COUNT tiles in a viewport."""
    plan = best_layout(Viewport(width=width, height=height), count)
    placements = place_items(plan, count)

    if json_output:
        cli_output.as_json({"plan": _plan_dict(plan), "placements": [asdict(p) for p in placements]})
        return

    cli_output.data(f"Layout {plan.rows}x{plan.columns} for {count} tiles")
    typer.echo(f"Tile size: {plan.tile_width:.2f} x {plan.tile_height:.2f}")
    for p in placements:
        typer.echo(f"  #{p.index}: x={p.x:.2f} y={p.y:.2f}")


@app.command("aggregate")
def aggregate_cmd(
    dataset: Path = typer.Argument(..., help="YAML or CSV dataset"),
    overflow: OverflowPolicy | None = typer.Option(  # noqa: B008
        None,
        case_sensitive=False,
        help="Out-of-range percentages: preserve|clamp (default from WAFFLE_OVERFLOW_POLICY)",
    ),
    json_output: bool = typer.Option(False, "--json", help="Print JSON instead of text"),
) -> None:
    """Aggregate a dataset into per-category percentages."""
    settings = get_settings()
    reader = _load_dataset(dataset)
    result = aggregate_reader(reader, overflow=overflow or settings.overflow_policy)

    if json_output:
        cli_output.as_json(
            {
                "count": result.item_count,
                "count_source": result.count.source.value,
                "items": [
                    {"label": label, "total": total, "value": value, "path": path}
                    for label, total, value, path in zip(
                        result.labels, result.totals, result.values, result.paths, strict=True
                    )
                ],
                "diagnostics": [asdict(d) for d in result.diagnostics],
            }
        )
        return

    for d in result.diagnostics:
        cli_output.warning(f"{d.kind}: {d.message}")
    if not result.count.available:
        cli_output.error("No categories or values found in dataset")
        raise typer.Exit(code=1)

    cli_output.data(f"{result.item_count} categories ({result.count.source.value})")
    for label, total, value in zip(result.labels, result.totals, result.values, strict=True):
        typer.echo(f"  {label}: {value}% (total {total})")


@app.command("plan")
def plan_cmd(
    dataset: Path = typer.Argument(..., help="YAML or CSV dataset"),
    width: float = typer.Option(..., min=0.0, help="Viewport width"),
    height: float = typer.Option(..., min=0.0, help="Viewport height"),
    json_output: bool = typer.Option(False, "--json", help="Print JSON instead of text"),
) -> None:
    """Aggregate a dataset and place one tile per category."""
    settings = get_settings()
    reader = _load_dataset(dataset)
    update = WaffleChart(settings).update(reader, Viewport(width=width, height=height))

    if json_output:
        cli_output.as_json(
            {
                "plan": _plan_dict(update.plan),
                "tiles": [_tile_dict(t) for t in update.tiles],
                "diagnostics": [asdict(d) for d in update.diagnostics],
            }
        )
        return

    for d in update.diagnostics:
        cli_output.warning(f"{d.kind}: {d.message}")
    cli_output.data(f"Layout {update.plan.rows}x{update.plan.columns}, {len(update.tiles)} tiles")
    for t in update.tiles:
        glyph = t.glyphs.shape.value
        typer.echo(f"  {t.text}: {t.percentage_text} at ({t.x:.1f}, {t.y:.1f}) {t.color} {glyph}")


@app.command("mask")
def mask_cmd(percent: float = typer.Argument(..., help="Percentage to visualize")) -> None:
    """Print the 10x10 glyph fill mask for PERCENT."""
    for line in cli_output.mask_lines(fill_pattern(percent)):
        typer.echo(line)


def _load_dataset(path: Path) -> TableReader:
    try:
        return load_table(path)
    except (FileNotFoundError, ValueError) as e:
        cli_output.error(str(e))
        raise typer.Exit(code=1) from e


def _plan_dict(plan: LayoutPlan) -> dict[str, Any]:
    return {
        "rows": plan.rows,
        "columns": plan.columns,
        "tile_width": plan.tile_width,
        "tile_height": plan.tile_height,
        "total_area": plan.total_area,
    }


def _tile_dict(tile: TileAssignment) -> dict[str, Any]:
    return {
        "index": tile.index,
        "x": tile.x,
        "y": tile.y,
        "width": tile.width,
        "height": tile.height,
        "value": tile.value,
        "text": tile.text,
        "identity": tile.identity,
        "color": tile.color,
        "path": tile.path,
        "glyph": tile.glyphs.shape.value,
        "filled": sum(cell for row in tile.mask for cell in row),
    }


if __name__ == "__main__":
    app()
