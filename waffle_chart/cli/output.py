"""Console output helpers for the waffle-chart CLI.

Console output is for the person running a command; structured logging
(``get_logger``) is for diagnosing the library. Commands use both.
"""

from __future__ import annotations

import json
from typing import Any

import typer

FILLED_GLYPH = "■"
EMPTY_GLYPH = "□"


def success(message: str, *, prefix: bool = True) -> None:
    formatted = f"✅ {message}" if prefix else message
    typer.secho(formatted, fg=typer.colors.GREEN)


def error(message: str, *, prefix: bool = True, err: bool = True) -> None:
    """Display an error message in red, on stderr unless ``err`` is False.

    Example:
        error("Dataset not found: sales.yaml")
        # Output: ❌ Dataset not found: sales.yaml
    """
    formatted = f"❌ {message}" if prefix else message
    typer.secho(formatted, fg=typer.colors.RED, err=err)


def warning(message: str, *, prefix: bool = True) -> None:
    formatted = f"⚠️  {message}" if prefix else message
    typer.secho(formatted, fg=typer.colors.YELLOW)


def data(message: str, *, prefix: bool = True) -> None:
    """Display a section heading for chart data in cyan.

    Example:
        data("Layout 2x3")
        # Output: 📊 Layout 2x3
    """
    formatted = f"📊 {message}" if prefix else message
    typer.secho(formatted, fg=typer.colors.CYAN)


def as_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2, default=str))


def mask_lines(mask: list[list[bool]]) -> list[str]:
    """Render a glyph mask as text rows, top row first."""
    return [" ".join(FILLED_GLYPH if cell else EMPTY_GLYPH for cell in row) for row in mask]
