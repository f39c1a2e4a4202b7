"""Tests for CLI output formatting utilities."""

from __future__ import annotations

import json

from waffle_chart.cli import output
from waffle_chart.layout.glyphs import fill_pattern


def test_success_with_prefix(capsys) -> None:
    """Success message includes checkmark emoji by default."""
    output.success("Chart planned")
    captured = capsys.readouterr()
    assert "✅ Chart planned" in captured.out


def test_success_without_prefix(capsys) -> None:
    output.success("Chart planned", prefix=False)
    captured = capsys.readouterr()
    assert "✅" not in captured.out
    assert "Chart planned" in captured.out


def test_error_writes_to_stderr(capsys) -> None:
    """Error message writes to stderr by default."""
    output.error("Dataset not found")
    captured = capsys.readouterr()
    assert "❌ Dataset not found" in captured.err
    assert captured.out == ""


def test_error_to_stdout(capsys) -> None:
    output.error("Dataset not found", err=False)
    captured = capsys.readouterr()
    assert "❌ Dataset not found" in captured.out


def test_warning_with_prefix(capsys) -> None:
    output.warning("malformed_bounds: max equals min")
    captured = capsys.readouterr()
    assert "⚠️" in captured.out
    assert "malformed_bounds" in captured.out


def test_data_without_prefix(capsys) -> None:
    output.data("Layout 1x3", prefix=False)
    captured = capsys.readouterr()
    assert "📊" not in captured.out
    assert "Layout 1x3" in captured.out


def test_as_json_serializes_unknown_types(capsys) -> None:
    output.as_json({"path": output.FILLED_GLYPH, "when": object})
    payload = json.loads(capsys.readouterr().out)
    assert payload["path"] == "■"
    assert payload["when"].startswith("<class")


def test_mask_lines() -> None:
    lines = output.mask_lines(fill_pattern(15))

    assert len(lines) == 10
    assert lines[-1] == " ".join(["■"] * 10)
    assert lines[-2] == " ".join(["■"] * 5 + ["□"] * 5)
    assert lines[0] == " ".join(["□"] * 10)
