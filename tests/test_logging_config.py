"""Tests for logging setup."""
from __future__ import annotations

import json
import logging
import logging.handlers
from pathlib import Path

import pytest

from waffle_chart.core.logging_config import LOGGING_CONFIG, get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    package_logger = logging.getLogger("waffle_chart")
    for handler in list(package_logger.handlers):
        handler.close()
    setup_logging()


def test_levels_applied() -> None:
    setup_logging(log_level="warning")

    package_logger = logging.getLogger("waffle_chart")
    assert package_logger.level == logging.WARNING
    assert package_logger.propagate is False


def test_config_template_not_mutated(tmp_path: Path) -> None:
    setup_logging(json_output=True, log_level="DEBUG", log_file=tmp_path / "waffle.log")

    assert LOGGING_CONFIG["handlers"]["console"]["formatter"] == "console"
    assert "json_file" not in LOGGING_CONFIG["handlers"]
    assert LOGGING_CONFIG["loggers"]["waffle_chart"]["handlers"] == ["console"]


def test_log_file_receives_json(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "waffle.log"
    setup_logging(log_file=log_file)

    get_logger("waffle_chart.tests").info("Layout chosen", extra={"rows": 2, "columns": 3})
    for handler in logging.getLogger("waffle_chart").handlers:
        handler.flush()

    assert any(
        isinstance(h, logging.handlers.RotatingFileHandler) for h in logging.getLogger("waffle_chart").handlers
    )
    record = json.loads(log_file.read_text(encoding="utf-8").strip().splitlines()[-1])
    assert record["message"] == "Layout chosen"
    assert record["rows"] == 2
    assert record["name"] == "waffle_chart.tests"
