from __future__ import annotations

from .engine import Aggregator, aggregate, aggregate_reader

__all__ = ["Aggregator", "aggregate", "aggregate_reader"]
