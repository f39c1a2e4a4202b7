from __future__ import annotations

from .base import CategoricalReader, CategoryColumn
from .table import TableReader, TableSeries, load_table

__all__ = ["CategoricalReader", "CategoryColumn", "TableReader", "TableSeries", "load_table"]
