"""In-memory categorical reader and dataset file loaders.

A dataset is a list of category labels plus any number of named series. Each
series carries up to three columns, one per role (values, min value, max
value). The series name doubles as the glyph path of its values.

YAML layout::

    categories: [North, South]
    series:
      - name: "M0 0 L10 0 L5 8 Z"
        values: [120, 80]
        max_value: [200, 200]

CSV layout: a ``category`` column, plus one column per series role with a
header of ``<role>`` or ``<role>|<series name>``::

    category,values|M0 0 L10 0 L5 8 Z,max_value
    North,120,200
"""

from __future__ import annotations

import csv
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from ..core.enums import Role
from ..core.logging_config import get_logger
from .base import CategoricalReader, CategoryColumn

logger = get_logger(__name__)

COLUMN_ROLES = (Role.VALUES, Role.MIN_VALUE, Role.MAX_VALUE)


@dataclass
class TableSeries:
    name: Any
    columns: dict[Role, list[Any]] = field(default_factory=dict)


class TableReader(CategoricalReader):
    def __init__(
        self,
        categories: list[Any] | None = None,
        series: list[TableSeries] | None = None,
        identities: list[Any] | None = None,
        objects: list[Any] | None = None,
    ):
        self.categories = list(categories) if categories is not None else None
        self.series = list(series or [])
        # Category values double as identities when none are given.
        if identities is None and self.categories is not None:
            identities = list(self.categories)
        self.identities = identities
        self.objects = objects

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TableReader:
        if not isinstance(data, dict):
            raise ValueError("Dataset must be a mapping")

        series: list[TableSeries] = []
        for entry in data.get("series") or []:
            if not isinstance(entry, dict):
                raise ValueError(f"Series entries must be mappings, got {type(entry).__name__}")
            ts = TableSeries(name=entry.get("name"))
            for key, column in entry.items():
                if key == "name":
                    continue
                role = Role.from_name(key)
                if role not in COLUMN_ROLES:
                    raise ValueError(f"Role {role.value} cannot hold series values")
                ts.columns[role] = list(column or [])
            series.append(ts)

        return cls(
            categories=data.get("categories"),
            series=series,
            identities=data.get("identities"),
            objects=data.get("objects"),
        )

    def has_categories(self) -> bool:
        return self.categories is not None

    def get_category_count(self) -> int:
        return len(self.categories) if self.categories is not None else 0

    def get_category_column(self, role: Role) -> CategoryColumn | None:
        if role is not Role.CATEGORY or self.categories is None:
            return None
        return CategoryColumn(values=self.categories, identities=self.identities, objects=self.objects)

    def has_values(self, role: Role) -> bool:
        return any(role in s.columns for s in self.series)

    def get_values(self, role: Role, series_index: int = 0) -> list[Any] | None:
        return self.series[series_index].columns.get(role)

    def get_series_count(self) -> int:
        return len(self.series)

    def get_series_name(self, series_index: int) -> Any:
        return self.series[series_index].name


def load_table(path: Path | str) -> TableReader:
    """Load a dataset file into a TableReader.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the suffix is unsupported or the content is malformed
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Dataset not found: {path}")

    suffix = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        with path.open("r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML dataset {path}: {e}") from e
        reader = TableReader.from_dict(data)
    elif suffix == ".csv":
        reader = _load_csv(path)
    else:
        raise ValueError(f"Unsupported dataset format: {suffix or path.name}")

    logger.debug(
        "Loaded dataset",
        extra={"path": str(path), "categories": reader.get_category_count(), "series": reader.get_series_count()},
    )
    return reader


def _load_csv(path: Path) -> TableReader:
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        if not reader.fieldnames:
            raise ValueError("CSV file is empty or has no header")
        headers = list(reader.fieldnames)
        rows = list(reader)

    category_header: str | None = None
    series: dict[str | None, TableSeries] = {}
    for header in headers:
        role_name, _, series_name = header.partition("|")
        role = Role.from_name(role_name.strip())
        if role is Role.CATEGORY:
            category_header = header
            continue
        if role not in COLUMN_ROLES:
            raise ValueError(f"Column {header!r}: role {role.value} cannot hold series values")

        name = series_name.strip() or None
        ts = series.setdefault(name, TableSeries(name=name))
        # Header is line 1.
        ts.columns[role] = [
            _parse_cell(row.get(header), header, line) for line, row in enumerate(rows, start=2)
        ]

    categories = [row.get(category_header) for row in rows] if category_header else None
    return TableReader(categories=categories, series=list(series.values()))


def _parse_cell(raw: str | None, header: str, line: int) -> float | None:
    if raw is None or not raw.strip():
        return None
    value = CategoricalReader._safe_float(raw.strip())
    if value is None:
        raise ValueError(f"Non-numeric value {raw!r} in column {header!r} at line {line}")
    return value
