"""Base reader interface over a host's categorical data."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from ..core.enums import Role


@dataclass
class CategoryColumn:
    """Category values with their identities and per-category style objects.

    ``objects`` belong to the rendering layer and pass through untouched.
    """

    values: list[Any]
    identities: list[Any] | None = None
    objects: list[Any] | None = None


class CategoricalReader(ABC):
    """Abstract read access to categories and grouped series.

    Roles are resolved to ``Role`` members before they reach a reader, so
    implementations never look roles up by display name.
    """

    @abstractmethod
    def has_categories(self) -> bool:
        pass

    @abstractmethod
    def get_category_count(self) -> int:
        pass

    @abstractmethod
    def get_category_column(self, role: Role) -> CategoryColumn | None:
        pass

    def get_category_values(self, role: Role) -> list[Any] | None:
        column = self.get_category_column(role)
        return column.values if column is not None else None

    @abstractmethod
    def has_values(self, role: Role) -> bool:
        pass

    @abstractmethod
    def get_values(self, role: Role, series_index: int = 0) -> list[Any] | None:
        """Return one series' values for ``role``, or None if that series lacks it.

        Raises:
            IndexError: If ``series_index`` is out of range
        """
        pass

    @abstractmethod
    def get_series_count(self) -> int:
        pass

    @abstractmethod
    def get_series_name(self, series_index: int) -> Any:
        pass

    @staticmethod
    def _safe_float(value: Any, default: float | None = None) -> float | None:
        """Safely convert value to float, returning default on failure."""
        try:
            return float(value)
        except (TypeError, ValueError):
            return default
