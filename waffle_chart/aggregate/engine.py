from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from ..adapters.base import CategoricalReader
from ..core.enums import OverflowPolicy, Role
from ..core.errors import Diagnostic, InvalidPathLabelError, MalformedBoundsError, WaffleChartError
from ..core.logging_config import get_logger
from ..core.models import AggregatedResult, Bounds, SeriesGroup
from . import rules

logger = get_logger(__name__)

# Roles read from every series, in the order the series columns are visited.
SERIES_ROLES = (Role.VALUES, Role.MIN_VALUE, Role.MAX_VALUE)

dataclass_kwargs = {"slots": True}


@dataclass(**dataclass_kwargs)
class AggregationOptions:
    overflow: OverflowPolicy = OverflowPolicy.PRESERVE
    label_formatter: Callable[[Any], Any] = rules.format_category_label


def aggregate(
    categories: Sequence[Any] | None,
    identities: Sequence[Any] | None,
    series_groups: Sequence[SeriesGroup],
    bounds: Bounds | None = None,
    objects: Sequence[Any] | None = None,
    *,
    overflow: OverflowPolicy = OverflowPolicy.PRESERVE,
    label_formatter: Callable[[Any], Any] = rules.format_category_label,
) -> AggregatedResult:
    """Sum value series per category and normalize the totals to percentages.

    Never raises for bad data: any failure yields an empty result whose
    ``diagnostics`` explain what went wrong.
    """
    engine = Aggregator(AggregationOptions(overflow=overflow, label_formatter=label_formatter))
    try:
        return engine.run(categories, identities, series_groups, bounds, objects)
    except (WaffleChartError, ArithmeticError, TypeError, ValueError) as e:
        return _failed(e)


def aggregate_reader(
    reader: CategoricalReader,
    *,
    overflow: OverflowPolicy = OverflowPolicy.PRESERVE,
    label_formatter: Callable[[Any], Any] = rules.format_category_label,
) -> AggregatedResult:
    """Read categories and series through ``reader`` and aggregate them."""
    try:
        categories, identities, objects = _read_categories(reader)
        groups = _read_series(reader)
    except (WaffleChartError, ArithmeticError, LookupError, TypeError, ValueError) as e:
        return _failed(e)
    return aggregate(
        categories,
        identities,
        groups,
        objects=objects,
        overflow=overflow,
        label_formatter=label_formatter,
    )


class Aggregator:
    def __init__(self, options: AggregationOptions | None = None):
        self.options = options or AggregationOptions()

    def run(
        self,
        categories: Sequence[Any] | None,
        identities: Sequence[Any] | None,
        series_groups: Sequence[SeriesGroup],
        bounds: Bounds | None = None,
        objects: Sequence[Any] | None = None,
    ) -> AggregatedResult:
        diagnostics: list[Diagnostic] = []

        labels = None
        if categories is not None:
            labels = [self.options.label_formatter(v) for v in categories]

        bounds = self._collect_bounds(series_groups, bounds, diagnostics)
        totals, paths = self._sum_value_series(series_groups, diagnostics)

        count = rules.resolve_count(labels, totals)
        n = count.value

        # No value series at all: every category renders as 0%.
        if totals is None:
            totals = [0] * n
            paths = [None] * n
        totals = _pad(totals, n, 0)
        paths = _pad(paths, n, None)

        values = self._normalize(totals, bounds, diagnostics)
        values = rules.apply_overflow_policy(values, self.options.overflow)

        logger.debug(
            "Aggregated categories",
            extra={"count": n, "count_source": count.source.value, "diagnostics": len(diagnostics)},
        )
        return AggregatedResult(
            count=count,
            labels=_pad(labels, n, None),
            identities=_pad(identities, n, None),
            objects=_pad(objects, n, None),
            totals=totals,
            values=values,
            paths=paths,
            diagnostics=diagnostics,
        )

    def _collect_bounds(
        self,
        series_groups: Sequence[SeriesGroup],
        bounds: Bounds | None,
        diagnostics: list[Diagnostic],
    ) -> Bounds:
        merged = Bounds(min=bounds.min, max=bounds.max) if bounds else Bounds()
        seen: set[Role] = set()
        for group in series_groups:
            if group.role is Role.VALUES:
                continue
            if group.role not in (Role.MIN_VALUE, Role.MAX_VALUE):
                logger.debug("No matching role for series", extra={"series": str(group.label)})
                diagnostics.append(
                    Diagnostic("unmatched_role", f"Series {group.label!r} has role {group.role.value}")
                )
                continue
            if group.role in seen:
                logger.warning(
                    "Bound series repeated, last one wins",
                    extra={"role": group.role.value, "series": str(group.label)},
                )
                diagnostics.append(
                    Diagnostic("duplicate_bound_series", f"{group.role.value} supplied more than once")
                )
            seen.add(group.role)
            if group.role is Role.MIN_VALUE:
                merged.min = list(group.values)
            else:
                merged.max = list(group.values)
        return merged

    def _sum_value_series(
        self, series_groups: Sequence[SeriesGroup], diagnostics: list[Diagnostic]
    ) -> tuple[list[float] | None, list[str | None] | None]:
        value_groups = [g for g in series_groups if g.role is Role.VALUES]
        if not value_groups:
            return None, None

        length = max(len(g.values) for g in value_groups)
        totals: list[float] = [0] * length
        paths: list[str | None] = [None] * length

        # One full pass per group, so the last contributing group owns the path.
        for group in value_groups:
            try:
                path = rules.validate_path_label(group.label)
            except InvalidPathLabelError as e:
                logger.debug("Discarding series label as glyph path", extra={"series": str(group.label)})
                diagnostics.append(Diagnostic.from_error(e))
                path = None
            rules.sum_values(totals, group.values, paths, path)
        return totals, paths

    def _normalize(
        self, totals: list[float], bounds: Bounds, diagnostics: list[Diagnostic]
    ) -> list[float]:
        if bounds.max is not None:
            values: list[float] = []
            for i, total in enumerate(totals):
                try:
                    values.append(rules.bounded_percentage(total, i, bounds))
                except MalformedBoundsError as e:
                    logger.warning("Malformed bounds, using 0%", extra={"index": i, "error": str(e)})
                    diagnostics.append(Diagnostic.from_error(e))
                    values.append(0)
            return values

        peak = max(totals) if totals else None
        if peak is not None and peak > 100:
            logger.debug("Rescaling totals against peak", extra={"peak": peak})
            return rules.rescale_to_peak(totals, peak)

        # Totals at or below 100 are already percentages.
        return list(totals)


def _read_categories(
    reader: CategoricalReader,
) -> tuple[list[Any] | None, list[Any] | None, list[Any] | None]:
    if not reader.has_categories():
        return None, None, None
    column = reader.get_category_column(Role.CATEGORY)
    if column is None:
        return None, None, None
    return (
        list(column.values),
        list(column.identities) if column.identities is not None else None,
        list(column.objects) if column.objects is not None else None,
    )


def _read_series(reader: CategoricalReader) -> list[SeriesGroup]:
    groups: list[SeriesGroup] = []
    for series_index in range(reader.get_series_count()):
        name = reader.get_series_name(series_index)
        for role in SERIES_ROLES:
            if not reader.has_values(role):
                continue
            values = reader.get_values(role, series_index)
            if values is not None:
                groups.append(SeriesGroup(label=name, role=role, values=list(values)))
    return groups


def _failed(error: Exception) -> AggregatedResult:
    diagnostic = Diagnostic.from_error(error)
    logger.warning(
        "Aggregation failed, no items will be rendered",
        extra={"error_type": diagnostic.kind, "error": diagnostic.message},
    )
    return AggregatedResult.empty([diagnostic])


def _pad(items: Sequence[Any] | None, n: int, fill: Any) -> list[Any]:
    items = list(items) if items is not None else []
    return items[:n] + [fill] * (n - len(items))
