"""Aggregation engine: bucket records, accumulate per bucket, derive metrics.

A report is a `BucketSpec` (which group a record belongs to) plus an ordered
list of metrics (`Count`, `Rate` or `Mean`). `aggregate` folds the records once,
keeping one `Accumulator` per bucket, and only derives the metric values after
the fold. The same accumulators can be built per partition and merged with
`BucketTable.merge` before deriving, which gives exactly the same result as a
single pass.
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, ClassVar

import polars as pl

from popstats.common.values import as_number, round_half_away
from popstats.constants import MEAN_DECIMALS, RATE_DECIMALS, UNKNOWN

Record = Mapping[str, Any]

RESERVED_COLUMNS = ("label", "population_count")


class BucketSpecError(ValueError):
    """Bucket specification is malformed or not total."""


@dataclass(frozen=True)
class Category:
    """A named bucket and its position in report output."""

    label: str
    rank: int


@dataclass(frozen=True)
class BucketSpec:
    """
    Maps a record to exactly one declared category.

    `assign` receives the values of `fields` (in order) and must return the
    label of a declared category for every possible input; `Unknown` is
    mandatory and is where missing or unusable values go.
    """

    name: str
    fields: tuple[str, ...]
    categories: tuple[Category, ...]
    assign: Callable[..., str]
    _ranks: dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.fields:
            raise BucketSpecError(f"{self.name}: at least one field is required")
        labels = [category.label for category in self.categories]
        duplicates = sorted({label for label in labels if labels.count(label) > 1})
        if duplicates:
            raise BucketSpecError(f"{self.name}: duplicate categories {duplicates}")
        if UNKNOWN not in labels:
            raise BucketSpecError(f"{self.name}: missing the {UNKNOWN!r} category")
        object.__setattr__(
            self, "_ranks", {category.label: category.rank for category in self.categories}
        )

    @property
    def labels(self) -> list[str]:
        return [category.label for category in self.categories]

    def rank_of(self, label: str) -> int:
        return self._ranks[label]

    def bucket_of(self, record: Record) -> str:
        label = self.assign(*(record.get(name) for name in self.fields))
        if label not in self._ranks:
            raise BucketSpecError(
                f"{self.name}: assigned undeclared category {label!r}"
            )
        return label


@dataclass(frozen=True)
class Count:
    """Number of records in the group for which `predicate` holds."""

    name: str
    predicate: Callable[[Record], bool]
    dtype: ClassVar[pl.DataType] = pl.Int64

    def observe(self, record: Record) -> int:
        return 1 if self.predicate(record) else 0

    def derive(self, total: float, count: int, population: int) -> int:
        return int(total)


@dataclass(frozen=True)
class Rate:
    """Percentage of the group for which `predicate` holds."""

    name: str
    predicate: Callable[[Record], bool]
    dtype: ClassVar[pl.DataType] = pl.Float64

    def observe(self, record: Record) -> int:
        return 1 if self.predicate(record) else 0

    def derive(self, total: float, count: int, population: int) -> float | None:
        if population == 0:
            return None
        return round_half_away(Decimal(total) * 100 / Decimal(population), RATE_DECIMALS)


@dataclass(frozen=True)
class Mean:
    """Arithmetic mean of a numeric field over the group's usable values."""

    name: str
    field_name: str
    dtype: ClassVar[pl.DataType] = pl.Float64

    def observe(self, record: Record) -> float | None:
        return as_number(record.get(self.field_name))

    def derive(self, total: float, count: int, population: int) -> float | None:
        if count == 0:
            return None
        return round_half_away(total / count, MEAN_DECIMALS)


MetricSpec = Count | Rate | Mean


@dataclass
class Accumulator:
    """Running per-bucket totals: population plus a (sum, count) pair per metric."""

    population: int
    sums: list[float]
    counts: list[int]

    @classmethod
    def empty(cls, size: int) -> Accumulator:
        return cls(0, [0] * size, [0] * size)

    def add(self, record: Record, metrics: Sequence[MetricSpec]) -> None:
        self.population += 1
        for i, metric in enumerate(metrics):
            value = metric.observe(record)
            if value is not None:
                self.sums[i] += value
                self.counts[i] += 1

    def copy(self) -> Accumulator:
        return Accumulator(self.population, list(self.sums), list(self.counts))

    def merge(self, other: Accumulator) -> Accumulator:
        return Accumulator(
            self.population + other.population,
            [a + b for a, b in zip(self.sums, other.sums, strict=True)],
            [a + b for a, b in zip(self.counts, other.counts, strict=True)],
        )


@dataclass(frozen=True)
class SummaryRow:
    """One row of a computed report."""

    label: str
    rank: int
    population_count: int
    metrics: dict[str, float | int | None] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        return {
            "label": self.label,
            "population_count": self.population_count,
            **self.metrics,
        }


@dataclass
class BucketTable:
    """Accumulators keyed by bucket label, in first-seen order."""

    spec: BucketSpec
    metrics: tuple[MetricSpec, ...]
    buckets: dict[str, Accumulator] = field(default_factory=dict)

    @property
    def population(self) -> int:
        return sum(acc.population for acc in self.buckets.values())

    def add(self, record: Record) -> None:
        label = self.spec.bucket_of(record)
        acc = self.buckets.get(label)
        if acc is None:
            acc = self.buckets[label] = Accumulator.empty(len(self.metrics))
        acc.add(record, self.metrics)

    def merge(self, other: BucketTable) -> BucketTable:
        """Combine two partial tables; buckets first seen in `self` stay first."""
        if other.spec != self.spec or other.metrics != self.metrics:
            raise ValueError("Cannot merge tables built from different specifications")
        merged = {label: acc.copy() for label, acc in self.buckets.items()}
        for label, acc in other.buckets.items():
            merged[label] = merged[label].merge(acc) if label in merged else acc.copy()
        return BucketTable(self.spec, self.metrics, merged)


def _check_metrics(metrics: Sequence[MetricSpec]) -> tuple[MetricSpec, ...]:
    names = [metric.name for metric in metrics]
    if len(set(names)) != len(names):
        raise ValueError(f"Duplicate metric names: {names}")
    reserved = [name for name in names if name in RESERVED_COLUMNS]
    if reserved:
        raise ValueError(f"Metric names clash with report columns: {reserved}")
    return tuple(metrics)


def accumulate(
    records: Iterable[Record],
    bucket_spec: BucketSpec,
    metrics: Sequence[MetricSpec],
) -> BucketTable:
    """Single pass over `records`, returning the per-bucket accumulators."""
    table = BucketTable(bucket_spec, _check_metrics(metrics))
    for record in records:
        table.add(record)
    return table


def sort_by_metric(rows: Sequence[SummaryRow], metric_name: str) -> list[SummaryRow]:
    """Stable sort by a metric, highest first; ties keep rank order, nulls go last."""
    by_rank = sorted(rows, key=lambda row: row.rank)
    return sorted(
        by_rank,
        key=lambda row: (
            row.metrics[metric_name] is None,
            -(row.metrics[metric_name] or 0),
        ),
    )


def finalize(table: BucketTable, *, order_by: str | None = None) -> list[SummaryRow]:
    """Derive metrics from accumulators and order the rows."""
    if order_by is not None and order_by not in [m.name for m in table.metrics]:
        raise ValueError(f"Unknown metric to order by: {order_by!r}")

    rows = [
        SummaryRow(
            label=label,
            rank=table.spec.rank_of(label),
            population_count=acc.population,
            metrics={
                metric.name: metric.derive(acc.sums[i], acc.counts[i], acc.population)
                for i, metric in enumerate(table.metrics)
            },
        )
        for label, acc in table.buckets.items()
    ]
    # sorted() is stable, so equal ranks keep first-seen order
    rows = sorted(rows, key=lambda row: row.rank)
    if order_by is not None:
        rows = sort_by_metric(rows, order_by)
    return rows


def aggregate(
    records: Iterable[Record],
    bucket_spec: BucketSpec,
    metrics: Sequence[MetricSpec],
    *,
    order_by: str | None = None,
) -> list[SummaryRow]:
    """
    Group records by `bucket_spec` and compute `metrics` per group.

    Args:
        records: Record mappings; may be empty (returns no rows).
        bucket_spec: Total mapping from record to category.
        metrics: Rates and means, in output column order.
        order_by: Optional metric name to sort by (descending) instead of rank.

    Returns:
        SummaryRows for every bucket that received at least one record.
    """
    return finalize(accumulate(records, bucket_spec, metrics), order_by=order_by)


def aggregate_partitions(
    partitions: Iterable[Iterable[Record]],
    bucket_spec: BucketSpec,
    metrics: Sequence[MetricSpec],
    *,
    order_by: str | None = None,
) -> list[SummaryRow]:
    """Same result as `aggregate` over the concatenated partitions."""
    tables = (accumulate(part, bucket_spec, metrics) for part in partitions)
    merged = functools.reduce(
        BucketTable.merge, tables, BucketTable(bucket_spec, _check_metrics(metrics))
    )
    return finalize(merged, order_by=order_by)


def to_frame(
    rows: Sequence[SummaryRow],
    metrics: Sequence[MetricSpec] | Mapping[str, pl.DataType],
    label_column: str = "label",
) -> pl.DataFrame:
    """
    Convert rows to a DataFrame with a fixed schema, also when there are no rows.

    `metrics` gives the metric columns, either as the specs used to compute the
    rows or as a name -> dtype mapping.
    """
    if isinstance(metrics, Mapping):
        columns = dict(metrics)
    else:
        columns = {metric.name: metric.dtype for metric in metrics}
    schema: dict[str, pl.DataType] = {
        label_column: pl.String,
        "population_count": pl.Int64,
        **columns,
    }
    data = [
        {
            label_column: row.label,
            "population_count": row.population_count,
            **{name: row.metrics[name] for name in columns},
        }
        for row in rows
    ]
    return pl.DataFrame(data, schema=schema)
