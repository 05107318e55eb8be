"""Validation reporting helpers."""

from typing import Any

import polars as pl


def _as_lazyframe(validated_lf: pl.LazyFrame | pl.DataFrame) -> pl.LazyFrame:
    if isinstance(validated_lf, pl.DataFrame):
        return validated_lf.lazy()
    return validated_lf


def get_validation_summary(validated_lf: pl.LazyFrame | pl.DataFrame) -> pl.DataFrame:
    """Count failing records per rule, most frequent first (ties by rule name)."""
    return (
        _as_lazyframe(validated_lf)
        .select(pl.col("validation_errors").list.explode().alias("error"))
        .filter(pl.col("error").is_not_null())
        .group_by("error")
        .agg(pl.len().alias("count"))
        .sort(["count", "error"], descending=[True, False])
        .collect()
    )


def get_validation_report(validated_lf: pl.LazyFrame | pl.DataFrame) -> dict[str, Any]:
    """Generate a validation report."""
    df = _as_lazyframe(validated_lf).collect()

    total = df.height
    valid = df.filter(pl.col("validation_errors").list.len() == 0).height

    return {
        "total_records": total,
        "valid_records": valid,
        "invalid_records": total - valid,
        "validity_rate": valid / total if total > 0 else 0.0,
        "errors_by_rule": get_validation_summary(df).to_dicts(),
    }
