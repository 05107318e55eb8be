from pathlib import Path

import polars as pl

from .functions.string import (
    lowercase_columns,
    nullify_string_columns,
    trim_string_columns,
)


def _read_from_csv(dataset_path: str | Path) -> pl.LazyFrame:
    # every column as string: typing happens downstream, per field
    return pl.scan_csv(dataset_path, infer_schema=False)


def _clean(df: pl.LazyFrame) -> pl.LazyFrame:
    """Cleans the given dataframe (lower-case columns, trim, nullify empty strings)."""
    df = lowercase_columns(df)
    df = trim_string_columns(df)
    df = nullify_string_columns(df)
    return df


def read_from_csv_and_clean(dataset_path: str | Path) -> pl.LazyFrame:
    return _clean(_read_from_csv(dataset_path))
