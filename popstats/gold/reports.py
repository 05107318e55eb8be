"""Gold layer: summary report tables computed from silver patient records."""

from __future__ import annotations

from collections.abc import Sequence

import duckdb
import polars as pl

from popstats.constants import Schema
from popstats.db.duckdb_io import write_dataframes
from popstats.reports import run_all_reports


def build_report_tables(
    records_lf: pl.LazyFrame,
    names: Sequence[str] | None = None,
) -> dict[str, pl.DataFrame]:
    """
    Compute report tables from a silver LazyFrame.

    Rows are handed to the aggregation engine as dicts; the silver
    `validation_errors` column, when present, is ignored by every report.

    Returns:
        Report name -> DataFrame, in report registry order
    """
    records = list(records_lf.collect().iter_rows(named=True))
    return run_all_reports(records, names)


def save_report_tables(
    con: duckdb.DuckDBPyConnection,
    tables: dict[str, pl.DataFrame],
) -> None:
    """Save report tables to the DuckDB gold schema, one table per report."""
    write_dataframes(con, Schema.GOLD, tables)
