"""ETL orchestration for bronze, silver, and gold layers."""

from collections.abc import Sequence
from pathlib import Path

import duckdb
import polars as pl

from popstats.bronze import get_bronze_table_summary, load_bronze_csv
from popstats.constants import PATIENT_RECORD_TABLE, Schema
from popstats.db.duckdb_io import read_table, write_dataframe
from popstats.gold import build_report_tables, save_report_tables
from popstats.silver import get_patient_record, validate_patient_record
from tabkit.logger.logger import log_info


def run_bronze(csv_path: Path, con: duckdb.DuckDBPyConnection) -> dict[str, int]:
    """Load the bronze table and return a summary."""
    load_bronze_csv(csv_path, con)
    return get_bronze_table_summary(con)


def run_silver(con: duckdb.DuckDBPyConnection, *, persist: bool = False) -> pl.LazyFrame:
    """Build the validated silver LazyFrame, optionally writing it to the DB."""
    bronze_df = read_table(con, Schema.BRONZE, PATIENT_RECORD_TABLE)
    silver_lf = validate_patient_record(get_patient_record(bronze_df))
    if persist:
        log_info(f"writing {Schema.SILVER}.{PATIENT_RECORD_TABLE}")
        write_dataframe(con, Schema.SILVER, PATIENT_RECORD_TABLE, silver_lf.collect())
    return silver_lf


def run_gold(
    con: duckdb.DuckDBPyConnection,
    silver_lf: pl.LazyFrame,
    names: Sequence[str] | None = None,
) -> dict[str, pl.DataFrame]:
    """Compute report tables and save them to the gold schema."""
    tables = build_report_tables(silver_lf, names)
    save_report_tables(con, tables)
    return tables
