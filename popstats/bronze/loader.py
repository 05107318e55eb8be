"""Load a patient health indicators CSV into the bronze DuckDB table.

Bronze keeps every value as a cleaned string. Headers are normalized to the
record field names; the headers of the public "Key Indicators of Heart
Disease" survey extract are recognized as well.
"""

from pathlib import Path

import duckdb
import polars as pl

from popstats.common.models import PATIENT_RECORD_SCHEMA
from popstats.constants import PATIENT_RECORD_TABLE, Schema
from popstats.db.duckdb_io import get_table_summary, write_dataframe
from tabkit.engine.polars.functions.string import leading_number
from tabkit.engine.polars.read_and_clean import read_from_csv_and_clean
from tabkit.logger.logger import log_info, log_warn

# lowercased source header -> record field
COLUMN_ALIASES = {
    "id": "patient_id",
    "patientid": "patient_id",
    "heartdisease": "heart_disease",
    "alcoholdrinking": "alcohol_drinking",
    "physicalhealth": "physical_health_days",
    "physical_health": "physical_health_days",
    "mentalhealth": "mental_health_days",
    "mental_health": "mental_health_days",
    "diffwalking": "diff_walking",
    "sex": "gender",
    "diabetic": "diabetic_status",
    "physicalactivity": "physical_activity",
    "genhealth": "general_health",
    "sleeptime": "sleep_time",
    "kidneydisease": "kidney_disease",
    "skincancer": "skin_cancer",
    "smoking": "smoking_status",
}

AGE_CATEGORY_COLUMN = "agecategory"


def _rename_known_columns(lf: pl.LazyFrame) -> pl.LazyFrame:
    names = lf.collect_schema().names()
    renames = {
        source: target
        for source, target in COLUMN_ALIASES.items()
        if source in names and target not in names
    }
    return lf.rename(renames)


def _derive_age(lf: pl.LazyFrame) -> pl.LazyFrame:
    """Take the lower bound of an age band ("55-59" -> 55) when no age column exists."""
    names = lf.collect_schema().names()
    if "age" in names or AGE_CATEGORY_COLUMN not in names:
        return lf
    return lf.with_columns(
        leading_number(pl.col(AGE_CATEGORY_COLUMN)).cast(pl.String).alias("age")
    )


def _with_patient_id(lf: pl.LazyFrame) -> pl.LazyFrame:
    if "patient_id" in lf.collect_schema().names():
        return lf
    return lf.with_row_index("patient_id", offset=1).with_columns(
        pl.col("patient_id").cast(pl.String)
    )


def read_patient_csv(csv_path: Path) -> pl.DataFrame:
    """Read a CSV as cleaned string columns named after the record fields."""
    lf = read_from_csv_and_clean(csv_path)
    lf = _rename_known_columns(lf)
    lf = _derive_age(lf)
    lf = _with_patient_id(lf)
    df = lf.collect()

    missing = [name for name in PATIENT_RECORD_SCHEMA if name not in df.columns]
    if missing:
        log_warn(f"{csv_path.name}: missing columns {missing}, they load as nulls")
    return df


def load_bronze_csv(
    csv_path: Path,
    con: duckdb.DuckDBPyConnection | None = None,
) -> duckdb.DuckDBPyConnection:
    """
    Load a patient CSV into `bronze.patient_record`.

    Args:
        csv_path: CSV file with one row per patient
        con: Optional existing DuckDB connection. Creates in-memory if not provided.

    Returns:
        DuckDB connection holding the bronze table
    """
    if con is None:
        con = duckdb.connect(":memory:")
    df = read_patient_csv(csv_path)
    write_dataframe(con, Schema.BRONZE, PATIENT_RECORD_TABLE, df)
    log_info(f"loaded {df.height} rows from {csv_path.name}")
    return con


def get_bronze_table_summary(con: duckdb.DuckDBPyConnection) -> dict[str, int]:
    """Get row counts of bronze tables."""
    return get_table_summary(con, Schema.BRONZE)
