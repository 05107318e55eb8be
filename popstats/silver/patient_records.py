"""Patient record model: typed from the bronze string table.

Numeric fields are cast leniently (a value that does not parse becomes null)
and yes/no style flags become booleans. Columns absent from the source are
added as nulls so every frame has the full record schema.
"""

import polars as pl

from popstats.common.models import (
    BOOLEAN_FIELDS,
    NUMERIC_FIELDS,
    PATIENT_RECORD_SCHEMA,
    PatientRecord,
)
from popstats.common.values import FALSE_VALUES, TRUE_VALUES
from tabkit.engine.polars.functions.numeric import convert_columns_to_float
from tabkit.engine.polars.functions.string import convert_strings_to_boolean
from tabkit.logger.logger import log_debug, log_warn


def _add_missing_columns(lf: pl.LazyFrame) -> pl.LazyFrame:
    names = lf.collect_schema().names()
    return lf.with_columns(
        pl.lit(None, dtype=dtype).alias(name)
        for name, dtype in PATIENT_RECORD_SCHEMA.items()
        if name not in names
    )


def _count_unparsed(before: pl.DataFrame, after: pl.DataFrame, columns: list[str]) -> dict[str, int]:
    """Values present in the source that became null after casting."""
    counts = {}
    for name in columns:
        lost = (before[name].is_not_null() & after[name].is_null()).sum()
        if lost:
            counts[name] = lost
    return counts


def get_patient_record(bronze_df: pl.DataFrame) -> PatientRecord:
    """
    Transform bronze patient rows into a typed PatientRecord frame.

    Args:
        bronze_df: Bronze rows, any column types (usually all strings)

    Returns:
        PatientRecord with exactly the record columns, schema-validated
    """
    source = bronze_df.lazy()
    source = _add_missing_columns(source).with_columns(
        pl.col(name).cast(pl.String) for name in PATIENT_RECORD_SCHEMA
    )

    typed = convert_columns_to_float(source, NUMERIC_FIELDS)
    typed = convert_strings_to_boolean(typed, BOOLEAN_FIELDS, TRUE_VALUES, FALSE_VALUES)
    typed = typed.select(
        pl.col(name).cast(dtype) for name, dtype in PATIENT_RECORD_SCHEMA.items()
    )

    source_df = source.collect()
    typed_df = typed.collect()
    unparsed = _count_unparsed(source_df, typed_df, NUMERIC_FIELDS + BOOLEAN_FIELDS)
    if unparsed:
        log_warn(f"unparseable values set to null: {unparsed}")
    log_debug(f"typed {typed_df.height} patient records")

    return PatientRecord.from_df(typed_df)
