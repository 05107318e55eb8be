"""Field completeness summary for silver patient records."""

from __future__ import annotations

import polars as pl

from popstats.common.models import PatientRecord


def get_record_summary(records_lf: PatientRecord | pl.LazyFrame) -> dict[str, int]:
    """Count records, and records with a usable value per field."""
    return (
        records_lf.select(
            pl.len().alias("total_records"),
            *(
                pl.col(name).drop_nulls().len().alias(f"with_{name}")
                for name in PatientRecord.column_names()
                if name != "patient_id"
            ),
        )
        .collect()
        .to_dicts()[0]
    )
