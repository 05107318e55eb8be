"""TypedLazyFrame definition for the patient health indicators table.

One row per surveyed patient. The table is a static snapshot: rows are never
updated or deleted after loading.
"""

from typing import Optional

import polars as pl

from tabkit.engine.polars.typed_dataframe import Col, TypedLazyFrame


class PatientRecord(TypedLazyFrame):
    """Patient health indicators, typed after the silver transform."""

    patient_id: Col[Optional[str]]

    age: Col[Optional[float]]
    bmi: Col[Optional[float]]
    sleep_time: Col[Optional[float]]
    mental_health_days: Col[Optional[float]]
    physical_health_days: Col[Optional[float]]

    gender: Col[Optional[str]]
    smoking_status: Col[Optional[str]]
    diabetic_status: Col[Optional[str]]
    race: Col[Optional[str]]
    general_health: Col[Optional[str]]

    stroke: Col[Optional[bool]]
    physical_activity: Col[Optional[bool]]
    diff_walking: Col[Optional[bool]]
    asthma: Col[Optional[bool]]
    kidney_disease: Col[Optional[bool]]
    skin_cancer: Col[Optional[bool]]
    heart_disease: Col[Optional[bool]]
    alcohol_drinking: Col[Optional[bool]]


NUMERIC_FIELDS = [
    "age",
    "bmi",
    "sleep_time",
    "mental_health_days",
    "physical_health_days",
]

CATEGORICAL_FIELDS = [
    "gender",
    "smoking_status",
    "diabetic_status",
    "race",
    "general_health",
]

BOOLEAN_FIELDS = [
    "stroke",
    "physical_activity",
    "diff_walking",
    "asthma",
    "kidney_disease",
    "skin_cancer",
    "heart_disease",
    "alcohol_drinking",
]

PATIENT_RECORD_SCHEMA: dict[str, pl.DataType] = {
    "patient_id": pl.String,
    **{name: pl.Float64 for name in NUMERIC_FIELDS},
    **{name: pl.String for name in CATEGORICAL_FIELDS},
    **{name: pl.Boolean for name in BOOLEAN_FIELDS},
}

# Silver frames carry the rule names each row failed
VALIDATED_PATIENT_RECORD_SCHEMA: dict[str, pl.DataType] = {
    **PATIENT_RECORD_SCHEMA,
    "validation_errors": pl.List(pl.String),
}
