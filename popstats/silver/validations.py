"""Validation rules for silver patient records using Polars.

Failing a rule does not remove a record. Reports still count it, and the
bucketing puts its unusable values into `Unknown`.
"""

from dataclasses import dataclass
from typing import Callable

import polars as pl

from tabkit.engine.polars.functions.numeric import is_between


@dataclass
class ValidationRule:
    """A validation rule with name and check expression."""

    name: str
    check: Callable[[], pl.Expr]
    description: str


def _in_range(column: str, low: float, high: float) -> Callable[[], pl.Expr]:
    """Null passes; a present value must lie in [low, high]."""
    return lambda: pl.col(column).is_null() | is_between(pl.col(column), low, high)


PATIENT_RECORD_VALIDATION_RULES: list[ValidationRule] = [
    ValidationRule(
        name="patient_id_required",
        check=lambda: pl.col("patient_id").is_not_null(),
        description="Patient ID must not be null",
    ),
    ValidationRule(
        name="patient_id_unique",
        check=lambda: pl.col("patient_id").is_null() | ~pl.col("patient_id").is_duplicated(),
        description="Patient ID must be unique",
    ),
    ValidationRule(
        name="age_range",
        check=_in_range("age", 0, 130),
        description="Age must be between 0 and 130",
    ),
    ValidationRule(
        name="bmi_range",
        check=_in_range("bmi", 10, 100),
        description="BMI must be between 10 and 100",
    ),
    ValidationRule(
        name="sleep_time_range",
        check=_in_range("sleep_time", 0, 24),
        description="Sleep time must be between 0 and 24 hours",
    ),
    ValidationRule(
        name="mental_health_days_range",
        check=_in_range("mental_health_days", 0, 30),
        description="Mental health days must be between 0 and 30",
    ),
    ValidationRule(
        name="physical_health_days_range",
        check=_in_range("physical_health_days", 0, 30),
        description="Physical health days must be between 0 and 30",
    ),
]


def validate_patient_record(silver_lf: pl.LazyFrame) -> pl.LazyFrame:
    """
    Validate silver patient records and populate validation_errors column.

    Args:
        silver_lf: Polars LazyFrame with silver patient records

    Returns:
        Polars LazyFrame with validation_errors populated
    """
    error_exprs = [
        pl.when(~rule.check()).then(pl.lit(rule.name)).otherwise(pl.lit(None, dtype=pl.String))
        for rule in PATIENT_RECORD_VALIDATION_RULES
    ]

    return silver_lf.with_columns(
        pl.concat_list(error_exprs)
        .list.eval(pl.element().drop_nulls())
        .alias("validation_errors")
    )


def get_valid_records(validated_lf: pl.LazyFrame) -> pl.LazyFrame:
    """Filter to only valid records (no validation errors)."""
    return validated_lf.filter(pl.col("validation_errors").list.len() == 0)


def get_invalid_records(validated_lf: pl.LazyFrame) -> pl.LazyFrame:
    """Filter to only invalid records (has validation errors)."""
    return validated_lf.filter(pl.col("validation_errors").list.len() > 0)
