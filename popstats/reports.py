"""Report definitions built on the aggregation engine.

Cohort reports partition the records: every record lands in exactly one
bucket, so population counts add up to the number of records.

The prevalence report does not partition. A record can have several
conditions at once, so each condition is aggregated on its own over the
whole population and the per-condition rows are concatenated afterwards.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

import polars as pl

from popstats import buckets
from popstats.aggregation import (
    BucketSpec,
    Category,
    Count,
    Mean,
    MetricSpec,
    Rate,
    Record,
    SummaryRow,
    aggregate,
    sort_by_metric,
    to_frame,
)
from popstats.constants import UNKNOWN
from popstats.predicates import has_flag, is_diabetic
from tabkit.logger.logger import log_debug, log_info

PREVALENCE = "prevalence"
PREVALENCE_COLUMNS = {"case_count": pl.Int64, "rate": pl.Float64}


@dataclass(frozen=True)
class Disease:
    name: str
    predicate: Callable[[Record], bool]


DISEASES: list[Disease] = [
    Disease("Heart Disease", has_flag("heart_disease")),
    Disease("Stroke", has_flag("stroke")),
    Disease("Diabetes", is_diabetic),
    Disease("Asthma", has_flag("asthma")),
    Disease("Kidney Disease", has_flag("kidney_disease")),
    Disease("Skin Cancer", has_flag("skin_cancer")),
]

HEART_DISEASE_RATE = Rate("heart_disease_rate", has_flag("heart_disease"))
STROKE_RATE = Rate("stroke_rate", has_flag("stroke"))
DIABETES_RATE = Rate("diabetes_rate", is_diabetic)
AVG_BMI = Mean("avg_bmi", "bmi")
AVG_SLEEP_TIME = Mean("avg_sleep_time", "sleep_time")
AVG_MENTAL_HEALTH_DAYS = Mean("avg_mental_health_days", "mental_health_days")
AVG_PHYSICAL_HEALTH_DAYS = Mean("avg_physical_health_days", "physical_health_days")


def _materialize(records: Iterable[Record]) -> Sequence[Record]:
    return records if isinstance(records, Sequence) else list(records)


def _single_bucket(name: str, rank: int) -> BucketSpec:
    """A spec that puts every record into one bucket named after the condition."""
    return BucketSpec(
        name,
        ("patient_id",),
        (Category(name, rank), Category(UNKNOWN, rank + 1)),
        lambda _: name,
    )


def prevalence_rows(
    records: Iterable[Record],
    diseases: Sequence[Disease] = DISEASES,
) -> list[SummaryRow]:
    """
    Case count and rate per condition, highest rate first.

    Ties keep the order of `diseases`. Empty input gives no rows.
    """
    records = _materialize(records)
    rows: list[SummaryRow] = []
    for rank, disease in enumerate(diseases):
        rows.extend(
            aggregate(
                records,
                _single_bucket(disease.name, rank),
                [Count("case_count", disease.predicate), Rate("rate", disease.predicate)],
            )
        )
    return sort_by_metric(rows, "rate")


def prevalence_frame(
    records: Iterable[Record],
    diseases: Sequence[Disease] = DISEASES,
) -> pl.DataFrame:
    return to_frame(
        prevalence_rows(records, diseases), PREVALENCE_COLUMNS, label_column="condition"
    )


@dataclass(frozen=True)
class CohortReport:
    """A named grouping of records with the metrics reported per group."""

    name: str
    title: str
    bucket_spec: BucketSpec
    metrics: tuple[MetricSpec, ...]
    order_by: str | None = None

    def rows(self, records: Iterable[Record]) -> list[SummaryRow]:
        return aggregate(records, self.bucket_spec, self.metrics, order_by=self.order_by)

    def frame(self, records: Iterable[Record]) -> pl.DataFrame:
        return to_frame(self.rows(records), self.metrics, label_column=self.bucket_spec.name)


COHORT_REPORTS: list[CohortReport] = [
    CohortReport(
        "age_cohort",
        "Age cohort",
        buckets.AGE_COHORT,
        (HEART_DISEASE_RATE, STROKE_RATE, DIABETES_RATE, AVG_BMI),
    ),
    CohortReport(
        "bmi_category",
        "BMI category",
        buckets.BMI_CATEGORY,
        (HEART_DISEASE_RATE, DIABETES_RATE, AVG_SLEEP_TIME),
    ),
    CohortReport(
        "smoking_status",
        "Smoking status",
        buckets.SMOKING_STATUS,
        (HEART_DISEASE_RATE, STROKE_RATE, AVG_PHYSICAL_HEALTH_DAYS),
    ),
    CohortReport(
        "physical_activity",
        "Physical activity",
        buckets.PHYSICAL_ACTIVITY,
        (HEART_DISEASE_RATE, DIABETES_RATE, AVG_BMI),
    ),
    CohortReport(
        "mental_health",
        "Mental health severity",
        buckets.MENTAL_HEALTH,
        (HEART_DISEASE_RATE, AVG_SLEEP_TIME, AVG_PHYSICAL_HEALTH_DAYS),
    ),
    CohortReport(
        "sleep_duration",
        "Sleep duration",
        buckets.SLEEP_DURATION,
        (HEART_DISEASE_RATE, AVG_MENTAL_HEALTH_DAYS),
    ),
    CohortReport(
        "general_health",
        "General health",
        buckets.GENERAL_HEALTH,
        (HEART_DISEASE_RATE, STROKE_RATE, AVG_BMI),
    ),
    CohortReport(
        "gender",
        "Gender",
        buckets.GENDER,
        (HEART_DISEASE_RATE, STROKE_RATE, AVG_BMI),
    ),
    CohortReport(
        "comorbidity",
        "Comorbidity count",
        buckets.COMORBIDITY,
        (HEART_DISEASE_RATE, AVG_PHYSICAL_HEALTH_DAYS),
    ),
]

COHORT_REPORTS_BY_NAME: dict[str, CohortReport] = {r.name: r for r in COHORT_REPORTS}

REPORT_NAMES: list[str] = [PREVALENCE, *COHORT_REPORTS_BY_NAME]


def run_report(name: str, records: Iterable[Record]) -> pl.DataFrame:
    """Compute one report by name."""
    if name == PREVALENCE:
        return prevalence_frame(records)
    try:
        report = COHORT_REPORTS_BY_NAME[name]
    except KeyError:
        raise ValueError(f"Unknown report {name!r}; expected one of {REPORT_NAMES}") from None
    return report.frame(records)


def run_all_reports(
    records: Iterable[Record],
    names: Sequence[str] | None = None,
) -> dict[str, pl.DataFrame]:
    """Compute the requested reports (all by default), keyed by name in registry order."""
    selected = REPORT_NAMES if names is None else [n for n in REPORT_NAMES if n in names]
    unknown = sorted(set(names or []) - set(REPORT_NAMES))
    if unknown:
        raise ValueError(f"Unknown reports {unknown}; expected any of {REPORT_NAMES}")

    records = _materialize(records)
    log_info(f"running {len(selected)} reports over {len(records)} records")
    frames: dict[str, pl.DataFrame] = {}
    for name in selected:
        frames[name] = run_report(name, records)
        log_debug(f"{name}: {frames[name].height} rows")
    return frames
