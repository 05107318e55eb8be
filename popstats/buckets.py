"""Bucket specification factories and the canonical cohort buckets.

Numeric ranges are half-open: a bucket starting at `low` holds
`low <= value < next_low`, and the last bucket is unbounded above. A value
below the first bound, a null, or a value that does not parse as a number
lands in `Unknown`. So bmi 25.0 is Overweight, age 65 is 65+, sleep 9.0 is
>=9 and 0 mental health days is 0.

Labels name the whole-number values a bucket holds; a fractional value
belongs to the bucket its lower bounds put it in, so 21.5 mental health days
is "15-21" and 8.5 hours of sleep is "7-8.9".
"""

from collections.abc import Sequence
from typing import Any

from popstats.aggregation import BucketSpec, BucketSpecError, Category
from popstats.common.values import as_flag, as_number, as_text
from popstats.constants import UNKNOWN
from popstats.predicates import is_diabetic_value


def _categories(labels: Sequence[str]) -> tuple[Category, ...]:
    if UNKNOWN in labels:
        raise BucketSpecError(f"{UNKNOWN!r} is added automatically, do not declare it")
    return (
        *(Category(label, rank) for rank, label in enumerate(labels)),
        Category(UNKNOWN, len(labels)),
    )


def range_buckets(
    name: str,
    field_name: str,
    edges: Sequence[tuple[str, float]],
) -> BucketSpec:
    """
    Build a numeric bucket spec from (label, lower bound) pairs.

    Args:
        name: Spec name, used in error messages.
        field_name: Numeric record field.
        edges: Strictly ascending lower bounds; each bucket runs up to the next
            bound (exclusive), the last one has no upper bound.
    """
    lows = [low for _, low in edges]
    if not lows:
        raise BucketSpecError(f"{name}: at least one range is required")
    if any(a >= b for a, b in zip(lows, lows[1:])):
        raise BucketSpecError(f"{name}: lower bounds must be strictly ascending: {lows}")
    labels = [label for label, _ in edges]

    def assign(value: Any) -> str:
        number = as_number(value)
        if number is None or number < lows[0]:
            return UNKNOWN
        label = labels[0]
        for candidate, low in edges:
            if number >= low:
                label = candidate
        return label

    return BucketSpec(name, (field_name,), _categories(labels), assign)


def categorical_buckets(name: str, field_name: str, labels: Sequence[str]) -> BucketSpec:
    """Identity buckets over a categorical field, matched case-insensitively."""
    by_key = {label.casefold(): label for label in labels}

    def assign(value: Any) -> str:
        text = as_text(value)
        if text is None:
            return UNKNOWN
        return by_key.get(text.casefold(), UNKNOWN)

    return BucketSpec(name, (field_name,), _categories(labels), assign)


def boolean_buckets(name: str, field_name: str, true_label: str, false_label: str) -> BucketSpec:
    def assign(value: Any) -> str:
        flag = as_flag(value)
        if flag is None:
            return UNKNOWN
        return true_label if flag else false_label

    return BucketSpec(name, (field_name,), _categories([true_label, false_label]), assign)


AGE_COHORT = range_buckets(
    "age_cohort",
    "age",
    [("18-24", 18), ("25-34", 25), ("35-44", 35), ("45-54", 45), ("55-64", 55), ("65+", 65)],
)

BMI_CATEGORY = range_buckets(
    "bmi_category",
    "bmi",
    [
        ("Underweight", 0),
        ("Normal", 18.5),
        ("Overweight", 25),
        ("Obese Class I", 30),
        ("Obese Class II", 35),
        ("Obese Class III", 40),
    ],
)

SMOKING_STATUS = categorical_buckets(
    "smoking_status", "smoking_status", ["Never", "Former", "Current"]
)

PHYSICAL_ACTIVITY = boolean_buckets(
    "physical_activity", "physical_activity", "Active", "Sedentary"
)

MENTAL_HEALTH = range_buckets(
    "mental_health",
    "mental_health_days",
    [("0", 0), ("1-7", 1), ("8-14", 8), ("15-21", 15), (">21", 22)],
)

SLEEP_DURATION = range_buckets(
    "sleep_duration",
    "sleep_time",
    [("<5", 0), ("5-5.9", 5), ("6-6.9", 6), ("7-8.9", 7), (">=9", 9)],
)

GENERAL_HEALTH = categorical_buckets(
    "general_health",
    "general_health",
    ["Excellent", "Very good", "Good", "Fair", "Poor"],
)

GENDER = categorical_buckets("gender", "gender", ["Female", "Male"])

COMORBIDITY_FIELDS = ("stroke", "diabetic_status", "asthma", "kidney_disease", "skin_cancer")


def _comorbidity(
    stroke: Any,
    diabetic_status: Any,
    asthma: Any,
    kidney_disease: Any,
    skin_cancer: Any,
) -> str:
    flags = [as_flag(value) for value in (stroke, asthma, kidney_disease, skin_cancer)]
    diabetic = None if as_text(diabetic_status) is None else is_diabetic_value(diabetic_status)
    flags.append(diabetic)
    if all(flag is None for flag in flags):
        return UNKNOWN
    total = sum(1 for flag in flags if flag)
    return "3+" if total >= 3 else str(total)


COMORBIDITY = BucketSpec(
    "comorbidity",
    COMORBIDITY_FIELDS,
    _categories(["0", "1", "2", "3+"]),
    _comorbidity,
)
