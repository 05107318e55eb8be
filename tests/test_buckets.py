import pytest

from popstats.aggregation import BucketSpecError
from popstats.buckets import (
    AGE_COHORT,
    BMI_CATEGORY,
    COMORBIDITY,
    GENERAL_HEALTH,
    MENTAL_HEALTH,
    PHYSICAL_ACTIVITY,
    SLEEP_DURATION,
    SMOKING_STATUS,
    categorical_buckets,
    range_buckets,
)
from tests.factories import build_record


@pytest.mark.parametrize(
    ("spec", "field", "value", "label"),
    [
        (BMI_CATEGORY, "bmi", 25.0, "Overweight"),
        (BMI_CATEGORY, "bmi", 24.99, "Normal"),
        (BMI_CATEGORY, "bmi", 18.5, "Normal"),
        (BMI_CATEGORY, "bmi", 18.49, "Underweight"),
        (BMI_CATEGORY, "bmi", 40, "Obese Class III"),
        (AGE_COHORT, "age", 65, "65+"),
        (AGE_COHORT, "age", 64.9, "55-64"),
        (AGE_COHORT, "age", 18, "18-24"),
        (AGE_COHORT, "age", 17, "Unknown"),
        (SLEEP_DURATION, "sleep_time", 9.0, ">=9"),
        (SLEEP_DURATION, "sleep_time", 8.99, "7-8.9"),
        (SLEEP_DURATION, "sleep_time", 0, "<5"),
        (MENTAL_HEALTH, "mental_health_days", 0, "0"),
        (MENTAL_HEALTH, "mental_health_days", 1, "1-7"),
        (MENTAL_HEALTH, "mental_health_days", 21, "15-21"),
        (MENTAL_HEALTH, "mental_health_days", 22, ">21"),
        (MENTAL_HEALTH, "mental_health_days", 21.5, "15-21"),
        (SLEEP_DURATION, "sleep_time", 8.5, "7-8.9"),
        (MENTAL_HEALTH, "mental_health_days", -1, "Unknown"),
    ],
)
def test_boundary_values_land_in_one_bucket(spec, field, value, label) -> None:
    assert spec.bucket_of(build_record(**{field: value})) == label


@pytest.mark.parametrize("value", [None, "", "abc", float("nan"), True, object()])
def test_unusable_numeric_values_are_unknown(value) -> None:
    assert BMI_CATEGORY.bucket_of(build_record(bmi=value)) == "Unknown"


def test_numeric_strings_are_bucketed() -> None:
    assert BMI_CATEGORY.bucket_of(build_record(bmi=" 31.2 ")) == "Obese Class I"


def test_categorical_buckets_match_case_insensitively() -> None:
    assert SMOKING_STATUS.bucket_of(build_record(smoking_status=" former ")) == "Former"
    assert SMOKING_STATUS.bucket_of(build_record(smoking_status="Sometimes")) == "Unknown"
    assert GENERAL_HEALTH.bucket_of(build_record(general_health="VERY GOOD")) == "Very good"


def test_boolean_buckets() -> None:
    assert PHYSICAL_ACTIVITY.bucket_of(build_record(physical_activity=True)) == "Active"
    assert PHYSICAL_ACTIVITY.bucket_of(build_record(physical_activity="No")) == "Sedentary"
    assert PHYSICAL_ACTIVITY.bucket_of(build_record(physical_activity=None)) == "Unknown"
    assert PHYSICAL_ACTIVITY.bucket_of(build_record(physical_activity=1)) == "Active"
    assert PHYSICAL_ACTIVITY.bucket_of(build_record(physical_activity=0)) == "Sedentary"
    assert PHYSICAL_ACTIVITY.bucket_of(build_record(physical_activity=2)) == "Unknown"


def test_unknown_is_ranked_last() -> None:
    for spec in (AGE_COHORT, BMI_CATEGORY, SMOKING_STATUS, PHYSICAL_ACTIVITY, COMORBIDITY):
        assert spec.labels[-1] == "Unknown"
        assert spec.rank_of("Unknown") == max(spec.rank_of(label) for label in spec.labels)


def test_comorbidity_counts_true_flags() -> None:
    assert COMORBIDITY.bucket_of(build_record(stroke=False, asthma=False)) == "0"
    assert COMORBIDITY.bucket_of(build_record(stroke=True, diabetic_status="Yes")) == "2"
    assert (
        COMORBIDITY.bucket_of(
            build_record(stroke=True, asthma=True, kidney_disease=True, skin_cancer=True)
        )
        == "3+"
    )
    assert COMORBIDITY.bucket_of(build_record(diabetic_status="No, borderline diabetes")) == "0"
    assert COMORBIDITY.bucket_of(build_record()) == "Unknown"


def test_range_bounds_must_ascend() -> None:
    with pytest.raises(BucketSpecError, match="ascending"):
        range_buckets("bad", "bmi", [("High", 30), ("Low", 10)])


def test_range_needs_at_least_one_bound() -> None:
    with pytest.raises(BucketSpecError):
        range_buckets("bad", "bmi", [])


def test_unknown_cannot_be_declared_explicitly() -> None:
    with pytest.raises(BucketSpecError):
        categorical_buckets("bad", "race", ["White", "Unknown"])
