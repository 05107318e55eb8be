import polars as pl
import pytest

from popstats.reports import (
    COHORT_REPORTS,
    COHORT_REPORTS_BY_NAME,
    DISEASES,
    REPORT_NAMES,
    prevalence_frame,
    prevalence_rows,
    run_all_reports,
    run_report,
)
from tests.factories import build_record


def test_prevalence_for_scenario(scenario_records) -> None:
    rows = prevalence_rows(scenario_records)

    assert rows[0].label == "Heart Disease"
    assert rows[0].metrics == {"case_count": 2, "rate": 50.0}
    assert rows[0].population_count == 4
    # remaining conditions have no cases and keep their declared order
    assert [row.label for row in rows[1:]] == [d.name for d in DISEASES[1:]]
    assert all(row.metrics == {"case_count": 0, "rate": 0.0} for row in rows[1:])


def test_bmi_report_for_scenario(scenario_records) -> None:
    """bmi 19 is Normal under the [18.5, 25) range."""
    frame = run_report("bmi_category", scenario_records)

    assert frame.select("bmi_category", "population_count", "heart_disease_rate").rows() == [
        ("Normal", 2, 0.0),
        ("Obese Class I", 1, 100.0),
        ("Obese Class III", 1, 100.0),
    ]
    assert frame["population_count"].sum() == len(scenario_records)


def test_prevalence_sorted_by_rate_descending() -> None:
    records = [
        build_record("p1", stroke=True, asthma=True, heart_disease=False),
        build_record("p2", stroke=True, asthma=False, heart_disease=True),
        build_record("p3", stroke=True, asthma=None, heart_disease=False),
        build_record("p4", stroke=False, asthma=True, diabetic_status="Yes"),
    ]
    frame = prevalence_frame(records)

    assert frame.columns == ["condition", "population_count", "case_count", "rate"]
    assert frame.select("condition", "case_count", "rate").rows() == [
        ("Stroke", 3, 75.0),
        ("Asthma", 2, 50.0),
        ("Heart Disease", 1, 25.0),
        ("Diabetes", 1, 25.0),
        ("Kidney Disease", 0, 0.0),
        ("Skin Cancer", 0, 0.0),
    ]


def test_prevalence_counts_integer_flags() -> None:
    """0/1 flags, as SQL engines and CSV loaders return them, count like booleans."""
    records = [build_record("p1", heart_disease=1), build_record("p2", heart_disease=0)]
    [heart] = [row for row in prevalence_rows(records) if row.label == "Heart Disease"]
    assert heart.metrics == {"case_count": 1, "rate": 50.0}


def test_prevalence_groups_overlap() -> None:
    """A patient with several conditions is a case in each of them."""
    records = [build_record("p1", stroke=True, heart_disease=True, asthma=True)]
    rows = prevalence_rows(records)
    assert sum(row.metrics["case_count"] for row in rows) == 3
    assert all(row.population_count == 1 for row in rows)


def test_prevalence_accepts_a_generator() -> None:
    records = (build_record(str(i), heart_disease=i < 2) for i in range(4))
    rows = prevalence_rows(records)
    assert rows[0].metrics == {"case_count": 2, "rate": 50.0}


def test_null_bmi_is_counted_as_unknown() -> None:
    records = [build_record("p1", bmi=None), build_record("p2", bmi=23)]
    frame = run_report("bmi_category", records)
    assert frame.select("bmi_category", "population_count").rows() == [
        ("Normal", 1),
        ("Unknown", 1),
    ]


def test_every_cohort_report_conserves_population() -> None:
    """Every record lands in exactly one bucket, Unknown included."""
    records = [
        build_record(
            str(i),
            age=15 + i * 4,
            bmi=16 + i,
            sleep_time=i % 11,
            mental_health_days=(i * 3) % 31,
            physical_health_days=i % 5,
            smoking_status=["Never", "Former", "Current", None][i % 4],
            physical_activity=[True, False, None][i % 3],
            general_health=["Excellent", "Good", "Poor", "bad"][i % 4],
            gender=["Male", "Female"][i % 2],
            stroke=i % 7 == 0,
            heart_disease=i % 3 == 0,
        )
        for i in range(25)
    ]
    for report in COHORT_REPORTS:
        frame = report.frame(records)
        assert frame["population_count"].sum() == len(records), report.name


def test_every_report_is_empty_for_empty_input() -> None:
    tables = run_all_reports([])
    assert list(tables) == REPORT_NAMES
    assert all(table.is_empty() for table in tables.values())


def test_run_all_reports_selects_in_registry_order(scenario_records) -> None:
    tables = run_all_reports(scenario_records, ["sleep_duration", "prevalence"])
    assert list(tables) == ["prevalence", "sleep_duration"]
    assert tables["sleep_duration"].rows() == [("Unknown", 4, 50.0, None)]


def test_unknown_report_name_raises() -> None:
    with pytest.raises(ValueError, match="Unknown report"):
        run_report("cholesterol", [])
    with pytest.raises(ValueError, match="Unknown reports"):
        run_all_reports([], ["cholesterol"])


def test_age_cohort_report_metrics() -> None:
    records = [
        build_record("p1", age=70, heart_disease=True, diabetic_status="Yes", bmi=30),
        build_record("p2", age=66, heart_disease=False, diabetic_status="No", bmi=25),
        build_record("p3", age=20, stroke=True, bmi=21.15),
    ]
    frame = COHORT_REPORTS_BY_NAME["age_cohort"].frame(records)
    assert frame.to_dicts() == [
        {
            "age_cohort": "18-24",
            "population_count": 1,
            "heart_disease_rate": 0.0,
            "stroke_rate": 100.0,
            "diabetes_rate": 0.0,
            "avg_bmi": 21.2,
        },
        {
            "age_cohort": "65+",
            "population_count": 2,
            "heart_disease_rate": 50.0,
            "stroke_rate": 0.0,
            "diabetes_rate": 50.0,
            "avg_bmi": 27.5,
        },
    ]


def test_report_frames_have_fixed_schema() -> None:
    frame = run_report("sleep_duration", [])
    assert dict(frame.schema) == {
        "sleep_duration": pl.String,
        "population_count": pl.Int64,
        "heart_disease_rate": pl.Float64,
        "avg_mental_health_days": pl.Float64,
    }
