import polars as pl
import pytest

from tabkit.engine.polars.typed_dataframe import Col, TypedLazyFrame


class Vitals(TypedLazyFrame):
    patient_id: Col[str]
    bmi: Col[float | None]


class VitalsWithSleep(Vitals):
    sleep_time: Col[float | None]


class Flags(TypedLazyFrame):
    stroke: Col[bool | None]


class Combined(VitalsWithSleep, Flags):
    asthma: Col[bool | None]


def test_behaves_like_polars_lazyframe():
    df = pl.LazyFrame({"patient_id": ["a", "b"], "bmi": [22.5, None]})
    vitals = Vitals.from_df(df)
    assert vitals.filter(Vitals.bmi.is_not_null()).select(Vitals.patient_id).collect().to_dicts() == [
        {"patient_id": "a"}
    ]


def test_accepts_eager_frame():
    vitals = Vitals.from_df(pl.DataFrame({"patient_id": ["a"], "bmi": [30.0]}))
    assert vitals.collect().height == 1


def test_column_names_follow_inheritance():
    assert Vitals.column_names() == ["patient_id", "bmi"]
    assert VitalsWithSleep.column_names() == ["patient_id", "bmi", "sleep_time"]
    assert set(Combined.column_names()) == {"patient_id", "bmi", "sleep_time", "stroke", "asthma"}


def test_fail_wrong_schema():
    df = pl.LazyFrame({"patient_id": ["a"], "bmi": ["heavy"]})
    with pytest.raises(Vitals.SchemaError):
        Vitals.from_df(df)


def test_fail_null_in_required_column():
    df = pl.DataFrame({"patient_id": [None, "b"], "bmi": [20.0, 21.0]}, schema={"patient_id": pl.String, "bmi": pl.Float64})
    with pytest.raises(Vitals.SchemaError):
        Vitals.from_df(df)


def test_skip_validation():
    df = pl.LazyFrame({"patient_id": ["a"], "bmi": ["heavy"]})
    assert Vitals.from_df(df, validate=False).collect().height == 1


def test_from_dicts():
    vitals = Vitals.from_dicts(
        [{"patient_id": "a", "bmi": 19.0}, {"patient_id": "b", "bmi": None}],
        {"patient_id": pl.String, "bmi": pl.Float64},
    )
    assert vitals.select(Vitals.bmi.mean()).collect().item() == 19.0
