import pandas as pd
import pytest

from nyc_incident_pipelines.transform.cleaning import (
    clean_initial_dataframe,
    drop_duplicate_incidents,
    normalize_borough,
    parse_occur_date,
    parse_occur_time,
    standardize_column_name,
    standardize_occurrence_fields,
)


def test_standardize_column_name():
    assert standardize_column_name("OCCUR_DATE") == "occur_date"
    assert standardize_column_name("IncidentKey") == "incident_key"
    assert standardize_column_name("Occur Time") == "occur_time"
    assert standardize_column_name("BORO") == "boro"


def test_parse_occur_date_formats():
    assert parse_occur_date("07/04/2020") == pd.Timestamp("2020-07-04")
    assert parse_occur_date("2020-01-15") == pd.Timestamp("2020-01-15")
    assert parse_occur_date("1/5/2021 12:00:00 AM") == pd.Timestamp("2021-01-05")
    assert parse_occur_date("July 4, 2020") == pd.Timestamp("2020-07-04")
    assert parse_occur_date("4 Jul 2020 23:30") == pd.Timestamp("2020-07-04")
    assert parse_occur_date(pd.Timestamp("2020-07-04 13:45")) == pd.Timestamp("2020-07-04")


@pytest.mark.parametrize("value", [
    None, "", "   ", "nan", float("nan"), "garbage", "13/45/2020", "02/30/2021",
    # partial dates must not be completed from the current date
    "10:00:00", "Tuesday", "5", "July", "2019", "July 4", "2020-07",
])
def test_parse_occur_date_unparseable(value):
    assert pd.isna(parse_occur_date(value))


def test_parse_occur_time():
    assert parse_occur_time("23:30:00") == (23, 30, 0)
    assert parse_occur_time("8:00") == (8, 0, 0)
    assert parse_occur_time("11:30 PM") == (23, 30, 0)
    assert parse_occur_time("12:15 am") == (0, 15, 0)
    assert parse_occur_time("00:00:00") == (0, 0, 0)


@pytest.mark.parametrize("value", [None, "", "24:00:00", "12:61", "noon", "13:00 PM", float("nan")])
def test_parse_occur_time_unparseable(value):
    assert parse_occur_time(value) is None


def test_normalize_borough():
    assert normalize_borough("  brooklyn ") == "BROOKLYN"
    assert normalize_borough("Staten  Island") == "STATEN ISLAND"
    for blank in ["", "   ", None, "(null)", "Unknown", float("nan")]:
        assert normalize_borough(blank) is pd.NA


def test_standardize_occurrence_fields_policies():
    df = pd.DataFrame({
        "occur_date": ["07/04/2020", "bad", None, "01/15/2020"],
        "occur_time": ["23:30:00", "10:00:00", "10:00:00", "??"],
        "boro": ["BROOKLYN", "QUEENS", "BRONX", " "],
    })
    out = standardize_occurrence_fields(df)

    # Unparseable and missing dates dropped; unparseable time kept as NA
    assert len(out) == 2
    assert list(out["occur_date"]) == [pd.Timestamp("2020-07-04"), pd.Timestamp("2020-01-15")]
    assert out["occur_time"].iloc[0] == "23:30:00"
    assert pd.isna(out["occur_time"].iloc[1])
    assert pd.isna(out["boro"].iloc[1])

    # Input untouched
    assert len(df) == 4


def test_standardize_occurrence_fields_missing_column():
    with pytest.raises(KeyError):
        standardize_occurrence_fields(pd.DataFrame({"occur_date": ["07/04/2020"]}))


def test_clean_initial_dataframe_standardizes_headers(two_incidents):
    out = clean_initial_dataframe(two_incidents)
    assert {"incident_key", "occur_date", "occur_time", "boro"} <= set(out.columns)
    assert pd.api.types.is_datetime64_any_dtype(out["occur_date"])


def test_drop_duplicate_incidents():
    df = pd.DataFrame({"incident_key": ["1", "1", "2"], "boro": ["BRONX", "BRONX", "QUEENS"]})
    assert len(drop_duplicate_incidents(df)) == 2
    # No key column: frame returned as-is
    assert len(drop_duplicate_incidents(df.drop(columns="incident_key"))) == 3
