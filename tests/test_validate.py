import pandas as pd
import pytest

from config import GROUP_KEY
from nyc_incident_pipelines.validate import (
    create_snapshot,
    run_count_validations,
    run_validation_checks,
    show_missing_comparison,
    show_missingness,
    validate_counts_positive,
    validate_counts_schema,
    validate_counts_unique,
)
from nyc_incident_pipelines.validate import wandb_logging


def _counts(rows):
    return pd.DataFrame(rows, columns=GROUP_KEY + ["count"])


GOOD_ROW = [2020, "BROOKLYN", "Summer", "Night", True, True, 7, 3]


def test_count_validations_pass():
    counts = _counts([GOOD_ROW, [2020, "BRONX", "Summer", "Night", True, True, 7, 1]])
    assert run_count_validations(counts) is counts


def test_duplicate_keys_rejected():
    with pytest.raises(ValueError):
        validate_counts_unique(_counts([GOOD_ROW, GOOD_ROW]))


def test_zero_counts_rejected():
    row = GOOD_ROW[:-1] + [0]
    with pytest.raises(ValueError):
        validate_counts_positive(_counts([row]))


def test_missing_schema_column_rejected():
    with pytest.raises(ValueError):
        validate_counts_schema(_counts([GOOD_ROW]).drop(columns="season"))


def test_run_count_validations_propagates_failure():
    with pytest.raises(ValueError):
        run_count_validations(_counts([GOOD_ROW, GOOD_ROW]), show_quality_report=False)


def test_validation_checks_report_statuses():
    df = pd.DataFrame({
        "incident_key": ["1", "1", "2"],
        "occur_date": pd.to_datetime(["2020-01-01"] * 3),
        "occur_time": ["10:00:00", None, "11:00:00"],
        "boro": ["BROOKLYN", "BROOKLYN", "JERSEY CITY"],
    })
    results = run_validation_checks(df, "test")

    assert results["incident_key_unique"] == "WARN"
    assert results["occur_date_complete"] == "PASS"
    assert results["occur_time_complete"] == "WARN"
    assert results["borough_labels"] == "FAIL"


def test_create_snapshot():
    df = pd.DataFrame({"a": [1, None, 3, None], "b": [1, 2, 3, 4]})
    snap = create_snapshot(df)
    assert snap["a"] == (2, 50.0)
    assert snap["b"] == (0, 0.0)


def test_missing_date_or_borough_still_fails():
    df = pd.DataFrame({
        "occur_date": pd.to_datetime(["2020-01-01", None, "2020-01-03"]),
        "occur_time": ["10:00:00"] * 3,
        "boro": ["BROOKLYN", None, "QUEENS"],
    })
    results = run_validation_checks(df, "test")
    assert results["occur_date_complete"] == "FAIL"
    assert results["boro_complete"] == "FAIL"
    assert results["occur_time_complete"] == "PASS"


def test_missing_comparison_against_earlier_snapshot():
    before = pd.DataFrame({"a": [None, None, 3, 4], "b": [1, 2, 3, 4]})
    snap = create_snapshot(before)
    after = pd.DataFrame({"a": [1.0, 2.0, 3.0], "b": [1, None, 3]})

    out = show_missing_comparison(after, snap, "test").set_index("column")
    assert out.loc["a", ["before", "after", "change"]].tolist() == [2, 0, -2]
    assert out.loc["b", ["before", "after", "change"]].tolist() == [0, 1, 1]


def test_show_missingness_counts():
    df = pd.DataFrame({"a": [1, None, None], "b": ["x", "y", "z"]})
    missing = show_missingness(df, "test")
    assert missing["a"] == 2
    assert missing["b"] == 0


def test_wandb_logging_skips_without_run(monkeypatch, tmp_path):
    monkeypatch.setattr(wandb_logging, "WANDB_AVAILABLE", False)
    path = tmp_path / "t.csv"
    assert wandb_logging.log_table_artifact(path, "t", "table", df=pd.DataFrame({"a": [1]})) is False
    assert not path.exists()
