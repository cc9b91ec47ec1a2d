import pandas as pd
import pytest

from nyc_incident_pipelines.ingestion.incident_ingest import load_incidents, read_incident_file


def test_read_csv_keeps_strings(tmp_path, two_incidents):
    path = tmp_path / "incidents.csv"
    two_incidents.to_csv(path, index=False)

    df = read_incident_file(path)
    assert df["INCIDENT_KEY"].tolist() == ["1001", "1002"]
    assert df["OCCUR_TIME"].tolist() == ["23:30:00", "08:00:00"]


def test_blank_cells_read_as_missing(tmp_path):
    path = tmp_path / "incidents.csv"
    path.write_text("OCCUR_DATE,OCCUR_TIME,BORO\n01/01/2020,10:00:00,\n")

    df = read_incident_file(path)
    assert pd.isna(df["BORO"].iloc[0])


def test_load_multiple_files(tmp_path, two_incidents):
    a, b = tmp_path / "a.csv", tmp_path / "b.csv"
    two_incidents.to_csv(a, index=False)
    two_incidents.to_csv(b, index=False)

    assert len(load_incidents([a, b])) == 4


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_incident_file(tmp_path / "nope.csv")


def test_unsupported_suffix(tmp_path):
    path = tmp_path / "incidents.xlsx"
    path.write_text("x")
    with pytest.raises(ValueError):
        read_incident_file(path)
