import pandas as pd

from nyc_incident_pipelines.utils import logging as plog


def test_log_step_and_clear():
    plog.clear_pipeline_log()
    df = pd.DataFrame({"a": [1, 2, 3]})

    plog.log_step("step one", df)
    dropped = plog.log_dropped("filter", 5, df, "bad rows")

    assert dropped == 2
    assert [e["step"] for e in plog.pipeline_log] == ["step one", "filter (bad rows)"]
    assert plog.pipeline_log[0]["rows"] == 3
    assert plog.pipeline_log[1]["dropped"] == 2

    plog.show_pipeline_table()
    plog.clear_pipeline_log()
    assert plog.pipeline_log == []


def test_empty_frame_logged_as_na():
    plog.clear_pipeline_log()
    plog.log_step("empty", pd.DataFrame())
    assert plog.pipeline_log[0]["rows"] == "N/A"
