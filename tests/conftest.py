import pandas as pd
import pytest

from config import BOROUGHS


@pytest.fixture
def two_incidents():
    """One Saturday night in Brooklyn, one Wednesday morning on Staten Island."""
    return pd.DataFrame({
        "INCIDENT_KEY": ["1001", "1002"],
        "OCCUR_DATE": ["07/04/2020", "01/15/2020"],
        "OCCUR_TIME": ["23:30:00", "08:00:00"],
        "BORO": ["BROOKLYN", "STATEN ISLAND"],
    })


@pytest.fixture
def synthetic_raw():
    """
    Two years x 12 months x first week of each month x 5 boroughs x 4 times.
    Rows are repeated unevenly so the counts carry signal and noise.
    """
    times = ["02:15:00", "09:30:00", "14:00:00", "20:45:00"]
    rows = []
    key = 0
    for year in (2019, 2020):
        for month in range(1, 13):
            for day in range(1, 8):
                for b, boro in enumerate(BOROUGHS):
                    for t, occur_time in enumerate(times):
                        reps = 1
                        reps += 2 if boro == "BROOKLYN" else 0
                        reps += 1 if t == 0 else 0
                        reps += 1 if month in (6, 7, 8) else 0
                        reps += 1 if (day * 7 + month * 3 + b + t) % 4 == 0 else 0
                        for _ in range(reps):
                            key += 1
                            rows.append({
                                "INCIDENT_KEY": str(key),
                                "OCCUR_DATE": f"{month:02d}/{day:02d}/{year}",
                                "OCCUR_TIME": occur_time,
                                "BORO": boro,
                            })

    rows.append({"INCIDENT_KEY": "x1", "OCCUR_DATE": "garbage", "OCCUR_TIME": "10:00:00", "BORO": "QUEENS"})
    rows.append({"INCIDENT_KEY": "x2", "OCCUR_DATE": "03/03/2020", "OCCUR_TIME": "", "BORO": "BRONX"})
    rows.append({"INCIDENT_KEY": "x3", "OCCUR_DATE": "03/03/2020", "OCCUR_TIME": "11:00:00", "BORO": ""})
    return pd.DataFrame(rows)
