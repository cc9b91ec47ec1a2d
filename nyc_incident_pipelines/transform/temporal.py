# Adds calendar and time-of-day features: year, month, season, hour, time-of-day bucket, weekday, weekend/summer/holiday flags

import pandas as pd
import holidays
from rich.console import Console

from config import (
    DATE_COL,
    HOLIDAY_COUNTRY,
    HOLIDAY_SUBDIV,
    SEASON_BY_MONTH,
    TIME_COL,
    TIME_OF_DAY_BINS,
    WEEKEND_DAYS,
)
from nyc_incident_pipelines.transform.cleaning import (
    clean_initial_dataframe,
    parse_occur_date,
    parse_occur_time,
)
from nyc_incident_pipelines.utils.logging import log_step

console = Console()


def season_for_month(month: int) -> str:
    """Map a month number (1-12) to Winter/Spring/Summer/Fall."""
    try:
        return SEASON_BY_MONTH[int(month)]
    except KeyError:
        raise ValueError(f"month must be in 1..12, got {month!r}") from None


def time_of_day_for_hour(hour: int) -> str:
    """Map an hour (0-23) to Morning/Afternoon/Evening/Night."""
    hour = int(hour)
    for start, end, label in TIME_OF_DAY_BINS:
        if start <= hour < end:
            return label
    raise ValueError(f"hour must be in 0..23, got {hour!r}")


def _hour_of(value) -> object:
    parts = parse_occur_time(value)
    return pd.NA if parts is None else parts[0]


def add_temporal_features(
    df: pd.DataFrame,
    date_col: str = DATE_COL,
    time_col: str = TIME_COL,
) -> pd.DataFrame:
    """
    Add calendar and time-of-day features to an incident dataframe.

    Rows whose date cannot be parsed are dropped. Rows whose time cannot be
    parsed keep their date features; hour and time_of_day are NA for them.
    """
    df = df.copy()

    if not pd.api.types.is_datetime64_any_dtype(df[date_col]):
        df[date_col] = pd.to_datetime(df[date_col].map(parse_occur_date))
    df = df.dropna(subset=[date_col]).copy()

    dt = df[date_col].dt

    df["year"] = dt.year.astype("int64")
    df["month"] = dt.month.astype("int64")
    df["season"] = df["month"].map(season_for_month)
    df["weekday"] = dt.day_name()
    df["is_weekend"] = df["weekday"].isin(WEEKEND_DAYS)
    df["is_summer"] = df["season"].eq("Summer")

    if time_col in df.columns:
        hours = df[time_col].map(_hour_of)
    else:
        hours = pd.Series(pd.NA, index=df.index)
    df["hour"] = pd.array(hours.tolist(), dtype="Int64")
    df["time_of_day"] = df["hour"].map(
        lambda h: pd.NA if pd.isna(h) else time_of_day_for_hour(h)
    )

    years = sorted(df["year"].unique().tolist())
    holiday_dates = holidays.country_holidays(HOLIDAY_COUNTRY, subdiv=HOLIDAY_SUBDIV, years=years)
    df["is_holiday"] = dt.date.isin(list(holiday_dates.keys()))

    console.print("[green]Temporal features added.[/green]")
    return df


def derive_features(df: pd.DataFrame, dedupe: bool = False) -> pd.DataFrame:
    """Clean raw incident rows and derive the enriched feature set."""
    df = clean_initial_dataframe(df, dedupe=dedupe)
    df = add_temporal_features(df)
    log_step("After temporal features", df)
    return df
