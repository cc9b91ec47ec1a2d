"""
Descriptive incident summaries.

Each table lists incident counts for one attribute in natural calendar
order (not sorted by count), ready for an external presentation layer.
"""

from typing import Dict, List, Optional

import pandas as pd
from rich.console import Console
from rich.table import Table

from config import BOROUGH_COL, SEASON_ORDER, TIME_OF_DAY_ORDER, WEEKDAY_ORDER

console = Console()


def count_by(df: pd.DataFrame, col: str, order: Optional[List] = None) -> pd.DataFrame:
    """Incident counts and share of total for one column; missing values excluded."""
    values = df[col].dropna()
    counts = values.value_counts()

    if order is not None:
        counts = counts.reindex([v for v in order if v in counts.index])
    else:
        counts = counts.sort_index()

    out = counts.rename_axis(col).reset_index(name="count")
    out["count"] = out["count"].astype("int64")
    total = out["count"].sum()
    out["share"] = out["count"] / total if total else 0.0
    return out


def yearly_trend(df: pd.DataFrame) -> pd.DataFrame:
    """Incidents per year with year-over-year percent change."""
    out = count_by(df, "year")
    out["yoy_change"] = out["count"].pct_change()
    return out


def weekday_time_of_day_crosstab(df: pd.DataFrame) -> pd.DataFrame:
    """Weekday x time-of-day counts (rows Monday..Sunday)."""
    sub = df.dropna(subset=["weekday", "time_of_day"])
    tab = pd.crosstab(sub["weekday"], sub["time_of_day"])
    return tab.reindex(index=WEEKDAY_ORDER, columns=TIME_OF_DAY_ORDER, fill_value=0)


def build_summaries(df: pd.DataFrame) -> Dict[str, pd.DataFrame]:
    """All descriptive tables, keyed by a short name."""
    summaries = {
        "by_year": yearly_trend(df),
        "by_borough": count_by(df, BOROUGH_COL),
        "by_season": count_by(df, "season", SEASON_ORDER),
        "by_time_of_day": count_by(df, "time_of_day", TIME_OF_DAY_ORDER),
        "by_weekday": count_by(df, "weekday", WEEKDAY_ORDER),
        "by_hour": count_by(df, "hour", list(range(24))),
        "by_month": count_by(df, "month", list(range(1, 13))),
        "weekend_vs_weekday": count_by(df, "is_weekend", [False, True]),
        "weekday_x_time_of_day": weekday_time_of_day_crosstab(df),
    }
    console.print(f"[green]Built {len(summaries)} summary tables.[/green]")
    return summaries


def format_cell(value) -> str:
    # float columns here are shares / changes; NaN (first year's change) prints blank
    if isinstance(value, float):
        return "" if pd.isna(value) else f"{value:.1%}"
    return str(value)


def show_summary(table_df: pd.DataFrame, title: str) -> None:
    """Print a one-attribute summary table to the console."""
    table = Table(title=title, show_lines=False)
    for col in table_df.columns:
        table.add_column(str(col), style="cyan" if col == table_df.columns[0] else "green")

    for row in table_df.itertuples(index=False):
        table.add_row(*[format_cell(v) for v in row])

    console.print(table)
