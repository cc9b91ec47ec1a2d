# Core cleaning transformations used before any feature engineering
import re
from datetime import date, datetime, time
from typing import Any, Optional, Tuple
import pandas as pd
from dateutil import parser
from rich.console import Console

from config import (
    BOROUGH_COL,
    BOROUGH_NULL_MARKERS,
    DATE_COL,
    INCIDENT_KEY_COL,
    TIME_COL,
)
from nyc_incident_pipelines.utils.logging import log_dropped, log_step

console = Console()

_US_DATE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})(?:\s+.*)?$")
_ISO_DATE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})(?:[T\s].*)?$")
_DEFAULT_A = datetime(2001, 1, 1)
_DEFAULT_B = datetime(2002, 2, 2)
_CLOCK = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?(?:\.\d+)?\s*([AaPp][Mm])?$")


def standardize_column_name(col: str) -> str:
    """Convert arbitrary raw CSV column names into clean_snake_case."""
    col = re.sub(r"(.)([A-Z][a-z]+)", r"\1_\2", col)
    col = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", col)
    col = col.lower()
    col = re.sub(r"[\s\-\.\,\(\)\[\]\{\}]+", "_", col)
    col = re.sub(r"[^\w]", "", col)
    col = re.sub(r"_+", "_", col).strip("_")
    return col


def _is_missing(x: Any) -> bool:
    if x is None:
        return True
    try:
        return bool(pd.isna(x))
    except (TypeError, ValueError):
        return False


def parse_occur_date(x: Any) -> pd.Timestamp:
    """
    Parse an occurrence date with mixed formats into a midnight Timestamp.
    US (MM/DD/YYYY) and ISO forms are matched explicitly, anything else
    goes through dateutil. Unparseable input yields NaT.
    """
    if _is_missing(x):
        return pd.NaT

    if isinstance(x, (pd.Timestamp, datetime, date)):
        return pd.Timestamp(x).normalize()

    s = str(x).strip()
    if not s or s.lower() in {"nan", "nat", "none", "null"}:
        return pd.NaT

    m = _US_DATE.match(s)
    if m:
        month, day, year = (int(g) for g in m.groups())
        return _safe_timestamp(year, month, day)

    m = _ISO_DATE.match(s)
    if m:
        year, month, day = (int(g) for g in m.groups())
        return _safe_timestamp(year, month, day)

    # Parse against two different defaults: any field dateutil had to fill in
    # (year, month or day missing from the string) makes the results disagree.
    try:
        first = parser.parse(s, default=_DEFAULT_A)
        second = parser.parse(s, default=_DEFAULT_B)
    except (ValueError, OverflowError, parser.ParserError):
        return pd.NaT

    if first.date() != second.date():
        return pd.NaT
    return pd.Timestamp(first.date())


def _safe_timestamp(year: int, month: int, day: int) -> pd.Timestamp:
    try:
        return pd.Timestamp(year=year, month=month, day=day)
    except ValueError:
        return pd.NaT


def parse_occur_time(x: Any) -> Optional[Tuple[int, int, int]]:
    """Parse HH:MM[:SS] (optionally AM/PM) into (hour, minute, second), or None."""
    if _is_missing(x):
        return None

    if isinstance(x, (time, datetime, pd.Timestamp)):
        return x.hour, x.minute, x.second

    m = _CLOCK.match(str(x).strip())
    if not m:
        return None

    hour, minute = int(m.group(1)), int(m.group(2))
    second = int(m.group(3)) if m.group(3) else 0
    meridiem = m.group(4)

    if meridiem:
        if not 1 <= hour <= 12:
            return None
        hour = hour % 12 + (12 if meridiem.lower() == "pm" else 0)

    if hour > 23 or minute > 59 or second > 59:
        return None
    return hour, minute, second


def format_occur_time(parts: Optional[Tuple[int, int, int]]) -> Any:
    if parts is None:
        return pd.NA
    return "{:02d}:{:02d}:{:02d}".format(*parts)


def normalize_borough(x: Any) -> Any:
    """Upper-case and strip a borough label; blank and null-like values become NA."""
    if _is_missing(x):
        return pd.NA
    s = " ".join(str(x).split()).upper()
    if s in BOROUGH_NULL_MARKERS:
        return pd.NA
    return s


def cleanup_duplicate_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Drop duplicated columns (same name) while preserving first occurrence."""
    seen = set()
    keep = []

    for c in df.columns:
        if c not in seen:
            keep.append(c)
            seen.add(c)
        else:
            console.print(f"[yellow]Dropped duplicate column:[/yellow] {c}")

    return df.loc[:, keep]


def standardize_occurrence_fields(
    df: pd.DataFrame,
    date_col: str = DATE_COL,
    time_col: str = TIME_COL,
    borough_col: str = BOROUGH_COL,
) -> pd.DataFrame:
    """
    Standardize and validate the occurrence fields.
    - Rows with a missing or unparseable date are dropped
    - Unparseable times become NA (row kept, time features missing later)
    - Borough labels normalized, blanks become NA
    """
    console.print("\n[bold cyan]Standardizing occurrence fields...[/bold cyan]")

    missing = [c for c in (date_col, time_col, borough_col) if c not in df.columns]
    if missing:
        raise KeyError(f"Required incident columns not found: {missing}")

    df = df.copy()
    total_rows = len(df)

    df[date_col] = pd.to_datetime(df[date_col].map(parse_occur_date))
    invalid_dates = int(df[date_col].isna().sum())

    df = df.dropna(subset=[date_col]).copy()
    log_dropped("Parse occur_date", total_rows, df, "unparseable date")

    df[time_col] = df[time_col].map(parse_occur_time).map(format_occur_time)
    invalid_times = int(df[time_col].isna().sum())

    df[borough_col] = df[borough_col].map(normalize_borough)
    missing_boro = int(df[borough_col].isna().sum())

    console.print(f"[cyan]Rows: {total_rows:,}")
    console.print(f"[green]Parsed dates: {total_rows - invalid_dates:,}")
    console.print(f"[yellow]Dropped invalid dates: {invalid_dates:,}")
    console.print(f"[yellow]Unparseable times (kept): {invalid_times:,}")
    console.print(f"[yellow]Missing borough (kept): {missing_boro:,}")

    return df


def drop_duplicate_incidents(df: pd.DataFrame, key: str = INCIDENT_KEY_COL) -> pd.DataFrame:
    """Keep one row per incident key (raw exports repeat the key once per victim)."""
    if key not in df.columns:
        console.print(f"[yellow]No '{key}' column; skipping incident de-duplication.[/yellow]")
        return df

    before = len(df)
    df = df.drop_duplicates(subset=[key]).copy()
    log_dropped("Drop duplicate incidents", before, df, f"duplicate {key}")
    return df


def clean_initial_dataframe(df: pd.DataFrame, dedupe: bool = False) -> pd.DataFrame:
    """
    Recommended cleaning sequence before any feature engineering.

    Steps:
        1. Standardize column names
        2. Drop duplicate-named columns
        3. Optionally collapse repeated incident keys
        4. Standardize occurrence date, time and borough
    """
    df = df.copy()
    df.columns = [standardize_column_name(str(c)) for c in df.columns]
    df = cleanup_duplicate_columns(df)
    log_step("Standardized columns", df)

    if dedupe:
        df = drop_duplicate_incidents(df)

    return standardize_occurrence_fields(df)
