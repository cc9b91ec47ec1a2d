from pathlib import Path

# Project Root
PROJECT_ROOT = Path(__file__).resolve().parent

# Data Directory
DATA_DIR = PROJECT_ROOT / "data"

RAW_DIR = DATA_DIR / "raw"

# Input Dataset
INCIDENTS_CSV = RAW_DIR / "NYPD_Shooting_Incident_Data__Historic_.csv"

# Reports
REPORTS_DIR = PROJECT_ROOT / "reports"
TABLES_DIR = REPORTS_DIR / "tables"

# Raw column names (after standardize_column_name)
INCIDENT_KEY_COL = "incident_key"
DATE_COL = "occur_date"
TIME_COL = "occur_time"
BOROUGH_COL = "boro"

# Known borough labels
BOROUGHS = ["BRONX", "BROOKLYN", "MANHATTAN", "QUEENS", "STATEN ISLAND"]

# Null-like borough markers
BOROUGH_NULL_MARKERS = {"", "NAN", "NONE", "NULL", "(NULL)", "UNKNOWN"}

# Season buckets (month -> season)
SEASON_BY_MONTH = {
    12: "Winter", 1: "Winter", 2: "Winter",
    3: "Spring", 4: "Spring", 5: "Spring",
    6: "Summer", 7: "Summer", 8: "Summer",
    9: "Fall", 10: "Fall", 11: "Fall",
}
SEASON_ORDER = ["Winter", "Spring", "Summer", "Fall"]

# Time-of-day buckets: (start hour inclusive, end hour exclusive, label)
# 23:00 onwards counts as Night.
TIME_OF_DAY_BINS = [
    (0, 6, "Night"),
    (6, 12, "Morning"),
    (12, 18, "Afternoon"),
    (18, 23, "Evening"),
    (23, 24, "Night"),
]
TIME_OF_DAY_ORDER = ["Morning", "Afternoon", "Evening", "Night"]

WEEKDAY_ORDER = [
    "Monday", "Tuesday", "Wednesday", "Thursday",
    "Friday", "Saturday", "Sunday",
]
WEEKEND_DAYS = {"Saturday", "Sunday"}

# Holiday calendar
HOLIDAY_COUNTRY = "US"
HOLIDAY_SUBDIV = "NY"

# Grouping key for incident counts
GROUP_KEY = [
    "year",
    BOROUGH_COL,
    "season",
    "time_of_day",
    "is_weekend",
    "is_summer",
    "month",
]

# Count model factors
MODEL_CATEGORICAL = [BOROUGH_COL, "season", "time_of_day", "is_weekend", "is_summer"]
MODEL_NUMERIC = ["month", "year"]
MODEL_TARGET = "count"

# Significance level and report size
ALPHA = 0.05
TOP_N = 10

# W&B
WANDB_PROJECT = "nyc-incident-analysis"


def ensure_output_dirs(base_dir: Path = TABLES_DIR) -> Path:
    """Create the output directory tree if missing and return it."""
    base_dir = Path(base_dir)
    base_dir.mkdir(parents=True, exist_ok=True)
    return base_dir
