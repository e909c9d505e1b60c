"""
Crash Explorer — Configuration: paths, source file contract, constants.
"""
import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths: override with CRASH_DATA_DIR / CRASH_REPORTS_DIR for deployment
# ---------------------------------------------------------------------------
_data_dir = Path(os.environ.get("CRASH_DATA_DIR", str(Path(__file__).resolve().parent.parent / "data")))
DATA_DIR = _data_dir
REPORTS_DIR = Path(os.environ.get("CRASH_REPORTS_DIR", str(_data_dir / "reports")))

# FARS exports are latin-1, not UTF-8
CSV_ENCODING = os.environ.get("CRASH_CSV_ENCODING", "latin-1")

# ---------------------------------------------------------------------------
# Source files (name → file under DATA_DIR)
# ---------------------------------------------------------------------------
SOURCE_FILES = {
    "accident": "accident.csv",
    "drugs": "drugs.csv",
    "distract": "distract.csv",
    "weather": "weather.csv",
}

CASE_KEY = "case_id"

# ---------------------------------------------------------------------------
# Column mapping from raw FARS CSV → canonical names, per source
# ---------------------------------------------------------------------------
ACCIDENT_COLUMNS = {
    "ST_CASE": CASE_KEY,
    "STATENAME": "State",
    "MONTHNAME": "Month",
    "VE_TOTAL": "Number_of_Vehicles",
    "DAY_WEEKNAME": "Day",
    "ROUTENAME": "Route",
}

DRUG_COLUMNS = {
    "ST_CASE": CASE_KEY,
    "DRUGRESNAME": "Drug",
}

DISTRACTION_COLUMNS = {
    "ST_CASE": CASE_KEY,
    "DRDISTRACTNAME": "Distraction",
}

WEATHER_COLUMNS = {
    "ST_CASE": CASE_KEY,
    "WEATHERNAME": "Weather",
}

SOURCE_COLUMNS = {
    "accident": ACCIDENT_COLUMNS,
    "drugs": DRUG_COLUMNS,
    "distract": DISTRACTION_COLUMNS,
    "weather": WEATHER_COLUMNS,
}

# Column order of the merged table
MERGED_COLUMNS = [
    CASE_KEY, "State", "Region", "Month", "Day", "Route",
    "Number_of_Vehicles", "Drug", "Distraction", "Weather",
]

# ---------------------------------------------------------------------------
# Calendar orderings
# ---------------------------------------------------------------------------
MONTH_ORDER = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

DAY_ORDER = [
    "Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday",
]

# ---------------------------------------------------------------------------
# Census regions (state name → region by set membership)
# ---------------------------------------------------------------------------
NORTHEAST_STATES = {
    "Connecticut", "Maine", "Massachusetts", "New Hampshire", "Rhode Island",
    "Vermont", "New Jersey", "New York", "Pennsylvania",
}

MIDWEST_STATES = {
    "Illinois", "Indiana", "Michigan", "Ohio", "Wisconsin",
    "Iowa", "Kansas", "Minnesota", "Missouri", "Nebraska",
    "North Dakota", "South Dakota",
}

SOUTH_STATES = {
    "Delaware", "District of Columbia", "Florida", "Georgia", "Maryland",
    "North Carolina", "South Carolina", "Virginia", "West Virginia",
    "Alabama", "Kentucky", "Mississippi", "Tennessee",
    "Arkansas", "Louisiana", "Oklahoma", "Texas",
}

WEST_STATES = {
    "Arizona", "Colorado", "Idaho", "Montana", "Nevada", "New Mexico",
    "Utah", "Wyoming", "Alaska", "California", "Hawaii", "Oregon", "Washington",
}

# Order matters only for display; the sets are disjoint
REGION_STATES = [
    ("Northeast", NORTHEAST_STATES),
    ("Midwest", MIDWEST_STATES),
    ("South", SOUTH_STATES),
    ("West", WEST_STATES),
]
UNKNOWN_REGION = "Unknown"

# ---------------------------------------------------------------------------
# Noise filter
# ---------------------------------------------------------------------------
DRUG_NOISE = {
    "Test Not Given",
    "Tested, No Drugs Found/Negative",
    "Not Reported",
    "Reported as Unknown if Tested for Drugs",
}

# Drug categories under this many rows (pre-join) are dropped
DRUG_MIN_COUNT = 500

DISTRACTION_NOISE = {
    "Not Distracted",
    "Not Reported",
    "Unknown if Distracted",
}

# ---------------------------------------------------------------------------
# Charts & UI defaults
# ---------------------------------------------------------------------------
HISTOGRAM_BINS = 30

DEFAULT_PRIMARY = "Month"
DEFAULT_SECONDARY = "Number_of_Vehicles"
DEFAULT_SUMMARY = "Month"
