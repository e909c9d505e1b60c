from __future__ import annotations

import pandas as pd
import pytest

from crashviz.config import MERGED_COLUMNS
from crashviz.data.store import CrashStore


def raw_accident() -> pd.DataFrame:
    return pd.DataFrame({
        "ST_CASE": [1, 2, 3, 4, 5],
        "STATENAME": ["Alabama", "New York", "California", "Ohio", "Puerto Rico"],
        "MONTHNAME": ["January", "January", "February", "March", "December"],
        "VE_TOTAL": [2, 1, 3, 1, 2],
        "DAY_WEEKNAME": ["Sunday", "Monday", "Saturday", "Sunday", "Friday"],
        "ROUTENAME": ["State Highway", "Interstate", "Local Street", "Interstate", "County Road"],
        "FATALS": [1, 1, 2, 1, 1],  # extra column, ignored
    })


def raw_drugs() -> pd.DataFrame:
    rows = [
        (1, "Cannabinoid"),
        (1, "Test Not Given"),
        (2, "Cannabinoid"),
        (3, "Amphetamine"),  # rare, dropped
    ]
    # Unmatched case keeps Cannabinoid above the frequency threshold
    rows += [(9999, "Cannabinoid")] * 499
    return pd.DataFrame(rows, columns=["ST_CASE", "DRUGRESNAME"])


def raw_distract() -> pd.DataFrame:
    return pd.DataFrame({
        "ST_CASE": [1, 2, 2, 3],
        "DRDISTRACTNAME": [
            "Not Distracted",
            "Talking or Listening to Cellular Phone",
            "Inattention (Inattentive), Details Unknown",
            "Not Reported",
        ],
    })


def raw_weather() -> pd.DataFrame:
    return pd.DataFrame({
        "ST_CASE": [1, 2, 3, 4],
        "WEATHERNAME": ["Clear", "Rain", "Clear", "Snow"],
    })


def merged_frame(**columns) -> pd.DataFrame:
    """Synthetic merged table; unspecified columns are null."""
    n = len(next(iter(columns.values())))
    data = {}
    for col in MERGED_COLUMNS:
        data[col] = columns.get(col, [None] * n)
    if "case_id" not in columns:
        data["case_id"] = list(range(1, n + 1))
    return pd.DataFrame(data)


@pytest.fixture
def raw_tables():
    return raw_accident(), raw_drugs(), raw_distract(), raw_weather()


@pytest.fixture
def store(raw_tables) -> CrashStore:
    return CrashStore.from_tables(*raw_tables)


@pytest.fixture
def data_dir(tmp_path, raw_tables):
    """The four raw tables written as source CSVs."""
    names = ["accident.csv", "drugs.csv", "distract.csv", "weather.csv"]
    for name, df in zip(names, raw_tables):
        df.to_csv(tmp_path / name, index=False)
    return tmp_path


@pytest.fixture
def make_store():
    """Factory: CrashStore over a synthetic merged table."""
    def _make(kinds=None, **columns) -> CrashStore:
        return CrashStore(merged_frame(**columns), kinds=kinds)
    return _make
