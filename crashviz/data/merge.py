"""
Left-join the accident table with its drug, distraction and weather records.
"""
from __future__ import annotations

import pandas as pd

from crashviz.config import CASE_KEY, MERGED_COLUMNS
from crashviz.data.normalize import retype_vehicle_count


def merge_tables(
    accidents: pd.DataFrame,
    drugs: pd.DataFrame,
    distractions: pd.DataFrame,
    weather: pd.DataFrame,
) -> pd.DataFrame:
    """left(left(left(accident, drug), distraction), weather) on the case key.

    A case with several drugs and several distractions yields one row per
    combination. Nothing is deduplicated and no base case is ever dropped.
    """
    merged = accidents.merge(drugs, on=CASE_KEY, how="left")
    merged = merged.merge(distractions, on=CASE_KEY, how="left")
    merged = merged.merge(weather, on=CASE_KEY, how="left")

    merged = retype_vehicle_count(merged)
    return merged[MERGED_COLUMNS].reset_index(drop=True)
