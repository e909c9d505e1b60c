"""
Column selection/renaming, region derivation, calendar ordering, noise filters.
"""
from __future__ import annotations

import pandas as pd

from crashviz.config import (
    ACCIDENT_COLUMNS, DRUG_COLUMNS, DISTRACTION_COLUMNS, WEATHER_COLUMNS,
    MONTH_ORDER, DAY_ORDER, REGION_STATES, UNKNOWN_REGION,
    DRUG_NOISE, DRUG_MIN_COUNT, DISTRACTION_NOISE,
)
from crashviz.data.schemas import SchemaMismatchError


# ---------------------------------------------------------------------------
# Region classification
# ---------------------------------------------------------------------------

def classify_region(state) -> str:
    """Return the census region for a state name, or "Unknown"."""
    if not isinstance(state, str):
        return UNKNOWN_REGION
    name = state.strip()
    for region, states in REGION_STATES:
        if name in states:
            return region
    return UNKNOWN_REGION


# ---------------------------------------------------------------------------
# Column normalisation
# ---------------------------------------------------------------------------

def _select(df: pd.DataFrame, column_map: dict[str, str], source: str) -> pd.DataFrame:
    """Keep the mapped columns and rename them to canonical names."""
    missing = [c for c in column_map if c not in df.columns]
    if missing:
        raise SchemaMismatchError(source, None, missing)
    return df[list(column_map)].rename(columns=column_map).copy()


def _strip_labels(df: pd.DataFrame, col: str) -> pd.DataFrame:
    df[col] = df[col].where(df[col].isna(), df[col].astype(str).str.strip())
    return df


def _ordered(series: pd.Series, levels: list[str]) -> pd.Series:
    """Ordered categorical in the given level order; unknown labels become null."""
    cleaned = series.where(series.isna(), series.astype(str).str.strip())
    cleaned = cleaned.where(cleaned.isin(levels))
    return pd.Categorical(cleaned, categories=levels, ordered=True)


def normalize_accidents(df: pd.DataFrame) -> pd.DataFrame:
    """Canonical accident table with Region and calendar-ordered Month/Day."""
    df = _select(df, ACCIDENT_COLUMNS, "accident")
    df = _strip_labels(df, "State")
    df = _strip_labels(df, "Route")
    df["Region"] = df["State"].map(classify_region)
    df["Month"] = _ordered(df["Month"], MONTH_ORDER)
    df["Day"] = _ordered(df["Day"], DAY_ORDER)
    df["Number_of_Vehicles"] = pd.to_numeric(df["Number_of_Vehicles"], errors="coerce")
    return df


def normalize_drugs(df: pd.DataFrame) -> pd.DataFrame:
    return _strip_labels(_select(df, DRUG_COLUMNS, "drugs"), "Drug")


def normalize_distractions(df: pd.DataFrame) -> pd.DataFrame:
    return _strip_labels(_select(df, DISTRACTION_COLUMNS, "distract"), "Distraction")


def normalize_weather(df: pd.DataFrame) -> pd.DataFrame:
    return _strip_labels(_select(df, WEATHER_COLUMNS, "weather"), "Weather")


def retype_vehicle_count(df: pd.DataFrame) -> pd.DataFrame:
    """Turn the numeric vehicle count into a categorical (post-merge only)."""
    counts = pd.to_numeric(df["Number_of_Vehicles"], errors="coerce")
    levels = sorted(int(v) for v in counts.dropna().unique())
    labels = counts.map(lambda v: str(int(v)), na_action="ignore")
    df["Number_of_Vehicles"] = pd.Categorical(labels, categories=[str(v) for v in levels])
    return df


# ---------------------------------------------------------------------------
# Noise filters
# ---------------------------------------------------------------------------

def filter_drugs(df: pd.DataFrame, min_count: int = DRUG_MIN_COUNT) -> pd.DataFrame:
    """Drop non-informative drug results, then rare drug categories.

    Frequencies are recomputed from scratch on the sentinel-free table,
    before any join.
    """
    if "Drug" not in df.columns:
        raise SchemaMismatchError("drugs", None, ["Drug"])
    df = df[~df["Drug"].isin(DRUG_NOISE)]
    counts = df["Drug"].value_counts()
    keep = counts[counts >= min_count].index
    return df[df["Drug"].isin(keep)].reset_index(drop=True)


def filter_distractions(df: pd.DataFrame) -> pd.DataFrame:
    """Drop not-distracted / not-reported / unknown distraction rows."""
    if "Distraction" not in df.columns:
        raise SchemaMismatchError("distract", None, ["Distraction"])
    return df[~df["Distraction"].isin(DISTRACTION_NOISE)].reset_index(drop=True)
