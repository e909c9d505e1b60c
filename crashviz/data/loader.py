"""
Source CSV loading with schema checks, and the normalize → filter → merge pipeline.
"""
from __future__ import annotations

from pathlib import Path
from typing import NamedTuple

import pandas as pd

from crashviz.config import DATA_DIR, SOURCE_FILES, SOURCE_COLUMNS, CSV_ENCODING
from crashviz.data.merge import merge_tables
from crashviz.data.normalize import (
    normalize_accidents, normalize_drugs, normalize_distractions, normalize_weather,
    filter_drugs, filter_distractions,
)
from crashviz.data.schemas import MissingSourceError, SchemaMismatchError


class RawTables(NamedTuple):
    accident: pd.DataFrame
    drugs: pd.DataFrame
    distract: pd.DataFrame
    weather: pd.DataFrame


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def source_path(name: str, data_dir: Path = DATA_DIR) -> Path:
    return Path(data_dir) / SOURCE_FILES[name]


def read_source(name: str, data_dir: Path = DATA_DIR) -> pd.DataFrame:
    """Load one source CSV, reading only the columns we use.

    Fails fast with SchemaMismatchError if any required column is absent.
    """
    path = source_path(name, data_dir)
    if not path.is_file():
        raise MissingSourceError(name, path)

    required = list(SOURCE_COLUMNS[name])
    df = pd.read_csv(
        path,
        usecols=lambda c: c in required,
        encoding=CSV_ENCODING,
        low_memory=False,
    )
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise SchemaMismatchError(name, path, missing)
    return df


def load_sources(data_dir: Path = DATA_DIR) -> RawTables:
    """Read all four source tables from data_dir."""
    frames = {}
    for name in SOURCE_FILES:
        frames[name] = read_source(name, data_dir)
        print(f"  {SOURCE_FILES[name]}: {len(frames[name]):,} rows")
    return RawTables(**frames)


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

def build_merged(raw: RawTables) -> pd.DataFrame:
    """Normalize each table, drop noise from drugs/distractions, then merge."""
    accidents = normalize_accidents(raw.accident)

    drugs = normalize_drugs(raw.drugs)
    pre = len(drugs)
    drugs = filter_drugs(drugs)
    print(f"  Drug filter: {pre:,} → {len(drugs):,} rows, {drugs['Drug'].nunique()} drug categories kept")

    distractions = normalize_distractions(raw.distract)
    pre = len(distractions)
    distractions = filter_distractions(distractions)
    print(f"  Distraction filter: {pre:,} → {len(distractions):,} rows")

    weather = normalize_weather(raw.weather)

    merged = merge_tables(accidents, drugs, distractions, weather)
    print(f"  Merged: {len(accidents):,} cases → {len(merged):,} rows")
    return merged


def load_merged(data_dir: Path = DATA_DIR) -> pd.DataFrame:
    return build_merged(load_sources(data_dir))
