from __future__ import annotations

import pandas as pd
import pytest

from crashviz.data.loader import load_sources, read_source
from crashviz.data.schemas import LoadError, MissingSourceError, SchemaMismatchError
from crashviz.data.store import CrashStore


def test_read_source_keeps_only_contract_columns(data_dir):
    df = read_source("accident", data_dir)
    assert "FATALS" not in df.columns
    assert len(df) == 5


def test_load_sources_reads_all_four(data_dir):
    raw = load_sources(data_dir)
    assert len(raw.accident) == 5
    assert len(raw.drugs) == 503
    assert len(raw.distract) == 4
    assert len(raw.weather) == 4


def test_missing_file(data_dir):
    (data_dir / "weather.csv").unlink()
    with pytest.raises(MissingSourceError) as exc:
        read_source("weather", data_dir)
    assert exc.value.source == "weather"
    assert "weather.csv" in str(exc.value)


def test_schema_mismatch_names_file_and_columns(data_dir):
    pd.DataFrame({"ST_CASE": [1], "RAIN": ["yes"]}).to_csv(data_dir / "weather.csv", index=False)
    with pytest.raises(SchemaMismatchError) as exc:
        read_source("weather", data_dir)
    err = exc.value
    assert err.source == "weather"
    assert err.path.name == "weather.csv"
    assert err.missing == ["WEATHERNAME"]
    assert "weather.csv" in str(err) and "WEATHERNAME" in str(err)


def test_schema_mismatch_lists_every_missing_column(data_dir):
    pd.DataFrame({"ST_CASE": [1], "STATENAME": ["Ohio"]}).to_csv(data_dir / "accident.csv", index=False)
    with pytest.raises(SchemaMismatchError) as exc:
        read_source("accident", data_dir)
    assert exc.value.missing == ["MONTHNAME", "VE_TOTAL", "DAY_WEEKNAME", "ROUTENAME"]


def test_store_from_files_fails_fast(data_dir):
    (data_dir / "drugs.csv").unlink()
    with pytest.raises(LoadError):
        CrashStore.from_files(data_dir)


def test_store_from_files_matches_in_memory_pipeline(data_dir, store):
    loaded = CrashStore.from_files(data_dir)
    assert loaded.row_count() == store.row_count() == 6
    assert loaded.case_count() == 5
