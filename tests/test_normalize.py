from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from crashviz.config import (
    MONTH_ORDER, DAY_ORDER, NORTHEAST_STATES, MIDWEST_STATES, SOUTH_STATES, WEST_STATES,
    DRUG_MIN_COUNT,
)
from crashviz.data.normalize import (
    classify_region, normalize_accidents, normalize_drugs, normalize_distractions,
    filter_drugs, filter_distractions, retype_vehicle_count,
)
from crashviz.data.schemas import SchemaMismatchError

from conftest import raw_accident


# ---------------------------------------------------------------------------
# Region classifier
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("states,region", [
    (NORTHEAST_STATES, "Northeast"),
    (MIDWEST_STATES, "Midwest"),
    (SOUTH_STATES, "South"),
    (WEST_STATES, "West"),
])
def test_classify_region_known_states(states, region):
    assert {classify_region(s) for s in states} == {region}


@pytest.mark.parametrize("value", ["", "Puerto Rico", "new york", "Atlantis", None, np.nan, 42])
def test_classify_region_unknown(value):
    assert classify_region(value) == "Unknown"


def test_region_sets_are_disjoint():
    sets = [NORTHEAST_STATES, MIDWEST_STATES, SOUTH_STATES, WEST_STATES]
    assert sum(len(s) for s in sets) == len(set().union(*sets))


def test_classify_region_strips_padding():
    assert classify_region("  Texas ") == "South"


# ---------------------------------------------------------------------------
# Field normalizer
# ---------------------------------------------------------------------------

def test_normalize_accidents_schema_and_region():
    df = normalize_accidents(raw_accident())
    assert set(df.columns) == {
        "case_id", "State", "Month", "Number_of_Vehicles", "Day", "Route", "Region",
    }
    assert df["Region"].tolist() == ["South", "Northeast", "West", "Midwest", "Unknown"]


def test_normalize_accidents_calendar_order_independent_of_input_order():
    raw = raw_accident().iloc[::-1]
    df = normalize_accidents(raw)
    assert list(df["Month"].cat.categories) == MONTH_ORDER
    assert list(df["Day"].cat.categories) == DAY_ORDER
    assert df["Month"].cat.ordered and df["Day"].cat.ordered
    assert df["Day"].cat.categories[0] == "Sunday"
    assert list(df.sort_values("Month")["Month"].unique()) == ["January", "February", "March", "December"]


@pytest.mark.filterwarnings("error::DeprecationWarning", "error::FutureWarning")
def test_normalize_accidents_unknown_month_becomes_null():
    raw = raw_accident()
    raw.loc[0, "MONTHNAME"] = "Smarch"
    raw.loc[1, "DAY_WEEKNAME"] = "Caturday"
    df = normalize_accidents(raw)
    assert pd.isna(df.loc[0, "Month"])
    assert pd.isna(df.loc[1, "Day"])
    assert df["Month"].notna().sum() == len(raw) - 1
    assert list(df["Month"].cat.categories) == MONTH_ORDER


def test_vehicle_count_numeric_before_merge():
    df = normalize_accidents(raw_accident())
    assert pd.api.types.is_numeric_dtype(df["Number_of_Vehicles"])


def test_retype_vehicle_count_levels_numeric_order():
    df = pd.DataFrame({"Number_of_Vehicles": [10, 2, 1, np.nan]})
    out = retype_vehicle_count(df)
    assert isinstance(out["Number_of_Vehicles"].dtype, pd.CategoricalDtype)
    assert list(out["Number_of_Vehicles"].cat.categories) == ["1", "2", "10"]
    assert pd.isna(out.loc[3, "Number_of_Vehicles"])


def test_missing_column_names_source_and_column():
    raw = pd.DataFrame({"ST_CASE": [1], "DRUG": ["x"]})
    with pytest.raises(SchemaMismatchError) as exc:
        normalize_drugs(raw)
    assert exc.value.source == "drugs"
    assert exc.value.missing == ["DRUGRESNAME"]
    assert "DRUGRESNAME" in str(exc.value)


# ---------------------------------------------------------------------------
# Noise filter
# ---------------------------------------------------------------------------

def _drugs(counts: dict[str, int]) -> pd.DataFrame:
    names = [name for name, n in counts.items() for _ in range(n)]
    return pd.DataFrame({"case_id": range(len(names)), "Drug": names})


def test_filter_drugs_threshold_boundary():
    df = _drugs({"Cannabinoid": DRUG_MIN_COUNT, "Opioid": DRUG_MIN_COUNT - 1})
    out = filter_drugs(df)
    assert set(out["Drug"]) == {"Cannabinoid"}
    assert len(out) == DRUG_MIN_COUNT


def test_filter_drugs_drops_sentinels_before_counting():
    df = _drugs({
        "Cannabinoid": 600,
        "Test Not Given": 900,
        "Tested, No Drugs Found/Negative": 700,
        "Not Reported": 800,
        "Reported as Unknown if Tested for Drugs": 650,
    })
    out = filter_drugs(df)
    assert set(out["Drug"]) == {"Cannabinoid"}


def test_filter_drugs_survivors_meet_threshold():
    df = _drugs({"A": 1200, "B": 501, "C": 12, "D": 499})
    out = filter_drugs(df)
    assert (out["Drug"].value_counts() >= DRUG_MIN_COUNT).all()


def test_filter_drugs_idempotent():
    df = _drugs({"A": 520, "B": 480, "Not Reported": 1000})
    once = filter_drugs(df)
    twice = filter_drugs(once)
    pd.testing.assert_frame_equal(once, twice)


def test_filter_drugs_custom_threshold():
    df = _drugs({"A": 3, "B": 2})
    assert set(filter_drugs(df, min_count=3)["Drug"]) == {"A"}


def test_filter_distractions_sentinels_and_idempotence():
    df = normalize_distractions(pd.DataFrame({
        "ST_CASE": [1, 2, 3, 4],
        "DRDISTRACTNAME": ["Not Distracted", "Not Reported", "Unknown if Distracted", "Eating or Drinking"],
    }))
    once = filter_distractions(df)
    assert once["Distraction"].tolist() == ["Eating or Drinking"]
    pd.testing.assert_frame_equal(once, filter_distractions(once))


def test_filter_requires_label_column():
    with pytest.raises(SchemaMismatchError):
        filter_distractions(pd.DataFrame({"case_id": [1]}))
