"""
CrashStore — immutable in-memory merged crash table.

Built once at startup and injected into the query layer; every query is a
non-destructive filter/aggregation over it.
"""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, Mapping, Optional

import pandas as pd

from crashviz.config import CASE_KEY, DATA_DIR, MONTH_ORDER, DAY_ORDER
from crashviz.data.loader import RawTables, build_merged, load_sources
from crashviz.data.schemas import (
    PRIMARY_CHOICES, VARIABLE_KINDS, Variable, VariableKind,
)


class CrashStore:
    """Read-only merged crash data with metadata accessors."""

    def __init__(
        self,
        merged: pd.DataFrame,
        kinds: Optional[Mapping[Variable, VariableKind]] = None,
    ) -> None:
        self._df = merged.copy()
        self._kinds = dict(VARIABLE_KINDS)
        if kinds:
            self._kinds.update({Variable.parse(k): VariableKind(v) for k, v in kinds.items()})

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_files(cls, data_dir: Path = DATA_DIR) -> "CrashStore":
        """Load the four source CSVs and build the merged table."""
        print(f"Loading crash data from {data_dir}...")
        return cls(build_merged(load_sources(data_dir)))

    @classmethod
    def from_tables(
        cls,
        accident: pd.DataFrame,
        drugs: pd.DataFrame,
        distract: pd.DataFrame,
        weather: pd.DataFrame,
    ) -> "CrashStore":
        """Run the full pipeline on raw (source-schema) frames."""
        return cls(build_merged(RawTables(accident, drugs, distract, weather)))

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    @property
    def df(self) -> pd.DataFrame:
        """A copy of the merged table; writes to it never reach the store."""
        return self._df.copy()

    def kind_of(self, var) -> VariableKind:
        return self._kinds[Variable.parse(var)]

    def is_numeric(self, var) -> bool:
        return self.kind_of(var) == VariableKind.NUMERIC

    def filtered(self, var, values: Optional[Iterable] = None) -> pd.DataFrame:
        """Rows whose ``var`` value is in ``values``; the whole table when empty."""
        var = Variable.parse(var)
        values = list(values or [])
        if not values:
            return self._df.copy()
        return self._df[self._df[var.value].isin(values)].copy()

    # ------------------------------------------------------------------
    # Metadata queries
    # ------------------------------------------------------------------

    def row_count(self) -> int:
        return len(self._df)

    def case_count(self) -> int:
        if self._df.empty:
            return 0
        return int(self._df[CASE_KEY].nunique())

    def distinct_values(self, var) -> list[str]:
        """Observed non-null values of a variable, sorted."""
        var = Variable.parse(var)
        return sorted(str(v) for v in self._df[var.value].dropna().unique())

    def filter_options(self, primary) -> list[str]:
        """Values offered in the filter control for a primary variable."""
        var = Variable.parse(primary, PRIMARY_CHOICES)
        if var == Variable.MONTH:
            return list(MONTH_ORDER)
        if var == Variable.DAY:
            return list(DAY_ORDER)
        return self.distinct_values(var)
