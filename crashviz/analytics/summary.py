"""
Group-by summary table — count, mean vehicle count, proportion of filtered rows.
"""
from __future__ import annotations

from typing import Iterable, Optional

import pandas as pd

from crashviz.data.schemas import PRIMARY_CHOICES, Variable
from crashviz.data.store import CrashStore
from crashviz.analytics.common import label, safe_divide, sanitize_for_json, vehicle_counts


def summary_table(df: pd.DataFrame, group: Variable) -> pd.DataFrame:
    """Per-group count / mean_vehicles / proportion, largest groups first.

    Null group values form their own group so proportions cover every row.
    Ties keep first-seen order.
    """
    if df.empty:
        return pd.DataFrame(columns=["value", "count", "mean_vehicles", "proportion"])

    frame = pd.DataFrame({
        "value": df[group.value].astype(object),
        "vehicles": vehicle_counts(df),
    })
    grouped = frame.groupby("value", sort=False, dropna=False).agg(
        count=("vehicles", "size"),
        mean_vehicles=("vehicles", "mean"),
    ).reset_index()

    total = len(df)
    grouped["proportion"] = grouped["count"].map(lambda c: safe_divide(c, total))
    return grouped.sort_values("count", ascending=False, kind="mergesort").reset_index(drop=True)


def summary(
    store: CrashStore,
    group,
    filters: Optional[Iterable] = None,
    filter_var=None,
) -> dict:
    """Summary of the filtered rows grouped by ``group``.

    ``filters`` apply to ``filter_var`` (defaults to the group variable).
    """
    var = Variable.parse(group, PRIMARY_CHOICES)
    fvar = Variable.parse(filter_var) if filter_var is not None else var
    df = store.filtered(fvar, filters)
    table = summary_table(df, var)

    rows = []
    for _, r in table.iterrows():
        mean = r["mean_vehicles"]
        rows.append({
            "value": label(r["value"]),
            "count": int(r["count"]),
            "mean_vehicles": None if pd.isna(mean) else round(float(mean), 3),
            "proportion": float(r["proportion"]),
        })

    return sanitize_for_json({
        "group": var.value,
        "filter_variable": fvar.value,
        "total": len(df),
        "rows": rows,
    })
