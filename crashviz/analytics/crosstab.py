"""
Primary × secondary cross-tabulation (bubble chart data).
"""
from __future__ import annotations

from typing import Iterable, Optional

from crashviz.data.schemas import PRIMARY_CHOICES, SECONDARY_CHOICES, Variable
from crashviz.data.store import CrashStore
from crashviz.analytics.common import label, sanitize_for_json, vehicle_counts


def cross_tab(
    store: CrashStore,
    primary,
    secondary,
    filters: Optional[Iterable] = None,
) -> dict:
    """Co-occurrence counts of two categorical variables.

    Only pairs present in the filtered rows are returned. If either variable
    is numeric, every filtered row becomes its own point sized by vehicle count.
    """
    p = Variable.parse(primary, PRIMARY_CHOICES)
    s = Variable.parse(secondary, SECONDARY_CHOICES)
    df = store.filtered(p, filters)

    if store.is_numeric(p) or store.is_numeric(s):
        sizes = vehicle_counts(df)
        points = [
            {p.value: pv, s.value: sv, "size": size}
            for pv, sv, size in zip(df[p.value].astype(object), df[s.value].astype(object), sizes)
        ]
        return sanitize_for_json({
            "primary": p.value,
            "secondary": s.value,
            "kind": "points",
            "points": points,
        })

    pairs = df[[p.value, s.value]].dropna()
    counts = pairs.groupby([p.value, s.value], observed=True).size()
    counts = counts[counts > 0]
    points = [
        {p.value: label(pv), s.value: label(sv), "count": int(c)}
        for (pv, sv), c in counts.items()
    ]
    return sanitize_for_json({
        "primary": p.value,
        "secondary": s.value,
        "kind": "counts",
        "points": points,
    })
