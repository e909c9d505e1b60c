"""
Variable distribution — bar counts for categorical variables,
binned histogram for numeric ones.
"""
from __future__ import annotations

from typing import Iterable, Optional

import numpy as np
import pandas as pd

from crashviz.config import HISTOGRAM_BINS
from crashviz.data.schemas import Variable
from crashviz.data.store import CrashStore
from crashviz.analytics.common import label, sanitize_for_json


def _bars(col: pd.Series) -> list[dict]:
    """Frequency per observed value, in level order for categoricals."""
    if isinstance(col.dtype, pd.CategoricalDtype):
        counts = col.value_counts(sort=False)
        counts = counts[counts > 0]
    else:
        counts = col.value_counts().sort_index()
    return [{"value": label(v), "count": int(c)} for v, c in counts.items()]


def _histogram(col: pd.Series, bins: int) -> list[dict]:
    values = pd.to_numeric(col.astype(object), errors="coerce").dropna()
    if values.empty:
        return []
    counts, edges = np.histogram(values.to_numpy(dtype=float), bins=bins)
    return [
        {"start": float(edges[i]), "end": float(edges[i + 1]), "count": int(counts[i])}
        for i in range(len(counts))
    ]


def distribution(
    store: CrashStore,
    primary,
    filters: Optional[Iterable] = None,
    bins: int = HISTOGRAM_BINS,
) -> dict:
    """Distribution of a variable over the rows whose value is in ``filters``."""
    var = Variable.parse(primary)
    df = store.filtered(var, filters)
    col = df[var.value]

    if store.is_numeric(var):
        return sanitize_for_json({
            "variable": var.value,
            "kind": "histogram",
            "total": len(df),
            "bins": _histogram(col, bins),
        })

    return sanitize_for_json({
        "variable": var.value,
        "kind": "bar",
        "total": len(df),
        "bars": _bars(col),
    })
