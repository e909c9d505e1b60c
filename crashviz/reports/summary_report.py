"""
Summary Report — group-by summary table plus the matching distribution,
as JSON or a styled Excel workbook.
"""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

import pandas as pd

from crashviz.data.schemas import PRIMARY_CHOICES, Variable
from crashviz.data.store import CrashStore
from crashviz.analytics.distribution import distribution
from crashviz.analytics.summary import summary
from crashviz.excel.writer import ExcelWriter


SUMMARY_COLS = [
    ("value", "text", "Group"),
    ("count", "number", "Count"),
    ("mean_vehicles", "decimal", "Mean Vehicles"),
    ("proportion", "percent", "Proportion"),
]

DISTRIBUTION_COLS = [
    ("value", "text", "Value"),
    ("count", "number", "Rows"),
]


def generate_json(
    store: CrashStore,
    group,
    filters: Optional[Iterable] = None,
) -> dict:
    var = Variable.parse(group, PRIMARY_CHOICES)
    filters = list(filters or [])
    return {
        "group": var.value,
        "filters": filters,
        "rows": store.row_count(),
        "cases": store.case_count(),
        "summary": summary(store, var, filters),
        "distribution": distribution(store, var, filters),
    }


def build_workbook(
    store: CrashStore,
    group,
    filters: Optional[Iterable] = None,
) -> ExcelWriter:
    data = generate_json(store, group, filters)
    s = data["summary"]
    filter_label = ", ".join(data["filters"]) if data["filters"] else "All values"
    ew = ExcelWriter()

    ws = ew.add_sheet("Summary")
    ew.write_title(ws, f"CRASH SUMMARY BY {data['group'].upper()}",
                   f"Filter: {filter_label}  |  Generated {pd.Timestamp.now():%B %d, %Y}")

    row = ew.write_section(ws, 4, "OVERVIEW")
    row = ew.write_kpi_row(ws, row, [
        (s["total"], "FILTERED ROWS", "number"),
        (data["cases"], "CASES IN DATASET", "number"),
        (len(s["rows"]), "GROUPS", "number"),
    ])

    row = ew.write_section(ws, row, "GROUPS")
    ew.write_table(
        ws, row, SUMMARY_COLS, s["rows"],
        highlight_fn=lambda idx, _: "top" if idx == 0 else None,
        freeze=False,
        show_total=True,
    )

    dist = data["distribution"]
    if dist["kind"] == "bar":
        ws_d = ew.add_sheet("Distribution")
        ew.write_table(ws_d, 1, DISTRIBUTION_COLS, dist["bars"], show_total=True)

    return ew


def generate_excel(
    store: CrashStore,
    output_path: str | Path,
    group,
    filters: Optional[Iterable] = None,
) -> Path:
    return build_workbook(store, group, filters).save(output_path)


def generate_excel_bytes(
    store: CrashStore,
    group,
    filters: Optional[Iterable] = None,
) -> bytes:
    """Workbook as bytes, for download responses; nothing touches disk."""
    return build_workbook(store, group, filters).to_bytes()
