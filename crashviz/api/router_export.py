"""
Export endpoints — summary table as an Excel workbook.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from crashviz.data.store import CrashStore
from crashviz.data.schemas import Variable
from crashviz.reports import summary_report
from crashviz.api.dependencies import get_store, parse_group, parse_filters

router = APIRouter(prefix="/api", tags=["export"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.get("/summary/export")
def export_summary(
    group: Variable = Depends(parse_group),
    filters: list[str] = Depends(parse_filters),
    store: CrashStore = Depends(get_store),
):
    """Build the summary workbook in memory and return it as a download."""
    content = summary_report.generate_excel_bytes(store, group, filters)
    filename = f"Crash_Summary_{group.value}.xlsx"
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
