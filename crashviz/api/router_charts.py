"""
Chart endpoints — distribution, cross-tab (bubble), summary table, full view.
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from crashviz.data.store import CrashStore
from crashviz.data.schemas import CrashDataError, DashboardState, Variable
from crashviz.analytics.crosstab import cross_tab
from crashviz.analytics.distribution import distribution
from crashviz.analytics.summary import summary
from crashviz.analytics.viewmodel import build_view
from crashviz.api.dependencies import (
    get_store, parse_primary, parse_secondary, parse_group, parse_filters, parse_state,
)
from crashviz.api.response_models import SummaryResponse

router = APIRouter(prefix="/api", tags=["charts"])


@router.get("/distribution")
def get_distribution(
    primary: Variable = Depends(parse_primary),
    filters: list[str] = Depends(parse_filters),
    store: CrashStore = Depends(get_store),
):
    """Bar counts (categorical) or histogram bins (numeric) for the primary variable."""
    return distribution(store, primary, filters)


@router.get("/crosstab")
def get_cross_tab(
    primary: Variable = Depends(parse_primary),
    secondary: Variable = Depends(parse_secondary),
    filters: list[str] = Depends(parse_filters),
    store: CrashStore = Depends(get_store),
):
    """Observed (primary, secondary) pairs with counts, for the bubble chart."""
    return cross_tab(store, primary, secondary, filters)


@router.get("/summary", response_model=SummaryResponse)
def get_summary(
    group: Variable = Depends(parse_group),
    filters: list[str] = Depends(parse_filters),
    filter_var: Optional[str] = Query(None, description="Variable the filters apply to (default: group)"),
    store: CrashStore = Depends(get_store),
):
    """Count, mean vehicle count and proportion per group."""
    try:
        return summary(store, group, filters, filter_var=filter_var)
    except CrashDataError as exc:
        raise HTTPException(400, str(exc))


@router.get("/view")
def get_view(
    state: DashboardState = Depends(parse_state),
    store: CrashStore = Depends(get_store),
):
    """Everything the dashboard renders for the given selections."""
    return build_view(store, state)
