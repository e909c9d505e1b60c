"""
Meta endpoints: health, selector choices, filter options, reset.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from crashviz.data.store import CrashStore
from crashviz.data.schemas import CrashDataError, Variable
from crashviz.analytics.viewmodel import choices, reset
from crashviz.api.dependencies import get_store, parse_primary
from crashviz.api.response_models import (
    HealthResponse, ChoicesResponse, FilterOptionsResponse, StateResponse,
)

router = APIRouter(prefix="/api", tags=["meta"])


@router.get("/health", response_model=HealthResponse)
def health(store: CrashStore = Depends(get_store)):
    return HealthResponse(status="ok", rows=store.row_count(), cases=store.case_count())


@router.get("/choices/{kind}", response_model=ChoicesResponse)
def list_choices(kind: str):
    try:
        return ChoicesResponse(kind=kind, choices=choices(kind))
    except CrashDataError as exc:
        raise HTTPException(400, str(exc))


@router.get("/filter-options", response_model=FilterOptionsResponse)
def filter_options(
    primary: Variable = Depends(parse_primary),
    store: CrashStore = Depends(get_store),
):
    return FilterOptionsResponse(primary=primary.value, options=store.filter_options(primary))


@router.get("/reset", response_model=StateResponse)
def reset_state():
    """Default selections for the dashboard controls."""
    return StateResponse(**reset().to_dict())
