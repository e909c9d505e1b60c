"""
FastAPI dependencies — injected CrashStore, variable and filter parsing.
"""
from __future__ import annotations

from typing import Optional

from fastapi import HTTPException, Query, Request

from crashviz.data.store import CrashStore
from crashviz.data.schemas import (
    PRIMARY_CHOICES, SECONDARY_CHOICES, CrashDataError, DashboardState, Variable,
)


# ---------------------------------------------------------------------------
# Store (attached to app.state by the app factory / lifespan)
# ---------------------------------------------------------------------------

def get_store(request: Request) -> CrashStore:
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise HTTPException(503, "Data not loaded yet")
    return store


# ---------------------------------------------------------------------------
# Variable parsing from query params
# ---------------------------------------------------------------------------

def _parse(value: str, allowed) -> Variable:
    try:
        return Variable.parse(value, allowed)
    except CrashDataError as exc:
        raise HTTPException(400, str(exc))


def parse_primary(primary: str = Query("Month", description="Primary variable")) -> Variable:
    return _parse(primary, PRIMARY_CHOICES)


def parse_secondary(
    secondary: str = Query("Number_of_Vehicles", description="Secondary variable"),
) -> Variable:
    return _parse(secondary, SECONDARY_CHOICES)


def parse_group(group: str = Query("Month", description="Summary group variable")) -> Variable:
    return _parse(group, PRIMARY_CHOICES)


def parse_filters(
    filters: Optional[list[str]] = Query(None, description="Selected values (repeatable)"),
) -> list[str]:
    return [f for f in (filters or []) if f != ""]


def parse_state(
    primary: Optional[str] = Query(None),
    secondary: Optional[str] = Query(None),
    summary: Optional[str] = Query(None),
    filters: list[str] = Query([]),
) -> DashboardState:
    """Parse full dashboard selections; omitted fields take their defaults."""
    try:
        return DashboardState.create(primary, secondary, summary, [f for f in filters if f != ""])
    except CrashDataError as exc:
        raise HTTPException(400, str(exc))
