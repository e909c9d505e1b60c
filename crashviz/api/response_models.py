"""
Pydantic response schemas for the API.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    rows: int
    cases: int


class ChoicesResponse(BaseModel):
    kind: str
    choices: list[str]


class FilterOptionsResponse(BaseModel):
    primary: str
    options: list[str]


class StateResponse(BaseModel):
    primary: str
    secondary: str
    summary: str
    filters: list[str]


class SummaryRow(BaseModel):
    value: Optional[str] = None
    count: int
    mean_vehicles: Optional[float] = None
    proportion: float


class SummaryResponse(BaseModel):
    group: str
    filter_variable: str
    total: int
    rows: list[SummaryRow]
