"""
Dashboard view-model — pure functions from UI selections to everything the
UI renders: choice lists, filter options, and the three query results.
"""
from __future__ import annotations

from crashviz.data.schemas import CHOICES, ChoiceKind, DashboardState
from crashviz.data.store import CrashStore
from crashviz.analytics.crosstab import cross_tab
from crashviz.analytics.distribution import distribution
from crashviz.analytics.summary import summary


def choices(kind) -> list[str]:
    """Variable names offered by a selector (primary, secondary, summary)."""
    return [v.value for v in CHOICES[ChoiceKind.parse(kind)]]


def all_choices() -> dict[str, list[str]]:
    return {kind.value: choices(kind) for kind in ChoiceKind}


def reset() -> DashboardState:
    """Default selections: Month / Number_of_Vehicles, no filters."""
    return DashboardState()


def build_view(store: CrashStore, state: DashboardState | None = None) -> dict:
    """Compute every rendered output for the given selections."""
    state = state or reset()
    filters = list(state.filters)
    return {
        "state": state.to_dict(),
        "filter_options": store.filter_options(state.primary),
        "distribution": distribution(store, state.primary, filters),
        "cross_tab": cross_tab(store, state.primary, state.secondary, filters),
        "summary": summary(store, state.summary, filters, filter_var=state.primary),
    }
