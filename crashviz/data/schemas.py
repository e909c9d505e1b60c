"""
Variable enumeration, choice lists, dashboard state, and data errors.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Optional

from crashviz.config import DEFAULT_PRIMARY, DEFAULT_SECONDARY, DEFAULT_SUMMARY


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class CrashDataError(Exception):
    """Base class for all crash data errors."""


class LoadError(CrashDataError):
    """A source file could not be loaded at startup."""


class MissingSourceError(LoadError):
    def __init__(self, source: str, path: Path) -> None:
        self.source = source
        self.path = Path(path)
        super().__init__(f"Missing source file for '{source}': {self.path}")


class SchemaMismatchError(LoadError):
    """A source table is missing one or more required columns."""

    def __init__(self, source: str, path: Optional[Path], missing: list[str]) -> None:
        self.source = source
        self.path = Path(path) if path is not None else None
        self.missing = list(missing)
        where = f" ({self.path.name})" if self.path is not None else ""
        super().__init__(
            f"Schema mismatch in '{source}'{where}: missing column(s) {', '.join(self.missing)}"
        )


class UnknownVariableError(CrashDataError, ValueError):
    def __init__(self, value, allowed) -> None:
        self.value = value
        self.allowed = [v.value if isinstance(v, Enum) else str(v) for v in allowed]
        super().__init__(f"Unknown variable: {value!r}. Valid: {self.allowed}")


class UnknownChoiceKindError(CrashDataError, ValueError):
    def __init__(self, value) -> None:
        self.value = value
        super().__init__(
            f"Unknown choice kind: {value!r}. Valid: {[k.value for k in ChoiceKind]}"
        )


# ---------------------------------------------------------------------------
# Variables
# ---------------------------------------------------------------------------

class Variable(str, Enum):
    STATE = "State"
    MONTH = "Month"
    DAY = "Day"
    REGION = "Region"
    ROUTE = "Route"
    WEATHER = "Weather"
    DISTRACTION = "Distraction"
    DRUG = "Drug"
    NUMBER_OF_VEHICLES = "Number_of_Vehicles"

    @classmethod
    def parse(cls, value, allowed=None) -> "Variable":
        """Resolve a member or its name; reject anything outside ``allowed``."""
        allowed = tuple(allowed) if allowed is not None else tuple(cls)
        if isinstance(value, cls):
            var = value
        else:
            try:
                var = cls(value)
            except ValueError:
                raise UnknownVariableError(value, allowed) from None
        if var not in allowed:
            raise UnknownVariableError(value, allowed)
        return var


class VariableKind(str, Enum):
    CATEGORICAL = "categorical"
    NUMERIC = "numeric"


# Vehicle count is retyped to categorical after the merge, so every
# variable of the merged table is declared categorical.
VARIABLE_KINDS = {var: VariableKind.CATEGORICAL for var in Variable}


class ChoiceKind(str, Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"
    SUMMARY = "summary"

    @classmethod
    def parse(cls, value) -> "ChoiceKind":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownChoiceKindError(value) from None


PRIMARY_CHOICES = (
    Variable.STATE, Variable.MONTH, Variable.DAY, Variable.REGION, Variable.ROUTE,
)
SECONDARY_CHOICES = (
    Variable.WEATHER, Variable.DISTRACTION, Variable.DRUG, Variable.NUMBER_OF_VEHICLES,
)

CHOICES = {
    ChoiceKind.PRIMARY: PRIMARY_CHOICES,
    ChoiceKind.SECONDARY: SECONDARY_CHOICES,
    ChoiceKind.SUMMARY: PRIMARY_CHOICES,
}


# ---------------------------------------------------------------------------
# Dashboard state
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DashboardState:
    """Current UI selections. Filters always refer to the primary variable."""
    primary: Variable = Variable(DEFAULT_PRIMARY)
    secondary: Variable = Variable(DEFAULT_SECONDARY)
    summary: Variable = Variable(DEFAULT_SUMMARY)
    filters: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def create(
        cls,
        primary=None,
        secondary=None,
        summary=None,
        filters=None,
    ) -> "DashboardState":
        """Build a state from raw names, falling back to defaults for None."""
        default = cls()
        return cls(
            primary=Variable.parse(primary, PRIMARY_CHOICES) if primary is not None else default.primary,
            secondary=Variable.parse(secondary, SECONDARY_CHOICES) if secondary is not None else default.secondary,
            summary=Variable.parse(summary, PRIMARY_CHOICES) if summary is not None else default.summary,
            filters=tuple(filters or ()),
        )

    def reset(self) -> "DashboardState":
        return DashboardState()

    def with_primary(self, primary) -> "DashboardState":
        """Switch primary variable; old filter values no longer apply."""
        var = Variable.parse(primary, PRIMARY_CHOICES)
        if var == self.primary:
            return self
        return replace(self, primary=var, filters=())

    def with_filters(self, filters) -> "DashboardState":
        return replace(self, filters=tuple(filters or ()))

    def to_dict(self) -> dict:
        return {
            "primary": self.primary.value,
            "secondary": self.secondary.value,
            "summary": self.summary.value,
            "filters": list(self.filters),
        }
