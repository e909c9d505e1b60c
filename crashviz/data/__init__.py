"""Data loading, normalization, merge, and the in-memory crash store."""
from .loader import load_sources, build_merged, load_merged, read_source
from .merge import merge_tables
from .store import CrashStore
from .schemas import Variable, VariableKind, ChoiceKind, DashboardState
from .normalize import classify_region, filter_drugs, filter_distractions
