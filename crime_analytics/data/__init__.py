"""Yearly CSV loading, normalization, schema merge, feature derivation, in-memory store."""
from .errors import MalformedSourceError
from .markers import Marker, is_unassigned
from .loader import discover_year_files, load_years, read_year
from .normalize import normalize_year
from .merge import merge_years, observed_vocabulary
from .features import derive_features, calendar_conflicts, shift_for_hour, shooting_state
from .schemas import IncidentFilter
from .store import DataStore
