"""Indexed DuckDB result store for search matches."""

# Submodules are available for import but not loaded at package level
# This prevents circular import issues during installation
# Import submodules explicitly when needed:
#   from ringscan.database.store import ResultStore
#   from ringscan.database.engine import EngineSettings
#   from ringscan.database.schema import MatchedSystem

__all__ = [
    "engine",
    "queries",
    "schema",
    "store",
]
