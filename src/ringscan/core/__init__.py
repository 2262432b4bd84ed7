"""Core matching and pipeline functionality."""

# Submodules are available for import but not loaded at package level
# This prevents circular import issues during installation
# Import submodules explicitly when needed:
#   from ringscan.core.matching import match_system
#   from ringscan.core.pipeline import run_search

__all__ = [
    "matching",
    "pipeline",
]
