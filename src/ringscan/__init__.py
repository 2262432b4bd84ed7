"""
RingScan - Ringed Landable Atmosphere Search

Single-pass search over Elite Dangerous galaxy dumps for uninhabited
systems holding a ringed, landable planet with an atmosphere, persisted
to an indexed DuckDB store.
"""

try:
    from .__version__ import __version__
except ImportError:
    __version__ = "dev"

__author__ = "RingScan Team"
__email__ = "ringscan@example.com"

# Submodules are available for import but not loaded at package level
# This prevents circular import issues during installation
# Import submodules explicitly when needed:
#   from ringscan.core import matching
#   from ringscan.data import loaders
#   from ringscan.database import store

__all__ = [
    "__version__",
]
