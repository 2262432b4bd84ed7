"""Data ingestion for galaxy dumps."""

# Submodules are available for import but not loaded at package level
# This prevents circular import issues during installation
# Import submodules explicitly when needed:
#   from ringscan.data.loaders import iter_systems
#   from ringscan.data.compressed_reader import CompressedFileReader
#   from ringscan.data.records import StarSystem

__all__ = [
    "compressed_reader",
    "loaders",
    "records",
]
