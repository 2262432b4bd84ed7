"""Utility functions and helpers."""

# Submodules are available for import but not loaded at package level
# This prevents circular import issues during installation
# Import submodules explicitly when needed:
#   from ringscan.utils.math_utils import distance_to_origin
#   from ringscan.utils.file_utils import ensure_output_dir

__all__ = [
    "file_utils",
    "math_utils",
]
