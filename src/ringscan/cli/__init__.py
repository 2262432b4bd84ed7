"""Command line interfaces."""

# Submodules are available for import but not loaded at package level
# This prevents circular import issues during installation
# Import submodules explicitly when needed:
#   from ringscan.cli.main import main
#   from ringscan.cli.run import run_cmd

__all__ = [
    "main",
    "query",
    "run",
]
