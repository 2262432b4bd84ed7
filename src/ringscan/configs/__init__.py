"""Search configurations."""

# Submodules are available for import but not loaded at package level
# This prevents circular import issues during installation
# Import submodules explicitly when needed:
#   from ringscan.configs.base import BaseConfig
#   from ringscan.configs.ringed_landable import RingedLandableConfig
#   from ringscan.configs.config_loader import config_loader

__all__ = [
    "base",
    "config_loader",
    "earthlike_ringed_landable",
    "ringed_landable",
]
