"""Ringed Landable Atmosphere Search Configuration

Finds uninhabited systems with at least one body that has rings, can be
landed on and has an atmosphere. The first such body in the system's body
list is reported as the matched body.
"""

from typing import Optional

from .base import BaseConfig
from ..core.matching import match_system
from ..data.records import StarSystem
from ..database.schema import MatchedSystem


class RingedLandableConfig(BaseConfig):
    """Ringed, landable, atmospheric body search."""

    def __init__(self):
        super().__init__(
            name="ringed-landable",
            description=(
                "Uninhabited systems containing a ringed, landable body with an atmosphere"
            )
        )

    def filter_system(self, system: StarSystem) -> Optional[MatchedSystem]:
        return match_system(system)
