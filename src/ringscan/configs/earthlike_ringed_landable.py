"""Earth-like Plus Ringed Landable Search Configuration

Narrows the ringed landable search to systems that also contain an
Earth-like world. Only planets count as the ringed landable partner, so
ringed landable moons of stars or belt clusters are ignored. The partner
also needs a non-empty atmosphere type, which is stricter than the default
search: an empty string does not count here.
"""

from typing import Optional

from .base import BaseConfig
from ..core.matching import body_matches, match_system
from ..data.records import CelestialBody, StarSystem
from ..database.schema import MatchedSystem

EARTH_LIKE_WORLD = "Earth-like world"


def is_ringed_landable_planet(body: CelestialBody) -> bool:
    return body_matches(body) and bool(body.atmosphere_type) and body.body_type == "Planet"


class EarthlikeRingedLandableConfig(BaseConfig):
    """Earth-like world plus ringed landable atmospheric planet."""

    def __init__(self):
        super().__init__(
            name="earthlike-ringed-landable",
            description=(
                "Uninhabited systems with an Earth-like world and a ringed, "
                "landable atmospheric planet"
            )
        )

    def has_earthlike_world(self, system: StarSystem) -> bool:
        return any(body.sub_type == EARTH_LIKE_WORLD for body in system.bodies or [])

    def filter_system(self, system: StarSystem) -> Optional[MatchedSystem]:
        if not self.has_earthlike_world(system):
            return None
        return match_system(system, is_ringed_landable_planet)
