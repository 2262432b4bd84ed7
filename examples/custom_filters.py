#!/usr/bin/env python3
"""
Custom search configuration example.

This example shows how to create your own search configuration
by extending the BaseConfig class and registering it by name.
"""

from typing import Optional

from ringscan.configs.base import BaseConfig
from ringscan.configs.config_loader import config_loader
from ringscan.core.matching import body_matches, match_system
from ringscan.data.records import CelestialBody, StarSystem
from ringscan.database.schema import MatchedSystem


def is_high_gravity_ringed_world(body: CelestialBody) -> bool:
    """Ringed, landable, atmospheric and above 2G."""
    gravity = body.raw.get('gravity')
    return body_matches(body) and isinstance(gravity, (int, float)) and gravity > 2.0


class HighGravityRingedConfig(BaseConfig):
    """Find uninhabited systems with a heavy ringed landable world."""

    def __init__(self):
        super().__init__(
            name="high-gravity-ringed",
            description="Uninhabited systems with a ringed, landable atmospheric world above 2G"
        )

    def filter_system(self, system: StarSystem) -> Optional[MatchedSystem]:
        return match_system(system, is_high_gravity_ringed_world)


def main():
    """Example usage of custom configuration."""
    config_loader.register_config('high-gravity-ringed', HighGravityRingedConfig)
    config = config_loader.load_config_by_name('high-gravity-ringed')

    example_system = StarSystem.from_dict({
        'name': 'Test System',
        'population': 0,
        'coords': {'x': 100.0, 'y': -50.0, 'z': 25.0},
        'bodyCount': 2,
        'bodies': [
            {
                'name': 'Test System A 1',
                'type': 'Planet',
                'subType': 'High metal content body',
                'gravity': 2.5,
                'isLandable': True,
                'atmosphereType': 'Thin Sulphur dioxide',
                'rings': [{'name': 'Test System A 1 A Ring', 'type': 'Metal Rich'}],
            },
            {
                'name': 'Test System A 2',
                'type': 'Planet',
                'subType': 'Rocky body',
                'gravity': 0.8,
                'isLandable': True,
                'atmosphereType': 'No atmosphere',
            },
        ],
    })

    result = config.filter_system(example_system)
    if result:
        print("✅ System qualifies!")
        print(f"System: {result.system_name}")
        print(f"Matched body: {result.matched_body_name}")
        print(f"Distance from Sol: {result.distance_from_origin:.1f} ly")
    else:
        print("❌ System does not qualify")


if __name__ == "__main__":
    main()
