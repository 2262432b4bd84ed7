"""Qualification, body matching and derived-field computation.

A system qualifies when it is uninhabited and carries both coordinates and a
body list. Among its bodies, the first one (in dump order) that has at least
one ring, is landable and has an atmosphere becomes the matched body.
"""

from collections.abc import Sized
from typing import Any, Callable, Iterable, Optional

from ..data.records import CelestialBody, Coordinates, StarSystem
from ..database.schema import MatchedSystem
from ..utils.math_utils import distance_to_origin

BodyPredicate = Callable[[CelestialBody], bool]


def is_uninhabited(population) -> bool:
    """True only for a numeric population of exactly zero."""
    if isinstance(population, bool) or not isinstance(population, (int, float)):
        return False
    return population == 0


def is_admissible(system: StarSystem) -> bool:
    """Check baseline admissibility of a system.

    Missing coordinates, a missing body list or a non-zero (or missing)
    population disqualify the system; none of these is an error.
    """
    return (
        is_uninhabited(system.population)
        and system.bodies is not None
        and system.has_coords
    )


def has_rings(rings: Any) -> bool:
    """Rings are opaque: any non-empty sized value counts."""
    return isinstance(rings, Sized) and len(rings) > 0


def body_matches(body: CelestialBody) -> bool:
    """Ringed, landable and with an atmosphere of any type."""
    # Rings first: most bodies have none
    if not has_rings(body.rings):
        return False
    return body.is_landable is True and body.atmosphere_type is not None


def find_first_matching_body(
    bodies: Iterable[CelestialBody],
    predicate: BodyPredicate = body_matches
) -> Optional[CelestialBody]:
    """Return the earliest body satisfying the predicate, or None."""
    for body in bodies:
        if predicate(body):
            return body
    return None


def compute_distance(coords: Coordinates) -> float:
    """Distance of a system from Sol in light years."""
    return distance_to_origin(coords)


def build_matched_system(system: StarSystem, body: CelestialBody,
                         coords: Optional[Coordinates] = None) -> MatchedSystem:
    """Assemble the output record for an admissible system and its matched body."""
    if coords is None:
        coords = system.coords
    x, y, z = coords
    return MatchedSystem(
        system_name=system.name,
        x=x,
        y=y,
        z=z,
        body_count=system.body_count,
        distance_from_origin=compute_distance(coords),
        matched_body_name=body.name,
        matched_body=body.raw,
        system_data=system.raw_bodies,
    )


def match_system(
    system: StarSystem,
    predicate: BodyPredicate = body_matches
) -> Optional[MatchedSystem]:
    """Run the filter, matcher and derived-field steps for one system.

    Returns:
        The matched record, or None if the system is inadmissible or has no
        matching body

    Raises:
        ValueError: If an admissible system has malformed coordinates
    """
    if not is_admissible(system):
        return None
    coords = system.coords

    body = find_first_matching_body(system.bodies, predicate)
    if body is None:
        return None

    return build_matched_system(system, body, coords)
