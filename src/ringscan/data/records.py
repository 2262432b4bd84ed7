"""Typed views over raw galaxy dump records."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

Coordinates = Tuple[float, float, float]


def _parse_number(value: Any, label: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{label} must be numeric, got {value!r}")
    return float(value)


def _coord_components(value: Any) -> Optional[List[Any]]:
    if isinstance(value, dict):
        return [value.get(axis) for axis in ('x', 'y', 'z')]
    if isinstance(value, (list, tuple)) and len(value) == 3:
        return list(value)
    return None


def coords_present(value: Any) -> bool:
    """False when the coords value or any of its components is absent."""
    if value is None:
        return False
    components = _coord_components(value)
    return components is None or all(component is not None for component in components)


def parse_coords(value: Any) -> Optional[Coordinates]:
    """Normalise a coords value to an (x, y, z) tuple.

    Accepts the dump's ``{"x": .., "y": .., "z": ..}`` object or a 3-element
    array. Returns None when the value or any of its components is absent.

    Raises:
        ValueError: If the value has the wrong shape or a non-numeric component
    """
    if not coords_present(value):
        return None

    components = _coord_components(value)
    if components is None:
        if isinstance(value, (list, tuple)):
            raise ValueError(f"coords array must have 3 elements, got {len(value)}")
        raise ValueError(f"coords must be an object or array, got {type(value).__name__}")

    x, y, z = (_parse_number(c, f"coords.{axis}") for c, axis in zip(components, 'xyz'))
    return (x, y, z)


def _parse_optional_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


@dataclass
class CelestialBody:
    """A body nested inside a star system.

    Fields keep whatever the dump holds; predicates decide what counts.
    """
    name: Optional[str]
    rings: Any = None
    is_landable: Any = None
    atmosphere_type: Any = None
    body_type: Optional[str] = None
    sub_type: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: Any) -> 'CelestialBody':
        """Create body from a raw dump dictionary.

        Anything other than an object becomes an empty body that never matches.
        """
        if not isinstance(data, dict):
            return cls(name=None)

        return cls(
            name=data.get('name'),
            rings=data.get('rings'),
            is_landable=data.get('isLandable'),
            atmosphere_type=data.get('atmosphereType'),
            body_type=data.get('type'),
            sub_type=data.get('subType'),
            raw=data,
        )


@dataclass
class StarSystem:
    """A star system with its nested bodies, as read from the dump.

    Coordinates are kept raw and only parsed through :attr:`coords`, so a
    system that is never matched is never checked for numeric coordinates.
    """
    name: Optional[str]
    raw_coords: Any = None
    population: Any = None
    bodies: Optional[List[CelestialBody]] = None
    body_count: Optional[int] = None
    raw_bodies: Optional[List[Any]] = field(default=None, repr=False)

    @property
    def has_coords(self) -> bool:
        return coords_present(self.raw_coords)

    @property
    def coords(self) -> Optional[Coordinates]:
        """Parsed (x, y, z), None when absent.

        Raises:
            ValueError: If the coordinates are present but malformed
        """
        return parse_coords(self.raw_coords)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StarSystem':
        """Create system from a raw dump dictionary.

        A ``bodies`` value that is not an array counts as absent.

        Raises:
            ValueError: If the record is not an object
        """
        if not isinstance(data, dict):
            raise ValueError(f"system must be an object, got {type(data).__name__}")

        raw_bodies = data.get('bodies')
        if not isinstance(raw_bodies, list):
            raw_bodies = None
        bodies = None
        if raw_bodies is not None:
            bodies = [CelestialBody.from_dict(body) for body in raw_bodies]

        return cls(
            name=data.get('name'),
            raw_coords=data.get('coords'),
            population=data.get('population'),
            bodies=bodies,
            body_count=_parse_optional_int(data.get('bodyCount')),
            raw_bodies=raw_bodies,
        )
