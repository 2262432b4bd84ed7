"""Read-side queries over a completed matched-systems store."""

from typing import Any, Dict, Optional

import duckdb
import orjson
import pandas as pd

from .schema import METADATA_TABLE, SYSTEMS_TABLE
from ..configs.earthlike_ringed_landable import EARTH_LIKE_WORLD, is_ringed_landable_planet
from ..core.matching import has_rings
from ..data.records import CelestialBody

SUMMARY_COLUMNS = "system_name, x, y, z, distance_from_origin, body_count, matched_body_name"

EARTHLIKE_COLUMNS = [
    'system_name', 'distance_from_origin', 'body_count', 'earthlike_count',
    'ringed_landable_atmospheric_count', 'water_world_count', 'ammonia_world_count',
    'ringed_body_count', 'landable_body_count', 'atmospheric_body_count',
    'matched_body_name',
]


def nearest_systems(con: duckdb.DuckDBPyConnection, limit: int = 20) -> pd.DataFrame:
    """Matched systems closest to Sol first."""
    return con.execute(
        f"""
        SELECT {SUMMARY_COLUMNS}
        FROM {SYSTEMS_TABLE}
        ORDER BY distance_from_origin ASC, rowid
        LIMIT ?
        """,
        [limit],
    ).df()


def systems_by_body_count(con: duckdb.DuckDBPyConnection, limit: int = 20,
                          min_bodies: Optional[int] = None) -> pd.DataFrame:
    """Matched systems with the most bodies first.

    Args:
        con: Open store connection
        limit: Maximum rows to return
        min_bodies: Only include systems with at least this many bodies
    """
    where = "WHERE body_count >= ?" if min_bodies is not None else ""
    params = [min_bodies, limit] if min_bodies is not None else [limit]
    return con.execute(
        f"""
        SELECT {SUMMARY_COLUMNS}
        FROM {SYSTEMS_TABLE}
        {where}
        ORDER BY body_count DESC NULLS LAST, distance_from_origin ASC
        LIMIT ?
        """,
        params,
    ).df()


def find_system(con: duckdb.DuckDBPyConnection, name: str) -> pd.DataFrame:
    """All stored systems with exactly this name (names are not unique)."""
    return con.execute(
        f"""
        SELECT {SUMMARY_COLUMNS}, matched_body
        FROM {SYSTEMS_TABLE}
        WHERE system_name = ?
        ORDER BY distance_from_origin ASC, rowid
        """,
        [name],
    ).df()


def _body_profile(bodies) -> Dict[str, int]:
    parsed = [CelestialBody.from_dict(body) for body in bodies]
    return {
        'earthlike_count': sum(1 for b in parsed if b.sub_type == EARTH_LIKE_WORLD),
        'ringed_landable_atmospheric_count': sum(1 for b in parsed if is_ringed_landable_planet(b)),
        'water_world_count': sum(1 for b in parsed if b.sub_type == "Water world"),
        'ammonia_world_count': sum(1 for b in parsed if b.sub_type == "Ammonia world"),
        'ringed_body_count': sum(1 for b in parsed if has_rings(b.rings)),
        'landable_body_count': sum(1 for b in parsed if b.is_landable is True),
        'atmospheric_body_count': sum(1 for b in parsed if b.atmosphere_type),
    }


def earthlike_companions(con: duckdb.DuckDBPyConnection,
                         limit: Optional[int] = None) -> pd.DataFrame:
    """Stored systems that also hold an Earth-like world, closest first.

    A system qualifies when its retained bodies include an Earth-like world
    and at least one ringed, landable atmospheric planet.
    """
    rows = con.execute(
        f"""
        SELECT system_name, distance_from_origin, body_count, matched_body_name, system_data
        FROM {SYSTEMS_TABLE}
        WHERE CAST(system_data AS VARCHAR) LIKE ?
        ORDER BY distance_from_origin ASC, rowid
        """,
        [f'%"{EARTH_LIKE_WORLD}"%'],
    ).fetchall()

    results = []
    for system_name, distance, body_count, matched_body_name, system_data in rows:
        profile = _body_profile(orjson.loads(system_data))
        if profile['earthlike_count'] == 0 or profile['ringed_landable_atmospheric_count'] == 0:
            continue

        results.append({
            'system_name': system_name,
            'distance_from_origin': distance,
            'body_count': body_count,
            'matched_body_name': matched_body_name,
            **profile,
        })
        if limit is not None and len(results) >= limit:
            break

    return pd.DataFrame(results, columns=EARTHLIKE_COLUMNS)


def store_summary(con: duckdb.DuckDBPyConnection) -> Dict[str, Any]:
    """Row count and run metadata of a store."""
    (system_count,) = con.execute(f"SELECT COUNT(*) FROM {SYSTEMS_TABLE}").fetchone()
    metadata = dict(con.execute(f"SELECT key, value FROM {METADATA_TABLE} ORDER BY key").fetchall())
    return {
        'systems': system_count,
        'metadata': metadata,
    }
