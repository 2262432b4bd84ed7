"""Schema definitions for the matched-systems store."""

from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional, Tuple

import orjson


SYSTEMS_TABLE = 'systems'
METADATA_TABLE = 'run_metadata'

SYSTEM_COLUMNS: List[Tuple[str, str]] = [
    ('system_name', 'VARCHAR'),
    ('x', 'DOUBLE'),
    ('y', 'DOUBLE'),
    ('z', 'DOUBLE'),
    ('body_count', 'BIGINT'),
    ('distance_from_origin', 'DOUBLE'),
    ('matched_body_name', 'VARCHAR'),
    ('matched_body', 'JSON'),
    ('system_data', 'JSON'),
]

# (index name, indexed column)
SYSTEM_INDEXES: List[Tuple[str, str]] = [
    ('idx_distance', 'distance_from_origin'),
    ('idx_body_count', 'body_count'),
    ('idx_system_name', 'system_name'),
]


def systems_table_ddl() -> str:
    """CREATE TABLE statement for the systems table."""
    columns = ',\n    '.join(f"{name} {sql_type}" for name, sql_type in SYSTEM_COLUMNS)
    return f"CREATE TABLE {SYSTEMS_TABLE} (\n    {columns}\n)"


def metadata_table_ddl() -> str:
    """CREATE TABLE statement for the run metadata table."""
    return f"CREATE TABLE {METADATA_TABLE} (key VARCHAR PRIMARY KEY, value VARCHAR)"


@dataclass(frozen=True)
class MatchedSystem:
    """Output record for a system holding a ringed, landable atmospheric body."""
    system_name: Optional[str]
    x: float
    y: float
    z: float
    body_count: Optional[int]
    distance_from_origin: float
    matched_body_name: Optional[str]
    matched_body: Dict[str, Any]
    system_data: List[Dict[str, Any]]

    def to_dict(self) -> Dict[str, Any]:
        """Convert record to dictionary."""
        return asdict(self)

    def to_row(self) -> Dict[str, Any]:
        """Row for the systems table, with nested records serialized as JSON text."""
        row = self.to_dict()
        row['matched_body'] = orjson.dumps(self.matched_body).decode('utf-8')
        row['system_data'] = orjson.dumps(self.system_data).decode('utf-8')
        return row
