"""Write-once DuckDB store for matched systems.

The store is built next to its final location and moved into place only
after every row and index has been written, so a failed run never leaves a
complete-looking database behind.
"""

import logging
import os
from pathlib import Path
from typing import Dict, Optional, Sequence, Union

import duckdb
import pandas as pd

from .engine import EngineSettings
from .schema import (
    MatchedSystem, METADATA_TABLE, SYSTEM_COLUMNS, SYSTEM_INDEXES, SYSTEMS_TABLE,
    metadata_table_ddl, systems_table_ddl,
)
from ..utils.file_utils import ensure_output_dir, remove_quietly, staging_path

logger = logging.getLogger(__name__)


class StoreError(RuntimeError):
    """Raised when the result store cannot be written or opened."""


def records_frame(records: Sequence[MatchedSystem]) -> pd.DataFrame:
    """Stage matched records as a DataFrame in systems-table column order."""
    columns = [name for name, _ in SYSTEM_COLUMNS]
    frame = pd.DataFrame([record.to_row() for record in records], columns=columns)
    # Nullable integer keeps missing body counts as NULL instead of NaN
    frame['body_count'] = frame['body_count'].astype('Int64')
    frame['_ordinal'] = range(len(frame))
    return frame


class ResultStore:
    """Persists matched systems into a single indexed DuckDB file."""

    def __init__(self, output_path: Union[str, Path], engine: Optional[EngineSettings] = None):
        self.output_path = Path(output_path)
        self.engine = engine or EngineSettings()

    def write(self, records: Sequence[MatchedSystem],
              metadata: Optional[Dict[str, str]] = None) -> Path:
        """Write records, in the given order, to a fresh store.

        Args:
            records: Matched systems, already sorted by distance from origin
            metadata: Key/value pairs recorded in the run_metadata table

        Returns:
            Path of the completed store

        Raises:
            StoreError: If any part of the write fails
        """
        tmp_path = staging_path(self.output_path)
        con = None
        try:
            ensure_output_dir(self.output_path)
            self._discard(tmp_path)

            con = duckdb.connect(str(tmp_path))
            self.engine.apply(con)

            con.execute(systems_table_ddl())
            if records:
                self._insert_records(con, records)
            self._create_indexes(con)
            self._write_metadata(con, metadata or {})

            con.close()
            con = None
            os.replace(tmp_path, self.output_path)
        except (duckdb.Error, OSError) as e:
            if con is not None:
                con.close()
            self._discard(tmp_path)
            raise StoreError(f"Failed to write store {self.output_path}: {e}") from e

        logger.info(f"Wrote {len(records):,} systems to {self.output_path}")
        return self.output_path

    @staticmethod
    def _discard(db_path: Path) -> None:
        remove_quietly(db_path)
        remove_quietly(db_path.with_name(db_path.name + '.wal'))

    @staticmethod
    def _insert_records(con: duckdb.DuckDBPyConnection, records: Sequence[MatchedSystem]) -> None:
        frame = records_frame(records)
        columns = ', '.join(name for name, _ in SYSTEM_COLUMNS)
        con.register('staged_systems', frame)
        try:
            con.execute(
                f"INSERT INTO {SYSTEMS_TABLE} "
                f"SELECT {columns} FROM staged_systems ORDER BY _ordinal"
            )
        finally:
            con.unregister('staged_systems')

    @staticmethod
    def _create_indexes(con: duckdb.DuckDBPyConnection) -> None:
        for index_name, column in SYSTEM_INDEXES:
            logger.debug(f"Creating index {index_name} on {column}")
            con.execute(f"CREATE INDEX {index_name} ON {SYSTEMS_TABLE}({column})")

    @staticmethod
    def _write_metadata(con: duckdb.DuckDBPyConnection, metadata: Dict[str, str]) -> None:
        con.execute(metadata_table_ddl())
        if metadata:
            con.executemany(
                f"INSERT INTO {METADATA_TABLE} VALUES (?, ?)",
                [[key, str(value)] for key, value in metadata.items()]
            )


def open_store(db_path: Union[str, Path],
               engine: Optional[EngineSettings] = None) -> duckdb.DuckDBPyConnection:
    """Open a completed store read-only.

    Raises:
        StoreError: If the store does not exist or cannot be opened
    """
    db_path = Path(db_path)
    if not db_path.exists():
        raise StoreError(f"Database not found at {db_path}")
    try:
        con = duckdb.connect(str(db_path), read_only=True)
        (engine or EngineSettings()).apply(con)
    except duckdb.Error as e:
        raise StoreError(f"Cannot open database {db_path}: {e}") from e
    return con
