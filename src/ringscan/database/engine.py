"""DuckDB engine resource settings."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

import duckdb

logger = logging.getLogger(__name__)

ENV_MEMORY_LIMIT = 'RINGSCAN_DUCKDB_MEMORY_LIMIT'
ENV_THREADS = 'RINGSCAN_DUCKDB_THREADS'
ENV_TEMP_DIR = 'RINGSCAN_DUCKDB_TEMP_DIR'


def _sql_literal(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def parse_threads(value: str) -> int:
    """Parse a thread count, which must be a positive integer."""
    try:
        threads = int(value)
    except ValueError as exc:
        raise ValueError(f"Invalid thread count: {value!r} (expected integer)") from exc
    if threads < 1:
        raise ValueError(f"Invalid thread count: {value!r} (must be >= 1)")
    return threads


@dataclass(frozen=True)
class EngineSettings:
    """Resource limits applied to every DuckDB connection the store opens.

    These only affect performance; unset values keep DuckDB's defaults.
    """
    memory_limit: Optional[str] = None
    threads: Optional[int] = None
    temp_directory: Optional[Path] = None

    def __post_init__(self):
        if self.threads is not None and self.threads < 1:
            raise ValueError(f"Invalid thread count: {self.threads} (must be >= 1)")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'EngineSettings':
        """Build settings from RINGSCAN_DUCKDB_* environment variables."""
        env = os.environ if environ is None else environ

        memory_limit = env.get(ENV_MEMORY_LIMIT, '').strip() or None
        threads_value = env.get(ENV_THREADS, '').strip()
        temp_dir = env.get(ENV_TEMP_DIR, '').strip()

        return cls(
            memory_limit=memory_limit,
            threads=parse_threads(threads_value) if threads_value else None,
            temp_directory=Path(temp_dir) if temp_dir else None,
        )

    def merged(self, memory_limit: Optional[str] = None, threads: Optional[int] = None,
               temp_directory: Optional[Path] = None) -> 'EngineSettings':
        """Return a copy with any explicitly given values overriding these."""
        return EngineSettings(
            memory_limit=memory_limit if memory_limit is not None else self.memory_limit,
            threads=threads if threads is not None else self.threads,
            temp_directory=temp_directory if temp_directory is not None else self.temp_directory,
        )

    def apply(self, con: duckdb.DuckDBPyConnection) -> None:
        """Apply the settings to an open connection."""
        if self.threads is not None:
            con.execute(f"SET threads TO {self.threads}")
            logger.debug(f"DuckDB threads set to {self.threads}")
        if self.memory_limit is not None:
            con.execute(f"SET memory_limit = {_sql_literal(self.memory_limit)}")
            logger.debug(f"DuckDB memory_limit set to {self.memory_limit}")
        if self.temp_directory is not None:
            self.temp_directory.mkdir(parents=True, exist_ok=True)
            con.execute(f"SET temp_directory = {_sql_literal(str(self.temp_directory))}")
            logger.debug(f"DuckDB temp_directory set to {self.temp_directory}")
