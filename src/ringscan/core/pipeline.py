"""Single-pass search pipeline: ingest, match, sort, persist, report."""

import logging
import math
import time
from concurrent.futures import FIRST_COMPLETED, ProcessPoolExecutor, as_completed, wait
from dataclasses import dataclass
from datetime import datetime, timezone
from itertools import islice
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from tqdm import tqdm

from ..configs.base import BaseConfig
from ..configs.config_loader import DEFAULT_CONFIG, config_loader
from ..data.loaders import IngestError, iter_systems
from ..data.records import StarSystem
from ..database.engine import EngineSettings
from ..database.schema import MatchedSystem
from ..database.store import ResultStore
from ..utils.math_utils import percentage

logger = logging.getLogger(__name__)

# Batches in flight per worker process in parallel runs
PENDING_BATCHES_PER_WORKER = 2

# (input ordinal, record) pairs keep ties in input order after sorting
OrderedMatch = Tuple[int, MatchedSystem]


@dataclass
class PipelineResult:
    """Results from a search run."""
    systems_considered: int
    systems_matched: int
    elapsed_seconds: float
    output_path: Optional[Path] = None
    config_name: str = DEFAULT_CONFIG

    @property
    def match_rate(self) -> float:
        """Match rate percentage, NaN when no systems were read."""
        return percentage(self.systems_matched, self.systems_considered)

    @property
    def throughput(self) -> float:
        """Processing speed in systems per second."""
        return self.systems_considered / self.elapsed_seconds if self.elapsed_seconds > 0 else 0.0


def format_report(result: PipelineResult) -> List[str]:
    """Render the run report as console lines."""
    if math.isnan(result.match_rate):
        rate = "n/a (0 systems processed)"
    else:
        rate = f"{result.match_rate:.3f}%"

    return [
        f"Total systems checked: {result.systems_considered:,}",
        f"Matching systems found: {result.systems_matched:,}",
        f"Match rate: {rate}",
        f"Total time: {result.elapsed_seconds:.2f}s",
        f"Processing rate: {result.throughput:.0f} systems/second",
    ]


def match_batch(config: BaseConfig, start: int,
                systems: List[StarSystem]) -> List[OrderedMatch]:
    """Apply a configuration to a batch of systems numbered from ``start``.

    Raises:
        IngestError: If a system the configuration inspects is malformed
    """
    matches = []
    for offset, system in enumerate(systems):
        try:
            matched = config.filter_system(system)
        except ValueError as e:
            raise IngestError(f"Record {start + offset + 1} is malformed: {e}") from e
        if matched is not None:
            matches.append((start + offset, matched))
    return matches


def sort_matches(matches: Iterable[OrderedMatch]) -> List[MatchedSystem]:
    """Order matches by distance from origin, ties by input order."""
    ordered = sorted(matches, key=lambda item: (item[1].distance_from_origin, item[0]))
    return [record for _, record in ordered]


def _batched(systems: Iterator[StarSystem], batch_size: int) -> Iterator[List[StarSystem]]:
    while True:
        batch = list(islice(systems, batch_size))
        if not batch:
            return
        yield batch


def _enumerate_batches(systems: Iterator[StarSystem],
                       batch_size: int) -> Iterator[Tuple[int, List[StarSystem]]]:
    start = 0
    for batch in _batched(systems, batch_size):
        yield start, batch
        start += len(batch)


class _Counter:
    """Counts systems as they stream past."""

    def __init__(self, systems: Iterable[StarSystem]):
        self._systems = systems
        self.count = 0

    def __iter__(self) -> Iterator[StarSystem]:
        for system in self._systems:
            self.count += 1
            yield system


def collect_matches(systems: Iterable[StarSystem], config: BaseConfig,
                    workers: int = 1, batch_size: int = 50000) -> Tuple[int, List[MatchedSystem]]:
    """Match a stream of systems and return (systems considered, sorted matches).

    With more than one worker, batches are matched in a process pool with at
    most ``workers * PENDING_BATCHES_PER_WORKER`` batches in flight, so the
    input keeps streaming. The result is identical to the sequential run.
    """
    if workers < 1:
        raise ValueError(f"workers must be >= 1, got {workers}")
    if batch_size < 1:
        raise ValueError(f"batch_size must be >= 1, got {batch_size}")

    counter = _Counter(systems)
    matches: List[OrderedMatch] = []

    if workers == 1:
        for batch_start, batch in _enumerate_batches(iter(counter), batch_size):
            matches.extend(match_batch(config, batch_start, batch))
        return counter.count, sort_matches(matches)

    logger.info(f"Matching with {workers} worker processes")
    max_pending = workers * PENDING_BATCHES_PER_WORKER
    with ProcessPoolExecutor(max_workers=workers) as executor:
        pending = set()
        for batch_start, batch in _enumerate_batches(iter(counter), batch_size):
            if len(pending) >= max_pending:
                done, pending = wait(pending, return_when=FIRST_COMPLETED)
                for future in done:
                    matches.extend(future.result())
            pending.add(executor.submit(match_batch, config, batch_start, batch))

        for future in as_completed(pending):
            matches.extend(future.result())

    return counter.count, sort_matches(matches)


def run_search(
    input_path: Union[str, Path],
    output_path: Union[str, Path],
    config: Optional[BaseConfig] = None,
    engine: Optional[EngineSettings] = None,
    workers: int = 1,
    batch_size: int = 50000,
    progress: bool = False,
) -> PipelineResult:
    """Run the full search and persist matches to a DuckDB store.

    Args:
        input_path: Galaxy dump (.json/.jsonl, optionally gzip-compressed)
        output_path: DuckDB file to create or replace
        config: Search configuration (default: ringed-landable)
        engine: DuckDB resource settings for the store
        workers: Number of matching processes
        batch_size: Systems per matching batch
        progress: Show a tqdm progress bar while reading

    Returns:
        PipelineResult with counts and timing

    Raises:
        IngestError: If the input cannot be read or parsed
        StoreError: If the store cannot be written
    """
    config = config or config_loader.load_config_by_name(DEFAULT_CONFIG)
    input_path = Path(input_path)
    output_path = Path(output_path)

    logger.info(f"Configuration: {config.get_description()}")
    start_time = time.perf_counter()

    systems: Iterable[StarSystem] = iter_systems(input_path)
    if progress:
        systems = tqdm(systems, desc="Reading systems", unit=" systems")

    considered, matches = collect_matches(systems, config, workers=workers, batch_size=batch_size)
    logger.info(f"Matched {len(matches):,} of {considered:,} systems")

    metadata = {
        'config': config.name,
        'input_path': str(input_path),
        'systems_considered': str(considered),
        'systems_matched': str(len(matches)),
        'built_at': datetime.now(timezone.utc).strftime('%Y-%m-%dT%H:%M:%SZ'),
    }
    ResultStore(output_path, engine).write(matches, metadata)

    return PipelineResult(
        systems_considered=considered,
        systems_matched=len(matches),
        elapsed_seconds=time.perf_counter() - start_time,
        output_path=output_path,
        config_name=config.name,
    )
