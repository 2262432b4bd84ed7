"""CLI command for running a search over a galaxy dump."""

import logging
import traceback
from pathlib import Path
from typing import Optional

import click

from ..configs.config_loader import DEFAULT_CONFIG, config_loader
from ..core.pipeline import format_report, run_search
from ..data.loaders import IngestError
from ..database.engine import EngineSettings
from ..database.store import StoreError


@click.command()
@click.option('--input', '-i', 'input_path',
              type=click.Path(path_type=Path), required=True, envvar='RINGSCAN_INPUT',
              help='Galaxy dump (.json or .jsonl, optionally .gz)')
@click.option('--output', '-o', 'output_path',
              type=click.Path(path_type=Path), default=Path('galaxy_results.duckdb'),
              show_default=True, envvar='RINGSCAN_OUTPUT',
              help='DuckDB file to create')
@click.option('--config', '-c', 'config_name', default=DEFAULT_CONFIG, show_default=True,
              help='Search configuration name')
@click.option('--workers', '-w', type=click.IntRange(min=1), default=1, show_default=True,
              envvar='RINGSCAN_WORKERS', help='Number of matching processes')
@click.option('--batch-size', '-b', type=click.IntRange(min=1), default=50000, show_default=True,
              help='Systems per matching batch')
@click.option('--memory-limit',
              help="DuckDB memory ceiling, e.g. '24GB' (env: RINGSCAN_DUCKDB_MEMORY_LIMIT)")
@click.option('--threads', type=click.IntRange(min=1),
              help='DuckDB thread count (env: RINGSCAN_DUCKDB_THREADS)')
@click.option('--temp-dir', type=click.Path(file_okay=False, path_type=Path),
              help='DuckDB spill directory (env: RINGSCAN_DUCKDB_TEMP_DIR)')
@click.option('--progress', is_flag=True, help='Show a progress bar while reading')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
def run_cmd(input_path: Path, output_path: Path, config_name: str, workers: int,
            batch_size: int, memory_limit: Optional[str], threads: Optional[int],
            temp_dir: Optional[Path], progress: bool, verbose: bool):
    """Search a galaxy dump and save matching systems to DuckDB.

    Examples:

    \b
    # Search the monthly dump with defaults
    ringscan run --input galaxy_1month.json.gz --output galaxy_results.duckdb

    \b
    # Cap DuckDB resources and match in 8 processes
    ringscan run -i galaxy.json -o results.duckdb --workers 8 --memory-limit 24GB --threads 12
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )
    logger = logging.getLogger(__name__)

    try:
        config = config_loader.load_config_by_name(config_name)
        engine = EngineSettings.from_env().merged(
            memory_limit=memory_limit, threads=threads, temp_directory=temp_dir
        )

        click.echo(f"Reading and filtering {input_path}...")
        result = run_search(
            input_path, output_path,
            config=config, engine=engine,
            workers=workers, batch_size=batch_size, progress=progress,
        )
    except (IngestError, StoreError) as e:
        logger.error(f"Search failed: {e}")
        if verbose:
            traceback.print_exc()
        raise click.ClickException(str(e))
    except ValueError as e:
        raise click.ClickException(str(e))
    except Exception as e:
        logger.error(f"Search failed: {e}")
        if verbose:
            traceback.print_exc()
        raise click.ClickException(f"Search failed: {e}")

    click.echo("\nRESULTS:")
    for line in format_report(result):
        click.echo(line)
    click.echo(f"Database saved as single file: {result.output_path}")
