"""CLI commands for querying a completed results store."""

from pathlib import Path

import click
import pandas as pd

from ..database import queries
from ..database.store import StoreError, open_store

database_option = click.option(
    '--database', '-d', 'database',
    type=click.Path(path_type=Path), default=Path('galaxy_results.duckdb'),
    show_default=True, envvar='RINGSCAN_OUTPUT', help='Results database to query'
)


def _connect(database: Path):
    try:
        return open_store(database)
    except StoreError as e:
        raise click.ClickException(str(e))


def _echo_frame(frame: pd.DataFrame, empty_message: str = "No matching systems."):
    if frame.empty:
        click.echo(empty_message)
        return
    frame = frame.copy()
    frame.index = range(1, len(frame) + 1)
    click.echo(frame.to_string(float_format=lambda v: f"{v:.2f}"))


@click.group()
def query():
    """Query a results database."""
    pass


@query.command()
@database_option
@click.option('--limit', '-n', type=click.IntRange(min=1), default=20, show_default=True)
def nearest(database: Path, limit: int):
    """Matched systems closest to Sol."""
    con = _connect(database)
    try:
        _echo_frame(queries.nearest_systems(con, limit))
    finally:
        con.close()


@query.command()
@database_option
@click.option('--limit', '-n', type=click.IntRange(min=1), default=20, show_default=True)
@click.option('--min-bodies', type=click.IntRange(min=0),
              help='Only systems with at least this many bodies')
def bodies(database: Path, limit: int, min_bodies):
    """Matched systems with the most bodies."""
    con = _connect(database)
    try:
        _echo_frame(queries.systems_by_body_count(con, limit, min_bodies))
    finally:
        con.close()


@query.command()
@database_option
@click.argument('name')
def system(database: Path, name: str):
    """Look up a matched system by exact name."""
    con = _connect(database)
    try:
        frame = queries.find_system(con, name)
    finally:
        con.close()

    if frame.empty:
        raise click.ClickException(f"System not found: {name}")

    for _, row in frame.iterrows():
        click.echo(f"System: {row['system_name']}")
        click.echo(f"Distance from Sol: {row['distance_from_origin']:.2f} ly")
        click.echo(f"Coordinates: ({row['x']:.1f}, {row['y']:.1f}, {row['z']:.1f})")
        body_count = row['body_count']
        click.echo(f"Total bodies: {body_count if pd.notna(body_count) else 'unknown'}")
        click.echo(f"Matched body: {row['matched_body_name']}")
        click.echo(f"  {row['matched_body']}")


@query.command()
@database_option
@click.option('--limit', '-n', type=click.IntRange(min=1), default=15, show_default=True)
def earthlike(database: Path, limit: int):
    """Matched systems that also hold an Earth-like world."""
    con = _connect(database)
    try:
        frame = queries.earthlike_companions(con, limit)
    finally:
        con.close()
    _echo_frame(frame, "No systems found with both Earth-like worlds and ringed, "
                       "landable atmospheric planets.")


@query.command()
@database_option
def info(database: Path):
    """Show row count and run metadata."""
    con = _connect(database)
    try:
        summary = queries.store_summary(con)
    finally:
        con.close()

    click.echo(f"Database: {database}")
    click.echo(f"Systems: {summary['systems']:,}")
    for key, value in summary['metadata'].items():
        click.echo(f"  {key}: {value}")
