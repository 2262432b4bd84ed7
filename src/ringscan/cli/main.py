"""Main CLI entry point for the ringscan package."""

import click

from .query import query
from .run import run_cmd
from ..configs.config_loader import config_loader


@click.group()
@click.version_option(package_name='ringscan')
@click.pass_context
def main(ctx):
    """RingScan - Ringed Landable Atmosphere Search

    Finds uninhabited Elite Dangerous systems holding a ringed, landable
    planet with an atmosphere and stores them in an indexed DuckDB file.
    """
    ctx.ensure_object(dict)


# Add subcommands
main.add_command(run_cmd, name='run')
main.add_command(query, name='query')


@main.command()
def configs():
    """List available search configurations."""
    click.echo("Search configurations:")
    for name, description in config_loader.list_available_configs().items():
        click.echo(f"  {name}: {description}")


@main.command()
def version():
    """Show version information."""
    from ..__version__ import __version__
    click.echo(f"ringscan version {__version__}")


if __name__ == '__main__':
    main()
