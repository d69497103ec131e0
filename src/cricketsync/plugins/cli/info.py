"""
CLI command: info

Displays the cricketsync package version and output settings.
"""

import logging
from importlib.metadata import PackageNotFoundError, version

import click

from cricketsync.settings import Settings
from cricketsync.sources import source_names

# Configure module-level logger
logger = logging.getLogger("cricketsync.cli.info")


@click.command("info")
@click.pass_context
def cli(ctx) -> None:
    """
    Show package metadata and output settings.
    """
    # Retrieve package version, fallback if not installed
    try:
        pkg_version = version("cricketsync")
        logger.debug("Retrieved package version: %s", pkg_version)
    except PackageNotFoundError:
        pkg_version = "0.0.0-dev"
        logger.warning(
            "Package 'cricketsync' not found; using development version placeholder."
        )

    settings = ctx.obj.get("settings") if ctx.obj else None
    settings = settings or Settings()

    click.echo(f"cricketsync version: {pkg_version}")
    click.echo(f"Output directory: {settings.data_dir}")
    timeout = settings.request_timeout
    click.echo(f"Request timeout: {f'{timeout}s' if timeout else 'none'}")

    click.echo("\nKnown sources:")
    for name in source_names():
        click.echo(f"  - {name}")
