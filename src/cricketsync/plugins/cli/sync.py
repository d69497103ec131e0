"""
CLI command: sync

Downloads every configured sheet and writes its JSON file.
"""

import logging
from typing import Optional

import click
from pydantic import ValidationError

from cricketsync.errors import NoSourcesConfigured, SyncFailed
from cricketsync.log import set_log_level
from cricketsync.settings import Settings
from cricketsync.sources import SheetSource, source_names
from cricketsync.sync import SheetSync, SourceResult

# Configure module-level logger
logger = logging.getLogger("cricketsync.cli.sync")

BANNER = "=" * 42


def echo_progress(
    event: str, source: SheetSource, result: Optional[SourceResult]
) -> None:
    """Print one human-readable line per sync event."""
    if event == "skipped":
        click.echo(
            f"\nWarning: {source.label} URL not provided ({source.env_var}), skipping..."
        )
    elif event == "start":
        click.echo(f"\nFetching {source.label}...")
    elif event == "synced":
        if result.warnings:
            click.echo("  Parsing warnings:")
            for issue in result.warnings:
                click.echo(f"   - {issue}")
        click.echo(f"✓ Saved: {result.path} ({result.records} records)")
    elif event == "failed":
        click.echo(
            f"✗ Error fetching {source.label}: {result.error_message}", err=True
        )


@click.command("sync")
@click.option(
    "--only",
    multiple=True,
    type=click.Choice(source_names()),
    help="Sync only this source (repeatable)",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Request timeout in seconds (default: REQUEST_TIMEOUT or none)",
)
@click.pass_context
def cli(ctx, only, timeout) -> None:
    """
    Fetch the configured Google Sheets and write data/<name>.json files.
    """
    settings = ctx.obj.get("settings") if ctx.obj else None
    if settings is None:
        # Invoked directly through the cricketsync-sync script
        try:
            settings = Settings()
        except ValidationError as e:
            raise click.UsageError(f"Invalid configuration: {e}")
        set_log_level(settings.log_level)
    if timeout is not None:
        settings = settings.model_copy(update={"request_timeout": timeout})

    click.echo("Starting Village Cricket Data Sync...")
    click.echo(BANNER)

    runner = SheetSync(settings, only=only, listener=echo_progress)
    try:
        report = runner.run()
    except NoSourcesConfigured as e:
        logger.error("%s", e)
        click.echo(f"\nError: {e}", err=True)
        raise click.Abort()
    except SyncFailed as e:
        logger.error("Sync failed at %s: %s", e.source, e.error)
        click.echo(f"\n{BANNER}", err=True)
        click.echo(f"✗ Sync failed: {e.error}", err=True)
        click.echo(BANNER, err=True)
        raise click.Abort()

    click.echo(f"\n{BANNER}")
    click.echo(
        f"✓ All data synced successfully! "
        f"({len(report.synced)} synced, {len(report.skipped)} skipped)"
    )
    click.echo(BANNER)
