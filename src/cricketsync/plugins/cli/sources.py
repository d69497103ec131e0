"""
CLI command: sources

Lists the sheet sources, their environment variables and output files.
"""

import click

from cricketsync.settings import Settings
from cricketsync.sources import build_sources


@click.command("sources")
@click.pass_context
def cli(ctx) -> None:
    """
    Show which sheet sources are configured and where they are written.
    """
    settings = ctx.obj.get("settings") if ctx.obj else None
    settings = settings or Settings()

    sources = build_sources(settings)
    click.echo("Sheet sources:")
    for source in sources:
        mark = "✓" if source.configured else "-"
        click.echo(
            f"  {mark} {source.name:<14} {source.env_var:<24} "
            f"{source.output_path}  {source.display_url()}"
        )

    configured = sum(1 for s in sources if s.configured)
    click.echo(f"\n{configured}/{len(sources)} sources configured")
