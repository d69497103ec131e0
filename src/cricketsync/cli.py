"""
Core cricketsync CLI: dynamically loads commands from plugins/cli.
"""

import importlib
import logging
import pathlib
import pkgutil
from pathlib import Path

import click
from pydantic import ValidationError

from cricketsync.log import LOG_LEVELS, set_log_level
from cricketsync.settings import Settings

logger = logging.getLogger(__name__)


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Set logging level (default: LOG_LEVEL or INFO)",
)
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory the JSON files are written to (default: DATA_DIR or ./data)",
)
@click.pass_context
def main(ctx, log_level, data_dir):
    """
    Village cricket club sheet sync
    """
    ctx.ensure_object(dict)
    overrides = {}
    if log_level:
        overrides["log_level"] = log_level
    if data_dir is not None:
        overrides["data_dir"] = data_dir

    try:
        settings = Settings(**overrides)
    except ValidationError as e:
        raise click.UsageError(f"Invalid configuration: {e}")

    set_log_level(settings.log_level)
    ctx.obj["settings"] = settings


def load_commands():
    """
    Auto-discover and register click commands from cricketsync/plugins/cli/*.py
    Each plugin module must define a top-level `cli` click.Command.
    """
    plugins_path = pathlib.Path(__file__).parent / "plugins" / "cli"
    package = "cricketsync.plugins.cli"
    for _, module_name, _ in pkgutil.iter_modules([str(plugins_path)]):
        full_name = f"{package}.{module_name}"
        try:
            module = importlib.import_module(full_name)
            cmd = getattr(module, "cli", None)
            if isinstance(cmd, click.Command):
                main.add_command(cmd)
        except Exception as e:
            logger.error(f"Failed to load plugin {full_name}: {e}")


# Load all plugin commands
load_commands()

if __name__ == "__main__":
    main()
