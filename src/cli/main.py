"""howdy command line entry point."""

import sys
from pathlib import Path
from typing import Optional

import click

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from cli.commands import add, export, mood
from cli.config import get_paths, load_config_model
from cli.logging_config import setup_logging
from cli.utils import fail


@click.group()
@click.version_option(version="0.1.0", prog_name="howdy")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "-f",
    "--file",
    "journal_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Journal file (overrides config)",
)
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Config file (default: ./howdy.yaml or ~/.howdy/config.yaml)",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, journal_file: Optional[Path], config_path: Optional[Path]):
    """howdy - daily mood journal."""
    try:
        config_model = load_config_model(config_path)
    except ValueError as e:
        fail(str(e))

    log_cfg = config_model.logging
    paths = get_paths(config_model.to_dict())
    setup_logging(
        json_mode=log_cfg.json_mode,
        level="DEBUG" if verbose else log_cfg.level,
        log_file=paths["log_file"],
    )

    ctx.obj = {
        "journal_file": journal_file,
        "config_path": config_path,
        "config_model": config_model,
    }


cli.add_command(add)
cli.add_command(mood)
cli.add_command(export)


if __name__ == "__main__":
    cli()
