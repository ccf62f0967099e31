"""Shared CLI utilities."""

import sys
from datetime import datetime
from typing import NoReturn, Optional

import click
import structlog
from rich.console import Console
from rich.markup import escape

console = Console()
logger = structlog.get_logger()


def get_components(obj: Optional[dict] = None):
    """Initialize components from config and global CLI options.

    Args:
        obj: click context object holding `config_model` (loaded by the root
            command), `config_path` and `journal_file`
    """
    from cli.config import get_paths, load_config_model
    from journal.storage import JournalStorage

    obj = obj or {}
    config_model = obj.get("config_model")
    if config_model is None:
        try:
            config_model = load_config_model(obj.get("config_path"))
        except ValueError as e:
            fail(str(e))
    config = config_model.to_dict()

    paths = get_paths(config, journal_file=obj.get("journal_file"))
    storage = JournalStorage(paths["journal_file"])

    return {
        "config": config,
        "config_model": config_model,
        "paths": paths,
        "storage": storage,
    }


def parse_instant(value: Optional[str]) -> datetime:
    """Parse an ISO 8601 instant; naive values are taken in local time.

    None means the current local time. The result always carries a UTC offset.
    """
    if value is None:
        return datetime.now().astimezone()
    try:
        instant = datetime.fromisoformat(value)
    except ValueError:
        raise click.BadParameter(f"expected an ISO 8601 date/time, got '{value}'")
    if instant.tzinfo is None:
        instant = instant.astimezone()
    return instant


def fail(message: str, error: Optional[BaseException] = None) -> NoReturn:
    """Print an error (and the error that caused it) and exit with status 1."""
    console.print(f"[red]Error:[/] {escape(message)}")
    cause = error.__cause__ if error is not None else None
    if cause is not None:
        console.print(f"[dim]Caused by: {escape(str(cause))}[/]")
    sys.exit(1)
