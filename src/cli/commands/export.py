"""Journal export CLI command."""

from pathlib import Path

import click
from rich.console import Console

from cli.utils import fail, get_components
from journal.export import JournalExporter
from journal.storage import JournalError
from shared_types import ExportFormat

console = Console()


@click.command()
@click.argument("output", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "-F",
    "--format",
    "fmt",
    default=ExportFormat.XLSX.value,
    type=click.Choice([f.value for f in ExportFormat]),
    help="Export format",
)
@click.option("--skip-invalid", is_flag=True, help="Skip unparsable journal lines")
@click.pass_obj
def export(obj: dict, output: Path, fmt: str, skip_invalid: bool):
    """Export all journal entries to OUTPUT."""
    c = get_components(obj)
    exporter = JournalExporter(c["storage"], skip_invalid=skip_invalid)

    try:
        with console.status("Exporting..."):
            if ExportFormat(fmt) == ExportFormat.XLSX:
                count = exporter.export_xlsx(
                    output, sheet_name=c["config_model"].export.sheet_name
                )
            else:
                count = exporter.export_json(output)
    except JournalError as e:
        fail(str(e), e)

    console.print(f"Export to '{output}' done ({count} entries)", soft_wrap=True)
