"""Journal export functionality."""

import json
from datetime import datetime
from pathlib import Path

import structlog
from openpyxl import Workbook
from openpyxl.utils import get_column_letter

from .storage import JournalError, JournalStorage

logger = structlog.get_logger()

XLSX_HEADER = ("Date", "Score", "Tags", "Comment")
XLSX_COLUMN_WIDTHS = (10.0, 5.0, 40.0, 50.0)


class ExportError(JournalError):
    """Export file cannot be written."""

    def __init__(self, path: Path):
        super().__init__(f"cannot write export file '{path}'", path)


class JournalExporter:
    """Export journal entries to various formats."""

    def __init__(self, storage: JournalStorage, skip_invalid: bool = False):
        self.storage = storage
        self.skip_invalid = skip_invalid

    def export_xlsx(self, output_path: Path, sheet_name: str = "Daily Scores") -> int:
        """Export entries to a spreadsheet, one row per entry.

        Returns:
            Number of entries exported
        """
        daily_scores = self.storage.read(skip_invalid=self.skip_invalid)

        wb = Workbook()
        sheet = wb.active
        sheet.title = sheet_name
        for i, width in enumerate(XLSX_COLUMN_WIDTHS, start=1):
            sheet.column_dimensions[get_column_letter(i)].width = width

        sheet.append(XLSX_HEADER)
        for daily_score in daily_scores:
            sheet.append(
                [
                    daily_score.timestamp.date(),
                    daily_score.score,
                    daily_score.tags_string(),
                    daily_score.comment or "",
                ]
            )

        output_path = self._prepare(output_path)
        try:
            wb.save(output_path)
        except OSError as e:
            raise ExportError(output_path) from e

        logger.info("export_written", format="xlsx", path=str(output_path), count=len(daily_scores))
        return len(daily_scores)

    def export_json(self, output_path: Path) -> int:
        """Export entries to JSON.

        Returns:
            Number of entries exported
        """
        daily_scores = self.storage.read(skip_invalid=self.skip_invalid)

        export_data = {
            "exported_at": datetime.now().astimezone().isoformat(),
            "count": len(daily_scores),
            "entries": [
                {
                    "timestamp": s.timestamp.isoformat(),
                    "score": s.score,
                    "tags": sorted(s.tags),
                    "comment": s.comment,
                }
                for s in daily_scores
            ],
        }

        output_path = self._prepare(output_path)
        try:
            with open(output_path, "w", encoding="utf-8") as f:
                json.dump(export_data, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ExportError(output_path) from e

        logger.info("export_written", format="json", path=str(output_path), count=len(daily_scores))
        return len(daily_scores)

    @staticmethod
    def _prepare(output_path: Path) -> Path:
        output_path = Path(output_path).expanduser()
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ExportError(output_path) from e
        return output_path
