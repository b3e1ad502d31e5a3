"""
Table Extractor - renders CSV files as readable records.

Single responsibility: tabular bytes -> "field: value" text blocks.
"""
import csv
import io
from typing import List, Optional

from app.core.config import settings
from app.core.exceptions import CorruptedFileError
from app.models.document import ExtractionResult
from app.utils.helper import decode_text
from app.utils.logger import get_logger

logger = get_logger(__name__)


class TableExtractor:
    """Formats CSV content row by row, previewing the first rows only."""

    def __init__(self, preview_rows: Optional[int] = None):
        self.preview_rows = preview_rows or settings.CSV_PREVIEW_ROWS

    def extract(self, data: bytes, file_name: str) -> ExtractionResult:
        """
        Unreadable rows are logged and skipped.

        Raises:
            CorruptedFileError: when the header row cannot be parsed
        """
        reader = csv.DictReader(io.StringIO(decode_text(data), newline=""))

        try:
            headers = reader.fieldnames or []
        except csv.Error as e:
            logger.error(f"CSV parsing failed for {file_name}: {e}")
            raise CorruptedFileError(
                f"Failed to parse CSV file '{file_name}': {e}",
                "Please check the delimiters and quoting, then try again."
            ) from e

        return ExtractionResult(
            text=self.format_rows(headers, self._read_rows(reader, file_name)),
            format_tag="CSV",
            file_name=file_name
        )

    @staticmethod
    def _read_rows(reader: csv.DictReader, file_name: str) -> List[dict]:
        rows = []
        while True:
            try:
                row = next(reader)
            except StopIteration:
                break
            except csv.Error as e:
                # The reader resets and resumes on the following line
                logger.warning(f"Skipping unreadable CSV line {reader.line_num} in {file_name}: {e}")
                continue
            rows.append(row)
        return rows

    def format_rows(self, headers: List[str], rows: List[dict]) -> str:
        if not rows:
            return "No data rows found in CSV file."

        lines = [f"Headers: {', '.join(headers)}", f"{len(rows)} records found in CSV file:", ""]

        for index, row in enumerate(rows[:self.preview_rows], start=1):
            # DictReader files surplus cells under None and pads missing ones with None
            if None in row or any(value is None for value in row.values()):
                logger.warning(f"CSV row {index} does not match the header width")

            lines.append(f"Row {index}:")
            for field in headers:
                value = row.get(field)
                lines.append(f"  {field}: {'' if value is None else value}")
            lines.append("")

        remaining = len(rows) - self.preview_rows
        if remaining > 0:
            lines.append(f"...and {remaining} more rows")

        return "\n".join(lines).rstrip()
