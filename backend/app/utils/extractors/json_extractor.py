"""
JSON Extractor - structural preview of JSON documents.
"""
import json
from typing import Any, List, Optional

from app.core.config import settings
from app.core.exceptions import CorruptedFileError
from app.models.document import ExtractionResult
from app.utils.helper import decode_text, truncate
from app.utils.logger import get_logger

logger = get_logger(__name__)


class JSONExtractor:
    """Array, object and scalar roots each get their own layout."""

    def __init__(self, preview_items: Optional[int] = None, value_preview: Optional[int] = None):
        self.preview_items = preview_items or settings.JSON_PREVIEW_ITEMS
        self.value_preview = value_preview or settings.JSON_VALUE_PREVIEW

    def extract(self, data: bytes, file_name: str) -> ExtractionResult:
        """
        Raises:
            CorruptedFileError: on a syntax error, naming line and column
        """
        try:
            parsed = json.loads(decode_text(data))
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in {file_name}: {e}")
            raise CorruptedFileError(
                f"Invalid JSON in '{file_name}': {e.msg} at line {e.lineno}, column {e.colno}.",
                "Please validate the JSON syntax and try again."
            ) from e

        return ExtractionResult(text=self.format(parsed), format_tag="JSON", file_name=file_name)

    def format(self, parsed: Any) -> str:
        if isinstance(parsed, list):
            lines: List[str] = [f"JSON Array with {len(parsed)} items:", ""]
            for index, item in enumerate(parsed[:self.preview_items], start=1):
                lines.append(f"Item {index}:")
                if isinstance(item, dict):
                    lines.extend(f"  {key}: {self._render(value)}" for key, value in item.items())
                else:
                    lines.append(f"  {self._render(item)}")
                lines.append("")

            remaining = len(parsed) - self.preview_items
            if remaining > 0:
                lines.append(f"...and {remaining} more items")
            return "\n".join(lines).rstrip()

        if isinstance(parsed, dict):
            lines = ["JSON Object:", ""]
            lines.extend(f"{key}: {self._render(value)}" for key, value in parsed.items())
            return "\n".join(lines).rstrip()

        return f"JSON Content: {json.dumps(parsed, indent=2, ensure_ascii=False)}"

    def _render(self, value: Any) -> str:
        """Strings as-is, everything else JSON-serialized and previewed."""
        if isinstance(value, str):
            return value
        if isinstance(value, (dict, list)):
            return truncate(json.dumps(value, ensure_ascii=False), self.value_preview)
        return json.dumps(value)
