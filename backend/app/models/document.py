"""
Pydantic schemas for content ingestion - defines the file and extraction data structures.
"""

from pathlib import PurePath
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field


class DocumentFormat(str, Enum):
    """Dispatch families recognised by the document processor."""
    PDF = "pdf"
    DOCX = "docx"
    DOC = "doc"
    TEXT = "text"
    HTML = "html"
    CSV = "csv"
    SPREADSHEET = "spreadsheet"
    JSON = "json"
    OTHER = "other"


class RawFile(BaseModel):
    """
    An uploaded file as handed over by the caller.

    Read-only: created at upload, discarded after extraction.
    """
    model_config = ConfigDict(frozen=True)

    data: bytes = Field(..., description="Raw file bytes")
    content_type: str = Field("", description="Declared MIME type (may be empty)")
    filename: str = Field("", description="Original filename")

    @computed_field
    @property
    def size(self) -> int:
        return len(self.data)

    @computed_field
    @property
    def extension(self) -> str:
        """Lower-case suffix without the dot, empty when the name has none."""
        return PurePath(self.filename.lower()).suffix.lstrip(".")

    @property
    def mime_type(self) -> str:
        """MIME type without parameters, e.g. 'text/plain; charset=utf-8' -> 'text/plain'."""
        return (self.content_type or "").split(";")[0].strip().lower()


class ExtractionResult(BaseModel):
    """
    Main output of extraction - plain text plus the format tag shown to the user.
    """
    model_config = ConfigDict(populate_by_name=True)

    text: str = Field(..., description="Extracted plain text or a descriptive message")
    format_tag: str = Field(..., alias="formatTag", description="e.g. PDF, DOCX, CSV, PDF (Limited Extraction)")
    file_name: str = Field(..., alias="fileName", description="Original filename")

    @property
    def char_count(self) -> int:
        return len(self.text)

    @property
    def word_count(self) -> int:
        return len(self.text.split())

    @property
    def summary(self):
        """Quick summary of the result for logging/debugging."""
        return {
            "file_name": self.file_name,
            "format": self.format_tag,
            "chars": self.char_count,
            "words": self.word_count,
        }
