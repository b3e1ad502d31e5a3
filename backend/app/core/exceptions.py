"""
Exception types for content ingestion and summarization.

Every error carries a user-facing message naming the probable cause and a
suggested remedy. Raw parser traces never leave this package.
"""
from typing import Optional


class ExtractionError(Exception):
    """Base exception for all extraction failures."""

    status_code: int = 400
    default_remedy: str = "Please try a different file or paste the text directly."

    def __init__(self, message: str, remedy: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.remedy = remedy or self.default_remedy

    @property
    def user_message(self) -> str:
        return f"{self.message} {self.remedy}".strip()


class UnsupportedFormatError(ExtractionError):
    """
    No extractor matches the declared MIME type or extension, and the
    content does not look like generic text.
    """

    status_code = 415
    default_remedy = "Please try with PDF, DOCX, TXT, HTML, CSV, or JSON files."


class CorruptedFileError(ExtractionError):
    """
    A format-specific parser rejected the bytes.

    Common causes:
    - Password protection
    - Truncated or damaged upload
    - File saved with the wrong extension
    """

    status_code = 422
    default_remedy = "Please check the file, remove any password protection, or re-export it and try again."


class ExtractionTimeoutError(ExtractionError):
    """Document or page-level time budget exceeded."""

    status_code = 504
    default_remedy = "The document may be very large or malformed. Try a smaller or re-saved copy."


class OversizeError(ExtractionError):
    """
    Upload exceeds the configured size limit.

    Enforced by the caller (API layer), never by the extractors.
    """

    status_code = 413
    default_remedy = "Please try with a smaller file."


class EmptyContentError(ExtractionError):
    """Nothing to summarize after extraction."""

    default_remedy = "Please enter text or upload a valid file."


class SummarizationError(Exception):
    """The LLM provider failed to produce a summary."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
