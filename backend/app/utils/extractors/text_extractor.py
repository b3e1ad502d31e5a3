"""
Text Extractor - Handles plain text family files (txt, md, rtf) and the
generic last-resort decode.

Single responsibility: turn bytes into text without touching the content.
"""
from app.core.exceptions import UnsupportedFormatError
from app.models.document import ExtractionResult
from app.utils.helper import decode_text, looks_like_text
from app.utils.logger import get_logger

logger = get_logger(__name__)

PLAIN_TEXT_TAGS = {"txt", "md", "rtf"}


class TextExtractor:
    """Direct decode, no normalization."""

    def extract(self, data: bytes, file_name: str, extension: str = "") -> ExtractionResult:
        """
        Decode a plain text family file.

        Args:
            data: Raw bytes
            file_name: Original filename
            extension: Lower-case extension, picks the format tag

        Returns:
            ExtractionResult with the exact decoded content
        """
        format_tag = extension.upper() if extension in PLAIN_TEXT_TAGS else "TXT"
        return ExtractionResult(text=decode_text(data), format_tag=format_tag, file_name=file_name)

    def extract_generic(self, data: bytes, file_name: str, declared_type: str) -> ExtractionResult:
        """
        Last resort for files no extractor claims.

        Raises:
            UnsupportedFormatError: when the bytes do not look like text
        """
        logger.info(f"Attempting fallback text extraction for: {file_name}")

        if looks_like_text(data):
            return ExtractionResult(text=decode_text(data), format_tag="TEXT", file_name=file_name)

        raise UnsupportedFormatError(f"Unsupported file type: {declared_type}.")
