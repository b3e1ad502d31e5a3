"""
Word document extractors.

- DocxExtractor: structured OOXML paragraph text via python-docx
- DocExtractor: legacy binary .doc, which has no structured parser here.
  Probes for a renamed DOCX first, then scrapes legible ASCII from the bytes.
"""
import io
import re
import zipfile
from typing import List

from docx import Document

from app.core.exceptions import CorruptedFileError
from app.models.document import ExtractionResult
from app.utils.helper import collapse_whitespace
from app.utils.logger import get_logger

logger = get_logger(__name__)

# Control bytes and the upper latin-1 range
_BINARY_ARTIFACTS = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F-\xFF]")
_NON_PRINTABLE = re.compile(r"[^\x20-\x7E\t\r\n]")

DOC_LIMITED_MESSAGE = "Limited text could be extracted from this DOC file. Consider converting to DOCX for better results."
DOC_FAILED_MESSAGE = "Could not extract text from DOC file. Consider converting to DOCX for better results."
RENAMED_DOCX_MESSAGE = "Document appears to be a DOCX file with DOC extension. Limited text could be extracted."


class DocxExtractor:
    """Extracts paragraph and table text from .docx files."""

    def read_text(self, data: bytes) -> str:
        """
        Paragraphs separated by blank lines, then table rows.

        Raises:
            Exception: whatever python-docx raises on bad input
        """
        document = Document(io.BytesIO(data))

        parts: List[str] = [p.text for p in document.paragraphs if p.text.strip()]

        for table in document.tables:
            for row in table.rows:
                cells = [cell.text.strip() for cell in row.cells]
                if any(cells):
                    parts.append(" | ".join(cells))

        return "\n\n".join(parts)

    def extract(self, data: bytes, file_name: str) -> ExtractionResult:
        """
        Raises:
            CorruptedFileError: when the container or XML cannot be read
        """
        try:
            text = self.read_text(data)
        except Exception as e:
            logger.error(f"DOCX extraction error for {file_name}: {e}")
            raise CorruptedFileError(
                f"Failed to extract text from the DOCX file '{file_name}'. "
                "The file may be password protected, corrupted or incompatible.",
                "Please remove any password protection or re-save the document as DOCX and try again."
            )

        return ExtractionResult(text=text, format_tag="DOCX", file_name=file_name)


class DocExtractor:
    """
    Best-effort extraction for legacy .doc files.

    Never raises: degrades to a "limited extraction" message.
    """

    def __init__(self, docx_extractor: DocxExtractor = None):
        self.docx_extractor = docx_extractor or DocxExtractor()

    def scrape(self, data: bytes) -> str:
        """
        Text from either a renamed DOCX or the raw byte stream.

        Returns:
            Extracted text or a caveat message, never empty
        """
        try:
            renamed = self._read_renamed_docx(data)
            if renamed is not None:
                return renamed or RENAMED_DOCX_MESSAGE

            text = data.decode("utf-8", errors="replace")
            text = _BINARY_ARTIFACTS.sub("", text)
            text = _NON_PRINTABLE.sub(" ", text)
            text = collapse_whitespace(text)

            return text or DOC_LIMITED_MESSAGE

        except Exception as e:
            logger.error(f"DOC extraction error: {e}")
            return DOC_FAILED_MESSAGE

    def extract(self, data: bytes, file_name: str) -> ExtractionResult:
        return ExtractionResult(text=self.scrape(data), format_tag="DOC", file_name=file_name)

    def _read_renamed_docx(self, data: bytes):
        """
        Returns:
            DOCX text when the bytes are a zip with word/document.xml,
            None otherwise (including when the DOCX path itself fails)
        """
        try:
            with zipfile.ZipFile(io.BytesIO(data)) as archive:
                if "word/document.xml" not in archive.namelist():
                    return None
        except zipfile.BadZipFile:
            return None

        logger.info("DOC file is a DOCX container, using the DOCX path")
        try:
            return self.docx_extractor.read_text(data)
        except Exception as e:
            logger.warning(f"Renamed DOCX could not be parsed, scraping bytes instead: {e}")
            return None
