"""
Document Processor - Main Orchestrator

Responsibilities:
1. Determine the format family from MIME type or extension
2. Delegate to the matching extractor
3. Keep the error contract: typed extraction errors pass through, anything
   else becomes CorruptedFileError

Actual extraction logic lives in utils/extractors/
"""
import asyncio
import time

from app.core.exceptions import CorruptedFileError, ExtractionError, UnsupportedFormatError
from app.models.document import DocumentFormat, ExtractionResult, RawFile
from app.utils.extractors.docx_extractor import DocExtractor, DocxExtractor
from app.utils.extractors.html_extractor import HTMLExtractor
from app.utils.extractors.json_extractor import JSONExtractor
from app.utils.extractors.pdf_extractor import PDFExtractor
from app.utils.extractors.table_extractor import TableExtractor
from app.utils.extractors.text_extractor import TextExtractor
from app.utils.logger import get_logger

logger = get_logger(__name__)

SPREADSHEET_BANNER = (
    "Spreadsheet files have limited support and are converted to plain text. "
    "For best results with spreadsheets, consider exporting to CSV first.\n\n"
)

# First match wins, in this order
_FORMAT_RULES = [
    (DocumentFormat.PDF, {"application/pdf"}, {"pdf"}),
    (DocumentFormat.DOCX, {"application/vnd.openxmlformats-officedocument.wordprocessingml.document"}, {"docx"}),
    (DocumentFormat.DOC, {"application/msword"}, {"doc"}),
    (DocumentFormat.TEXT, {"text/plain"}, {"txt", "md", "rtf"}),
    (DocumentFormat.HTML, {"text/html"}, {"html", "htm"}),
    (DocumentFormat.CSV, {"text/csv"}, {"csv"}),
    (
        DocumentFormat.SPREADSHEET,
        {"application/vnd.openxmlformats-officedocument.spreadsheetml.sheet", "application/vnd.ms-excel"},
        {"xlsx", "xls"},
    ),
    (DocumentFormat.JSON, {"application/json"}, {"json"}),
]


class DocumentProcessor:
    """
    Main document processor - orchestrates extraction of uploaded files.

    Holds no per-document state, so one instance can serve concurrent
    extractions.
    """

    def __init__(self):
        # Lazy loading for the PDF engine
        self._pdf_extractor = None

        self.docx_extractor = DocxExtractor()
        self.doc_extractor = DocExtractor(self.docx_extractor)
        self.text_extractor = TextExtractor()
        self.html_extractor = HTMLExtractor()
        self.table_extractor = TableExtractor()
        self.json_extractor = JSONExtractor()

        logger.info("DocumentProcessor initialized")

    @property
    def pdf_extractor(self) -> PDFExtractor:
        """Lazy load PDF extractor."""
        if self._pdf_extractor is None:
            self._pdf_extractor = PDFExtractor()
        return self._pdf_extractor

    async def extract(self, raw_file: RawFile) -> ExtractionResult:
        """
        Extract plain text from an uploaded file.

        Args:
            raw_file: Bytes plus declared MIME type and filename

        Returns:
            ExtractionResult with the text and a format tag

        Raises:
            UnsupportedFormatError: no extractor matches and the bytes are not text
            CorruptedFileError: a structured format could not be parsed
        """
        start_time = time.time()
        file_format = self._detect_format(raw_file)
        logger.info(f"Extracting {raw_file.filename or '<unnamed>'} as {file_format.value} ({raw_file.size} bytes)")

        try:
            result = await self._dispatch(file_format, raw_file)
        except ExtractionError:
            raise
        except Exception as e:
            logger.error(f"Unexpected extraction failure for {raw_file.filename}: {e}", exc_info=True)
            raise CorruptedFileError(
                f"The file '{raw_file.filename}' could not be read. It may be damaged or in an unexpected format.",
                "Please re-export the file or paste its text directly."
            ) from e

        logger.info(
            f"Extracted {result.char_count} chars from {raw_file.filename} "
            f"[{result.format_tag}] in {time.time() - start_time:.2f}s"
        )
        return result

    async def _dispatch(self, file_format: DocumentFormat, raw_file: RawFile) -> ExtractionResult:
        data, name = raw_file.data, raw_file.filename

        if file_format == DocumentFormat.PDF:
            return await self.pdf_extractor.extract(data, name)

        # The remaining parsers are blocking; keep them off the event loop
        if file_format == DocumentFormat.DOCX:
            return await asyncio.to_thread(self.docx_extractor.extract, data, name)

        elif file_format == DocumentFormat.DOC:
            return await asyncio.to_thread(self.doc_extractor.extract, data, name)

        elif file_format == DocumentFormat.TEXT:
            return self.text_extractor.extract(data, name, raw_file.extension)

        elif file_format == DocumentFormat.HTML:
            return await asyncio.to_thread(self.html_extractor.extract, data, name)

        elif file_format == DocumentFormat.CSV:
            return await asyncio.to_thread(self.table_extractor.extract, data, name)

        elif file_format == DocumentFormat.SPREADSHEET:
            return await asyncio.to_thread(self._extract_spreadsheet, raw_file)

        elif file_format == DocumentFormat.JSON:
            return await asyncio.to_thread(self.json_extractor.extract, data, name)

        return self._extract_other(raw_file)

    def _detect_format(self, raw_file: RawFile) -> DocumentFormat:
        """
        Detect document format from MIME type or file extension.

        Returns:
            DocumentFormat enum, OTHER when nothing matches
        """
        mime_type = raw_file.mime_type
        extension = raw_file.extension

        for file_format, mime_types, extensions in _FORMAT_RULES:
            if mime_type in mime_types or extension in extensions:
                return file_format

        return DocumentFormat.OTHER

    def _extract_spreadsheet(self, raw_file: RawFile) -> ExtractionResult:
        """No spreadsheet parser: banner plus the legacy byte scrape."""
        logger.warning(f"Spreadsheet {raw_file.filename} has limited support, scraping raw text")
        format_tag = "XLS" if raw_file.extension == "xls" or raw_file.mime_type == "application/vnd.ms-excel" else "XLSX"
        text = SPREADSHEET_BANNER + self.doc_extractor.scrape(raw_file.data)
        return ExtractionResult(text=text, format_tag=format_tag, file_name=raw_file.filename)

    def _extract_other(self, raw_file: RawFile) -> ExtractionResult:
        mime_type = raw_file.mime_type
        declared = raw_file.content_type or raw_file.extension or "unknown"

        if mime_type in ("", "application/octet-stream") or mime_type.startswith("text/"):
            return self.text_extractor.extract_generic(raw_file.data, raw_file.filename, declared)

        logger.warning(f"Unsupported file type: {declared} ({raw_file.filename})")
        raise UnsupportedFormatError(f"Unsupported file type: {declared}.")
