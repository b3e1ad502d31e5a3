"""
PDF Extractor - Handles PDF document extraction.

Per document: Loading -> MetadataRead (optional) -> PerPageExtract(1..N)
-> PostProcess -> Done.

Responsibilities:
1. Open the document with PyMuPDF within a wall-clock budget
2. Extract every page within its own budget, recovering failed pages with pdfplumber
3. Apply the quality gate and the byte-scan fallback
4. Turn every failure into a descriptive result - this extractor never raises

Delegates to:
- pdf_fallback.py for the raw byte scan
"""
import io
import time
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Tuple

import fitz  # PyMuPDF
import pdfplumber

from app.core.config import settings
from app.core.exceptions import CorruptedFileError, ExtractionError, ExtractionTimeoutError
from app.models.document import ExtractionResult
from app.utils.extractors.pdf_fallback import extract_basic_text
from app.utils.helper import normalize_layout, run_with_timeout
from app.utils.logger import get_logger

logger = get_logger(__name__)

import logging
logging.getLogger("pdfminer").setLevel(logging.ERROR)

PDF_TAG = "PDF"
PDF_RECOVERED_TAG = "PDF (Recovered)"
PDF_LIMITED_TAG = "PDF (Limited Extraction)"
PDF_ERROR_TAG = "PDF (Error)"

FALLBACK_NOTE = "[Note: Text extracted using fallback method due to error with main PDF processor]"

SCANNED_MESSAGE = """This appears to be a scanned PDF without embedded text content or a PDF with complex security settings. The document '{file_name}' contains {page_count} page(s) but no extractable text was found.

Options:
1. Try using OCR software to extract text
2. Copy and paste content manually if possible
3. Try a different file format"""

FAILURE_MESSAGE = """Unable to extract text from the PDF '{file_name}'. Error: {reason}

This may be because:
- The PDF contains scanned images without OCR text
- The PDF has security restrictions preventing text extraction
- The PDF uses uncommon font encodings

Please try a different file format or copy the text manually."""


class _PlumberRecovery:
    """
    Lazily opened pdfplumber view of the same bytes, used only for pages
    PyMuPDF failed on. All calls go through its own recovery worker, never
    the PyMuPDF one.
    """

    def __init__(self, data: bytes):
        self.data = data
        self._pdf = None
        self.executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="pdf-recover")

    def page_text(self, page_index: int) -> str:
        if self._pdf is None:
            self._pdf = pdfplumber.open(io.BytesIO(self.data))
        page = self._pdf.pages[page_index]
        # Word-level extraction, no line/layout combination
        words = page.extract_words(keep_blank_chars=False, use_text_flow=False)
        return " ".join(word["text"] for word in words)

    def close(self) -> None:
        if self._pdf is not None:
            self._pdf.close()
            self._pdf = None

    def release(self) -> None:
        self.executor.submit(self.close)
        self.executor.shutdown(wait=False)


class _PinnedDocument:
    """A PyMuPDF handle and the single worker thread allowed to touch it."""

    def __init__(self):
        self.executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="pdf-extract")
        self.doc: Optional[fitz.Document] = None

    def release(self) -> None:
        # Closing queues behind any late call still holding the worker
        if self.doc is not None:
            self.executor.submit(self.doc.close)
            self.doc = None
        self.executor.shutdown(wait=False)


def _close_document(doc: fitz.Document) -> None:
    doc.close()


class PDFExtractor:
    """
    Handles PDF document extraction.

    Maximizes recovered content over strict correctness: a bad page becomes a
    placeholder line, a bad document becomes a descriptive message.
    """

    def __init__(
            self,
            load_timeout: Optional[float] = None,
            page_timeout: Optional[float] = None
    ):
        """
        Initialize PDF extractor.

        Args:
            load_timeout: Seconds allowed to open a document
            page_timeout: Seconds allowed per page
        """
        self.load_timeout = load_timeout or settings.PDF_LOAD_TIMEOUT
        self.page_timeout = page_timeout or settings.PDF_PAGE_TIMEOUT

        logger.info(
            f"PDFExtractor initialized: "
            f"load_timeout={self.load_timeout}s, page_timeout={self.page_timeout}s"
        )

    async def extract(self, data: bytes, file_name: str) -> ExtractionResult:
        """
        Extract text from PDF bytes.

        Args:
            data: Raw PDF bytes
            file_name: Original filename (used in messages)

        Returns:
            ExtractionResult tagged PDF, PDF (Recovered),
            PDF (Limited Extraction) or PDF (Error)
        """
        start_time = time.time()
        logger.info(f"Extracting PDF: {file_name}")

        try:
            header, body, content_length, page_count = await self._extract_structured(data)
        except Exception as e:
            logger.error(f"PDF extraction failed for {file_name}: {e}", exc_info=not isinstance(e, ExtractionError))
            return self._recover_from_failure(data, file_name, e)

        # Quality gate
        if content_length < settings.PDF_MIN_TEXT_LENGTH:
            logger.warning(
                f"Only {content_length} chars extracted from {file_name}, trying byte scan"
            )
            basic_text = extract_basic_text(data)
            if len(basic_text) > settings.PDF_FALLBACK_MIN_LENGTH:
                return self._result(basic_text, PDF_RECOVERED_TAG, file_name)

            return self._result(
                SCANNED_MESSAGE.format(file_name=file_name, page_count=page_count),
                PDF_LIMITED_TAG,
                file_name
            )

        logger.info(
            f"PDF extracted: {file_name} pages={page_count} chars={content_length} "
            f"in {time.time() - start_time:.2f}s"
        )
        return self._result(header + body, PDF_TAG, file_name)

    async def _extract_structured(self, data: bytes) -> Tuple[str, str, int, int]:
        """
        Structured path.

        Returns:
            (metadata header, normalized body, chars of real page text, page count)

        Raises:
            ExtractionTimeoutError: document did not open in time
            CorruptedFileError: password protected document
            Exception: anything PyMuPDF raises while opening
        """
        recovery = _PlumberRecovery(data)
        pinned: Optional[_PinnedDocument] = None

        try:
            pinned = await self._open_pinned(data)
            doc = pinned.doc

            if doc.needs_pass:
                raise CorruptedFileError(
                    "The PDF is password protected or encrypted.",
                    "Please remove the password protection and try again."
                )

            page_count = doc.page_count
            logger.debug(f"PDF loaded successfully with {page_count} pages")

            header = self._read_metadata(doc, page_count)

            sections: List[str] = []
            content_length = 0
            for page_number in range(1, page_count + 1):
                section, extracted, stalled = await self._extract_page(
                    pinned, page_number, page_count, recovery
                )
                sections.append(section)
                content_length += extracted

                if stalled and page_number < page_count:
                    # The late call keeps the old worker; later pages get a fresh handle
                    pinned.release()
                    pinned = await self._reopen(data, page_number)

            return header, normalize_layout("\n\n".join(sections)), content_length, page_count

        finally:
            if pinned is not None:
                pinned.release()
            recovery.release()

    async def _open_pinned(self, data: bytes) -> _PinnedDocument:
        pinned = _PinnedDocument()
        try:
            pinned.doc = await run_with_timeout(
                self._open_document, data,
                timeout=self.load_timeout,
                message=f"PDF loading timeout after {self.load_timeout:g} seconds",
                executor=pinned.executor,
                on_late=_close_document,
            )
        except Exception:
            pinned.release()
            raise
        return pinned

    async def _reopen(self, data: bytes, page_number: int) -> Optional[_PinnedDocument]:
        """Fresh handle after a stalled page; None sends the remaining pages to recovery."""
        try:
            return await self._open_pinned(data)
        except Exception as e:
            logger.warning(f"Could not reopen PDF after page {page_number} stalled: {e}")
            return None

    async def _extract_page(
            self,
            pinned: Optional[_PinnedDocument],
            page_number: int,
            page_count: int,
            recovery: _PlumberRecovery
    ) -> Tuple[str, int, bool]:
        """
        Extract a single page, never raising.

        Returns:
            (text section for this page, chars of real text it contributed,
            whether a PyMuPDF call is still running on the page's worker)
        """
        stalled = False

        if pinned is not None:
            try:
                text = await run_with_timeout(
                    self._page_text, pinned.doc, page_number - 1,
                    timeout=self.page_timeout,
                    message=f"Timeout extracting text from page {page_number}",
                    executor=pinned.executor,
                )
                marker = f"[Page {page_number}]\n" if page_count > 1 else ""
                return marker + text, len(text.strip()), False

            except ExtractionTimeoutError as e:
                logger.warning(str(e))
                stalled = True
            except Exception as e:
                logger.warning(f"Error extracting text from page {page_number}: {e}")

        placeholder = f"[Error extracting text from page {page_number}]"

        # Simpler extraction mode for this page
        try:
            recovered = await run_with_timeout(
                recovery.page_text, page_number - 1,
                timeout=self.page_timeout,
                message=f"Timeout recovering text from page {page_number}",
                executor=recovery.executor,
            )
        except Exception as e:
            logger.debug(f"Recovery failed for page {page_number}: {e}")
            return placeholder, 0, stalled

        recovered = recovered.strip()
        if len(recovered) > settings.PDF_RECOVERY_MIN_LENGTH:
            logger.info(f"Recovered {len(recovered)} chars from page {page_number}")
            return f"[Recovered text from page {page_number}]\n{recovered}", len(recovered), stalled

        return placeholder, 0, stalled

    @staticmethod
    def _open_document(data: bytes) -> fitz.Document:
        return fitz.open(stream=data, filetype="pdf")

    @staticmethod
    def _page_text(doc: fitz.Document, page_index: int) -> str:
        return doc[page_index].get_text("text") or ""

    def _read_metadata(self, doc: fitz.Document, page_count: int) -> str:
        """Optional header; empty when the document carries no title or author."""
        try:
            metadata = doc.metadata or {}
        except Exception as e:
            logger.warning(f"Could not extract PDF metadata: {e}")
            return ""

        title = (metadata.get("title") or "").strip()
        author = (metadata.get("author") or "").strip()
        if not title and not author:
            return ""

        return (
            f"Document Title: {title or 'Unknown'}\n"
            f"Document Author: {author or 'Unknown'}\n"
            f"Pages: {page_count}\n\n"
        )

    def _recover_from_failure(self, data: bytes, file_name: str, error: Exception) -> ExtractionResult:
        """Top-level failure: byte scan first, descriptive message otherwise."""
        basic_text = extract_basic_text(data)
        if len(basic_text) > settings.PDF_MIN_TEXT_LENGTH:
            logger.info(f"Byte scan recovered {len(basic_text)} chars from {file_name}")
            return self._result(f"{basic_text}\n\n{FALLBACK_NOTE}", PDF_RECOVERED_TAG, file_name)

        if isinstance(error, ExtractionError):
            reason = error.user_message
        else:
            reason = "the document structure could not be read (it may be malformed or damaged)."

        return self._result(
            FAILURE_MESSAGE.format(file_name=file_name, reason=reason),
            PDF_ERROR_TAG,
            file_name
        )

    @staticmethod
    def _result(text: str, format_tag: str, file_name: str) -> ExtractionResult:
        return ExtractionResult(text=text, format_tag=format_tag, file_name=file_name)
