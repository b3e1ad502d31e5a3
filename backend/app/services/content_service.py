"""
Content Service - prepares text or file input for summarization.
"""
from typing import Optional

from app.core.config import settings
from app.core.exceptions import EmptyContentError, ExtractionError
from app.models.document import RawFile
from app.models.summary import ProcessedContent, SummarizeRequest, SummaryLength
from app.pipeline.document_processor import DocumentProcessor
from app.pipeline.language import UNKNOWN_LANGUAGE, detect_language
from app.utils.logger import get_logger

logger = get_logger(__name__)


class ContentService:
    """Extracts uploaded files, validates content and resolves the source language."""

    def __init__(self, processor: Optional[DocumentProcessor] = None):
        self.processor = processor or DocumentProcessor()

    async def process_content(
            self,
            content: str = "",
            file: Optional[RawFile] = None,
            target_language: str = "English",
            summary_length: SummaryLength = SummaryLength.MEDIUM,
            source_language: str = "auto",
    ) -> ProcessedContent:
        """
        Build the summarization payload.

        A file, when given, replaces the text content.

        Raises:
            ExtractionError subclasses: extraction failed, message prefixed with
                "Failed to process file:"
            EmptyContentError: nothing to summarize
        """
        source_type = "text"
        file_name = None

        if file is not None:
            try:
                extraction = await self.processor.extract(file)
            except ExtractionError as e:
                logger.error(f"File processing error: {e.message}")
                raise type(e)(f"Failed to process file: {e.message}", e.remedy) from e

            content = extraction.text
            source_type = extraction.format_tag
            file_name = extraction.file_name
            logger.info(f"Processed {source_type} file: {file_name}")

        if not content or not content.strip():
            raise EmptyContentError("No content to summarize.")

        detected_language = source_language
        if source_language == "auto":
            detected_language = detect_language(content[:settings.LANGUAGE_DETECTION_PREFIX]) or UNKNOWN_LANGUAGE
            logger.info(f"Detected language: {detected_language}")

        payload = SummarizeRequest(
            content=content,
            target_language=target_language,
            summary_length=summary_length,
            source_language=detected_language,
            source_type=source_type,
            file_name=file_name,
        )

        return ProcessedContent(
            payload=payload,
            detected_language=detected_language,
            source_type=source_type,
            file_name=file_name,
        )
