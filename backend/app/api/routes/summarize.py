"""
Summarization Routes.

- POST /summarize: JSON body with the content to summarize
- POST /summarize/upload: multipart form with a file and/or text
Both record the result in the summary history.
"""
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from app.api.deps import get_content_service, get_history_service, get_summarization_service, read_upload
from app.core.config import settings
from app.models.summary import (
    ErrorResponse,
    SummarizeRequest,
    SummarizeResponse,
    SummaryHistoryCreate,
    SummaryLength,
    UploadSummaryResponse,
)
from app.services.content_service import ContentService
from app.services.history_service import HistoryService
from app.services.summarization_service import SummarizationService
from app.utils.helper import truncate
from app.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()


def _history_entry(request: SummarizeRequest, summary: str, detected_language: Optional[str] = None) -> SummaryHistoryCreate:
    source_language = detected_language or request.source_language
    if not source_language or source_language in ("auto", "unknown"):
        source_language = "Detected"

    return SummaryHistoryCreate(
        source_language=source_language,
        target_language=request.target_language,
        summary_length=request.summary_length.value,
        content_preview=request.file_name or truncate(request.content, settings.CONTENT_PREVIEW_LENGTH),
        summary=summary,
        source_type=request.source_type,
        file_name=request.file_name,
    )


@router.post("", response_model=SummarizeResponse, responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
async def summarize(
        request: SummarizeRequest,
        service: SummarizationService = Depends(get_summarization_service),
        history: HistoryService = Depends(get_history_service),
):
    """Summarize text content into the target language."""
    logger.info(
        f"Summarize request: {len(request.content)} chars -> {request.target_language} "
        f"({request.summary_length.value})"
    )

    response = await service.summarize(request)
    history.save_summary(_history_entry(request, response.summary))
    return response


@router.post("/upload", response_model=UploadSummaryResponse, response_model_by_alias=True)
async def summarize_upload(
        file: Optional[UploadFile] = File(None, description="Document to summarize"),
        content: str = Form(""),
        target_language: str = Form("English", alias="targetLanguage"),
        summary_length: SummaryLength = Form(SummaryLength.MEDIUM, alias="summaryLength"),
        source_language: str = Form("auto", alias="sourceLanguage"),
        content_service: ContentService = Depends(get_content_service),
        service: SummarizationService = Depends(get_summarization_service),
        history: HistoryService = Depends(get_history_service),
):
    """Extract (when a file is given), detect the language and summarize."""
    raw_file = await read_upload(file) if file is not None and file.filename else None

    processed = await content_service.process_content(
        content=content,
        file=raw_file,
        target_language=target_language,
        summary_length=summary_length,
        source_language=source_language,
    )

    response = await service.summarize(processed.payload)
    history.save_summary(_history_entry(processed.payload, response.summary, processed.detected_language))

    return UploadSummaryResponse(
        summary=response.summary,
        detected_language=processed.detected_language,
        source_type=processed.source_type,
        file_name=processed.file_name,
    )
