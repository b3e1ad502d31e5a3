"""
API Dependencies - Shared dependencies for FastAPI routes.

Services are injected so tests can swap them through
app.dependency_overrides.
"""

from functools import lru_cache

from fastapi import Depends, UploadFile
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import get_db
from app.core.exceptions import OversizeError
from app.models.document import RawFile
from app.pipeline.document_processor import DocumentProcessor
from app.services.content_service import ContentService
from app.services.history_service import HistoryService
from app.services.llm_service import get_llm_service, LLMService
from app.services.summarization_service import SummarizationService


# ==================== Services ====================

@lru_cache
def get_document_processor() -> DocumentProcessor:
    """Shared processor; it keeps no per-document state."""
    return DocumentProcessor()


def get_content_service(
        processor: DocumentProcessor = Depends(get_document_processor)
) -> ContentService:
    return ContentService(processor=processor)


def get_llm_service_dep() -> LLMService:
    """
    Get LLM service instance.

    Raises ValueError when the configured provider lacks credentials.
    """
    return get_llm_service()


@lru_cache
def get_summarization_service() -> SummarizationService:
    """The LLM client is created on first use, not at injection time."""
    return SummarizationService()


def get_history_service(db: Session = Depends(get_db)) -> HistoryService:
    return HistoryService(db_session=db)


# ==================== Validation ====================

async def read_upload(file: UploadFile, max_size: int = None) -> RawFile:
    """
    Read an upload into a RawFile, enforcing the size limit.

    Raises:
        OversizeError: file larger than MAX_UPLOAD_SIZE
    """
    max_size = max_size or settings.MAX_UPLOAD_SIZE

    if file.size is not None and file.size > max_size:
        raise _oversize(max_size)

    data = await file.read(max_size + 1)
    if len(data) > max_size:
        raise _oversize(max_size)

    return RawFile(
        data=data,
        content_type=file.content_type or "",
        filename=file.filename or "",
    )


def _oversize(max_size: int) -> OversizeError:
    max_mb = max_size / 1024 / 1024
    return OversizeError(f"File too large. Maximum size: {max_mb:.0f}MB.")
