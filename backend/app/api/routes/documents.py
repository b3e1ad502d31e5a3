"""
Document Extraction Routes.

Turns an uploaded file into plain text without summarizing it.
"""
from fastapi import APIRouter, UploadFile, File, Depends

from app.api.deps import get_document_processor, read_upload
from app.models.document import ExtractionResult
from app.models.summary import ErrorResponse
from app.pipeline.document_processor import DocumentProcessor
from app.utils.logger import get_logger

logger = get_logger(__name__)


router = APIRouter()


@router.post(
    "/extract",
    response_model=ExtractionResult,
    response_model_by_alias=True,
    responses={code: {"model": ErrorResponse} for code in (413, 415, 422, 504)},
)
async def extract_document(
        file: UploadFile = File(..., description="Document to extract text from"),
        processor: DocumentProcessor = Depends(get_document_processor)
):
    """
    Extract text from an uploaded document.

    Raises:
        413: File too large
        415: Unsupported file type
        422: Corrupted or unreadable file
        504: Extraction timed out
    """
    logger.info(f"Received upload: {file.filename} ({file.content_type})")

    raw_file = await read_upload(file)
    result = await processor.extract(raw_file)

    logger.info(f"Extraction complete: {result.summary}")
    return result
