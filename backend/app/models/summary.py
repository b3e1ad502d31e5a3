"""
Pydantic schemas for summarization requests, history entries and preferences.
"""
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SummaryLength(str, Enum):
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


class CamelModel(BaseModel):
    """Accepts and emits the camelCase keys used by the browser client."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ==================== Summarization boundary ====================

class SummarizeRequest(CamelModel):
    content: str
    target_language: str
    summary_length: SummaryLength = SummaryLength.MEDIUM
    source_language: Optional[str] = None
    source_type: Optional[str] = None
    file_name: Optional[str] = None


class SummarizeResponse(CamelModel):
    summary: str


class ErrorResponse(BaseModel):
    error: str


class ProcessedContent(CamelModel):
    """Payload prepared from text or file input, ready for summarization."""
    payload: SummarizeRequest
    detected_language: str
    source_type: str = "text"
    file_name: Optional[str] = None


class UploadSummaryResponse(CamelModel):
    summary: str
    detected_language: str
    source_type: str
    file_name: Optional[str] = None


# ==================== History / preferences ====================

class SummaryHistoryItem(CamelModel):
    id: str
    date: datetime
    source_language: str
    target_language: str
    summary_length: str
    content_preview: str
    summary: str
    source_type: Optional[str] = None
    file_name: Optional[str] = None


class SummaryHistoryCreate(CamelModel):
    """A history entry before id and date are assigned."""
    source_language: str
    target_language: str
    summary_length: str
    content_preview: str
    summary: str
    source_type: Optional[str] = None
    file_name: Optional[str] = None


class UserPreferences(CamelModel):
    default_target_language: str = Field("English", description="Language summaries are written in by default")
    default_summary_length: SummaryLength = SummaryLength.MEDIUM
    dark_mode: bool = False
