"""
Summarization Service - turns content into a summary in the target language.

Content that fits one model call is summarized directly. Longer content is
chunked, each section summarized on its own, then merged in a final call.
"""
import asyncio
import time
from typing import List, Optional

from app.core.config import settings
from app.core.exceptions import EmptyContentError, SummarizationError
from app.models.summary import SummarizeRequest, SummarizeResponse
from app.pipeline.chunking import chunk_content
from app.pipeline.language import detect_language
from app.services.llm_service import LLMService, get_llm_service
from app.utils.logger import get_logger
from app.utils.prompts import SECTION_PROMPT, SECTION_SEPARATOR, build_merge_prompt, build_summary_prompt

logger = get_logger(__name__)


class SummarizationService:
    """
    Multilingual summarizer on top of LLMService.

    The LLM service is resolved lazily so the service can be created (and
    injected) without provider credentials.
    """

    def __init__(self, llm_service: Optional[LLMService] = None, max_content_length: Optional[int] = None):
        self._llm_service = llm_service
        self.max_content_length = max_content_length or settings.SUMMARY_MAX_CONTENT_LENGTH

    @property
    def llm_service(self) -> LLMService:
        if self._llm_service is None:
            self._llm_service = get_llm_service()
        return self._llm_service

    async def summarize(self, request: SummarizeRequest) -> SummarizeResponse:
        """
        Summarize the request content.

        Raises:
            EmptyContentError: content is blank
            ValueError: target language missing
            SummarizationError: the provider failed
        """
        if not request.content or not request.content.strip():
            raise EmptyContentError("Content is required.")
        if not request.target_language:
            raise ValueError("Target language is required.")

        start_time = time.time()

        source_language = request.source_language
        if source_language == "auto":
            source_language = detect_language(request.content)
            logger.info(f"Detected source language: {source_language}")

        system_prompt = build_summary_prompt(
            target_language=request.target_language,
            summary_length=request.summary_length.value,
            source_language=source_language,
            source_type=request.source_type,
            file_name=request.file_name,
        )

        if len(request.content) <= self.max_content_length:
            summary = await self._generate(request.content, system_prompt)
        else:
            summary = await self._summarize_sections(request, system_prompt)

        logger.info(
            f"Summary generated: {len(request.content)} chars -> {len(summary)} chars "
            f"in {time.time() - start_time:.2f}s"
        )
        return SummarizeResponse(summary=summary)

    async def _summarize_sections(self, request: SummarizeRequest, system_prompt: str) -> str:
        chunks = chunk_content(request.content, self.max_content_length)
        logger.info(f"Content too long ({len(request.content)} chars), summarizing {len(chunks)} sections")

        section_summaries: List[str] = []
        for index, chunk in enumerate(chunks, start=1):
            prompt = SECTION_PROMPT.format(index=index, total=len(chunks), content=chunk)
            try:
                section_summaries.append(await self._generate(prompt, system_prompt))
            except SummarizationError as e:
                logger.warning(f"Section {index}/{len(chunks)} failed: {e.message}")
                section_summaries.append(f"[Error summarizing section {index}]")

        merge_prompt = build_merge_prompt(request.target_language, request.summary_length.value)
        return await self._generate(SECTION_SEPARATOR.join(section_summaries), merge_prompt)

    async def _generate(self, prompt: str, system_prompt: str) -> str:
        """One provider call, off the event loop."""
        try:
            response = await asyncio.to_thread(self.llm_service.generate, prompt, system_prompt)
        except ValueError as e:
            # Missing or invalid provider configuration
            raise SummarizationError(f"LLM provider configuration error: {e}") from e
        except Exception as e:
            logger.error(f"Summarization call failed: {e}", exc_info=True)
            raise SummarizationError(f"Failed to generate summary: {e}") from e

        return response.content.strip()
