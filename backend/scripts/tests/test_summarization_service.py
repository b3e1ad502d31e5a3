"""
Tests for the summarization and content preparation services, using a fake
LLM in place of a provider.
"""
import pytest

from app.core.exceptions import CorruptedFileError, EmptyContentError, SummarizationError
from app.models.document import RawFile
from app.models.summary import SummarizeRequest, SummaryLength
from app.services import content_service, summarization_service
from app.services.content_service import ContentService
from app.services.summarization_service import SummarizationService
from app.utils.prompts import SECTION_SEPARATOR

from conftest import FakeLLMService


def request(content, **overrides):
    fields = {"content": content, "target_language": "Spanish", "summary_length": SummaryLength.SHORT}
    fields.update(overrides)
    return SummarizeRequest(**fields)


class TestSingleCall:

    async def test_small_content_is_one_call(self, fake_llm):
        service = SummarizationService(llm_service=fake_llm)

        response = await service.summarize(request("Some text worth summarizing.", source_language="French"))

        assert response.summary == "A short summary."
        assert len(fake_llm.calls) == 1

        call = fake_llm.calls[0]
        assert call["prompt"] == "Some text worth summarizing."
        assert "concise, 1-2 paragraphs" in call["system_prompt"]
        assert "in Spanish" in call["system_prompt"]
        assert "The source text is in French." in call["system_prompt"]

    @pytest.mark.parametrize("length,wording", [
        (SummaryLength.MEDIUM, "balanced, 3-4 paragraphs"),
        (SummaryLength.LONG, "comprehensive, 5+ paragraphs"),
    ])
    async def test_length_wording(self, fake_llm, length, wording):
        service = SummarizationService(llm_service=fake_llm)
        await service.summarize(request("Text.", summary_length=length))

        assert wording in fake_llm.calls[0]["system_prompt"]

    async def test_file_context_in_prompt(self, fake_llm):
        service = SummarizationService(llm_service=fake_llm)
        await service.summarize(request("Text.", source_type="PDF", file_name="q3.pdf"))

        assert 'from a PDF file named "q3.pdf"' in fake_llm.calls[0]["system_prompt"]

    async def test_unknown_source_language_is_not_mentioned(self, fake_llm):
        service = SummarizationService(llm_service=fake_llm)
        await service.summarize(request("Text.", source_language="unknown"))

        assert "The source text is in" not in fake_llm.calls[0]["system_prompt"]

    async def test_auto_source_language_is_detected(self, fake_llm, monkeypatch):
        monkeypatch.setattr(summarization_service, "detect_language", lambda text: "German")
        service = SummarizationService(llm_service=fake_llm)

        await service.summarize(request("Der Text.", source_language="auto"))

        assert "The source text is in German." in fake_llm.calls[0]["system_prompt"]


class TestLargeContent:

    @pytest.fixture
    def long_text(self):
        return "\n\n".join(f"Paragraph {i} has a few words in it." for i in range(10))

    async def test_sections_then_merge(self, fake_llm, long_text):
        service = SummarizationService(llm_service=fake_llm, max_content_length=80)

        response = await service.summarize(request(long_text))

        # 10 paragraphs of ~34 chars, two per section
        assert len(fake_llm.calls) == 5 + 1
        assert "section 1 of 5" in fake_llm.calls[0]["prompt"]
        assert "section 5 of 5" in fake_llm.calls[4]["prompt"]

        merge = fake_llm.calls[-1]
        assert merge["prompt"].count(SECTION_SEPARATOR) == 4
        assert "Spanish" in merge["system_prompt"]
        assert response.summary == "A short summary."

    async def test_failing_section_is_marked_and_processing_continues(self, long_text):
        llm = FakeLLMService(fail_on={2})
        service = SummarizationService(llm_service=llm, max_content_length=80)

        await service.summarize(request(long_text))

        merge_prompt = llm.calls[-1]["prompt"]
        assert "[Error summarizing section 2]" in merge_prompt
        assert merge_prompt.count("A short summary.") == 4


class TestErrors:

    async def test_empty_content(self, fake_llm):
        with pytest.raises(EmptyContentError):
            await SummarizationService(llm_service=fake_llm).summarize(request("   "))

    async def test_missing_target_language(self, fake_llm):
        with pytest.raises(ValueError):
            await SummarizationService(llm_service=fake_llm).summarize(request("Text.", target_language=""))

    async def test_provider_failure(self):
        service = SummarizationService(llm_service=FakeLLMService(fail_on={1}))

        with pytest.raises(SummarizationError) as exc_info:
            await service.summarize(request("Text."))

        assert "provider unavailable" in exc_info.value.message

    async def test_failed_merge_raises(self):
        service = SummarizationService(llm_service=FakeLLMService(fail_on={3}), max_content_length=20)

        with pytest.raises(SummarizationError):
            await service.summarize(request("First part here.\n\nSecond part here."))


class TestContentService:

    async def test_text_input(self, monkeypatch):
        monkeypatch.setattr(content_service, "detect_language", lambda text: "English")

        processed = await ContentService().process_content(
            content="Plain text input.",
            target_language="French",
            summary_length=SummaryLength.LONG,
        )

        assert processed.source_type == "text"
        assert processed.file_name is None
        assert processed.detected_language == "English"
        assert processed.payload.source_language == "English"
        assert processed.payload.summary_length == SummaryLength.LONG

    async def test_file_replaces_text(self):
        file = RawFile(data=b"Uploaded file text.", filename="upload.txt", content_type="text/plain")

        processed = await ContentService().process_content(
            content="ignored",
            file=file,
            source_language="English",
        )

        assert processed.payload.content == "Uploaded file text."
        assert processed.source_type == "TXT"
        assert processed.file_name == "upload.txt"
        assert processed.detected_language == "English"

    async def test_detection_uses_a_prefix(self, monkeypatch):
        seen = {}

        def fake_detect(text):
            seen["length"] = len(text)
            return "English"

        monkeypatch.setattr(content_service, "detect_language", fake_detect)
        await ContentService().process_content(content="x" * 12000)

        assert seen["length"] == 5000

    async def test_extraction_errors_are_prefixed(self):
        file = RawFile(data=b"{broken", filename="data.json")

        with pytest.raises(CorruptedFileError) as exc_info:
            await ContentService().process_content(file=file)

        assert exc_info.value.message.startswith("Failed to process file:")

    async def test_empty_content(self):
        with pytest.raises(EmptyContentError):
            await ContentService().process_content(content="  \n ")
