"""
API tests through FastAPI's TestClient.

The database is an in-memory SQLite and the LLM is a fake, both injected via
dependency overrides.
"""
import json

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_summarization_service
from app.api.routes import health
from app.core.config import settings
from app.core.database import get_db
from app.main import app
from app.services.summarization_service import SummarizationService

API = settings.API_V1_PREFIX


@pytest.fixture
def client(db_session, fake_llm):
    app.dependency_overrides[get_db] = lambda: db_session
    app.dependency_overrides[get_summarization_service] = lambda: SummarizationService(llm_service=fake_llm)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


class TestInfo:

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["name"] == settings.APP_NAME

    def test_health(self, client, fake_llm, monkeypatch):
        monkeypatch.setattr(health, "get_llm_service_dep", lambda: fake_llm)

        response = client.get(f"{API}/health")

        assert response.status_code == 200
        assert response.json()["services"] == {"llm": "healthy", "database": "healthy"}

    def test_health_without_provider_key(self, client, monkeypatch):
        def unconfigured():
            raise ValueError("Anthropic requires an API key")

        monkeypatch.setattr(health, "get_llm_service_dep", unconfigured)

        response = client.get(f"{API}/health")

        assert response.status_code == 503
        assert response.json()["services"]["llm"] == "not_configured"


class TestExtract:

    def test_plain_text(self, client):
        response = client.post(
            f"{API}/documents/extract",
            files={"file": ("note.txt", b"Exact text content.", "text/plain")},
        )

        assert response.status_code == 200
        assert response.json() == {"text": "Exact text content.", "formatTag": "TXT", "fileName": "note.txt"}

    def test_csv(self, client):
        response = client.post(
            f"{API}/documents/extract",
            files={"file": ("data.csv", b"a,b\n1,2\n3,4\n", "text/csv")},
        )

        assert response.status_code == 200
        assert "Headers: a, b" in response.json()["text"]

    def test_unsupported_format(self, client):
        response = client.post(
            f"{API}/documents/extract",
            files={"file": ("photo.png", b"\x89PNG\r\n\x1a\n\x00", "image/png")},
        )

        assert response.status_code == 415
        assert "Unsupported file type" in response.json()["error"]

    def test_corrupted_file(self, client):
        response = client.post(
            f"{API}/documents/extract",
            files={"file": ("broken.json", b'{"a": ', "application/json")},
        )

        assert response.status_code == 422
        assert "Invalid JSON" in response.json()["error"]

    def test_oversize(self, client, monkeypatch):
        monkeypatch.setattr(settings, "MAX_UPLOAD_SIZE", 10)

        response = client.post(
            f"{API}/documents/extract",
            files={"file": ("big.txt", b"x" * 11, "text/plain")},
        )

        assert response.status_code == 413
        assert "too large" in response.json()["error"]

    def test_missing_file(self, client):
        response = client.post(f"{API}/documents/extract")

        assert response.status_code == 422
        assert "error" in response.json()


class TestSummarize:

    def test_summarize_records_history(self, client, fake_llm):
        content = "A long article about renewable energy. " * 10
        response = client.post(f"{API}/summarize", json={
            "content": content,
            "targetLanguage": "German",
            "summaryLength": "long",
            "sourceLanguage": "English",
        })

        assert response.status_code == 200
        assert response.json() == {"summary": "A short summary."}
        assert "comprehensive, 5+ paragraphs" in fake_llm.calls[0]["system_prompt"]

        history = client.get(f"{API}/history").json()
        assert len(history) == 1
        assert history[0]["sourceLanguage"] == "English"
        assert history[0]["targetLanguage"] == "German"
        assert history[0]["contentPreview"] == content[:200] + "..."

    def test_empty_content(self, client):
        response = client.post(f"{API}/summarize", json={"content": " ", "targetLanguage": "German"})

        assert response.status_code == 400
        assert "Content is required" in response.json()["error"]

    def test_provider_failure(self, client, fake_llm):
        fake_llm.fail_on = {1}

        response = client.post(f"{API}/summarize", json={"content": "Text.", "targetLanguage": "German"})

        assert response.status_code == 500
        assert "provider unavailable" in response.json()["error"]
        assert client.get(f"{API}/history").json() == []

    def test_upload_file(self, client):
        response = client.post(
            f"{API}/summarize/upload",
            files={"file": ("notes.txt", b"Meeting notes about the product launch timeline.", "text/plain")},
            data={"targetLanguage": "Italian", "summaryLength": "short", "sourceLanguage": "English"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["summary"] == "A short summary."
        assert body["detectedLanguage"] == "English"
        assert body["sourceType"] == "TXT"
        assert body["fileName"] == "notes.txt"

        history = client.get(f"{API}/history").json()
        assert history[0]["contentPreview"] == "notes.txt"
        assert history[0]["sourceType"] == "TXT"

    def test_upload_text_only_with_detection(self, client):
        response = client.post(
            f"{API}/summarize/upload",
            data={
                "content": "This is a clearly written English sentence with enough length.",
                "targetLanguage": "Italian",
            },
        )

        assert response.status_code == 200
        assert response.json()["detectedLanguage"] == "English"
        assert response.json()["sourceType"] == "text"

    def test_upload_short_text_records_detected_placeholder(self, client):
        response = client.post(f"{API}/summarize/upload", data={"content": "Tiny.", "targetLanguage": "Italian"})

        assert response.status_code == 200
        assert response.json()["detectedLanguage"] == "unknown"
        assert client.get(f"{API}/history").json()[0]["sourceLanguage"] == "Detected"

    def test_upload_nothing(self, client):
        response = client.post(f"{API}/summarize/upload", data={"targetLanguage": "Italian"})

        assert response.status_code == 400
        assert "No content to summarize" in response.json()["error"]

    def test_upload_unsupported_file(self, client):
        response = client.post(
            f"{API}/summarize/upload",
            files={"file": ("photo.png", b"\x89PNG\x00", "image/png")},
            data={"targetLanguage": "Italian"},
        )

        assert response.status_code == 415
        assert response.json()["error"].startswith("Failed to process file:")


class TestHistoryAndPreferences:

    def test_delete_history_item(self, client):
        client.post(f"{API}/summarize", json={"content": "Text.", "targetLanguage": "German"})
        item_id = client.get(f"{API}/history").json()[0]["id"]

        assert client.delete(f"{API}/history/{item_id}").status_code == 200
        assert client.get(f"{API}/history").json() == []

    def test_delete_unknown_item(self, client):
        response = client.delete(f"{API}/history/missing")

        assert response.status_code == 404
        assert "not found" in response.json()["error"]

    def test_preferences_round_trip(self, client):
        defaults = client.get(f"{API}/preferences").json()
        assert defaults == {"defaultTargetLanguage": "English", "defaultSummaryLength": "medium", "darkMode": False}

        updated = {"defaultTargetLanguage": "Korean", "defaultSummaryLength": "short", "darkMode": True}
        assert client.put(f"{API}/preferences", content=json.dumps(updated),
                          headers={"Content-Type": "application/json"}).json() == updated
        assert client.get(f"{API}/preferences").json() == updated
