"""
Tests for configuration loading and provider validation.
"""
from app.core.config import Settings, settings


class TestSettings:

    def test_defaults_keep_threshold_ordering(self):
        # Page budget below document budget, recovery gate below quality gate below fallback gate
        assert settings.PDF_PAGE_TIMEOUT < settings.PDF_LOAD_TIMEOUT
        assert settings.PDF_RECOVERY_MIN_LENGTH < settings.PDF_MIN_TEXT_LENGTH < settings.PDF_FALLBACK_MIN_LENGTH
        assert settings.LANGUAGE_SAMPLE_WINDOW * 2 > settings.LANGUAGE_FULL_SAMPLE_LIMIT
        assert settings.LANGUAGE_FULL_SAMPLE_LIMIT < settings.LANGUAGE_ZONED_SAMPLE_LIMIT

    def test_database_url_defaults_to_sqlite_in_data_dir(self):
        assert settings.DATABASE_URL.startswith("sqlite:///")
        assert settings.DATA_DIR.exists()

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("DATA_DIR", str(tmp_path))
        monkeypatch.setenv("PDF_PAGE_TIMEOUT", "2.5")
        monkeypatch.setenv("LLM_PROVIDER", "ollama")

        custom = Settings()

        assert custom.PDF_PAGE_TIMEOUT == 2.5
        assert custom.DATABASE_URL == f"sqlite:///{tmp_path / 'summarizer.db'}"
        assert custom.LLM_PROVIDER == "ollama"


class TestProviderValidation:

    def test_anthropic_requires_key(self, monkeypatch, tmp_path):
        monkeypatch.setenv("DATA_DIR", str(tmp_path))
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)

        custom = Settings(LLM_PROVIDER="anthropic", ANTHROPIC_API_KEY=None)

        assert custom.validate_required_settings() == ["ANTHROPIC_API_KEY is required"]

    def test_groq_with_key_is_valid(self, monkeypatch, tmp_path):
        monkeypatch.setenv("DATA_DIR", str(tmp_path))

        custom = Settings(LLM_PROVIDER="groq", GROQ_API_KEY="gsk-test")

        assert custom.validate_required_settings() == []

    def test_unknown_provider(self, monkeypatch, tmp_path):
        monkeypatch.setenv("DATA_DIR", str(tmp_path))

        custom = Settings(LLM_PROVIDER="mystery")

        assert custom.validate_required_settings() == ["Unknown LLM_PROVIDER: mystery"]
