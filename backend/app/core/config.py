"""
Core configuration for the Multilingual Summarizer backend.

This module centralizes all application settings using Pydantic for type safety
and validation. Settings are loaded from environment variables.
"""
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    """
    # ==================== Pydantic Settings ====================
    BASE_DIR: Path = Path(__file__).resolve().parent.parent
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        # Set default for DATABASE_URL if not provided
        if not self.DATABASE_URL:
            self.DATABASE_URL = f"sqlite:///{self.DATA_DIR / 'summarizer.db'}"
        self._create_directories()

    APP_NAME: str = "Multilingual Summarizer"
    APP_VERSION: str = "1.0.0"
    API_V1_PREFIX: str = "/api/v1"

    # ==================== Development Defaults ====================
    DEBUG: bool = True
    HOST: str = "127.0.0.1"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    # CORS - Development default
    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ]

    # ==================== Storage (history / preferences) ====================
    DATA_DIR: Path = Path("data")
    DATABASE_URL: str = ""
    HISTORY_LIMIT: int = 20

    # ==================== Upload constraints ====================
    # Enforced by the API layer, never by the extractors themselves
    MAX_UPLOAD_SIZE: int = 52428800  # 50MB in bytes

    # ==================== PDF Engine ====================
    PDF_LOAD_TIMEOUT: float = 15.0  # seconds to open a document
    PDF_PAGE_TIMEOUT: float = 5.0  # seconds per page
    PDF_RECOVERY_MIN_LENGTH: int = 20  # recovered page text must beat this
    PDF_MIN_TEXT_LENGTH: int = 50  # quality gate on extracted page text
    PDF_FALLBACK_MIN_LENGTH: int = 100  # byte-scan output must beat this

    # ==================== Structured previews ====================
    CSV_PREVIEW_ROWS: int = 10
    JSON_PREVIEW_ITEMS: int = 5
    JSON_VALUE_PREVIEW: int = 100

    # ==================== Language detection ====================
    LANGUAGE_MIN_TEXT_LENGTH: int = 20
    LANGUAGE_FULL_SAMPLE_LIMIT: int = 1000
    LANGUAGE_ZONED_SAMPLE_LIMIT: int = 2000
    LANGUAGE_SAMPLE_WINDOW: int = 600
    LANGUAGE_DETECTION_PREFIX: int = 5000  # chars handed to the detector by the content processor

    # ==================== Summarization ====================
    SUMMARY_MAX_CONTENT_LENGTH: int = 100000  # single-call limit, also the chunk size
    CONTENT_PREVIEW_LENGTH: int = 200

    # ==================== LLM Configuration ====================
    LLM_PROVIDER: str = "anthropic"

    ANTHROPIC_API_KEY: Optional[str] = None
    ANTHROPIC_MODEL: str = "claude-3-7-sonnet-20250219"

    OLLAMA_BASE_URL: str = "http://localhost:11434"
    OLLAMA_MODEL: str = "llama3.1:8b"

    GROQ_API_KEY: Optional[str] = None
    GROQ_MODEL: str = "llama-3.1-8b-instant"

    # LLM parameters - can be tuned via .env
    LLM_TEMPERATURE: float = 0.3
    LLM_MAX_TOKENS: int = 4000
    LLM_TIMEOUT: int = 120

    # ==================== Logging ====================
    LOG_FORMAT: str = "%(asctime)s - %(name)s - [%(levelname)s] - %(message)s"

    def _create_directories(self) -> None:
        """Create the data directory used by the SQLite store."""
        self.DATA_DIR.mkdir(parents=True, exist_ok=True)

    def validate_required_settings(self) -> list[str]:
        """
        Validate that the configured LLM provider has what it needs.

        Returns:
            List of validation errors (empty if all valid)
        """
        errors = []

        if self.LLM_PROVIDER == "anthropic":
            if not self.ANTHROPIC_API_KEY:
                errors.append("ANTHROPIC_API_KEY is required")

        elif self.LLM_PROVIDER == "ollama":
            if not self.OLLAMA_BASE_URL:
                errors.append("OLLAMA_BASE_URL is required")
            if not self.OLLAMA_MODEL:
                errors.append("OLLAMA_MODEL is required")

        elif self.LLM_PROVIDER == "groq":
            if not self.GROQ_API_KEY:
                errors.append("GROQ_API_KEY is required")

        else:
            errors.append(f"Unknown LLM_PROVIDER: {self.LLM_PROVIDER}")

        return errors


# ==================== Global Settings Instance ====================
settings = Settings()


# ==================== Helper Functions ====================
@lru_cache()
def get_settings() -> Settings:
    """
    Dependency function for FastAPI routes.

    Usage:
        @app.get("/config")
        def get_config(settings: Settings = Depends(get_settings)):
            return {"provider": settings.LLM_PROVIDER}
    """
    return settings
