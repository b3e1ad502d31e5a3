"""
Shared fixtures: in-memory database, fake LLM and in-memory document builders.
"""
import io
import os
import tempfile

# Keep the default SQLite file out of the working tree
os.environ.setdefault("DATA_DIR", tempfile.mkdtemp(prefix="summarizer-tests-"))

import fitz  # PyMuPDF
import pytest
from docx import Document
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base
from app.services.llm_service import LLMResponse


class FakeLLMService:
    """
    Stands in for LLMService: echoes a canned summary and records every call.

    fail_on: 1-based call numbers that raise instead of answering.
    """

    def __init__(self, reply: str = "A short summary.", fail_on=()):
        self.reply = reply
        self.fail_on = set(fail_on)
        self.calls = []

    def generate(self, prompt, system_prompt=None, temperature=None):
        self.calls.append({"prompt": prompt, "system_prompt": system_prompt})
        if len(self.calls) in self.fail_on:
            raise RuntimeError("provider unavailable")
        return LLMResponse(content=self.reply, model="fake-model")

    def validate_connection(self):
        return True


@pytest.fixture
def fake_llm():
    return FakeLLMService()


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def make_pdf():
    """Build a PDF in memory; one string per page."""
    def _make(pages, title=None, author=None) -> bytes:
        doc = fitz.open()
        for text in pages:
            page = doc.new_page()
            if text:
                page.insert_text((72, 72), text, fontsize=11)
        if title or author:
            doc.set_metadata({"title": title or "", "author": author or ""})
        data = doc.tobytes()
        doc.close()
        return data
    return _make


@pytest.fixture
def make_docx():
    """Build a DOCX in memory from paragraphs and optional table rows."""
    def _make(paragraphs, table_rows=None) -> bytes:
        document = Document()
        for text in paragraphs:
            document.add_paragraph(text)
        if table_rows:
            table = document.add_table(rows=len(table_rows), cols=len(table_rows[0]))
            for r, row in enumerate(table_rows):
                for c, value in enumerate(row):
                    table.cell(r, c).text = value
        buffer = io.BytesIO()
        document.save(buffer)
        return buffer.getvalue()
    return _make
