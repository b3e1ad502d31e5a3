"""
Text Chunking - Splits oversized content into model-sized pieces.

Recursive Character Splitter over a boundary hierarchy:
paragraphs > sentences > words > characters (last resort).
"""
from dataclasses import dataclass
from typing import List, Optional

from langchain_text_splitters import RecursiveCharacterTextSplitter

from app.core.config import settings
from app.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class ChunkingConfig:
    """
    Configuration for content chunking.
    """
    # default=100000: what a single summarization call accepts
    max_chunk_size: int = settings.SUMMARY_MAX_CONTENT_LENGTH

    # Separator hierarchy, tried in order (regular expressions)
    separators: List[str] = None

    def __post_init__(self):
        """Set default separators after initialization."""
        if self.separators is None:
            self.separators = [
                r"\n\n",              # Paragraph breaks
                r"(?<=[.!?])\s+",     # Sentence ends
                " ",                  # Words
                ""                    # Characters
            ]


class ContentChunker:
    """
    Splits text into ordered chunks, each non-empty and at most
    `max_chunk_size` characters. Chunks never overlap.
    """

    def __init__(self, config: Optional[ChunkingConfig] = None):
        """
        Args:
            config: Optional custom config, uses defaults if not provided
        """
        self.config = config or ChunkingConfig()
        if self.config.max_chunk_size < 1:
            raise ValueError("max_chunk_size must be a positive number of characters")

        # Separators stay on the end of the piece they close, then get stripped
        self.text_splitter = RecursiveCharacterTextSplitter(
            chunk_size=self.config.max_chunk_size,
            chunk_overlap=0,
            separators=self.config.separators,
            is_separator_regex=True,
            keep_separator="end",
            length_function=len,
        )

    def chunk(self, text: str) -> List[str]:
        """
        Chunk text.

        Text at or under the limit is returned untouched as a single chunk.
        """
        limit = self.config.max_chunk_size
        if len(text) <= limit:
            return [text]

        chunks = self.text_splitter.split_text(text)
        logger.info(f"Split {len(text)} chars into {len(chunks)} chunks (limit={limit})")
        return chunks


def chunk_content(text: str, max_chunk_size: int = settings.SUMMARY_MAX_CONTENT_LENGTH) -> List[str]:
    """Convenience wrapper around ContentChunker."""
    return ContentChunker(ChunkingConfig(max_chunk_size=max_chunk_size)).chunk(text)
