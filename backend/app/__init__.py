"""
Backend package for the multilingual summarizer.

It contains subpackages for:
- api: HTTP endpoints and error mapping
- core: configuration, exceptions and database
- models: data models
- pipeline: format dispatch, chunking and language detection
- services: summarization, content preparation, history
- utils: extractors, prompts, logging helpers
"""

__version__ = "0.1.0"
