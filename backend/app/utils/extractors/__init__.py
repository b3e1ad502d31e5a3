"""
Extractors package - Specialized content extractors, one per format family.

Available extractors:
- PDFExtractor: PyMuPDF structured path with page recovery and byte-scan fallback
- DocxExtractor / DocExtractor: Word documents
- TextExtractor: plain text family and generic decode
- HTMLExtractor: visible page text
- TableExtractor: CSV records
- JSONExtractor: structural JSON preview
"""
from app.utils.extractors.docx_extractor import DocExtractor, DocxExtractor
from app.utils.extractors.html_extractor import HTMLExtractor
from app.utils.extractors.json_extractor import JSONExtractor
from app.utils.extractors.pdf_extractor import PDFExtractor
from app.utils.extractors.table_extractor import TableExtractor
from app.utils.extractors.text_extractor import TextExtractor

__all__ = [
    'PDFExtractor',
    'DocxExtractor',
    'DocExtractor',
    'TextExtractor',
    'HTMLExtractor',
    'TableExtractor',
    'JSONExtractor',
]
