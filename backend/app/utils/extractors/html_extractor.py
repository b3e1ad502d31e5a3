"""
HTML Extractor - visible text of a web page.
"""
from bs4 import BeautifulSoup

from app.core.exceptions import CorruptedFileError
from app.models.document import ExtractionResult
from app.utils.helper import collapse_whitespace
from app.utils.logger import get_logger

logger = get_logger(__name__)


class HTMLExtractor:
    """Strips markup, scripts and styles; keeps title and meta description."""

    def extract(self, data: bytes, file_name: str) -> ExtractionResult:
        """
        Raises:
            CorruptedFileError: when the bytes cannot be decoded
        """
        try:
            html = data.decode("utf-8-sig")
        except UnicodeDecodeError:
            try:
                html = data.decode("cp1252")
            except UnicodeDecodeError as e:
                raise CorruptedFileError(
                    f"The HTML file '{file_name}' could not be decoded as text.",
                    "Please save the page with UTF-8 encoding and try again."
                ) from e

        try:
            text = self.html_to_text(html)
        except Exception as e:
            logger.warning(f"HTML parsing failed for {file_name}, using raw text: {e}")
            text = html

        return ExtractionResult(text=text, format_tag="HTML", file_name=file_name)

    @staticmethod
    def html_to_text(html: str) -> str:
        soup = BeautifulSoup(html, "html.parser")

        for tag in soup(["script", "style"]):
            tag.decompose()

        title = collapse_whitespace(soup.title.get_text()) if soup.title else ""

        description = ""
        meta = soup.find("meta", attrs={"name": "description"})
        if meta and meta.get("content"):
            description = collapse_whitespace(meta["content"])

        root = soup.body or soup
        body = collapse_whitespace(root.get_text(separator=" "))

        prefix = []
        if title:
            prefix.append(f"Title: {title}")
        if description:
            prefix.append(f"Description: {description}")

        if prefix:
            return "\n\n".join(prefix + [body]) if body else "\n\n".join(prefix)
        return body
