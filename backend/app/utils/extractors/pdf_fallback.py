"""
Byte-scan fallback for PDFs the structured parser cannot handle.

A crude approximation of a content-stream text scan: literal strings in
parentheses and hex strings in angle brackets, filtered to plausible text.
Works on uncompressed streams only; never raises.
"""
import re

from app.utils.helper import collapse_whitespace
from app.utils.logger import get_logger

logger = get_logger(__name__)

LITERAL_STRING = re.compile(rb"\(([^)]{3,})\)")
HEX_STRING = re.compile(rb"<([0-9A-F]{6,})>")
WORD_PAIR = re.compile(rb"[A-Za-z]{3,}\s[A-Za-z]{3,}")

_LETTER_RUN = re.compile(r"[a-zA-Z]{3,}")
_NUMERIC_ONLY = re.compile(r"^[0-9\s\-.]+$")

# Share of printable ASCII a literal must have to count as text
MIN_PRINTABLE_RATIO = 0.85


def _is_printable(code: int) -> bool:
    return 32 <= code <= 126


def _decode_hex(hex_string: bytes) -> str:
    """Decode hex pairs, keeping printable ASCII only. A trailing odd digit is ignored."""
    decoded = []
    for i in range(0, len(hex_string) - 1, 2):
        code = int(hex_string[i:i + 2], 16)
        if _is_printable(code):
            decoded.append(chr(code))
    return "".join(decoded)


def _plausible_literal(text: str) -> bool:
    if not text:
        return False
    printable = sum(1 for ch in text if _is_printable(ord(ch)) or ch in "\t\r\n")
    if printable / len(text) < MIN_PRINTABLE_RATIO:
        return False
    has_words = " " in text or _LETTER_RUN.search(text) is not None
    return has_words and not _NUMERIC_ONLY.match(text)


def extract_basic_text(data: bytes) -> str:
    """
    Scan raw PDF bytes for text.

    Args:
        data: Raw PDF bytes

    Returns:
        Recovered text with whitespace collapsed, or "" when nothing plausible
        was found
    """
    try:
        parts = []

        for match in LITERAL_STRING.finditer(data):
            text = match.group(1).decode("latin-1")
            if _plausible_literal(text):
                parts.append(text)

        for match in HEX_STRING.finditer(data):
            decoded = _decode_hex(match.group(1))
            if len(decoded) >= 3 and re.search(r"[a-zA-Z]", decoded):
                parts.append(decoded)

        text = collapse_whitespace(" ".join(parts))
        if text:
            logger.debug(f"Byte scan recovered {len(text)} chars from literals")
            return text

        words = [m.group(0).decode("ascii") for m in WORD_PAIR.finditer(data)]
        return collapse_whitespace(" ".join(words))

    except Exception as e:
        logger.error(f"Basic PDF text extraction failed: {e}")
        return ""
