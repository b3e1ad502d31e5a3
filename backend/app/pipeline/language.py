"""
Language detection - samples the text and names its language.

Detection is best effort: every failure collapses to "unknown" so callers can
carry on summarizing.
"""
import re

from langdetect import DetectorFactory, detect
from langdetect.lang_detect_exception import LangDetectException

from app.core.config import settings
from app.utils.logger import get_logger

logger = get_logger(__name__)

# langdetect is probabilistic; a fixed seed makes results repeatable
DetectorFactory.seed = 0

UNKNOWN_LANGUAGE = "unknown"

LANGUAGE_NAMES = {
    "af": "Afrikaans",
    "am": "Amharic",
    "ar": "Arabic",
    "az": "Azerbaijani",
    "be": "Belarusian",
    "bg": "Bulgarian",
    "bn": "Bengali",
    "bs": "Bosnian",
    "ca": "Catalan",
    "cs": "Czech",
    "cy": "Welsh",
    "da": "Danish",
    "de": "German",
    "el": "Greek",
    "en": "English",
    "es": "Spanish",
    "et": "Estonian",
    "eu": "Basque",
    "fa": "Persian",
    "fi": "Finnish",
    "fr": "French",
    "ga": "Irish",
    "gl": "Galician",
    "gu": "Gujarati",
    "he": "Hebrew",
    "hi": "Hindi",
    "hr": "Croatian",
    "hu": "Hungarian",
    "hy": "Armenian",
    "id": "Indonesian",
    "is": "Icelandic",
    "it": "Italian",
    "ja": "Japanese",
    "ka": "Georgian",
    "kk": "Kazakh",
    "km": "Khmer",
    "kn": "Kannada",
    "ko": "Korean",
    "lo": "Lao",
    "lt": "Lithuanian",
    "lv": "Latvian",
    "mk": "Macedonian",
    "ml": "Malayalam",
    "mn": "Mongolian",
    "mr": "Marathi",
    "ms": "Malay",
    "my": "Burmese",
    "ne": "Nepali",
    "nl": "Dutch",
    "no": "Norwegian",
    "pa": "Punjabi",
    "pl": "Polish",
    "pt": "Portuguese",
    "ro": "Romanian",
    "ru": "Russian",
    "si": "Sinhala",
    "sk": "Slovak",
    "sl": "Slovenian",
    "so": "Somali",
    "sq": "Albanian",
    "sr": "Serbian",
    "sv": "Swedish",
    "sw": "Swahili",
    "ta": "Tamil",
    "te": "Telugu",
    "th": "Thai",
    "tl": "Tagalog",
    "tr": "Turkish",
    "uk": "Ukrainian",
    "ur": "Urdu",
    "uz": "Uzbek",
    "vi": "Vietnamese",
    "yo": "Yoruba",
    "zh-cn": "Chinese",
    "zh-tw": "Chinese (Traditional)",
    "zu": "Zulu",
}

_WHITESPACE = re.compile(r"\s+")


def sample_text(text: str) -> str:
    """
    Pick a representative sample without scanning the whole document.

    - up to LANGUAGE_FULL_SAMPLE_LIMIT chars: the whole text
    - up to LANGUAGE_ZONED_SAMPLE_LIMIT chars: the first LANGUAGE_FULL_SAMPLE_LIMIT
    - longer: head, middle and tail windows joined by spaces

    The input is never modified.
    """
    full_limit = settings.LANGUAGE_FULL_SAMPLE_LIMIT
    if len(text) <= full_limit:
        return text
    if len(text) <= settings.LANGUAGE_ZONED_SAMPLE_LIMIT:
        return text[:full_limit]

    window = settings.LANGUAGE_SAMPLE_WINDOW
    middle_start = len(text) // 2 - window // 2
    return " ".join([
        text[:window],
        text[middle_start:middle_start + window],
        text[-window:],
    ])


def language_name(code: str) -> str:
    """Full name for a langdetect code, or the code itself when not in the table."""
    return LANGUAGE_NAMES.get(code.lower(), code)


def detect_language(text: str) -> str:
    """
    Detect the language of `text`.

    Returns:
        Language name, a raw code for languages outside the table, or "unknown"
    """
    if not text:
        return UNKNOWN_LANGUAGE

    sample = _WHITESPACE.sub(" ", sample_text(text)).strip()
    if len(sample) < settings.LANGUAGE_MIN_TEXT_LENGTH:
        logger.debug(f"Text too short for language detection ({len(sample)} chars)")
        return UNKNOWN_LANGUAGE

    try:
        code = detect(sample)
    except LangDetectException as e:
        logger.debug(f"Language could not be determined: {e}")
        return UNKNOWN_LANGUAGE
    except Exception as e:
        logger.error(f"Language detection error: {e}")
        return UNKNOWN_LANGUAGE

    if not code or code == "und":
        return UNKNOWN_LANGUAGE

    return language_name(code)
