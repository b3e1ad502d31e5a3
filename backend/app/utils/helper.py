import asyncio
import re
from concurrent.futures import Executor, Future
from typing import Any, Callable, Optional, TypeVar

from app.core.exceptions import ExtractionTimeoutError
from app.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

_INLINE_SPACE = re.compile(r"[ \t\f\v\u00a0]+")
_BLANK_LINES = re.compile(r"\n\s*\n+")
_ANY_SPACE = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    """'a \\n\\n  b' -> 'a b'"""
    return _ANY_SPACE.sub(" ", text).strip()


def normalize_layout(text: str) -> str:
    """
    Collapse runs of spaces inside lines and blank-line runs to exactly one
    blank line, keeping single line breaks intact.
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    lines = [_INLINE_SPACE.sub(" ", line).strip() for line in text.split("\n")]
    return _BLANK_LINES.sub("\n\n", "\n".join(lines)).strip()


def decode_text(data: bytes) -> str:
    """
    Decode uploaded bytes as text.

    UTF-8 (BOM tolerated) first, then cp1252 and latin-1, which never fails.
    """
    for encoding in ("utf-8-sig", "cp1252"):
        try:
            return data.decode(encoding)
        except UnicodeDecodeError:
            logger.debug(f"Failed to decode with {encoding}, trying next encoding")
    return data.decode("latin-1")


def looks_like_text(data: bytes) -> bool:
    """Strict UTF-8, no NUL bytes and something other than whitespace."""
    if not data or b"\x00" in data:
        return False
    try:
        return bool(data.decode("utf-8-sig").strip())
    except UnicodeDecodeError:
        return False


def truncate(value: str, limit: int, marker: str = "...") -> str:
    """Cut at `limit` chars and append `marker` only when something was cut."""
    if len(value) <= limit:
        return value
    return value[:limit] + marker


async def run_with_timeout(
        func: Callable[..., T],
        *args,
        timeout: float,
        message: str,
        executor: Optional[Executor] = None,
        on_late: Optional[Callable[[T], Any]] = None,
) -> T:
    """
    Run a blocking call off the event loop and race it against a timer.

    asyncio.wait_for cancels its timer on both branches, so nothing is left
    pending after many documents. The worker thread itself cannot be killed;
    callers that reuse a resource across calls pass a single-worker executor
    so a late call never overlaps the next one.

    Args:
        on_late: Receives the result of a call that finishes after the timer
            won, e.g. to close a handle nobody will use. Needs an executor.

    Raises:
        ExtractionTimeoutError: when the timer wins
    """
    if executor is None:
        future = asyncio.get_running_loop().run_in_executor(None, lambda: func(*args))
        submitted = None
    else:
        submitted = executor.submit(func, *args)
        future = asyncio.wrap_future(submitted)

    try:
        return await asyncio.wait_for(future, timeout=timeout)
    except asyncio.TimeoutError:
        if submitted is not None and on_late is not None:
            submitted.add_done_callback(lambda done: _hand_off_late_result(done, on_late))
        raise ExtractionTimeoutError(message)


def _hand_off_late_result(done: Future, on_late: Callable[[Any], Any]) -> None:
    if done.cancelled() or done.exception() is not None:
        return
    try:
        on_late(done.result())
    except Exception as e:
        logger.warning(f"Cleanup of a late result failed: {e}")
