from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware import Middleware
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.exceptions import ExtractionError, SummarizationError
from app.utils.logger import get_logger

logger = get_logger("error-handler")


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


class ErrorMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        try:
            response = await call_next(request)
            return response
        except Exception as e:
            logger.exception("Unhandled exception occurred")
            return error_response(
                500,
                f"Internal Server Error: {e}" if settings.DEBUG else "An unexpected error occurred"
            )


async def extraction_error_handler(request: Request, exc: ExtractionError):
    logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return error_response(exc.status_code, exc.user_message)


async def summarization_error_handler(request: Request, exc: SummarizationError):
    logger.error(f"{request.method} {request.url.path} -> summarization failed: {exc.message}")
    return error_response(500, exc.message)


async def value_error_handler(request: Request, exc: ValueError):
    return error_response(400, str(exc))


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail))


async def validation_error_handler(request: Request, exc: RequestValidationError):
    first = exc.errors()[0] if exc.errors() else {}
    field = ".".join(str(part) for part in first.get("loc", []) if part not in ("body", "form"))
    message = first.get("msg", "Invalid request")
    return error_response(422, f"{field}: {message}" if field else message)


def register_exception_handlers(app: FastAPI) -> None:
    """Map typed exceptions to {"error": message} bodies."""
    app.add_exception_handler(ExtractionError, extraction_error_handler)
    app.add_exception_handler(SummarizationError, summarization_error_handler)
    app.add_exception_handler(ValueError, value_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)


middleware = [Middleware(ErrorMiddleware)]
