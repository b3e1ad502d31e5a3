from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.api.deps import get_llm_service_dep
from app.core.database import check_database
from app.utils.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)


def _llm_status() -> str:
    try:
        llm = get_llm_service_dep()
    except ValueError as e:
        logger.warning(f"LLM service not configured: {e}")
        return "not_configured"
    except Exception as e:
        logger.error(f"Failed to create llm service: {e}")
        return "unhealthy"

    return "healthy" if llm.validate_connection() else "unhealthy"


@router.get("/health")
async def health_check(llm_status: str = Depends(_llm_status)):
    """Health check endpoint."""
    logger.info("Checking system health...")

    health_status = {
        "status": "healthy",
        "services": {"llm": llm_status}
    }

    if llm_status != "healthy":
        health_status["status"] = "degraded"

    if check_database():
        health_status["services"]["database"] = "healthy"
    else:
        health_status["services"]["database"] = "unhealthy"
        health_status["status"] = "degraded"

    status_code = 200 if health_status["status"] == "healthy" else 503
    logger.info(f"Health check endpoint received: {status_code}")
    return JSONResponse(content=health_status, status_code=status_code)
