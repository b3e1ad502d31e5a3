from fastapi import APIRouter
from app.api.routes import documents, summarize, history, health

api_router = APIRouter()
api_router.include_router(documents.router, prefix="/documents", tags=["documents"])
api_router.include_router(summarize.router, prefix="/summarize", tags=["summarize"])
api_router.include_router(history.router, tags=["history"])


__all__ = ["api_router", "health"]
