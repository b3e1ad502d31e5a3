"""
Main FastAPI Application.

This is the entry point for the backend server.
It configures and runs the complete API.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import dotenv

from app.api.routes import api_router, health
from app.api.middleware.error_handler import middleware, register_exception_handlers
from contextlib import asynccontextmanager
from app.core.config import settings
from app.core.database import create_db_and_tables
from app.utils.logger import get_logger

dotenv.load_dotenv()

logger = get_logger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Environment: {'Development' if settings.DEBUG else 'Production'}")

    # Initialize database
    create_db_and_tables()

    # Validate services
    logger.info("Validating services...")
    missing = settings.validate_required_settings()
    if missing:
        logger.warning(f"⚠️  Missing settings for provider '{settings.LLM_PROVIDER}': {', '.join(missing)}")
    else:
        logger.info(f"✅ LLM provider configured: {settings.LLM_PROVIDER}")

    logger.info(f"🚀 Server ready at http://{settings.HOST}:{settings.PORT}")

    yield  # Server runs here

    # Shutdown
    logger.info("Shutting down gracefully...")


# Create FastAPI app
app = FastAPI(
    lifespan=lifespan,
    title = settings.APP_NAME,
    description = "Multilingual document summarizer: text extraction, language detection and LLM summaries",
    version = settings.APP_VERSION,
    debug=settings.DEBUG,
    middleware=middleware,
)

register_exception_handlers(app)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes
api_router.include_router(health.router, tags=["health"], prefix="")
app.include_router(api_router, prefix=settings.API_V1_PREFIX)

@app.get("/")
async def root():
    """Root endpoint - API information."""
    logger.info(f"Root responding...")
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
        "docs": "/docs",
        "openapi": "/openapi.json"
    }

