"""
DoseKeeper Backend
FastAPI application for medication adherence tracking
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import settings
from api import include_routers
from errors import NotFoundError, SuggestionFailure, ValidationError
from services.llm_service import llm_service

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format=settings.LOG_FORMAT
)
logger = logging.getLogger(__name__)


# ==================== LIFESPAN ====================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup and shutdown"""
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Environment: {settings.ENV}")

    if not llm_service.configured:
        logger.warning("LLM_API_KEY not configured; schedule suggestions will fail")
    if settings.SEED_DEMO_DATA:
        logger.info("New sessions will be seeded with demo data")

    yield

    logger.info(f"Shutting down {settings.APP_NAME}")


# ==================== APP INITIALIZATION ====================

app = FastAPI(
    title=settings.APP_NAME,
    description="""
    ## DoseKeeper API

    Track medications, log doses and follow your adherence.

    ### Features
    - **Medications**: Daily, weekly and interval schedules with next-dose projection
    - **Dose Log**: Record doses as taken or skipped
    - **Adherence**: 30-day adherence percentage and a per-day breakdown
    - **Smart Schedule**: AI suggestions that fit your daily routine
    """,
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

include_routers(app, prefix=settings.API_PREFIX)


# ==================== EXCEPTION HANDLERS ====================

def _error_response(status_code: int, message, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": True,
            "message": message,
            "status_code": status_code,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            **extra,
        }
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return _error_response(exc.status_code, exc.detail)


@app.exception_handler(ValidationError)
async def validation_exception_handler(request: Request, exc: ValidationError):
    return _error_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY, exc.message, errors=exc.errors
    )


@app.exception_handler(NotFoundError)
async def not_found_exception_handler(request: Request, exc: NotFoundError):
    return _error_response(status.HTTP_404_NOT_FOUND, exc.message)


@app.exception_handler(SuggestionFailure)
async def suggestion_failure_handler(request: Request, exc: SuggestionFailure):
    logger.error(f"Suggestion failure: {exc.message} ({exc.cause!r})")
    return _error_response(
        status.HTTP_502_BAD_GATEWAY,
        "Could not generate a smart schedule suggestion. Please try again."
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unexpected error: {exc}", exc_info=True)
    return _error_response(
        500,
        "An unexpected error occurred" if not settings.DEBUG else str(exc)
    )


# ==================== HEALTH ====================

@app.get("/", tags=["Health"])
async def root():
    """Service information"""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs",
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "llm_configured": llm_service.configured,
        "llm_usage": llm_service.get_usage_stats(),
    }


# ==================== MAIN ====================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
