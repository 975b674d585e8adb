# shiftcal/main.py
"""
FastAPI application entry point.
"""

import sys
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session

from shiftcal.core.config import CORS_ORIGINS, IS_PRODUCTION
from shiftcal.core.logging_config import get_logger, setup_logging
from shiftcal.core.request_logging import RequestLoggingMiddleware
from shiftcal.core.sentry_config import init_sentry
from shiftcal.core.storage import load_default_shift_types, load_settings, required_data_files
from shiftcal.database.database import create_tables, get_db
from shiftcal.routes.calendar_api import router as calendar_router
from shiftcal.routes.staff_shifts import router as staff_router

VERSION = "0.1.0"

# Setup logging FIRST (before any other imports that might log)
setup_logging()
logger = get_logger(__name__)

sentry_enabled = init_sentry()


def validate_required_data_files():
    """
    Validate that settings.json and shift_types.json exist and parse.

    Raises:
        RuntimeError: If a file is missing
        StorageError: If a file does not validate
    """
    for path in required_data_files():
        if not path.exists():
            raise RuntimeError(
                f"Required data file missing: {path}\n"
                f"Set SHIFTCAL_DATA_DIR or make sure the package data files are installed."
            )

    settings = load_settings()
    shift_types = load_default_shift_types()

    logger.info(
        f"Data files validated: reference {settings.cycle_reference_date}, {len(shift_types)} default shift types"
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info(
        "Application starting up",
        extra={"extra_fields": {"production": IS_PRODUCTION, "python_version": sys.version}},
    )

    try:
        validate_required_data_files()
    except Exception as e:
        logger.error(f"Data file validation failed: {e}", exc_info=True)
        raise

    try:
        create_tables()
        logger.info("Database tables created/verified")
    except Exception as e:
        logger.error(f"Failed to create database tables: {e}", exc_info=True)
        raise

    yield

    logger.info("Application shutting down")


app = FastAPI(
    title="shiftcal",
    description="Rest-day calendar for 5x2 rotating shift schedules",
    version=VERSION,
    lifespan=lifespan,
)

if IS_PRODUCTION:
    if not CORS_ORIGINS:
        logger.warning(
            "Production mode but no CORS_ORIGINS set. CORS will block all cross-origin requests. "
            "Set CORS_ORIGINS environment variable if you need to allow specific origins."
        )

    allowed_origins = CORS_ORIGINS
    allowed_methods = ["GET", "PUT", "DELETE"]

    logger.info(f"CORS configured for production with origins: {allowed_origins}")
else:
    allowed_origins = ["*"]
    allowed_methods = ["*"]

    logger.info("CORS configured for development (permissive)")

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=allowed_methods,
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)

app.add_middleware(RequestLoggingMiddleware)

app.include_router(calendar_router)
app.include_router(staff_router)


@app.get("/health", tags=["health"])
async def health_check(db: Session = Depends(get_db)):
    """
    Health check endpoint for monitoring.

    Returns 503 Service Unavailable if the database does not answer.
    """
    try:
        db.execute(text("SELECT 1"))
        return JSONResponse(
            status_code=200,
            content={
                "status": "healthy",
                "service": "shiftcal",
                "version": VERSION,
                "database": "connected",
            },
        )
    except Exception as e:
        logger.error(f"Health check failed - database connection error: {e}", exc_info=True)
        raise HTTPException(
            status_code=503,
            detail={
                "status": "unhealthy",
                "service": "shiftcal",
                "database": "disconnected",
                "error": "Database connection failed",
            },
        ) from e
