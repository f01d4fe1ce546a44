"""
Football Oracle - FastAPI Application

Main entry point for the backend API.
This module configures the FastAPI app, middleware, and routes.
"""

import os
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from football_oracle.api.routes import fixtures, predictions
from football_oracle.api.dependencies import get_football_data_org, get_gemini
from football_oracle.application.dtos.dtos import HealthResponseDTO, ErrorResponseDTO
from football_oracle.infrastructure.cache.cache_service import get_cache_service
from football_oracle.utils.time_utils import get_current_time

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


# Log timestamps in the application timezone
class LocalTimeFormatter(logging.Formatter):
    def formatTime(self, record, datefmt=None):
        ct = get_current_time()
        if datefmt:
            s = ct.strftime(datefmt)
        else:
            t = ct.strftime("%Y-%m-%d %H:%M:%S")
            s = "%s,%03d" % (t, record.msecs)
        return s

formatter = LocalTimeFormatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
handler = logging.StreamHandler()
handler.setFormatter(formatter)
root_logger = logging.getLogger()
root_logger.setLevel(logging.INFO)
root_logger.handlers = [handler]
logger = logging.getLogger(__name__)


# Application metadata
APP_TITLE = "Football Oracle"
APP_DESCRIPTION = """
**Football fixtures with AI predictions**

Upcoming matches from Football-Data.org, match-center statistics, and
search-grounded predictions from Google Gemini.

## Features

* **Fixtures** - Scheduled matches, with a built-in list when live data is unavailable
* **Match Center** - Recent form and head-to-head, live or synthesized
* **AI Predictions** - Winner, scoreline, win probabilities and a tactical breakdown, with cited sources

## Data Sources

- **Football-Data.org** - Fixtures and statistics (optional, requires API key)
- **Google Gemini** - Grounded predictions (requires API key)
"""
APP_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    logger.info(f"Starting {APP_TITLE} v{APP_VERSION}")

    if get_football_data_org().is_configured:
        logger.info("✓ Football-Data.org configured")
    else:
        logger.warning("⚠ Football-Data.org not configured, serving fallback fixtures and synthesized stats")

    if get_gemini().is_configured:
        logger.info("✓ Gemini configured")
    else:
        logger.warning("⚠ Gemini not configured, predictions will be unavailable")

    yield

    # Shutdown
    logger.info("Shutting down...")


# Create FastAPI app
app = FastAPI(
    title=APP_TITLE,
    description=APP_DESCRIPTION,
    version=APP_VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


# Configure CORS
# Explicitly include loopback IPs which browsers sometimes use instead of 'localhost'
base_origins = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
]
cors_origins = os.getenv("CORS_ORIGINS", "").split(",")
# Combine and remove empty/duplicates
all_origins = list(set([o for o in base_origins + cors_origins if o]))

app.add_middleware(
    CORSMiddleware,
    allow_origins=all_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Exception handlers
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled errors."""
    logger.error(f"Unhandled error: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content=ErrorResponseDTO(
            error="internal_server_error",
            message="An unexpected error occurred",
            details={"path": str(request.url)},
        ).model_dump(),
    )


# Health check endpoint
@app.get(
    "/health",
    response_model=HealthResponseDTO,
    tags=["Health"],
    summary="Health check",
    description="Check if the API is running and which vendors are configured.",
)
async def health_check() -> HealthResponseDTO:
    """Health check endpoint."""
    return HealthResponseDTO(
        status="healthy",
        version=APP_VERSION,
        timestamp=get_current_time(),
        football_data_configured=get_football_data_org().is_configured,
        gemini_configured=get_gemini().is_configured,
    )


# Cache status endpoint
@app.get(
    "/cache/status",
    tags=["Health"],
    summary="Cache status",
    description="Inspect the Football-Data.org response cache.",
)
async def cache_status():
    """Get cache status for debugging."""
    return get_cache_service().stats


# Root endpoint
@app.get(
    "/",
    tags=["Root"],
    summary="API Information",
    description="Get basic API information and links.",
)
async def root():
    """Root endpoint with API info."""
    return {
        "name": APP_TITLE,
        "version": APP_VERSION,
        "documentation": "/docs",
        "health": "/health",
        "endpoints": {
            "fixtures": "/api/v1/fixtures",
            "fixtures_by_date": "/api/v1/fixtures/by-date",
            "match_stats": "/api/v1/fixtures/{match_id}/stats",
            "predictions": "/api/v1/predictions",
        },
    }


# Include routers
app.include_router(fixtures.router, prefix="/api/v1")
app.include_router(predictions.router, prefix="/api/v1")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "football_oracle.api.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", "8000")),
        reload=True,
    )
