"""Main FastAPI application"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI

from api.routes import static, talks
from api.schemas import HealthResponse
from app.config import get_settings
from app.middleware import TimingMiddleware
from core.logging_config import setup_logging

VERSION = "0.1.0"

settings = get_settings()

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    current = get_settings()
    logger.info(f"Starting {current.app_name} v{VERSION}")
    logger.info(f"Environment: {current.app_env}")
    logger.info(f"Serving public files from {current.public_root}")

    if not current.talks_path.is_file():
        logger.warning(f"Talk data file not found: {current.talks_path}")

    yield

    logger.info(f"Shutting down {current.app_name}")


app = FastAPI(
    title=settings.app_name,
    description="Conference schedule page and talk data API",
    version=VERSION,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    lifespan=lifespan,
)

app.add_middleware(TimingMiddleware)


@app.get("/health", tags=["Health"], response_model=HealthResponse)
async def health():
    """Health check endpoint"""
    readable = os.access(get_settings().talks_path, os.R_OK)

    return HealthResponse(
        status="healthy" if readable else "unhealthy",
        talks_file_readable=readable,
        version=VERSION,
    )


app.include_router(talks.router)
# Catch-all file route, must come last
app.include_router(static.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
