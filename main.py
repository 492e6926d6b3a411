"""
FastAPI Backend for Fleet Expansion Readiness v1.0.0

Scores how well a trucking fleet is utilized (revenue days per truck) and
whether the utilization profile supports adding trucks.
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from database_mysql import dispose_engine
from errors import register_exception_handlers
from logger_config import setup_logging
from routers import include_all_routers
from settings import settings

# Configure the root logger so module loggers inherit handlers
setup_logging(
    name="",
    level=settings.app.log_level,
    log_to_file=settings.app.log_to_file,
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown tasks."""
    logger.info(f"Expansion Readiness API v{settings.app.version} starting...")
    for warning in settings.validate():
        logger.warning(warning)
    logger.info(f"Settings: {settings.to_dict()}")

    yield  # App runs here

    dispose_engine()
    logger.info("Shutting down Expansion Readiness API")


app = FastAPI(
    title="Fleet Expansion Readiness API",
    description="Fleet utilization scoring and expansion readiness for trucking companies.",
    version=settings.app.version,
    lifespan=lifespan,
)

register_exception_handlers(app)
include_all_routers(app)

app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.app.cors_origins,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)


if __name__ == "__main__":
    import uvicorn

    is_dev = os.getenv("DEV_MODE", "false").lower() == "true"

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", "8000")),
        reload=is_dev,
        log_level="info",
    )
