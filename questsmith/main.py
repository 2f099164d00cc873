"""FastAPI application entrypoint."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from questsmith.api.generate import router as generate_router
from questsmith.api.health import router as health_router
from questsmith.config import settings
from questsmith.core.logging import get_logger, setup_logging
from questsmith.services.generation_service import GenerationService

setup_logging(settings.LOG_LEVEL)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup and shutdown events."""
    logger.info("Initializing GenerationService...")
    service = GenerationService()
    app.state.generation_service = service
    logger.info(
        "GenerationService initialized (indent=%d, source comments=%s).",
        service.options.indent_size,
        service.options.emit_source_comments,
    )

    yield

    logger.info("Shutting down...")


app = FastAPI(title="Questsmith", debug=settings.DEBUG, lifespan=lifespan)

app.include_router(health_router)
app.include_router(generate_router)
