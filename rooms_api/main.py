"""FastAPI application proxying the Twilio Video rooms API."""
from __future__ import annotations

import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import settings
from .core.exceptions import register_exception_handlers
from .routers import rooms as rooms_router
from .services.video import VideoClient

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    level = logging.DEBUG if settings.app_env == "development" else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
    # The SDK logs every request and response body at INFO.
    logging.getLogger("twilio.http_client").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build the shared Twilio adapter; refuse to start without credentials."""

    app.state.video_client = VideoClient.from_settings(settings)
    logger.info("Twilio client ready for account %s", settings.twilio_account_sid)
    try:
        yield
    finally:
        await app.state.video_client.aclose()


def create_app() -> FastAPI:
    _configure_logging()

    app = FastAPI(title="Video Rooms API", version="0.1.0", lifespan=lifespan)

    if settings.cors_allow_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_allow_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)
    app.include_router(rooms_router.router, prefix="/rooms", tags=["rooms"])

    @app.get("/health", tags=["meta"])
    async def health() -> dict[str, str]:
        """Simple liveness probe."""

        return {"status": "ok"}

    return app


app = create_app()
