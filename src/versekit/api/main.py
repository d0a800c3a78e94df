"""FastAPI application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from versekit import __version__
from versekit.api.routes import router
from versekit.config import Settings
from versekit.engine import ScriptureEngine
from versekit.fetch.provider import VerseProvider

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    provider: VerseProvider | None = None,
) -> FastAPI:
    """Create the API application.

    Args:
        settings: Engine settings (default: from VERSEKIT_* environment)
        provider: Verse provider (default: bolls.life client)
    """
    engine = ScriptureEngine.from_settings(settings, provider)

    app = FastAPI(
        title="versekit",
        description="Scripture reference parsing and batched verse retrieval",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.engine = engine

    # CORS for browser callers
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    app.include_router(router, prefix="/api")

    @app.get("/")
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "versekit",
            "version": __version__,
            "docs": "/docs",
            "api": "/api",
        }

    logger.info(f"API ready (provider: {engine.settings.provider_url})")
    return app


def run_server(settings: Settings | None = None) -> None:
    """Run the API with uvicorn."""
    import uvicorn

    settings = settings or Settings.from_env()
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


# Default app instance for `uvicorn versekit.api.main:app`
app = create_app()
