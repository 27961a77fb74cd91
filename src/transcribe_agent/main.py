import asyncio
import logging
from contextlib import asynccontextmanager

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

import uvicorn
from fastapi import FastAPI

from transcribe_agent import __version__
from transcribe_agent.config import Settings
from transcribe_agent.routers import chat, health, upload
from transcribe_agent.services.fetcher import AudioFetcher
from transcribe_agent.services.transcription import TranscriptionClient

logger = logging.getLogger(__name__)


@asynccontextmanager
async def api_lifespan(app: FastAPI):
    """Open the download and backend HTTP clients on startup, close on shutdown."""
    settings: Settings = app.state.settings
    logger.info(
        "Starting transcribe agent API (backend=%s, model=%s, max_audio_size=%d) ...",
        settings.whisper_server_url,
        settings.whisper_model,
        settings.max_audio_size,
    )
    app.state.fetcher = AudioFetcher(settings)
    app.state.transcriber = TranscriptionClient(settings)
    try:
        yield
    finally:
        logger.info("Shutting down transcribe agent API ...")
        await app.state.fetcher.close()
        await app.state.transcriber.close()


@asynccontextmanager
async def ui_lifespan(app: FastAPI):
    """Open the backend HTTP client for the upload UI."""
    logger.info("Starting transcribe agent UI ...")
    app.state.transcriber = TranscriptionClient(app.state.settings)
    try:
        yield
    finally:
        logger.info("Shutting down transcribe agent UI ...")
        await app.state.transcriber.close()


def create_api_app(settings: Settings) -> FastAPI:
    app = FastAPI(
        title="Transcribe Agent",
        description="Chat completions API answered by a speech-to-text backend",
        version=__version__,
        lifespan=api_lifespan,
    )
    app.state.settings = settings
    app.include_router(chat.router)
    app.include_router(health.router)
    return app


def create_ui_app(settings: Settings) -> FastAPI:
    app = FastAPI(
        title="Transcribe Agent UI",
        description="Direct audio upload form",
        version=__version__,
        lifespan=ui_lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings
    app.include_router(upload.router)
    return app


async def serve(settings: Settings) -> None:
    """Run the API server, and the UI server when enabled, until stopped."""
    logging.getLogger().setLevel(settings.log_level.upper())

    servers = [
        uvicorn.Server(
            uvicorn.Config(
                create_api_app(settings),
                host=settings.api_host,
                port=settings.api_port,
                log_level=settings.log_level.lower(),
            )
        )
    ]
    logger.info("API server listening on %s:%d ...", settings.api_host, settings.api_port)

    if settings.ui_enabled:
        servers.append(
            uvicorn.Server(
                uvicorn.Config(
                    create_ui_app(settings),
                    host=settings.api_host,
                    port=settings.ui_port,
                    log_level=settings.log_level.lower(),
                )
            )
        )
        logger.info("UI server listening on %s:%d ...", settings.api_host, settings.ui_port)

    await asyncio.gather(*(server.serve() for server in servers))
