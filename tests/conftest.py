from collections.abc import Callable

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from transcribe_agent.config import Settings
from transcribe_agent.services.fetcher import AudioFetcher
from transcribe_agent.services.transcription import TranscriptionClient

AUDIO_BYTES = b"ID3-fake-mp3-audio"

Reply = Callable[[httpx.Request], httpx.Response]


class FakeRemote:
    """Callable for httpx.MockTransport that records requests and replays ``reply``."""

    def __init__(self, reply: Reply) -> None:
        self.reply = reply
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.reply(request)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        whisper_server_url="http://whisper.test",
        whisper_model="whisper-1",
        max_audio_size=1000,
    )


@pytest.fixture
def audio_source() -> FakeRemote:
    """A remote audio host serving a small file."""
    return FakeRemote(lambda request: httpx.Response(200, content=AUDIO_BYTES))


@pytest.fixture
def backend() -> FakeRemote:
    """A transcription backend answering with a fixed transcript."""
    return FakeRemote(lambda request: httpx.Response(200, json={"text": "hello world"}))


@pytest.fixture
def fetcher(settings: Settings, audio_source: FakeRemote) -> AudioFetcher:
    client = httpx.AsyncClient(transport=httpx.MockTransport(audio_source), follow_redirects=True)
    return AudioFetcher(settings, client=client)


@pytest.fixture
def transcriber(settings: Settings, backend: FakeRemote) -> TranscriptionClient:
    client = httpx.AsyncClient(transport=httpx.MockTransport(backend))
    return TranscriptionClient(settings, client=client)


@pytest.fixture
def api_app(settings: Settings, fetcher: AudioFetcher, transcriber: TranscriptionClient) -> FastAPI:
    """Create a test API app with fake remotes injected into state."""
    from transcribe_agent.routers.chat import router as chat_router
    from transcribe_agent.routers.health import router as health_router

    app = FastAPI()
    app.state.settings = settings
    app.state.fetcher = fetcher
    app.state.transcriber = transcriber
    app.include_router(chat_router)
    app.include_router(health_router)
    return app


@pytest.fixture
def ui_app(settings: Settings, transcriber: TranscriptionClient) -> FastAPI:
    """Create a test upload UI app with a fake backend injected into state."""
    from transcribe_agent.routers.upload import router as upload_router

    app = FastAPI()
    app.state.settings = settings
    app.state.transcriber = transcriber
    app.include_router(upload_router)
    return app


@pytest.fixture
def client(api_app: FastAPI) -> TestClient:
    return TestClient(api_app)


@pytest.fixture
def ui_client(ui_app: FastAPI) -> TestClient:
    return TestClient(ui_app)
