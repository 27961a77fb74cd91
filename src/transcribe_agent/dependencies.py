from fastapi import Request

from transcribe_agent.config import Settings
from transcribe_agent.services.fetcher import AudioFetcher
from transcribe_agent.services.transcription import TranscriptionClient


def get_settings(request: Request) -> Settings:
    """Retrieve the immutable Settings from app state."""
    return request.app.state.settings


def get_fetcher(request: Request) -> AudioFetcher:
    """Retrieve the AudioFetcher singleton from app state."""
    return request.app.state.fetcher


def get_transcriber(request: Request) -> TranscriptionClient:
    """Retrieve the TranscriptionClient singleton from app state."""
    return request.app.state.transcriber
