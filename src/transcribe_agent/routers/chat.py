"""OpenAI-style chat completions endpoint backed by speech-to-text.

The last message must contain an audio URL. Every outcome, including every
failure, is answered with HTTP 200 and a chat completion whose assistant
message carries either the transcript or a readable error, so chat clients
never see a transport-level error from this route.
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from transcribe_agent.config import Settings
from transcribe_agent.dependencies import get_fetcher, get_settings, get_transcriber
from transcribe_agent.exceptions import (
    FetchError,
    InvalidRequestError,
    TranscriptionError,
    TranscriptParseError,
)
from transcribe_agent.schemas.chat import ChatCompletionRequest
from transcribe_agent.services.envelope import build_envelope
from transcribe_agent.services.fetcher import AudioFetcher
from transcribe_agent.services.transcription import TranscriptionClient, parse_transcript
from transcribe_agent.utils.text import extract_audio_url

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])

ACCEPTED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]


def _respond(model: str, text: str, error: Exception | None = None) -> JSONResponse:
    if error is not None:
        text = f"{text}: {error}"
        logger.warning("responded with: %s", text, exc_info=error)
    else:
        logger.info("responded with: %s", text)
    envelope = build_envelope(model, text)
    return JSONResponse(status_code=200, content=envelope.model_dump())


def _audio_url_from(chat_request: ChatCompletionRequest) -> str:
    """Pick the audio URL out of the last message; history is ignored."""
    if not chat_request.messages:
        raise InvalidRequestError("No messages provided")
    url = extract_audio_url(chat_request.messages[-1].content)
    if url is None:
        raise InvalidRequestError("No audio URL found in message")
    return url


@router.api_route("/v1/chat/completions", methods=ACCEPTED_METHODS)
async def chat_completions(
    request: Request,
    settings: Settings = Depends(get_settings),
    fetcher: AudioFetcher = Depends(get_fetcher),
    transcriber: TranscriptionClient = Depends(get_transcriber),
) -> JSONResponse:
    """Transcribe the audio linked in the last chat message."""
    model = settings.whisper_model

    if request.method != "POST":
        return _respond(model, "Method not allowed")

    try:
        chat_request = ChatCompletionRequest.model_validate_json(await request.body())
    except ValidationError as e:
        return _respond(model, "Invalid JSON", e)

    try:
        audio_url = _audio_url_from(chat_request)
    except InvalidRequestError as e:
        return _respond(model, str(e))

    logger.info("New request for file: %s", audio_url)
    try:
        audio = await fetcher.fetch(audio_url)
    except FetchError as e:
        return _respond(model, "Failed to download audio", e)

    try:
        backend_response = await transcriber.transcribe(audio_url, audio)
    except TranscriptionError as e:
        return _respond(model, "Transcription error", e)

    try:
        text = parse_transcript(backend_response.body)
    except TranscriptParseError as e:
        return _respond(model, "Invalid transcription response", e)

    return _respond(model, text)
