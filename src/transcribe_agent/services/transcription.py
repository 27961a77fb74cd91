"""Client for an OpenAI-compatible ``/v1/audio/transcriptions`` backend."""

import logging
from dataclasses import dataclass

import httpx
from pydantic import ValidationError

from transcribe_agent.config import Settings
from transcribe_agent.exceptions import (
    BackendTransportError,
    RequestConstructionError,
    ResponseReadError,
    TranscriptParseError,
)
from transcribe_agent.schemas.transcription import TranscriptionResult
from transcribe_agent.utils.filename import derive_filename

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BackendResponse:
    body: bytes
    status_code: int


class TranscriptionClient:
    """Re-uploads audio bytes to the transcription backend as multipart form data."""

    def __init__(self, settings: Settings, client: httpx.AsyncClient | None = None) -> None:
        self._base_url = settings.whisper_server_url.rstrip("/")
        self._endpoint = settings.transcription_endpoint
        self._model = settings.whisper_model
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(settings.transcription_timeout, connect=30.0)
        )

    async def transcribe(self, source: str, audio: bytes) -> BackendResponse:
        """Submit ``audio`` and return the backend's raw body and status.

        ``source`` is the URL or original filename the audio came from; only
        its extension is forwarded. HTTP error statuses are returned like any
        other response, callers detect failure by parsing the body.

        Raises:
            FilenameDerivationError: ``source`` has no usable extension.
            RequestConstructionError: the request could not be built.
            BackendTransportError: the request could not be sent.
            ResponseReadError: the response body could not be read.
        """
        filename = derive_filename(source)

        try:
            request = self._client.build_request(
                "POST",
                self._endpoint,
                files={"file": (filename, audio)},
                data={"model": self._model},
            )
        except (httpx.InvalidURL, ValueError) as e:
            raise RequestConstructionError(str(e)) from e

        try:
            response = await self._client.send(request, stream=True)
        except httpx.HTTPError as e:
            raise BackendTransportError(str(e)) from e

        try:
            body = await response.aread()
        except httpx.HTTPError as e:
            raise ResponseReadError(str(e)) from e
        finally:
            await response.aclose()

        logger.info(
            "Backend answered %d (%d bytes) for %s", response.status_code, len(body), filename
        )
        return BackendResponse(body=body, status_code=response.status_code)

    async def is_reachable(self) -> bool:
        """Check if the transcription backend answers HTTP at all."""
        try:
            await self._client.get(self._base_url, timeout=httpx.Timeout(5.0))
            return True
        except (httpx.HTTPError, httpx.InvalidURL, ValueError):
            return False

    async def close(self) -> None:
        await self._client.aclose()


def parse_transcript(body: bytes) -> str:
    """Decode a backend body as ``{"text": ...}`` and return the text.

    Raises:
        TranscriptParseError: the body is not JSON or does not match the shape.
    """
    try:
        return TranscriptionResult.model_validate_json(body).text
    except ValidationError as e:
        raise TranscriptParseError(str(e)) from e
