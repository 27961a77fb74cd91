"""Browser upload form and its HTML result pages.

This path renders HTML rather than chat completions. Request-level problems
(oversized or malformed multipart, missing file, unreadable file) get a 4xx/5xx
error page; backend failures are shown on a 200 page.
"""

import logging
from collections.abc import AsyncIterator
from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, Response
from fastapi.templating import Jinja2Templates
from starlette.datastructures import UploadFile
from starlette.formparsers import MultiPartException, MultiPartParser

from transcribe_agent.config import Settings
from transcribe_agent.dependencies import get_settings, get_transcriber
from transcribe_agent.exceptions import (
    TranscriptionError,
    TranscriptParseError,
    UploadTooLargeError,
)
from transcribe_agent.services.transcription import TranscriptionClient, parse_transcript

logger = logging.getLogger(__name__)

router = APIRouter(tags=["upload"])

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


async def limited_stream(chunks: AsyncIterator[bytes], limit: int) -> AsyncIterator[bytes]:
    """Yield body chunks, failing once more than ``limit`` bytes arrive."""
    received = 0
    async for chunk in chunks:
        received += len(chunk)
        if received > limit:
            raise UploadTooLargeError(f"request body exceeds {limit} bytes")
        yield chunk


def _error_page(request: Request, message: str, status_code: int = 200) -> HTMLResponse:
    return templates.TemplateResponse(
        request, "error.html", {"message": message}, status_code=status_code
    )


@router.get("/", response_class=HTMLResponse)
async def upload_form(request: Request) -> HTMLResponse:
    """Serve the audio upload form."""
    return templates.TemplateResponse(request, "upload_form.html")


@router.api_route(
    "/transcribe/upload",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    response_class=HTMLResponse,
)
async def transcribe_upload(
    request: Request,
    settings: Settings = Depends(get_settings),
    transcriber: TranscriptionClient = Depends(get_transcriber),
) -> Response:
    """Transcribe a directly uploaded audio file and render the result page."""
    if request.method != "POST":
        return PlainTextResponse("Only POST supported", status_code=405)

    content_type = request.headers.get("content-type", "")
    if not content_type.startswith("multipart/form-data"):
        return _error_page(request, "File too large", status_code=400)

    body = limited_stream(request.stream(), settings.max_audio_size)
    parser = MultiPartParser(request.headers, body)
    try:
        form = await parser.parse()
    except MultiPartException as e:  # includes UploadTooLargeError
        logger.warning("Rejected upload: %s", e)
        return _error_page(request, "File too large", status_code=400)

    try:
        upload = form.get("file")
        if not isinstance(upload, UploadFile):
            return _error_page(request, "Missing file", status_code=400)

        try:
            audio = await upload.read()
        except OSError:
            logger.exception("Failed to read uploaded file %s", upload.filename)
            return _error_page(request, "Failed to read file", status_code=500)

        filename = upload.filename or ""
        logger.info("New upload: %s (%d bytes)", filename, len(audio))
    finally:
        await form.close()

    try:
        backend_response = await transcriber.transcribe(filename, audio)
    except TranscriptionError as e:
        logger.warning("Upload transcription failed: %s", e, exc_info=e)
        return _error_page(request, f"Error: {e}")

    try:
        text = parse_transcript(backend_response.body)
    except TranscriptParseError as e:
        logger.warning("Upload transcription unparseable: %s", e)
        return _error_page(request, f"Failed to parse response: {e}")

    return templates.TemplateResponse(request, "result.html", {"text": text})
