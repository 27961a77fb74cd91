from fastapi import APIRouter, Depends

from transcribe_agent.dependencies import get_transcriber
from transcribe_agent.schemas.transcription import HealthResponse
from transcribe_agent.services.transcription import TranscriptionClient

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health(
    transcriber: TranscriptionClient = Depends(get_transcriber),
) -> HealthResponse:
    """Check service health: is the transcription backend answering."""
    return HealthResponse(backend_reachable=await transcriber.is_reachable())
