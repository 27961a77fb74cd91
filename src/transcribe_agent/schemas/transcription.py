from pydantic import BaseModel


class TranscriptionResult(BaseModel):
    """Backend reply; only ``text`` is consumed, other fields are ignored."""

    text: str = ""


class HealthResponse(BaseModel):
    status: str = "ok"
    backend_reachable: bool
