"""Transcribe agent schemas."""

from transcribe_agent.schemas.chat import (
    AssistantMessage,
    ChatCompletionChoice,
    ChatCompletionRequest,
    ChatCompletionResponse,
    ChatMessage,
)
from transcribe_agent.schemas.transcription import HealthResponse, TranscriptionResult

__all__ = [
    "AssistantMessage",
    "ChatCompletionChoice",
    "ChatCompletionRequest",
    "ChatCompletionResponse",
    "ChatMessage",
    "HealthResponse",
    "TranscriptionResult",
]
