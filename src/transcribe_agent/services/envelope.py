import time

from transcribe_agent.schemas.chat import (
    AssistantMessage,
    ChatCompletionChoice,
    ChatCompletionResponse,
)

COMPLETION_ID = "chatcmpl-mockid"


def build_envelope(model: str, text: str) -> ChatCompletionResponse:
    """Wrap transcript or error text as a single-choice assistant completion."""
    return ChatCompletionResponse(
        id=COMPLETION_ID,
        created=int(time.time()),
        model=model,
        choices=[ChatCompletionChoice(message=AssistantMessage(content=text))],
    )
