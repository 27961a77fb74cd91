from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, field_validator


class ChatMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: str = ""
    content: str = ""

    @field_validator("role", "content", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class ChatCompletionRequest(BaseModel):
    messages: list[ChatMessage] = []

    @field_validator("messages", mode="before")
    @classmethod
    def _null_as_no_messages(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, list):
            return [{} if message is None else message for message in value]
        return value


class AssistantMessage(BaseModel):
    role: Literal["assistant"] = "assistant"
    content: str


class ChatCompletionChoice(BaseModel):
    index: int = 0
    message: AssistantMessage
    finish_reason: Literal["stop"] = "stop"


class ChatCompletionResponse(BaseModel):
    id: str
    object: Literal["chat.completion"] = "chat.completion"
    created: int
    model: str
    choices: list[ChatCompletionChoice]
