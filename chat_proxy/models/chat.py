# chat_proxy/models/chat.py
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from chat_proxy.config import DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE


class ChatMessage(BaseModel):
    # Extra keys (name, tool_call_id, ...) are forwarded untouched.
    model_config = ConfigDict(extra="allow")

    role: str
    content: Union[str, List[Any], None] = ""


class ChatRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    messages: List[ChatMessage] = []
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    max_tokens: Optional[int] = Field(default=None, ge=1)

    def generation_params(self) -> "GenerationParams":
        """Fills in the defaults for whatever the caller left out. An explicit 0 is kept."""
        return GenerationParams(
            temperature=DEFAULT_TEMPERATURE if self.temperature is None else self.temperature,
            max_tokens=DEFAULT_MAX_TOKENS if self.max_tokens is None else self.max_tokens,
        )


class GenerationParams(BaseModel):
    temperature: float = DEFAULT_TEMPERATURE
    max_tokens: int = DEFAULT_MAX_TOKENS


class CompletionMessage(BaseModel):
    content: str


class CompletionChoice(BaseModel):
    message: CompletionMessage


class ChatCompletionResponse(BaseModel):
    """The only shape a successful POST ever returns: {choices: [{message: {content}}]}."""

    choices: List[CompletionChoice]

    @classmethod
    def from_content(cls, content: str) -> "ChatCompletionResponse":
        return cls(choices=[CompletionChoice(message=CompletionMessage(content=content))])
