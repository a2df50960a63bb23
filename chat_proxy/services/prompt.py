# chat_proxy/services/prompt.py
from typing import List

from chat_proxy.models.chat import ChatMessage


def compose_messages(messages: List[ChatMessage], system_prompt: str) -> List[ChatMessage]:
    """
    Puts the configured system prompt in front of the conversation,
    unless the caller already sent a system message somewhere in it.
    """
    if any(m.role == "system" for m in messages):
        return list(messages)
    return [ChatMessage(role="system", content=system_prompt), *messages]
