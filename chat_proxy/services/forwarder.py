# chat_proxy/services/forwarder.py
import logging

from chat_proxy.config import Settings
from chat_proxy.errors import UpstreamError
from chat_proxy.models.chat import ChatCompletionResponse, ChatRequest
from chat_proxy.services.prompt import compose_messages
from chat_proxy.services.upstream import UpstreamAdapter

logger = logging.getLogger(__name__)


def forward_chat(chat_request: ChatRequest, settings: Settings, upstream: UpstreamAdapter) -> ChatCompletionResponse:
    """
    Composes the conversation, makes exactly one upstream call and
    reshapes the answer into the minimal client envelope.
    """
    messages = compose_messages(chat_request.messages, settings.system_prompt)
    params = chat_request.generation_params()

    logger.debug(
        "Forwarding %d message(s), temperature=%s max_tokens=%s",
        len(messages), params.temperature, params.max_tokens,
    )
    try:
        content = upstream.complete(messages, settings.model_id, params)
    except UpstreamError as e:
        logger.warning("❌ Upstream returned %s from %s: %s", e.status_code, e.url, e.details)
        raise

    return ChatCompletionResponse.from_content(content)
