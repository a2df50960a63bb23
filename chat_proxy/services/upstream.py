# chat_proxy/services/upstream.py
"""
Upstream adapters: the only code that knows how a given LLM provider wants to be called.

Both adapters take the composed conversation plus generation parameters and return the
first choice's content string. A non-2xx answer from the provider becomes an UpstreamError
carrying the provider's status and error body.
"""
import logging
from typing import List

import openai
import requests

from chat_proxy.config import Settings
from chat_proxy.errors import UpstreamError
from chat_proxy.models.chat import ChatMessage, GenerationParams

logger = logging.getLogger(__name__)


class UpstreamAdapter:
    """Common interface for the providers the proxy can forward to."""

    endpoint_url = ""

    def complete(self, messages: List[ChatMessage], model: str, params: GenerationParams) -> str:
        raise NotImplementedError


class OpenAIUpstream(UpstreamAdapter):
    """Any OpenAI-compatible /v1/chat/completions endpoint (DeepSeek, OpenAI, Groq, vLLM, ...)."""

    def __init__(self, api_key: str, base_url: str, http_client=None):
        self.base_url = f"{base_url}/v1"
        self.endpoint_url = f"{self.base_url}/chat/completions"
        # No retries: every upstream failure goes straight back to the caller.
        self._client = openai.OpenAI(
            api_key=api_key, base_url=self.base_url, max_retries=0, http_client=http_client
        )

    def complete(self, messages, model, params):
        try:
            resp = self._client.chat.completions.create(
                model=model,
                messages=[m.model_dump(exclude_none=True) for m in messages],
                temperature=params.temperature,
                max_tokens=params.max_tokens,
            )
        except openai.APIStatusError as e:
            # e.body is already unwrapped from {"error": ...}; relay the raw upstream body instead.
            raise UpstreamError(e.status_code, response_details(e.response), self.endpoint_url) from e

        return resp.choices[0].message.content or ""


class BotUpstream(UpstreamAdapter):
    """Vendor bot endpoint. Same chat payload, but the model field holds a bot id."""

    def __init__(self, api_key: str, base_url: str, path: str):
        self.api_key = api_key
        self.endpoint_url = f"{base_url}/{path.lstrip('/')}"

    def build_payload(self, messages, model, params) -> dict:
        return {
            "model": model,
            "messages": [m.model_dump(exclude_none=True) for m in messages],
            "temperature": params.temperature,
            "max_tokens": params.max_tokens,
        }

    def complete(self, messages, model, params):
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }
        response = requests.post(
            self.endpoint_url, headers=headers, json=self.build_payload(messages, model, params)
        )

        if not response.ok:
            raise UpstreamError(response.status_code, response_details(response), self.endpoint_url)

        return extract_content(response.json())


def response_details(response):
    """Upstream error body as sent: parsed JSON when possible, raw text otherwise."""
    try:
        return response.json()
    except ValueError:
        return response.text


def extract_content(payload: dict) -> str:
    """First choice's message content. Everything else in the upstream body is dropped."""
    try:
        return payload["choices"][0]["message"]["content"] or ""
    except (KeyError, IndexError, TypeError) as e:
        raise ValueError(f"Upstream response has no first choice: {payload!r}") from e


def build_upstream(settings: Settings) -> UpstreamAdapter:
    if settings.upstream_kind == "bot":
        adapter = BotUpstream(settings.upstream_api_key, settings.upstream_base_url, settings.bot_path)
    else:
        adapter = OpenAIUpstream(settings.upstream_api_key, settings.upstream_base_url)
    logger.info("🔁 Forwarding to %s (%s)", adapter.endpoint_url, settings.upstream_kind)
    return adapter
