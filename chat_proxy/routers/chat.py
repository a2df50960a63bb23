# chat_proxy/routers/chat.py
import json
import logging
import secrets

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError

from chat_proxy.config import DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE, Settings
from chat_proxy.errors import AuthError, InternalError, InvalidRequestError, NotFoundError, ProxyError
from chat_proxy.models.chat import ChatRequest
from chat_proxy.services.forwarder import forward_chat
from chat_proxy.services.upstream import UpstreamAdapter

logger = logging.getLogger(__name__)

router = APIRouter()

WELCOME = {
    "message": "Welcome to the chat proxy API",
    "status": "running",
    "documentation": "This API accepts POST requests with an Authorization header containing a Bearer token.",
    "example": {
        "method": "POST",
        "headers": {
            "Content-Type": "application/json",
            "Authorization": "Bearer <your-api-key>",
        },
        "body": {
            "messages": [{"role": "user", "content": "Hello!"}],
            "temperature": DEFAULT_TEMPERATURE,
            "max_tokens": DEFAULT_MAX_TOKENS,
        },
    },
}


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_upstream(request: Request) -> UpstreamAdapter:
    return request.app.state.upstream


def bearer_token(authorization: str) -> str:
    if authorization.startswith("Bearer "):
        return authorization[len("Bearer "):]
    return authorization


def require_client_key(request: Request, settings: Settings = Depends(get_settings)):
    """Rejects the request unless it carries the configured client key. An unset key rejects everything."""
    provided = bearer_token(request.headers.get("Authorization", ""))
    expected = settings.client_api_key
    if not expected or not secrets.compare_digest(provided.encode(), expected.encode()):
        logger.warning("🔒 Rejected POST %s: invalid or missing API key", request.url.path)
        raise AuthError()


@router.get("/")
def read_root():
    """
    Static welcome payload describing how to call the proxy.
    """
    return WELCOME


@router.get("/{path:path}")
def not_found(path: str):
    raise NotFoundError()


@router.post("/{path:path}", dependencies=[Depends(require_client_key)])
async def chat_completion(
    request: Request,
    settings: Settings = Depends(get_settings),
    upstream: UpstreamAdapter = Depends(get_upstream),
):
    """
    Forwards a chat conversation to the upstream LLM with the server's
    model, credential and system prompt, and returns only the answer text.
    """
    try:
        data = json.loads(await request.body())
        try:
            chat_request = ChatRequest.model_validate(data)
        except ValidationError as e:
            errors = json.loads(e.json(include_url=False))
            # Only bad generation params are a client error; any other shape problem is a parse failure.
            if any(err["loc"][:1] not in (["temperature"], ["max_tokens"]) for err in errors):
                raise
            raise InvalidRequestError(
                "temperature must be between 0 and 2 and max_tokens at least 1",
                details=errors,
            ) from e

        result = await run_in_threadpool(forward_chat, chat_request, settings, upstream)
    except ProxyError:
        raise
    except Exception as e:
        logger.exception("💥 Unexpected error while handling chat request")
        raise InternalError(str(e), details=type(e).__name__) from e

    return result.model_dump()
