# chat_proxy/main.py
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from chat_proxy.config import Settings
from chat_proxy.cors import CORSGateMiddleware, cors_headers
from chat_proxy.errors import InternalError, ProxyError
from chat_proxy.logging_setup import setup_logging
from chat_proxy.routers import chat
from chat_proxy.services.upstream import UpstreamAdapter, build_upstream

logger = logging.getLogger(__name__)


def create_app(settings: Settings, upstream: Optional[UpstreamAdapter] = None) -> FastAPI:
    """
    Builds the proxy app around an explicit configuration.
    Pass an upstream adapter to override the one chosen from settings.upstream_kind.
    """
    app = FastAPI(title="Chat Proxy")
    app.state.settings = settings
    app.state.upstream = upstream if upstream is not None else build_upstream(settings)

    # ✅ CORS: preflight answered before auth, origin header on every response
    app.add_middleware(CORSGateMiddleware, allowed_origins=settings.allowed_origins)

    @app.exception_handler(ProxyError)
    async def proxy_error_handler(request: Request, exc: ProxyError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_body())

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception("💥 Unhandled error on %s %s", request.method, request.url.path)
        # Rendered outside the CORS middleware, so the origin header is added here.
        error = InternalError(str(exc), details=type(exc).__name__)
        return JSONResponse(
            status_code=error.status_code,
            content=error.to_body(),
            headers=cors_headers(request, settings.allowed_origins),
        )

    app.include_router(chat.router, tags=["Chat"])

    logger.info(
        "✅ Chat proxy ready: model=%s, allowed origins=%s",
        settings.model_id, ", ".join(settings.allowed_origins),
    )
    return app


def app_from_env() -> FastAPI:
    """Factory for `uvicorn chat_proxy.main:app_from_env --factory`."""
    settings = Settings.from_env()
    setup_logging(settings.log_level)
    return create_app(settings)
