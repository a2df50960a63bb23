# chat_proxy/cors.py
from typing import List, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

ALLOW_METHODS = "GET, POST, OPTIONS"
ALLOW_HEADERS = "Content-Type, Authorization, X-Requested-With"
MAX_AGE = "86400"


def resolve_allowed_origin(origin: Optional[str], allowed_origins: List[str]) -> str:
    """
    Which origin to advertise back to the browser.
    "*" in the allow-list echoes the caller, a listed origin is echoed,
    anything else gets the first allow-list entry.
    """
    if "*" in allowed_origins:
        return origin or "*"
    if origin in allowed_origins:
        return origin
    return allowed_origins[0]


def cors_headers(request: Request, allowed_origins: List[str]) -> dict:
    allow_origin = resolve_allowed_origin(request.headers.get("origin"), allowed_origins)
    headers = {"Access-Control-Allow-Origin": allow_origin}
    if allow_origin != "*":
        headers["Vary"] = "Origin"
    return headers


class CORSGateMiddleware(BaseHTTPMiddleware):
    """
    Answers every OPTIONS request itself with a 204 preflight, before any auth,
    and stamps Access-Control-Allow-Origin on every other response.
    """

    def __init__(self, app, allowed_origins: List[str]):
        super().__init__(app)
        self.allowed_origins = allowed_origins

    async def dispatch(self, request: Request, call_next):
        headers = cors_headers(request, self.allowed_origins)

        if request.method == "OPTIONS":
            headers.update({
                "Access-Control-Allow-Methods": ALLOW_METHODS,
                "Access-Control-Allow-Headers": ALLOW_HEADERS,
                "Access-Control-Max-Age": MAX_AGE,
            })
            return Response(status_code=204, headers=headers)

        response = await call_next(request)
        response.headers.update(headers)
        return response
