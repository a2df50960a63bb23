# chat_proxy/errors.py
"""Error types the proxy turns into JSON responses."""


class ProxyError(Exception):
    """Base class. Subclasses know their HTTP status and how their body looks."""

    status_code = 500
    error = "Proxy error"

    def __init__(self, message: str = "", details=None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_body(self) -> dict:
        body = {"error": self.error}
        if self.message:
            body["message"] = self.message
        if self.details is not None:
            body["details"] = self.details
        return body


class AuthError(ProxyError):
    status_code = 401
    error = "Invalid API key"

    def __init__(self, message: str = "Please provide a valid API key in the Authorization header"):
        super().__init__(message)


class NotFoundError(ProxyError):
    status_code = 404
    error = "Not Found"

    def __init__(self, message: str = "This endpoint only accepts POST requests"):
        super().__init__(message)


class InvalidRequestError(ProxyError):
    status_code = 400
    error = "Invalid request"


class UpstreamError(ProxyError):
    """The upstream API answered with a non-2xx status. Its status is relayed as-is."""

    error = "API error"

    def __init__(self, status_code: int, details, url: str):
        super().__init__("Failed to get response from API", details)
        self.status_code = status_code
        self.url = url

    def to_body(self) -> dict:
        body = super().to_body()
        body["status"] = self.status_code
        body["url"] = self.url
        return body


class InternalError(ProxyError):
    status_code = 500
    error = "Proxy error"
