"""Request ID middleware.

Every request gets an id: the client's X-Request-ID when it is safe to log,
otherwise a fresh one. The id is echoed on the response and published
through request_id_var so log records carry it (see RequestIdFilter).
Raw ASGI (no BaseHTTPMiddleware).
"""

import re
import uuid
from contextvars import ContextVar
from typing import Callable

from app.middleware._asgi import get_header

# Letters, digits, hyphen, underscore; anything else could forge log lines.
_SAFE_REQUEST_ID = re.compile(r"[A-Za-z0-9_-]{1,64}")

request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


def resolve_request_id(raw: str | None) -> str:
    """Client value if it matches the safe pattern, else a new uuid4 hex."""
    candidate = (raw or "").strip()
    if _SAFE_REQUEST_ID.fullmatch(candidate):
        return candidate
    return uuid.uuid4().hex


def RequestIDMiddleware(app: Callable, header_name: str = "X-Request-ID") -> Callable:
    """Attach a request id to the scope, the log context and the response."""
    header_bytes = header_name.lower().encode()

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        request_id = resolve_request_id(get_header(scope, header_name))
        scope.setdefault("state", {})["request_id"] = request_id

        async def send_with_id(message: dict) -> None:
            if message["type"] == "http.response.start":
                message["headers"] = [
                    *message.get("headers", []),
                    (header_bytes, request_id.encode()),
                ]
            await send(message)

        token = request_id_var.set(request_id)
        try:
            await app(scope, receive, send_with_id)
        finally:
            request_id_var.reset(token)

    return asgi_app
