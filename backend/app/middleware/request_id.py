"""
Request ID propagation.

A caller may correlate its own logs by sending X-Request-ID; anything that is
not a short token of letters, digits, '.', '_' or '-' is replaced with a fresh
id so that log lines and response headers never carry arbitrary client input.
"""

import re
import uuid

from devconnector.logging import bind_context

REQUEST_ID_HEADER = b"x-request-id"
_VALID_REQUEST_ID = re.compile(r"[A-Za-z0-9._-]{1,64}")


def resolve_request_id(raw: bytes | None) -> str:
    """The caller's id if it is acceptable, otherwise a new one."""
    if raw is not None:
        candidate = raw.decode("latin-1").strip()
        if _VALID_REQUEST_ID.fullmatch(candidate):
            return candidate
    return uuid.uuid4().hex


class RequestIDMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        raw = next((value for name, value in scope["headers"] if name == REQUEST_ID_HEADER), None)
        request_id = resolve_request_id(raw)
        scope.setdefault("state", {})["request_id"] = request_id
        bind_context(request_id=request_id)

        async def send_with_id(message):
            if message["type"] == "http.response.start":
                message.setdefault("headers", []).append((REQUEST_ID_HEADER, request_id.encode()))
            await send(message)

        await self.app(scope, receive, send_with_id)
