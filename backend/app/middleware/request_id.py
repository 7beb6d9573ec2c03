"""
Middleware that tags every request with an id.

The id comes from the caller's X-Request-ID header when present, is bound
to the logging context, and is echoed back in the response.
"""

import uuid

from starlette.datastructures import Headers

from core.logging import bind_context, clear_context


class RequestIDMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = Headers(scope=scope).get("x-request-id") or str(uuid.uuid4())
        scope.setdefault("state", {})["request_id"] = request_id

        # Context from a previous request on this task must not leak in
        clear_context()
        bind_context(request_id=request_id)

        async def send_wrapper(message):
            if message["type"] == "http.response.start":
                headers = message.setdefault("headers", [])
                headers.append((b"x-request-id", request_id.encode()))
            await send(message)

        await self.app(scope, receive, send_wrapper)
