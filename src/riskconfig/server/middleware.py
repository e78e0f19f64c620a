"""Request body size limit.

Rejects bodies larger than the configured maximum before any handler (and
so the store) sees them. A declared ``Content-Length`` is checked up front;
bodies without one (chunked transfer) are counted as they arrive and
buffered, then replayed to the application once complete.
"""

from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from .errors import PayloadTooLargeError, error_response

# Methods that carry a body
BODY_METHODS = ["POST", "PUT", "PATCH", "DELETE"]


class BodySizeLimitMiddleware:
    """Return 413 for bodies larger than ``max_body_bytes``."""

    def __init__(self, app: ASGIApp, max_body_bytes: int):
        self.app = app
        self.max_body_bytes = max_body_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope["method"] not in BODY_METHODS:
            await self.app(scope, receive, send)
            return

        declared = Headers(scope=scope).get("content-length")
        if declared is not None:
            try:
                size = int(declared)
            except ValueError:
                size = -1
            if size < 0:
                response = error_response(
                    400, "Invalid request", "Content-Length header is not a valid size"
                )
                await response(scope, receive, send)
                return
            if size > self.max_body_bytes:
                await self._reject(scope, receive, send)
                return

        chunks: list[bytes] = []
        received = 0
        more_body = True
        while more_body:
            message = await receive()
            if message["type"] == "http.disconnect":
                return
            body = message.get("body", b"")
            received += len(body)
            if received > self.max_body_bytes:
                await self._reject(scope, receive, send)
                return
            chunks.append(body)
            more_body = message.get("more_body", False)

        buffered: Message = {
            "type": "http.request",
            "body": b"".join(chunks),
            "more_body": False,
        }
        replayed = False

        async def replay() -> Message:
            nonlocal replayed
            if not replayed:
                replayed = True
                return buffered
            return await receive()

        await self.app(scope, replay, send)

    async def _reject(self, scope: Scope, receive: Receive, send: Send) -> None:
        exc = PayloadTooLargeError(
            f"Request body exceeds the {self.max_body_bytes} byte limit"
        )
        response = error_response(exc.status_code, exc.error, exc.message)
        await response(scope, receive, send)
