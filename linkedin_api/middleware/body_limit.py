"""
Request body ceiling

Bodies larger than the configured limit are refused with 413, either up front
from Content-Length or while the body is being streamed to the handler.
"""

import structlog
from fastapi import HTTPException, status
from fastapi.responses import JSONResponse
from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = structlog.get_logger(__name__)

PAYLOAD_TOO_LARGE = "Request entity too large"


def _too_large_response() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
        content={
            "error": True,
            "message": PAYLOAD_TOO_LARGE,
            "status_code": status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
        },
    )


class BodySizeLimitMiddleware:
    """Enforce a maximum request body size in bytes"""

    def __init__(self, app: ASGIApp, max_body_size: int):
        self.app = app
        self.max_body_size = max_body_size

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        content_length = Headers(scope=scope).get("content-length")
        if content_length is not None:
            try:
                declared = int(content_length)
            except ValueError:
                response = JSONResponse(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    content={
                        "error": True,
                        "message": "Invalid Content-Length header",
                        "status_code": status.HTTP_400_BAD_REQUEST,
                    },
                )
                await response(scope, receive, send)
                return

            if declared > self.max_body_size:
                logger.warning(
                    "Request body too large",
                    path=scope.get("path"),
                    content_length=declared,
                    limit=self.max_body_size,
                )
                await _too_large_response()(scope, receive, send)
                return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_body_size:
                    logger.warning(
                        "Request body too large",
                        path=scope.get("path"),
                        received=received,
                        limit=self.max_body_size,
                    )
                    # Raised inside the handler's body read; the app's
                    # exception handlers turn it into the 413 response
                    raise HTTPException(
                        status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                        detail=PAYLOAD_TOO_LARGE,
                    )
            return message

        await self.app(scope, limited_receive, send)
