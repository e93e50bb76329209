"""
CORS admission

Requests carrying an Origin header outside the allow-list are refused before
any other middleware runs. Admitted cross-origin requests get credentialed
CORS headers from Starlette's CORSMiddleware.
"""

from typing import Collection, Optional

import structlog
from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = structlog.get_logger(__name__)


def is_origin_allowed(allowed_origins: Collection[str], origin: Optional[str]) -> bool:
    """
    Decide whether a request origin is admitted

    Args:
        allowed_origins: Exact origin strings, compared case-sensitively
        origin: Raw Origin header value, or None when the header is absent

    Returns:
        True for an absent or empty origin, or an exact allow-list match
    """
    if not origin:
        return True
    return origin in allowed_origins


class OriginAdmissionMiddleware(BaseHTTPMiddleware):
    """Reject requests whose Origin header is not in the allow-list"""

    def __init__(self, app, allowed_origins: Collection[str]):
        super().__init__(app)
        self.allowed_origins = frozenset(allowed_origins)

    async def dispatch(self, request: Request, call_next):
        origin = request.headers.get("origin")
        if not is_origin_allowed(self.allowed_origins, origin):
            logger.warning(
                "Blocked by CORS",
                origin=origin,
                method=request.method,
                path=request.url.path,
            )
            return JSONResponse(
                status_code=status.HTTP_403_FORBIDDEN,
                content={
                    "error": True,
                    "message": "Not allowed by CORS",
                    "status_code": status.HTTP_403_FORBIDDEN,
                },
                headers={"Vary": "Origin"},
            )
        return await call_next(request)


def configure_cors(app: FastAPI, allowed_origins: Collection[str]) -> None:
    """
    Attach origin admission and credentialed CORS headers

    Starlette runs the most recently added middleware first, so admission is
    added after CORSMiddleware to sit in front of it.
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(allowed_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(OriginAdmissionMiddleware, allowed_origins=allowed_origins)
