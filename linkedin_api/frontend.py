"""
Frontend bundle serving

In production the built single-page application is served from the static
root. Unknown non-API paths fall back to index.html for client-side routing;
unknown API paths get an empty 404 instead of HTML.
"""

from pathlib import Path

import structlog
from fastapi import FastAPI
from starlette.exceptions import HTTPException
from starlette.responses import Response
from starlette.staticfiles import StaticFiles
from starlette.types import Scope

logger = structlog.get_logger(__name__)

API_PREFIX = "/api"
INDEX_FILE = "index.html"


def is_api_path(path: str) -> bool:
    """True for any path beginning with /api"""
    return path.startswith(API_PREFIX)


class SinglePageApp(StaticFiles):
    """Static files with index.html fallback for client-side routes"""

    def __init__(self, directory: Path):
        super().__init__(directory=directory, check_dir=False)

    async def check_config(self) -> None:
        # A missing bundle only fails the requests that need it
        try:
            await super().check_config()
        except RuntimeError as e:
            logger.warning("Frontend bundle unavailable", directory=str(self.directory), error=str(e))

    async def get_response(self, path: str, scope: Scope) -> Response:
        if is_api_path(scope["path"]):
            return Response(status_code=404)

        try:
            return await super().get_response(path, scope)
        except HTTPException as exc:
            if exc.status_code != 404:
                raise
        return await super().get_response(INDEX_FILE, scope)


def mount_frontend(app: FastAPI, static_root: Path) -> None:
    """
    Serve the frontend bundle and its client-side routing fallback

    Mounted at "/" after every API router so that registered routes win.
    """
    logger.info("Serving frontend bundle", static_root=str(static_root))
    app.mount("/", SinglePageApp(directory=static_root), name="frontend")
