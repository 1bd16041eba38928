"""Client App Static Files — serves the single-page client with an index.html fallback.

Invariants:
    - Existing files are served as-is; directory paths serve their index.html
    - Any other unknown path serves the root index.html (client-side routing)
    - Paths under api/ are never answered with index.html: an unknown API path stays 404

Design Decisions:
    - StaticFiles subclass over a catch-all route: the mount goes after the API routers,
      so /api/* always matches first
"""

import os

from fastapi import FastAPI, Response
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException
from starlette.types import Scope

API_PREFIX = "api/"
INDEX_FILE = "index.html"


class SPAStaticFiles(StaticFiles):
    """StaticFiles that answers unknown non-API paths with index.html."""

    async def get_response(self, path: str, scope: Scope) -> Response:
        try:
            return await super().get_response(path, scope)
        except HTTPException as e:
            if e.status_code != 404 or path.startswith(API_PREFIX) or path == "api":
                raise
            return await super().get_response(INDEX_FILE, scope)


def mount_client_app(app: FastAPI, directory: str) -> bool:
    """Mount the client app at / if its directory exists. Returns whether it was mounted."""
    if not os.path.isdir(directory):
        return False
    app.mount("/", SPAStaticFiles(directory=directory, html=True), name="static")
    return True
