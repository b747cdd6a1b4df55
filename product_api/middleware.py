"""
API-key middleware for everything under /api.

The x-api-key header must match the configured key. Paths outside /api
(the welcome page) pass through untouched.
"""

from __future__ import annotations

from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from .core import authenticate

API_PREFIX = "/api"
UNAUTHORIZED = "Unauthorized. API key missing or invalid."


def is_api_path(path: str) -> bool:
    # case-folded so /API/... cannot slip past the gate
    lowered = path.lower()
    return lowered == API_PREFIX or lowered.startswith(API_PREFIX + "/")


class APIKeyMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, api_key: Optional[str] = None) -> None:
        super().__init__(app)
        self.api_key = api_key

    async def dispatch(self, request: Request, call_next) -> Response:
        if not is_api_path(request.url.path):
            return await call_next(request)

        if not authenticate(request.headers.get("x-api-key"), self.api_key):
            return JSONResponse(status_code=401, content={"error": UNAUTHORIZED})

        return await call_next(request)
