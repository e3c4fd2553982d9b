"""ASGI middleware adding the CORS header IIIF viewers need."""

from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response


class AllowAnyOriginMiddleware(BaseHTTPMiddleware):
    """Sets ``Access-Control-Allow-Origin: *`` on every response.

    Viewers embedded in other sites fetch manifests and annotation lists
    cross-origin.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        response.headers.setdefault("Access-Control-Allow-Origin", "*")
        return response
