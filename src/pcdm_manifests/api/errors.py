from __future__ import annotations

import logging

from fastapi import FastAPI
from starlette.requests import Request
from starlette.responses import JSONResponse

from pcdm_manifests.errors import ProblemError

logger = logging.getLogger(__name__)

PROBLEM_MEDIA_TYPE = "application/problem+json"


async def problem_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render a ``ProblemError`` as an RFC 7807 body with the matching status."""
    if not isinstance(exc, ProblemError):
        raise exc
    if exc.status >= 500:
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc.details)
    return JSONResponse(exc.to_dict(), status_code=exc.status, media_type=PROBLEM_MEDIA_TYPE)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ProblemError, problem_handler)
