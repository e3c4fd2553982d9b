from __future__ import annotations

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str = "ok"


class ReadinessResponse(BaseModel):
    status: str = "ok"
    solr: str = "up"


class ProblemDetails(BaseModel):
    """Error body for 4xx/5xx responses."""

    title: str
    details: str
    status: int
