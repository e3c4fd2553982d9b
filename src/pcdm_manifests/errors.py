"""Error taxonomy, rendered as RFC 7807 Problem Details by the API layer."""

from __future__ import annotations

from typing import Any


class ProblemError(Exception):
    title = "Internal Server Error"
    status = 500

    def __init__(self, details: str) -> None:
        super().__init__(details)
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        return {"title": self.title, "details": self.details, "status": self.status}


class BadRequestError(ProblemError):
    """The client supplied a malformed or type-mismatched identifier."""

    title = "Bad Request"
    status = 400


class NotFoundError(ProblemError):
    """No indexed resource, or the resource lacks the requested capability."""

    title = "Not Found"
    status = 404


class InternalServerError(ProblemError):
    """The search index or another backend is unreachable or failing."""

    title = "Internal Server Error"
    status = 500
