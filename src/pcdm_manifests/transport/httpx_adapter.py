"""httpx-backed ``JsonFetcher``."""

from __future__ import annotations

import logging
from typing import Any, Self

import httpx

from pcdm_manifests.errors import InternalServerError

logger = logging.getLogger(__name__)


class HttpxJsonFetcher:
    """GETs JSON documents with a bounded timeout.

    Connection failures, timeouts and non-success statuses all surface as
    ``InternalServerError``; nothing is retried.
    """

    def __init__(self, http: httpx.AsyncClient) -> None:
        self._http = http

    @classmethod
    def create(cls, timeout: float = 10.0) -> Self:
        http = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            headers={"Accept": "application/json"},
        )
        return cls(http)

    async def get_json(self, url: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        logger.debug("GET %s %s", url, params)
        try:
            response = await self._http.get(url, params=params)
        except httpx.TimeoutException as exc:
            logger.warning("Timed out fetching %s: %s", url, exc)
            raise InternalServerError(f"Timed out waiting for <{url}>") from exc
        except httpx.RequestError as exc:
            logger.warning("Unable to connect to %s: %s", url, exc)
            raise InternalServerError(f"Unable to connect to <{url}> with error: {exc}") from exc

        if not response.is_success:
            logger.warning("Got a %s response from %s", response.status_code, url)
            raise InternalServerError(f"Got a {response.status_code} response from {url}")

        try:
            body = response.json()
        except ValueError as exc:
            raise InternalServerError(f"Response from {url} is not valid JSON") from exc
        if not isinstance(body, dict):
            raise InternalServerError(f"Response from {url} is not a JSON object")
        return body

    async def aclose(self) -> None:
        await self._http.aclose()
