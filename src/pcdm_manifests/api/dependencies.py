from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends

from pcdm_manifests.adapters import ItemResolver
from pcdm_manifests.config import Settings, get_settings
from pcdm_manifests.core.ports.http import JsonFetcher
from pcdm_manifests.core.solr import SolrGateway
from pcdm_manifests.transport.httpx_adapter import HttpxJsonFetcher

_fetcher: HttpxJsonFetcher | None = None


async def get_fetcher() -> AsyncIterator[JsonFetcher]:
    """Yield the shared ``JsonFetcher``, creating it lazily on first call."""
    global _fetcher  # noqa: PLW0603
    if _fetcher is None:
        _fetcher = HttpxJsonFetcher.create(timeout=get_settings().http_timeout)
    yield _fetcher


async def shutdown_fetcher() -> None:
    global _fetcher  # noqa: PLW0603
    if _fetcher is not None:
        await _fetcher.aclose()
        _fetcher = None


def get_gateway(
    fetcher: JsonFetcher = Depends(get_fetcher),
    settings: Settings = Depends(get_settings),
) -> SolrGateway:
    return SolrGateway(
        fetcher,
        settings.solr_url,
        highlight_fields=settings.highlight_fields,
        text_block_rows=settings.text_block_rows,
    )


def get_resolver(
    gateway: SolrGateway = Depends(get_gateway),
    settings: Settings = Depends(get_settings),
) -> ItemResolver:
    """A fresh resolver per request, so fetched documents are never shared between requests."""
    return ItemResolver(gateway, settings)
