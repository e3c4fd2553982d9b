import asyncio
import json
from collections.abc import Awaitable, Callable
from typing import Annotated, Any

import typer
from rich.console import Console

from pcdm_manifests.adapters import ItemResolver
from pcdm_manifests.config import get_settings
from pcdm_manifests.core.items import CanvasItem, ManifestItem
from pcdm_manifests.core.ports.http import JsonFetcher
from pcdm_manifests.core.solr import SolrGateway
from pcdm_manifests.errors import NotFoundError, ProblemError

console = Console()
err_console = Console(stderr=True)

QueryOption = Annotated[str | None, typer.Option("--query", "-q", help="Search query to highlight.")]


def _get_fetcher() -> JsonFetcher:
    from pcdm_manifests.transport.httpx_adapter import HttpxJsonFetcher

    return HttpxJsonFetcher.create(timeout=get_settings().http_timeout)


def _resolver(fetcher: JsonFetcher) -> ItemResolver:
    settings = get_settings()
    gateway = SolrGateway(
        fetcher,
        settings.solr_url,
        highlight_fields=settings.highlight_fields,
        text_block_rows=settings.text_block_rows,
    )
    return ItemResolver(gateway, settings)


async def _resolve_manifest(resolver: ItemResolver, identifier: str, query: str | None) -> ManifestItem:
    item = await resolver.resolve(identifier, query)
    if isinstance(item, CanvasItem):
        err_console.print(f"[yellow]{identifier} is a canvas of {item.manifest_id}[/yellow]")
        item = await resolver.resolve(item.manifest_id, query)
    if not isinstance(item, ManifestItem):
        raise NotFoundError(f"No manifest found for {identifier}")
    return item


def _run(build: Callable[[ItemResolver], Awaitable[dict[str, Any]]]) -> None:
    fetcher = _get_fetcher()

    async def _go() -> dict[str, Any]:
        try:
            return await build(_resolver(fetcher))
        finally:
            await fetcher.aclose()

    try:
        body = asyncio.run(_go())
    except ProblemError as exc:
        err_console.print(f"[red]{exc.title}: {exc.details}[/red]")
        raise typer.Exit(code=1) from exc
    console.print_json(json.dumps(body))


def manifest(
    identifier: Annotated[str, typer.Argument(help="Public id, e.g. fcrepo:pcdm::<uuid>.")],
    query: QueryOption = None,
) -> None:
    """Print the IIIF manifest for an id (a canvas id prints its manifest)."""

    async def _build(resolver: ItemResolver) -> dict[str, Any]:
        item = await _resolve_manifest(resolver, identifier, query)
        return resolver.adapter(item.prefix).manifest(item).to_jsonld()

    _run(_build)


def annotation_list(
    identifier: Annotated[str, typer.Argument(help="Public id of the manifest.")],
    list_id: Annotated[str, typer.Argument(help="Public id of the canvas.")],
    query: QueryOption = None,
) -> None:
    """Print the OCR text blocks of a canvas, or its search hits with --query."""

    async def _build(resolver: ItemResolver) -> dict[str, Any]:
        item = await _resolve_manifest(resolver, identifier, query)
        adapter = resolver.adapter(item.prefix)
        if query:
            body = await adapter.search_hit_list(item, list_id, query)
        else:
            body = await adapter.text_block_list(item, list_id)
        return body.to_jsonld()

    _run(_build)
