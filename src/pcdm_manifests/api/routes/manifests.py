from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse, RedirectResponse, Response

from pcdm_manifests.adapters import ItemResolver
from pcdm_manifests.api.dependencies import get_resolver
from pcdm_manifests.api.schemas import ProblemDetails
from pcdm_manifests.core.items import CanvasItem
from pcdm_manifests.errors import NotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/manifests", tags=["manifests"])

_PROBLEMS: dict[int | str, dict[str, Any]] = {
    303: {"description": "Canvas-level id; redirect to the containing manifest"},
    400: {"model": ProblemDetails},
    404: {"model": ProblemDetails},
    500: {"model": ProblemDetails},
}


def _see_other(request: Request, route_name: str, item: CanvasItem, q: str | None, **path_params: str) -> Response:
    url = request.url_for(route_name, id=item.manifest_id, **path_params)
    if q is not None:
        url = url.include_query_params(q=q)
    logger.info("Redirecting canvas %s to manifest %s", item.id, item.manifest_id)
    return RedirectResponse(str(url), status_code=status.HTTP_303_SEE_OTHER)


@router.get("/{id}/manifest", name="manifest", responses=_PROBLEMS)
async def manifest(
    request: Request,
    id: str,
    q: str | None = Query(None, description="Search query to highlight in the annotation lists."),
    resolver: ItemResolver = Depends(get_resolver),
) -> Response:
    """IIIF Presentation 2 manifest for a manifest-level resource."""
    item = await resolver.resolve(id, q)
    if isinstance(item, CanvasItem):
        return _see_other(request, "manifest", item, q)
    body = resolver.adapter(item.prefix).manifest(item)
    return JSONResponse(body.to_jsonld())


@router.get("/{id}/list/{list_id}", name="annotation_list", responses=_PROBLEMS)
async def annotation_list(
    request: Request,
    id: str,
    list_id: str,
    q: str | None = Query(None, description="Search query; without it the OCR text blocks are listed."),
    resolver: ItemResolver = Depends(get_resolver),
) -> Response:
    """Search-hit annotations when ``q`` is given, OCR text-block annotations otherwise."""
    item = await resolver.resolve(id, q)
    if isinstance(item, CanvasItem):
        return _see_other(request, "annotation_list", item, q, list_id=list_id)

    adapter = resolver.adapter(item.prefix)
    if q:
        if not item.supports_search_hits:
            raise NotFoundError("No annotation list available")
        body = await adapter.search_hit_list(item, list_id, q)
    else:
        if not item.supports_text_blocks:
            raise NotFoundError("No annotation list available")
        body = await adapter.text_block_list(item, list_id)
    return JSONResponse(body.to_jsonld())
