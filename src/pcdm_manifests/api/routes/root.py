from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from pcdm_manifests import __version__

router = APIRouter()


@router.get("/")
async def root() -> dict[str, Any]:
    """Root discovery endpoint."""
    return {
        "meta": {
            "title": "PCDM Manifests",
            "description": "IIIF Presentation manifests for repository objects.",
            "version": __version__,
        },
        "links": {
            "self": "/",
            "manifest": "/manifests/{id}/manifest",
            "annotation_list": "/manifests/{id}/list/{list_id}",
            "health": "/health",
            "openapi": "/openapi.json",
            "docs": "/docs",
        },
    }
