"""Decide whether a repository document is served as a manifest or as a canvas.

The index classifies documents two ways at once: ``component`` names the
kind of object (``Page``, ``Issue``, ...) and ``rdf_type`` holds the PCDM
model types. Pages are matched on ``component`` and checked first, because
pages are PCDM objects too. Every other ``pcdm:Object`` that is not also
a ``pcdm:Collection`` gets a manifest.
"""

from __future__ import annotations

from enum import Enum

from pcdm_manifests.errors import BadRequestError
from pcdm_manifests.models import RepositoryDocument

OBJECT_TYPE = "pcdm:Object"
COLLECTION_TYPE = "pcdm:Collection"
CANVAS_COMPONENTS = frozenset({"page"})


class ResourceLevel(Enum):
    MANIFEST = "manifest"
    CANVAS = "canvas"


def is_canvas_level(doc: RepositoryDocument) -> bool:
    return doc.component is not None and doc.component.lower() in CANVAS_COMPONENTS


def is_manifest_level(doc: RepositoryDocument) -> bool:
    return OBJECT_TYPE in doc.rdf_types and COLLECTION_TYPE not in doc.rdf_types


def classify(doc: RepositoryDocument, identifier: str | None = None) -> ResourceLevel:
    if is_canvas_level(doc):
        return ResourceLevel.CANVAS
    if is_manifest_level(doc):
        return ResourceLevel.MANIFEST
    raise BadRequestError(
        f"Resource {identifier or doc.id} does not have a recognized manifest or canvas type"
    )
