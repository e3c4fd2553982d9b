"""Resolved items: either a manifest or a canvas inside some manifest."""

from __future__ import annotations

from dataclasses import dataclass

from pcdm_manifests.models import RepositoryDocument


@dataclass(frozen=True)
class ManifestItem:
    prefix: str
    id: str
    document: RepositoryDocument
    query: str | None = None
    supports_text_blocks: bool = True
    supports_search_hits: bool = True


@dataclass(frozen=True)
class CanvasItem:
    prefix: str
    id: str
    document: RepositoryDocument
    manifest_id: str
    query: str | None = None


Item = ManifestItem | CanvasItem
