from typing import Protocol

from pcdm_manifests.core.iiif import AnnotationList, Manifest
from pcdm_manifests.core.items import Item, ManifestItem


class ItemAdapter(Protocol):
    prefix: str

    async def resolve(self, local_id: str, query: str | None = None) -> Item: ...

    def manifest(self, item: ManifestItem) -> Manifest: ...

    async def text_block_list(self, item: ManifestItem, list_id: str) -> AnnotationList: ...

    async def search_hit_list(self, item: ManifestItem, list_id: str, query: str) -> AnnotationList: ...
