"""Items stored in a Fedora 4 repository and indexed in Solr."""

from __future__ import annotations

import logging

from pcdm_manifests.config import Settings
from pcdm_manifests.core.annotations import AnnotationBuilder
from pcdm_manifests.core.iiif import AnnotationList, Manifest
from pcdm_manifests.core.items import CanvasItem, Item, ManifestItem
from pcdm_manifests.core.manifest import ManifestAssembler
from pcdm_manifests.core.paths import PathCodec, parse_id
from pcdm_manifests.core.router import ResourceLevel, classify
from pcdm_manifests.core.solr import SolrGateway
from pcdm_manifests.core.uris import ResourceUris
from pcdm_manifests.errors import BadRequestError, NotFoundError
from pcdm_manifests.models import RepositoryDocument

logger = logging.getLogger(__name__)


class FcrepoAdapter:
    prefix = "fcrepo"

    def __init__(self, gateway: SolrGateway, settings: Settings) -> None:
        self.gateway = gateway
        self.settings = settings
        self.codec = PathCodec(self.prefix, settings.fcrepo_url)
        self._documents: dict[str, RepositoryDocument] = {}

    async def document(self, uri: str) -> RepositoryDocument:
        """Fetch a document once per adapter instance (i.e. once per request)."""
        if uri not in self._documents:
            self._documents[uri] = await self.gateway.fetch_document(uri)
        return self._documents[uri]

    async def resolve(self, local_id: str, query: str | None = None) -> Item:
        path = self.codec.from_abbreviated(local_id)
        doc = await self.document(self.codec.to_uri(path))
        item_id = self.codec.to_prefixed(path)

        if classify(doc, f"{self.prefix}:{local_id}") is ResourceLevel.CANVAS:
            if not doc.containing_issue:
                raise NotFoundError(f"Resource {item_id} is not part of any manifest")
            manifest_id = self.codec.uri_to_id(doc.containing_issue)
            logger.debug("Resolved %s as a canvas of %s", item_id, manifest_id)
            return CanvasItem(prefix=self.prefix, id=item_id, document=doc, manifest_id=manifest_id, query=query)

        return ManifestItem(prefix=self.prefix, id=item_id, document=doc, query=query)

    def _uris(self, item: ManifestItem) -> ResourceUris:
        return ResourceUris.for_item(self.settings.manifest_url, item.id, self.settings.image_url)

    def _annotations(self, item: ManifestItem, list_id: str) -> AnnotationBuilder:
        prefix, _local = parse_id(list_id)
        if prefix != self.prefix:
            raise BadRequestError(f"List ID {list_id} must use the '{self.prefix}' prefix")
        return AnnotationBuilder(
            self.gateway,
            self.codec,
            self._uris(item),
            tagged_field=self.settings.ocr_tagged_field,
        )

    def manifest(self, item: ManifestItem) -> Manifest:
        assembler = ManifestAssembler(
            self.codec,
            self._uris(item),
            logo_url=self.settings.logo_url,
            query=item.query,
            supports_text_blocks=item.supports_text_blocks,
            supports_search_hits=item.supports_search_hits,
        )
        return assembler.build_manifest(item.document)

    async def text_block_list(self, item: ManifestItem, list_id: str) -> AnnotationList:
        return await self._annotations(item, list_id).text_block_list(list_id)

    async def search_hit_list(self, item: ManifestItem, list_id: str, query: str) -> AnnotationList:
        return await self._annotations(item, list_id).search_hit_list(list_id, query, item.document)
