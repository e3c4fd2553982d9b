from __future__ import annotations

import logging
from collections.abc import Callable, Mapping

from pcdm_manifests.adapters.fcrepo import FcrepoAdapter
from pcdm_manifests.config import Settings
from pcdm_manifests.core.items import Item
from pcdm_manifests.core.paths import parse_id
from pcdm_manifests.core.ports.items import ItemAdapter
from pcdm_manifests.core.solr import SolrGateway
from pcdm_manifests.errors import NotFoundError

logger = logging.getLogger(__name__)

AdapterFactory = Callable[[SolrGateway, Settings], ItemAdapter]

ADAPTERS: dict[str, AdapterFactory] = {
    FcrepoAdapter.prefix: FcrepoAdapter,
}


class ItemResolver:
    """Resolves public ``prefix:local`` ids through the adapter registered for the prefix.

    Meant to live for a single request: adapters, and the documents they
    fetch, are cached on the instance.
    """

    def __init__(
        self,
        gateway: SolrGateway,
        settings: Settings,
        adapters: Mapping[str, AdapterFactory] | None = None,
    ) -> None:
        self.gateway = gateway
        self.settings = settings
        self._factories = ADAPTERS if adapters is None else adapters
        self._adapters: dict[str, ItemAdapter] = {}

    def adapter(self, prefix: str) -> ItemAdapter:
        if prefix not in self._adapters:
            factory = self._factories.get(prefix)
            if factory is None:
                raise NotFoundError(f"Unrecognized prefix '{prefix}'")
            self._adapters[prefix] = factory(self.gateway, self.settings)
        return self._adapters[prefix]

    async def resolve(self, identifier: str, query: str | None = None) -> Item:
        prefix, local = parse_id(identifier)
        item = await self.adapter(prefix).resolve(local, query)
        logger.debug("Resolved %s to %s", identifier, type(item).__name__)
        return item
