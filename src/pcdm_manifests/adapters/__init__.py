from pcdm_manifests.adapters.fcrepo import FcrepoAdapter
from pcdm_manifests.adapters.registry import ADAPTERS, AdapterFactory, ItemResolver

__all__ = [
    "ADAPTERS",
    "AdapterFactory",
    "FcrepoAdapter",
    "ItemResolver",
]
