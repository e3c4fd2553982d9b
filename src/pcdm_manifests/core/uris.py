"""Public URIs of the resources that make up one manifest."""

from __future__ import annotations

from urllib.parse import quote

DEFAULT_IMAGE_PARAMS = {
    "region": "full",
    "size": "full",
    "rotation": "0",
    "quality": "default",
    "format": "jpg",
}


def encode_query(query: str) -> str:
    return quote(query, safe="")


class ResourceUris:
    def __init__(self, manifest_base_uri: str, image_base_uri: str) -> None:
        # base URI of the manifest resources, always ends with "/"
        self.base_uri = manifest_base_uri
        self.image_base_uri = image_base_uri

    @classmethod
    def for_item(cls, manifest_url: str, item_id: str, image_url: str) -> ResourceUris:
        return cls(f"{manifest_url}{item_id}/", image_url)

    @property
    def manifest(self) -> str:
        return f"{self.base_uri}manifest"

    def canvas(self, page_id: str) -> str:
        return f"{self.base_uri}canvas/{page_id}"

    def annotation(self, doc_id: str) -> str:
        return f"{self.base_uri}annotation/{doc_id}"

    def sequence(self, label: str) -> str:
        return f"{self.base_uri}sequence/{label}"

    def annotation_list(self, page_id: str, query: str | None = None) -> str:
        uri = f"{self.base_uri}list/{page_id}"
        if query:
            uri += f"?q={encode_query(query)}"
        return uri

    def image(self, image_id: str, **params: str) -> str:
        """IIIF Image API URI; with no params, the image's base URI."""
        uri = f"{self.image_base_uri}{image_id}"
        if not params:
            return uri
        p = {**DEFAULT_IMAGE_PARAMS, **params}
        return f"{uri}/{p['region']}/{p['size']}/{p['rotation']}/{p['quality']}.{p['format']}"
