"""Assemble IIIF manifests from repository documents."""

from __future__ import annotations

from collections.abc import Iterable

from pcdm_manifests.core.iiif import (
    LEVEL1_PROFILE,
    Canvas,
    ImageResource,
    ImageService,
    ListReference,
    Logo,
    Manifest,
    MetadataEntry,
    PaintingAnnotation,
    Sequence,
    Thumbnail,
)
from pcdm_manifests.core.paths import PathCodec
from pcdm_manifests.core.router import is_canvas_level, is_manifest_level
from pcdm_manifests.core.uris import ResourceUris
from pcdm_manifests.errors import BadRequestError
from pcdm_manifests.models import ImageDocument, PageDocument, RepositoryDocument

PREFERRED_FORMATS = ("image/tiff", "image/jpeg", "image/png", "image/gif")

DEFAULT_CANVAS_LENGTH = 1200
# images this small on an axis are shown at double size
SMALL_IMAGE_THRESHOLD = 1200
THUMBNAIL_WIDTH = 100

UNAVAILABLE_IMAGE_ID = "static:unavailable"
UNAVAILABLE_IMAGE = ImageDocument(id=UNAVAILABLE_IMAGE_ID, mime_type="image/jpeg", width=200, height=200)


def canvas_length(dimension: int | None) -> int:
    if dimension is None:
        return DEFAULT_CANVAS_LENGTH
    if dimension <= SMALL_IMAGE_THRESHOLD:
        return dimension * 2
    return dimension


def select_preferred_image(images: Iterable[ImageDocument]) -> ImageDocument:
    """Pick the page image to display, by mime type preference.

    Viewers do not cope with an empty ``images`` array, so a page without a
    usable image gets the "unavailable" placeholder instead.
    """
    by_type: dict[str | None, ImageDocument] = {}
    for image in images:
        by_type.setdefault(image.mime_type, image)
    for mime_type in PREFERRED_FORMATS:
        if mime_type in by_type:
            return by_type[mime_type]
    return UNAVAILABLE_IMAGE


def page_label(page: PageDocument) -> str | None:
    if page.page_number is not None:
        return f"Page {page.page_number}"
    return page.display_title


class ManifestAssembler:
    """Builds the Manifest/Sequence/Canvas/Image graph for one item."""

    def __init__(
        self,
        codec: PathCodec,
        uris: ResourceUris,
        logo_url: str | None = None,
        query: str | None = None,
        supports_text_blocks: bool = True,
        supports_search_hits: bool = True,
    ) -> None:
        self.codec = codec
        self.uris = uris
        self.logo_url = logo_url
        self.query = query
        self.supports_text_blocks = supports_text_blocks
        self.supports_search_hits = supports_search_hits

    def build_manifest(self, doc: RepositoryDocument) -> Manifest:
        if is_canvas_level(doc) or not is_manifest_level(doc):
            raise BadRequestError(f"Resource {doc.id} is not a manifest-level resource")

        canvases = [self.build_canvas(page) for page in doc.pages]
        sequences = []
        if canvases:
            sequences.append(
                Sequence(
                    id=self.uris.sequence("normal"),
                    label="Current Page Order",
                    start_canvas=canvases[0].id,
                    canvases=canvases,
                )
            )
        first_image = select_preferred_image(doc.pages[0].images) if doc.pages else None

        return Manifest(
            id=self.uris.manifest,
            label=doc.display_title,
            metadata=self.metadata(doc),
            sequences=sequences,
            thumbnail=self.thumbnail(first_image) if first_image is not None else None,
            logo=Logo(id=self.logo_url) if self.logo_url else None,
            nav_date=doc.date,
            license=doc.rights,
            attribution=doc.attribution,
        )

    def metadata(self, doc: RepositoryDocument) -> list[MetadataEntry]:
        citation = " ".join(doc.citation) if doc.citation is not None else None
        display_date = doc.display_date
        if display_date is None and doc.date is not None:
            display_date = doc.date.split("T", 1)[0]
        entries = [
            ("Date", display_date),
            ("Edition", doc.edition),
            ("Volume", doc.volume),
            ("Issue", doc.issue),
            ("Bibliographic Citation", citation),
        ]
        return [MetadataEntry(label=label, value=value) for label, value in entries if value is not None]

    def build_canvas(self, page: PageDocument) -> Canvas:
        page_id = self.codec.uri_to_id(page.id)
        canvas_id = self.uris.canvas(page_id)
        image = select_preferred_image(page.images)
        image_id = self.image_id(image)
        image_uri = self.uris.image(image_id)

        return Canvas(
            id=canvas_id,
            label=page_label(page),
            height=canvas_length(image.height),
            width=canvas_length(image.width),
            images=[
                PaintingAnnotation(
                    id=self.uris.annotation(image_id),
                    resource=ImageResource(
                        id=image_uri,
                        service=ImageService(id=image_uri),
                        height=image.height or DEFAULT_CANVAS_LENGTH,
                        width=image.width or DEFAULT_CANVAS_LENGTH,
                    ),
                    on=canvas_id,
                )
            ],
            thumbnail=self.thumbnail(image),
            other_content=self.other_content(page_id),
        )

    def other_content(self, page_id: str) -> list[ListReference]:
        lists = []
        if self.supports_text_blocks:
            lists.append(ListReference(id=self.uris.annotation_list(page_id)))
        if self.query and self.supports_search_hits:
            lists.append(ListReference(id=self.uris.annotation_list(page_id, self.query)))
        return lists

    def image_id(self, image: ImageDocument) -> str:
        if image.id == UNAVAILABLE_IMAGE_ID:
            return image.id
        # the image server cannot parse the "::" shorthand
        return self.codec.uri_to_id(image.id, abbreviate=False)

    def thumbnail(self, image: ImageDocument) -> Thumbnail:
        image_id = self.image_id(image)
        width = image.width or DEFAULT_CANVAS_LENGTH
        height = image.height or DEFAULT_CANVAS_LENGTH
        return Thumbnail(
            id=self.uris.image(image_id, size=f"{THUMBNAIL_WIDTH},"),
            service=ImageService(id=self.uris.image(image_id), profile=LEVEL1_PROFILE),
            width=THUMBNAIL_WIDTH,
            height=max(1, round(THUMBNAIL_WIDTH * height / width)),
        )
