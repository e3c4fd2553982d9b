"""IIIF Presentation API 2.x resources.

Immutable pydantic models; ``to_jsonld()`` dumps them with their JSON-LD keys
(``@id``, ``@type``, ...) and leaves out unset optional properties.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

PRESENTATION_CONTEXT = "http://iiif.io/api/presentation/2/context.json"
IMAGE_CONTEXT = "http://iiif.io/api/image/2/context.json"
LEVEL1_PROFILE = "http://iiif.io/api/image/2/level1.json"
LEVEL2_PROFILE = "http://iiif.io/api/image/2/profiles/level2.json"


class IIIFResource(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_jsonld(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class ImageService(IIIFResource):
    context: str = Field(default=IMAGE_CONTEXT, alias="@context")
    id: str = Field(alias="@id")
    profile: str = LEVEL2_PROFILE


class ImageResource(IIIFResource):
    id: str = Field(alias="@id")
    type: str = Field(default="dctypes:Image", alias="@type")
    format: str = "image/jpeg"
    service: ImageService
    height: int
    width: int


class Thumbnail(IIIFResource):
    id: str = Field(alias="@id")
    service: ImageService
    format: str = "image/jpeg"
    width: int
    height: int


class PaintingAnnotation(IIIFResource):
    id: str = Field(alias="@id")
    type: str = Field(default="oa:Annotation", alias="@type")
    motivation: str = "sc:painting"
    resource: ImageResource
    on: str


class ListReference(IIIFResource):
    id: str = Field(alias="@id")
    type: str = Field(default="sc:AnnotationList", alias="@type")


class Canvas(IIIFResource):
    id: str = Field(alias="@id")
    type: str = Field(default="sc:Canvas", alias="@type")
    label: str | None = None
    height: int
    width: int
    images: list[PaintingAnnotation]
    thumbnail: Thumbnail | None = None
    other_content: list[ListReference] = Field(default_factory=list, alias="otherContent")


class Sequence(IIIFResource):
    id: str = Field(alias="@id")
    type: str = Field(default="sc:Sequence", alias="@type")
    label: str
    start_canvas: str = Field(alias="startCanvas")
    canvases: list[Canvas]


class MetadataEntry(IIIFResource):
    label: str
    value: Any


class Logo(IIIFResource):
    id: str = Field(alias="@id")


class Manifest(IIIFResource):
    context: str = Field(default=PRESENTATION_CONTEXT, alias="@context")
    id: str = Field(alias="@id")
    type: str = Field(default="sc:Manifest", alias="@type")
    label: str | None = None
    metadata: list[MetadataEntry] = Field(default_factory=list)
    sequences: list[Sequence] = Field(default_factory=list)
    thumbnail: Thumbnail | None = None
    logo: Logo | None = None
    nav_date: str | None = Field(default=None, alias="navDate")
    license: str | None = None
    attribution: str | None = None


class FragmentSelector(IIIFResource):
    type: str = Field(default="oa:FragmentSelector", alias="@type")
    value: str


class SpecificResource(IIIFResource):
    type: str = Field(default="oa:SpecificResource", alias="@type")
    selector: FragmentSelector
    full: str


class TextBody(IIIFResource):
    type: str = Field(default="cnt:ContentAsText", alias="@type")
    format: str = "text/plain"
    chars: str


class Annotation(IIIFResource):
    id: str = Field(alias="@id")
    type: list[str] = Field(alias="@type")
    on: SpecificResource
    motivation: str
    resource: list[TextBody] | None = None


class AnnotationList(IIIFResource):
    context: str = Field(default=PRESENTATION_CONTEXT, alias="@context")
    id: str = Field(alias="@id")
    type: str = Field(default="sc:AnnotationList", alias="@type")
    resources: list[Annotation] = Field(default_factory=list)
