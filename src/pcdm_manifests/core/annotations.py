"""Annotation lists for OCR text blocks and search-hit highlights."""

from __future__ import annotations

import re
from urllib.parse import parse_qs

from pcdm_manifests.core.iiif import (
    Annotation,
    AnnotationList,
    FragmentSelector,
    SpecificResource,
    TextBody,
)
from pcdm_manifests.core.paths import PathCodec
from pcdm_manifests.core.solr import SolrGateway
from pcdm_manifests.core.uris import ResourceUris
from pcdm_manifests.models import HighlightResult, RepositoryDocument, TextBlockDocument

HIGHLIGHT_PATTERN = re.compile(r"<em>([^<]*)</em>")
COORD_PATTERN = re.compile(r"(\d+,\d+,\d+,\d+)")
COORD_TAG_PATTERN = re.compile(r"\|(\d+,\d+,\d+,\d+)")

TEXT_BLOCK_TYPE = "umd:articleSegment"
SEARCH_RESULT_TYPE = "umd:searchResult"


def annotation(
    id: str,
    type: str,
    motivation: str,
    full: str,
    selector: str,
    text: str | None = None,
) -> Annotation:
    return Annotation(
        id=id,
        type=["oa:Annotation", type],
        motivation=motivation,
        on=SpecificResource(selector=FragmentSelector(value=selector), full=full),
        resource=[TextBody(chars=text)] if text is not None else None,
    )


def text_block_annotation(block: TextBlockDocument) -> Annotation:
    return annotation(
        id=f"#{block.resource_selector}",
        type=TEXT_BLOCK_TYPE,
        motivation="sc:painting",
        full=block.annotation_source,
        selector=block.resource_selector,
        text=COORD_TAG_PATTERN.sub("", block.extracted_text),
    )


def _tagged_coordinates(span: str, page_index: int | None) -> list[str]:
    """Coordinates of a ``value|n=<page index>&xywh=<x,y,w,h>`` span on the given page."""
    _value, sep, tag = span.partition("|")
    if not sep or page_index is None:
        return []
    params = parse_qs(tag)
    pages = params.get("n") or []
    if not pages or not pages[0].isdigit() or int(pages[0]) != page_index:
        return []
    return [match for xywh in params.get("xywh", []) for match in COORD_PATTERN.findall(xywh)]


def search_hits(
    result: HighlightResult,
    page_uri: str,
    page_index: int | None,
    tagged_field: str | None = None,
) -> list[Annotation]:
    """Turn highlighter output into numbered ``oa:highlighting`` annotations.

    Snippets from ``tagged_field`` carry the page position in each span and
    are filtered to ``page_index``; any other field comes from per-page
    annotation records and is targeted at that record's source.
    """
    hits: list[Annotation] = []
    for snippet in result.snippets:
        if tagged_field and snippet.field == tagged_field:
            full = page_uri
        else:
            source = result.annotation_source(snippet.doc_id)
            if source is None:
                continue
            full = source
        for span in HIGHLIGHT_PATTERN.findall(snippet.text):
            if tagged_field and snippet.field == tagged_field:
                coordinates = _tagged_coordinates(span, page_index)
            else:
                coordinates = COORD_PATTERN.findall(span)
            for coords in coordinates:
                hits.append(
                    annotation(
                        id=f"#search-result-{len(hits) + 1:03d}",
                        type=SEARCH_RESULT_TYPE,
                        motivation="oa:highlighting",
                        full=full,
                        selector=f"xywh={coords}",
                    )
                )
    return hits


class AnnotationBuilder:
    def __init__(
        self,
        gateway: SolrGateway,
        codec: PathCodec,
        uris: ResourceUris,
        tagged_field: str | None = None,
    ) -> None:
        self.gateway = gateway
        self.codec = codec
        self.uris = uris
        self.tagged_field = tagged_field

    def _canvas(self, canvas_id: str) -> tuple[str, str]:
        """Abbreviated public id and repository URI of a canvas."""
        page_uri = self.codec.id_to_uri(canvas_id)
        return self.codec.uri_to_id(page_uri), page_uri

    async def text_block_list(self, canvas_id: str) -> AnnotationList:
        page_id, page_uri = self._canvas(canvas_id)
        blocks = await self.gateway.fetch_text_blocks(page_uri)
        return AnnotationList(
            id=self.uris.annotation_list(page_id),
            resources=[text_block_annotation(block) for block in blocks],
        )

    async def search_hit_list(self, canvas_id: str, query: str, manifest: RepositoryDocument) -> AnnotationList:
        page_id, page_uri = self._canvas(canvas_id)
        result = await self.gateway.fetch_highlights(page_uri, manifest.id, query)
        return AnnotationList(
            id=self.uris.annotation_list(page_id, query),
            resources=search_hits(result, page_uri, manifest.page_index(page_uri), self.tagged_field),
        )
