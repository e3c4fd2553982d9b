"""Tests for text-block and search-hit annotation lists."""

from __future__ import annotations

import pytest

from pcdm_manifests.core.annotations import AnnotationBuilder, search_hits, text_block_annotation
from pcdm_manifests.core.paths import PathCodec
from pcdm_manifests.core.solr import SolrGateway, parse_document
from pcdm_manifests.core.uris import ResourceUris
from pcdm_manifests.models import HighlightResult, HighlightSnippet, TextBlockDocument
from tests.conftest import (
    FCREPO_URL,
    IMAGE_URL,
    ISSUE_ID,
    ISSUE_URI,
    MANIFEST_URL,
    PAGE1_ID,
    PAGE1_URI,
    PAGE2_URI,
    FakeSolr,
    solr_issue,
    solr_response,
    text_block,
)

BASE = f"{MANIFEST_URL}{ISSUE_ID}/"
TAGGED = "extracted_text_tagged"


def _plain(text: str, source: str | None = PAGE1_URI) -> HighlightResult:
    doc: dict[str, object] = {"id": "anno-1"}
    if source is not None:
        doc["annotation_source"] = [source]
    return HighlightResult(
        docs={"anno-1": doc},
        snippets=(HighlightSnippet(doc_id="anno-1", field="extracted_text", text=text),),
    )


def _tagged(text: str) -> HighlightResult:
    return HighlightResult(
        docs={ISSUE_URI: {"id": ISSUE_URI}},
        snippets=(HighlightSnippet(doc_id=ISSUE_URI, field=TAGGED, text=text),),
    )


class TestTextBlockAnnotation:
    def test_strips_coordinate_tags(self) -> None:
        block = TextBlockDocument(
            id="b1",
            resource_selector="xywh=10,10,200,50",
            extracted_text="Hello|10,10,40,20 world|60,10,50,20",
            annotation_source=PAGE1_URI,
        )

        body = text_block_annotation(block).to_jsonld()

        assert body["@id"] == "#xywh=10,10,200,50"
        assert body["@type"] == ["oa:Annotation", "umd:articleSegment"]
        assert body["motivation"] == "sc:painting"
        assert body["on"]["full"] == PAGE1_URI
        assert body["on"]["selector"] == {"@type": "oa:FragmentSelector", "value": "xywh=10,10,200,50"}
        assert body["resource"] == [{"@type": "cnt:ContentAsText", "format": "text/plain", "chars": "Hello world"}]


class TestSearchHits:
    def test_single_highlight(self) -> None:
        (hit,) = search_hits(_plain("a <em>castle|10,20,30,40</em> stood"), PAGE1_URI, 0)

        body = hit.to_jsonld()
        assert body["@id"] == "#search-result-001"
        assert body["@type"] == ["oa:Annotation", "umd:searchResult"]
        assert body["motivation"] == "oa:highlighting"
        assert body["on"]["full"] == PAGE1_URI
        assert body["on"]["selector"]["value"] == "xywh=10,20,30,40"
        assert "resource" not in body

    def test_numbering_continues_across_spans(self) -> None:
        hits = search_hits(
            _plain("<em>old|1,1,1,1</em> and <em>line|2,2,2,2 3,3,3,3</em>"),
            PAGE1_URI,
            0,
        )

        assert [hit.id for hit in hits] == ["#search-result-001", "#search-result-002", "#search-result-003"]
        assert hits[2].on.selector.value == "xywh=3,3,3,3"

    def test_span_without_coordinates_is_skipped(self) -> None:
        assert search_hits(_plain("<em>castle</em>"), PAGE1_URI, 0) == []

    def test_snippet_without_source_is_skipped(self) -> None:
        assert search_hits(_plain("<em>castle|1,2,3,4</em>", source=None), PAGE1_URI, 0) == []

    def test_tagged_spans_are_filtered_by_page(self) -> None:
        text = "<em>castle|n=0&xywh=1,2,3,4</em> ... <em>castle|n=1&xywh=5,6,7,8</em>"

        first = search_hits(_tagged(text), PAGE1_URI, 0, tagged_field=TAGGED)
        second = search_hits(_tagged(text), PAGE2_URI, 1, tagged_field=TAGGED)

        assert [hit.on.selector.value for hit in first] == ["xywh=1,2,3,4"]
        assert first[0].on.full == PAGE1_URI
        assert [hit.on.selector.value for hit in second] == ["xywh=5,6,7,8"]
        assert second[0].on.full == PAGE2_URI

    def test_tagged_spans_for_unknown_page_are_skipped(self) -> None:
        hits = search_hits(_tagged("<em>castle|n=0&xywh=1,2,3,4</em>"), PAGE1_URI, None, tagged_field=TAGGED)
        assert hits == []

    def test_tagged_field_ignored_when_not_configured(self) -> None:
        assert search_hits(_tagged("<em>castle|n=0&xywh=1,2,3,4</em>"), PAGE1_URI, 0) == []


class TestAnnotationBuilder:
    @pytest.fixture
    def builder(self, gateway: SolrGateway) -> AnnotationBuilder:
        return AnnotationBuilder(
            gateway,
            PathCodec("fcrepo", FCREPO_URL),
            ResourceUris.for_item(MANIFEST_URL, ISSUE_ID, IMAGE_URL),
            tagged_field=TAGGED,
        )

    @pytest.mark.asyncio
    async def test_text_block_list(self, solr: FakeSolr, builder: AnnotationBuilder) -> None:
        solr.text_blocks = [
            text_block("xywh=1,2,3,4", "Hello|1,2,3,4"),
            text_block("xywh=5,6,7,8", "again|5,6,7,8"),
        ]

        body = (await builder.text_block_list(PAGE1_ID)).to_jsonld()

        assert body["@id"] == BASE + f"list/{PAGE1_ID}"
        assert body["@type"] == "sc:AnnotationList"
        assert [anno["@id"] for anno in body["resources"]] == ["#xywh=1,2,3,4", "#xywh=5,6,7,8"]
        assert body["resources"][0]["resource"][0]["chars"] == "Hello"

    @pytest.mark.asyncio
    async def test_text_block_list_accepts_expanded_ids(self, builder: AnnotationBuilder) -> None:
        expanded = "fcrepo:" + PAGE1_URI.removeprefix(FCREPO_URL).replace("/", ":")

        body = (await builder.text_block_list(expanded)).to_jsonld()

        assert body["@id"] == BASE + f"list/{PAGE1_ID}"
        assert body["resources"] == []

    @pytest.mark.asyncio
    async def test_search_hit_list(self, solr: FakeSolr, builder: AnnotationBuilder) -> None:
        solr.highlights = solr_response(
            {"id": "anno-1", "annotation_source": [PAGE1_URI]},
            {"id": ISSUE_URI},
            highlighting={
                "anno-1": {"extracted_text": ["<em>castle|10,20,30,40</em>"]},
                ISSUE_URI: {TAGGED: ["<em>castle|n=0&xywh=1,2,3,4</em> <em>castle|n=1&xywh=9,9,9,9</em>"]},
            },
        )
        manifest = parse_document(solr_issue())

        body = (await builder.search_hit_list(PAGE1_ID, "castle", manifest)).to_jsonld()

        assert body["@id"] == BASE + f"list/{PAGE1_ID}?q=castle"
        assert [anno["@id"] for anno in body["resources"]] == ["#search-result-001", "#search-result-002"]
        assert [anno["on"]["selector"]["value"] for anno in body["resources"]] == [
            "xywh=10,20,30,40",
            "xywh=1,2,3,4",
        ]
