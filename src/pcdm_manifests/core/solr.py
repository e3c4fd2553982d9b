"""Solr queries for repository documents, OCR text blocks and search highlights."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from pcdm_manifests.core.ports.http import JsonFetcher
from pcdm_manifests.errors import InternalServerError, NotFoundError
from pcdm_manifests.models import (
    HighlightResult,
    HighlightSnippet,
    ImageDocument,
    PageDocument,
    RepositoryDocument,
    TextBlockDocument,
)

logger = logging.getLogger(__name__)

HIGHLIGHT_PRE = "<em>"
HIGHLIGHT_POST = "</em>"
HIGHLIGHT_SNIPPETS = 1000
HIGHLIGHT_MAX_ANALYZED_CHARS = 10_000_000
SUBQUERY_ROWS = 1000

_DOCUMENT_FIELDS = (
    "id,rdf_type,component,containing_issue,display_title,date,issue_edition,issue_volume,issue_issue,"
    "rights,attribution,pages:[subquery],citation,display_date,image_height,image_width,mime_type"
)
_PAGE_FIELDS = "id,display_title,page_number,images:[subquery]"
_IMAGE_FIELDS = "id,pcdm_file_of,image_height,image_width,mime_type,display_title,rdf_type"
_ANNOTATION_FILTER = "rdf_type:oa\\:Annotation"


def escape_query_value(value: str) -> str:
    """Backslash-escape colons so a URI can be used as a field value."""
    return value.replace(":", "\\:")


def subquery_docs(value: Any) -> list[dict[str, Any]]:
    """Normalize a ``[subquery]`` field to a plain list of docs.

    Depending on the Solr version the field is either a bare list or an
    object wrapping the list under ``docs``.
    """
    if value is None:
        return []
    if isinstance(value, dict):
        value = value.get("docs") or []
    return [doc for doc in value if isinstance(doc, dict)]


def first_value(value: Any) -> Any:
    """Unwrap a multi-valued field to its first value."""
    if isinstance(value, list):
        return value[0] if value else None
    return value


def _as_int(value: Any) -> int | None:
    value = first_value(value)
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _as_str(value: Any) -> str | None:
    value = first_value(value)
    return None if value is None else str(value)


def _as_tuple(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, list):
        return tuple(str(v) for v in value)
    return (str(value),)


def parse_image(doc: dict[str, Any]) -> ImageDocument:
    return ImageDocument(
        id=str(doc["id"]),
        mime_type=_as_str(doc.get("mime_type")),
        width=_as_int(doc.get("image_width")),
        height=_as_int(doc.get("image_height")),
        file_of=_as_str(doc.get("pcdm_file_of")),
    )


def parse_page(doc: dict[str, Any]) -> PageDocument:
    return PageDocument(
        id=str(doc["id"]),
        page_number=_as_int(doc.get("page_number")),
        display_title=_as_str(doc.get("display_title")),
        images=tuple(parse_image(image) for image in subquery_docs(doc.get("images"))),
    )


def parse_document(doc: dict[str, Any]) -> RepositoryDocument:
    citation = doc.get("citation")
    return RepositoryDocument(
        id=str(doc["id"]),
        component=_as_str(doc.get("component")),
        rdf_types=_as_tuple(doc.get("rdf_type")),
        display_title=_as_str(doc.get("display_title")),
        date=_as_str(doc.get("date")),
        display_date=_as_str(doc.get("display_date")),
        edition=_as_str(doc.get("issue_edition")),
        volume=_as_str(doc.get("issue_volume")),
        issue=_as_str(doc.get("issue_issue")),
        rights=_as_str(doc.get("rights")),
        citation=_as_tuple(citation) if citation is not None else None,
        attribution=_as_str(doc.get("attribution")),
        containing_issue=_as_str(doc.get("containing_issue")),
        pages=tuple(parse_page(page) for page in subquery_docs(doc.get("pages"))),
    )


def parse_text_block(doc: dict[str, Any]) -> TextBlockDocument:
    return TextBlockDocument(
        id=str(doc.get("id", "")),
        resource_selector=_as_str(doc.get("resource_selector")) or "",
        extracted_text=_as_str(doc.get("extracted_text")) or "",
        annotation_source=_as_str(doc.get("annotation_source")) or "",
    )


def parse_highlights(body: dict[str, Any], fields: Iterable[str]) -> HighlightResult:
    docs = {str(doc["id"]): doc for doc in _response_docs(body) if "id" in doc}
    snippets: list[HighlightSnippet] = []
    highlighting = body.get("highlighting") or {}
    for doc_id, doc_fields in highlighting.items():
        for field in fields:
            for text in doc_fields.get(field) or []:
                snippets.append(HighlightSnippet(doc_id=str(doc_id), field=field, text=str(text)))
    return HighlightResult(docs=docs, snippets=tuple(snippets))


def _response_docs(body: dict[str, Any]) -> list[dict[str, Any]]:
    try:
        docs = body["response"]["docs"]
    except (KeyError, TypeError) as exc:
        raise InternalServerError("Solr response is missing response.docs") from exc
    return subquery_docs(docs)


class SolrGateway:
    """Query layer over the repository's Solr core."""

    def __init__(
        self,
        fetcher: JsonFetcher,
        solr_url: str,
        highlight_fields: tuple[str, ...] = ("extracted_text",),
        text_block_rows: int = 100,
    ) -> None:
        self._fetcher = fetcher
        self._solr_url = solr_url
        self._highlight_fields = highlight_fields
        self._text_block_rows = text_block_rows

    @property
    def highlight_fields(self) -> tuple[str, ...]:
        return self._highlight_fields

    async def fetch_document(self, uri: str) -> RepositoryDocument:
        """Fetch one document together with its pages and their images."""
        params = {
            "q": f"id:{escape_query_value(uri)}",
            "wt": "json",
            "fl": _DOCUMENT_FIELDS,
            "rows": 1,
            "pages.q": "{!terms f=id v=$row.pcdm_members}",
            "pages.fq": "component:Page",
            "pages.fl": _PAGE_FIELDS,
            "pages.sort": "page_number asc",
            "pages.rows": SUBQUERY_ROWS,
            "pages.images.q": "{!terms f=id v=$row.pcdm_files}",
            "pages.images.fq": "mime_type:image/*",
            "pages.images.fl": _IMAGE_FIELDS,
            "pages.images.rows": SUBQUERY_ROWS,
        }
        body = await self._fetcher.get_json(self._solr_url + "pcdm", params)
        docs = _response_docs(body)
        if not docs:
            raise NotFoundError(f"No Solr document with id {uri}")
        return parse_document(docs[0])

    async def fetch_highlights(self, page_uri: str, manifest_uri: str, query: str) -> HighlightResult:
        """Run ``query`` against the page's OCR annotations and the manifest document.

        Per-page annotation records carry plain OCR; the manifest document may
        carry the tagged OCR field covering all of its pages.
        """
        scope = (
            f"({_ANNOTATION_FILTER} AND annotation_source:{escape_query_value(page_uri)})"
            f" OR id:{escape_query_value(manifest_uri)}"
        )
        params = {
            "q": query,
            "fq": scope,
            "wt": "json",
            "fl": "*",
            "hl": "true",
            "hl.fl": ",".join(self._highlight_fields),
            "hl.simple.pre": HIGHLIGHT_PRE,
            "hl.simple.post": HIGHLIGHT_POST,
            "hl.method": "unified",
            "hl.snippets": HIGHLIGHT_SNIPPETS,
            "hl.maxAnalyzedChars": HIGHLIGHT_MAX_ANALYZED_CHARS,
        }
        body = await self._fetcher.get_json(self._solr_url + "select", params)
        return parse_highlights(body, self._highlight_fields)

    async def fetch_text_blocks(self, page_uri: str) -> list[TextBlockDocument]:
        params = {
            "q": "*:*",
            "fq": [_ANNOTATION_FILTER, f"annotation_source:{escape_query_value(page_uri)}"],
            "wt": "json",
            "fl": "*",
            "rows": self._text_block_rows,
        }
        body = await self._fetcher.get_json(self._solr_url + "select", params)
        return [parse_text_block(doc) for doc in _response_docs(body)]

    async def ping(self) -> bool:
        try:
            body = await self._fetcher.get_json(self._solr_url + "admin/ping", {"wt": "json"})
        except InternalServerError:
            logger.warning("Solr ping failed for %s", self._solr_url)
            return False
        return body.get("status") == "OK"
