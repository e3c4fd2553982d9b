"""Search-index records as read by the gateway.

Plain frozen dataclasses; the IIIF views in ``core.iiif`` are derived from
them and never write back into them.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ImageDocument:
    id: str
    mime_type: str | None = None
    width: int | None = None
    height: int | None = None
    file_of: str | None = None


@dataclass(frozen=True)
class PageDocument:
    id: str
    page_number: int | None = None
    display_title: str | None = None
    images: tuple[ImageDocument, ...] = ()


@dataclass(frozen=True)
class RepositoryDocument:
    id: str
    component: str | None = None
    rdf_types: tuple[str, ...] = ()
    display_title: str | None = None
    date: str | None = None
    display_date: str | None = None
    edition: str | None = None
    volume: str | None = None
    issue: str | None = None
    rights: str | None = None
    citation: tuple[str, ...] | None = None
    attribution: str | None = None
    containing_issue: str | None = None
    pages: tuple[PageDocument, ...] = ()

    def page_index(self, page_uri: str) -> int | None:
        """0-based position of a page in this document's page sequence."""
        for index, page in enumerate(self.pages):
            if page.id == page_uri:
                return index
        return None


@dataclass(frozen=True)
class TextBlockDocument:
    id: str
    resource_selector: str
    extracted_text: str
    annotation_source: str


@dataclass(frozen=True)
class HighlightSnippet:
    doc_id: str
    field: str
    text: str


@dataclass(frozen=True)
class HighlightResult:
    docs: dict[str, dict[str, object]] = field(default_factory=dict)
    snippets: tuple[HighlightSnippet, ...] = ()

    def annotation_source(self, doc_id: str) -> str | None:
        doc = self.docs.get(doc_id) or {}
        source = doc.get("annotation_source")
        if isinstance(source, list):
            return str(source[0]) if source else None
        return str(source) if source is not None else None
