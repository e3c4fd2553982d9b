"""Shared fixtures and helpers for tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from pcdm_manifests.config import Settings
from pcdm_manifests.core.solr import SolrGateway
from pcdm_manifests.errors import InternalServerError

_REPO_ROOT = Path(__file__).parent.parent

FCREPO_URL = "http://fcrepo.test/rest/"
SOLR_URL = "http://solr.test/solr/fedora4/"
IMAGE_URL = "http://images.test/iiif/2/"
MANIFEST_URL = "http://iiif.test/manifests/"

ISSUE_UUID = "1d8a71b8-7356-4282-8e99-da88f0f997c7"
PAGE1_UUID = "2e9b82c9-8467-4393-9faa-eb99f1f0a8d8"
PAGE2_UUID = "3fac93da-9578-44a4-8abb-fcaa02a1b9e9"
TIFF_UUID = "4abd04eb-a689-45b5-9bcc-0dbb13b2cafa"
PNG_UUID = "5bce15fc-b79a-46c6-acdd-1ecc24c3db0b"

ISSUE_PATH = f"pcdm/1d/8a/71/b8/{ISSUE_UUID}"
PAGE1_PATH = f"pcdm/2e/9b/82/c9/{PAGE1_UUID}"
PAGE2_PATH = f"pcdm/3f/ac/93/da/{PAGE2_UUID}"

ISSUE_URI = FCREPO_URL + ISSUE_PATH
PAGE1_URI = FCREPO_URL + PAGE1_PATH
PAGE2_URI = FCREPO_URL + PAGE2_PATH
TIFF_URI = f"{PAGE1_URI}/files/{TIFF_UUID}"
PNG_URI = f"{PAGE1_URI}/files/{PNG_UUID}"

ISSUE_ID = f"fcrepo:pcdm::{ISSUE_UUID}"
PAGE1_ID = f"fcrepo:pcdm::{PAGE1_UUID}"
PAGE2_ID = f"fcrepo:pcdm::{PAGE2_UUID}"


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Solr documents
# ---------------------------------------------------------------------------


def solr_issue(**overrides: Any) -> dict[str, Any]:
    """An issue with a two-page subquery: page 1 has PNG and TIFF, page 2 has no images."""
    doc: dict[str, Any] = {
        "id": ISSUE_URI,
        "rdf_type": ["pcdm:Object", "bibo:Issue"],
        "component": "Issue",
        "display_title": "The Diamondback, March 1, 1935",
        "date": "1935-03-01T00:00:00Z",
        "issue_edition": "1",
        "issue_volume": "6",
        "issue_issue": "21",
        "rights": ["http://rightsstatements.org/vocab/NoC-US/1.0/"],
        "citation": ["The Diamondback,", "1935."],
        "pages": {
            "numFound": 2,
            "docs": [
                {
                    "id": PAGE1_URI,
                    "display_title": "Page 1",
                    "page_number": 1,
                    "images": {
                        "numFound": 2,
                        "docs": [
                            {
                                "id": PNG_URI,
                                "pcdm_file_of": PAGE1_URI,
                                "mime_type": "image/png",
                                "image_width": 600,
                                "image_height": 800,
                            },
                            {
                                "id": TIFF_URI,
                                "pcdm_file_of": PAGE1_URI,
                                "mime_type": "image/tiff",
                                "image_width": 2000,
                                "image_height": 3000,
                            },
                        ],
                    },
                },
                {
                    "id": PAGE2_URI,
                    "display_title": "Page 2",
                    "page_number": 2,
                    "images": {"numFound": 0, "docs": []},
                },
            ],
        },
    }
    doc.update(overrides)
    return doc


def solr_page(uri: str = PAGE1_URI, **overrides: Any) -> dict[str, Any]:
    doc: dict[str, Any] = {
        "id": uri,
        "rdf_type": ["pcdm:Object"],
        "component": "Page",
        "display_title": "Page 1",
        "containing_issue": ISSUE_URI,
    }
    doc.update(overrides)
    return doc


def solr_response(*docs: dict[str, Any], **extra: Any) -> dict[str, Any]:
    body: dict[str, Any] = {
        "responseHeader": {"status": 0},
        "response": {"numFound": len(docs), "start": 0, "docs": list(docs)},
    }
    body.update(extra)
    return body


def text_block(selector: str, text: str, source: str = PAGE1_URI) -> dict[str, Any]:
    return {
        "id": f"{source}#{selector}",
        "rdf_type": ["oa:Annotation"],
        "resource_selector": [selector],
        "extracted_text": text,
        "annotation_source": [source],
    }


# ---------------------------------------------------------------------------
# Fake Solr
# ---------------------------------------------------------------------------


class FakeSolr:
    """In-memory ``JsonFetcher`` answering the gateway's Solr queries."""

    def __init__(
        self,
        documents: dict[str, dict[str, Any]] | None = None,
        text_blocks: list[dict[str, Any]] | None = None,
        highlights: dict[str, Any] | None = None,
        fail: bool = False,
    ) -> None:
        self.documents = documents or {}
        self.text_blocks = text_blocks or []
        self.highlights = highlights or solr_response()
        self.fail = fail
        self.calls: list[tuple[str, dict[str, Any]]] = []

    async def get_json(self, url: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        params = params or {}
        self.calls.append((url, params))
        if self.fail:
            raise InternalServerError(f"Unable to connect to <{url}> with error: [Errno 111] Connection refused")
        if url.endswith("/pcdm"):
            uri = params["q"].removeprefix("id:").replace("\\:", ":")
            doc = self.documents.get(uri)
            return solr_response(doc) if doc else solr_response()
        if url.endswith("/select"):
            if params.get("hl") == "true":
                return self.highlights
            return solr_response(*self.text_blocks)
        if url.endswith("/admin/ping"):
            return {"status": "OK"}
        raise AssertionError(f"unexpected Solr request {url}")

    async def aclose(self) -> None:
        return None


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def settings() -> Settings:
    return Settings(
        fcrepo_url=FCREPO_URL,
        solr_url=SOLR_URL,
        image_url=IMAGE_URL,
        manifest_url=MANIFEST_URL,
    )


@pytest.fixture
def solr() -> FakeSolr:
    return FakeSolr(
        documents={
            ISSUE_URI: solr_issue(),
            PAGE1_URI: solr_page(),
        }
    )


@pytest.fixture
def gateway(solr: FakeSolr, settings: Settings) -> SolrGateway:
    return SolrGateway(
        solr,
        settings.solr_url,
        highlight_fields=settings.highlight_fields,
        text_block_rows=settings.text_block_rows,
    )
