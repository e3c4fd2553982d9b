from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

# Solr rows fetched per text-block list; lower settings are raised to this
MIN_TEXT_BLOCK_ROWS = 100


@dataclass(frozen=True)
class Settings:
    fcrepo_url: str = "http://localhost:8080/rest/"
    solr_url: str = "http://localhost:8983/solr/fedora4/"
    image_url: str = "http://localhost:8182/iiif/2/"
    manifest_url: str = "http://localhost:3000/manifests/"
    logo_url: str = "https://www.lib.umd.edu/images/wrapper/liblogo.png"
    http_timeout: float = 10.0
    ocr_field: str = "extracted_text"
    ocr_tagged_field: str | None = "extracted_text_tagged"
    text_block_rows: int = 100
    log_level: str = "INFO"

    @property
    def highlight_fields(self) -> tuple[str, ...]:
        """OCR fields the highlighter is asked to run over."""
        if self.ocr_tagged_field:
            return (self.ocr_field, self.ocr_tagged_field)
        return (self.ocr_field,)


def load_settings() -> Settings:
    defaults = Settings()
    return Settings(
        fcrepo_url=os.getenv("FCREPO_URL", defaults.fcrepo_url),
        solr_url=os.getenv("SOLR_URL", defaults.solr_url),
        image_url=os.getenv("IIIF_IMAGE_URL", defaults.image_url),
        manifest_url=os.getenv("IIIF_MANIFEST_URL", defaults.manifest_url),
        logo_url=os.getenv("IIIF_LOGO_URL", defaults.logo_url),
        http_timeout=float(os.getenv("HTTP_TIMEOUT", str(defaults.http_timeout))),
        ocr_field=os.getenv("OCR_FIELD", defaults.ocr_field),
        # an empty OCR_TAGGED_FIELD switches the tagged OCR format off
        ocr_tagged_field=os.getenv("OCR_TAGGED_FIELD", defaults.ocr_tagged_field or "") or None,
        text_block_rows=max(MIN_TEXT_BLOCK_ROWS, int(os.getenv("TEXT_BLOCK_ROWS", str(defaults.text_block_rows)))),
        log_level=os.getenv("LOG_LEVEL", defaults.log_level).upper(),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, read from the environment once."""
    return load_settings()
