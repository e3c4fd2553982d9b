"""Serve IIIF Presentation manifests for repository objects indexed in Solr."""

__version__ = "1.9.0"
