"""Translation between repository URIs, repository paths and public identifiers.

Repository objects live under a pairtree (``1d/8a/71/b8/<uuid>``). Public ids
replace ``/`` with ``:`` and may collapse the pairtree into ``::`` directly
before the UUID segment, e.g. ``fcrepo:pcdm::1d8a71b8-7356-4282-8e99-da88f0f997c7``.
"""

from __future__ import annotations

import re

from pcdm_manifests.errors import BadRequestError

UUID_REGEX = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$")

_PAIRTREE_DEPTH = 4
_PAIRTREE_WIDTH = 2


def _is_uuid(segment: str | None) -> bool:
    return segment is not None and UUID_REGEX.match(segment.lower()) is not None


def _pairtree(segment: str) -> list[str]:
    return [segment[i : i + _PAIRTREE_WIDTH] for i in range(0, _PAIRTREE_DEPTH * _PAIRTREE_WIDTH, _PAIRTREE_WIDTH)]


def expand_path(local_id: str) -> str:
    """Turn a colon-separated (possibly abbreviated) id into a repository path.

    Raises ``BadRequestError`` when a ``::`` marker is not followed by a UUID.
    """
    # keep trailing empty segments
    segments = local_id.split(":")
    last_index = len(segments) - 1
    expanded: list[str] = []
    for index, segment in enumerate(segments):
        if segment or index == last_index:
            expanded.append(segment)
            continue
        following = segments[index + 1]
        if index + 1 >= last_index and following == "":
            raise BadRequestError(
                f'Unable to parse identifier containing "{local_id}": Cannot end with abbreviation marker "::"'
            )
        if not _is_uuid(following):
            raise BadRequestError(
                f'Unable to parse identifier containing "{local_id}": Can only abbreviate UUID segments'
            )
        expanded.extend(_pairtree(following))
    return "/".join(expanded)


def abbreviate_path(path: str) -> str:
    """Turn a repository path into its colon-separated id, collapsing pairtrees to ``::``."""
    segments = path.split("/")
    out: list[str] = []
    index = 0
    while index < len(segments):
        chunks = segments[index : index + _PAIRTREE_DEPTH]
        uuid_index = index + _PAIRTREE_DEPTH
        if (
            len(chunks) == _PAIRTREE_DEPTH
            and uuid_index < len(segments)
            and all(len(chunk) == _PAIRTREE_WIDTH for chunk in chunks)
            and _is_uuid(segments[uuid_index])
            and _pairtree(segments[uuid_index]) == chunks
        ):
            out.append("")
            index = uuid_index
            continue
        out.append(segments[index])
        index += 1
    return ":".join(out)


def parse_id(identifier: str) -> tuple[str, str]:
    """Split a public ``prefix:local`` id."""
    prefix, sep, local = identifier.partition(":")
    if not sep or not prefix or not local:
        raise BadRequestError("Manifest ID must be in the form prefix:local")
    return prefix, local


class PathCodec:
    """Converts among URI, path, prefixed and abbreviated identifier forms."""

    def __init__(self, prefix: str, repo_base_uri: str) -> None:
        self.prefix = prefix
        self.repo_base_uri = repo_base_uri

    def from_uri(self, uri: str) -> str:
        if not uri.startswith(self.repo_base_uri):
            raise BadRequestError(f"URI <{uri}> is not within the repository at <{self.repo_base_uri}>")
        return uri[len(self.repo_base_uri) :]

    def from_prefixed(self, prefixed_id: str) -> str:
        _prefix, local = parse_id(prefixed_id)
        return local.replace(":", "/")

    def from_abbreviated(self, local_id: str) -> str:
        return expand_path(local_id)

    def to_prefixed(self, path: str, abbreviate: bool = True) -> str:
        local = abbreviate_path(path) if abbreviate else path.replace("/", ":")
        return f"{self.prefix}:{local}"

    def to_uri(self, path: str) -> str:
        return self.repo_base_uri + path

    def uri_to_id(self, uri: str, abbreviate: bool = True) -> str:
        """Public id of a repository URI."""
        return self.to_prefixed(self.from_uri(uri), abbreviate=abbreviate)

    def id_to_uri(self, identifier: str) -> str:
        """Repository URI of a public (possibly abbreviated) id."""
        _prefix, local = parse_id(identifier)
        return self.to_uri(expand_path(local))
