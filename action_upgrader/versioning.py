"""
Version parsing and candidate catalogs
"""

import logging
import re
from typing import FrozenSet, Iterable, Iterator, List

from .models import MalformedVersion, VersionSpec
from .resolver import ranking_key

logger = logging.getLogger(__name__)

# re.ASCII keeps \d from matching non-ASCII digits such as "٣"
VERSION_PATTERN = re.compile(r'(\d+)(?:\.(\d+)(?:\.(\d+))?)?', re.ASCII)


def parse_version(raw: str) -> VersionSpec:
    """Parse ``v?<int>(.<int>(.<int>)?)?`` into a VersionSpec."""
    if not isinstance(raw, str):
        raise MalformedVersion(repr(raw))

    text = raw[1:] if raw.startswith('v') else raw
    match = VERSION_PATTERN.fullmatch(text)
    if not match:
        raise MalformedVersion(raw)

    major, minor, patch = match.groups()
    return VersionSpec(
        major=int(major),
        minor=int(minor) if minor is not None else None,
        patch=int(patch) if patch is not None else None,
        raw=text,
    )


class CandidateCatalog:
    """The published versions of one action, parsed and de-duplicated."""

    def __init__(self, versions: Iterable[VersionSpec] = ()):
        self._versions: FrozenSet[VersionSpec] = frozenset(versions)

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "CandidateCatalog":
        """Build a catalog from release or tag names, dropping the ones that don't parse."""
        versions = []
        for name in names:
            try:
                versions.append(parse_version(name))
            except MalformedVersion:
                logger.debug(f"Ignoring non-version tag: {name!r}")
        return cls(versions)

    def ranked(self) -> List[VersionSpec]:
        """Get the versions highest first."""
        return sorted(self._versions, key=lambda v: (ranking_key(v), v.raw), reverse=True)

    def __iter__(self) -> Iterator[VersionSpec]:
        return iter(self.ranked())

    def __len__(self) -> int:
        return len(self._versions)

    def __contains__(self, item) -> bool:
        return item in self._versions

    def __repr__(self) -> str:
        return f"CandidateCatalog({[v.raw for v in self.ranked()]})"
