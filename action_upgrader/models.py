"""
Data models for gh-action-upgrader
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Union


class Precision(Enum):
    """How many numeric components a pinned version specifies."""

    MAJOR = 1
    MINOR = 2
    FULL = 3


class MalformedVersion(ValueError):
    """Raised when a string is not of the form v?<int>(.<int>(.<int>)?)?."""

    def __init__(self, raw: str):
        self.raw = raw
        super().__init__(f"Malformed version: {raw!r}")


@dataclass(frozen=True)
class VersionSpec:
    """A parsed version with one, two or three numeric components."""

    major: int
    minor: Optional[int] = None
    patch: Optional[int] = None
    raw: str = ""

    def __post_init__(self):
        if self.patch is not None and self.minor is None:
            raise ValueError("patch requires minor")
        if not self.raw:
            object.__setattr__(self, "raw", self._join())

    # Two specs are the same candidate when their text is the same.
    def __eq__(self, other):
        if not isinstance(other, VersionSpec):
            return NotImplemented
        return self.raw == other.raw

    def __hash__(self):
        return hash(self.raw)

    @property
    def precision(self) -> Precision:
        if self.patch is not None:
            return Precision.FULL
        if self.minor is not None:
            return Precision.MINOR
        return Precision.MAJOR

    def truncate(self, precision: Precision) -> "VersionSpec":
        """Drop the components finer than ``precision``."""
        if self.precision.value <= precision.value:
            return self
        if precision is Precision.MAJOR:
            return VersionSpec(self.major)
        return VersionSpec(self.major, self.minor)

    def _join(self) -> str:
        parts = [self.major, self.minor, self.patch]
        return ".".join(str(p) for p in parts if p is not None)

    def __str__(self) -> str:
        return self.raw


@dataclass(frozen=True)
class Location:
    """Where a pinned reference occurs in a workflow file."""

    file_path: Path
    line: int

    def __str__(self) -> str:
        return f"{self.file_path}:{self.line}"


@dataclass(frozen=True)
class ScannedAction:
    """An ``owner/repo[/path]@ref`` occurrence found by the scanner."""

    owner: str
    repo: str
    raw_version: str
    location: Location
    path: str = ""

    @property
    def name(self) -> str:
        if self.path:
            return f"{self.owner}/{self.repo}/{self.path}"
        return f"{self.owner}/{self.repo}"

    def to_reference(self) -> "ActionReference":
        """Parse the pinned version; raises MalformedVersion for SHAs, branches, etc."""
        from .versioning import parse_version

        return ActionReference(
            owner=self.owner,
            repo=self.repo,
            current_version=parse_version(self.raw_version),
            raw_version=self.raw_version,
            location=self.location,
            path=self.path,
        )

    def __str__(self) -> str:
        return f"{self.name}@{self.raw_version}"


@dataclass(frozen=True)
class ActionReference:
    """A GitHub Action pinned to a parseable version."""

    owner: str
    repo: str
    current_version: VersionSpec
    raw_version: str
    location: Location
    path: str = ""

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.repo}"

    @property
    def name(self) -> str:
        if self.path:
            return f"{self.slug}/{self.path}"
        return self.slug

    @property
    def has_prefix(self) -> bool:
        return self.raw_version.startswith("v")

    def __str__(self) -> str:
        return f"{self.name}@{self.raw_version}"


@dataclass(frozen=True)
class NoUpdate:
    """Resolution outcome when no candidate is an upgrade."""

    def __bool__(self) -> bool:
        return False


@dataclass(frozen=True)
class UpdateTo:
    """Resolution outcome naming the chosen candidate and the shape to render it in."""

    target: VersionSpec
    precision: Precision

    @property
    def rendered_spec(self) -> VersionSpec:
        return self.target.truncate(self.precision)

    def render(self, prefix: str = "v") -> str:
        """Get the replacement text, e.g. ``v4`` or ``v4.1``."""
        return f"{prefix}{self.rendered_spec.raw}"


Resolution = Union[NoUpdate, UpdateTo]
