"""SemVer value used for package and target framework versions."""

import re
from dataclasses import dataclass, field
from functools import total_ordering
from typing import Any, Tuple

import semantic_version

from .errors import BuildMetadataNotAllowed, InvalidVersion, PrereleaseNotAllowed

# Loose prefixes node-style tooling accepts in front of a version
_LOOSE_PREFIX = re.compile(r'^[v=\s]+')
_COERCE_PATTERN = re.compile(r'(\d+)(?:\.(\d+))?(?:\.(\d+))?')


@total_ordering
@dataclass(frozen=True, eq=False)
class SemVer:
    """Immutable semantic version.

    Ordering follows SemVer 2.0.0 precedence. Build metadata is kept but never
    takes part in comparisons or equality.
    """

    major: int
    minor: int
    patch: int
    prerelease: Tuple[str, ...] = ()
    build: Tuple[str, ...] = ()
    raw: str = field(default="", repr=False)

    @classmethod
    def parse(cls, text: str) -> "SemVer":
        """Parse a full ``major.minor.patch[-pre][+build]`` version.

        Args:
            text: Version string, optionally prefixed with ``v`` or ``=``

        Returns:
            Parsed version

        Raises:
            InvalidVersion: If the string is not a valid SemVer
        """
        if not isinstance(text, str):
            raise InvalidVersion(repr(text))

        cleaned = _LOOSE_PREFIX.sub('', text.strip())
        try:
            version = semantic_version.Version(cleaned)
        except ValueError as e:
            raise InvalidVersion(text) from e

        return cls(
            major=version.major,
            minor=version.minor,
            patch=version.patch,
            prerelease=tuple(version.prerelease),
            build=tuple(version.build),
            raw=text,
        )

    @classmethod
    def coerce(cls, text: str) -> "SemVer":
        """Coerce a loosely formatted string into a SemVer.

        The first run of up to three dot-separated numbers is used and missing
        parts default to zero, so ``"4.8"`` becomes ``4.8.0`` and
        ``"v2"`` becomes ``2.0.0``. Prerelease and build parts are dropped.

        Raises:
            InvalidVersion: If the string holds no number at all
        """
        match = _COERCE_PATTERN.search(text or "")
        if match is None:
            raise InvalidVersion(text)

        major, minor, patch = (int(part or 0) for part in match.groups())
        return cls(major=major, minor=minor, patch=patch, raw=text)

    def validate(self, allow_build: bool = True, allow_prerelease: bool = True) -> "SemVer":
        """Reject build metadata or prerelease identifiers when disallowed.

        Returns:
            The same version, so calls can be chained after parsing
        """
        if not allow_build and self.build:
            raise BuildMetadataNotAllowed(self.raw or str(self))

        if not allow_prerelease and self.prerelease:
            raise PrereleaseNotAllowed(self.raw or str(self))

        return self

    def compare(self, other: "SemVer") -> int:
        """Compare by SemVer precedence.

        Returns:
            -1, 0 or 1
        """
        mine = self._precedence_version()
        theirs = other._precedence_version()
        if mine < theirs:
            return -1
        if mine > theirs:
            return 1
        return 0

    @property
    def version(self) -> str:
        """Normalised ``major.minor.patch[-pre][+build]`` string."""
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += "-" + ".".join(self.prerelease)
        if self.build:
            text += "+" + ".".join(self.build)
        return text

    def _precedence_version(self) -> semantic_version.Version:
        return semantic_version.Version(
            major=self.major,
            minor=self.minor,
            patch=self.patch,
            prerelease=self.prerelease,
        )

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, SemVer):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, SemVer):
            return NotImplemented
        return self.compare(other) < 0

    def __hash__(self) -> int:
        return hash((self.major, self.minor, self.patch, self.prerelease))

    def __str__(self) -> str:
        return self.version
