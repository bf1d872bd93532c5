from __future__ import annotations

import re
from dataclasses import dataclass

from docs_util.core.result import Err, Ok, Result
from docs_util.services.release.errors import VersionParseError


# semver.org 2.0.0 grammar, optionally prefixed with a single 'v'.
_SEMVER_RE = re.compile(
    r"v?(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-((?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+([0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?",
    re.ASCII,
)


@dataclass(frozen=True, slots=True)
class SemVer:
    """A parsed semantic version.

    Equality is structural (build metadata included); ordering follows semver
    precedence, where build metadata is ignored. Use ``compare_versions`` when
    precedence equality is what matters.
    """

    major: int
    minor: int
    patch: int
    prerelease: tuple[str, ...] = ()
    build: tuple[str, ...] = ()

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)

    @property
    def family(self) -> str:
        """Minor-version family key, e.g. "1.5"."""
        return f"{self.major}.{self.minor}"

    def to_tag(self) -> str:
        return f"v{self}"

    def __str__(self) -> str:
        out = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            out += "-" + ".".join(self.prerelease)
        if self.build:
            out += "+" + ".".join(self.build)
        return out

    def __lt__(self, other: SemVer) -> bool:
        return compare_versions(self, other) < 0

    def __le__(self, other: SemVer) -> bool:
        return compare_versions(self, other) <= 0

    def __gt__(self, other: SemVer) -> bool:
        return compare_versions(self, other) > 0

    def __ge__(self, other: SemVer) -> bool:
        return compare_versions(self, other) >= 0


STABLE_FLOOR = SemVer(1, 4, 0)


def parse_version(tag: str) -> Result[SemVer, VersionParseError]:
    m = _SEMVER_RE.fullmatch(tag)
    if m is None:
        return Err(VersionParseError(tag=tag, reason="not a semantic version"))

    pre = tuple(m.group(4).split(".")) if m.group(4) else ()
    build = tuple(m.group(5).split(".")) if m.group(5) else ()
    return Ok(SemVer(int(m.group(1)), int(m.group(2)), int(m.group(3)), pre, build))


def _cmp_int(a: int, b: int) -> int:
    return (a > b) - (a < b)


def _compare_identifier(a: str, b: str) -> int:
    a_num = a.isdigit()
    b_num = b.isdigit()
    if a_num and b_num:
        return _cmp_int(int(a), int(b))
    if a_num:
        return -1
    if b_num:
        return 1
    return (a > b) - (a < b)


def compare_versions(a: SemVer, b: SemVer) -> int:
    """Compare by semver precedence; returns -1, 0 or 1."""
    for x, y in ((a.major, b.major), (a.minor, b.minor), (a.patch, b.patch)):
        if x != y:
            return _cmp_int(x, y)

    # A release sorts above any of its pre-releases.
    if not a.prerelease or not b.prerelease:
        return _cmp_int(int(not a.prerelease), int(not b.prerelease))

    for x_id, y_id in zip(a.prerelease, b.prerelease):
        c = _compare_identifier(x_id, y_id)
        if c:
            return c
    return _cmp_int(len(a.prerelease), len(b.prerelease))


def satisfies_minimum(version: SemVer, floor: SemVer) -> bool:
    return compare_versions(version, floor) != -1
