"""Stable-only view of a release list, used by the security scan report."""

from __future__ import annotations

from collections.abc import Iterable

from docs_util.core.result import Ok
from docs_util.services.release.model import ReleaseRecord
from docs_util.services.release.semver import STABLE_FLOOR, SemVer, parse_version, satisfies_minimum


def is_stable(version: SemVer, floor: SemVer = STABLE_FLOOR) -> bool:
    # Beta and rc builds never get a public scan section.
    return not version.is_prerelease and satisfies_minimum(version, floor)


def filter_stable(
    records: Iterable[ReleaseRecord], floor: SemVer = STABLE_FLOOR
) -> list[ReleaseRecord]:
    """Keep releases whose tag parses and is a release at or above ``floor``.

    Unparsable tags are dropped silently. Relative order is preserved.
    """
    return [r for r in records if r.version is not None and is_stable(r.version, floor)]


def filter_stable_tags(tags: Iterable[str], floor: SemVer = STABLE_FLOOR) -> list[str]:
    out: list[str] = []
    for tag in tags:
        parsed = parse_version(tag)
        if isinstance(parsed, Ok) and is_stable(parsed.value, floor):
            out.append(tag)
    return out
