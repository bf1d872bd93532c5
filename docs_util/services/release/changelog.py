"""Merge open-source and enterprise release histories into one changelog.

The merged changelog is a list of minor-version families ("1.5", "1.4", ...),
newest first, each holding its releases newest first. Enterprise releases
carry the open-source release their dependency manifest pins, so both sets of
notes can be shown side by side. With no enterprise releases this is simply
the open-source changelog grouped by minor version.

Generation runs in three passes:
1. resolve the open-source dependency of every enterprise release
2. find the fetched open-source release for each resolved version
3. order and group (pure, cannot fail)

Any failure in 1 or 2 is returned unchanged and nothing is produced.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace

from docs_util.core.result import Err, Ok, Result
from docs_util.services.release.dependency import DependencyResolver
from docs_util.services.release.errors import (
    DependencyLookupError,
    MergeError,
    MissingCounterpartError,
)
from docs_util.services.release.model import Origin, ReleaseRecord
from docs_util.services.release.semver import SemVer

__all__ = [
    "MergedEntry",
    "ReleaseFamily",
    "MergedChangelog",
    "generate_merged_changelog",
    "group_by_family",
    "merge_releases",
    "resolve_dependencies",
    "find_counterparts",
]


ReleaseKey = tuple[str, Origin]


@dataclass(frozen=True, slots=True)
class MergedEntry:
    release: ReleaseRecord
    version: SemVer
    counterpart: ReleaseRecord | None = None

    @property
    def family(self) -> str:
        return self.version.family

    @property
    def is_enterprise(self) -> bool:
        return self.release.origin == Origin.ENTERPRISE


@dataclass(frozen=True, slots=True)
class ReleaseFamily:
    key: str
    entries: tuple[MergedEntry, ...]

    @property
    def tags(self) -> list[str]:
        return [e.release.tag for e in self.entries]


@dataclass(frozen=True, slots=True)
class MergedChangelog:
    families: tuple[ReleaseFamily, ...]
    # Records left out because their tag is not a semantic version.
    skipped: tuple[ReleaseRecord, ...] = ()

    def family(self, key: str) -> ReleaseFamily | None:
        for fam in self.families:
            if fam.key == key:
                return fam
        return None

    @property
    def entries(self) -> tuple[MergedEntry, ...]:
        return tuple(e for fam in self.families for e in fam.entries)


def _parseable(
    records: Iterable[ReleaseRecord], skipped: list[ReleaseRecord]
) -> list[tuple[ReleaseRecord, SemVer]]:
    out: list[tuple[ReleaseRecord, SemVer]] = []
    for r in records:
        if r.version is None:
            skipped.append(r)
        else:
            out.append((r, r.version))
    return out


def _precedence_key(version: SemVer) -> SemVer:
    return replace(version, build=())


def resolve_dependencies(
    enterprise: Sequence[tuple[ReleaseRecord, SemVer]],
    resolver: DependencyResolver,
) -> Result[dict[ReleaseKey, SemVer], DependencyLookupError]:
    """Resolve every enterprise release up front; stop at the first failure."""
    resolved: dict[ReleaseKey, SemVer] = {}
    for record, version in enterprise:
        result = resolver(version)
        if isinstance(result, Err):
            return result
        resolved[record.key] = result.value
    return Ok(resolved)


def find_counterparts(
    enterprise: Sequence[tuple[ReleaseRecord, SemVer]],
    resolved: dict[ReleaseKey, SemVer],
    open_source: Sequence[tuple[ReleaseRecord, SemVer]],
) -> Result[dict[ReleaseKey, ReleaseRecord], MissingCounterpartError]:
    by_version: dict[SemVer, ReleaseRecord] = {}
    for record, version in open_source:
        by_version.setdefault(_precedence_key(version), record)

    counterparts: dict[ReleaseKey, ReleaseRecord] = {}
    for record, _ in enterprise:
        dependency = resolved[record.key]
        match = by_version.get(_precedence_key(dependency))
        if match is None:
            return Err(
                MissingCounterpartError(
                    enterprise_tag=record.tag, dependency_tag=dependency.to_tag()
                )
            )
        counterparts[record.key] = match
    return Ok(counterparts)


def group_by_family(entries: Iterable[MergedEntry]) -> tuple[ReleaseFamily, ...]:
    """Group entries by minor-version family, keeping the order they arrive in."""
    groups: dict[str, list[MergedEntry]] = {}
    for entry in entries:
        groups.setdefault(entry.family, []).append(entry)
    return tuple(ReleaseFamily(key=k, entries=tuple(v)) for k, v in groups.items())


def merge_releases(
    open_source: Sequence[tuple[ReleaseRecord, SemVer]],
    enterprise: Sequence[tuple[ReleaseRecord, SemVer]],
    counterparts: dict[ReleaseKey, ReleaseRecord],
) -> tuple[ReleaseFamily, ...]:
    entries = [
        MergedEntry(release=record, version=version, counterpart=counterparts[record.key])
        for record, version in enterprise
    ]

    # Open-source releases shown next to an enterprise release are not repeated.
    consumed = {c.key for c in counterparts.values()}
    entries.extend(
        MergedEntry(release=record, version=version)
        for record, version in open_source
        if record.key not in consumed
    )

    # Stable: equal precedence keeps fetch order, enterprise first.
    ordered = sorted(entries, key=lambda e: e.version, reverse=True)
    return group_by_family(ordered)


def generate_merged_changelog(
    open_source: Iterable[ReleaseRecord],
    enterprise: Iterable[ReleaseRecord],
    resolver: DependencyResolver,
) -> Result[MergedChangelog, MergeError]:
    """Build the merged, minor-grouped changelog.

    Args:
        open_source: Open-source releases as fetched
        enterprise: Enterprise releases as fetched (may be empty)
        resolver: Maps an enterprise version to the open-source version it pins

    Returns:
        Ok(MergedChangelog), or the first DependencyLookupError /
        MissingCounterpartError encountered
    """
    skipped: list[ReleaseRecord] = []
    oss = _parseable(open_source, skipped)
    ent = _parseable(enterprise, skipped)

    resolved = resolve_dependencies(ent, resolver)
    if isinstance(resolved, Err):
        return resolved

    counterparts = find_counterparts(ent, resolved.value, oss)
    if isinstance(counterparts, Err):
        return counterparts

    families = merge_releases(oss, ent, counterparts.value)
    return Ok(MergedChangelog(families=families, skipped=tuple(skipped)))
