from __future__ import annotations

from docs_util.services.release.model import Origin, ReleaseRecord, release_tags
from docs_util.services.release.semver import SemVer
from docs_util.services.release.stable import filter_stable, filter_stable_tags


def _records(*tags: str) -> list[ReleaseRecord]:
    return [ReleaseRecord(tag=t, origin=Origin.OPEN_SOURCE) for t in tags]


def test_filter_stable_drops_old_and_unparsable() -> None:
    records = _records("v1.3.9", "v1.4.0", "v2.0.0", "not-a-version")
    assert release_tags(filter_stable(records)) == ["v1.4.0", "v2.0.0"]


def test_filter_stable_preserves_order() -> None:
    records = _records("v2.0.0", "v1.3.0", "v1.4.2", "v1.10.0", "v1.4.1")
    assert release_tags(filter_stable(records)) == ["v2.0.0", "v1.4.2", "v1.10.0", "v1.4.1"]


def test_filter_stable_drops_prereleases() -> None:
    records = _records("v1.5.0-beta.3", "v1.5.0", "v1.6.0-rc1", "v1.5.0beta1")
    assert release_tags(filter_stable(records)) == ["v1.5.0"]


def test_filter_stable_custom_floor() -> None:
    records = _records("v1.4.0", "v1.5.0")
    assert release_tags(filter_stable(records, floor=SemVer(1, 5, 0))) == ["v1.5.0"]


def test_filter_stable_empty() -> None:
    assert filter_stable([]) == []


def test_filter_stable_tags() -> None:
    tags = ["v1.3.9", "v1.4.0", "v2.0.0", "not-a-version"]
    assert filter_stable_tags(tags) == ["v1.4.0", "v2.0.0"]
