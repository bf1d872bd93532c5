from __future__ import annotations

import json
from datetime import UTC, datetime

from docs_util.core.result import Ok, Result
from docs_util.report.changelog_json import changelog_to_dict, render_changelog_json
from docs_util.services.release.changelog import MergedChangelog, generate_merged_changelog
from docs_util.services.release.errors import DependencyLookupError
from docs_util.services.release.model import Origin, ReleaseRecord
from docs_util.services.release.semver import SemVer


def _same_version(version: SemVer) -> Result[SemVer, DependencyLookupError]:
    return Ok(version)


def _changelog() -> MergedChangelog:
    oss = [
        ReleaseRecord(
            tag="v1.5.0",
            origin=Origin.OPEN_SOURCE,
            body="**Fixes**\n- oss fix",
            published_at=datetime(2021, 1, 2, 3, 4, 5, tzinfo=UTC),
        ),
        ReleaseRecord(tag="v1.4.0", origin=Origin.OPEN_SOURCE, body="initial"),
    ]
    ent = [ReleaseRecord(tag="v1.5.0", origin=Origin.ENTERPRISE, body="**New Features**\n- ee feature")]
    result = generate_merged_changelog(oss, ent, _same_version)
    assert isinstance(result, Ok)
    return result.value


def test_changelog_shape() -> None:
    data = changelog_to_dict(_changelog())

    assert data == {
        "releases": [
            {
                "family": "1.5",
                "entries": [
                    {
                        "tag": "v1.5.0",
                        "version": "1.5.0",
                        "origin": "enterprise",
                        "publishedAt": None,
                        "notes": {"categories": {"New Features": ["ee feature"]}, "extra": []},
                        "dependency": {
                            "tag": "v1.5.0",
                            "notes": {"categories": {"Fixes": ["oss fix"]}, "extra": []},
                        },
                    }
                ],
            },
            {
                "family": "1.4",
                "entries": [
                    {
                        "tag": "v1.4.0",
                        "version": "1.4.0",
                        "origin": "open-source",
                        "publishedAt": None,
                        "notes": {"categories": {}, "extra": ["initial"]},
                        "dependency": None,
                    }
                ],
            },
        ]
    }


def test_published_at_is_iso() -> None:
    changelog = generate_merged_changelog(
        [
            ReleaseRecord(
                tag="v1.5.0",
                origin=Origin.OPEN_SOURCE,
                published_at=datetime(2021, 1, 2, 3, 4, 5, tzinfo=UTC),
            )
        ],
        [],
        _same_version,
    )
    assert isinstance(changelog, Ok)
    entry = changelog_to_dict(changelog.value)["releases"][0]["entries"][0]  # type: ignore[index]
    assert entry["publishedAt"] == "2021-01-02T03:04:05+00:00"


def test_render_is_valid_json() -> None:
    text = render_changelog_json(_changelog())
    assert json.loads(text) == changelog_to_dict(_changelog())
    assert text.startswith("{\n  ")
