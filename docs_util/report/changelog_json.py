"""JSON rendering of a merged changelog.

Shape consumed by the docs site changelog template:

    {"releases": [
        {"family": "1.5", "entries": [
            {"tag": "v1.5.1", "version": "1.5.1", "origin": "enterprise",
             "publishedAt": "2021-01-02T03:04:05+00:00",
             "notes": {"categories": {"Fixes": ["..."]}, "extra": []},
             "dependency": {"tag": "v1.5.1", "notes": {...}}}
        ]}
    ]}
"""

from __future__ import annotations

import json

from docs_util.core.structured import StrDict
from docs_util.services.release.changelog import MergedChangelog, MergedEntry
from docs_util.services.release.model import ReleaseRecord
from docs_util.services.release.notes import parse_release_notes


def _notes_dict(record: ReleaseRecord) -> StrDict:
    notes = parse_release_notes(record.body)
    return {"categories": notes.categories, "extra": notes.extra}


def entry_to_dict(entry: MergedEntry) -> StrDict:
    release = entry.release
    dependency: StrDict | None = None
    if entry.counterpart is not None:
        dependency = {
            "tag": entry.counterpart.tag,
            "notes": _notes_dict(entry.counterpart),
        }

    return {
        "tag": release.tag,
        "version": str(entry.version),
        "origin": str(release.origin),
        "publishedAt": release.published_at.isoformat() if release.published_at else None,
        "notes": _notes_dict(release),
        "dependency": dependency,
    }


def changelog_to_dict(changelog: MergedChangelog) -> StrDict:
    return {
        "releases": [
            {"family": fam.key, "entries": [entry_to_dict(e) for e in fam.entries]}
            for fam in changelog.families
        ]
    }


def render_changelog_json(changelog: MergedChangelog) -> str:
    return json.dumps(changelog_to_dict(changelog), indent=2)
