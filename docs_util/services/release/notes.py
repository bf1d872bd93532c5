from __future__ import annotations

import re
from dataclasses import dataclass, field


_CATEGORY_RE = re.compile(r"\*\*(?P<title>[^*]+?)\*\*:?")
_BULLET_RE = re.compile(r"[-*]\s+(?P<text>.+)")


@dataclass(frozen=True, slots=True)
class ReleaseNotes:
    """A release body split into titled categories.

    Release bodies are written as ``**New Features**`` / ``**Fixes**``
    headings followed by bullet lists. Bullets under a heading land in that
    category; any other non-empty line is kept in ``extra``.
    """

    categories: dict[str, list[str]] = field(default_factory=dict)
    extra: list[str] = field(default_factory=list)


def parse_release_notes(body: str) -> ReleaseNotes:
    categories: dict[str, list[str]] = {}
    extra: list[str] = []
    current: str | None = None

    for raw in body.splitlines():
        line = raw.strip()
        if not line:
            continue

        header = _CATEGORY_RE.fullmatch(line)
        if header is not None:
            current = header.group("title").strip()
            categories.setdefault(current, [])
            continue

        bullet = _BULLET_RE.fullmatch(line)
        if bullet is not None and current is not None:
            categories[current].append(bullet.group("text").strip())
        else:
            extra.append(line)

    return ReleaseNotes(categories=categories, extra=extra)
