from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

from docs_util.core.result import Ok
from docs_util.services.release.semver import SemVer, parse_version


class Origin(StrEnum):
    OPEN_SOURCE = "open-source"
    ENTERPRISE = "enterprise"


@dataclass(frozen=True, slots=True)
class ReleaseRecord:
    """One published release of either repository.

    Identity is ``tag`` + ``origin``; ``version`` is derived from the tag and
    is None when the tag is not a semantic version.
    """

    tag: str
    origin: Origin
    body: str = field(default="", compare=False)
    published_at: datetime | None = field(default=None, compare=False)
    version: SemVer | None = field(init=False, default=None, compare=False)

    def __post_init__(self) -> None:
        parsed = parse_version(self.tag)
        if isinstance(parsed, Ok):
            object.__setattr__(self, "version", parsed.value)

    @property
    def key(self) -> tuple[str, Origin]:
        return (self.tag, self.origin)


def release_tags(records: list[ReleaseRecord]) -> list[str]:
    return [r.tag for r in records]
