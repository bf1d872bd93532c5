"""GitHub Releases API access.

Only the releases listing is needed: every page of
``GET /repos/{owner}/{repo}/releases`` is fetched until an empty page comes
back, and each item is normalized into a ``ReleaseRecord``.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from docs_util.core.result import Err, Ok, Result
from docs_util.core.structured import as_obj_list, as_str_dict, get_raw_str, get_str
from docs_util.net.http import HttpClient, HttpError
from docs_util.services.release.model import Origin, ReleaseRecord
from docs_util.services.release.semver import SemVer

__all__ = [
    "GITHUB_API_URL",
    "RELEASES_PAGE_SIZE",
    "releases_url",
    "list_repo_releases",
    "sort_by_semver",
]

GITHUB_API_URL = "https://api.github.com"
RELEASES_PAGE_SIZE = 100
# Guard against an API that never returns an empty page.
_MAX_PAGES = 100


def releases_url(owner: str, repo: str, page: int) -> str:
    return f"{GITHUB_API_URL}/repos/{owner}/{repo}/releases?per_page={RELEASES_PAGE_SIZE}&page={page}"


def _auth_headers(token: str | None) -> dict[str, str]:
    headers = {"Accept": "application/vnd.github+json"}
    if token:
        headers["Authorization"] = f"token {token}"
    return headers


def _parse_timestamp(value: str | None) -> datetime | None:
    if value is None:
        return None
    try:
        # GitHub uses a trailing 'Z' for UTC.
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def _parse_release(item: object, origin: Origin) -> ReleaseRecord | None:
    d = as_str_dict(item)
    if d is None:
        return None

    tag = get_str(d, "tag_name")
    if tag is None:
        return None

    return ReleaseRecord(
        tag=tag,
        origin=origin,
        body=get_raw_str(d, "body"),
        published_at=_parse_timestamp(get_str(d, "published_at")),
    )


def list_repo_releases(
    http: HttpClient,
    *,
    owner: str,
    repo: str,
    origin: Origin,
    token: str | None = None,
) -> Result[list[ReleaseRecord], HttpError]:
    """Fetch all releases of a repository, in the order GitHub returns them.

    Args:
        http: HTTP client
        owner: Repository owner
        repo: Repository name
        origin: Origin recorded on each release
        token: Optional GitHub token (required for private repositories)

    Returns:
        Ok with every release, or the first HttpError unchanged
    """
    headers = _auth_headers(token)
    out: list[ReleaseRecord] = []

    for page in range(1, _MAX_PAGES + 1):
        url = releases_url(owner, repo, page)
        result = http.get_json(url, headers=headers)
        if isinstance(result, Err):
            return result

        items = as_obj_list(result.value)
        if items is None:
            return Err(HttpError(url=url, status=0, message="Expected JSON array of releases"))
        if not items:
            return Ok(out)

        for item in items:
            record = _parse_release(item, origin)
            if record is not None:
                out.append(record)

    return Err(
        HttpError(
            url=releases_url(owner, repo, _MAX_PAGES),
            status=0,
            message="too many release pages",
        )
    )


def sort_by_semver(records: Iterable[ReleaseRecord]) -> list[ReleaseRecord]:
    """Newest version first; unparsable tags keep their order at the end."""
    versioned: list[tuple[SemVer, ReleaseRecord]] = []
    other: list[ReleaseRecord] = []
    for r in records:
        if r.version is None:
            other.append(r)
        else:
            versioned.append((r.version, r))

    versioned.sort(key=lambda pair: pair[0], reverse=True)
    return [r for _, r in versioned] + other
