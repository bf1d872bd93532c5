"""Resolve which open-source version an enterprise release is built on.

The enterprise build publishes a plain-text dependency manifest per release.
A resolver is any callable ``SemVer -> Result[SemVer, DependencyLookupError]``
so the changelog merge can run against a fixed mapping in tests.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from docs_util.core.result import Err, Ok, Result
from docs_util.net.http import HttpClient
from docs_util.services.release.errors import DependencyLookupError
from docs_util.services.release.semver import SemVer, parse_version

__all__ = [
    "DependencyResolver",
    "ManifestDependencyResolver",
]


DependencyResolver = Callable[[SemVer], Result[SemVer, DependencyLookupError]]


class ManifestDependencyResolver:
    """Fetch the dependency manifest for a version and pattern-match the pinned tag.

    Args:
        http: HTTP client used for the manifest GET
        url_template: Manifest URL, ``{version}`` is replaced by the version without 'v'
        pattern: Regex whose first group captures the open-source tag
    """

    def __init__(self, http: HttpClient, url_template: str, pattern: str) -> None:
        self._http = http
        self._url_template = url_template
        self._pattern = re.compile(pattern)

    def manifest_url(self, version: SemVer) -> str:
        return self._url_template.format(version=str(version))

    def __call__(self, enterprise_version: SemVer) -> Result[SemVer, DependencyLookupError]:
        tag = enterprise_version.to_tag()
        url = self.manifest_url(enterprise_version)

        body = self._http.get_text(url)
        if isinstance(body, Err):
            return Err(
                DependencyLookupError(
                    enterprise_tag=tag,
                    reason="failed to fetch dependency manifest",
                    detail=str(body.error),
                )
            )

        m = self._pattern.search(body.value)
        if m is None or m.lastindex is None:
            return Err(
                DependencyLookupError(
                    enterprise_tag=tag,
                    reason="no open-source version in dependency manifest",
                    detail=f"response from {url}: {body.value.strip()}",
                )
            )

        token = m.group(1).strip()
        parsed = parse_version(token)
        if isinstance(parsed, Err):
            return Err(
                DependencyLookupError(
                    enterprise_tag=tag,
                    reason=f"malformed dependency version '{token}'",
                    detail=url,
                )
            )
        return Ok(parsed.value)
