"""Report generation per product.

``DocsService`` pulls the release lists a product needs, runs the merge or
stable filter over them and renders the report text. Every failure comes back
as an ``Err`` carrying the original error object.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from docs_util.core.config import Config, ConfigError, EnvVar, Product, ProductConfig
from docs_util.core.result import Err, Ok, Result
from docs_util.net.github import list_repo_releases, sort_by_semver
from docs_util.net.http import HttpClient, HttpError
from docs_util.output.console import ConsoleProtocol
from docs_util.report.changelog_json import render_changelog_json
from docs_util.report.security_scan import build_security_scan_report
from docs_util.services.release.changelog import MergedChangelog, generate_merged_changelog
from docs_util.services.release.dependency import DependencyResolver, ManifestDependencyResolver
from docs_util.services.release.errors import (
    DependencyLookupError,
    InvalidInputError,
    MissingCounterpartError,
    MissingGithubTokenError,
)
from docs_util.services.release.model import Origin, ReleaseRecord, release_tags
from docs_util.services.release.semver import SemVer
from docs_util.services.release.stable import filter_stable

__all__ = [
    "DocsError",
    "DocsService",
    "parse_product",
]


DocsError = (
    InvalidInputError
    | MissingGithubTokenError
    | DependencyLookupError
    | MissingCounterpartError
    | HttpError
    | ConfigError
)


def parse_product(args: Sequence[str]) -> Result[Product, InvalidInputError]:
    """Exactly one positional argument naming a known product."""
    if len(args) != 1:
        return Err(InvalidInputError(provided=f"{len(args)} arguments"))
    try:
        return Ok(Product(args[0]))
    except ValueError:
        return Err(InvalidInputError(provided=args[0]))


def _no_dependency(version: SemVer) -> Result[SemVer, DependencyLookupError]:
    return Err(
        DependencyLookupError(
            enterprise_tag=version.to_tag(), reason="product has no dependency manifest"
        )
    )


class DocsService:
    """Builds changelog and security scan reports.

    Args:
        config: Product settings
        http: HTTP client for GitHub and the storage buckets
        console: Diagnostic output (progress, skipped tags)
        env: Environment variables (GITHUB_TOKEN)
        resolver: Overrides the manifest-based dependency resolver
    """

    def __init__(
        self,
        *,
        config: Config,
        http: HttpClient,
        console: ConsoleProtocol,
        env: Mapping[str, str],
        resolver: DependencyResolver | None = None,
    ) -> None:
        self._config = config
        self._http = http
        self._console = console
        self._env = env
        self._resolver = resolver

    def _token(
        self, product: ProductConfig, skip_var: EnvVar
    ) -> Result[str | None, MissingGithubTokenError]:
        token = self._env.get(EnvVar.GITHUB_TOKEN) or None
        if product.requires_token and token is None:
            return Err(MissingGithubTokenError(skip_var=skip_var))
        return Ok(token)

    def _releases(
        self, product: ProductConfig, origin: Origin, token: str | None
    ) -> Result[list[ReleaseRecord], HttpError]:
        self._console.info(f"fetching releases: {product.slug}")
        return list_repo_releases(
            self._http, owner=product.owner, repo=product.repo, origin=origin, token=token
        )

    def _resolver_for(self, product: ProductConfig) -> DependencyResolver:
        if self._resolver is not None:
            return self._resolver
        if product.dependency_url is None or product.dependency_pattern is None:
            return _no_dependency
        return ManifestDependencyResolver(
            self._http, product.dependency_url, product.dependency_pattern
        )

    def merged_changelog(self, target: Product) -> Result[MergedChangelog, DocsError]:
        product = self._config.product(target)
        token = self._token(product, EnvVar.SKIP_CHANGELOG_GENERATION)
        if isinstance(token, Err):
            return token

        if product.depends_on is None:
            oss_product, ent_product = product, None
        else:
            oss_product, ent_product = self._config.product(product.depends_on), product

        oss = self._releases(oss_product, Origin.OPEN_SOURCE, token.value)
        if isinstance(oss, Err):
            return oss

        enterprise: list[ReleaseRecord] = []
        if ent_product is not None:
            ent = self._releases(ent_product, Origin.ENTERPRISE, token.value)
            if isinstance(ent, Err):
                return ent
            enterprise = ent.value
            self._console.info(f"resolving dependencies for {len(enterprise)} releases")

        result = generate_merged_changelog(oss.value, enterprise, self._resolver_for(product))
        if isinstance(result, Err):
            return result

        for record in result.value.skipped:
            self._console.warning(
                f"skipping {record.origin} release '{record.tag}': not a semantic version"
            )
        return result

    def changelog_json(self, target: Product) -> Result[str, DocsError]:
        changelog = self.merged_changelog(target)
        if isinstance(changelog, Err):
            return changelog
        return Ok(render_changelog_json(changelog.value))

    def stable_tags(self, target: Product) -> Result[list[str], DocsError]:
        product = self._config.product(target)
        token = self._token(product, EnvVar.SKIP_SECURITY_SCAN)
        if isinstance(token, Err):
            return token

        origin = Origin.OPEN_SOURCE if product.depends_on is None else Origin.ENTERPRISE
        releases = self._releases(product, origin, token.value)
        if isinstance(releases, Err):
            return releases

        return Ok(release_tags(filter_stable(sort_by_semver(releases.value))))

    def security_scan_markdown(self, target: Product) -> Result[str, DocsError]:
        tags = self.stable_tags(target)
        if isinstance(tags, Err):
            return tags

        self._console.info(f"building security scan report for {len(tags.value)} tags")
        return build_security_scan_report(self._http, self._config.product(target), tags.value)
