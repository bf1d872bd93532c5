"""Errors reported while building release docs.

Each error carries a ``message`` and an optional ``hint`` so the command layer
can print any of them the same way.
"""

from __future__ import annotations

from dataclasses import dataclass

from docs_util.core.config import EnvVar, Product


@dataclass(frozen=True, slots=True)
class InvalidInputError:
    """Wrong positional argument count or unknown product."""

    provided: str

    @property
    def message(self) -> str:
        return (
            "invalid input, must provide exactly one argument, "
            f"either '{Product.GLOO}' or '{Product.GLOO_EE}', (provided {self.provided})"
        )

    @property
    def hint(self) -> str | None:
        return None


@dataclass(frozen=True, slots=True)
class MissingGithubTokenError:
    """An enterprise-scoped command ran without GITHUB_TOKEN."""

    skip_var: EnvVar

    @property
    def message(self) -> str:
        return f"Must either set {EnvVar.GITHUB_TOKEN} or set {self.skip_var} environment variable to true"

    @property
    def hint(self) -> str | None:
        return f"export {self.skip_var}=true to skip this step in local builds"


@dataclass(frozen=True, slots=True)
class VersionParseError:
    """A tag that is not a semantic version. Recovered by exclusion."""

    tag: str
    reason: str

    @property
    def message(self) -> str:
        return f"invalid version tag '{self.tag}': {self.reason}"

    @property
    def hint(self) -> str | None:
        return None


@dataclass(frozen=True, slots=True)
class DependencyLookupError:
    """The open-source dependency of an enterprise release could not be resolved."""

    enterprise_tag: str
    reason: str
    detail: str | None = None

    @property
    def message(self) -> str:
        return f"unable to get open-source dependency for enterprise version {self.enterprise_tag}: {self.reason}"

    @property
    def hint(self) -> str | None:
        return self.detail


@dataclass(frozen=True, slots=True)
class MissingCounterpartError:
    """An enterprise release pins an open-source version that was not fetched."""

    enterprise_tag: str
    dependency_tag: str

    @property
    def message(self) -> str:
        return (
            f"enterprise release {self.enterprise_tag} depends on open-source "
            f"{self.dependency_tag}, which has no published release"
        )

    @property
    def hint(self) -> str | None:
        return "check the dependency manifest, or publish the open-source release first"


MergeError = DependencyLookupError | MissingCounterpartError
