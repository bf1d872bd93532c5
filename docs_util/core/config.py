"""Products, environment variables and the optional config file.

The two documented products and the environment variables the commands honor
are closed enums; everything repository-specific about a product lives in a
``ProductConfig`` so the defaults can be overridden from a TOML file:

    [products.glooe]
    owner = "solo-io"
    repo = "solo-projects"
    dependency_url = "https://storage.googleapis.com/gloo-ee-dependencies/{version}/dependencies"
    dependency_pattern = ".*gloo.*(v.*)"
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import StrEnum
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_str_list, get_table

__all__ = [
    "Product",
    "EnvVar",
    "ProductConfig",
    "Config",
    "ConfigError",
    "DEFAULT_PRODUCTS",
    "load_config",
    "load_config_or_default",
]


class Product(StrEnum):
    """Products the docs can be generated for."""

    GLOO = "gloo"
    GLOO_EE = "glooe"


class EnvVar(StrEnum):
    GITHUB_TOKEN = "GITHUB_TOKEN"
    SKIP_CHANGELOG_GENERATION = "SKIP_CHANGELOG_GENERATION"
    SKIP_SECURITY_SCAN = "SKIP_SECURITY_SCAN"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when the config file cannot be loaded or parsed."""

    message: str
    path: Path | None = None

    @property
    def hint(self) -> str | None:
        return str(self.path) if self.path is not None else None


@dataclass(frozen=True, slots=True)
class ProductConfig:
    """Where a product's releases live and how its reports are built.

    Attributes:
        owner: GitHub organization
        repo: GitHub repository name
        requires_token: Whether listing releases needs GITHUB_TOKEN (private repo)
        depends_on: Open-source product whose releases are merged into this one
        dependency_url: Manifest URL template, ``{version}`` is the tag without its 'v'
        dependency_pattern: Regex whose first group captures the open-source tag
        scan_bucket_url: Base URL of the per-tag security scan reports
        images: Container images listed in the security scan report
    """

    owner: str
    repo: str
    requires_token: bool = False
    depends_on: Product | None = None
    dependency_url: str | None = None
    dependency_pattern: str | None = None
    scan_bucket_url: str = ""
    images: tuple[str, ...] = ()

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.repo}"


DEFAULT_PRODUCTS: Mapping[Product, ProductConfig] = {
    Product.GLOO: ProductConfig(
        owner="solo-io",
        repo="gloo",
        scan_bucket_url="https://storage.googleapis.com/solo-gloo-security-scans/gloo",
        images=(
            "gateway",
            "ingress",
            "discovery",
            "gloo",
            "gloo-envoy-wrapper",
            "certgen",
            "sds",
            "access-logger",
        ),
    ),
    Product.GLOO_EE: ProductConfig(
        owner="solo-io",
        repo="solo-projects",
        requires_token=True,
        depends_on=Product.GLOO,
        dependency_url="https://storage.googleapis.com/gloo-ee-dependencies/{version}/dependencies",
        dependency_pattern=r".*gloo.*(v.*)",
        scan_bucket_url="https://storage.googleapis.com/solo-gloo-security-scans/solo-projects",
        images=(
            "rate-limit-ee",
            "gloo-ee",
            "gloo-ee-envoy-wrapper",
            "observability-ee",
            "extauth-ee",
        ),
    ),
}


def _default_products() -> dict[Product, ProductConfig]:
    return dict(DEFAULT_PRODUCTS)


def _check_dependency_url(name: str, template: str | None) -> None:
    if template is None:
        return
    if "{version}" not in template:
        raise ValueError(f"[products.{name}] dependency_url must contain {{version}}")
    try:
        template.format(version="0.0.0")
    except (KeyError, IndexError, ValueError) as e:
        raise ValueError(f"[products.{name}] invalid dependency_url template: {e}") from None


def _check_dependency_pattern(name: str, pattern: str | None) -> None:
    if pattern is None:
        return
    try:
        compiled = re.compile(pattern)
    except re.error as e:
        raise ValueError(f"[products.{name}] invalid dependency_pattern: {e}") from None
    if compiled.groups < 1:
        raise ValueError(f"[products.{name}] dependency_pattern needs a capture group")


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    products: dict[Product, ProductConfig] = field(default_factory=_default_products)

    def product(self, product: Product) -> ProductConfig:
        return self.products[product]

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML).

        Unknown product tables are rejected; missing keys keep their defaults.
        """
        tables: StrDict = get_table(data, "products") or {}
        products = _default_products()
        for name, raw in tables.items():
            try:
                product = Product(name)
            except ValueError:
                known = ", ".join(p.value for p in Product)
                raise ValueError(f"unknown product '{name}' (expected one of: {known})") from None

            table = as_str_dict(raw)
            if table is None:
                raise TypeError(f"[products.{name}] must be a table")

            base = products[product]
            products[product] = replace(
                base,
                owner=get_str(table, "owner") or base.owner,
                repo=get_str(table, "repo") or base.repo,
                dependency_url=get_str(table, "dependency_url") or base.dependency_url,
                dependency_pattern=get_str(table, "dependency_pattern") or base.dependency_pattern,
                scan_bucket_url=get_str(table, "scan_bucket_url") or base.scan_bucket_url,
                images=get_str_list(table, "images") or base.images,
            )
            _check_dependency_url(name, products[product].dependency_url)
            _check_dependency_pattern(name, products[product].dependency_pattern)
        return cls(products=products)


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to the config file

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path | None) -> Result[Config, ConfigError]:
    """Load config from ``path``, or the built-in defaults when no path is given."""
    if path is None:
        return Ok(Config())
    return load_config(path)
