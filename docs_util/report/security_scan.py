"""Markdown security scan report.

Scan results are published per release tag and image as
``<bucket>/<tag>/<image>_cve_report.docgen``. The report renders one Hugo tab
per minor-version family, a heading per tag, and a collapsible section per
image. Images that were never scanned for a tag show ``No scan found``.
"""

from __future__ import annotations

from collections.abc import Sequence

from docs_util.core.config import ProductConfig
from docs_util.core.result import Err, Ok, Result
from docs_util.net.http import HttpClient, HttpError
from docs_util.services.release.semver import parse_version

NO_SCAN_FOUND = "No scan found"


def scan_report_url(bucket_url: str, tag: str, image: str) -> str:
    return f"{bucket_url.rstrip('/')}/{tag}/{image}_cve_report.docgen"


def fetch_image_report(
    http: HttpClient, bucket_url: str, tag: str, image: str
) -> Result[str, HttpError]:
    result = http.get_text(scan_report_url(bucket_url, tag, image))
    if isinstance(result, Err):
        if result.error.status == 404:
            return Ok(NO_SCAN_FOUND)
        return result
    return Ok(result.value.strip() or NO_SCAN_FOUND)


def _family_of(tag: str) -> str:
    parsed = parse_version(tag)
    if isinstance(parsed, Ok):
        return parsed.value.family
    return tag


def build_security_scan_report(
    http: HttpClient, product: ProductConfig, tags: Sequence[str]
) -> Result[str, HttpError]:
    """Render the report for ``tags`` (already filtered and sorted).

    Returns the first non-404 HttpError unchanged.
    """
    families: dict[str, list[str]] = {}
    for tag in tags:
        families.setdefault(_family_of(tag), []).append(tag)

    lines: list[str] = ["{{% tabs %}}"]
    for family, family_tags in families.items():
        lines.append(f'{{{{% tab name="v{family}.x" %}}}}')
        for tag in family_tags:
            lines.append("")
            lines.append(f"### {product.repo} {tag}")
            for image in product.images:
                report = fetch_image_report(http, product.scan_bucket_url, tag, image)
                if isinstance(report, Err):
                    return report
                lines.append("")
                lines.append(f"<details><summary> {image} </summary>")
                lines.append("")
                lines.append(report.value)
                lines.append("")
                lines.append("</details>")
        lines.append("{{% /tab %}}")
    lines.append("{{% /tabs %}}")

    return Ok("\n".join(lines) + "\n")
