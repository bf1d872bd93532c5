from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from docs_util import __version__
from docs_util.cli.app import app
from docs_util.cli.context import CLIContext, CLIOptions
from docs_util.core.config import Config, EnvVar, Product
from docs_util.core.errors import ErrorCode
from docs_util.net.github import releases_url
from docs_util.net.http import MockHttpClient
from docs_util.output.console import MockConsole
from docs_util.report.security_scan import scan_report_url

runner = CliRunner()
GLOO = Config().product(Product.GLOO)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in EnvVar:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def console() -> MockConsole:
    return MockConsole()


@pytest.fixture
def client(monkeypatch: pytest.MonkeyPatch, console: MockConsole) -> MockHttpClient:
    import docs_util.cli.commands.changelog as changelog_cmd
    import docs_util.cli.commands.security_scan as security_scan_cmd

    http = MockHttpClient()

    def fake_build_context(options: CLIOptions) -> CLIContext:
        return CLIContext(config=Config(), console=console, http=http, env={})

    monkeypatch.setattr(changelog_cmd, "build_context", fake_build_context)
    monkeypatch.setattr(security_scan_cmd, "build_context", fake_build_context)
    return http


def _gloo_releases(http: MockHttpClient, *tags: str) -> None:
    http.set_json(releases_url(GLOO.owner, GLOO.repo, 1), [{"tag_name": t} for t in tags])
    http.set_json(releases_url(GLOO.owner, GLOO.repo, 2), [])


def test_version() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.stdout.strip() == __version__


class TestGenChangelogMd:
    def test_prints_json(self, client: MockHttpClient) -> None:
        _gloo_releases(client, "v1.5.0", "v1.4.1", "v1.4.0")

        result = runner.invoke(app, ["gen-changelog-md", "gloo"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [f["family"] for f in data["releases"]] == ["1.5", "1.4"]

    def test_skip_env_is_noop(
        self, client: MockHttpClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv(EnvVar.SKIP_CHANGELOG_GENERATION, "true")

        result = runner.invoke(app, ["gen-changelog-md", "not-a-product"])

        assert result.exit_code == 0
        assert result.stdout == ""
        assert client.calls == []

    @pytest.mark.parametrize("args", [[], ["gloo", "glooe"], ["gloo-fed"]])
    def test_invalid_input(
        self, client: MockHttpClient, console: MockConsole, args: list[str]
    ) -> None:
        result = runner.invoke(app, ["gen-changelog-md", *args])

        assert result.exit_code == int(ErrorCode.USER_ERROR)
        assert console.find("invalid input, must provide exactly one argument")
        assert client.calls == []

    def test_enterprise_without_token(self, client: MockHttpClient, console: MockConsole) -> None:
        result = runner.invoke(app, ["gen-changelog-md", "glooe"])

        assert result.exit_code == int(ErrorCode.ENV_ERROR)
        assert console.find("set SKIP_CHANGELOG_GENERATION environment variable to true")

    def test_network_error(self, client: MockHttpClient, console: MockConsole) -> None:
        result = runner.invoke(app, ["gen-changelog-md", "gloo"])

        assert result.exit_code == int(ErrorCode.NETWORK_ERROR)
        assert console.find("HTTP 404")


class TestGenSecurityScanMd:
    def test_prints_markdown(self, client: MockHttpClient) -> None:
        _gloo_releases(client, "v1.5.0", "v1.3.0")
        client.set_text(scan_report_url(GLOO.scan_bucket_url, "v1.5.0", "gloo"), "CVE-2021-0001")

        result = runner.invoke(app, ["gen-security-scan-md", "gloo"])

        assert result.exit_code == 0
        assert "### gloo v1.5.0" in result.stdout
        assert "CVE-2021-0001" in result.stdout
        assert "v1.3.0" not in result.stdout

    def test_writes_output_file(
        self, client: MockHttpClient, console: MockConsole, tmp_path: Path
    ) -> None:
        _gloo_releases(client, "v1.5.0")
        out = tmp_path / "content" / "security-scan.md"

        result = runner.invoke(app, ["gen-security-scan-md", "gloo", "--output", str(out)])

        assert result.exit_code == 0
        assert out.read_text(encoding="utf-8").startswith("{{% tabs %}}")
        assert console.find(f"wrote {out}")

    def test_skip_env_is_noop(
        self, client: MockHttpClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv(EnvVar.SKIP_SECURITY_SCAN, "1")

        result = runner.invoke(app, ["gen-security-scan-md", "glooe"])

        assert result.exit_code == 0
        assert client.calls == []

    def test_enterprise_without_token(self, client: MockHttpClient, console: MockConsole) -> None:
        result = runner.invoke(app, ["gen-security-scan-md", "glooe"])

        assert result.exit_code == int(ErrorCode.ENV_ERROR)
        assert console.find("set SKIP_SECURITY_SCAN environment variable to true")


def test_bad_config_file(tmp_path: Path) -> None:
    result = runner.invoke(
        app, ["--config", str(tmp_path / "missing.toml"), "gen-changelog-md", "gloo"]
    )
    assert result.exit_code == int(ErrorCode.ENV_ERROR)


def test_bad_dependency_pattern_fails_before_fetching(tmp_path: Path) -> None:
    path = tmp_path / "docs-util.toml"
    path.write_text('[products.glooe]\ndependency_pattern = "gloo(v"\n', encoding="utf-8")

    result = runner.invoke(app, ["--config", str(path), "gen-changelog-md", "glooe"])

    assert result.exit_code == int(ErrorCode.ENV_ERROR)
