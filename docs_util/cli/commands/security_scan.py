from __future__ import annotations

from pathlib import Path

import typer

from docs_util.cli.commands._helpers import skip_requested, unwrap_or_exit
from docs_util.cli.context import build_context, options_from
from docs_util.core.config import EnvVar
from docs_util.core.errors import ErrorCode
from docs_util.services.docs import DocsService, parse_product


def gen_security_scan_md(
    ctx: typer.Context,
    args: list[str] | None = typer.Argument(
        None, metavar="PRODUCT", help="Product to document: gloo or glooe."
    ),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Write the report here instead of stdout."
    ),
) -> None:
    """Generate the security scan markdown for every stable release (>= 1.4.0)."""
    if skip_requested(EnvVar.SKIP_SECURITY_SCAN):
        return

    cli = build_context(options_from(ctx))
    product = unwrap_or_exit(parse_product(args or []), cli)

    service = DocsService(config=cli.config, http=cli.http, console=cli.console, env=cli.env)
    report = unwrap_or_exit(service.security_scan_markdown(product), cli)

    if output is None:
        typer.echo(report, nl=False)
        return

    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(report, encoding="utf-8")
    except OSError as e:
        cli.console.error(f"failed to write {output}: {e}")
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))
    cli.console.success(f"wrote {output}")
