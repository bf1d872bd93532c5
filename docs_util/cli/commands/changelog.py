from __future__ import annotations

import typer

from docs_util.cli.commands._helpers import skip_requested, unwrap_or_exit
from docs_util.cli.context import build_context, options_from
from docs_util.core.config import EnvVar
from docs_util.services.docs import DocsService, parse_product


def gen_changelog_md(
    ctx: typer.Context,
    args: list[str] | None = typer.Argument(
        None, metavar="PRODUCT", help="Product to document: gloo or glooe."
    ),
) -> None:
    """Generate the changelog JSON from GitHub release pages.

    For glooe, open-source release notes are merged into the enterprise
    releases that depend on them.
    """
    if skip_requested(EnvVar.SKIP_CHANGELOG_GENERATION):
        return

    cli = build_context(options_from(ctx))
    product = unwrap_or_exit(parse_product(args or []), cli)

    service = DocsService(config=cli.config, http=cli.http, console=cli.console, env=cli.env)
    out = unwrap_or_exit(service.changelog_json(product), cli)
    typer.echo(out)
