from __future__ import annotations

from pathlib import Path

import typer

from docs_util import __version__
from docs_util.cli.commands.changelog import gen_changelog_md
from docs_util.cli.commands.security_scan import gen_security_scan_md
from docs_util.cli.context import CLIOptions


app = typer.Typer(
    name="docs-util",
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


app.command("gen-changelog-md")(gen_changelog_md)
app.command("gen-security-scan-md")(gen_security_scan_md)


@app.callback(invoke_without_command=True)
def _main(  # pyright: ignore[reportUnusedFunction]
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
    config: Path | None = typer.Option(
        None,
        "--config",
        help="TOML file overriding product settings.",
    ),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)

    ctx.obj = CLIOptions(config_path=config)


def main() -> None:
    app()
