from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

import typer

from docs_util.core.config import Config, load_config_or_default
from docs_util.core.errors import ErrorCode
from docs_util.core.result import Err
from docs_util.net.http import HttpClient, RealHttpClient
from docs_util.output.console import ConsoleProtocol, RichConsole, Style


@dataclass(frozen=True, slots=True)
class CLIOptions:
    """Options from the root callback, shared with every command via ``ctx.obj``."""

    config_path: Path | None = None


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: Config
    console: ConsoleProtocol
    http: HttpClient
    env: Mapping[str, str] = field(default_factory=lambda: dict(os.environ))


def options_from(ctx: typer.Context) -> CLIOptions:
    obj = ctx.obj
    if isinstance(obj, CLIOptions):
        return obj
    return CLIOptions()


def build_context(options: CLIOptions) -> CLIContext:
    console = RichConsole()

    config_result = load_config_or_default(options.config_path)
    if isinstance(config_result, Err):
        console.error(config_result.error.message)
        if config_result.error.hint:
            console.print(f"hint: {config_result.error.hint}", Style.DIM)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    return CLIContext(
        config=config_result.value,
        console=console,
        http=RealHttpClient(),
        env=dict(os.environ),
    )
