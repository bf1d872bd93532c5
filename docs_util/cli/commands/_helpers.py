"""Shared helpers for CLI commands."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import typer

from docs_util.core.config import EnvVar
from docs_util.core.result import Err, Result
from docs_util.output.errors import docs_error_exit_code, print_docs_error

if TYPE_CHECKING:
    from docs_util.cli.context import CLIContext
    from docs_util.services.docs import DocsError


def unwrap_or_exit[T](result: Result[T, DocsError], ctx: CLIContext) -> T:
    """Return the Ok value, or print the error and exit with its code.

    Replaces the pattern:
        if isinstance(result, Err):
            print_docs_error(result.error, ctx.console)
            raise typer.Exit(code=docs_error_exit_code(result.error))
        value = result.value
    """
    if isinstance(result, Err):
        print_docs_error(result.error, ctx.console)
        raise typer.Exit(code=docs_error_exit_code(result.error))
    return result.value


def skip_requested(var: EnvVar) -> bool:
    """True when the skip variable is set to any non-empty value."""
    return bool(os.environ.get(var))
