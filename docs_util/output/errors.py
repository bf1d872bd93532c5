"""Error presentation utilities.

Centralized error formatting and exit code mapping for every docs-util command.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from docs_util.core.config import ConfigError
from docs_util.core.errors import ErrorCode
from docs_util.net.http import HttpError
from docs_util.output.console import Style
from docs_util.services.release.errors import (
    DependencyLookupError,
    InvalidInputError,
    MissingCounterpartError,
    MissingGithubTokenError,
)

if TYPE_CHECKING:
    from docs_util.output.console import ConsoleProtocol
    from docs_util.services.docs import DocsError

__all__ = ["print_docs_error", "docs_error_exit_code"]


def print_docs_error(error: DocsError, console: ConsoleProtocol) -> None:
    """Print an error and its hint, if any."""
    match error:
        case HttpError():
            console.error(str(error))
        case _:
            console.error(error.message)

    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)


def docs_error_exit_code(error: DocsError) -> int:
    match error:
        case InvalidInputError():
            return int(ErrorCode.USER_ERROR)
        case MissingGithubTokenError() | ConfigError():
            return int(ErrorCode.ENV_ERROR)
        case DependencyLookupError() | MissingCounterpartError():
            return int(ErrorCode.BUILD_ERROR)
        case HttpError():
            return int(ErrorCode.NETWORK_ERROR)
    # Fallback for exhaustiveness
    return int(ErrorCode.BUILD_ERROR)
