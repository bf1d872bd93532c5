"""Exit codes for docs-util commands.

Every failure a command can report maps onto one of these codes so that the
documentation build pipeline invoking the tool can tell user mistakes apart
from environment and network problems.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Process exit codes.

    - 0: Success (including skipped generation)
    - 1: User error (wrong argument count, unknown product)
    - 2: Environment error (missing GITHUB_TOKEN, bad config file)
    - 3: Build error (dependency lookup or counterpart resolution failed)
    - 4: Network error (GitHub or bucket request failed)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    BUILD_ERROR = 3
    NETWORK_ERROR = 4
