"""Result type for explicit error handling.

Every operation that can fail in an expected way (a tag that does not parse,
a manifest that cannot be fetched, a missing counterpart release) returns a
``Result`` instead of raising. Callers branch on it with ``isinstance`` or
pattern matching:

    match parse_version("v1.5.0"):
        case Ok(version):
            print(version.family)
        case Err(error):
            print(error.message)
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """A successful result.

    Attributes:
        value: The success value.
    """

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err[E]:
    """A failed result.

    Attributes:
        error: The error value, returned unchanged by every caller up the stack.
    """

    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


type Result[T, E] = Ok[T] | Err[E]
