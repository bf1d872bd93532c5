"""Console output abstraction.

Reports (JSON, markdown) go to stdout so they can be redirected into the docs
tree. Everything else, progress lines, skipped tags and errors, goes through a
``ConsoleProtocol`` which writes to stderr in production and captures output
in tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

from rich.console import Console
from rich.markup import escape

__all__ = [
    "Style",
    "ConsoleProtocol",
    "RichConsole",
    "MockConsole",
    "OutputRecord",
]


class Style(Enum):
    """Text styles for console output."""

    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    WARNING = auto()
    INFO = auto()
    DIM = auto()

    def __str__(self) -> str:
        return self.name.lower()


class ConsoleProtocol(Protocol):
    """Protocol for diagnostic output."""

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        """Print a message with optional styling."""
        ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...


class RichConsole:
    """Console implementation using Rich, writing to stderr."""

    def __init__(self, *, stderr: bool = True) -> None:
        self._console = Console(stderr=stderr)
        self._style_map = {
            Style.DEFAULT: "",
            Style.SUCCESS: "green",
            Style.ERROR: "red bold",
            Style.WARNING: "yellow",
            Style.INFO: "cyan",
            Style.DIM: "dim",
        }

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        rich_style = self._style_map.get(style, "")
        if rich_style:
            self._console.print(message, style=rich_style, markup=False)
        else:
            self._console.print(message, markup=False)

    def success(self, message: str) -> None:
        self._console.print(f"[green]OK[/green] {_escape(message)}")

    def error(self, message: str) -> None:
        self._console.print(f"[red bold]error:[/red bold] {_escape(message)}")

    def warning(self, message: str) -> None:
        self._console.print(f"[yellow]warning:[/yellow] {_escape(message)}")

    def info(self, message: str) -> None:
        self._console.print(f"[cyan]info:[/cyan] {_escape(message)}")


def _escape(message: str) -> str:
    # Release tags and manifest bodies may contain square brackets.
    return escape(message)


@dataclass
class OutputRecord:
    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole:
    """Console implementation that captures output for testing."""

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def success(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"OK {message}", Style.SUCCESS))

    def error(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"error: {message}", Style.ERROR))

    def warning(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"warning: {message}", Style.WARNING))

    def info(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"info: {message}", Style.INFO))

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)

    def has_warning(self) -> bool:
        return any(o.style == Style.WARNING for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        """Find all outputs containing a substring."""
        return [o for o in self.outputs if substring in o.message]
