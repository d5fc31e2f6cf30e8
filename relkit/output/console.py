"""Console output abstraction.

Release stages report progress through :class:`ConsoleProtocol` rather than
printing directly, so the same code drives a Rich terminal in production and a
capturing :class:`MockConsole` in tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from rich.console import Console

__all__ = [
    "Style",
    "ConsoleProtocol",
    "RichConsole",
    "MockConsole",
]


class Style(Enum):
    """Text styles for console output."""

    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    WARNING = auto()
    INFO = auto()
    DIM = auto()
    BOLD = auto()
    HEADER = auto()

    def __str__(self) -> str:
        return self.name.lower()


# Label put in front of one-line status messages.
_PREFIXES: dict[Style, str] = {
    Style.SUCCESS: "OK",
    Style.ERROR: "error:",
    Style.WARNING: "warning:",
    Style.INFO: "info:",
}

_RICH_STYLES: dict[Style, str] = {
    Style.SUCCESS: "green",
    Style.ERROR: "red bold",
    Style.WARNING: "yellow",
    Style.INFO: "cyan",
    Style.DIM: "dim",
    Style.BOLD: "bold",
    Style.HEADER: "blue bold",
}


class ConsoleProtocol(Protocol):
    """Styled operator output."""

    def print(self, message: str, style: Style = Style.DEFAULT) -> None: ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None:
        """Print an error message. Implementations write it to stderr."""
        ...

    def warning(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def header(self, message: str) -> None: ...

    def newline(self) -> None: ...


class RichConsole:
    """Production console backed by Rich.

    Errors go to stderr, everything else to stdout. Messages are never parsed
    as Rich markup; paths and git refs may contain square brackets.
    """

    def __init__(self) -> None:
        from rich.console import Console

        self._out = Console(highlight=False)
        self._err = Console(stderr=True, highlight=False)

    def _target(self, style: Style) -> Console:
        return self._err if style == Style.ERROR else self._out

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self._target(style).print(message, style=_RICH_STYLES.get(style), markup=False)

    def _status(self, style: Style, message: str) -> None:
        from rich.text import Text

        line = Text(_PREFIXES[style], style=_RICH_STYLES[style])
        line.append(f" {message}")
        self._target(style).print(line)

    def success(self, message: str) -> None:
        self._status(Style.SUCCESS, message)

    def error(self, message: str) -> None:
        self._status(Style.ERROR, message)

    def warning(self, message: str) -> None:
        self._status(Style.WARNING, message)

    def info(self, message: str) -> None:
        self._status(Style.INFO, message)

    def header(self, message: str) -> None:
        self._out.print()
        self._out.print(message, style=_RICH_STYLES[Style.HEADER], markup=False)

    def newline(self) -> None:
        self._out.print()


@dataclass
class OutputRecord:
    """One captured line: the text as shown and the style it was shown in."""

    message: str
    style: Style


@dataclass
class MockConsole:
    """Console that captures output for assertions in tests."""

    outputs: list[OutputRecord] = field(default_factory=list)

    def _record(self, message: str, style: Style) -> None:
        self.outputs.append(OutputRecord(message, style))

    def _status(self, style: Style, message: str) -> None:
        self._record(f"{_PREFIXES[style]} {message}", style)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self._record(message, style)

    def success(self, message: str) -> None:
        self._status(Style.SUCCESS, message)

    def error(self, message: str) -> None:
        self._status(Style.ERROR, message)

    def warning(self, message: str) -> None:
        self._status(Style.WARNING, message)

    def info(self, message: str) -> None:
        self._status(Style.INFO, message)

    def header(self, message: str) -> None:
        self._record(message, Style.HEADER)

    def newline(self) -> None:
        self._record("", Style.DEFAULT)

    # -- assertions ----------------------------------------------------------

    def clear(self) -> None:
        self.outputs.clear()

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
        """Captured lines containing ``substring``."""
        return [o for o in self.outputs if substring in o.message]
