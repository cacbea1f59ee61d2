"""
Display surfaces that receive finished console fragments.

A surface is the host side of the console: it shows one line per log entry
and can replace a line in place when the entry is toggled. MemorySurface keeps
the lines in a list and can dump them as an HTML document or as text.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import itertools
from dataclasses import dataclass
from typing import Hashable, Protocol, runtime_checkable

# Local ----------------------------------------------------------------------------------------------------------------
from .markup import StyleTag


# Classes --------------------------------------------------------------------------------------------------------------

@runtime_checkable
class Surface(Protocol):
    """Protocol for a display surface of an embedded console."""

    def mount(self, width: str, height: str) -> None:
        """Size the surface; called once when a console attaches to it."""
        ...

    def append(self, fragment: str, level: StyleTag) -> Hashable:
        """Show a new line and return a handle identifying it."""
        ...

    def replace(self, handle: Hashable, fragment: str) -> None:
        """Replace the content of a line; unknown handles are ignored."""
        ...

    def clear(self) -> None:
        """Remove every line, keeping the surface itself."""
        ...


@dataclass
class Line:
    handle: int
    level: StyleTag
    fragment: str


class MemorySurface:
    """
    In-memory surface.

    Examples:
        >>> surface = MemorySurface()
        >>> handle = surface.append("hello", StyleTag.LOG)
        >>> surface.text()
        'hello'
    """

    def __init__(self) -> None:
        self.width = "100%"
        self.height = "100%"
        self._lines: list[Line] = []
        self._handles = itertools.count(1)

    def mount(self, width: str, height: str) -> None:
        self.width = width
        self.height = height

    def append(self, fragment: str, level: StyleTag) -> int:
        line = Line(next(self._handles), level, fragment)
        self._lines.append(line)
        return line.handle

    def replace(self, handle: Hashable, fragment: str) -> None:
        for line in self._lines:
            if line.handle == handle:
                line.fragment = fragment
                return

    def clear(self) -> None:
        self._lines.clear()

    @property
    def lines(self) -> list[Line]:
        return list(self._lines)

    def fragment(self, handle: Hashable) -> str | None:
        """Current content of a line, or None when the handle is unknown."""
        for line in self._lines:
            if line.handle == handle:
                return line.fragment
        return None

    def text(self) -> str:
        """All lines joined with newlines."""
        return "\n".join(line.fragment for line in self._lines)

    def html(self) -> str:
        """The surface as an HTML element with one div per entry."""
        entries = "".join(
            f'<div class="ec-entry {line.level}">{line.fragment}</div>' for line in self._lines
        )
        style = f"width: {self.width}; height: {self.height};"
        return f'<div class="embedded-console" style="{style}">{entries}</div>'

    def __len__(self) -> int:
        return len(self._lines)
