"""
Embedded log console.

EmbeddedConsole renders logged values into a display surface and keeps, for
every displayed line, the raw arguments needed to re-render it at the other
detail level when the host asks to toggle it.

Example:
    >>> console = EmbeddedConsole(options=ConsoleOptions.plain())
    >>> entry = console.log("user %s has", "ada", {"id": 1, "roles": ["admin"]})
    >>> entry.fragment
    'user ada has ⯈ {id: 1, roles: ⯈ ["admin"]}'
    >>> console.toggle(entry)
    'user ada has ⯆ {\\n  id: 1,\\n  roles: ⯆ [\\n    "admin"\\n  ]\\n}'
"""

# Standard library -----------------------------------------------------------------------------------------------------
import threading
import time
import warnings
from dataclasses import dataclass
from typing import Any, Callable, Hashable

# Local ----------------------------------------------------------------------------------------------------------------
from .inspector import Detail
from .markup import StyleTag
from .options import ConsoleOptions, get_options
from .substitute import substitute
from .surface import MemorySurface, Surface


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(eq=False)
class RenderedEntry:
    """
    One displayed log line and the raw arguments behind it.

    Attributes:
        args: Arguments as originally logged. Re-rendering reads their current state.
        level: Log level style of the line.
        detail: Detail level currently displayed.
        fragment: Currently displayed fragment.
        handle: Surface handle of the line, None when nothing was displayed.
        destroyed: Set when the console was cleared; destroyed entries never change.
    """
    args: tuple[Any, ...]
    level: StyleTag
    detail: Detail = Detail.COLLAPSED
    fragment: str = ""
    handle: Hashable | None = None
    destroyed: bool = False

    @property
    def expanded(self) -> bool:
        return self.detail is Detail.EXPANDED


class EmbeddedConsole:
    """
    Console that renders logged values into a display surface.

    Args:
        surface: Where lines are shown. Defaults to a new MemorySurface.
        options: Console options. Defaults to the module-level options, see configure().
        clock: Monotonic clock in seconds used by timers.
        **kwargs: Overrides merged into options, e.g. max_depth=3.

    Notes:
        - No logging call raises because of a logged value: values that cannot be
          rendered show as ``[Unknown]``.
        - All methods may be called from several threads; mutations of the entry
          list, timers and counters are serialized.
    """

    def __init__(self,
                 surface: Surface | None = None,
                 options: ConsoleOptions | None = None,
                 *,
                 clock: Callable[[], float] = time.perf_counter,
                 **kwargs: Any,
                 ) -> None:
        self.options = (options if options is not None else get_options()).merge(**kwargs)
        self._inspector = self.options.inspector()
        self._surface: Surface | None = surface if surface is not None else MemorySurface()
        self._surface.mount(self.options.css_width, self.options.css_height)
        self._clock = clock
        self._lock = threading.RLock()
        self._entries: list[RenderedEntry] = []
        self._timers: dict[str, float] = {}
        self._counters: dict[str, int] = {}

    # Properties ------------------------------------------------------------------------------------------------------

    @property
    def surface(self) -> Surface | None:
        """Attached surface, None after cleanup()."""
        return self._surface

    @property
    def entries(self) -> tuple[RenderedEntry, ...]:
        """Live entries in display order."""
        with self._lock:
            return tuple(self._entries)

    # Logging ---------------------------------------------------------------------------------------------------------

    def log(self, *values: Any) -> RenderedEntry:
        return self._add(values, StyleTag.LOG)

    def info(self, *values: Any) -> RenderedEntry:
        return self._add(values, StyleTag.LOG)

    def debug(self, *values: Any) -> RenderedEntry:
        return self._add(values, StyleTag.LOG)

    def warn(self, *values: Any) -> RenderedEntry:
        return self._add(values, StyleTag.WARNING)

    def error(self, *values: Any) -> RenderedEntry:
        return self._add(values, StyleTag.ERROR)

    def assert_(self, condition: Any, *values: Any) -> RenderedEntry | None:
        """Log 'Assertion failed:' and values at error level if condition is falsy."""
        try:
            failed = not condition
        except Exception:
            # A condition that cannot be tested is not a passing one
            failed = True
        if failed:
            return self.error("Assertion failed:", *values)
        return None

    def format(self, *values: Any, detail: Detail = Detail.COLLAPSED) -> str:
        """
        Render logged values into one fragment without displaying it.

        A leading format string has its directives substituted, the remaining
        values are rendered one by one and everything is joined with spaces.
        """
        markup = self._inspector.markup

        def render(value: Any) -> str:
            return self._inspector.render(value, detail)

        def literal(text: str) -> str:
            return markup.wrap(StyleTag.STRING, text)

        head, rest = substitute(values, render=render, literal=literal)
        parts = [] if head is None else [head]
        parts.extend(render(value) for value in rest)
        return " ".join(parts)

    # Collapse/Expand -------------------------------------------------------------------------------------------------

    def toggle(self, entry: RenderedEntry) -> str:
        """
        Flip an entry between collapsed and expanded detail.

        The entry is re-rendered from its raw arguments and its line on the
        surface is replaced. Entries without container values, destroyed
        entries and entries of other consoles are left as they are.

        Returns:
            The fragment displayed for the entry after the call.
        """
        with self._lock:
            if entry.destroyed or not any(e is entry for e in self._entries):
                return entry.fragment
            if not any(self._inspector.is_expandable(value) for value in entry.args):
                return entry.fragment

            entry.detail = entry.detail.flipped()
            entry.fragment = self.format(*entry.args, detail=entry.detail)
            if entry.handle is not None and self._surface is not None:
                self._surface.replace(entry.handle, entry.fragment)
            return entry.fragment

    def toggle_at(self, handle: Hashable) -> str | None:
        """Toggle the entry shown at a surface handle; None if no entry is shown there."""
        with self._lock:
            for entry in self._entries:
                if entry.handle == handle:
                    return self.toggle(entry)
        return None

    # Timers & Counters -----------------------------------------------------------------------------------------------

    def time(self, label: str = "default") -> None:
        """Start (or restart) a timer."""
        with self._lock:
            self._timers[label] = self._clock()

    def time_log(self, label: str = "default") -> RenderedEntry:
        """Log the elapsed time of a running timer without stopping it."""
        with self._lock:
            start = self._timers.get(label)
        if start is None:
            return self.warn("Timer %s does not exist", label)
        return self.log("%s: %s", label, self._elapsed(start))

    def time_end(self, label: str = "default") -> RenderedEntry:
        """Stop a timer and log its elapsed time; unknown labels log a warning."""
        with self._lock:
            start = self._timers.pop(label, None)
        if start is None:
            return self.warn("Timer %s does not exist", label)
        return self.log("%s: %s", label, self._elapsed(start))

    def count(self, label: str = "default") -> RenderedEntry:
        """Increment and log a labelled counter."""
        with self._lock:
            n = self._counters.get(label, 0) + 1
            self._counters[label] = n
        return self.log("%s: %d", label, n)

    def count_reset(self, label: str = "default") -> RenderedEntry | None:
        """Reset a labelled counter; unknown labels log a warning."""
        with self._lock:
            if label not in self._counters:
                missing = True
            else:
                self._counters[label] = 0
                missing = False
        if missing:
            return self.warn("Count for %s does not exist", label)
        return None

    # Lifecycle -------------------------------------------------------------------------------------------------------

    def clear(self) -> None:
        """Destroy every entry and empty the surface."""
        with self._lock:
            for entry in self._entries:
                entry.destroyed = True
            self._entries.clear()
            if self._surface is not None:
                self._surface.clear()

    def cleanup(self) -> None:
        """Detach from the surface. Later entries are kept but not displayed."""
        with self._lock:
            self._surface = None

    # Private ---------------------------------------------------------------------------------------------------------

    def _add(self, values: tuple[Any, ...], level: StyleTag) -> RenderedEntry:
        with self._lock:
            entry = RenderedEntry(args=values, level=level)
            entry.fragment = self.format(*values, detail=entry.detail)
            if self._surface is None:
                warnings.warn(
                    "EmbeddedConsole is detached from its surface, entry is not displayed",
                    RuntimeWarning,
                    stacklevel=3,
                )
            else:
                entry.handle = self._surface.append(entry.fragment, level)
            self._entries.append(entry)
            return entry

    def _elapsed(self, start: float) -> str:
        return f"{(self._clock() - start) * 1000:.3f}ms"
