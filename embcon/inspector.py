"""
Recursive value inspector for the embedded console.

Renders any runtime value as a styled fragment, the way a debugging console
shows a logged value. Containers are walked property by property with a
call-scoped cycle tracker and an optional depth limit; every other kind is a
leaf whose text is derived once and escaped once.

Collapsed detail shows the first few properties of each container on one
line; expanded detail shows all of them, one per line.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import functools
import inspect
import re
import textwrap
import traceback
import warnings
from dataclasses import dataclass, field
from enum import StrEnum, unique
from typing import Any, Callable, Iterator, Literal, NamedTuple

# Local ----------------------------------------------------------------------------------------------------------------
from .classify import Kind, classify, instance_namespace, is_container, slot_names
from .markup import (
    COLLAPSED_ARROW,
    COLLAPSED_CHAR,
    EXPANDED_ARROW,
    FUNCTION_SIGNATURE,
    PLAIN,
    Markup,
    StyleTag,
    style_of,
)
from .utils import class_name, ctor_prefix

CIRCULAR = "[Circular]"
GETTER = "[Getter]"
UNKNOWN = "[Unknown]"

MAX_STR = 100
MAX_COLLAPSED_PROPERTIES = 5

_PATTERN_FLAGS = (
    ("a", re.ASCII),
    ("i", re.IGNORECASE),
    ("L", re.LOCALE),
    ("m", re.MULTILINE),
    ("s", re.DOTALL),
    ("x", re.VERBOSE),
)


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class Detail(StrEnum):
    """Detail level of a rendered container."""
    COLLAPSED = "collapsed"
    EXPANDED = "expanded"

    def flipped(self) -> "Detail":
        return Detail.EXPANDED if self is Detail.COLLAPSED else Detail.COLLAPSED


class Evaluation(NamedTuple):
    """Outcome of deriving text from a value: either text or the error raised."""
    text: str | None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class Tracker:
    """
    Cycle and depth bookkeeping for one top-level render call.

    Containers are remembered by identity and kept alive until the call ends,
    so an id is never reused by a container built during rendering. Any
    container reachable twice in one rendering is shown once and thereafter
    as ``[Circular]``.
    """
    __slots__ = ("seen", "max_depth")

    def __init__(self, max_depth: int | None = None) -> None:
        self.seen: dict[int, Any] = {}
        self.max_depth = max_depth

    def enter(self, value: Any) -> bool:
        """Mark a container as visited. False if it was visited already in this call."""
        key = id(value)
        if key in self.seen:
            return False
        self.seen[key] = value
        return True

    def too_deep(self, depth: int) -> bool:
        return self.max_depth is not None and depth > self.max_depth


class _Prop(NamedTuple):
    key: Any
    value: Any = None
    bare: bool = False
    hidden: bool = False
    accessor: bool = False
    structural: bool = False


@dataclass(frozen=True)
class Inspector:
    """
    Value renderer bound to a markup strategy and limits.

    Attributes:
        markup: How leaves are escaped and wrapped (plain text or HTML spans).
        max_depth: Containers nested deeper than this render as ``[ClassName]``.
            None means unbounded.
        max_str: Nested strings and top-level function sources are cut to this length.
        max_collapsed: Properties shown per container at collapsed detail.
        on_error: "skip" renders failures as ``[Unknown]`` silently,
            "warn" also issues a RuntimeWarning.

    Examples:
        >>> Inspector().render({1, 2})
        'Set(2) {1, 2}'
        >>> Inspector().render({"a": 1, "b": "x"})
        '⯈ {a: 1, b: "x"}'
        >>> Inspector().render([1, 2])
        '⯈ (2) [1, 2]'
    """
    markup: Markup = field(default=PLAIN)
    max_depth: int | None = None
    max_str: int = MAX_STR
    max_collapsed: int = MAX_COLLAPSED_PROPERTIES
    on_error: Literal["skip", "warn"] = "skip"

    def render(
        self,
        value: Any,
        detail: Detail = Detail.COLLAPSED,
        *,
        nested: bool = False,
        tracker: Tracker | None = None,
        depth: int = 0,
    ) -> str:
        """
        Render a value as a styled fragment. Never raises.

        Args:
            value: Any Python object.
            detail: Collapsed or expanded container layout.
            nested: True when the value is a property of a container; strings
                are then quoted and functions shown by name only.
            tracker: Cycle tracker of the enclosing call. A fresh one is created
                for top-level calls.
            depth: Nesting depth of the value, 0 at top level.
        """
        if tracker is None:
            tracker = Tracker(self.max_depth)
        try:
            return self._render(value, detail, nested, tracker, depth)
        except Exception as e:
            # Container-level failures (len, iteration, item access) end here
            return self._unknown(value, e)

    def is_expandable(self, value: Any) -> bool:
        """True if the value renders differently at the two detail levels."""
        return is_container(classify(value))

    # Private -----------------------------------------------------------------------------------------------------

    def _render(self, value: Any, detail: Detail, nested: bool, tracker: Tracker, depth: int) -> str:
        kind = classify(value)

        if is_container(kind):
            if tracker.too_deep(depth):
                return self.markup.wrap(StyleTag.OBJECT, f"[{class_name(value)}]")
            if not tracker.enter(value):
                return CIRCULAR
            if kind is Kind.SET:
                return self._render_set(value, detail, tracker, depth)
            if kind is Kind.MAP:
                return self._render_map(value, detail, tracker, depth)
            return self._render_props(value, kind, detail, tracker, depth)

        if kind is Kind.STRING:
            if nested:
                return self.markup.wrap(StyleTag.STRING_NESTED, f'"{_trim(value, self.max_str)}"')
            return self.markup.wrap(StyleTag.STRING, value)

        if kind is Kind.NULLISH:
            return self.markup.wrap(StyleTag.NULLISH, "None" if value is None else value.name)

        if kind is Kind.FUNCTION:
            return self._render_function(value, nested)

        if kind is Kind.ERROR:
            return self._leaf(value, kind, _error_text, value)
        if kind is Kind.PATTERN:
            return self._leaf(value, kind, _pattern_literal, value)
        if kind is Kind.BIGINT:
            return self._leaf(value, kind, lambda v: f"{int(v)}n", value)

        # Numbers, booleans and everything else use their default textual form
        return self._leaf(value, kind, str, value)

    def _leaf(self, value: Any, kind: Kind, fn: Callable[[Any], str], *args: Any) -> str:
        outcome = _evaluate(fn, *args)
        if not outcome.ok:
            return self._unknown(value, outcome.error)
        return self.markup.wrap(style_of(kind), outcome.text)

    def _unknown(self, value: Any, error: Exception) -> str:
        if self.on_error == "warn":
            warnings.warn(
                f"Failed to render {class_name(value, fully_qualified=True)}: {_describe(error)}",
                RuntimeWarning,
                stacklevel=3,
            )
        return UNKNOWN

    def _render_set(self, value: Any, detail: Detail, tracker: Tracker, depth: int) -> str:
        name = "Set" if type(value) is set else class_name(value)
        items = [self.render(k, detail, nested=True, tracker=tracker, depth=depth + 1) for k in value]
        body = f"{self.markup.escape(name)}({len(items)}) {{{', '.join(items)}}}"
        return self.markup.wrap(StyleTag.OBJECT, body, escape=False)

    def _render_map(self, value: Any, detail: Detail, tracker: Tracker, depth: int) -> str:
        items = []
        for k, v in value.items():
            k_str = self.render(k, detail, nested=True, tracker=tracker, depth=depth + 1)
            v_str = self.render(v, detail, nested=True, tracker=tracker, depth=depth + 1)
            items.append(f"{k_str} => {v_str}")
        name = "Map" if type(value).__module__ == "builtins" else class_name(value)
        body = f"{self.markup.escape(name)}({len(items)}) {{{', '.join(items)}}}"
        return self.markup.wrap(StyleTag.OBJECT, body, escape=False)

    def _render_props(self, value: Any, kind: Kind, detail: Detail, tracker: Tracker, depth: int) -> str:
        is_array = kind is Kind.ARRAY
        collapsed = detail is Detail.COLLAPSED

        parts: list[str] = []
        more = False
        for prop in _own_props(value, is_array):
            if collapsed and len(parts) >= self.max_collapsed:
                more = True
                break
            parts.append(self._render_prop(prop, detail, tracker, depth))

        if more:
            parts.append(COLLAPSED_CHAR)

        if collapsed:
            inner = ", ".join(parts)
        elif parts:
            brk = self.markup.newline(depth + 1)
            inner = ",".join(brk + p for p in parts) + self.markup.newline(depth)
        else:
            inner = ""

        open_ch, close_ch = ("[", "]") if is_array else ("{", "}")
        body = self._prefix(value, is_array, detail) + open_ch + inner + close_ch
        return self.markup.wrap(StyleTag.OBJECT, body, escape=False)

    def _render_prop(self, prop: _Prop, detail: Detail, tracker: Tracker, depth: int) -> str:
        if prop.accessor:
            result = self._signature() + GETTER
        else:
            result = self.render(prop.value, detail, nested=True, tracker=tracker, depth=depth + 1)

        if prop.bare:
            return result

        key = self._render_key(prop.key, detail, tracker, depth)
        if prop.structural:
            key = f"[{key}]"
        if prop.hidden:
            key = self.markup.wrap(StyleTag.HIDDEN, key, escape=False)
        return f"{key}: {result}"

    def _render_key(self, key: Any, detail: Detail, tracker: Tracker, depth: int) -> str:
        if issubclass(type(key), str):
            return self.markup.escape(key)
        return self.render(key, detail, nested=True, tracker=tracker, depth=depth + 1)

    def _prefix(self, value: Any, is_array: bool, detail: Detail) -> str:
        arrow = COLLAPSED_ARROW if detail is Detail.COLLAPSED else EXPANDED_ARROW
        prefix = self.markup.wrap(StyleTag.ARROW, arrow, escape=False) + " "

        name = self.markup.escape(ctor_prefix(value))
        if is_array:
            size = len(value)
            if size >= 2:
                name += f"({size})"
        if name:
            prefix += name + " "
        return prefix

    def _render_function(self, value: Any, nested: bool) -> str:
        name = getattr(value, "__name__", None)
        if not isinstance(name, str) or not name or name == "<lambda>":
            return self.markup.wrap(StyleTag.FUNCTION, f"() => {COLLAPSED_CHAR}")

        if nested:
            text = f"{name}()"
        else:
            outcome = _evaluate(_function_source, value, name)
            if not outcome.ok:
                return self._unknown(value, outcome.error)
            text = outcome.text
        return self._signature() + self.markup.wrap(StyleTag.FUNCTION, _trim(text, self.max_str))

    def _signature(self) -> str:
        return self.markup.wrap(StyleTag.FUNCTION_SIGNATURE, f"{FUNCTION_SIGNATURE} ", escape=False)


# Methods --------------------------------------------------------------------------------------------------------------

def inspect_value(
    value: Any,
    detail: Detail = Detail.COLLAPSED,
    *,
    markup: Markup = PLAIN,
    max_depth: int | None = None,
    nested: bool = False,
) -> str:
    """
    Render a single value with a fresh tracker.

    Examples:
        >>> inspect_value("text")
        'text'
        >>> inspect_value(["text"])
        '⯈ ["text"]'
        >>> inspect_value(re.compile("abc", re.I))
        '/abc/i'
        >>> inspect_value(2 ** 64)
        '18446744073709551616n'
    """
    return Inspector(markup=markup, max_depth=max_depth).render(value, detail, nested=nested)


# Private Methods ------------------------------------------------------------------------------------------------------

def _own_props(value: Any, is_array: bool) -> Iterator[_Prop]:
    """
    Yield own properties in definition order.

    Arrays yield their elements bare, then instance attributes of sequence
    subclasses as structural keys. Dicts yield their items. Other objects yield
    their instance namespace, then slots, then properties of their classes,
    which are reported as accessors and never read.
    """
    if is_array:
        for item in value:
            yield _Prop(None, item, bare=True)
        ns = instance_namespace(value) or {}
        for name, item in ns.items():
            yield _Prop(name, item, hidden=_is_hidden(name), structural=True)
        return

    if issubclass(type(value), dict):
        for k, v in value.items():
            yield _Prop(k, v)
        return

    ns = instance_namespace(value) or {}
    for name, item in ns.items():
        yield _Prop(name, item, hidden=_is_hidden(name))

    for name in slot_names(value):
        try:
            item = object.__getattribute__(value, name)
        except AttributeError:
            # Unassigned slot
            continue
        yield _Prop(name, item, hidden=_is_hidden(name))

    seen = set(ns)
    for klass in type(value).__mro__:
        if klass.__module__ == "builtins":
            continue
        for name, attr in vars(klass).items():
            if name in seen or not _is_accessor(attr):
                continue
            seen.add(name)
            yield _Prop(name, accessor=True, hidden=_is_hidden(name))


def _is_accessor(attr: Any) -> bool:
    return isinstance(attr, (property, functools.cached_property))


def _is_hidden(name: Any) -> bool:
    return issubclass(type(name), str) and name.startswith("_")


def _evaluate(fn: Callable[..., str], *args: Any) -> Evaluation:
    try:
        return Evaluation(fn(*args))
    except Exception as e:
        return Evaluation(None, e)


def _describe(error: Exception) -> str:
    try:
        return f"{type(error).__name__}: {error}"
    except Exception:
        return type(error).__name__


def _trim(s: str, max_len: int) -> str:
    """
    Cut s to max_len characters, marking the cut with a single ellipsis.

    Examples:
        >>> _trim("abcdef", 3)
        'abc…'
    """
    if len(s) <= max_len:
        return s
    return s[:max_len] + COLLAPSED_CHAR


def _error_text(exc: BaseException) -> str:
    """Full traceback when the exception was raised, else 'Type: message'."""
    if exc.__traceback__ is not None:
        lines = traceback.format_exception(exc)
    else:
        lines = traceback.format_exception_only(exc)
    return "".join(lines).rstrip("\n")


def _pattern_literal(pattern: re.Pattern) -> str:
    """
    Literal source form of a compiled pattern.

    Examples:
        >>> _pattern_literal(re.compile(r"a+b", re.I | re.M))
        '/a+b/im'
    """
    source = pattern.pattern
    if isinstance(source, bytes):
        source = source.decode("ascii", errors="backslashreplace")
    flags = "".join(letter for letter, flag in _PATTERN_FLAGS if pattern.flags & flag)
    return f"/{source}/{flags}"


def _function_source(fn: Any, name: str) -> str:
    """Source text of a function or class, falling back to its signature."""
    try:
        return textwrap.dedent(inspect.getsource(fn)).strip()
    except Exception:
        # No source file, or a stale one that no longer parses
        pass
    try:
        return f"{name}{inspect.signature(fn)}"
    except (TypeError, ValueError):
        return f"{name}()"
