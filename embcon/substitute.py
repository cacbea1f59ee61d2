"""
printf-style placeholder substitution for log messages.

When the first logged argument is a string, its ``%s %d %i %f %o %O``
directives consume the following arguments; whatever is left over is logged
after the message as separate values.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import numbers
from typing import Any, Callable, NamedTuple, Sequence

DIRECTIVES = frozenset("sdifoO")


# Classes --------------------------------------------------------------------------------------------------------------

class Substitution(NamedTuple):
    """
    Result of placeholder substitution.

    Attributes:
        head: The message built from the format string, or None when the first
            argument was not a string and no substitution took place.
        rest: Arguments that were not consumed by a directive, in order.
    """
    head: str | None
    rest: list[Any]


# Methods --------------------------------------------------------------------------------------------------------------

def substitute(
    args: Sequence[Any],
    *,
    render: Callable[[Any], str] | None = None,
    literal: Callable[[str], str] | None = None,
) -> Substitution:
    """
    Substitute printf-style directives in the first argument.

    The format string is scanned left to right. Each recognized directive takes
    the next unused trailing argument; when none is left the directive text is
    kept as is. ``%%`` yields a single ``%``, and a ``%`` followed by any other
    character (or ending the string) is dropped.

    Args:
        args: Logged arguments. Substitution happens only if ``args[0]`` is a str.
        render: Text of a substituted value. Defaults to ``str``; the console
            passes its top-level renderer so that objects are fully inspected.
        literal: Maps runs of plain format text, e.g. to escape and style them.
            Defaults to identity.

    Returns:
        Substitution with the built head and the unconsumed arguments.

    Examples:
        >>> substitute(["%s-%d", "x", 5])
        Substitution(head='x-5', rest=[])
        >>> substitute(["%s", "x", 5])
        Substitution(head='x', rest=[5])
        >>> substitute(["%s"])
        Substitution(head='%s', rest=[])
        >>> substitute(["100%% sure"])
        Substitution(head='100% sure', rest=[])
        >>> substitute([42, "x"])
        Substitution(head=None, rest=[42, 'x'])
    """
    args = list(args)
    if not args or not issubclass(type(args[0]), str):
        return Substitution(None, args)

    render = render or str
    literal = literal or (lambda text: text)

    fmt, trailing = args[0], args[1:]
    used = 0
    out: list[str] = []
    text: list[str] = []

    def flush() -> None:
        if text:
            out.append(literal("".join(text)))
            text.clear()

    i = 0
    while i < len(fmt):
        char = fmt[i]
        if char != "%":
            text.append(char)
            i += 1
            continue

        nxt = fmt[i + 1] if i + 1 < len(fmt) else ""
        if nxt == "%":
            text.append("%")
        elif nxt in DIRECTIVES:
            if used < len(trailing):
                flush()
                out.append(_convert(nxt, trailing[used], render))
                used += 1
            else:
                text.append("%" + nxt)
        elif nxt:
            # Unknown directive: drop the percent, keep the character
            text.append(nxt)
        i += 2

    flush()
    return Substitution("".join(out), trailing[used:])


# Private Methods ------------------------------------------------------------------------------------------------------

def _convert(directive: str, value: Any, render: Callable[[Any], str]) -> str:
    """Numeric directives coerce real numbers, every other value uses its rendered form."""
    cls = type(value)
    if issubclass(cls, numbers.Real) and not issubclass(cls, bool):
        try:
            if directive in "di":
                return render(int(value))
            if directive == "f":
                return render(float(value))
        except Exception:
            # NaN, infinities and broken __int__/__float__ keep their rendered form
            pass
    return render(value)
