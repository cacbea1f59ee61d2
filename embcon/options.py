"""
Console configuration.

ConsoleOptions is an immutable set of settings accepted by EmbeddedConsole.
Module-level defaults can be changed with configure() and are picked up by
consoles created without explicit options.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import threading
from dataclasses import dataclass, replace
from typing import Any, Literal, Self

# Local ----------------------------------------------------------------------------------------------------------------
from .inspector import MAX_COLLAPSED_PROPERTIES, MAX_STR, Inspector
from .markup import Markup
from .sentinels import UNSET, UnsetType
from .utils import class_name

Preset = Literal["default", "html", "plain"]


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class ConsoleOptions:
    """
    Settings of an embedded console.

    Attributes:
        width: Surface width; an int is taken as pixels, a str as a CSS length.
        height: Surface height, same rules as width.
        allow_html: Pass caller-supplied markup through unescaped. Only enable it
            for trusted input: with it, any logged string can inject markup.
        max_depth: Containers nested deeper than this render as a placeholder.
            None means unbounded.
        markup: "html" for styled spans, "plain" for unstyled text.
        on_error: "skip" or "warn" when a value cannot be rendered.
        max_collapsed: Properties shown per container at collapsed detail.
        max_str: Length at which nested strings and function sources are cut.

    Examples:
        >>> ConsoleOptions(max_depth=2).merge(markup="plain").max_depth
        2
    """
    width: int | str = "100%"
    height: int | str = "100%"
    allow_html: bool = False
    max_depth: int | None = None
    markup: Literal["html", "plain"] = "html"
    on_error: Literal["skip", "warn"] = "skip"
    max_collapsed: int = MAX_COLLAPSED_PROPERTIES
    max_str: int = MAX_STR

    def __post_init__(self):
        for name in ("width", "height"):
            val = getattr(self, name)
            if isinstance(val, bool) or not isinstance(val, (int, str)):
                raise TypeError(f"{name} must be int | str, but got {class_name(val)}")
            if isinstance(val, int) and val < 0:
                raise ValueError(f"{name} must be >=0, but got {val!r}")
        if not isinstance(self.allow_html, bool):
            raise TypeError(f"allow_html must be bool, but got {class_name(self.allow_html)}")
        if self.max_depth is not None:
            if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
                raise TypeError(f"max_depth must be int | None, but got {class_name(self.max_depth)}")
            if self.max_depth < 0:
                raise ValueError(f"max_depth must be >=0, but got {self.max_depth!r}")
        if self.markup not in ("html", "plain"):
            raise ValueError(f"markup must be 'html' or 'plain', not {self.markup!r}")
        if self.on_error not in ("skip", "warn"):
            raise ValueError(f"on_error must be 'skip' or 'warn', not {self.on_error!r}")
        for name in ("max_collapsed", "max_str"):
            val = getattr(self, name)
            if isinstance(val, bool) or not isinstance(val, int):
                raise TypeError(f"{name} must be an int, but got {class_name(val)}")
            if val < 1:
                raise ValueError(f"{name} must be >=1, but got {val!r}")

    @classmethod
    def html(cls) -> Self:
        """Styled HTML spans with escaped leaves."""
        return cls(markup="html")

    @classmethod
    def plain(cls) -> Self:
        """Unstyled text output."""
        return cls(markup="plain")

    def merge(self,
              *,
              width: int | str | UnsetType = UNSET,
              height: int | str | UnsetType = UNSET,
              allow_html: bool | UnsetType = UNSET,
              max_depth: int | None | UnsetType = UNSET,
              markup: str | UnsetType = UNSET,
              on_error: str | UnsetType = UNSET,
              max_collapsed: int | UnsetType = UNSET,
              max_str: int | UnsetType = UNSET,
              ) -> Self:
        """
        Return a copy with the given fields replaced; UNSET fields are kept.

        None is a meaningful value for max_depth (unbounded), hence UNSET as the default.
        """
        given = {
            "width": width,
            "height": height,
            "allow_html": allow_html,
            "max_depth": max_depth,
            "markup": markup,
            "on_error": on_error,
            "max_collapsed": max_collapsed,
            "max_str": max_str,
        }
        return replace(self, **{k: v for k, v in given.items() if v is not UNSET})

    @property
    def css_width(self) -> str:
        return _css_length(self.width)

    @property
    def css_height(self) -> str:
        return _css_length(self.height)

    def inspector(self) -> Inspector:
        """Value renderer configured from these options."""
        if self.markup == "html":
            markup = Markup.html(allow_html=self.allow_html)
        else:
            markup = Markup.plain()
        return Inspector(
            markup=markup,
            max_depth=self.max_depth,
            max_str=self.max_str,
            max_collapsed=self.max_collapsed,
            on_error=self.on_error,
        )


# Module defaults ------------------------------------------------------------------------------------------------------

_lock = threading.Lock()
_options = ConsoleOptions()


def configure(preset: Preset | None = None, **kwargs: Any) -> ConsoleOptions:
    """
    Update the module-level default options.

    Args:
        preset: Start from a preset instead of the current defaults.
            None merges into the current defaults.
        **kwargs: Fields to override, as accepted by ConsoleOptions.merge().

    Returns:
        The new default options.

    Examples:
        >>> configure(preset="plain", max_depth=3).markup
        'plain'
    """
    global _options
    with _lock:
        if preset is None:
            base = _options
        elif preset == "default":
            base = ConsoleOptions()
        elif preset == "html":
            base = ConsoleOptions.html()
        elif preset == "plain":
            base = ConsoleOptions.plain()
        else:
            raise ValueError(f"preset must be 'default', 'html' or 'plain', not {preset!r}")
        _options = base.merge(**kwargs)
        return _options


def get_options() -> ConsoleOptions:
    """Current module-level default options."""
    return _options


def reset_options() -> ConsoleOptions:
    """Restore the built-in default options."""
    return configure(preset="default")


# Private Methods ------------------------------------------------------------------------------------------------------

def _css_length(value: int | str) -> str:
    if isinstance(value, int):
        return f"{value}px"
    return value
