"""
Style tags and markup for rendered console fragments.

Every leaf the renderer emits is tagged with a StyleTag and wrapped by a
Markup strategy. Escaping happens exactly once, at the leaf; composed
fragments are wrapped with escaping disabled so nested spans survive.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from dataclasses import dataclass
from enum import StrEnum

# Third-party ----------------------------------------------------------------------------------------------------------
from frozendict import frozendict

# Local ----------------------------------------------------------------------------------------------------------------
from .classify import Kind

COLLAPSED_CHAR = "…"
COLLAPSED_ARROW = "⯈"
EXPANDED_ARROW = "⯆"
FUNCTION_SIGNATURE = "ƒ"


# Classes --------------------------------------------------------------------------------------------------------------

class StyleTag(StrEnum):
    """
    CSS class names used to style console fragments.

    Nested strings share the regexp class, so REGEXP is an alias of STRING_NESTED.

    Members are str subclasses and can be used directly as class attribute values.
    """
    NULLISH = "ec-nullish"
    STRING = "ec-string"
    # Strings nested in containers look like regular expressions
    STRING_NESTED = "ec-regexp"
    NUMERIC = "ec-numeric"
    REGEXP = "ec-regexp"
    OBJECT = "ec-object"
    FUNCTION = "ec-function"
    FUNCTION_SIGNATURE = "ec-function-signature"
    # Hidden (non-enumerable) property keys
    HIDDEN = "ec-hidden"
    ARROW = "ec-collapse-arrow"
    LOG = "ec-log"
    WARNING = "ec-warning"
    ERROR = "ec-error"


_STYLES = frozendict({
    Kind.NULLISH: StyleTag.NULLISH,
    Kind.ERROR: StyleTag.STRING,
    Kind.PATTERN: StyleTag.REGEXP,
    Kind.SET: StyleTag.OBJECT,
    Kind.MAP: StyleTag.OBJECT,
    Kind.ARRAY: StyleTag.OBJECT,
    Kind.OBJECT: StyleTag.OBJECT,
    Kind.FUNCTION: StyleTag.FUNCTION,
    Kind.BIGINT: StyleTag.STRING,
    Kind.NUMBER: StyleTag.NUMERIC,
    Kind.STRING: StyleTag.STRING,
    Kind.FALLBACK: StyleTag.STRING,
})


@dataclass(frozen=True)
class Markup:
    """
    Markup strategy applied to rendered leaves.

    Attributes:
        name: Strategy name, "html" or "plain".
        spans: Wrap fragments in ``<span class="...">`` elements.
        escape_leaves: Neutralize markup-significant characters in leaf text.
            Only meaningful with spans; disabled by ``allow_html``.
        indent: Indentation unit for expanded containers.
    """
    name: str = "plain"
    spans: bool = False
    escape_leaves: bool = False
    indent: str = "  "

    @classmethod
    def html(cls, allow_html: bool = False) -> "Markup":
        """HTML spans; leaf text is escaped unless allow_html is set."""
        return cls(name="html", spans=True, escape_leaves=not allow_html, indent="&nbsp;&nbsp;")

    @classmethod
    def plain(cls) -> "Markup":
        """Unstyled text, for terminals, files and tests."""
        return cls()

    def escape(self, text: str) -> str:
        """Escape leaf text; plain markup and allow_html pass text through."""
        if not self.escape_leaves:
            return text
        return escape_html(text)

    def wrap(self, tag: StyleTag, text: str, escape: bool = True) -> str:
        """Wrap a fragment with a style tag. Pass escape=False for composed fragments."""
        body = self.escape(text) if escape else text
        if not self.spans:
            return body
        return f'<span class="{tag}">{body}</span>'

    def newline(self, depth: int) -> str:
        """Line break followed by indentation for a property at the given depth."""
        brk = "<br />" if self.spans else "\n"
        return brk + self.indent * depth


PLAIN = Markup.plain()
HTML = Markup.html()


# Methods --------------------------------------------------------------------------------------------------------------

def style_of(kind: Kind, *, nested: bool = False) -> StyleTag:
    """
    Style tag for a classified value.

    Examples:
        >>> style_of(Kind.NUMBER)
        <StyleTag.NUMERIC: 'ec-numeric'>
        >>> style_of(Kind.STRING, nested=True)
        <StyleTag.STRING_NESTED: 'ec-regexp'>
    """
    if nested and kind is Kind.STRING:
        return StyleTag.STRING_NESTED
    return _STYLES.get(kind, StyleTag.STRING)


def escape_html(text: str) -> str:
    """
    Neutralize markup-significant characters.

    Examples:
        >>> escape_html("<b> & x\\n")
        '&lt;b&gt;&nbsp;&amp;&nbsp;x<br />'
    """
    parts = []
    for char in text:
        if char == "&":
            parts.append("&amp;")
        elif char == "<":
            parts.append("&lt;")
        elif char == ">":
            parts.append("&gt;")
        elif char == " ":
            parts.append("&nbsp;")
        elif char == "\n":
            parts.append("<br />")
        else:
            parts.append(char)
    return "".join(parts)
