"""
Embcon utilities shared across the package.

Contains name helpers used by both the classifier and the renderer to avoid circular imports.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any

# Methods --------------------------------------------------------------------------------------------------------------

PLAIN_TYPES = (dict, list)


def class_name(obj: Any, fully_qualified: bool = False) -> str:
    """
    Get the class name of an object or a class.

    Returns the class name whether given an instance or the class itself, and
    never raises: an object whose class cannot be read is reported as 'object'.
    The class is looked up with ``type()``, so a ``__class__`` override on the
    instance is ignored.

    Parameters:
        obj (Any): An object or a class.
        fully_qualified (bool): If true, prefix non-builtin names with their module.

    Returns:
        str: The class name.

    Examples:
        >>> class_name(10)
        'int'
        >>> class_name(int)
        'int'
        >>> class C: ...
        >>> class_name(C(), fully_qualified=True)
        '__main__.C'
    """
    cls = obj if issubclass(type(obj), type) else type(obj)
    try:
        name = cls.__qualname__ if fully_qualified else cls.__name__
        module = cls.__module__
    except Exception:
        return "object"

    if fully_qualified and module != "builtins":
        return f"{module}.{name}"
    return name


def ctor_prefix(obj: Any) -> str:
    """
    Constructor name to show in front of a container, or an empty string.

    Plain ``dict`` and ``list`` get no prefix, every other container type is
    named after its class.

    Examples:
        >>> ctor_prefix({})
        ''
        >>> ctor_prefix((1, 2))
        'tuple'
    """
    if type(obj) in PLAIN_TYPES:
        return ""
    return class_name(obj)
