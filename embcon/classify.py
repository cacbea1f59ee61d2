"""
Value classification for the embedded console.

Sorts any runtime value into exactly one closed Kind. The renderer switches on
the Kind once per node, so every type test lives here and precedence is
decided in one place.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import collections.abc as abc
import functools
import numbers
import re
import types
from enum import Enum, StrEnum, unique
from typing import Any

# Local ----------------------------------------------------------------------------------------------------------------
from .sentinels import is_nullish

# Largest integer a double holds exactly; wider ints are shown as big integers
MAX_SAFE_INTEGER = 2 ** 53 - 1

_ROUTINE_TYPES = (
    types.FunctionType,
    types.MethodType,
    types.BuiltinFunctionType,
    types.MethodWrapperType,
    types.WrapperDescriptorType,
    types.MethodDescriptorType,
    types.ClassMethodDescriptorType,
    functools.partial,
    type,
)


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class Kind(StrEnum):
    """
    Closed set of value categories, listed in classification precedence.
    """
    NULLISH = "nullish"
    ERROR = "error"
    PATTERN = "pattern"
    SET = "set"
    MAP = "map"
    ARRAY = "array"
    OBJECT = "object"
    FUNCTION = "function"
    BIGINT = "bigint"
    NUMBER = "number"
    STRING = "string"
    FALLBACK = "fallback"


CONTAINER_KINDS = frozenset({Kind.ARRAY, Kind.OBJECT, Kind.SET, Kind.MAP})


# Methods --------------------------------------------------------------------------------------------------------------

def classify(value: Any) -> Kind:
    """
    Classify a value into a single Kind.

    Total and side-effect free: user ``__getattr__``, properties and
    ``__getattribute__`` overrides are never triggered, and any error raised
    while probing the value classifies it as FALLBACK.

    Precedence (first match wins):
        nullish, error, pattern, set, map, array, object, function,
        bigint, number (incl. bool), string, fallback.

    Examples:
        >>> classify(None)
        <Kind.NULLISH: 'nullish'>
        >>> classify({1, 2})
        <Kind.SET: 'set'>
        >>> classify({"a": 1})
        <Kind.OBJECT: 'object'>
        >>> classify(2 ** 60)
        <Kind.BIGINT: 'bigint'>
    """
    try:
        return _classify(value)
    except Exception:
        return Kind.FALLBACK


def is_container(kind: Kind) -> bool:
    """True for kinds the renderer recurses into."""
    return kind in CONTAINER_KINDS


def instance_namespace(value: Any) -> dict | None:
    """
    Return the instance ``__dict__`` without going through ``__getattribute__``, or None.
    """
    try:
        ns = object.__getattribute__(value, "__dict__")
    except AttributeError:
        return None
    return ns if isinstance(ns, dict) else None


def slot_names(value: Any) -> list[str]:
    """
    Names of ``__slots__`` declared by user classes in the MRO, in definition order.
    """
    names: list[str] = []
    for klass in reversed(type(value).__mro__):
        if klass.__module__ == "builtins":
            continue
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name not in ("__dict__", "__weakref__") and name not in names:
                names.append(name)
    return names


# Private Methods ------------------------------------------------------------------------------------------------------

def _classify(value: Any) -> Kind:
    # Type-level checks only: isinstance() would read __class__ through the instance
    cls = type(value)
    if is_nullish(value):
        return Kind.NULLISH
    if issubclass(cls, BaseException):
        return Kind.ERROR
    if issubclass(cls, re.Pattern):
        return Kind.PATTERN
    if issubclass(cls, abc.Set):
        return Kind.SET
    if issubclass(cls, abc.Mapping) and not issubclass(cls, dict):
        return Kind.MAP
    if issubclass(cls, abc.Sequence) and not _is_textual(cls):
        return Kind.ARRAY
    if _is_object(value, cls):
        return Kind.OBJECT
    if issubclass(cls, _ROUTINE_TYPES) or callable(value):
        return Kind.FUNCTION
    if issubclass(cls, int) and not issubclass(cls, bool) and abs(value) > MAX_SAFE_INTEGER:
        return Kind.BIGINT
    if issubclass(cls, numbers.Number):
        return Kind.NUMBER
    if issubclass(cls, str):
        return Kind.STRING
    return Kind.FALLBACK


def _is_textual(cls: type) -> bool:
    return issubclass(cls, (str, bytes, bytearray))


def _is_object(value: Any, cls: type) -> bool:
    """Dicts, and instances carrying their own attribute namespace."""
    if issubclass(cls, dict):
        return True
    # Routines, classes and modules have a __dict__ but are not attribute bags
    if issubclass(cls, _ROUTINE_TYPES + (types.ModuleType,)):
        return False
    if issubclass(cls, (str, bytes, bytearray, numbers.Number, Enum)):
        return False
    return instance_namespace(value) is not None or bool(slot_names(value))
