"""
Nullish sentinel objects for the embedded console.

Python has a single "absent" value, ``None``. The console also needs an
"unset" value so that a host can log a variable that was never assigned and
see it rendered as nullish rather than as an ordinary object. All sentinels
are singletons compared by identity.

Sentinels:
    UNSET: Represents a value that was never provided (distinct from None)
    MISSING: Marks a slot in a data structure that has no value yet

Helper Functions:
    is_nullish: True for None and every sentinel defined here

Example:
    >>> console.log("token:", UNSET)   # renders "token: UNSET"
    >>> def merge(self, max_depth: int | None | UnsetType = UNSET): ...
"""

from typing import Any, Final

__all__ = [
    'UNSET',
    'MISSING',
    'UnsetType',
    'MissingType',
    'is_nullish',
]


# Base Sentinel --------------------------------------------------------------------------------------------------------

class _SentinelBase:
    """
    Base class for nullish sentinels.

    Sentinels are falsy singletons; ``name`` is the literal shown by the console.
    """
    __slots__ = ('_name',)

    def __init__(self, name: str) -> None:
        self._name = name

    @property
    def name(self) -> str:
        """Literal name rendered for this sentinel."""
        return self._name

    def __repr__(self) -> str:
        return f'<{self._name}>'

    def __str__(self) -> str:
        return self._name

    def __eq__(self, other: Any) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> tuple:
        return (self.__class__, ())


# Sentinel Types -------------------------------------------------------------------------------------------------------

class MissingType(_SentinelBase):
    """
    Sentinel type for MISSING.

    Marks a container slot or field that has not received a value yet.
    """
    _instance: 'MissingType | None' = None

    def __new__(cls) -> 'MissingType':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        if not hasattr(self, '_name'):
            super().__init__("MISSING")


class UnsetType(_SentinelBase):
    """
    Sentinel type for UNSET.

    Distinguishes 'not provided' from 'explicitly set to None', both for
    logged values and for optional keyword arguments.
    """
    _instance: 'UnsetType | None' = None

    def __new__(cls) -> 'UnsetType':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        if not hasattr(self, '_name'):
            super().__init__("UNSET")


# Sentinel Objects -----------------------------------------------------------------------------------------------------

MISSING: Final[MissingType] = MissingType()
"""Sentinel for a slot with no value yet."""

UNSET: Final[UnsetType] = UnsetType()
"""
Sentinel representing an unprovided value.

Use with identity check: `if arg is UNSET:`
"""


# Helper Functions -----------------------------------------------------------------------------------------------------

def is_nullish(value: Any) -> bool:
    """True for None, UNSET and MISSING."""
    return value is None or issubclass(type(value), _SentinelBase)
