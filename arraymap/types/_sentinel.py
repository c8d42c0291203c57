# Copyright (c) 2025, arraymap contributors
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import Any, Final, Literal

__all__ = (
    "Undefined",
    "SingletonType",
    "UndefinedType",
    "is_sentinel",
)


class _SingletonMeta(type):
    """Metaclass that guarantees exactly one instance per subclass.

    Sentinels keep their identity across the whole process, so they can be
    compared with ``is``.
    """

    _cache: dict[type, SingletonType] = {}

    def __call__(cls, *a, **kw):
        if cls not in cls._cache:
            cls._cache[cls] = super().__call__(*a, **kw)
        return cls._cache[cls]


class SingletonType(metaclass=_SingletonMeta):
    """Base class for singleton sentinel types.

    - identity preserved across copy and deepcopy
    - falsy
    - readable repr
    """

    __slots__: tuple[str, ...] = ()

    def __deepcopy__(self, memo):
        return self

    def __copy__(self):
        return self

    # concrete classes *must* override the two methods below
    def __bool__(self) -> bool: ...
    def __repr__(self) -> str: ...


class UndefinedType(SingletonType):
    """Sentinel for a value that is missing altogether.

    Returned by lookups on an indexed sequence when an identity is not
    indexed, and used as the identity of records that carry none.

    Example:
        >>> seq.get("missing") is Undefined
        True
    """

    __slots__ = ()

    def __bool__(self) -> Literal[False]:
        return False

    def __repr__(self) -> Literal["Undefined"]:
        return "Undefined"

    def __str__(self) -> Literal["Undefined"]:
        return "Undefined"

    def __reduce__(self):
        """Ensure pickle preservation of singleton identity."""
        return "Undefined"


Undefined: Final = UndefinedType()
"""A value missing altogether (unknown identity, record without identity)."""


def is_sentinel(value: Any, *, none_as_sentinel: bool = False) -> bool:
    """Check if a value is a sentinel.

    Args:
        value: Any value to check.
        none_as_sentinel: Also treat ``None`` as a sentinel.
    """
    if isinstance(value, SingletonType):
        return True
    return none_as_sentinel and value is None
