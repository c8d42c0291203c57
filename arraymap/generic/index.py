# Copyright (c) 2025, arraymap contributors
#
# SPDX-License-Identifier: Apache-2.0

"""Identity extraction and index building for indexed sequences.

An index maps the identity of each record to its position in the backing
list. It is a derived structure: ``build_index`` can always reconstruct it
from the records alone. Records whose identity is absent (missing field,
``None``, a sentinel, or an unhashable value) are never indexed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable, Iterable, Mapping
from typing import Any, TypeVar

from ..types import Undefined, is_sentinel

__all__ = (
    "KeyFunc",
    "field_getter",
    "has_identity",
    "build_index",
    "to_batch",
)

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)

KeyFunc = Callable[[Any], Any]

logger = logging.getLogger(__name__)


def field_getter(id_field: str) -> KeyFunc:
    """Return an accessor reading ``id_field`` from a record.

    Mappings are read by key, any other object by attribute. A missing field
    yields ``Undefined``.
    """

    def _get(record: Any) -> Any:
        if isinstance(record, Mapping):
            return record.get(id_field, Undefined)
        return getattr(record, id_field, Undefined)

    _get.__name__ = f"get_{id_field}"
    return _get


def has_identity(value: Any) -> bool:
    """Whether ``value`` can be used as an index key.

    Falsy values such as ``0`` or ``""`` are valid identities; only ``None``,
    the sentinels and unhashable values are not.
    """
    if is_sentinel(value, none_as_sentinel=True):
        return False
    # a tuple is Hashable by type even when it holds a list
    try:
        hash(value)
    except TypeError:
        return False
    return True


def build_index(records: Iterable[T], key: KeyFunc) -> dict[Any, int]:
    """Scan ``records`` in order and map each present identity to its position.

    If two records share an identity the later position wins.
    """
    index: dict[Any, int] = {}
    for position, record in enumerate(records):
        if record is None:
            continue
        id_ = key(record)
        if has_identity(id_):
            index[id_] = position
    logger.debug("Built index with %d entries", len(index))
    return index


def to_batch(value: Any) -> list[Any]:
    """Normalise a single value or a list/tuple of values into a list."""
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]
