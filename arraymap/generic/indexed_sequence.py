# Copyright (c) 2025, arraymap contributors
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import copy
import logging
from collections.abc import Callable, Iterator, Mapping
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator

from .._errors import (
    IDError,
    ItemExistsError,
    ItemNotFoundError,
    ValidationError,
)
from ..config import settings
from ..types import Undefined
from .index import KeyFunc, build_index, field_getter, has_identity, to_batch

T = TypeVar("T")
K = TypeVar("K")
D = TypeVar("D")

__all__ = ("IndexedSequence",)

logger = logging.getLogger(__name__)


class IndexedSequence(BaseModel, Generic[T, K]):
    """An ordered list of records with an identity -> position index.

    Records keep their insertion order, and can be looked up, replaced,
    appended and removed by identity in near-constant time. The identity is
    read from the ``id_field`` of each record (by key for mappings, by
    attribute otherwise) or computed by a caller-supplied ``key`` function.

    The value is immutable by contract: ``update``, ``add`` and ``remove``
    return a new handle and leave the receiver untouched. With
    ``copy_on_write=False`` the backing list and index are instead mutated in
    place and shared by the returned handle, so older handles observe the
    change; only a single owner may use such a sequence.

    Records whose identity is missing, ``None`` or unhashable stay in the
    sequence but are never indexed. Falsy identities such as ``0`` or ``""``
    are indexed like any other.

    Attributes:
        items (list[T]):
            The records, in order.
        id_field (str | None):
            Name of the identity field.
        key (Callable[[T], K] | None):
            Identity accessor used instead of ``id_field``. Not serialized.
        copy_on_write (bool):
            Copy backing storage before each mutating operation.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    items: list[T] = Field(
        default_factory=list,
        title="Items",
        description="The records of the sequence, in order.",
    )
    id_field: str | None = Field(
        None,
        title="ID Field",
        description="Name of the field holding each record's identity.",
    )
    key: Callable[[T], K] | None = Field(
        None,
        exclude=True,
        repr=False,
        description="Accessor computing a record's identity.",
    )
    copy_on_write: bool = Field(
        default_factory=lambda: settings.COPY_ON_WRITE,
        description="Copy backing storage before each mutation.",
    )
    _index: dict[K, int] = PrivateAttr(default_factory=dict)
    _getter: KeyFunc | None = PrivateAttr(None)

    @field_validator("items", mode="before")
    def _validate_items(cls, value: Any) -> list[Any]:
        if value is None:
            return []
        if isinstance(value, list):
            return value
        return to_batch(value)

    def model_post_init(self, __context: Any) -> None:
        """Resolve the identity accessor and build the index.

        A non-empty ``index`` passed through the validation context is
        trusted as-is; otherwise the index is rebuilt from ``items``.
        """
        super().model_post_init(__context)
        if self.key is not None:
            self._getter = self.key
        elif self.id_field is not None:
            self._getter = field_getter(self.id_field)
        else:
            raise ValidationError(
                "IndexedSequence requires either 'id_field' or 'key'."
            )

        index = (__context or {}).get("index")
        if index:
            self._index = dict(index)
        else:
            self._index = build_index(self.items, self._getter)

    @classmethod
    def create(
        cls,
        items: Any = None,
        id_field: str | None = None,
        index: Mapping[K, int] | None = None,
        *,
        key: Callable[[T], K] | None = None,
        copy_on_write: bool | None = None,
    ) -> IndexedSequence[T, K]:
        """Build a sequence from records and an identity field.

        Args:
            items: A list of records, a single record, or None.
            id_field: Name of the identity field.
            index: Optional precomputed identity -> position mapping. When
                omitted or empty it is built by scanning ``items``.
            key: Identity accessor, used instead of ``id_field``.
            copy_on_write: Overrides ``settings.COPY_ON_WRITE``.

        Returns:
            IndexedSequence: The new sequence.
        """
        data: dict[str, Any] = {
            "items": items,
            "id_field": id_field,
            "key": key,
        }
        if copy_on_write is not None:
            data["copy_on_write"] = copy_on_write
        return cls.model_validate(data, context={"index": index})

    # ------------------------------------------------------------------
    # queries
    # ------------------------------------------------------------------

    @property
    def index(self) -> dict[K, int]:
        """A copy of the identity -> position mapping."""
        return dict(self._index)

    def identity_of(self, record: Any) -> K | Any:
        """Return the identity of ``record``, or ``Undefined`` if none."""
        if record is None:
            return Undefined
        id_ = self._getter(record)
        return id_ if has_identity(id_) else Undefined

    def get_position(self, id_: Any, default: D = Undefined) -> int | D:
        """Return the position of the record with identity ``id_``.

        Args:
            id_: The identity to look up.
            default: Returned when the identity is not indexed.

        Returns:
            int | D: The position, or ``default``.
        """
        if not has_identity(id_):
            return default
        return self._index.get(id_, default)

    def get(self, id_: Any, default: D = Undefined) -> T | D:
        """Return the record with identity ``id_``, or ``default``."""
        position = self.get_position(id_)
        if position is Undefined:
            return default
        return self.items[position]

    def size(self) -> int:
        """Number of records, including unindexed ones."""
        return len(self.items)

    def is_empty(self) -> bool:
        return self.size() == 0

    def is_last(self, id_: Any) -> bool:
        """Whether ``id_`` identifies the final record of this sequence."""
        position = self.get_position(id_)
        if position is Undefined:
            return False
        return position == self.size() - 1

    def to_list(self) -> list[T]:
        """Return the records in order, as a new list."""
        return list(self.items)

    def ids(self) -> list[K]:
        """Return the indexed identities in sequence order."""
        return sorted(self._index, key=self._index.__getitem__)

    def __len__(self) -> int:
        return len(self.items)

    def __bool__(self) -> bool:
        return bool(self.items)

    def __contains__(self, id_: Any) -> bool:
        return self.get_position(id_) is not Undefined

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __getitem__(self, key: int | slice) -> T | IndexedSequence[T, K]:
        """Get a record by position, or a new sequence for a slice.

        Raises:
            IndexError: If the position is out of range.
            TypeError: If ``key`` is neither an int nor a slice.
        """
        if isinstance(key, slice):
            return self._derive(self.items[key])
        if not isinstance(key, int):
            key_cls = key.__class__.__name__
            raise TypeError(
                f"indices must be integers or slices, not {key_cls}"
            )
        return self.items[key]

    # ------------------------------------------------------------------
    # mutations
    # ------------------------------------------------------------------

    def update(
        self, items: Any, /, *, strict: bool | None = None
    ) -> IndexedSequence[T, K]:
        """Replace records that share an identity with the given ones.

        Each matched slot receives a shallow copy of the candidate; fields
        absent from the candidate are dropped. Candidates whose identity is
        not indexed are ignored.

        Args:
            items: One record or a list/tuple of records.
            strict: Raise instead of ignoring unknown identities. Defaults
                to ``settings.STRICT``.

        Returns:
            IndexedSequence: A handle over the updated records.

        Raises:
            ItemNotFoundError: In strict mode, if any candidate's identity
                is not in the sequence. Nothing is updated.
            IDError: In strict mode, if a candidate has no identity.
        """
        candidates = to_batch(items)
        if self._is_strict(strict):
            if any(self.identity_of(c) is Undefined for c in candidates):
                raise IDError("Cannot update items without an identity.")
            missing = [
                self.identity_of(c)
                for c in candidates
                if self.get_position(self.identity_of(c)) is Undefined
            ]
            if missing:
                raise ItemNotFoundError(
                    "Cannot update items that are not in the sequence.",
                    details={"ids": missing},
                )

        records = list(self.items) if self.copy_on_write else self.items
        skipped = 0
        for candidate in candidates:
            position = self.get_position(self.identity_of(candidate))
            if position is Undefined:
                skipped += 1
                continue
            records[position] = copy.copy(candidate)

        if skipped:
            logger.debug("update skipped %d unknown item(s)", skipped)
        # positions are unchanged, so the index can be shared
        return self._derive(records, self._index)

    def add(
        self, items: Any, /, *, strict: bool | None = None
    ) -> IndexedSequence[T, K]:
        """Append records whose identity is not yet in the sequence.

        Candidates whose identity already exists, including an earlier
        candidate of the same batch, are skipped. Candidates without an
        identity are appended but not indexed. ``None`` is ignored.

        Args:
            items: One record or a list/tuple of records.
            strict: Raise instead of skipping existing identities. Defaults
                to ``settings.STRICT``.

        Returns:
            IndexedSequence: A handle over the extended records.

        Raises:
            ItemExistsError: In strict mode, if any candidate's identity is
                already present or repeated in the batch. Nothing is added.
        """
        candidates = [c for c in to_batch(items) if c is not None]
        if self._is_strict(strict):
            seen: set[Any] = set()
            duplicates = []
            for candidate in candidates:
                id_ = self.identity_of(candidate)
                if id_ is Undefined:
                    continue
                if id_ in self._index or id_ in seen:
                    duplicates.append(id_)
                seen.add(id_)
            if duplicates:
                raise ItemExistsError(
                    "Cannot add items that already exist.",
                    details={"ids": duplicates},
                )

        if self.copy_on_write:
            records, index = list(self.items), dict(self._index)
        else:
            records, index = self.items, self._index

        skipped = 0
        for candidate in candidates:
            id_ = self.identity_of(candidate)
            if id_ is not Undefined and id_ in index:
                skipped += 1
                continue
            records.append(candidate)
            if id_ is not Undefined:
                index[id_] = len(records) - 1

        if skipped:
            logger.debug("add skipped %d existing item(s)", skipped)
        return self._derive(records, index)

    def remove(
        self, ids: Any, /, *, strict: bool | None = None
    ) -> IndexedSequence[T, K]:
        """Remove the records with the given identities.

        All positions are resolved before anything is removed; survivors
        keep their relative order and the index is rebuilt from scratch.
        Unknown identities are skipped and duplicates count once.

        Args:
            ids: One identity or a list/tuple of identities.
            strict: Raise instead of skipping unknown identities. Defaults
                to ``settings.STRICT``.

        Returns:
            IndexedSequence: A handle over the remaining records.

        Raises:
            ItemNotFoundError: In strict mode, if any identity is not in
                the sequence. Nothing is removed.
            IDError: In strict mode, if an identity is None or unhashable.
        """
        batch = to_batch(ids)
        if self._is_strict(strict):
            invalid = [i for i in batch if not has_identity(i)]
            if invalid:
                raise IDError(
                    "Identities must be hashable and not None.",
                    details={"ids": invalid},
                )

        doomed: set[int] = set()
        unknown = []
        for id_ in batch:
            position = self.get_position(id_)
            if position is Undefined:
                unknown.append(id_)
            else:
                doomed.add(position)

        if unknown:
            if self._is_strict(strict):
                raise ItemNotFoundError(
                    "Cannot remove items that are not in the sequence.",
                    details={"ids": unknown},
                )
            logger.debug("remove skipped %d unknown id(s)", len(unknown))

        survivors = [r for i, r in enumerate(self.items) if i not in doomed]
        index = build_index(survivors, self._getter)
        if self.copy_on_write:
            return self._derive(survivors, index)

        self.items[:] = survivors
        self._index.clear()
        self._index.update(index)
        return self._derive(self.items, self._index)

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    def _is_strict(self, strict: bool | None) -> bool:
        return settings.STRICT if strict is None else strict

    def _derive(
        self, items: list[T], index: dict[K, int] | None = None
    ) -> IndexedSequence[T, K]:
        """Wrap ``items`` and ``index`` in a new handle without copying them.

        When ``index`` is None it is rebuilt from ``items``.
        """
        new = self.model_copy(update={"items": items})
        if index is None:
            index = build_index(items, self._getter)
        new._index = index
        return new
