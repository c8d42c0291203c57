# Copyright (c) 2025, arraymap contributors
#
# SPDX-License-Identifier: Apache-2.0

from .index import build_index, field_getter, has_identity, to_batch
from .indexed_sequence import IndexedSequence

__all__ = (
    "IndexedSequence",
    "build_index",
    "field_getter",
    "has_identity",
    "to_batch",
)
