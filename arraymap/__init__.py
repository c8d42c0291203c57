# Copyright (c) 2025, arraymap contributors
#
# SPDX-License-Identifier: Apache-2.0

import logging

from ._errors import (
    ArrayMapError,
    IDError,
    ItemExistsError,
    ItemNotFoundError,
    ValidationError,
)
from .config import settings
from .generic import IndexedSequence
from .types import Undefined
from .version import __version__

logger = logging.getLogger(__name__)
logger.setLevel(settings.LOG_LEVEL)

__all__ = (
    "__version__",
    "ArrayMapError",
    "IDError",
    "IndexedSequence",
    "ItemExistsError",
    "ItemNotFoundError",
    "Undefined",
    "ValidationError",
    "logger",
    "settings",
)
