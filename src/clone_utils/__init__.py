"""clone-utils - deep clone, patch and compare structured objects."""

from __future__ import annotations

import logging

from clone_utils.api import (
    compare,
    deep_clone,
    deep_equals,
    deep_patch,
    deep_patch_fields_only,
    patch,
)
from clone_utils.cloner import Cloner
from clone_utils.comparator import TreeComparator
from clone_utils.config import NON_FAILING, NON_NULL, EncoderConfig
from clone_utils.converter import Converter
from clone_utils.errors import CloneError, ConversionError
from clone_utils.result import ComparisonResult

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__: str = "0.1.0"
__all__: list[str] = [
    "NON_FAILING",
    "NON_NULL",
    "CloneError",
    "Cloner",
    "ComparisonResult",
    "ConversionError",
    "Converter",
    "EncoderConfig",
    "TreeComparator",
    "compare",
    "deep_clone",
    "deep_equals",
    "deep_patch",
    "deep_patch_fields_only",
    "patch",
]
