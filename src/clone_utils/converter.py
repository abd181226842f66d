"""Converter: moves objects in and out of the tree representation.

Encoding goes through ``pydantic_core.to_jsonable_python`` (dataclasses,
pydantic models, TypedDicts, enums, datetimes, sets, tuples, ...), followed
by ``TreeBuilder`` and, when exclusions are given, the pruner.  Decoding
validates the tree's plain value into the requested type with a
``pydantic.TypeAdapter``.  Unknown fields are ignored on decode, which is
pydantic's default for models and dataclasses.

Architecture:
- Two ``EncoderConfig`` values drive the converter: ``encoding`` (defaults to
  ``NON_NULL``) and ``decoding`` (defaults to ``NON_FAILING``).  They are
  frozen and shared by reference.
- ``TypeAdapter`` construction builds a full validation schema, so adapters
  are cached per converter in an LRU cache keyed by target type.  The cache is
  the only mutable state a converter holds; a lock serialises access to it.
- Encoding drops null members, so decoding first writes explicit None back
  for fields that admit None but have no default (``clone_utils.nulls``).
- numpy arrays and numpy scalars are not known to pydantic; they are turned
  into lists and Python scalars by the serialisation fallback.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from typing import Any

import numpy as np
from cachetools import LRUCache
from pydantic import TypeAdapter, ValidationError
from pydantic.errors import PydanticSchemaGenerationError
from pydantic_core import PydanticSerializationError, to_jsonable_python

from clone_utils.config import NON_FAILING, NON_NULL, EncoderConfig
from clone_utils.errors import ConversionError
from clone_utils.nulls import fill_nulls
from clone_utils.tree.builder import JsonValue, TreeBuilder
from clone_utils.tree.nodes import TreeNode
from clone_utils.tree.paths import as_paths
from clone_utils.tree.pruner import prune

__all__ = ["Converter"]

logger = logging.getLogger(__name__)


def _coerce_foreign(value: Any) -> Any:
    """Serialisation fallback for values pydantic does not know."""
    if isinstance(value, np.ndarray):
        return value.tolist()
    if isinstance(value, np.generic):
        return value.item()
    raise TypeError(f"Unable to serialize unknown type: {type(value)!r}")


class Converter:
    """Encodes objects into trees and decodes trees into typed objects.

    Example::

        from clone_utils.converter import Converter

        converter = Converter()
        tree = converter.encode(user, ["password"])
        clone = converter.decode(tree, User)
    """

    def __init__(
        self,
        encoding: EncoderConfig = NON_NULL,
        decoding: EncoderConfig = NON_FAILING,
        max_cache_size: int = 128,
    ) -> None:
        """Initialise the converter.

        Args:
            encoding: Options for serialising objects into trees.
            decoding: Options for validating trees back into types.
            max_cache_size: Maximum number of ``TypeAdapter`` instances kept
                in the per-instance LRU cache.
        """
        self._encoding = encoding
        self._decoding = decoding
        self._builder = TreeBuilder(exclude_none=encoding.exclude_none)
        self._adapters: LRUCache[Any, TypeAdapter[Any]] = LRUCache(
            maxsize=max_cache_size
        )
        self._lock = threading.Lock()

    @property
    def encoding(self) -> EncoderConfig:
        return self._encoding

    @property
    def decoding(self) -> EncoderConfig:
        return self._decoding

    # ------------------------------------------------------------------
    # Encoding
    # ------------------------------------------------------------------

    def to_jsonable(self, obj: Any) -> JsonValue:
        """Serialise ``obj`` into plain dicts, lists and scalars.

        Raises:
            ConversionError: If ``obj`` holds a value that cannot be serialised.
        """
        try:
            return to_jsonable_python(
                obj,
                by_alias=self._encoding.by_alias,
                exclude_none=self._encoding.exclude_none,
                bytes_mode=self._encoding.bytes_mode,
                timedelta_mode=self._encoding.timedelta_mode,
                fallback=_coerce_foreign,
            )
        except (PydanticSerializationError, TypeError, ValueError) as exc:
            raise ConversionError(
                f"cannot encode {type(obj).__name__}: {exc}",
                details={"operation": "encode", "type": type(obj).__qualname__},
            ) from exc

    def encode(self, obj: Any, excluded_paths: Iterable[str] | str = ()) -> TreeNode:
        """Encode ``obj`` into a tree and prune ``excluded_paths`` from it.

        Null members are omitted under the default ``NON_NULL`` encoding.
        """
        return prune(self._build(obj), excluded_paths)

    def encode_filtered(
        self, obj: Any, allowed_paths: Iterable[str] | str
    ) -> dict[str, Any]:
        """Return only the requested top-level members of ``obj``.

        Every requested key is present in the result.  Keys ``obj`` does not
        have (or whose value is null) map to None, so that merging the result
        clears them on the target.  A non-object ``obj`` yields None for
        every key.
        """
        # Nested nulls are dropped here; only requested keys may be null
        flat = self._build(obj).to_python()
        if not isinstance(flat, dict):
            flat = {}
        return {path: flat.get(path) for path in as_paths(allowed_paths)}

    # ------------------------------------------------------------------
    # Decoding
    # ------------------------------------------------------------------

    def decode(self, tree: TreeNode, target_type: Any) -> Any:
        """Validate ``tree`` into an instance of ``target_type``.

        Fields unknown to ``target_type`` are ignored.

        Raises:
            ConversionError: If the tree's shape or values cannot be coerced
                into ``target_type``, or no schema can be built for it.
        """
        name = getattr(target_type, "__qualname__", repr(target_type))
        logger.debug("decoding %s tree as %s", tree.node_type, name)
        try:
            adapter = self._adapter(target_type)
            return adapter.validate_python(
                fill_nulls(tree.to_python(), target_type),
                strict=self._decoding.strict,
            )
        except (ValidationError, PydanticSchemaGenerationError) as exc:
            raise ConversionError(
                f"cannot decode tree as {name}: {exc}",
                details={"operation": "decode", "type": name},
            ) from exc

    def _build(self, obj: Any) -> TreeNode:
        try:
            return self._builder.build(self.to_jsonable(obj))
        except TypeError as exc:
            raise ConversionError(
                f"cannot encode {type(obj).__name__}: {exc}",
                details={"operation": "encode", "type": type(obj).__qualname__},
            ) from exc

    def _adapter(self, target_type: Any) -> TypeAdapter[Any]:
        with self._lock:
            adapter = self._adapters.get(target_type)
            if adapter is None:
                adapter = TypeAdapter(target_type)
                self._adapters[target_type] = adapter
        return adapter
