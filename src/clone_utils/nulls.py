"""Restores null members that encoding dropped, ahead of validation.

Encoding omits None-valued members.  A field that admits None but has no
default (``note: str | None``) is still required by pydantic, so decoding such
a tree would fail.  ``fill_nulls`` walks a plain value alongside its target
type and writes those members back as an explicit None, recursing into nested
dataclasses, pydantic models, list elements and dict values.

Values whose type cannot be pinned to a single structured member (for example
a dict against ``A | B`` with two dataclasses) are left alone.
"""

from __future__ import annotations

import collections.abc
import dataclasses
import functools
import types
import typing
from typing import Annotated, Any, Union, get_args, get_origin

from pydantic import BaseModel

__all__ = ["fill_nulls"]

_UNION_ORIGINS = (Union, types.UnionType)
_SEQUENCE_ORIGINS = (
    list,
    set,
    frozenset,
    collections.abc.Iterable,
    collections.abc.Collection,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
    collections.abc.MutableSet,
)
_MAPPING_ORIGINS = (dict, collections.abc.Mapping, collections.abc.MutableMapping)

# (accepted keys, first key is written; annotation; required)
_FieldSpec = tuple[tuple[str, ...], Any, bool]


def fill_nulls(value: Any, target_type: Any) -> Any:
    """Write explicit None for omitted nullable required fields, in place.

    Args:
        value:       Plain value produced by ``TreeNode.to_python()``.
        target_type: The type ``value`` is about to be validated into.

    Returns:
        ``value`` itself.
    """
    members = _members(target_type)

    if isinstance(value, dict):
        candidates = [m for m in members if _is_structured(m) or _mapping_args(m)]
        if len(candidates) == 1:
            target = candidates[0]
            if _is_structured(target):
                _fill_object(value, target)
            else:
                value_type = _mapping_args(target)[1]
                for item in value.values():
                    fill_nulls(item, value_type)

    elif isinstance(value, list):
        element_types = [t for t in map(_element_type, members) if t is not None]
        if len(element_types) == 1:
            for item in value:
                fill_nulls(item, element_types[0])

    return value


def _fill_object(obj: dict[str, Any], cls: type) -> None:
    for keys, annotation, required in _field_specs(cls):
        present = next((key for key in keys if key in obj), None)
        if present is not None:
            fill_nulls(obj[present], annotation)
        elif required and _admits_none(annotation):
            obj[keys[0]] = None


@functools.lru_cache(maxsize=256)
def _field_specs(cls: type) -> tuple[_FieldSpec, ...]:
    if issubclass(cls, BaseModel):
        specs: list[_FieldSpec] = []
        for name, info in cls.model_fields.items():
            alias = info.validation_alias
            if not isinstance(alias, str):
                alias = info.alias
            keys = (alias, name) if alias and alias != name else (name,)
            specs.append((keys, info.annotation, info.is_required()))
        return tuple(specs)

    try:
        hints = typing.get_type_hints(cls)
    except (NameError, TypeError):
        # unresolvable forward references: fall back to the raw annotations
        hints = {}
    return tuple(
        (
            (f.name,),
            hints.get(f.name, f.type),
            f.default is dataclasses.MISSING
            and f.default_factory is dataclasses.MISSING,
        )
        for f in dataclasses.fields(cls)
        if f.init
    )


# ---------------------------------------------------------------------------
# Annotation helpers
# ---------------------------------------------------------------------------


def _unwrap(tp: Any) -> Any:
    while get_origin(tp) is Annotated:
        tp = get_args(tp)[0]
    return tp


def _members(tp: Any) -> list[Any]:
    """Non-None members of a union, or ``[tp]`` for anything else."""
    tp = _unwrap(tp)
    if get_origin(tp) in _UNION_ORIGINS:
        return [
            member
            for arg in get_args(tp)
            for member in _members(arg)
            if member is not type(None)
        ]
    return [tp]


def _admits_none(tp: Any) -> bool:
    tp = _unwrap(tp)
    if tp is Any or tp is None or tp is type(None):
        return True
    if get_origin(tp) in _UNION_ORIGINS:
        return any(_admits_none(arg) for arg in get_args(tp))
    return False


def _is_structured(tp: Any) -> bool:
    return isinstance(tp, type) and (
        dataclasses.is_dataclass(tp) or issubclass(tp, BaseModel)
    )


def _mapping_args(tp: Any) -> tuple[Any, ...]:
    if get_origin(tp) in _MAPPING_ORIGINS and len(get_args(tp)) == 2:
        return get_args(tp)
    return ()


def _element_type(tp: Any) -> Any:
    origin = get_origin(tp)
    args = get_args(tp)
    if origin is tuple:
        return args[0] if len(args) == 2 and args[1] is Ellipsis else None
    if origin in _SEQUENCE_ORIGINS and len(args) == 1:
        return args[0]
    return None
