"""Tests for Converter: encode, encode_filtered, decode and the adapter cache.

Covers:
- Encoding dataclasses, pydantic models (aliases), dicts and numpy values
- Null members omitted on encode, exclusions pruned
- encode_filtered explicit-null semantics, nested nulls omitted
- Decoding with unknown fields ignored, omitted nullable fields restored,
  lax vs strict validation
- ConversionError (a CloneError) for incompatible shapes and unknown types
"""

from __future__ import annotations

from datetime import datetime, timedelta

import numpy as np
import pytest
from pydantic import ValidationError
from sample_models import (
    Address,
    LineItem,
    Note,
    Order,
    Person,
    PersonModel,
    PersonSummary,
    Plain,
)

from clone_utils.config import EncoderConfig
from clone_utils.converter import Converter
from clone_utils.errors import CloneError, ConversionError
from clone_utils.tree.builder import TreeBuilder
from clone_utils.tree.nodes import NodeType

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def converter() -> Converter:
    return Converter()


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------


class TestEncode:
    def test_dataclass_nulls_omitted(self, converter: Converter) -> None:
        tree = converter.encode(Person(name="Ann", address=Address(city="X")))
        assert tree.to_python() == {"name": "Ann", "address": {"city": "X"}}

    def test_dict_nulls_omitted(self, converter: Converter) -> None:
        tree = converter.encode({"a": None, "b": {"c": None, "d": 1}})
        assert tree.to_python() == {"b": {"d": 1}}

    def test_exclusions_pruned(self, converter: Converter) -> None:
        person = Person(name="Ann", age=3, address=Address(city="X", zip="1"))
        tree = converter.encode(person, ["age", "address.city"])
        assert tree.to_python() == {"name": "Ann", "address": {"zip": "1"}}

    def test_exclusion_inside_array(self, converter: Converter) -> None:
        order = Order(id="o1", lines=[LineItem("a", 1.0), LineItem("b", 2.0)])
        tree = converter.encode(order, "lines.price")
        assert tree.to_python() == {"id": "o1", "lines": [{"sku": "a"}, {"sku": "b"}]}

    def test_pydantic_alias_used(self, converter: Converter) -> None:
        tree = converter.encode(PersonModel(full_name="Ann"))
        assert tree.to_python() == {"fullName": "Ann"}

    def test_datetime_encoded_as_string(self, converter: Converter) -> None:
        tree = converter.encode(Order(id="o", created=datetime(2024, 1, 2, 3, 4, 5)))
        created = tree.get("created")
        assert created is not None
        assert created.value == "2024-01-02T03:04:05"

    def test_none_encodes_to_null_scalar(self, converter: Converter) -> None:
        tree = converter.encode(None)
        assert tree.node_type == NodeType.SCALAR
        assert tree.value is None

    def test_numpy_values(self, converter: Converter) -> None:
        tree = converter.encode({"v": np.array([1, 2]), "n": np.int64(3)})
        assert tree.to_python() == {"v": [1, 2], "n": 3}

    def test_unknown_type_raises_conversion_error(self, converter: Converter) -> None:
        with pytest.raises(ConversionError) as exc_info:
            converter.encode({"x": Plain()})
        assert exc_info.value.details["operation"] == "encode"
        assert exc_info.value.__cause__ is not None

    def test_timedelta_mode(self) -> None:
        converter = Converter(encoding=EncoderConfig(timedelta_mode="float"))
        assert converter.to_jsonable({"t": timedelta(seconds=90)}) == {"t": 90.0}


class TestEncodeFiltered:
    def test_only_requested_keys(self, converter: Converter) -> None:
        patch_map = converter.encode_filtered(Person(name="Ann", age=3), ["age"])
        assert patch_map == {"age": 3}

    def test_missing_keys_are_explicit_none(self, converter: Converter) -> None:
        patch_map = converter.encode_filtered(Person(age=3), ["name", "age"])
        assert patch_map == {"name": None, "age": 3}

    def test_nested_values_kept_whole(self, converter: Converter) -> None:
        person = Person(address=Address(city="X"))
        assert converter.encode_filtered(person, ["address"]) == {
            "address": {"city": "X"}
        }

    def test_nested_nulls_omitted(self, converter: Converter) -> None:
        order = Order(id="o", lines=[LineItem(sku="a")])
        assert converter.encode_filtered(order, ["lines"]) == {
            "lines": [{"sku": "a"}]
        }

    def test_dots_not_split(self, converter: Converter) -> None:
        person = Person(address=Address(city="X"))
        assert converter.encode_filtered(person, ["address.city"]) == {
            "address.city": None
        }

    def test_non_object_yields_none_for_every_key(self, converter: Converter) -> None:
        assert converter.encode_filtered(None, ["a", "b"]) == {"a": None, "b": None}


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


class TestDecode:
    def test_decode_dataclass(self, converter: Converter) -> None:
        tree = TreeBuilder().build({"name": "Ann", "address": {"city": "X"}})
        assert converter.decode(tree, Person) == Person(
            name="Ann", address=Address(city="X")
        )

    def test_unknown_fields_ignored(self, converter: Converter) -> None:
        tree = TreeBuilder().build({"name": "Ann", "age": 3, "extra": {"x": 1}})
        assert converter.decode(tree, PersonSummary) == PersonSummary("Ann", 3)

    def test_omitted_nullable_field_decodes_as_none(
        self, converter: Converter
    ) -> None:
        tree = TreeBuilder().build({"title": "a"})
        assert converter.decode(tree, Note) == Note("a", None)

    def test_lax_coercion(self, converter: Converter) -> None:
        tree = TreeBuilder().build({"age": "5"})
        assert converter.decode(tree, PersonSummary).age == 5

    def test_strict_rejects_coercion(self) -> None:
        converter = Converter(decoding=EncoderConfig(strict=True))
        tree = TreeBuilder().build({"age": "5"})
        with pytest.raises(ConversionError):
            converter.decode(tree, PersonModel)

    def test_incompatible_shape(self, converter: Converter) -> None:
        tree = TreeBuilder().build([1, 2])
        with pytest.raises(ConversionError) as exc_info:
            converter.decode(tree, Person)
        assert isinstance(exc_info.value.__cause__, ValidationError)
        assert exc_info.value.details == {"operation": "decode", "type": "Person"}

    def test_uncoercible_value(self, converter: Converter) -> None:
        tree = TreeBuilder().build({"age": "not-a-number"})
        with pytest.raises(CloneError):
            converter.decode(tree, Person)

    def test_no_schema_for_type(self, converter: Converter) -> None:
        with pytest.raises(ConversionError):
            converter.decode(TreeBuilder().build({}), Plain)

    def test_decode_generic_alias(self, converter: Converter) -> None:
        tree = TreeBuilder().build([{"sku": "a"}])
        assert converter.decode(tree, list[LineItem]) == [LineItem(sku="a")]


class TestAdapterCache:
    def test_adapter_reused(self, converter: Converter) -> None:
        assert converter._adapter(Person) is converter._adapter(Person)

    def test_cache_bounded(self) -> None:
        converter = Converter(max_cache_size=1)
        converter._adapter(Person)
        converter._adapter(Address)
        assert len(converter._adapters) == 1

    def test_separate_instances_do_not_share(self) -> None:
        first = Converter()
        second = Converter()
        first._adapter(Person)
        assert len(second._adapters) == 0
