# jsonbind/tests/unit/test_introspection.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""Test suite for generic type-parameter resolution."""

from typing import Annotated, Any, Dict, Generic, List, Optional, TypeVar, Union

import pytest

from jsonbind.core.errors import UnresolvedTypeShape
from jsonbind.core.introspection import (
    collect_type_variable_lookup,
    raw_class,
    resolve_type,
    resolve_type_variable,
    specialize_implementation,
    type_signature,
)

T = TypeVar("T")
K = TypeVar("K")
V = TypeVar("V")


# -----------------------------------------------------------------------------
# TEST TYPES
# -----------------------------------------------------------------------------
class Box(Generic[T]):
    value: T


class StrBox(Box[str]):
    pass


class Pair(Generic[K, V]):
    key: K
    value: V


class Keyed(Pair[str, V]):
    pass


class IntKeyed(Keyed[int]):
    pass


class ListBox(Box[List[T]], Generic[T]):
    pass


class Plain:
    name: str


class Labelled:
    label: str


class LabelledBox(Labelled, Box[float]):
    pass


class OtherBox(Box[T]):
    pass


class PlainBox(Box):
    pass


class Swapped(Pair[V, K]):
    pass


# -----------------------------------------------------------------------------
# RAW CLASS TESTS
# -----------------------------------------------------------------------------
def test_raw_class_of_parameterized_type():
    assert raw_class(Box[str]) is Box
    assert raw_class(Dict[str, int]) is dict


def test_raw_class_of_plain_and_annotated_types():
    assert raw_class(Plain) is Plain
    assert raw_class(Annotated[Box[int], "marker"]) is Box


def test_raw_class_leaves_non_classes_alone():
    union = Union[int, str]
    assert raw_class(union) is union


# -----------------------------------------------------------------------------
# LOOKUP COLLECTION TESTS
# -----------------------------------------------------------------------------
def test_lookup_for_directly_parameterized_type():
    lookup = collect_type_variable_lookup(Box[str])
    assert lookup == {("T", Box): str}


def test_lookup_for_subclass_of_parameterized_base():
    lookup = collect_type_variable_lookup(StrBox)
    assert resolve_type_variable(lookup, "T", Box) is str


def test_lookup_substitutes_along_the_chain():
    lookup = collect_type_variable_lookup(IntKeyed)
    assert lookup[("V", Keyed)] is int
    assert lookup[("K", Pair)] is str
    assert lookup[("V", Pair)] is int


def test_lookup_substitutes_inside_nested_arguments():
    lookup = collect_type_variable_lookup(ListBox[int])
    assert lookup[("T", ListBox)] is int
    assert lookup[("T", Box)] == List[int]


def test_lookup_walks_every_base():
    lookup = collect_type_variable_lookup(LabelledBox)
    assert lookup == {("T", Box): float}


def test_lookup_of_plain_class_is_empty():
    assert collect_type_variable_lookup(Plain) == {}
    assert collect_type_variable_lookup(object) == {}


def test_unbound_type_variable_is_absent():
    lookup = collect_type_variable_lookup(Box)
    assert resolve_type_variable(lookup, "T", Box) is None


@pytest.mark.parametrize("shape", [Union[int, str], Optional[int], 42, "Box"])
def test_unsupported_shapes_raise(shape: Any):
    with pytest.raises(UnresolvedTypeShape) as exc_info:
        collect_type_variable_lookup(shape)
    assert exc_info.value.type is not None


# -----------------------------------------------------------------------------
# RESOLUTION TESTS
# -----------------------------------------------------------------------------
def test_resolve_type_replaces_variables_of_owner():
    lookup = {("T", Box): str}
    assert resolve_type(T, lookup, Box) is str
    assert resolve_type(List[T], lookup, Box) == List[str]
    assert resolve_type(Dict[str, T], lookup, Box) == Dict[str, str]


def test_resolve_type_keeps_variables_of_other_owners():
    lookup = {("T", Box): str}
    assert resolve_type(T, lookup, ListBox) is T


def test_resolve_type_passes_concrete_types_through():
    assert resolve_type(int, {}, Box) is int
    assert resolve_type(List[int], {}, Box) == List[int]


# -----------------------------------------------------------------------------
# SIGNATURE TESTS
# -----------------------------------------------------------------------------
def test_type_signature_of_classes():
    assert type_signature(int) == "builtins.int"
    assert type_signature(Plain) == f"{Plain.__module__}.Plain"


def test_type_signature_of_parameterized_types():
    assert type_signature(Box[str]) == f"{Box.__module__}.Box[builtins.str]"
    assert type_signature(Box[str]) != type_signature(Box[int])


def test_type_signature_of_type_variable():
    assert type_signature(T) == "~T"


# -----------------------------------------------------------------------------
# IMPLEMENTATION SPECIALIZATION TESTS
# -----------------------------------------------------------------------------
def test_specialize_generic_implementation():
    tp, lookup = specialize_implementation(Box[int], OtherBox)
    assert tp == OtherBox[int]
    assert resolve_type_variable(lookup, "T", Box) is int
    assert resolve_type_variable(lookup, "T", OtherBox) is int


def test_specialize_implementation_with_reordered_variables():
    tp, lookup = specialize_implementation(Pair[str, int], Swapped)
    assert tp == Swapped[str, int]
    assert lookup[("K", Pair)] is str
    assert lookup[("V", Pair)] is int


def test_specialize_non_generic_implementation_keeps_arguments():
    tp, lookup = specialize_implementation(Box[str], PlainBox)
    assert tp is PlainBox
    assert lookup[("T", Box)] is str


def test_specialize_unparameterized_request():
    tp, lookup = specialize_implementation(Box, OtherBox)
    assert tp is OtherBox
    assert lookup == collect_type_variable_lookup(OtherBox)
