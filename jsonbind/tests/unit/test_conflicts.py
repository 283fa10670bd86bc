# jsonbind/tests/unit/test_conflicts.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""Test suite for same-name binding deduplication."""

import logging

import pytest

from jsonbind.core.base import Binding, WrapperDescriptor
from jsonbind.core.conflicts import ConflictResolver
from jsonbind.core.constructors import ParameterizedConstructor
from jsonbind.core.descriptors import ClassDescriptor
from jsonbind.core.errors import BindingNameConflict
from jsonbind.core.reflection import MethodRef
from jsonbind.interfaces.types import Direction


class Target:
    def apply(self, first, second):
        pass


# -----------------------------------------------------------------------------
# FIXTURES
# -----------------------------------------------------------------------------
@pytest.fixture
def resolver() -> ConflictResolver:
    return ConflictResolver()


def decoding(**parts) -> ClassDescriptor:
    return ClassDescriptor(clazz=Target, type=Target, direction=Direction.DECODE, **parts)


def encoding(**parts) -> ClassDescriptor:
    return ClassDescriptor(clazz=Target, type=Target, direction=Direction.ENCODE, **parts)


def wrapper(*params: Binding) -> WrapperDescriptor:
    return WrapperDescriptor(MethodRef("apply", Target, Target.apply), list(params))


# -----------------------------------------------------------------------------
# DECODE TESTS
# -----------------------------------------------------------------------------
def test_distinct_names_are_untouched(resolver: ConflictResolver):
    desc = decoding(fields=[Binding("a"), Binding("b")], setters=[Binding("c")])
    resolver.deduplicate(desc)
    assert [b.name for b in desc.all_decoder_bindings()] == ["a", "b", "c"]


def test_setter_supersedes_field(resolver: ConflictResolver):
    field, setter = Binding("name"), Binding("name")
    desc = decoding(fields=[field, Binding("id")], setters=[setter])
    resolver.deduplicate(desc)
    assert field not in desc.fields
    assert desc.setters == [setter]
    assert [b.name for b in desc.all_decoder_bindings()] == ["id", "name"]


def test_ctor_parameter_supersedes_setter_and_field(resolver: ConflictResolver):
    field, setter, param = Binding("x"), Binding("x"), Binding("x")
    ctor = ParameterizedConstructor(ctor=Target, ctor_parameters=[param])
    desc = decoding(fields=[field], setters=[setter], ctor=ctor)
    resolver.deduplicate(desc)
    assert desc.fields == []
    assert desc.setters == []
    assert desc.all_decoder_bindings() == [param]


def test_wrapper_parameter_supersedes_field(resolver: ConflictResolver):
    field, param = Binding("first"), Binding("first")
    desc = decoding(fields=[field], wrappers=[wrapper(param, Binding("second"))])
    resolver.deduplicate(desc)
    assert desc.fields == []
    assert [b.name for b in desc.all_decoder_bindings()] == ["first", "second"]


def test_wrapper_parameter_supersedes_setter(resolver: ConflictResolver):
    setter, param = Binding("first"), Binding("first")
    desc = decoding(setters=[setter], wrappers=[wrapper(param)])
    resolver.deduplicate(desc)
    assert desc.setters == []
    assert desc.all_decoder_bindings() == [param]


@pytest.mark.parametrize(
    "parts, kind",
    [
        ({"fields": [Binding("a"), Binding("a")]}, "field"),
        ({"setters": [Binding("a"), Binding("a")]}, "setter"),
        ({"wrappers": [wrapper(Binding("a"), Binding("a"))]}, "wrapper parameter"),
        (
            {"ctor": ParameterizedConstructor(ctor=Target, ctor_parameters=[Binding("a"), Binding("a")])},
            "ctor parameter",
        ),
        (
            {
                "wrappers": [wrapper(Binding("a"))],
                "ctor": ParameterizedConstructor(ctor=Target, ctor_parameters=[Binding("a")]),
            },
            "ctor parameter",
        ),
    ],
)
def test_decode_conflicts(resolver: ConflictResolver, parts, kind: str):
    with pytest.raises(BindingNameConflict) as exc_info:
        resolver.deduplicate(decoding(**parts))
    assert exc_info.value.name == "a"
    assert exc_info.value.kind == kind


def test_supersession_is_logged(resolver: ConflictResolver, caplog):
    desc = decoding(fields=[Binding("name")], setters=[Binding("name")])
    with caplog.at_level(logging.DEBUG, logger="jsonbind.core.conflicts"):
        resolver.deduplicate(desc)
    assert "supersedes" in caplog.text


# -----------------------------------------------------------------------------
# ENCODE TESTS
# -----------------------------------------------------------------------------
def test_getter_supersedes_field_and_takes_its_index(resolver: ConflictResolver):
    field = Binding("name", idx=3)
    getter = Binding("name")
    desc = encoding(fields=[Binding("id", idx=0), field], getters=[getter])
    resolver.deduplicate(desc)
    assert field not in desc.fields
    assert getter.idx == 3
    assert [b.name for b in desc.all_encoder_bindings()] == ["id", "name"]


def test_encode_ignores_setters(resolver: ConflictResolver):
    desc = encoding(fields=[Binding("a")], setters=[Binding("a")])
    resolver.deduplicate(desc)
    assert len(desc.fields) == 1


@pytest.mark.parametrize(
    "parts, kind",
    [
        ({"fields": [Binding("a"), Binding("a")]}, "field"),
        ({"getters": [Binding("a"), Binding("a")]}, "getter"),
        ({"fields": [Binding("a")], "getters": [Binding("a"), Binding("a")]}, "getter"),
    ],
)
def test_encode_conflicts(resolver: ConflictResolver, parts, kind: str):
    with pytest.raises(BindingNameConflict) as exc_info:
        resolver.deduplicate(encoding(**parts))
    assert exc_info.value.kind == kind
