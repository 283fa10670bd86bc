# jsonbind/core/resolver.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import inspect
from typing import Any, List, Optional

from jsonbind.core.base import Binding
from jsonbind.core.constructors import ConstructorDescriptor, NoConstructor, ObjectFactory, ZeroArgConstructor
from jsonbind.core.errors import AccessorConstructionFailure, JsonBindError
from jsonbind.core.introspection import resolve_type
from jsonbind.core.metadata import is_transient, method_metadata, split_annotated
from jsonbind.core.reflection import FieldRef, MethodRef
from jsonbind.interfaces.protocols import ReflectionProvider
from jsonbind.interfaces.types import Direction, TypeLookup
from jsonbind.runtime.extensions import ExtensionPipeline

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


def accessor_name(method_name: str, prefix: str, allow_private: bool = False) -> Optional[str]:
    """
    Derive the external name of an accessor: ``setFoo`` / ``set_foo`` -> ``foo``.

    Returns None when ``method_name`` is not ``prefix`` followed by a word
    boundary (an upper-case letter, a digit or an underscore) and at least one
    more character, so ``settle`` or ``getaway`` are not accessors. With
    ``allow_private`` one leading underscore is ignored: ``_set_foo`` -> ``foo``.
    """
    if allow_private and method_name.startswith("_") and not method_name.startswith("__"):
        method_name = method_name[1:]
    if not method_name.startswith(prefix):
        return None
    suffix = method_name[len(prefix) :]
    if not suffix or not (suffix[0].isupper() or suffix[0].isdigit() or suffix[0] == "_"):
        return None
    if suffix[0] == "_":
        suffix = suffix[1:]
    if not suffix:
        return None
    return suffix[0].lower() + suffix[1:]


class BindingResolver:
    """
    Discovers candidate bindings of a class: fields, setters, getters and the
    constructor strategy.
    """

    def __init__(self, reflection: ReflectionProvider, extensions: ExtensionPipeline) -> None:
        self._reflection = reflection
        self._extensions = extensions

    def get_fields(
        self, lookup: TypeLookup, clazz: type, direction: Direction, include_private: bool
    ) -> List[Binding]:
        bindings = []
        for ref in self._reflection.fields(clazz, include_private):
            if ref.static:
                continue
            if direction is Direction.DECODE and is_transient(ref.metadata):
                continue
            if not include_private and not self._reflection.is_public_type(ref.declared_type):
                continue
            bindings.append(self._binding_from_field(lookup, clazz, ref))
        return bindings

    def _binding_from_field(self, lookup: TypeLookup, clazz: type, ref: FieldRef) -> Binding:
        try:
            value_type = resolve_type(ref.declared_type, lookup, ref.owner)
        except Exception as e:
            raise AccessorConstructionFailure(repr(ref), e) from e
        return Binding(name=ref.name, value_type=value_type, accessor=ref, metadata=ref.metadata, clazz=clazz)

    def get_setters(self, lookup: TypeLookup, clazz: type, include_private: bool) -> List[Binding]:
        setters = []
        for method in self._reflection.methods(clazz, include_private):
            name = accessor_name(method.name, "set", include_private)
            if name is None:
                continue
            params = method.parameters()
            if len(params) != 1 or params[0].kind not in _POSITIONAL:
                continue
            binding = self._binding_from_method(lookup, clazz, name, method, params[0].name, not include_private)
            if binding is not None:
                setters.append(binding)
        for name, owner, prop in self._reflection.properties(clazz, include_private):
            if prop.fset is None:
                continue
            method = MethodRef(name, owner, prop.fset)
            params = method.parameters()
            if len(params) != 1:
                continue
            binding = self._binding_from_method(lookup, clazz, name, method, params[0].name, not include_private)
            if binding is not None:
                setters.append(binding)
        return setters

    def get_getters(self, lookup: TypeLookup, clazz: type, include_private: bool) -> List[Binding]:
        getters = []
        for method in self._reflection.methods(clazz, include_private):
            name = accessor_name(method.name, "get", include_private)
            if name is None or method.parameters():
                continue
            getters.append(self._binding_from_method(lookup, clazz, name, method, "return", False))
        for name, owner, prop in self._reflection.properties(clazz, include_private):
            if prop.fget is None:
                continue
            method = MethodRef(name, owner, prop.fget)
            getters.append(self._binding_from_method(lookup, clazz, name, method, "return", False))
        return getters

    def _binding_from_method(
        self,
        lookup: TypeLookup,
        clazz: type,
        name: str,
        method: MethodRef,
        hint_key: str,
        check_visibility: bool,
    ) -> Optional[Binding]:
        hints = self._reflection.type_hints(method)
        declared, metadata = split_annotated(hints.get(hint_key, Any))
        if check_visibility and not self._reflection.is_public_type(declared):
            return None
        try:
            value_type = resolve_type(declared, lookup, method.owner)
        except Exception as e:
            raise AccessorConstructionFailure(repr(method), e) from e
        return Binding(
            name=name,
            value_type=value_type,
            accessor=method,
            metadata=method_metadata(method.function) + metadata,
            clazz=clazz,
        )

    def get_constructor(self, clazz: type) -> ConstructorDescriptor:
        """
        Resolve how instances of ``clazz`` are produced: an extension object
        factory, then an extension-supplied constructor, then the zero-argument
        constructor. Without any of these the type has ``NoConstructor``.
        """
        factory = self._extensions.object_factory(clazz)
        if factory is not None:
            return ObjectFactory(extension=factory)
        ctor = self._extensions.get_constructor(clazz)
        if ctor is not None:
            if not isinstance(ctor, ConstructorDescriptor):
                raise JsonBindError(f"extension returned an invalid constructor for {clazz.__qualname__}: {ctor!r}")
            return ctor
        zero_arg = self._reflection.zero_arg_constructor(clazz)
        if zero_arg is not None:
            return ZeroArgConstructor(ctor=zero_arg)
        return NoConstructor()
