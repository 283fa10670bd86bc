# jsonbind/core/descriptors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from dataclasses import dataclass, field
from typing import Any, List, Optional

from jsonbind.core.base import Binding, WrapperDescriptor
from jsonbind.core.constructors import ConstructorDescriptor, NoConstructor
from jsonbind.core.errors import MissingConstructorError
from jsonbind.core.introspection import resolve_type
from jsonbind.core.reflection import MethodRef
from jsonbind.interfaces.types import Direction, TypeLookup


@dataclass(eq=False)
class ClassDescriptor:
    """
    The complete encode or decode plan for one type.

    The builder returns a fresh descriptor per request and never touches it
    again; extensions edit it in place while it is being built.
    """

    clazz: type
    type: Any = None
    direction: Direction = Direction.DECODE
    lookup: TypeLookup = field(default_factory=dict)
    ctor: ConstructorDescriptor = field(default_factory=NoConstructor)
    fields: List[Binding] = field(default_factory=list)
    setters: List[Binding] = field(default_factory=list)
    getters: List[Binding] = field(default_factory=list)
    wrappers: List[WrapperDescriptor] = field(default_factory=list)
    unwrappers: List[MethodRef] = field(default_factory=list)

    def all_decoder_bindings(self) -> List[Binding]:
        bindings = list(self.ctor.parameters)
        bindings.extend(self.fields)
        bindings.extend(self.setters)
        for wrapper in self.wrappers:
            bindings.extend(wrapper.parameters)
        return bindings

    def all_encoder_bindings(self) -> List[Binding]:
        return self.fields + self.getters

    def resolve(self, tp: Any, owner: Optional[type] = None) -> Any:
        """
        Materialize ``tp`` through this descriptor's generic-variable table.

        :param owner: the class declaring the type variables in ``tp``;
            defaults to the described class.
        """
        return resolve_type(tp, self.lookup, owner or self.clazz)

    def require_constructor(self) -> ConstructorDescriptor:
        """
        Return the constructor strategy, failing when the type can be neither
        instantiated nor fed through constructor parameters.

        :raises MissingConstructorError: if no instantiation path exists.
        """
        if not self.ctor.can_instantiate and not self.ctor.parameters:
            raise MissingConstructorError(self.clazz)
        return self.ctor
