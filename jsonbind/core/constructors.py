# jsonbind/core/constructors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable, ClassVar, List, Optional

from jsonbind.core.base import Binding
from jsonbind.core.reflection import MethodRef


class ConstructorKind(Enum):
    """Discriminates the constructor strategy variants."""

    NONE = auto()  # Cannot be default-instantiated
    ZERO_ARG = auto()  # Class called with no arguments
    STATIC_FACTORY = auto()  # Factory function, optionally with parameters
    OBJECT_FACTORY = auto()  # Extension creates the instance
    PARAMETERIZED = auto()  # Class called with bound parameters


@dataclass(eq=False)
class ConstructorDescriptor:
    """
    Base of the constructor strategy union. Consumers dispatch on ``kind``;
    every variant answers ``parameters`` (empty unless the variant takes
    constructor parameters).
    """

    kind: ClassVar[ConstructorKind] = ConstructorKind.NONE
    privileged: bool = field(default=False, init=False)

    @property
    def parameters(self) -> List[Binding]:
        return []

    @property
    def can_instantiate(self) -> bool:
        return self.kind is not ConstructorKind.NONE


@dataclass(eq=False)
class NoConstructor(ConstructorDescriptor):
    kind: ClassVar[ConstructorKind] = ConstructorKind.NONE


@dataclass(eq=False)
class ZeroArgConstructor(ConstructorDescriptor):
    kind: ClassVar[ConstructorKind] = ConstructorKind.ZERO_ARG
    ctor: Callable[[], Any] = None


@dataclass(eq=False)
class StaticFactory(ConstructorDescriptor):
    kind: ClassVar[ConstructorKind] = ConstructorKind.STATIC_FACTORY
    method: Optional[MethodRef] = None
    factory_parameters: List[Binding] = field(default_factory=list)

    @property
    def parameters(self) -> List[Binding]:
        return self.factory_parameters


@dataclass(eq=False)
class ObjectFactory(ConstructorDescriptor):
    kind: ClassVar[ConstructorKind] = ConstructorKind.OBJECT_FACTORY
    extension: Any = None

    def create(self, clazz: type) -> Any:
        return self.extension.create(clazz)


@dataclass(eq=False)
class ParameterizedConstructor(ConstructorDescriptor):
    kind: ClassVar[ConstructorKind] = ConstructorKind.PARAMETERIZED
    ctor: Callable[..., Any] = None
    ctor_parameters: List[Binding] = field(default_factory=list)

    @property
    def parameters(self) -> List[Binding]:
        return self.ctor_parameters
