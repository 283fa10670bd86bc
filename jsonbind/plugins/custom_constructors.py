# jsonbind/plugins/custom_constructors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

from jsonbind.core.base import Binding
from jsonbind.core.constructors import ConstructorDescriptor, ParameterizedConstructor, StaticFactory
from jsonbind.core.reflection import MethodRef
from jsonbind.runtime.extensions import EmptyExtension


@dataclass(frozen=True)
class ParameterSpec:
    """
    Declares one constructor parameter: the keyword it is passed as, its
    value type and the JSON names it is read from (defaults to ``name``).
    """

    name: str
    value_type: Any = Any
    from_names: Optional[Tuple[str, ...]] = None

    def to_binding(self) -> Binding:
        from_names = list(self.from_names) if self.from_names is not None else None
        return Binding(name=self.name, value_type=self.value_type, from_names=from_names)


class ConstructorExtension(EmptyExtension):
    """
    Supplies constructor strategies for classes that cannot be built with a
    zero-argument call, e.g. classes whose ``__init__`` requires arguments.

    Example:
        ctors = ConstructorExtension()
        ctors.register_parameterized(Point, ParameterSpec("x", int), ParameterSpec("y", int))
        register_extension(ctors)
    """

    def __init__(self) -> None:
        self._factories: Dict[type, Callable[[], ConstructorDescriptor]] = {}

    def register(self, clazz: type, factory: Callable[[], ConstructorDescriptor]) -> None:
        """
        Register a callable producing a fresh constructor descriptor for
        ``clazz`` on every build.
        """
        self._factories[clazz] = factory

    def register_parameterized(
        self, clazz: type, *params: ParameterSpec, ctor: Optional[Callable[..., Any]] = None
    ) -> None:
        def factory() -> ConstructorDescriptor:
            return ParameterizedConstructor(ctor=ctor or clazz, ctor_parameters=[p.to_binding() for p in params])

        self.register(clazz, factory)

    def register_static_factory(self, clazz: type, function: Callable[..., Any], *params: ParameterSpec) -> None:
        def factory() -> ConstructorDescriptor:
            method = MethodRef(function.__name__, clazz, function)
            return StaticFactory(method=method, factory_parameters=[p.to_binding() for p in params])

        self.register(clazz, factory)

    def get_constructor(self, clazz: type) -> Optional[ConstructorDescriptor]:
        factory = self._factories.get(clazz)
        return factory() if factory is not None else None

    @property
    def registered_types(self) -> Sequence[type]:
        return tuple(self._factories)
