# jsonbind/interfaces/protocols.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Protocol, Tuple, runtime_checkable

if TYPE_CHECKING:
    from jsonbind.core.constructors import ConstructorDescriptor
    from jsonbind.core.descriptors import ClassDescriptor
    from jsonbind.core.reflection import FieldRef, MethodRef


@runtime_checkable
class Extension(Protocol):
    """
    Extension protocol for third-party plug-ins.

    Methods:
        can_create(clazz): Whether this extension instantiates ``clazz`` itself.
        create(clazz): Produce a new instance of ``clazz``.
        update_class_descriptor(desc): Edit an in-progress descriptor in place.
        get_constructor(clazz): Supply a constructor strategy, or None.

    Runtime Invariants:
    - Extensions are invoked in registration order.
    - Edits made by one extension are visible to the next one.

    Error Handling:
    - Exceptions raised by an extension abort the build in progress and are
      propagated to the caller unchanged.
    """

    def can_create(self, clazz: type) -> bool: ...

    def create(self, clazz: type) -> Any: ...

    def update_class_descriptor(self, desc: "ClassDescriptor") -> None: ...

    def get_constructor(self, clazz: type) -> Optional["ConstructorDescriptor"]: ...


@runtime_checkable
class ReflectionProvider(Protocol):
    """
    Structural introspection used by the binding resolver.

    Runtime Invariants:
    - Member listings are deterministic for a given class.
    - ``object`` is never reported as an ancestor.
    """

    def ancestors(self, clazz: type) -> List[type]: ...

    def is_public_type(self, tp: Any) -> bool: ...

    def fields(self, clazz: type, include_private: bool) -> List["FieldRef"]: ...

    def methods(self, clazz: type, include_private: bool) -> List["MethodRef"]: ...

    def properties(self, clazz: type, include_private: bool) -> List[Tuple[str, type, property]]: ...

    def type_hints(self, method: "MethodRef") -> Dict[str, Any]: ...

    def zero_arg_constructor(self, clazz: type) -> Optional[Callable[[], Any]]: ...
