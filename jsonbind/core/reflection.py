# jsonbind/core/reflection.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import dataclasses
import inspect
import typing
from typing import Any, Callable, ClassVar, Dict, List, Optional, Tuple, get_origin

from jsonbind.core.errors import AccessorConstructionFailure
from jsonbind.core.metadata import method_metadata, split_annotated


class FieldRef:
    """
    Reference to an annotated class attribute, the Python counterpart of a
    reflected field.
    """

    def __init__(
        self,
        name: str,
        owner: type,
        declared_type: Any,
        metadata: Tuple[Any, ...] = (),
        static: bool = False,
    ) -> None:
        self.name = name
        self.owner = owner
        self.declared_type = declared_type
        self.metadata = metadata
        self.static = static
        self.privileged = False

    def get(self, instance: Any) -> Any:
        return getattr(instance, self.name)

    def set(self, instance: Any, value: Any) -> None:
        setattr(instance, self.name, value)

    def __repr__(self) -> str:
        return f"FieldRef({self.owner.__qualname__}.{self.name})"


class MethodRef:
    """
    Reference to a function found in a class namespace. Property accessors are
    represented by their ``fget`` / ``fset`` functions.
    """

    def __init__(self, name: str, owner: type, function: Callable[..., Any]) -> None:
        self.name = name
        self.owner = owner
        self.function = function
        self.privileged = False

    @property
    def metadata(self) -> Tuple[Any, ...]:
        return method_metadata(self.function)

    def parameters(self) -> List[inspect.Parameter]:
        """Parameters of the function, without the leading ``self``."""
        params = list(inspect.signature(self.function).parameters.values())
        return params[1:]

    def invoke(self, instance: Any, *args: Any) -> Any:
        return self.function(instance, *args)

    def __repr__(self) -> str:
        return f"MethodRef({self.owner.__qualname__}.{self.name})"


class TypeReflection:
    """
    Default reflection provider built on ``typing`` and ``inspect``.

    A name is public when it does not start with an underscore. Members are
    listed base classes first; a redeclaration in a subclass keeps the slot
    of the base declaration but reports the subclass as its owner.
    """

    def ancestors(self, clazz: type) -> List[type]:
        """The class and its ancestors, most derived first, without ``object``."""
        return [k for k in clazz.__mro__ if k is not object]

    @staticmethod
    def is_public_name(name: str) -> bool:
        return not name.startswith("_")

    def is_public_type(self, tp: Any) -> bool:
        """
        Whether a declared type is itself publicly reachable. Only the raw
        class is inspected; type arguments, unions and type variables pass.
        """
        tp, _ = split_annotated(tp)
        origin = get_origin(tp)
        target = origin if isinstance(origin, type) else tp
        if not isinstance(target, type):
            return True
        return not any(part.startswith("_") for part in target.__qualname__.split("."))

    def fields(self, clazz: type, include_private: bool) -> List[FieldRef]:
        try:
            hints = typing.get_type_hints(clazz, include_extras=True)
        except Exception as e:
            raise AccessorConstructionFailure(f"fields of {clazz.__qualname__}", e) from e

        owners: Dict[str, type] = {}
        for klass in reversed(self.ancestors(clazz)):
            for name in inspect.get_annotations(klass):
                owners[name] = klass

        refs = []
        for name, owner in owners.items():
            if not include_private and not self.is_public_name(name):
                continue
            hint = hints.get(name, Any)
            if isinstance(hint, dataclasses.InitVar):
                continue
            declared, metadata = split_annotated(hint)
            static = declared is ClassVar or get_origin(declared) is ClassVar
            refs.append(FieldRef(name, owner, declared, metadata, static=static))
        return refs

    def methods(self, clazz: type, include_private: bool) -> List[MethodRef]:
        found: Dict[str, MethodRef] = {}
        for klass in reversed(self.ancestors(clazz)):
            for name, member in vars(klass).items():
                if name.startswith("__") and name.endswith("__"):
                    continue
                if not include_private and not self.is_public_name(name):
                    continue
                if not inspect.isfunction(member):
                    found.pop(name, None)
                    continue
                found[name] = MethodRef(name, klass, member)
        return list(found.values())

    def properties(self, clazz: type, include_private: bool) -> List[Tuple[str, type, property]]:
        found: Dict[str, Tuple[str, type, property]] = {}
        for klass in reversed(self.ancestors(clazz)):
            for name, member in vars(klass).items():
                if not include_private and not self.is_public_name(name):
                    continue
                if isinstance(member, property):
                    found[name] = (name, klass, member)
                else:
                    found.pop(name, None)
        return list(found.values())

    def type_hints(self, method: MethodRef) -> Dict[str, Any]:
        try:
            return typing.get_type_hints(method.function, include_extras=True)
        except Exception as e:
            raise AccessorConstructionFailure(repr(method), e) from e

    def zero_arg_constructor(self, clazz: type) -> Optional[Callable[[], Any]]:
        """Return ``clazz`` when it can be called without arguments."""
        if inspect.isabstract(clazz):
            return None
        try:
            signature = inspect.signature(clazz)
        except (TypeError, ValueError):
            return None
        for param in signature.parameters.values():
            if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
                continue
            if param.default is inspect.Parameter.empty:
                return None
        return clazz
