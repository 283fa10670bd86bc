# jsonbind/core/errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import Any, Dict, Optional


class JsonBindError(Exception):
    """
    Base exception class for errors raised while resolving JSON bindings.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class BindingNameConflict(JsonBindError):
    """
    Raised when two bindings resolve to the same external name and neither can
    supersede the other.
    """

    def __init__(self, name: str, kind: str = "field") -> None:
        super().__init__(f"{kind} name conflict: {name}", {"name": name, "kind": kind})
        self.name = name
        self.kind = kind


class UnresolvedTypeShape(JsonBindError):
    """
    Raised when type introspection reaches a type it cannot interpret.
    """

    def __init__(self, type_: Any) -> None:
        super().__init__(f"unsupported type shape for introspection: {type_!r}", {"type": type_})
        self.type = type_


class AccessorConstructionFailure(JsonBindError):
    """
    Raised when a binding cannot be created from a discovered field or method.
    The underlying error is available as ``cause`` and as ``__cause__``.
    """

    def __init__(self, accessor: str, cause: BaseException) -> None:
        super().__init__(f"failed to create binding for {accessor}: {cause}", {"accessor": accessor})
        self.accessor = accessor
        self.cause = cause


class MissingConstructorError(JsonBindError):
    """
    Raised when a type has to be instantiated but has no constructor, object
    factory or constructor-parameter path.
    """

    def __init__(self, clazz: type) -> None:
        super().__init__(f"no way to instantiate {clazz.__qualname__}", {"type": clazz})
        self.clazz = clazz
