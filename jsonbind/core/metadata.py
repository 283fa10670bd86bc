# jsonbind/core/metadata.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""
Structural markers attached to fields and accessor methods.

Fields carry markers through ``typing.Annotated``::

    class Account:
        owner: Annotated[str, JsonView(PublicView)]
        session: Annotated[Session, Transient()]

Methods carry them through the :func:`annotate` / :func:`json_view`
decorators, which store a tuple on the function object.
"""

from typing import Annotated, Any, Callable, Iterable, Tuple, TypeVar, get_args, get_origin

F = TypeVar("F", bound=Callable[..., Any])

_METADATA_ATTR = "__json_metadata__"


class JsonView:
    """
    Restricts an encode binding to the listed view marker classes (and their
    subclasses, see :mod:`jsonbind.core.views`).
    """

    def __init__(self, *views: type) -> None:
        self.views = tuple(views)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JsonView):
            return NotImplemented
        return self.views == other.views

    def __hash__(self) -> int:
        return hash(self.views)

    def __repr__(self) -> str:
        return f"JsonView({', '.join(v.__qualname__ for v in self.views)})"


class Transient:
    """Marks a field that is never decoded."""

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Transient)

    def __hash__(self) -> int:
        return hash(Transient)

    def __repr__(self) -> str:
        return "Transient()"


def annotate(*markers: Any) -> Callable[[F], F]:
    """
    Attach arbitrary marker objects to an accessor method.
    """

    def decorator(fn: F) -> F:
        existing = getattr(fn, _METADATA_ATTR, ())
        setattr(fn, _METADATA_ATTR, tuple(existing) + markers)
        return fn

    return decorator


def json_view(*views: type) -> Callable[[F], F]:
    """
    Shorthand for ``annotate(JsonView(*views))``.
    """
    return annotate(JsonView(*views))


def method_metadata(fn: Any) -> Tuple[Any, ...]:
    """Return the markers attached to a function, or an empty tuple."""
    return tuple(getattr(fn, _METADATA_ATTR, ()))


def split_annotated(tp: Any) -> Tuple[Any, Tuple[Any, ...]]:
    """
    Separate ``Annotated[X, m1, m2]`` into ``(X, (m1, m2))``. Other types come
    back unchanged with no metadata.
    """
    if get_origin(tp) is Annotated:
        args = get_args(tp)
        return args[0], tuple(args[1:])
    return tp, ()


def view_markers(metadata: Iterable[Any]) -> Tuple[type, ...]:
    """Collect every view class listed by ``JsonView`` markers."""
    views = []
    for marker in metadata:
        if isinstance(marker, JsonView):
            views.extend(marker.views)
    return tuple(views)


def is_transient(metadata: Iterable[Any]) -> bool:
    return any(isinstance(marker, Transient) or marker is Transient for marker in metadata)
