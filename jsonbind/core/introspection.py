# jsonbind/core/introspection.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""
Generic type-parameter resolution along an inheritance chain.

For ``class StrBox(Box[str])`` with ``class Box(Generic[T])`` the lookup table
holds ``{("T", Box): str}``, so an attribute declared as ``T`` in ``Box``
materializes as ``str`` when ``StrBox`` is described.
"""

from typing import Any, Dict, Generic, Optional, Protocol, Tuple, TypeVar, get_args, get_origin

from jsonbind.core.errors import UnresolvedTypeShape
from jsonbind.core.metadata import split_annotated
from jsonbind.interfaces.types import TypeLookup

_GENERIC_MARKERS = (Generic, Protocol)


def raw_class(tp: Any) -> Any:
    """``Box[str]`` -> ``Box``; anything else is returned unchanged."""
    tp, _ = split_annotated(tp)
    origin = get_origin(tp)
    return origin if isinstance(origin, type) else tp


def collect_type_variable_lookup(tp: Any) -> TypeLookup:
    """
    Map ``(type variable name, declaring class)`` to the actual type argument
    for every parameterized ancestor of ``tp``.

    :raises UnresolvedTypeShape: if ``tp`` is neither a class nor a
        parameterized class.
    """
    lookup: TypeLookup = {}
    _collect(tp, lookup, None)
    return lookup


def _collect(tp: Any, lookup: TypeLookup, context: Optional[type]) -> None:
    tp, _ = split_annotated(tp)
    origin = get_origin(tp)
    if origin is not None:
        if not isinstance(origin, type):
            raise UnresolvedTypeShape(tp)
        if origin in _GENERIC_MARKERS:
            return
        for var, arg in zip(getattr(origin, "__parameters__", ()), get_args(tp)):
            # closer entries win over ancestor entries
            lookup.setdefault((var.__name__, origin), resolve_type(arg, lookup, context))
        _collect_bases(origin, lookup)
        return
    if isinstance(tp, type):
        if tp is object or tp in _GENERIC_MARKERS:
            return
        _collect_bases(tp, lookup)
        return
    raise UnresolvedTypeShape(tp)


def _collect_bases(clazz: type, lookup: TypeLookup) -> None:
    bases = clazz.__dict__.get("__orig_bases__", clazz.__bases__)
    # NamedTuple and TypedDict record factory functions as bases
    if not all(isinstance(b, type) or isinstance(get_origin(b), type) for b in bases):
        bases = clazz.__bases__
    for base in bases:
        _collect(base, lookup, clazz)


def resolve_type(tp: Any, lookup: TypeLookup, owner: Optional[type]) -> Any:
    """
    Substitute type variables declared by ``owner`` with their entries in
    ``lookup``, descending into parameterized types. Variables without an entry
    are left in place.
    """
    if isinstance(tp, TypeVar):
        return lookup.get((tp.__name__, owner), tp)
    params = getattr(tp, "__parameters__", None)
    if not params or get_origin(tp) is None:
        return tp
    resolved = tuple(resolve_type(p, lookup, owner) for p in params)
    if resolved == tuple(params):
        return tp
    return tp[resolved if len(resolved) > 1 else resolved[0]]


def resolve_type_variable(lookup: TypeLookup, name: str, owner: type) -> Optional[Any]:
    """Look up the concrete type bound to type variable ``name`` of ``owner``."""
    return lookup.get((name, owner))


def type_signature(tp: Any) -> str:
    """Stable textual signature of a type, used to build cache keys."""
    tp, _ = split_annotated(tp)
    if isinstance(tp, TypeVar):
        return f"~{tp.__name__}"
    origin = get_origin(tp)
    if isinstance(origin, type):
        args = ",".join(type_signature(a) for a in get_args(tp))
        return f"{type_signature(origin)}[{args}]" if args else type_signature(origin)
    if isinstance(tp, type):
        return f"{tp.__module__}.{tp.__qualname__}"
    return repr(tp)


def specialize_implementation(requested: Any, impl: type) -> Tuple[Any, TypeLookup]:
    """
    Carry the type arguments of ``requested`` over to an implementation class.

    For ``requested = Box[int]`` and ``class Impl(Box[T])`` this returns
    ``Impl[int]`` with its lookup table. When ``impl`` cannot be parameterized
    that way, the arguments known from ``requested`` fill every table entry
    that ``impl`` leaves as a bare type variable.

    :returns: the type to describe and its generic-variable table.
    """
    requested_lookup = collect_type_variable_lookup(requested)
    impl_lookup = collect_type_variable_lookup(impl)
    if not requested_lookup:
        return impl, impl_lookup

    inferred: Dict[str, Any] = {}
    for key, value in impl_lookup.items():
        if isinstance(value, TypeVar) and key in requested_lookup:
            inferred.setdefault(value.__name__, requested_lookup[key])
    params = getattr(impl, "__parameters__", ())
    if params and all(p.__name__ in inferred for p in params):
        tp = impl[tuple(inferred[p.__name__] for p in params)]
        return tp, collect_type_variable_lookup(tp)

    for key, value in requested_lookup.items():
        if key not in impl_lookup or isinstance(impl_lookup[key], TypeVar):
            impl_lookup[key] = value
    return impl, impl_lookup
