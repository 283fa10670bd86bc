# jsonbind/core/builder.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import logging
from enum import Enum
from typing import Any, Iterable, List, Optional, Set

from jsonbind.core.base import Binding
from jsonbind.core.conflicts import ConflictResolver
from jsonbind.core.descriptors import ClassDescriptor
from jsonbind.core.errors import UnresolvedTypeShape
from jsonbind.core.introspection import collect_type_variable_lookup, raw_class, specialize_implementation
from jsonbind.core.reflection import TypeReflection
from jsonbind.core.resolver import BindingResolver
from jsonbind.core.views import ViewFilter
from jsonbind.interfaces.protocols import ReflectionProvider
from jsonbind.interfaces.types import Direction
from jsonbind.runtime.extensions import ExtensionPipeline
from jsonbind.runtime.registry import DescriptorCache

logger = logging.getLogger(__name__)

_IMMUTABLE_VALUES = (bool, int, float, complex, str, bytes, type(None), tuple, frozenset, Enum)


def value_can_reuse(value_type: Any) -> bool:
    """
    Whether a decoder may fill an existing attribute value in place instead of
    allocating a new one. Native and immutable values never qualify.
    """
    raw = raw_class(value_type)
    if value_type is Any or not isinstance(raw, type):
        return False
    return not issubclass(raw, _IMMUTABLE_VALUES)


class ClassDescriptorBuilder:
    """
    Produces one finalized :class:`ClassDescriptor` per request.

    The builder keeps no state between calls; the only shared data it touches
    are the registries of its :class:`DescriptorCache` and the extension list,
    so any number of threads may build concurrently.
    """

    def __init__(
        self,
        cache: Optional[DescriptorCache] = None,
        extensions: Optional[ExtensionPipeline] = None,
        reflection: Optional[ReflectionProvider] = None,
    ) -> None:
        """
        :param cache: Registries to consult and publish into.
        :param extensions: Extension pipeline; defaults to an empty one bound to ``cache``.
        :param reflection: Reflection provider; defaults to :class:`TypeReflection`.
        """
        self._cache = cache or DescriptorCache()
        self._extensions = extensions or ExtensionPipeline(self._cache)
        self._resolver = BindingResolver(reflection or TypeReflection(), self._extensions)
        self._conflicts = ConflictResolver()

    @property
    def cache(self) -> DescriptorCache:
        return self._cache

    @property
    def extensions(self) -> ExtensionPipeline:
        return self._extensions

    def build(
        self,
        tp: Any,
        direction: Direction,
        view: Optional[type] = None,
        include_private: bool = False,
    ) -> ClassDescriptor:
        """
        Resolve the bindings of ``tp`` for one direction.

        :param tp: A class or a parameterized class such as ``Box[str]``.
        :param direction: Encode or decode.
        :param view: Optional view marker class, encode only.
        :param include_private: Also bind underscore-prefixed members.
        :raises BindingNameConflict: if two bindings claim the same name.
        :raises UnresolvedTypeShape: if ``tp`` cannot be introspected.
        :raises AccessorConstructionFailure: if a member's type cannot be read.
        :raises ValueError: if a view is requested for decoding.
        """
        if view is not None and direction is not Direction.ENCODE:
            raise ValueError("views only apply to encoding")
        clazz = raw_class(tp)
        if not isinstance(clazz, type):
            raise UnresolvedTypeShape(tp)
        impl = self._cache.get_type_implementation(clazz) if direction is Direction.DECODE else None
        if impl is not None:
            logger.debug("decoding %s through implementation %s", clazz.__qualname__, impl.__qualname__)
            tp, lookup = specialize_implementation(tp, impl)
            clazz = impl
        else:
            lookup = collect_type_variable_lookup(tp)

        desc = ClassDescriptor(clazz=clazz, type=tp, direction=direction, lookup=lookup)
        if direction is Direction.DECODE:
            desc.ctor = self._resolver.get_constructor(clazz)
        desc.fields = self._resolver.get_fields(lookup, clazz, direction, include_private)
        if direction is Direction.DECODE:
            desc.setters = self._resolver.get_setters(lookup, clazz, include_private)
        else:
            desc.getters = self._resolver.get_getters(lookup, clazz, include_private)

        self._extensions.update_class_descriptor(desc)

        if direction is Direction.DECODE:
            for binding in desc.fields:
                binding.value_can_reuse = value_can_reuse(binding.value_type)
            self._conflicts.deduplicate(desc)
            bindings = desc.all_decoder_bindings()
        else:
            if view is not None:
                ViewFilter(view).apply(desc)
            # fields are numbered first so a superseding getter can inherit the slot
            self._assign_indices(desc.fields, self._taken_indices(desc.all_encoder_bindings()))
            self._conflicts.deduplicate(desc)
            bindings = desc.all_encoder_bindings()

        self._assign_indices(bindings, self._taken_indices(bindings))
        for binding in bindings:
            if binding.clazz is None:
                binding.clazz = clazz
            if binding.from_names is None:
                binding.from_names = [binding.name]
            if binding.to_names is None:
                binding.to_names = [binding.name]
        if include_private:
            self._mark_privileged(desc, bindings)
        self._publish_codecs(bindings, direction)

        logger.debug(
            "built %s descriptor for %s with %d bindings", direction.name.lower(), clazz.__qualname__, len(bindings)
        )
        return desc

    @staticmethod
    def _taken_indices(bindings: Iterable[Binding]) -> Set[int]:
        return {b.idx for b in bindings if b.idx >= 0}

    @staticmethod
    def _assign_indices(bindings: List[Binding], taken: Set[int]) -> None:
        index = 0
        for binding in bindings:
            if binding.idx >= 0:
                continue
            while index in taken:
                index += 1
            binding.idx = index
            taken.add(index)

    @staticmethod
    def _mark_privileged(desc: ClassDescriptor, bindings: List[Binding]) -> None:
        desc.ctor.privileged = True
        method = getattr(desc.ctor, "method", None)
        if method is not None:
            method.privileged = True
        for wrapper in desc.wrappers:
            wrapper.method.privileged = True
        for unwrapper in desc.unwrappers:
            unwrapper.privileged = True
        for binding in bindings:
            if binding.accessor is not None:
                binding.accessor.privileged = True

    def _publish_codecs(self, bindings: List[Binding], direction: Direction) -> None:
        for binding in bindings:
            if direction is Direction.DECODE and binding.decoder is not None:
                self._cache.add_new_decoder(binding.decoder_cache_key(), binding.decoder)
            if direction is Direction.ENCODE and binding.encoder is not None:
                self._cache.add_new_encoder(binding.encoder_cache_key(), binding.encoder)

    def get_decoding_class_descriptor(self, tp: Any, include_private: bool = False) -> ClassDescriptor:
        return self.build(tp, Direction.DECODE, include_private=include_private)

    def get_encoding_class_descriptor(
        self, tp: Any, include_private: bool = False, view: Optional[type] = None
    ) -> ClassDescriptor:
        return self.build(tp, Direction.ENCODE, view=view, include_private=include_private)
