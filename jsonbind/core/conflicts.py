# jsonbind/core/conflicts.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import logging
from typing import Dict, List

from jsonbind.core.base import Binding
from jsonbind.core.descriptors import ClassDescriptor
from jsonbind.core.errors import BindingNameConflict
from jsonbind.interfaces.types import Direction

logger = logging.getLogger(__name__)


class ConflictResolver:
    """
    Deduplicates same-named bindings of a descriptor so that every external
    name is claimed by exactly one binding per direction.

    Decode priority is fields, setters, wrapper parameters, constructor
    parameters: a later binding may replace a field (or, for wrapper and
    constructor parameters, a setter) of the same name; any other collision is
    a :class:`BindingNameConflict`. On encode a getter replaces a field of the
    same name and takes over its index.
    """

    def deduplicate(self, desc: ClassDescriptor) -> None:
        """
        :raises BindingNameConflict: if two bindings claim the same name and
            neither may supersede the other.
        """
        if desc.direction is Direction.ENCODE:
            self._deduplicate_encoding(desc)
        else:
            self._deduplicate_decoding(desc)

    def _deduplicate_decoding(self, desc: ClassDescriptor) -> None:
        by_name = self._claim_fields(desc.fields)
        for setter in desc.setters:
            self._claim(by_name, setter, "setter", [desc.fields])
        for wrapper in desc.wrappers:
            for param in wrapper.parameters:
                self._claim(by_name, param, "wrapper parameter", [desc.fields, desc.setters])
        for param in desc.ctor.parameters:
            self._claim(by_name, param, "ctor parameter", [desc.fields, desc.setters])

    def _deduplicate_encoding(self, desc: ClassDescriptor) -> None:
        by_name = self._claim_fields(desc.fields)
        for getter in desc.getters:
            existing = by_name.get(getter.name)
            if existing is not None and existing in desc.fields:
                getter.idx = existing.idx
            self._claim(by_name, getter, "getter", [desc.fields])

    @staticmethod
    def _claim_fields(fields: List[Binding]) -> Dict[str, Binding]:
        by_name: Dict[str, Binding] = {}
        for binding in fields:
            if binding.name in by_name:
                raise BindingNameConflict(binding.name, "field")
            by_name[binding.name] = binding
        return by_name

    @staticmethod
    def _claim(by_name: Dict[str, Binding], binding: Binding, kind: str, overridable: List[List[Binding]]) -> None:
        existing = by_name.get(binding.name)
        if existing is not None:
            for bindings in overridable:
                if existing in bindings:
                    bindings.remove(existing)
                    logger.debug("%s %r supersedes an earlier binding", kind, binding.name)
                    break
            else:
                raise BindingNameConflict(binding.name, kind)
        by_name[binding.name] = binding
