# jsonbind/core/base.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple, Union

from jsonbind.core.introspection import raw_class, type_signature
from jsonbind.core.reflection import FieldRef, MethodRef
from jsonbind.interfaces.types import CacheKey, Decoder, Encoder


@dataclass(eq=False)
class Binding:
    """A resolved mapping between one external name and one value slot."""

    name: str
    value_type: Any = Any
    accessor: Optional[Union[FieldRef, MethodRef]] = None
    from_names: Optional[List[str]] = None
    to_names: Optional[List[str]] = None
    value_can_reuse: bool = False
    decoder: Optional[Decoder] = None
    encoder: Optional[Encoder] = None
    idx: int = -1
    metadata: Tuple[Any, ...] = ()
    clazz: Optional[Any] = None

    @property
    def field(self) -> Optional[FieldRef]:
        return self.accessor if isinstance(self.accessor, FieldRef) else None

    @property
    def method(self) -> Optional[MethodRef]:
        return self.accessor if isinstance(self.accessor, MethodRef) else None

    @property
    def is_synthetic(self) -> bool:
        return self.accessor is None

    def decoder_cache_key(self) -> CacheKey:
        return f"{self.name}@{type_signature(raw_class(self.clazz))}"

    def encoder_cache_key(self) -> CacheKey:
        return f"{self.name}@{type_signature(raw_class(self.clazz))}"


@dataclass(eq=False)
class WrapperDescriptor:
    """
    A method receiving several JSON properties in one call, together with the
    bindings of its parameters in call order.
    """

    method: MethodRef
    parameters: List[Binding] = field(default_factory=list)
