# jsonbind/spi.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""
Process-wide registration and descriptor entry points.

Every registration is additive and applies to descriptors built after it;
register extensions and overrides before the affected types are first used.
"""

from typing import Any, Optional, Tuple

from jsonbind.core.builder import ClassDescriptorBuilder
from jsonbind.core.descriptors import ClassDescriptor
from jsonbind.interfaces.protocols import Extension
from jsonbind.interfaces.types import CacheKey, Decoder, Direction, Encoder
from jsonbind.runtime.extensions import ExtensionPipeline
from jsonbind.runtime.registry import DescriptorCache

_cache = DescriptorCache()
_extensions = ExtensionPipeline(_cache)
_builder = ClassDescriptorBuilder(_cache, _extensions)


def default_builder() -> ClassDescriptorBuilder:
    """The builder bound to the process-wide registries."""
    return _builder


def register_extension(extension: Extension) -> None:
    _extensions.register(extension)


def get_extensions() -> Tuple[Extension, ...]:
    return _extensions.extensions


def register_type_implementation(super_clazz: type, impl_clazz: type) -> None:
    _cache.register_type_implementation(super_clazz, impl_clazz)


def get_type_implementation(super_clazz: type) -> Optional[type]:
    return _cache.get_type_implementation(super_clazz)


def register_type_decoder(tp: Any, decoder: Decoder) -> None:
    _cache.add_new_decoder(DescriptorCache.type_key(tp), decoder)


def register_property_decoder(tp: Any, name: str, decoder: Decoder) -> None:
    _cache.add_new_decoder(DescriptorCache.property_key(tp, name), decoder)


def register_type_encoder(tp: Any, encoder: Encoder) -> None:
    _cache.add_new_encoder(DescriptorCache.type_key(tp), encoder)


def register_property_encoder(tp: Any, name: str, encoder: Encoder) -> None:
    _cache.add_new_encoder(DescriptorCache.property_key(tp, name), encoder)


def get_decoder(cache_key: CacheKey) -> Optional[Decoder]:
    return _cache.get_decoder(cache_key)


def add_new_decoder(cache_key: CacheKey, decoder: Decoder) -> None:
    _cache.add_new_decoder(cache_key, decoder)


def get_encoder(cache_key: CacheKey) -> Optional[Encoder]:
    return _cache.get_encoder(cache_key)


def add_new_encoder(cache_key: CacheKey, encoder: Encoder) -> None:
    _cache.add_new_encoder(cache_key, encoder)


def can_create(clazz: type) -> bool:
    return _extensions.can_create(clazz)


def create(clazz: type) -> Any:
    return _extensions.create(clazz)


def build(
    tp: Any, direction: Direction, view: Optional[type] = None, include_private: bool = False
) -> ClassDescriptor:
    return _builder.build(tp, direction, view=view, include_private=include_private)


def get_decoding_class_descriptor(tp: Any, include_private: bool = False) -> ClassDescriptor:
    return _builder.get_decoding_class_descriptor(tp, include_private)


def get_encoding_class_descriptor(
    tp: Any, include_private: bool = False, view: Optional[type] = None
) -> ClassDescriptor:
    return _builder.get_encoding_class_descriptor(tp, include_private, view)


def dump() -> None:
    """Log every cached decoder and encoder key."""
    _cache.dump()
