# jsonbind/runtime/registry.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from types import MappingProxyType
from typing import Any, Generic, Hashable, Iterator, Mapping, Optional, TypeVar

from jsonbind.core.introspection import raw_class, type_signature
from jsonbind.interfaces.types import CacheKey, Decoder, Encoder

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


@contextmanager
def with_lock(lock: threading.Lock) -> Iterator[None]:
    """
    Hold ``lock`` for the duration of the with-block.
    """
    lock.acquire()
    try:
        yield
    finally:
        lock.release()


class CopyOnWriteRegistry(Generic[K, V]):
    """
    A mapping published as immutable snapshots.

    Readers use the current snapshot without locking. Writers copy it, add one
    entry and publish the copy while holding the registry's own lock, so
    concurrent writers never lose each other's entries.
    """

    def __init__(self, name: str) -> None:
        self._name = name
        self._lock = threading.Lock()
        self._snapshot: Mapping[K, V] = MappingProxyType({})

    @property
    def name(self) -> str:
        return self._name

    def snapshot(self) -> Mapping[K, V]:
        """The currently published, read-only mapping."""
        return self._snapshot

    def get(self, key: K, default: Optional[V] = None) -> Optional[V]:
        return self._snapshot.get(key, default)

    def put(self, key: K, value: V) -> None:
        """
        Add or replace one entry. Only lookups made after this call see it.
        """
        with with_lock(self._lock):
            updated = dict(self._snapshot)
            replaced = key in updated
            updated[key] = value
            self._snapshot = MappingProxyType(updated)
        logger.debug("%s registry: %s %r", self._name, "replaced" if replaced else "added", key)

    def __contains__(self, key: object) -> bool:
        return key in self._snapshot

    def __len__(self) -> int:
        return len(self._snapshot)


class DescriptorCache:
    """
    Process-wide registries of codecs, object factories and type
    implementation overrides.

    Codec keys are either a bare type signature (whole-type codec) or
    ``"<property>@<raw class signature>"`` (property-scoped override). Property
    keys drop type arguments, so an override registered for ``Box[int]`` is the
    one a build of ``Box[int]`` or ``Box`` publishes and reads.
    """

    def __init__(self) -> None:
        self.decoders: CopyOnWriteRegistry[CacheKey, Decoder] = CopyOnWriteRegistry("decoders")
        self.encoders: CopyOnWriteRegistry[CacheKey, Encoder] = CopyOnWriteRegistry("encoders")
        self.object_factories: CopyOnWriteRegistry[type, Any] = CopyOnWriteRegistry("object factories")
        self.type_implementations: CopyOnWriteRegistry[type, type] = CopyOnWriteRegistry("type implementations")

    @staticmethod
    def type_key(tp: Any) -> CacheKey:
        return type_signature(tp)

    @staticmethod
    def property_key(tp: Any, name: str) -> CacheKey:
        return f"{name}@{type_signature(raw_class(tp))}"

    def add_new_decoder(self, cache_key: CacheKey, decoder: Decoder) -> None:
        self.decoders.put(cache_key, decoder)

    def get_decoder(self, cache_key: CacheKey) -> Optional[Decoder]:
        return self.decoders.get(cache_key)

    def add_new_encoder(self, cache_key: CacheKey, encoder: Encoder) -> None:
        self.encoders.put(cache_key, encoder)

    def get_encoder(self, cache_key: CacheKey) -> Optional[Encoder]:
        return self.encoders.get(cache_key)

    def add_object_factory(self, clazz: type, extension: Any) -> None:
        self.object_factories.put(clazz, extension)

    def get_object_factory(self, clazz: type) -> Optional[Any]:
        return self.object_factories.get(clazz)

    def register_type_implementation(self, super_clazz: type, impl_clazz: type) -> None:
        if not issubclass(impl_clazz, super_clazz):
            raise ValueError(f"{impl_clazz.__qualname__} is not a subclass of {super_clazz.__qualname__}")
        self.type_implementations.put(super_clazz, impl_clazz)

    def get_type_implementation(self, super_clazz: type) -> Optional[type]:
        return self.type_implementations.get(super_clazz)

    def dump(self) -> None:
        """Log every cached decoder and encoder key."""
        for cache_key in self.decoders.snapshot():
            logger.info("decoder: %s", cache_key)
        for cache_key in self.encoders.snapshot():
            logger.info("encoder: %s", cache_key)
