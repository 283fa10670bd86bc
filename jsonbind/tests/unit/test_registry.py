# jsonbind/tests/unit/test_registry.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""Test suite for the copy-on-write registries."""

import logging
import threading
from typing import Generic, List, TypeVar

import pytest

from jsonbind.runtime.registry import CopyOnWriteRegistry, DescriptorCache, with_lock

T = TypeVar("T")


class Animal:
    pass


class Dog(Animal):
    pass


class Crate(Generic[T]):
    pass


def decode_stub(*args):
    return None


# -----------------------------------------------------------------------------
# COPY-ON-WRITE REGISTRY TESTS
# -----------------------------------------------------------------------------
def test_put_and_get():
    registry = CopyOnWriteRegistry("things")
    registry.put("a", 1)
    assert registry.get("a") == 1
    assert registry.get("missing") is None
    assert registry.get("missing", 0) == 0
    assert "a" in registry
    assert len(registry) == 1
    assert registry.name == "things"


def test_snapshots_are_immutable_and_stable():
    registry = CopyOnWriteRegistry("things")
    registry.put("a", 1)
    before = registry.snapshot()
    registry.put("b", 2)

    assert dict(before) == {"a": 1}
    assert dict(registry.snapshot()) == {"a": 1, "b": 2}
    with pytest.raises(TypeError):
        before["c"] = 3  # type: ignore[index]


def test_put_replaces_existing_entry(caplog):
    registry = CopyOnWriteRegistry("things")
    with caplog.at_level(logging.DEBUG, logger="jsonbind.runtime.registry"):
        registry.put("a", 1)
        registry.put("a", 2)
    assert registry.get("a") == 2
    assert "added" in caplog.text
    assert "replaced" in caplog.text


def test_with_lock_releases_on_error():
    lock = threading.Lock()
    with pytest.raises(RuntimeError):
        with with_lock(lock):
            assert lock.locked()
            raise RuntimeError("boom")
    assert not lock.locked()


@pytest.mark.stress
def test_concurrent_writers_lose_nothing():
    registry = CopyOnWriteRegistry("things")
    num_threads = 16
    per_thread = 50
    barrier = threading.Barrier(num_threads)

    def writer(thread_id: int) -> None:
        barrier.wait()
        for i in range(per_thread):
            registry.put(f"{thread_id}-{i}", i)

    threads: List[threading.Thread] = [threading.Thread(target=writer, args=(t,)) for t in range(num_threads)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(registry) == num_threads * per_thread


# -----------------------------------------------------------------------------
# DESCRIPTOR CACHE TESTS
# -----------------------------------------------------------------------------
def test_cache_keys():
    assert DescriptorCache.type_key(int) == "builtins.int"
    assert DescriptorCache.property_key(Animal, "name") == f"name@{Animal.__module__}.Animal"
    assert DescriptorCache.type_key(Crate[int]) == f"{Crate.__module__}.Crate[builtins.int]"


def test_property_key_ignores_type_arguments():
    assert DescriptorCache.property_key(Crate[int], "x") == DescriptorCache.property_key(Crate, "x")
    assert DescriptorCache.property_key(Crate[int], "x") == f"x@{Crate.__module__}.Crate"


def test_decoders_and_encoders_are_separate(cache: DescriptorCache):
    cache.add_new_decoder("key", decode_stub)
    assert cache.get_decoder("key") is decode_stub
    assert cache.get_encoder("key") is None


def test_object_factories(cache: DescriptorCache):
    factory = object()
    cache.add_object_factory(Animal, factory)
    assert cache.get_object_factory(Animal) is factory
    assert cache.get_object_factory(Dog) is None


def test_type_implementations(cache: DescriptorCache):
    assert cache.get_type_implementation(Animal) is None
    cache.register_type_implementation(Animal, Dog)
    assert cache.get_type_implementation(Animal) is Dog


def test_type_implementation_must_be_subclass(cache: DescriptorCache):
    with pytest.raises(ValueError):
        cache.register_type_implementation(Dog, Animal)


def test_dump_logs_every_codec_key(cache: DescriptorCache, caplog):
    cache.add_new_decoder("name@pkg.Person", decode_stub)
    cache.add_new_encoder("pkg.Person", decode_stub)
    with caplog.at_level(logging.INFO, logger="jsonbind.runtime.registry"):
        cache.dump()
    assert "decoder: name@pkg.Person" in caplog.text
    assert "encoder: pkg.Person" in caplog.text


@pytest.mark.stress
def test_concurrent_property_overrides(cache: DescriptorCache):
    num_threads = 32
    barrier = threading.Barrier(num_threads)

    def register(i: int) -> None:
        barrier.wait()
        cache.add_new_decoder(DescriptorCache.property_key(Animal, f"prop{i}"), decode_stub)

    threads = [threading.Thread(target=register, args=(i,)) for i in range(num_threads)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    snapshot = cache.decoders.snapshot()
    assert len(snapshot) == num_threads
    for i in range(num_threads):
        assert cache.get_decoder(DescriptorCache.property_key(Animal, f"prop{i}")) is decode_stub
