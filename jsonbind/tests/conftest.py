# jsonbind/tests/conftest.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import pytest

from jsonbind.core.builder import ClassDescriptorBuilder
from jsonbind.runtime.extensions import ExtensionPipeline
from jsonbind.runtime.registry import DescriptorCache


def pytest_configure(config):
    """Register custom marks."""
    config.addinivalue_line("markers", "stress: mark test as a stress test")
    config.addinivalue_line("markers", "property: mark test as a property-based test")


@pytest.fixture
def cache() -> DescriptorCache:
    """A private set of registries, isolated from the process-wide one."""
    return DescriptorCache()


@pytest.fixture
def extensions(cache: DescriptorCache) -> ExtensionPipeline:
    """An empty extension pipeline bound to ``cache``."""
    return ExtensionPipeline(cache)


@pytest.fixture
def builder(cache: DescriptorCache, extensions: ExtensionPipeline) -> ClassDescriptorBuilder:
    """A descriptor builder over the isolated registries."""
    return ClassDescriptorBuilder(cache, extensions)
