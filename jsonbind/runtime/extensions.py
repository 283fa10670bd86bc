# jsonbind/runtime/extensions.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any, Optional, Tuple

from jsonbind.core.errors import MissingConstructorError
from jsonbind.interfaces.protocols import Extension
from jsonbind.runtime.registry import DescriptorCache, with_lock

if TYPE_CHECKING:
    from jsonbind.core.constructors import ConstructorDescriptor
    from jsonbind.core.descriptors import ClassDescriptor

logger = logging.getLogger(__name__)


class EmptyExtension:
    """
    Extension with no-op defaults. Subclass it and override only the hooks you
    need.
    """

    def can_create(self, clazz: type) -> bool:
        return False

    def create(self, clazz: type) -> Any:
        raise MissingConstructorError(clazz)

    def update_class_descriptor(self, desc: "ClassDescriptor") -> None:
        pass

    def get_constructor(self, clazz: type) -> Optional["ConstructorDescriptor"]:
        return None


class ExtensionPipeline:
    """
    Ordered, append-only collection of extensions.

    Registration order is invocation order. The list is published as a tuple
    snapshot so a build iterates a stable sequence even while another thread
    registers a new extension.
    """

    def __init__(self, cache: DescriptorCache) -> None:
        self._cache = cache
        self._lock = threading.Lock()
        self._extensions: Tuple[Extension, ...] = ()

    @property
    def extensions(self) -> Tuple[Extension, ...]:
        return self._extensions

    def register(self, extension: Extension) -> None:
        """
        Append an extension. Descriptors built before this call are unaffected.

        :raises TypeError: if ``extension`` does not implement the Extension protocol.
        """
        if not isinstance(extension, Extension):
            raise TypeError(f"{type(extension).__name__} does not implement the Extension protocol")
        with with_lock(self._lock):
            self._extensions = self._extensions + (extension,)
        logger.debug("registered extension %s (%d total)", type(extension).__name__, len(self._extensions))

    def update_class_descriptor(self, desc: "ClassDescriptor") -> None:
        """Run every extension's mutation hook on ``desc``, in order."""
        for extension in self._extensions:
            extension.update_class_descriptor(desc)

    def can_create(self, clazz: type) -> bool:
        """
        Whether some extension instantiates ``clazz``. The first positive
        answer is memoized in the object-factory cache; negative answers are
        recomputed on every call.
        """
        if clazz in self._cache.object_factories:
            return True
        for extension in self._extensions:
            if extension.can_create(clazz):
                logger.debug("%s creates %s", type(extension).__name__, clazz.__qualname__)
                self._cache.add_object_factory(clazz, extension)
                return True
        return False

    def object_factory(self, clazz: type) -> Optional[Extension]:
        if self.can_create(clazz):
            return self._cache.get_object_factory(clazz)
        return None

    def create(self, clazz: type) -> Any:
        """
        Instantiate ``clazz`` through its object factory.

        :raises MissingConstructorError: if no extension can create ``clazz``.
        """
        factory = self.object_factory(clazz)
        if factory is None:
            raise MissingConstructorError(clazz)
        return factory.create(clazz)

    def get_constructor(self, clazz: type) -> Optional["ConstructorDescriptor"]:
        """The first constructor strategy supplied by an extension, if any."""
        for extension in self._extensions:
            ctor = extension.get_constructor(clazz)
            if ctor is not None:
                return ctor
        return None
