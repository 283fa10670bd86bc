# jsonbind/core/views.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import Set

from jsonbind.core.base import Binding
from jsonbind.core.descriptors import ClassDescriptor
from jsonbind.core.metadata import view_markers


def view_ancestors(view: type) -> Set[type]:
    """The view marker and every class it inherits from, except ``object``."""
    return {k for k in view.__mro__ if k is not object}


class ViewFilter:
    """
    Restricts encode bindings to those visible under one view marker class.

    A binding listing ``JsonView`` markers survives when at least one listed
    marker is the requested view or one of its ancestors. Bindings without
    view markers always survive.
    """

    def __init__(self, view: type) -> None:
        self._view = view
        self._visible = view_ancestors(view)

    @property
    def view(self) -> type:
        return self._view

    def is_visible(self, binding: Binding) -> bool:
        views = view_markers(binding.metadata)
        if not views:
            return True
        return any(v in self._visible for v in views)

    def apply(self, desc: ClassDescriptor) -> None:
        desc.fields = [b for b in desc.fields if self.is_visible(b)]
        desc.getters = [b for b in desc.getters if self.is_visible(b)]
