# jsonbind/plugins/naming.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import re
from typing import Callable, Optional

from jsonbind.core.descriptors import ClassDescriptor
from jsonbind.interfaces.types import Direction
from jsonbind.runtime.extensions import EmptyExtension

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def to_camel_case(name: str) -> str:
    """``user_name`` -> ``userName``."""
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def to_snake_case(name: str) -> str:
    """``userName`` -> ``user_name``."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def to_kebab_case(name: str) -> str:
    """``userName`` / ``user_name`` -> ``user-name``."""
    return to_snake_case(name).replace("_", "-")


class NamingStrategyExtension(EmptyExtension):
    """
    Translates external names of every binding that has no explicit aliases.

    Bindings whose ``from_names`` / ``to_names`` were already set by an earlier
    extension are left alone. ``only`` restricts the strategy to some classes.
    """

    def __init__(self, strategy: Callable[[str], str], only: Optional[tuple] = None) -> None:
        self.strategy = strategy
        self.only = only

    def update_class_descriptor(self, desc: ClassDescriptor) -> None:
        if self.only is not None and desc.clazz not in self.only:
            return
        if desc.direction is Direction.DECODE:
            for binding in desc.all_decoder_bindings():
                if binding.from_names is None:
                    binding.from_names = [self.strategy(binding.name)]
        else:
            for binding in desc.all_encoder_bindings():
                if binding.to_names is None:
                    binding.to_names = [self.strategy(binding.name)]
